"""
Risk module.

Position sizing, exits, cooldowns and rotation selection.
"""

from .risk_manager import RiskManager, ExitDecision, ExitReason, CooldownTracker

__all__ = ['RiskManager', 'ExitDecision', 'ExitReason', 'CooldownTracker']
