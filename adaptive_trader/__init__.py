"""
Adaptive Trader - regime-adaptive, self-tuning paper trading engine.

Scores a multi-asset universe every cycle, blends trend and mean-reversion
strategies by market regime, sizes positions with ATR risk rules, and
adapts its own weights and parameters from closed-trade outcomes.
"""

__version__ = "0.1.0"
