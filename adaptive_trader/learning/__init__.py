"""
Learning module.

Trade attribution, regime-weight adaptation and parameter tuning.
"""

from .adapter import (
    LearningAdapter, LearningState, TradeAttribution, TunableParam,
    PARAM_REGISTRY, STATE_VERSION, migrate, win_rate,
)

__all__ = [
    'LearningAdapter', 'LearningState', 'TradeAttribution', 'TunableParam',
    'PARAM_REGISTRY', 'STATE_VERSION', 'migrate', 'win_rate',
]
