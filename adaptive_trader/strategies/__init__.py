"""
Strategies module.

Trend and reversion signal generators plus the regime-weighted combiner.
"""

from .signals import (
    StrategySignal, StrategyParams, SignalSnapshot, Recommendation, clamp,
)
from .trend import trend_momentum, macd_trend
from .reversion import bollinger_rsi_reversion, vwap_reversion
from .combiner import (
    SignalCombiner, DEFAULT_REGIME_WEIGHTS, default_regime_weights, group_score,
)

__all__ = [
    # Types
    'StrategySignal', 'StrategyParams', 'SignalSnapshot', 'Recommendation', 'clamp',
    # Generators
    'trend_momentum', 'macd_trend', 'bollinger_rsi_reversion', 'vwap_reversion',
    # Combiner
    'SignalCombiner', 'DEFAULT_REGIME_WEIGHTS', 'default_regime_weights', 'group_score',
]
