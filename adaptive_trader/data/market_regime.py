"""
Market Regime Detection module.

Classifies daily bars into: trending_up, trending_down, range_bound, unknown.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

import numpy as np
import pandas as pd

from ..indicators import adx, sma

logger = logging.getLogger(__name__)


class Regime(Enum):
    """Market regime types."""
    TRENDING_UP = "TRENDING_UP"
    TRENDING_DOWN = "TRENDING_DOWN"
    RANGE_BOUND = "RANGE_BOUND"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value) -> "Regime":
        """Accept an enum member or its persisted string; unknown -> UNKNOWN."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


@dataclass
class RegimeReading:
    """Regime plus the values that produced it."""
    regime: Regime
    adx: Optional[float] = None
    sma_fast: Optional[float] = None
    sma_slow: Optional[float] = None


class RegimeClassifier:
    """
    Detects the market regime of one instrument from daily bars.

    Uses:
    - ADX for trend strength
    - SMA(20) vs SMA(50) for direction
    """

    def __init__(self,
                 adx_period: int = 14,
                 adx_threshold: float = 25.0,
                 min_bars: int = 60,
                 fast_period: int = 20,
                 slow_period: int = 50):
        """
        Initialize regime classifier.

        Args:
            adx_period: Period for ADX
            adx_threshold: ADX above this = trending
            min_bars: Fewer daily bars than this = UNKNOWN
            fast_period: Fast SMA for direction
            slow_period: Slow SMA for direction
        """
        self.adx_period = adx_period
        self.adx_threshold = adx_threshold
        self.min_bars = min_bars
        self.fast_period = fast_period
        self.slow_period = slow_period

    def classify(self, daily: Optional[pd.DataFrame]) -> Regime:
        """
        Classify the current regime.

        Args:
            daily: Daily OHLCV DataFrame (lowercase columns)

        Returns:
            Current regime
        """
        return self.read(daily).regime

    def read(self, daily: Optional[pd.DataFrame]) -> RegimeReading:
        """Classify and return the underlying ADX / SMA values."""
        if daily is None or len(daily) < self.min_bars:
            return RegimeReading(Regime.UNKNOWN)
        return self.read_arrays(
            daily['close'].values, daily['high'].values, daily['low'].values
        )

    def read_arrays(self, close: np.ndarray, high: np.ndarray,
                    low: np.ndarray) -> RegimeReading:
        """Classify from raw arrays."""
        if len(close) < self.min_bars:
            return RegimeReading(Regime.UNKNOWN)

        adx_value = adx(high, low, close, self.adx_period)
        sma_fast = sma(close, self.fast_period)
        sma_slow = sma(close, self.slow_period)
        if adx_value is None or sma_fast is None or sma_slow is None:
            return RegimeReading(Regime.UNKNOWN, adx_value, sma_fast, sma_slow)

        if adx_value <= self.adx_threshold:
            regime = Regime.RANGE_BOUND
        elif sma_fast > sma_slow:
            regime = Regime.TRENDING_UP
        else:
            regime = Regime.TRENDING_DOWN

        return RegimeReading(regime, adx_value, sma_fast, sma_slow)


def classify_regime(close, high, low, classifier: RegimeClassifier = None) -> Regime:
    """
    Classify a regime from close/high/low arrays.

    Args:
        close: Daily closes
        high: Daily highs
        low: Daily lows
        classifier: Optional RegimeClassifier instance

    Returns:
        Market regime
    """
    if classifier is None:
        classifier = RegimeClassifier()
    return classifier.read_arrays(
        np.asarray(close, dtype=float),
        np.asarray(high, dtype=float),
        np.asarray(low, dtype=float),
    ).regime
