"""
Trend-following strategy generators.

- Trend Momentum: daily SMA alignment, 20-bar ROC, 50-bar high/low proximity
  and SMA(20) slope.
- MACD Trend: intraday MACD histogram sign, acceleration and MACD/signal
  position.
"""

from typing import Optional, Sequence

import numpy as np

from ..indicators import sma, roc, macd
from .signals import StrategySignal, StrategyParams

TREND_MOMENTUM = "Trend Momentum"
MACD_TREND = "MACD Trend"

MIN_INTRADAY_BARS = 20
MIN_MACD_BARS = 40
HIGH_LOW_WINDOW = 50


def trend_momentum(daily_closes: Sequence[float],
                   intraday_closes: Optional[Sequence[float]] = None,
                   params: StrategyParams = None) -> StrategySignal:
    """
    Score multi-day trend strength.

    Args:
        daily_closes: Daily closing prices, oldest first
        intraday_closes: Optional intraday closes; when given, at least
            20 bars are required
        params: Strategy parameters (SMA periods)

    Returns:
        StrategySignal with fixed confidence 0.70
    """
    params = params or StrategyParams()
    closes = np.asarray(daily_closes, dtype=float)
    if len(closes) < max(params.sma_long, 20):
        return StrategySignal.unavailable(TREND_MOMENTUM)
    if intraday_closes is not None and len(intraday_closes) < MIN_INTRADAY_BARS:
        return StrategySignal.unavailable(TREND_MOMENTUM, "Insufficient intraday data")

    score = 0.0
    reasons = []
    price = closes[-1]

    sma_short = sma(closes, params.sma_short)
    sma_mid = sma(closes, 20)
    sma_long = sma(closes, params.sma_long)

    # Moving-average alignment
    if sma_short > sma_mid > sma_long:
        score += 0.4
        reasons.append("SMAs aligned bullish")
    elif sma_short < sma_mid < sma_long:
        score -= 0.4
        reasons.append("SMAs aligned bearish")
    elif sma_short > sma_mid:
        score += 0.15
        reasons.append("Short SMA above mid")
    elif sma_short < sma_mid:
        score -= 0.15
        reasons.append("Short SMA below mid")

    # 20-bar rate of change
    roc20 = roc(closes, 20)
    if roc20 is not None:
        if roc20 > 10:
            score += 0.3
        elif roc20 > 3:
            score += 0.15
        elif roc20 < -10:
            score -= 0.3
        elif roc20 < -3:
            score -= 0.15
        reasons.append(f"ROC20 {roc20:+.1f}%")

    # Proximity to 50-bar extremes
    window = closes[-HIGH_LOW_WINDOW:]
    if price >= window.max() * 0.98:
        score += 0.2
        reasons.append("Near 50-bar high")
    elif price <= window.min() * 1.02:
        score -= 0.2
        reasons.append("Near 50-bar low")

    # SMA(20) slope over 5 bars
    if len(closes) >= 25:
        sma_mid_prev = sma(closes[:-5], 20)
        if sma_mid > sma_mid_prev:
            score += 0.1
        elif sma_mid < sma_mid_prev:
            score -= 0.1

    return StrategySignal(TREND_MOMENTUM, score, 0.7, "; ".join(reasons))


def macd_trend(intraday_closes: Sequence[float]) -> StrategySignal:
    """
    Score intraday momentum from MACD(12, 26, 9).

    Returns:
        StrategySignal with fixed confidence 0.60
    """
    closes = np.asarray(intraday_closes, dtype=float)
    if len(closes) < MIN_MACD_BARS:
        return StrategySignal.unavailable(MACD_TREND)

    result = macd(closes)
    if result is None:
        return StrategySignal.unavailable(MACD_TREND, "Cannot compute MACD")

    score = 0.0
    hist = result.histogram

    if hist > 0:
        score += 0.3
    elif hist < 0:
        score -= 0.3

    if result.prev_histogram is not None:
        slope = hist - result.prev_histogram
        if slope > 0 and hist > 0:
            score += 0.25
        elif slope < 0 and hist < 0:
            score -= 0.25
        elif slope > 0 and hist < 0:
            score += 0.15  # bearish momentum fading
        elif slope < 0 and hist > 0:
            score -= 0.15  # bullish momentum fading

    if result.macd > result.signal:
        score += 0.2
    elif result.macd < result.signal:
        score -= 0.2

    reason = f"Histogram {hist:+.4f}, MACD {result.macd:+.4f} vs signal {result.signal:+.4f}"
    return StrategySignal(MACD_TREND, score, 0.6, reason)
