"""
Mean-reversion strategy generators.

- Bollinger+RSI Reversion: band breaks confirmed by RSI extremes.
- VWAP Reversion: Z-score of price against a windowed VWAP. The only
  generator whose confidence scales with signal strength.
"""

from typing import Sequence

import numpy as np

from ..indicators import bollinger_bands, rsi, vwap_zscore
from .signals import StrategySignal, StrategyParams

BOLLINGER_RSI = "BB+RSI Reversion"
VWAP_REVERSION = "VWAP Reversion"

MIN_BOLLINGER_BARS = 25
MIN_VWAP_BARS = 12
MIN_BAND_WIDTH = 0.01


def bollinger_rsi_reversion(intraday_closes: Sequence[float],
                            params: StrategyParams = None) -> StrategySignal:
    """
    Score band extremes, boosted when RSI confirms.

    Args:
        intraday_closes: Intraday closes, oldest first
        params: Strategy parameters (RSI levels, band multiplier)

    Returns:
        StrategySignal with fixed confidence 0.70, or 0.30 when the bands
        are too narrow to trade
    """
    params = params or StrategyParams()
    closes = np.asarray(intraday_closes, dtype=float)
    if len(closes) < MIN_BOLLINGER_BARS:
        return StrategySignal.unavailable(BOLLINGER_RSI)

    bands = bollinger_bands(closes, 20, params.bollinger_std_dev)
    rsi_value = rsi(closes, 14)
    if bands is None or rsi_value is None:
        return StrategySignal.unavailable(BOLLINGER_RSI, "Cannot compute bands")

    if bands.width < MIN_BAND_WIDTH:
        return StrategySignal(BOLLINGER_RSI, 0.0, 0.3, "No reversion edge (bands too narrow)")

    price = closes[-1]
    score = 0.0

    if price < bands.lower:
        score += 0.5
        if rsi_value < params.rsi_oversold:
            score += 0.3
        elif rsi_value < params.rsi_oversold + 10:
            score += 0.15
        reason = f"Below lower band, RSI {rsi_value:.0f}"
    elif price > bands.upper:
        score -= 0.5
        if rsi_value > params.rsi_overbought:
            score -= 0.3
        elif rsi_value > params.rsi_overbought - 10:
            score -= 0.15
        reason = f"Above upper band, RSI {rsi_value:.0f}"
    else:
        position = bands.position(price)
        if position < 0.2:
            score += 0.2
        elif position > 0.8:
            score -= 0.2
        reason = f"Inside bands at {position:.0%}"

    return StrategySignal(BOLLINGER_RSI, score, 0.7, reason)


def vwap_reversion(high: Sequence[float], low: Sequence[float],
                   close: Sequence[float], volume: Sequence[float],
                   window: int = 78) -> StrategySignal:
    """
    Score deviation from VWAP over the most recent `window` bars.

    Returns:
        StrategySignal whose confidence ranges from 0.30 to 0.80
    """
    if len(close) < MIN_VWAP_BARS:
        return StrategySignal.unavailable(VWAP_REVERSION)

    result = vwap_zscore(high, low, close, volume, window)
    if result is None:
        return StrategySignal.unavailable(VWAP_REVERSION, "No volume")
    if result.std_dev == 0:
        return StrategySignal(VWAP_REVERSION, 0.0, 0.3, "No variation around VWAP")

    z = result.zscore
    abs_z = abs(z)
    direction = -1.0 if z > 0 else 1.0

    if abs_z > 2:
        magnitude = 0.8
        confidence = min(0.8, 0.5 + (abs_z - 2) * 0.15)
    elif abs_z > 1.5:
        magnitude = 0.6
        confidence = 0.4 + (abs_z - 1) * 0.1
    elif abs_z > 1:
        magnitude = 0.4
        confidence = 0.4 + (abs_z - 1) * 0.1
    elif abs_z > 0.5:
        magnitude = 0.2
        confidence = 0.3
    else:
        magnitude = 0.0
        confidence = 0.3

    return StrategySignal(VWAP_REVERSION, direction * magnitude, confidence,
                          f"Z-score {z:+.2f} vs VWAP {result.vwap:.4f}")
