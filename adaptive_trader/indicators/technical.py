"""
Technical indicator library.

Pure, stateless functions over price/volume series:
- SMA / EMA (EMA seeded with the SMA of the first window)
- RSI (Wilder smoothing)
- MACD with previous histogram for slope detection
- Bollinger Bands with normalized width
- True Range / ATR
- ADX (Wilder's directional movement)
- ROC
- VWAP with Z-score of the last close

Functions return None (or an empty array for series variants) when the
input is shorter than the minimum window.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

ArrayLike = Union[Sequence[float], np.ndarray]


@dataclass(frozen=True)
class MACDResult:
    """Latest MACD values plus the aligned series they came from."""
    macd: float
    signal: float
    histogram: float
    prev_histogram: Optional[float]
    macd_line: np.ndarray
    signal_line: np.ndarray
    histogram_line: np.ndarray


@dataclass(frozen=True)
class BollingerBands:
    """Latest Bollinger Band values."""
    upper: float
    middle: float
    lower: float
    std_dev: float
    width: float  # (upper - lower) / middle

    def position(self, price: float) -> float:
        """Where price sits inside the band: 0 = lower, 1 = upper."""
        span = self.upper - self.lower
        if span <= 0:
            return 0.5
        return (price - self.lower) / span


@dataclass(frozen=True)
class VWAPResult:
    """Windowed VWAP and the Z-score of the latest close against it."""
    vwap: float
    zscore: float
    std_dev: float
    bars: int


def _to_array(values: ArrayLike) -> np.ndarray:
    return np.asarray(values, dtype=float)


def sma_series(values: ArrayLike, period: int) -> np.ndarray:
    """
    Sliding arithmetic mean.

    Returns:
        Array of length len(values) - period + 1, empty when too short
    """
    arr = _to_array(values)
    if period <= 0 or len(arr) < period:
        return np.array([], dtype=float)
    cumsum = np.cumsum(np.insert(arr, 0, 0.0))
    return (cumsum[period:] - cumsum[:-period]) / period


def sma(values: ArrayLike, period: int) -> Optional[float]:
    """Latest SMA value or None."""
    arr = _to_array(values)
    if period <= 0 or len(arr) < period:
        return None
    return float(np.mean(arr[-period:]))


def ema_series(values: ArrayLike, period: int) -> np.ndarray:
    """
    Exponential moving average seeded with the SMA of the first window.

    The first output value corresponds to input index period - 1.
    """
    arr = _to_array(values)
    if period <= 0 or len(arr) < period:
        return np.array([], dtype=float)

    k = 2.0 / (period + 1)
    out = np.empty(len(arr) - period + 1)
    out[0] = np.mean(arr[:period])
    for i in range(period, len(arr)):
        out[i - period + 1] = arr[i] * k + out[i - period] * (1 - k)
    return out


def ema(values: ArrayLike, period: int) -> Optional[float]:
    """Latest EMA value or None."""
    series = ema_series(values, period)
    return float(series[-1]) if len(series) else None


def rsi(values: ArrayLike, period: int = 14) -> Optional[float]:
    """
    Relative Strength Index with Wilder's running averages.

    Returns 100 when there are no losses in the smoothed window.
    """
    arr = _to_array(values)
    if len(arr) < period + 1:
        return None

    changes = np.diff(arr)
    gains = np.where(changes > 0, changes, 0.0)
    losses = np.where(changes < 0, -changes, 0.0)

    avg_gain = np.mean(gains[:period])
    avg_loss = np.mean(losses[:period])
    for i in range(period, len(changes)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return float(100.0 - 100.0 / (1.0 + rs))


def macd(values: ArrayLike, fast: int = 12, slow: int = 26,
         signal: int = 9) -> Optional[MACDResult]:
    """
    MACD line, signal line and histogram.

    Needs slow + signal - 1 values for the first signal point.
    """
    arr = _to_array(values)
    if len(arr) < slow + signal - 1:
        return None

    fast_line = ema_series(arr, fast)
    slow_line = ema_series(arr, slow)
    # Align fast EMA to the slow EMA's first index
    macd_line = fast_line[slow - fast:] - slow_line

    signal_line = ema_series(macd_line, signal)
    if len(signal_line) == 0:
        return None
    histogram_line = macd_line[signal - 1:] - signal_line

    prev_histogram = float(histogram_line[-2]) if len(histogram_line) >= 2 else None
    return MACDResult(
        macd=float(macd_line[-1]),
        signal=float(signal_line[-1]),
        histogram=float(histogram_line[-1]),
        prev_histogram=prev_histogram,
        macd_line=macd_line,
        signal_line=signal_line,
        histogram_line=histogram_line,
    )


def bollinger_bands(values: ArrayLike, period: int = 20,
                    num_std: float = 2.0) -> Optional[BollingerBands]:
    """Bollinger Bands on the last window (population std dev)."""
    arr = _to_array(values)
    if len(arr) < period:
        return None

    window = arr[-period:]
    middle = float(np.mean(window))
    std_dev = float(np.std(window))
    upper = middle + num_std * std_dev
    lower = middle - num_std * std_dev
    width = (upper - lower) / middle if middle != 0 else 0.0
    return BollingerBands(upper=upper, middle=middle, lower=lower,
                          std_dev=std_dev, width=width)


def true_range(high: ArrayLike, low: ArrayLike, close: ArrayLike) -> np.ndarray:
    """True range from the second bar onwards."""
    h, l, c = _to_array(high), _to_array(low), _to_array(close)
    if len(c) < 2:
        return np.array([], dtype=float)
    return np.maximum(
        h[1:] - l[1:],
        np.maximum(np.abs(h[1:] - c[:-1]), np.abs(l[1:] - c[:-1]))
    )


def atr(high: ArrayLike, low: ArrayLike, close: ArrayLike,
        period: int = 14) -> Optional[float]:
    """Average True Range: EMA-smoothed true range."""
    tr = true_range(high, low, close)
    if len(tr) < period:
        return None
    return ema(tr, period)


def adx(high: ArrayLike, low: ArrayLike, close: ArrayLike,
        period: int = 14) -> Optional[float]:
    """
    Average Directional Index using Wilder smoothing.

    Requires at least 2 * period + 1 bars.
    """
    h, l, c = _to_array(high), _to_array(low), _to_array(close)
    if len(c) < 2 * period + 1:
        return None

    up_move = h[1:] - h[:-1]
    down_move = l[:-1] - l[1:]
    plus_dm = np.where((up_move > down_move) & (up_move > 0), up_move, 0.0)
    minus_dm = np.where((down_move > up_move) & (down_move > 0), down_move, 0.0)
    tr = true_range(h, l, c)

    smooth_plus = np.sum(plus_dm[:period])
    smooth_minus = np.sum(minus_dm[:period])
    smooth_tr = np.sum(tr[:period])

    dx = []
    for i in range(period, len(tr)):
        smooth_plus = smooth_plus - smooth_plus / period + plus_dm[i]
        smooth_minus = smooth_minus - smooth_minus / period + minus_dm[i]
        smooth_tr = smooth_tr - smooth_tr / period + tr[i]

        plus_di = 100 * smooth_plus / smooth_tr if smooth_tr > 0 else 0.0
        minus_di = 100 * smooth_minus / smooth_tr if smooth_tr > 0 else 0.0
        di_sum = plus_di + minus_di
        dx.append(100 * abs(plus_di - minus_di) / di_sum if di_sum > 0 else 0.0)

    if len(dx) < period:
        return None

    value = float(np.mean(dx[:period]))
    for i in range(period, len(dx)):
        value = (value * (period - 1) + dx[i]) / period
    return value


def roc(values: ArrayLike, period: int) -> Optional[float]:
    """Rate of change in percent versus `period` bars ago."""
    arr = _to_array(values)
    if len(arr) <= period:
        return None
    past = arr[-1 - period]
    if past == 0:
        return 0.0
    return float((arr[-1] - past) / past * 100)


def vwap_zscore(high: ArrayLike, low: ArrayLike, close: ArrayLike,
                volume: ArrayLike, window: int = 78) -> Optional[VWAPResult]:
    """
    VWAP over the most recent `window` bars and the Z-score of the last
    close, using the std dev of typical-price deviations from VWAP.
    """
    h, l, c, v = (_to_array(x)[-window:] for x in (high, low, close, volume))
    if len(c) == 0:
        return None

    typical = (h + l + c) / 3
    total_volume = np.sum(v)
    if total_volume <= 0:
        return None

    vwap_value = float(np.sum(typical * v) / total_volume)
    std_dev = float(np.sqrt(np.mean((typical - vwap_value) ** 2)))
    zscore = (c[-1] - vwap_value) / std_dev if std_dev > 0 else 0.0
    return VWAPResult(vwap=vwap_value, zscore=float(zscore),
                      std_dev=std_dev, bars=len(c))
