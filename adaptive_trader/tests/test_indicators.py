"""
Tests for the technical indicator library.
"""

import numpy as np
import pytest

from adaptive_trader.indicators import (
    sma, sma_series, ema, ema_series, rsi, macd, bollinger_bands,
    true_range, atr, adx, roc, vwap_zscore,
)


@pytest.fixture
def noisy_series():
    rng = np.random.default_rng(7)
    return 100 + np.cumsum(rng.normal(0, 1, 120))


# ─────────────────────────────────────────────────────────────────
# MOVING AVERAGES
# ─────────────────────────────────────────────────────────────────

class TestMovingAverages:

    @pytest.mark.parametrize("length,period", [(10, 1), (10, 5), (10, 10), (50, 20)])
    def test_sma_series_length(self, length, period):
        values = np.arange(length, dtype=float)
        assert len(sma_series(values, period)) == length - period + 1

    def test_sma_too_short(self):
        assert len(sma_series([1.0, 2.0], 3)) == 0
        assert sma([1.0, 2.0], 3) is None

    def test_sma_value(self):
        assert sma([1, 2, 3, 4, 5], 5) == pytest.approx(3.0)
        assert sma([1, 2, 3, 4, 5], 2) == pytest.approx(4.5)

    def test_ema_seeded_with_sma(self):
        values = [2.0, 4.0, 6.0, 8.0]
        series = ema_series(values, 3)
        assert series[0] == pytest.approx(4.0)
        assert series[1] == pytest.approx(8.0 * 0.5 + 4.0 * 0.5)
        assert ema(values, 3) == pytest.approx(series[-1])

    def test_ema_too_short(self):
        assert ema([1.0], 3) is None


# ─────────────────────────────────────────────────────────────────
# OSCILLATORS
# ─────────────────────────────────────────────────────────────────

class TestRSI:

    def test_strictly_increasing_is_100(self):
        assert rsi(np.arange(1, 16, dtype=float), 14) == 100.0
        assert rsi(np.linspace(10, 50, 60), 14) == 100.0

    def test_strictly_decreasing_approaches_zero(self):
        value = rsi(np.linspace(50, 10, 60), 14)
        assert value is not None
        assert value < 1.0

    def test_requires_period_plus_one(self):
        assert rsi(np.arange(14, dtype=float), 14) is None

    def test_bounded(self, noisy_series):
        value = rsi(noisy_series, 14)
        assert 0 <= value <= 100


class TestMACD:

    def test_histogram_identity(self, noisy_series):
        result = macd(noisy_series)
        aligned = result.macd_line[len(result.macd_line) - len(result.signal_line):]
        np.testing.assert_allclose(result.histogram_line, aligned - result.signal_line)
        assert result.histogram == pytest.approx(result.macd - result.signal)

    def test_previous_histogram(self, noisy_series):
        result = macd(noisy_series)
        assert result.prev_histogram == pytest.approx(result.histogram_line[-2])

    def test_minimum_length(self):
        assert macd(np.arange(33, dtype=float)) is None
        assert macd(np.arange(34, dtype=float) + 1.0) is not None

    def test_rising_exponential_histogram_positive(self):
        closes = 100 * 1.001 ** np.arange(80)
        assert macd(closes).histogram > 0


class TestROC:

    def test_percent_change(self):
        assert roc([100, 105, 110], 2) == pytest.approx(10.0)

    def test_too_short(self):
        assert roc([100, 105], 2) is None


# ─────────────────────────────────────────────────────────────────
# BANDS AND VOLATILITY
# ─────────────────────────────────────────────────────────────────

class TestBollinger:

    def test_middle_equals_sma(self, noisy_series):
        bands = bollinger_bands(noisy_series, 20, 2.0)
        assert bands.middle == pytest.approx(sma(noisy_series, 20))

    def test_width_linear_in_multiplier(self, noisy_series):
        one = bollinger_bands(noisy_series, 20, 1.0)
        three = bollinger_bands(noisy_series, 20, 3.0)
        assert three.upper - three.middle == pytest.approx(3 * (one.upper - one.middle))
        assert three.middle - three.lower == pytest.approx(3 * (one.middle - one.lower))

    def test_position(self):
        bands = bollinger_bands([1.0, 2.0, 3.0, 4.0, 5.0], 5, 1.0)
        assert bands.position(bands.lower) == pytest.approx(0.0)
        assert bands.position(bands.upper) == pytest.approx(1.0)

    def test_too_short(self):
        assert bollinger_bands([1.0, 2.0], 20) is None


class TestRange:

    def test_true_range_uses_previous_close(self):
        tr = true_range([10, 12], [9, 11], [9.5, 11.5])
        assert tr[0] == pytest.approx(2.5)  # high - previous close

    def test_atr_constant_range(self):
        n = 30
        close = np.full(n, 100.0)
        assert atr(close + 1, close - 1, close, 14) == pytest.approx(2.0)

    def test_atr_too_short(self):
        close = np.full(10, 100.0)
        assert atr(close + 1, close - 1, close, 14) is None

    def test_adx_strong_uptrend(self):
        close = 100 * 1.01 ** np.arange(60)
        value = adx(close * 1.01, close * 0.99, close, 14)
        assert value > 25

    def test_adx_requires_two_periods(self):
        close = np.linspace(100, 120, 28)
        assert adx(close + 1, close - 1, close, 14) is None


class TestVWAP:

    def test_flat_volume_zscore(self):
        close = np.array([10.0, 10.0, 10.0, 13.0])
        result = vwap_zscore(close, close, close, np.ones(4), window=4)
        assert result.vwap == pytest.approx(10.75)
        assert result.zscore > 0
        assert result.bars == 4

    def test_zero_volume(self):
        close = np.array([10.0, 11.0])
        assert vwap_zscore(close, close, close, np.zeros(2)) is None

    def test_window_limits_bars(self):
        close = np.arange(1, 101, dtype=float)
        assert vwap_zscore(close, close, close, np.ones(100), window=78).bars == 78
