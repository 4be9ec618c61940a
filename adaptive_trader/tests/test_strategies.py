"""
Tests for the trend and reversion signal generators.
"""

import numpy as np
import pytest

from adaptive_trader.strategies import (
    StrategySignal, StrategyParams,
    trend_momentum, macd_trend, bollinger_rsi_reversion, vwap_reversion,
)


def _assert_clamped(signal: StrategySignal):
    assert -1.0 <= signal.score <= 1.0
    assert 0.0 <= signal.confidence <= 1.0


class TestStrategySignal:

    def test_score_and_confidence_clamped(self):
        signal = StrategySignal("x", 3.0, 1.5)
        assert signal.score == 1.0
        assert signal.confidence == 1.0
        signal = StrategySignal("x", -3.0, -0.5)
        assert signal.score == -1.0
        assert signal.confidence == 0.0

    def test_unavailable(self):
        signal = StrategySignal.unavailable("x")
        assert signal.score == 0.0
        assert signal.confidence == 0.0

    def test_params_from_learning_map(self):
        params = StrategyParams.from_params({'sma_short': 12.0, 'rsi_oversold': 26, 'buy_threshold': 0.4})
        assert params.sma_short == 12
        assert isinstance(params.sma_short, int)
        assert params.rsi_oversold == 26.0
        assert params.sma_long == StrategyParams().sma_long


class TestTrendMomentum:

    def test_rising_series_positive(self):
        daily = 100 * 1.01 ** np.arange(90)
        signal = trend_momentum(daily, np.linspace(100, 101, 40))
        assert signal.score == pytest.approx(1.0)
        assert signal.confidence == pytest.approx(0.7)

    def test_falling_series_negative(self):
        daily = 100 * 0.99 ** np.arange(90)
        signal = trend_momentum(daily)
        assert signal.score == pytest.approx(-1.0)

    def test_insufficient_daily(self):
        signal = trend_momentum(np.arange(1, 40, dtype=float))
        assert signal.confidence == 0.0

    def test_insufficient_intraday(self):
        daily = 100 * 1.01 ** np.arange(90)
        signal = trend_momentum(daily, np.arange(10, dtype=float))
        assert signal.confidence == 0.0

    def test_sma_long_param_sets_minimum(self):
        daily = 100 * 1.01 ** np.arange(60)
        assert trend_momentum(daily, params=StrategyParams(sma_long=50)).confidence > 0
        assert trend_momentum(daily, params=StrategyParams(sma_long=80)).confidence == 0


class TestMACDTrend:

    def test_rising_positive(self):
        signal = macd_trend(100 * 1.001 ** np.arange(80))
        assert signal.score > 0
        assert signal.confidence == pytest.approx(0.6)

    def test_accelerating_decline_negative(self):
        rising = macd_trend(100 * 1.001 ** np.arange(80))
        falling = macd_trend(200 - 100 * 1.001 ** np.arange(80))
        assert falling.score == pytest.approx(-rising.score)
        assert falling.score < 0

    def test_requires_40_bars(self):
        assert macd_trend(np.arange(39, dtype=float) + 1).confidence == 0.0


class TestBollingerRSI:

    def test_break_below_band_buys(self):
        closes = np.concatenate([100 + np.sin(np.arange(40)), [90.0]])
        signal = bollinger_rsi_reversion(closes)
        assert signal.score >= 0.5
        assert signal.confidence == pytest.approx(0.7)

    def test_break_above_band_sells(self):
        closes = np.concatenate([100 + np.sin(np.arange(40)), [110.0]])
        signal = bollinger_rsi_reversion(closes)
        assert signal.score <= -0.5

    def test_narrow_bands_low_confidence(self):
        closes = 100 + 0.001 * np.sin(np.arange(40))
        signal = bollinger_rsi_reversion(closes)
        assert signal.score == 0.0
        assert signal.confidence == pytest.approx(0.3)

    def test_requires_25_bars(self):
        assert bollinger_rsi_reversion(np.arange(24, dtype=float) + 1).confidence == 0.0


class TestVWAPReversion:

    def _series(self, last):
        close = np.concatenate([100 + np.sin(np.arange(40)), [last]])
        return close, close, close, np.ones(len(close))

    def test_far_above_vwap_sells(self):
        signal = vwap_reversion(*self._series(110.0))
        assert signal.score == pytest.approx(-0.8)
        assert 0.5 <= signal.confidence <= 0.8

    def test_far_below_vwap_buys(self):
        signal = vwap_reversion(*self._series(90.0))
        assert signal.score == pytest.approx(0.8)

    def test_near_vwap_neutral(self):
        signal = vwap_reversion(*self._series(100.0))
        assert signal.score == 0.0
        assert signal.confidence == pytest.approx(0.3)

    def test_requires_12_bars(self):
        close = np.arange(11, dtype=float) + 1
        assert vwap_reversion(close, close, close, np.ones(11)).confidence == 0.0

    @pytest.mark.parametrize("last", [80.0, 95.0, 100.0, 105.0, 120.0])
    def test_always_clamped(self, last):
        _assert_clamped(vwap_reversion(*self._series(last)))
