"""
Tests for market regime classification.
"""

import numpy as np
import pytest

from adaptive_trader.data import Regime, RegimeClassifier, classify_regime
from adaptive_trader.tests.helpers import daily_index, make_bars, rising_daily


@pytest.fixture
def classifier():
    return RegimeClassifier()


def _frame(closes, spread=0.01):
    return make_bars(closes, daily_index(len(closes)), spread=spread)


class TestRegimeClassifier:

    @pytest.mark.parametrize("n", [0, 1, 30, 59])
    def test_short_series_unknown(self, classifier, n):
        closes = 100 * 1.01 ** np.arange(n)
        assert classifier.classify(_frame(closes)) == Regime.UNKNOWN

    def test_none_unknown(self, classifier):
        assert classifier.classify(None) == Regime.UNKNOWN

    def test_strong_uptrend(self, classifier):
        reading = classifier.read(rising_daily(90))
        assert reading.regime == Regime.TRENDING_UP
        assert reading.adx > 25
        assert reading.sma_fast > reading.sma_slow

    def test_strong_downtrend(self, classifier):
        closes = 200 * 0.99 ** np.arange(90)
        reading = classifier.read(_frame(closes))
        assert reading.regime == Regime.TRENDING_DOWN
        assert reading.adx > 25
        assert reading.sma_fast < reading.sma_slow

    def test_choppy_is_range_bound(self, classifier):
        # Alternating up/down days: directional movement cancels out
        closes = 100 + np.where(np.arange(90) % 2 == 0, 1.0, -1.0)
        reading = classifier.read(_frame(closes))
        assert reading.adx <= 25
        assert reading.regime == Regime.RANGE_BOUND

    def test_trending_up_requires_fast_above_slow(self, classifier):
        # ADX is direction-agnostic; a falling series must never read TRENDING_UP
        closes = 200 * 0.99 ** np.arange(90)
        assert classifier.classify(_frame(closes)) != Regime.TRENDING_UP

    def test_threshold_is_configurable(self):
        strict = RegimeClassifier(adx_threshold=101)
        assert strict.classify(rising_daily(90)) == Regime.RANGE_BOUND

    def test_classify_regime_arrays(self):
        closes = 100 * 1.01 ** np.arange(90)
        assert classify_regime(closes, closes * 1.01, closes * 0.99) == Regime.TRENDING_UP


class TestRegimeParse:

    def test_parse_string(self):
        assert Regime.parse("TRENDING_UP") == Regime.TRENDING_UP
        assert Regime.parse("range_bound") == Regime.RANGE_BOUND

    def test_parse_unknown(self):
        assert Regime.parse("SIDEWAYS") == Regime.UNKNOWN
        assert Regime.parse(None) == Regime.UNKNOWN
