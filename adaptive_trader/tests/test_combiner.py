"""
Tests for the regime-weighted signal combiner.
"""

import itertools

import pytest

from adaptive_trader.data import Regime
from adaptive_trader.strategies import (
    DEFAULT_REGIME_WEIGHTS, Recommendation, SignalCombiner, SignalSnapshot,
    StrategySignal, group_score,
)
from adaptive_trader.tests.helpers import NOW, rising_daily, rising_intraday


@pytest.fixture
def combiner():
    return SignalCombiner()


class TestWeights:

    def test_default_weights_sum_to_one(self):
        for regime in Regime:
            w = DEFAULT_REGIME_WEIGHTS[regime.value]
            assert w['trend'] + w['reversion'] == pytest.approx(1.0)

    def test_trending_favors_trend(self):
        assert DEFAULT_REGIME_WEIGHTS['TRENDING_UP']['trend'] > 0.5
        assert DEFAULT_REGIME_WEIGHTS['RANGE_BOUND']['reversion'] > 0.5

    def test_group_score_confidence_weighted(self):
        signals = [StrategySignal("a", 1.0, 0.6), StrategySignal("b", -1.0, 0.2)]
        assert group_score(signals) == pytest.approx((0.6 - 0.2) / 0.8)

    def test_group_score_ignores_unavailable(self):
        signals = [StrategySignal("a", 0.5, 0.7), StrategySignal.unavailable("b")]
        assert group_score(signals) == pytest.approx(0.5)
        assert group_score([StrategySignal.unavailable("b")]) == 0.0


class TestCombine:

    @pytest.mark.parametrize("regime", list(Regime))
    def test_combined_in_range(self, combiner, regime):
        values = [-1.0, -0.3, 0.0, 0.7, 1.0]
        for t, r in itertools.product(values, values):
            _, _, combined, _ = combiner.combine(
                [StrategySignal("t", t, 0.7)], [StrategySignal("r", r, 0.5)], regime
            )
            assert -1.0 <= combined <= 1.0

    def test_uses_learned_weights(self, combiner):
        trend = [StrategySignal("t", 1.0, 1.0)]
        reversion = [StrategySignal("r", -1.0, 1.0)]
        learned = {'TRENDING_UP': {'trend': 0.6, 'reversion': 0.4}}
        _, _, combined, _ = combiner.combine(trend, reversion, Regime.TRENDING_UP, learned)
        assert combined == pytest.approx(0.2)

    def test_missing_regime_falls_back(self, combiner):
        trend = [StrategySignal("t", 1.0, 1.0)]
        _, _, combined, _ = combiner.combine(trend, [], Regime.RANGE_BOUND, {'TRENDING_UP': {}})
        assert combined == pytest.approx(0.2)

    @pytest.mark.parametrize("score,expected", [
        (0.56, Recommendation.STRONG_BUY),
        (0.55, Recommendation.BUY),
        (0.36, Recommendation.BUY),
        (0.35, Recommendation.HOLD),
        (0.0, Recommendation.HOLD),
        (-0.35, Recommendation.HOLD),
        (-0.36, Recommendation.SELL),
        (-0.55, Recommendation.SELL),
        (-0.56, Recommendation.STRONG_SELL),
    ])
    def test_thresholds(self, combiner, score, expected):
        assert combiner.recommend(score) == expected


class TestAnalyze:

    def test_rising_symbol_is_buy(self, combiner):
        snapshot = combiner.analyze("AAPL", rising_daily(), rising_intraday(), now=NOW)
        assert snapshot.regime == Regime.TRENDING_UP.value
        assert snapshot.trend_momentum.score > 0
        assert snapshot.recommendation in (Recommendation.BUY, Recommendation.STRONG_BUY)
        assert snapshot.price == pytest.approx(rising_intraday()['close'].iloc[-1])
        assert snapshot.atr > 0
        assert snapshot.timestamp == NOW

    def test_no_data(self, combiner):
        assert combiner.analyze("AAPL", None, None) is None

    def test_daily_only(self, combiner):
        snapshot = combiner.analyze("EURUSD=X", rising_daily(), None, now=NOW)
        assert snapshot.price == pytest.approx(rising_daily()['close'].iloc[-1])
        assert snapshot.macd_trend.confidence == 0.0
        assert snapshot.bollinger_rsi.confidence == 0.0
        assert snapshot.atr is not None

    def test_intraday_only_unknown_regime(self, combiner):
        snapshot = combiner.analyze("BTC-USD", None, rising_intraday(), now=NOW)
        assert snapshot.regime == Regime.UNKNOWN.value
        assert snapshot.trend_momentum.confidence == 0.0

    def test_snapshot_round_trip(self, combiner):
        snapshot = combiner.analyze("AAPL", rising_daily(), rising_intraday(), now=NOW)
        restored = SignalSnapshot.from_dict(snapshot.to_dict())
        assert restored.combined == pytest.approx(snapshot.combined)
        assert restored.recommendation == snapshot.recommendation
        assert restored.trend_momentum == snapshot.trend_momentum
