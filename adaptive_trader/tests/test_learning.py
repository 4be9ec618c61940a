"""
Tests for the self-learning adapter: warmup, weight adaptation, parameter
tuning and state migration.
"""

import random
from dataclasses import replace
from datetime import timedelta

import pytest

from adaptive_trader.config import LearningConfig, TraderConfig
from adaptive_trader.learning import (
    PARAM_REGISTRY, LearningAdapter, LearningState, TradeAttribution, migrate,
)
from adaptive_trader.portfolio import Trade, TradeAction
from adaptive_trader.strategies import Recommendation, SignalSnapshot, StrategySignal
from adaptive_trader.tests.helpers import NOW

DEFAULTS = TraderConfig().default_params()


def _entry(regime="TRENDING_UP", dominant="trend"):
    strong, weak = StrategySignal("s", 0.8, 0.7), StrategySignal("w", 0.1, 0.7)
    trend = (strong, strong) if dominant == "trend" else (weak, weak)
    reversion = (weak, weak) if dominant == "trend" else (strong, strong)
    return SignalSnapshot(
        symbol="XYZ", timestamp=NOW,
        trend_momentum=trend[0], macd_trend=trend[1],
        bollinger_rsi=reversion[0], vwap_reversion=reversion[1],
        trend_score=trend[0].score, reversion_score=reversion[0].score,
        combined=0.5, recommendation=Recommendation.BUY, regime=regime, price=100.0,
    )


def _trade(i=0, win=True, action=TradeAction.SELL, entry=None):
    pct = 2.0 if win else -2.0
    return Trade(
        id=f"t{i}", timestamp=NOW + timedelta(minutes=i), symbol="XYZ", action=action,
        shares=1.0, price=100.0, total=100.0, reason="test",
        entry_signals=entry, gain_loss=pct, gain_loss_percent=pct, full_exit=True,
    )


@pytest.fixture
def adapter():
    return LearningAdapter(LearningConfig(), DEFAULTS)


# ─────────────────────────────────────────────────────────────────
# WARMUP
# ─────────────────────────────────────────────────────────────────

class TestWarmup:

    def test_buy_trades_ignored(self, adapter):
        assert adapter.record_trade(_trade(action=TradeAction.BUY)) is False
        assert adapter.state.total_trades_analyzed == 0

    def test_partial_sells_ignored(self, adapter):
        partial = replace(_trade(entry=_entry()), full_exit=False)
        assert adapter.record_trade(partial) is False
        assert adapter.state.total_trades_analyzed == 0
        assert adapter.state.closed_trades == []

    def test_nothing_changes_until_threshold_exceeded(self, adapter):
        for i in range(50):
            adapter.record_trade(_trade(i, win=i % 3 == 0, entry=_entry()))
        assert not adapter.state.warmup_complete
        assert adapter.effective_weights() is None
        assert adapter.state.params == DEFAULTS
        assert adapter.state.weight_history == []
        assert adapter.state.param_history == []

    def test_warmup_completes_past_threshold(self, adapter):
        for i in range(51):
            adapter.record_trade(_trade(i, win=i % 2 == 0, entry=_entry()))
        assert adapter.state.warmup_complete
        assert adapter.effective_weights() is not None
        # First tuning round happens on the trade that completes warmup
        assert adapter.state.last_param_tune_at == 51
        assert len(adapter.state.param_history) == 1

    def test_window_is_capped(self):
        adapter = LearningAdapter(LearningConfig(window_size=20), DEFAULTS)
        for i in range(30):
            adapter.record_trade(_trade(i))
        assert len(adapter.state.closed_trades) == 20
        assert adapter.state.total_trades_analyzed == 30


# ─────────────────────────────────────────────────────────────────
# ATTRIBUTION
# ─────────────────────────────────────────────────────────────────

class TestAttribution:

    def test_dominant_family(self):
        assert TradeAttribution.from_trade(_trade(entry=_entry(dominant="trend"))).dominant == "trend"
        assert TradeAttribution.from_trade(_trade(entry=_entry(dominant="reversion"))).dominant == "reversion"

    def test_missing_entry_signals(self):
        record = TradeAttribution.from_trade(_trade(win=False))
        assert record.regime == "UNKNOWN"
        assert record.win is False


# ─────────────────────────────────────────────────────────────────
# WEIGHT ADAPTATION
# ─────────────────────────────────────────────────────────────────

class TestWeightAdaptation:

    def _warm(self, **overrides):
        return LearningAdapter(LearningConfig(warmup_trades=1, **overrides), DEFAULTS)

    def test_moves_toward_winning_family(self):
        adapter = self._warm()
        for i in range(20):
            dominant = "trend" if i % 2 == 0 else "reversion"
            adapter.record_trade(_trade(i, win=dominant == "reversion", entry=_entry(dominant=dominant)))
        weights = adapter.state.regime_weights["TRENDING_UP"]
        assert weights["trend"] < 0.8
        assert weights["trend"] + weights["reversion"] == pytest.approx(1.0)
        assert adapter.state.weight_history

    def test_floor_never_violated(self):
        adapter = self._warm(tune_interval=10_000)
        for i in range(2_000):
            dominant = "trend" if i % 2 == 0 else "reversion"
            adapter.record_trade(_trade(i, win=dominant == "reversion", entry=_entry(dominant=dominant)))
            for w in adapter.state.regime_weights.values():
                assert 0.10 <= w["trend"] <= 0.90
                assert 0.10 - 1e-9 <= w["reversion"] <= 0.90 + 1e-9
        assert adapter.state.regime_weights["TRENDING_UP"]["trend"] == pytest.approx(0.10, abs=2e-3)

    def test_ceiling_mirrors_floor(self):
        adapter = self._warm(tune_interval=10_000)
        for i in range(2_000):
            dominant = "trend" if i % 2 == 0 else "reversion"
            adapter.record_trade(_trade(i, win=dominant == "trend",
                                        entry=_entry("RANGE_BOUND", dominant)))
        assert adapter.state.regime_weights["RANGE_BOUND"]["trend"] <= 0.90

    def test_requires_min_samples(self):
        adapter = self._warm()
        for i in range(4):
            adapter.record_trade(_trade(i, win=False, entry=_entry()))
        assert adapter.state.regime_weights["TRENDING_UP"]["trend"] == 0.8

    def test_other_regimes_untouched(self):
        adapter = self._warm()
        for i in range(10):
            adapter.record_trade(_trade(i, win=False, entry=_entry()))
        assert adapter.state.regime_weights["RANGE_BOUND"] == {"trend": 0.2, "reversion": 0.8}


# ─────────────────────────────────────────────────────────────────
# PARAMETER TUNING
# ─────────────────────────────────────────────────────────────────

class TestParameterTuning:

    def _single_param(self, name, direction):
        registry = {name: PARAM_REGISTRY[name]}
        adapter = LearningAdapter(LearningConfig(), DEFAULTS, registry=registry)
        adapter.state.param_directions[name] = direction
        return adapter

    def test_improving_keeps_direction(self):
        adapter = self._single_param("sma_short", +1)
        for i in range(51):
            adapter.record_trade(_trade(i, win=i >= 25))
        assert adapter.state.params["sma_short"] == DEFAULTS["sma_short"] + 1
        assert adapter.state.param_directions["sma_short"] == 1
        entry = adapter.state.param_history[-1]
        assert entry["newer_win_rate"] > entry["older_win_rate"]

    def test_degrading_reverses_direction(self):
        adapter = self._single_param("sma_short", +1)
        for i in range(51):
            adapter.record_trade(_trade(i, win=i < 25))
        assert adapter.state.params["sma_short"] == DEFAULTS["sma_short"] - 1
        assert adapter.state.param_directions["sma_short"] == -1

    def test_first_direction_from_comparison(self):
        registry = {"bollinger_std_dev": PARAM_REGISTRY["bollinger_std_dev"]}
        adapter = LearningAdapter(LearningConfig(), DEFAULTS, registry=registry)
        for i in range(51):
            adapter.record_trade(_trade(i, win=i >= 25))
        assert adapter.state.params["bollinger_std_dev"] == pytest.approx(2.1)

    def test_tunes_once_per_interval(self):
        adapter = self._single_param("sma_short", +1)
        for i in range(100):
            adapter.record_trade(_trade(i, win=i >= 25))
        assert len(adapter.state.param_history) == 1
        adapter.record_trade(_trade(100, win=True))
        assert len(adapter.state.param_history) == 2

    def test_never_leaves_bounds(self):
        adapter = LearningAdapter(LearningConfig(warmup_trades=1, tune_interval=1), DEFAULTS)
        rng = random.Random(3)
        for i in range(3_000):
            adapter.record_trade(_trade(i, win=rng.random() < 0.5))
            for name, value in adapter.state.params.items():
                bounds = PARAM_REGISTRY[name]
                assert bounds.min_value <= value <= bounds.max_value

    def test_clamp_rounds_to_decimals(self):
        assert PARAM_REGISTRY["buy_threshold"].clamp(0.3749999) == 0.375
        assert PARAM_REGISTRY["sma_long"].clamp(500) == 100

    def test_reset(self, adapter):
        for i in range(60):
            adapter.record_trade(_trade(i, entry=_entry()))
        adapter.reset()
        assert adapter.state.total_trades_analyzed == 0
        assert adapter.state.params == DEFAULTS


# ─────────────────────────────────────────────────────────────────
# MIGRATION
# ─────────────────────────────────────────────────────────────────

class TestMigrate:

    def test_empty(self):
        state = migrate(None, DEFAULTS)
        assert state.params == DEFAULTS
        assert state.regime_weights["TRENDING_UP"] == {"trend": 0.8, "reversion": 0.2}

    def test_partial_shape(self):
        raw = {
            'version': 0,
            'regime_weights': {'TRENDING_UP': {'trend': 0.7}, 'RANGE_BOUND': {}},
            'params': {'sma_short': 12, 'legacy_knob': 3},
            'total_trades_analyzed': 12,
            'obsolete_field': True,
        }
        state = migrate(raw, DEFAULTS)
        assert state.version == 1
        assert state.regime_weights['TRENDING_UP'] == {'trend': 0.7, 'reversion': 0.3}
        assert state.regime_weights['RANGE_BOUND'] == {'trend': 0.2, 'reversion': 0.8}
        assert state.params['sma_short'] == 12
        assert state.params['sma_long'] == DEFAULTS['sma_long']
        assert 'legacy_knob' not in state.params
        assert state.total_trades_analyzed == 12
        assert not hasattr(state, 'obsolete_field')

    def test_round_trip(self):
        state = LearningState(params=dict(DEFAULTS), total_trades_analyzed=7, warmup_complete=True)
        assert migrate(state.to_dict(), DEFAULTS) == state
