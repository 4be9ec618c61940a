"""
Self-Learning Adapter.

Learns from closed trades:
- Attribution: which strategy family drove each entry, and whether the
  trade won
- Weight adaptation: per-regime trend/reversion weights pulled toward the
  families' win rates with a slow EMA, never below a floor
- Parameter tuning: hill-climbing one registry parameter per tuning round,
  keeping its direction while performance improves and reversing it when
  performance degrades

Nothing is mutated until the closed-trade count exceeds the warmup threshold.
Partial sells are not closed trades and are not learned from.
"""

from dataclasses import dataclass, field, fields, asdict
from datetime import datetime
from typing import Dict, List, Optional
import logging
import random

from ..config import LearningConfig
from ..portfolio import Trade, TradeAction
from ..strategies import default_regime_weights

logger = logging.getLogger(__name__)

STATE_VERSION = 1


@dataclass(frozen=True)
class TunableParam:
    """A parameter the tuner may nudge."""
    name: str
    min_value: float
    max_value: float
    step: float
    decimals: int

    def clamp(self, value: float) -> float:
        return round(max(self.min_value, min(self.max_value, value)), self.decimals)


PARAM_REGISTRY: Dict[str, TunableParam] = {
    p.name: p for p in [
        TunableParam("rsi_oversold", 20, 40, 2, 0),
        TunableParam("rsi_overbought", 60, 80, 2, 0),
        TunableParam("sma_short", 5, 20, 1, 0),
        TunableParam("sma_long", 30, 100, 5, 0),
        TunableParam("bollinger_std_dev", 1.5, 3.0, 0.1, 1),
        TunableParam("buy_threshold", 0.20, 0.55, 0.025, 3),
        TunableParam("atr_stop_multiplier", 1.0, 4.0, 0.25, 2),
        TunableParam("atr_profit1_multiplier", 1.5, 6.0, 0.5, 1),
    ]
}


@dataclass
class TradeAttribution:
    """What the adapter remembers about one closed trade."""
    symbol: str
    timestamp: str
    regime: str
    win: bool
    gain_pct: float
    trend_score: float
    reversion_score: float
    dominant: str  # 'trend' or 'reversion'

    @classmethod
    def from_trade(cls, trade: Trade) -> 'TradeAttribution':
        entry = trade.entry_signals
        if entry is not None:
            trend_strength = sum(abs(s.score) for s in entry.trend_signals)
            reversion_strength = sum(abs(s.score) for s in entry.reversion_signals)
            regime = entry.regime
            trend_score, reversion_score = entry.trend_score, entry.reversion_score
        else:
            trend_strength = reversion_strength = 0.0
            regime = "UNKNOWN"
            trend_score = reversion_score = 0.0

        return cls(
            symbol=trade.symbol,
            timestamp=trade.timestamp.isoformat(),
            regime=regime,
            win=trade.is_win,
            gain_pct=round(trade.gain_loss_percent or 0.0, 4),
            trend_score=round(trend_score, 4),
            reversion_score=round(reversion_score, 4),
            dominant='trend' if trend_strength >= reversion_strength else 'reversion',
        )


@dataclass
class LearningState:
    """Versioned, persisted learning state."""
    version: int = STATE_VERSION
    regime_weights: Dict[str, Dict[str, float]] = field(default_factory=default_regime_weights)
    params: Dict[str, float] = field(default_factory=dict)
    closed_trades: List[Dict] = field(default_factory=list)
    total_trades_analyzed: int = 0
    warmup_complete: bool = False
    last_param_tune_at: int = 0
    param_directions: Dict[str, int] = field(default_factory=dict)
    weight_history: List[Dict] = field(default_factory=list)
    param_history: List[Dict] = field(default_factory=list)
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def migrate(raw: Optional[Dict], default_params: Dict[str, float] = None) -> LearningState:
    """
    Build a LearningState from any persisted shape.

    Missing fields take defaults, unknown keys are dropped, regime weights
    and params are merged over their defaults.

    Args:
        raw: Persisted dictionary (or None)
        default_params: Starting parameter values

    Returns:
        Current-version LearningState
    """
    defaults = dict(default_params or {})
    state = LearningState(params=dict(defaults))
    if not raw:
        return state

    known = {f.name for f in fields(LearningState)}
    dropped = set(raw) - known
    if dropped:
        logger.info(f"Dropping unknown learning-state keys: {sorted(dropped)}")

    for name in known - {'version', 'regime_weights', 'params'}:
        if name in raw and raw[name] is not None:
            setattr(state, name, raw[name])

    for regime, weights in (raw.get('regime_weights') or {}).items():
        trend = weights.get('trend')
        if trend is None:
            continue
        state.regime_weights[regime] = {
            'trend': float(trend),
            'reversion': round(1.0 - float(trend), 4),
        }

    for name, value in (raw.get('params') or {}).items():
        if name in defaults or name in PARAM_REGISTRY:
            state.params[name] = value

    if raw.get('version', STATE_VERSION) != STATE_VERSION:
        logger.info(f"Migrated learning state from version {raw.get('version')} to {STATE_VERSION}")
    state.version = STATE_VERSION
    return state


def win_rate(records: List[Dict]) -> float:
    if not records:
        return 0.0
    return sum(1 for r in records if r['win']) / len(records)


class LearningAdapter:
    """
    Owns the LearningState and mutates it on SELL trades.

    Usage:
        adapter = LearningAdapter(config.learning, config.default_params())
        adapter.record_trade(trade)
        weights = adapter.effective_weights()
    """

    def __init__(self,
                 config: LearningConfig = None,
                 default_params: Dict[str, float] = None,
                 state: LearningState = None,
                 registry: Dict[str, TunableParam] = None):
        """
        Initialize adapter.

        Args:
            config: Learning settings
            default_params: Starting values for tunable parameters
            state: Previously persisted state (already migrated)
            registry: Tunable parameters (defaults to PARAM_REGISTRY)
        """
        self.config = config or LearningConfig()
        self.default_params = dict(default_params or {})
        self.registry = registry or PARAM_REGISTRY
        self.state = state or LearningState(params=dict(self.default_params))
        self._rng = random.Random(self.config.seed)

    # ─────────────────────────────────────────────────────────────
    # READ SIDE
    # ─────────────────────────────────────────────────────────────

    @property
    def params(self) -> Dict[str, float]:
        merged = dict(self.default_params)
        merged.update(self.state.params)
        return merged

    def effective_weights(self) -> Optional[Dict[str, Dict[str, float]]]:
        """Learned weights once warm, else None (combiner defaults)."""
        if not self.state.warmup_complete:
            return None
        return self.state.regime_weights

    # ─────────────────────────────────────────────────────────────
    # WRITE SIDE
    # ─────────────────────────────────────────────────────────────

    def record_trade(self, trade: Trade, now: datetime = None) -> bool:
        """
        Learn from a closed trade. BUYs and partial SELLs are ignored.

        Returns:
            True if weights or params were changed
        """
        if trade.action != TradeAction.SELL or not trade.full_exit:
            return False

        state = self.state
        state.closed_trades.append(asdict(TradeAttribution.from_trade(trade)))
        if len(state.closed_trades) > self.config.window_size:
            state.closed_trades = state.closed_trades[-self.config.window_size:]
        state.total_trades_analyzed += 1
        state.last_updated = (now or trade.timestamp).isoformat()

        if not state.warmup_complete and state.total_trades_analyzed > self.config.warmup_trades:
            state.warmup_complete = True
            logger.info(f"Learning warmup complete after {state.total_trades_analyzed} trades")

        if not state.warmup_complete:
            return False

        changed = self.adapt_weights()
        tuned = self.tune_params()
        return changed or tuned is not None

    def adapt_weights(self) -> bool:
        """
        EMA-blend each regime's weights toward the families' win rates.

        Returns:
            True if any regime's weights moved
        """
        cfg = self.config
        floor = cfg.weight_floor
        changed = False

        for regime, current in self.state.regime_weights.items():
            records = [r for r in self.state.closed_trades if r['regime'] == regime]
            trend = [r for r in records if r['dominant'] == 'trend']
            reversion = [r for r in records if r['dominant'] == 'reversion']
            if len(trend) < cfg.min_samples and len(reversion) < cfg.min_samples:
                continue

            wr_trend = win_rate(trend) if len(trend) >= cfg.min_samples else 0.5
            wr_reversion = win_rate(reversion) if len(reversion) >= cfg.min_samples else 0.5
            total = wr_trend + wr_reversion
            target = wr_trend / total if total > 0 else 0.5
            target = max(floor, min(1.0 - floor, target))

            old = current['trend']
            new = round(old + cfg.ema_alpha * (target - old), 4)
            new = max(floor, min(1.0 - floor, new))
            if new == old:
                continue

            current['trend'] = new
            current['reversion'] = round(1.0 - new, 4)
            changed = True
            self._append_history(self.state.weight_history, {
                'timestamp': self.state.last_updated,
                'regime': regime,
                'trend': new,
                'reversion': current['reversion'],
                'trend_win_rate': round(wr_trend, 4),
                'reversion_win_rate': round(wr_reversion, 4),
                'samples': len(records),
            })
            logger.debug(f"{regime} weights -> trend {new:.4f} (target {target:.4f})")

        return changed

    def tune_params(self) -> Optional[Dict]:
        """
        Nudge one parameter when enough new trades have closed.

        Returns:
            History entry describing the change, or None
        """
        state = self.state
        if not state.warmup_complete:
            return None
        if state.total_trades_analyzed - state.last_param_tune_at < self.config.tune_interval:
            return None

        window = state.closed_trades
        half = len(window) // 2
        if half == 0:
            return None

        older_wr = win_rate(window[:half])
        newer_wr = win_rate(window[half:])
        improving = newer_wr >= older_wr

        name = self._rng.choice(sorted(self.registry))
        param = self.registry[name]
        previous = state.param_directions.get(name)
        if previous is None:
            direction = 1 if improving else -1
        else:
            direction = previous if improving else -previous

        old_value = self.params.get(name, param.min_value)
        new_value = param.clamp(old_value + direction * param.step)

        state.params[name] = new_value
        state.param_directions[name] = direction
        state.last_param_tune_at = state.total_trades_analyzed

        entry = {
            'timestamp': state.last_updated,
            'param': name,
            'old': old_value,
            'new': new_value,
            'direction': direction,
            'older_win_rate': round(older_wr, 4),
            'newer_win_rate': round(newer_wr, 4),
        }
        self._append_history(state.param_history, entry)
        logger.info(f"Tuned {name}: {old_value} -> {new_value} "
                    f"(win rate {older_wr:.0%} -> {newer_wr:.0%})")
        return entry

    def reset(self):
        """Restore defaults."""
        self.state = LearningState(params=dict(self.default_params))
        self._rng = random.Random(self.config.seed)

    def _append_history(self, history: List[Dict], entry: Dict):
        history.append(entry)
        if len(history) > self.config.history_limit:
            del history[:-self.config.history_limit]
