"""
Typed access to the persisted engine state.

Every piece of state the dashboard reads lives under one key:

    portfolio       cash, holdings, totals
    trades          trade ledger (list, capped, newest last on disk)
    signals         symbol -> latest SignalSnapshot
    last_run        ISO timestamp of the last completed cycle
    history         equity-curve points (list, capped)
    benchmark       benchmark curve points
    learning_state  LearningState
    cooldowns       symbol -> last trade time
    pending_orders  symbol -> id of a broker BUY not yet filled
"""

from datetime import datetime
from typing import Dict, List, Optional
import logging

from ..learning import LearningState, migrate
from ..portfolio import Portfolio, Trade
from ..risk import CooldownTracker
from ..strategies import SignalSnapshot
from .kv_store import SQLiteKVStore

logger = logging.getLogger(__name__)

KEYS = {
    'portfolio': 'portfolio',
    'trades': 'trades',
    'signals': 'signals',
    'last_run': 'last_run',
    'history': 'history',
    'benchmark': 'benchmark',
    'learning': 'learning_state',
    'cooldowns': 'cooldowns',
    'pending_orders': 'pending_orders',
}


class StateStore:
    """Portfolio, ledger, signals, history and learning state on top of the KV store."""

    def __init__(self, kv: SQLiteKVStore, max_trades: int = 100, max_history: int = 1000):
        self.kv = kv
        self.max_trades = max_trades
        self.max_history = max_history

    # Portfolio

    def load_portfolio(self, initial_capital: float) -> Portfolio:
        raw = self.kv.get(KEYS['portfolio'])
        if not raw:
            return Portfolio.fresh(initial_capital)
        return Portfolio.from_dict(raw)

    def save_portfolio(self, portfolio: Portfolio):
        self.kv.set(KEYS['portfolio'], portfolio.to_dict())

    # Trades

    def append_trades(self, trades: List[Trade]):
        """Append to the ledger and trim it to the newest max_trades."""
        if not trades:
            return
        for trade in trades:
            self.kv.list_append(KEYS['trades'], trade.to_dict())
        self.kv.list_trim(KEYS['trades'], self.max_trades)

    def get_trades(self, limit: Optional[int] = None) -> List[Trade]:
        """Ledger, most recent first."""
        start = -limit if limit else 0
        raw = self.kv.list_range(KEYS['trades'], start, -1)
        return [Trade.from_dict(t) for t in reversed(raw)]

    # Signals

    def save_signals(self, snapshots: Dict[str, SignalSnapshot]):
        """Merge this cycle's snapshots over the stored map."""
        stored = self.kv.get(KEYS['signals'], {}) or {}
        stored.update({symbol: s.to_dict() for symbol, s in snapshots.items()})
        self.kv.set(KEYS['signals'], stored)

    def get_signals(self) -> Dict[str, SignalSnapshot]:
        stored = self.kv.get(KEYS['signals'], {}) or {}
        return {symbol: SignalSnapshot.from_dict(s) for symbol, s in stored.items()}

    # Last run

    def set_last_run(self, when: datetime):
        self.kv.set(KEYS['last_run'], when.isoformat())

    def get_last_run(self) -> Optional[datetime]:
        value = self.kv.get(KEYS['last_run'])
        return datetime.fromisoformat(value) if value else None

    # Equity history

    def append_history(self, point: Dict):
        self.kv.list_append(KEYS['history'], point)
        self.kv.list_trim(KEYS['history'], self.max_history)

    def get_history(self) -> List[Dict]:
        return self.kv.list_range(KEYS['history'], 0, -1)

    # Benchmark

    def save_benchmark(self, points: List[Dict]):
        self.kv.set(KEYS['benchmark'], points)

    def get_benchmark(self) -> List[Dict]:
        return self.kv.get(KEYS['benchmark'], []) or []

    # Learning

    def load_learning(self, default_params: Dict[str, float]) -> LearningState:
        return migrate(self.kv.get(KEYS['learning']), default_params)

    def save_learning(self, state: LearningState):
        self.kv.set(KEYS['learning'], state.to_dict())

    # Cooldowns

    def load_cooldowns(self, hours: float = 24) -> CooldownTracker:
        return CooldownTracker.from_dict(self.kv.get(KEYS['cooldowns'], {}), hours=hours)

    def save_cooldowns(self, cooldowns: CooldownTracker):
        self.kv.set(KEYS['cooldowns'], cooldowns.to_dict())

    # Pending broker orders

    def load_pending_orders(self) -> Dict[str, str]:
        return dict(self.kv.get(KEYS['pending_orders'], {}) or {})

    def save_pending_orders(self, orders: Dict[str, str]):
        self.kv.set(KEYS['pending_orders'], dict(orders))

    # Resets

    def reset(self, initial_capital: float) -> Portfolio:
        """
        Fresh portfolio; clear ledger, signals, history, benchmark, cooldowns,
        pending orders and last run. Learning state is kept. Idempotent.
        """
        portfolio = Portfolio.fresh(initial_capital)
        self.save_portfolio(portfolio)
        for name in ('trades', 'signals', 'history', 'benchmark', 'cooldowns',
                     'pending_orders', 'last_run'):
            self.kv.delete(KEYS[name])
        logger.info(f"State reset: ${initial_capital:,.2f} cash, no holdings")
        return portfolio

    def reset_learning(self, default_params: Dict[str, float]) -> LearningState:
        """Default learning state. Idempotent."""
        state = LearningState(params=dict(default_params))
        self.save_learning(state)
        logger.info("Learning state reset to defaults")
        return state

    def snapshot(self) -> Dict:
        """Everything a read-only consumer needs, as plain JSON values."""
        return {
            'portfolio': self.kv.get(KEYS['portfolio']),
            'trades': list(reversed(self.kv.list_range(KEYS['trades'], 0, -1))),
            'signals': self.kv.get(KEYS['signals'], {}) or {},
            'last_run': self.kv.get(KEYS['last_run']),
            'history': self.get_history(),
            'benchmark': self.get_benchmark(),
            'learning_state': self.kv.get(KEYS['learning']),
        }
