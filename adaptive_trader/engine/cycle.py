"""
Trading Cycle Orchestrator.

One cycle:
1. Reconcile local holdings with the broker's positions and pending orders
2. Build the calendar-aware universe
3. Fetch bars and analyze every symbol (chunked)
4. Refresh holdings (price, value, gain, high-water mark, bars held)
5. Sells: trailing stop -> missing signal -> STRONG_SELL -> SELL -> profit tiers
6. Rotation out of the weakest holdings when capital or slots are exhausted
7. Dust cleanup
8. Buys, strongest signals first
9. Recompute totals
10. Persist portfolio, ledger, signals, last run, equity point, benchmark,
    cooldowns and learning state

The orchestrator owns the portfolio, learning adapter and cooldown map for
the lifetime of the process.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set
import logging

from ..config import TraderConfig
from ..data import UniverseBuilder, primary_supported
from ..errors import DataSourceError, PersistenceError
from ..learning import LearningAdapter
from ..portfolio import Holding, Portfolio, Trade, TradeAction
from ..risk import CooldownTracker, ExitDecision, ExitReason, RiskManager
from ..storage import StateStore
from ..strategies import SignalSnapshot, StrategyParams
from .batch_loader import BatchLoader, ChunkResult

logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    """What happened in one cycle."""
    started_at: datetime
    finished_at: Optional[datetime] = None
    universe_size: int = 0
    analyzed: int = 0
    trades: List[Trade] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)
    skipped_sells: List[str] = field(default_factory=list)
    synced_removed: List[str] = field(default_factory=list)
    persistence_errors: List[str] = field(default_factory=list)
    learning_updated: bool = False
    total_value: float = 0.0
    cash: float = 0.0
    positions: int = 0

    @property
    def buys(self) -> List[Trade]:
        return [t for t in self.trades if t.action == TradeAction.BUY]

    @property
    def sells(self) -> List[Trade]:
        return [t for t in self.trades if t.action == TradeAction.SELL]

    def summary(self) -> str:
        return (f"Cycle done: {self.analyzed}/{self.universe_size} analyzed, "
                f"{len(self.buys)} buys, {len(self.sells)} sells, "
                f"{len(self.rejected)} rejected | value ${self.total_value:,.2f}, "
                f"cash ${self.cash:,.2f}, {self.positions} positions")


class CycleOrchestrator:
    """
    Runs trading cycles against injected data, broker and storage.

    Collaborators:
    - loader: BatchLoader producing snapshots and prices
    - broker: object with list_positions(), submit_order() and get_order();
      None runs purely on local fills
    - secondary: object with get_quote() and fetch_benchmark(); optional
    """

    def __init__(self,
                 config: TraderConfig,
                 store: Optional[StateStore],
                 loader: BatchLoader,
                 broker=None,
                 secondary=None,
                 universe: UniverseBuilder = None):
        self.config = config
        self.store = store
        self.loader = loader
        self.broker = broker
        self.secondary = secondary
        self.universe = universe or UniverseBuilder(
            timezone=config.system.market_timezone,
            extra_symbols_file=config.data.universe_file,
        )
        self.base_risk = RiskManager(config.risk, config.portfolio)

        # Symbols confirmed held at the broker this cycle; None when unknown
        self.broker_positions: Optional[Set[str]] = None
        # symbol -> id of a broker BUY accepted but not filled yet
        self.pending_orders: Dict[str, str] = {}
        self.reload()

    def reload(self):
        """(Re)load owned state from storage. Without a store, start fresh."""
        defaults = self.config.default_params()
        if self.store is None:
            self.portfolio = Portfolio.fresh(self.config.portfolio.initial_capital)
            self.adapter = LearningAdapter(self.config.learning, defaults)
            self.cooldowns = CooldownTracker(self.config.risk.cooldown_hours)
            self.pending_orders = {}
            return

        self.portfolio = self.store.load_portfolio(self.config.portfolio.initial_capital)
        self.adapter = LearningAdapter(
            self.config.learning, defaults, self.store.load_learning(defaults)
        )
        self.cooldowns = self.store.load_cooldowns(self.config.risk.cooldown_hours)
        self.pending_orders = self.store.load_pending_orders()

    # ─────────────────────────────────────────────────────────────
    # CYCLE
    # ─────────────────────────────────────────────────────────────

    def run_cycle(self, now: datetime = None) -> CycleReport:
        """
        Run one full cycle.

        Raises:
            PersistenceError: if any state failed to persist (after the
                whole cycle ran on in-memory state)
        """
        now = now or datetime.now(timezone.utc)
        report = CycleReport(started_at=now)
        logger.info(f"Cycle start {now.isoformat()} | value ${self.portfolio.total_value:,.2f}, "
                    f"{self.portfolio.num_holdings} positions")

        params = self.adapter.params
        risk = self.base_risk.with_params(params)
        strategy_params = StrategyParams.from_params(params)
        weights = self.adapter.effective_weights()
        buy_threshold = params.get('buy_threshold', self.config.signals.buy_threshold)

        # 1. Broker reconciliation
        self._sync_broker(now, report)

        # 2. Universe
        held = self.portfolio.symbols()
        universe = self.universe.build(now, held)
        report.universe_size = len(universe)

        # 3. Fetch + analyze
        result = self.loader.load(universe, held, strategy_params, weights, now)
        report.analyzed = len(result.snapshots)

        # 4. Refresh holdings
        self._refresh_holdings(result, now)
        self.portfolio.recompute_totals(now)

        # 5. Sells
        self._process_sells(result, risk, now, report)

        # 6. Rotation
        self._process_rotation(result, risk, buy_threshold, now, report)

        # 7. Dust
        self._cleanup_dust(result, risk, now, report)

        # 8. Buys
        self._process_buys(result, risk, buy_threshold, now, report)

        # 9. Totals
        self.portfolio.recompute_totals(now)
        self.cooldowns.prune(now)

        # 10. Persist
        self._persist(result, now, report)

        report.finished_at = datetime.now(timezone.utc)
        report.total_value = self.portfolio.total_value
        report.cash = self.portfolio.cash
        report.positions = self.portfolio.num_holdings
        logger.info(report.summary())

        if report.persistence_errors:
            raise PersistenceError(f"Failed to persist: {', '.join(report.persistence_errors)}")
        return report

    # ─────────────────────────────────────────────────────────────
    # STEPS
    # ─────────────────────────────────────────────────────────────

    def _sync_broker(self, now: datetime, report: CycleReport):
        """
        Close broker-tradable holdings the broker no longer holds.

        A holding whose BUY is still open at the broker is kept. A closed
        holding is sold at its last price so its value returns to cash; an
        order that never filled is unwound at cost.
        """
        if self.broker is None:
            self.broker_positions = None
            return
        try:
            positions = self.broker.list_positions()
        except DataSourceError as e:
            logger.warning(f"Broker position sync skipped: {e}")
            self.broker_positions = None
            return

        self.broker_positions = {p.symbol for p in positions if p.qty > 0}
        for symbol in list(self.pending_orders):
            if symbol in self.broker_positions or not self.portfolio.has_holding(symbol):
                del self.pending_orders[symbol]

        for holding in list(self.portfolio.holdings.values()):
            symbol = holding.symbol
            if not primary_supported(symbol) or symbol in self.broker_positions:
                continue

            price = holding.current_price or holding.avg_cost
            order_id = self.pending_orders.get(symbol)
            if order_id is not None:
                try:
                    order = self.broker.get_order(order_id)
                except DataSourceError as e:
                    logger.warning(f"Keeping {symbol}: status of order {order_id} unavailable: {e}")
                    continue
                if order.is_open:
                    logger.info(f"Keeping {symbol}: order {order_id} is {order.status}")
                    continue
                del self.pending_orders[symbol]
                if not order.accepted:
                    price = holding.avg_cost

            reason = f"{ExitReason.RECONCILIATION.value}: not held at broker"
            trade = self.portfolio.apply_sell(symbol, holding.shares, price, now, reason)
            report.trades.append(trade)
            report.synced_removed.append(symbol)
            logger.warning(f"Closed {symbol} at {price:.4f}: not held at broker")

    def _refresh_holdings(self, result: ChunkResult, now: datetime):
        for symbol in self.portfolio.symbols():
            price = result.prices.get(symbol)
            extended = False
            if price is None and self.secondary is not None:
                quote = self.secondary.get_quote(symbol)
                if quote is not None:
                    price, extended = quote.price, quote.is_extended_hours
            if price is None:
                logger.debug(f"No fresh price for {symbol}, keeping {self.portfolio.holdings[symbol].current_price}")
            self.portfolio.refresh_holding(symbol, price, now, extended)

    def _process_sells(self, result: ChunkResult, risk: RiskManager,
                       now: datetime, report: CycleReport):
        for holding in list(self.portfolio.holdings.values()):
            snapshot = result.snapshots.get(holding.symbol)
            decision = risk.evaluate_exit(holding, snapshot, self.cooldowns, now)
            if decision is None:
                continue
            shares = risk.shares_to_sell(holding.shares, decision.fraction, holding.current_price)
            self._execute_sell(holding, shares, decision, snapshot, risk, now, report)

    def _process_rotation(self, result: ChunkResult, risk: RiskManager,
                          buy_threshold: float, now: datetime, report: CycleReport):
        self.portfolio.recompute_totals(now)
        candidates = self._buy_candidates(result, buy_threshold, now)
        available = risk.available_cash(self.portfolio.cash, self.portfolio.total_value)
        if not risk.needs_rotation(bool(candidates), available, self.portfolio.num_holdings):
            return

        victims = risk.select_rotation(self.portfolio.holdings.values(), result.snapshots,
                                       self.cooldowns, now, buy_threshold)
        for holding in victims:
            snapshot = result.snapshots.get(holding.symbol)
            decision = ExitDecision(ExitReason.ROTATION, 1.0,
                                    f"Rotating out ({snapshot.combined:+.2f}) for stronger candidates")
            self._execute_sell(holding, holding.shares, decision, snapshot, risk, now, report)

    def _cleanup_dust(self, result: ChunkResult, risk: RiskManager,
                      now: datetime, report: CycleReport):
        for holding in list(self.portfolio.holdings.values()):
            if risk.is_dust(holding.market_value):
                decision = ExitDecision(ExitReason.DUST, 1.0,
                                        f"Position worth ${holding.market_value:.2f}")
                self._execute_sell(holding, holding.shares, decision,
                                   result.snapshots.get(holding.symbol), risk, now, report)

    def _process_buys(self, result: ChunkResult, risk: RiskManager,
                      buy_threshold: float, now: datetime, report: CycleReport):
        open_slots = self.config.portfolio.max_positions - self.portfolio.num_holdings
        if open_slots <= 0:
            return

        limit = min(open_slots, self.config.portfolio.max_new_positions_per_cycle)
        for snapshot in self._buy_candidates(result, buy_threshold, now)[:limit]:
            self.portfolio.recompute_totals(now)
            available = risk.available_cash(self.portfolio.cash, self.portfolio.total_value)
            shares = risk.position_size(self.portfolio.total_value, snapshot.price,
                                        snapshot.atr, available)
            if shares <= 0:
                logger.debug(f"Skipping {snapshot.symbol}: size below minimum trade value")
                continue
            self._execute_buy(snapshot, shares, risk, now, report)

    def _buy_candidates(self, result: ChunkResult, buy_threshold: float,
                        now: datetime) -> List[SignalSnapshot]:
        candidates = [
            s for s in result.snapshots.values()
            if s.combined > buy_threshold
            and s.price
            and not self.portfolio.has_holding(s.symbol)
            and not self.cooldowns.is_cooling(s.symbol, now)
        ]
        candidates.sort(key=lambda s: s.combined, reverse=True)
        return candidates

    # ─────────────────────────────────────────────────────────────
    # EXECUTION
    # ─────────────────────────────────────────────────────────────

    def _execute_sell(self, holding: Holding, shares: float, decision: ExitDecision,
                      snapshot: Optional[SignalSnapshot], risk: RiskManager,
                      now: datetime, report: CycleReport) -> Optional[Trade]:
        symbol = holding.symbol
        if self.broker is not None and primary_supported(symbol):
            if self.broker_positions is None or symbol not in self.broker_positions:
                logger.warning(f"Not selling {symbol}: position not confirmed at broker")
                report.skipped_sells.append(symbol)
                return None
            order = self.broker.submit_order(symbol, shares, 'sell')
            if not order.accepted:
                logger.warning(f"SELL {symbol} rejected ({order.status}): {order.message}")
                report.rejected.append(symbol)
                return None

        reason = f"{decision.reason.value}: {decision.detail}" if decision.detail else decision.reason.value
        trade = self.portfolio.apply_sell(symbol, shares, holding.current_price, now, reason,
                                          cost_rate=risk.cost_rate, snapshot=snapshot)
        self.cooldowns.record(symbol, now)
        if trade.full_exit and self.broker_positions is not None:
            self.broker_positions.discard(symbol)

        report.trades.append(trade)
        if self.adapter.record_trade(trade, now):
            report.learning_updated = True
        return trade

    def _execute_buy(self, snapshot: SignalSnapshot, shares: float, risk: RiskManager,
                     now: datetime, report: CycleReport) -> Optional[Trade]:
        symbol = snapshot.symbol
        order = None
        if self.broker is not None and primary_supported(symbol):
            order = self.broker.submit_order(symbol, shares, 'buy')
            if not order.accepted:
                logger.warning(f"BUY {symbol} rejected ({order.status}): {order.message}")
                report.rejected.append(symbol)
                return None

        reason = f"{snapshot.recommendation.value} ({snapshot.combined:+.2f}, {snapshot.regime})"
        trade = self.portfolio.apply_buy(symbol, shares, snapshot.price, now, reason,
                                         cost_rate=risk.cost_rate, atr=snapshot.atr,
                                         snapshot=snapshot)
        self.cooldowns.record(symbol, now)
        if order is not None:
            if order.is_open and order.order_id:
                self.pending_orders[symbol] = order.order_id
            elif self.broker_positions is not None:
                self.broker_positions.add(symbol)

        report.trades.append(trade)
        return trade

    # ─────────────────────────────────────────────────────────────
    # PERSISTENCE
    # ─────────────────────────────────────────────────────────────

    def _persist(self, result: ChunkResult, now: datetime, report: CycleReport):
        """Write everything; failures are collected, not raised, until the end."""
        if self.store is None:
            return

        portfolio = self.portfolio
        point = {
            'timestamp': now.isoformat(),
            'total_value': round(portfolio.total_value, 2),
            'cash': round(portfolio.cash, 2),
            'invested': round(portfolio.invested_value, 2),
            'positions': portfolio.num_holdings,
        }

        steps = [
            ('portfolio', lambda: self.store.save_portfolio(portfolio)),
            ('trades', lambda: self.store.append_trades(report.trades)),
            ('signals', lambda: self.store.save_signals(result.snapshots)),
            ('last_run', lambda: self.store.set_last_run(now)),
            ('history', lambda: self.store.append_history(point)),
            ('cooldowns', lambda: self.store.save_cooldowns(self.cooldowns)),
            ('pending_orders', lambda: self.store.save_pending_orders(self.pending_orders)),
            ('learning', lambda: self.store.save_learning(self.adapter.state)),
        ]
        for name, step in steps:
            try:
                step()
            except PersistenceError as e:
                logger.error(f"Persisting {name} failed: {e}")
                report.persistence_errors.append(name)

        self._update_benchmark(report)

    def _update_benchmark(self, report: CycleReport):
        """Best effort: a missing benchmark never fails the cycle."""
        if self.secondary is None:
            return
        data = self.config.data
        points = self.secondary.fetch_benchmark(
            data.benchmark_symbol, data.benchmark_min_days,
            self.config.portfolio.initial_capital,
        )
        if not points:
            logger.debug("Benchmark unavailable this cycle")
            return
        try:
            self.store.save_benchmark(points)
        except PersistenceError as e:
            logger.error(f"Persisting benchmark failed: {e}")
            report.persistence_errors.append('benchmark')
