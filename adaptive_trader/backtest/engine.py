"""
Intraday replay backtester.

Replays 5-minute bars day by day and runs a full trading cycle every
`trade_interval_bars` bars (hourly by default) with the same strategies,
risk rules, learning and transaction costs as the live engine. Nothing is
persisted and no orders leave the process.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional
import logging

import pandas as pd

from ..config import TraderConfig
from ..data import dedupe
from ..engine import ChunkResult, CycleOrchestrator
from ..portfolio import Trade, TradeAction
from ..strategies import SignalCombiner, StrategyParams
from .metrics import daily_returns_from_values, max_drawdown, sharpe_ratio, win_rate

logger = logging.getLogger(__name__)


@dataclass
class BacktestConfig:
    """Replay settings."""
    days: int = 30
    trade_interval_bars: int = 12  # 12 x 5 min = 1 hour
    min_day_bars: int = 6  # Skip half-empty sessions
    min_history_bars: int = 12


@dataclass
class BacktestResult:
    """Outcome of a replay."""
    initial_capital: float
    final_value: float
    total_return_pct: float
    sharpe_ratio: float
    max_drawdown_pct: float
    total_trades: int
    win_trades: int
    loss_trades: int
    win_rate: float
    transaction_costs: float
    daily_returns: List[Dict] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'initial_capital': self.initial_capital,
            'final_value': self.final_value,
            'total_return_pct': self.total_return_pct,
            'sharpe_ratio': self.sharpe_ratio,
            'max_drawdown_pct': self.max_drawdown_pct,
            'total_trades': self.total_trades,
            'win_trades': self.win_trades,
            'loss_trades': self.loss_trades,
            'win_rate': self.win_rate,
            'transaction_costs': self.transaction_costs,
            'daily_returns': self.daily_returns,
        }

    def summary(self) -> str:
        return (f"Return {self.total_return_pct:+.2f}% | Sharpe {self.sharpe_ratio:.3f} | "
                f"Max DD {self.max_drawdown_pct:.2f}% | {self.total_trades} trades, "
                f"win rate {self.win_rate:.1f}% | costs ${self.transaction_costs:,.2f}")


class ReplayUniverse:
    """Fixed symbol list plus holdings."""

    def __init__(self, symbols: Iterable[str]):
        self.symbols = list(symbols)

    def build(self, now: datetime, holdings: Iterable[str] = ()) -> List[str]:
        return dedupe(list(holdings) + self.symbols)


class ReplayLoader:
    """
    Serves point-in-time analysis from preloaded bars.

    Intraday bars up to and including `now`; daily bars strictly before
    the day of `now`, so the current day's close is never visible.
    """

    def __init__(self,
                 combiner: SignalCombiner,
                 intraday: Dict[str, pd.DataFrame],
                 daily: Dict[str, pd.DataFrame],
                 min_history_bars: int = 12):
        self.combiner = combiner
        self.intraday = {s: df.sort_index() for s, df in intraday.items() if df is not None and len(df)}
        self.daily = {s: df.sort_index() for s, df in (daily or {}).items() if df is not None and len(df)}
        self.min_history_bars = min_history_bars

    def load(self, universe: Iterable[str], holdings: Iterable[str] = (),
             params: StrategyParams = None,
             weights: Dict[str, Dict[str, float]] = None,
             now: datetime = None) -> ChunkResult:
        result = ChunkResult()
        ts = pd.Timestamp(now)
        day_start = ts.normalize()

        for symbol in dedupe(list(holdings) + list(universe)):
            bars = self.intraday.get(symbol)
            if bars is None:
                continue
            end = bars.index.searchsorted(ts, side='right')
            if end < self.min_history_bars:
                continue
            window = bars.iloc[max(0, end - self.combiner.intraday_window):end]

            daily = self.daily.get(symbol)
            if daily is not None:
                daily = daily.iloc[:daily.index.searchsorted(day_start, side='left')]

            snapshot = self.combiner.analyze(symbol, daily, window, params=params,
                                             weights=weights, now=now)
            if snapshot is None:
                continue
            result.snapshots[symbol] = snapshot
            result.prices[symbol] = snapshot.price
        return result


class IntradayBacktester:
    """
    Runs the live cycle over historical intraday data.

    Usage:
        backtester = IntradayBacktester(config)
        result = backtester.run(intraday_bars, daily_bars)
        print(result.summary())
    """

    def __init__(self, config: TraderConfig = None, backtest: BacktestConfig = None,
                 combiner: SignalCombiner = None):
        self.config = config or TraderConfig()
        self.backtest = backtest or BacktestConfig()
        signals = self.config.signals
        self.combiner = combiner or SignalCombiner(
            buy_threshold=signals.buy_threshold,
            strong_buy_threshold=signals.strong_buy_threshold,
            sell_threshold=signals.sell_threshold,
            strong_sell_threshold=signals.strong_sell_threshold,
            intraday_window=self.config.data.intraday_window,
            vwap_window=self.config.data.vwap_window,
        )

    def run(self, intraday: Dict[str, pd.DataFrame],
            daily: Optional[Dict[str, pd.DataFrame]] = None) -> BacktestResult:
        """
        Replay the last `days` sessions found in the intraday bars.

        Args:
            intraday: Symbol -> 5-minute OHLCV bars (tz-aware index)
            daily: Symbol -> daily OHLCV bars (tz-aware index)

        Returns:
            BacktestResult
        """
        loader = ReplayLoader(self.combiner, intraday, daily or {}, self.backtest.min_history_bars)
        orchestrator = CycleOrchestrator(
            self.config, store=None, loader=loader,
            universe=ReplayUniverse(loader.intraday.keys()),
        )
        initial = self.config.portfolio.initial_capital

        timeline = pd.DatetimeIndex(sorted(set().union(*[df.index for df in loader.intraday.values()]))) \
            if loader.intraday else pd.DatetimeIndex([])
        sessions = pd.Series(timeline, index=timeline).groupby(timeline.date)
        days = sorted(sessions.groups)[-self.backtest.days:]
        logger.info(f"Backtesting {len(loader.intraday)} symbols over {len(days)} sessions")

        trades: List[Trade] = []
        day_values: List[float] = []
        day_labels: List[str] = []

        for day in days:
            stamps = list(sessions.get_group(day))
            if len(stamps) < self.backtest.min_day_bars:
                continue
            step = self.backtest.trade_interval_bars
            for i in range(step, len(stamps), step):
                report = orchestrator.run_cycle(now=stamps[i].to_pydatetime())
                trades.extend(report.trades)

            day_values.append(orchestrator.portfolio.total_value)
            day_labels.append(str(day))
            logger.debug(f"{day}: ${orchestrator.portfolio.total_value:,.2f}, "
                         f"{orchestrator.portfolio.num_holdings} positions")

        returns = daily_returns_from_values(day_values, initial)
        sells = [t for t in trades if t.action == TradeAction.SELL]
        wins = sum(1 for t in sells if (t.gain_loss or 0) > 0)
        losses = len(sells) - wins
        final_value = orchestrator.portfolio.total_value

        result = BacktestResult(
            initial_capital=initial,
            final_value=final_value,
            total_return_pct=(final_value - initial) / initial * 100 if initial > 0 else 0.0,
            sharpe_ratio=sharpe_ratio(returns),
            max_drawdown_pct=max_drawdown(returns) * 100,
            total_trades=len(trades),
            win_trades=wins,
            loss_trades=losses,
            win_rate=win_rate(wins, losses),
            transaction_costs=sum(t.transaction_cost for t in trades),
            daily_returns=[
                {'date': d, 'return': r, 'value': v}
                for d, r, v in zip(day_labels, returns, day_values)
            ],
            trades=trades,
        )
        logger.info(result.summary())
        return result
