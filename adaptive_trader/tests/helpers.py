"""
Shared builders and in-memory fakes for the test suite.

Fakes implement the same interface as the network clients so the engine
can run end to end without HTTP.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from adaptive_trader.data import BrokerPosition, OrderResult, Quote
from adaptive_trader.data.alpaca_client import REJECTED_STATUSES
from adaptive_trader.errors import DataSourceError
from adaptive_trader.strategies import SignalCombiner, SignalSnapshot, StrategySignal

# Wednesday, regular session
NOW = datetime(2024, 3, 6, 15, 0, tzinfo=timezone.utc)


def make_bars(closes, index: pd.DatetimeIndex, spread: float = 0.001,
              volume: float = 1_000.0) -> pd.DataFrame:
    """OHLCV frame around a close series; high/low sit `spread` away."""
    closes = np.asarray(closes, dtype=float)
    return pd.DataFrame({
        'open': closes,
        'high': closes * (1 + spread),
        'low': closes * (1 - spread),
        'close': closes,
        'volume': np.full(len(closes), volume),
    }, index=index)


def geometric(start: float, growth: float, n: int) -> np.ndarray:
    """start * growth**i, i = 0..n-1."""
    return start * growth ** np.arange(n)


def daily_index(n: int, end: str = "2024-03-05") -> pd.DatetimeIndex:
    return pd.date_range(end=end, periods=n, freq="D", tz="UTC")


def intraday_index(n: int, end: str = "2024-03-06 14:55") -> pd.DatetimeIndex:
    return pd.date_range(end=end, periods=n, freq="5min", tz="UTC")


def rising_daily(n: int = 90, start: float = 100.0) -> pd.DataFrame:
    """Strictly rising daily bars with a strong, clean trend."""
    return make_bars(geometric(start, 1.01, n), daily_index(n), spread=0.01)


def rising_intraday(n: int = 80, start: float = 100.0) -> pd.DataFrame:
    return make_bars(geometric(start, 1.001, n), intraday_index(n))


def make_snapshot(symbol: str, combined: float, price: float = 100.0,
                  atr: Optional[float] = 1.0, regime: str = "TRENDING_UP") -> SignalSnapshot:
    """Snapshot with a fixed combined score; every strategy agrees with it."""
    signal = StrategySignal("fixed", combined, 0.7)
    return SignalSnapshot(
        symbol=symbol, timestamp=NOW,
        trend_momentum=signal, macd_trend=signal,
        bollinger_rsi=signal, vwap_reversion=signal,
        trend_score=combined, reversion_score=combined, combined=combined,
        recommendation=SignalCombiner().recommend(combined),
        regime=regime, price=price, atr=atr,
    )


class FakeSecondary:
    """Stands in for YahooClient."""

    def __init__(self, daily: Dict[str, pd.DataFrame] = None,
                 intraday: Dict[str, pd.DataFrame] = None,
                 quotes: Dict[str, float] = None,
                 benchmark: List[Dict] = None):
        self.daily = daily or {}
        self.intraday = intraday or {}
        self.quotes = quotes or {}
        self.benchmark = benchmark if benchmark is not None else [
            {'timestamp': NOW.isoformat(), 'value': 10_000.0}
        ]
        self.daily_requests: List[List[str]] = []
        self.intraday_requests: List[List[str]] = []

    def fetch_daily(self, symbols):
        self.daily_requests.append(list(symbols))
        return {s: self.daily[s] for s in symbols if s in self.daily}

    def fetch_intraday(self, symbols):
        self.intraday_requests.append(list(symbols))
        return {s: self.intraday[s] for s in symbols if s in self.intraday}

    def get_quote(self, symbol) -> Optional[Quote]:
        price = self.quotes.get(symbol)
        if price is None:
            return None
        return Quote(symbol=symbol, price=price, timestamp=NOW)

    def fetch_benchmark(self, symbol="SPY", days=90, initial_capital=10_000.0):
        return list(self.benchmark)


class FakePrimary:
    """Stands in for AlpacaClient's market-data side."""

    def __init__(self, bars: Dict[str, Dict[str, pd.DataFrame]] = None, fail: bool = False):
        self.bars = bars or {}
        self.fail = fail
        self.requests = []

    def fetch_bars(self, symbols, timeframe, start):
        self.requests.append((list(symbols), timeframe))
        if self.fail:
            raise DataSourceError("primary down", 503)
        frames = self.bars.get(timeframe, {})
        return {s: frames[s] for s in symbols if s in frames}


class FakeBroker:
    """Stands in for AlpacaClient's trading side."""

    def __init__(self, held: List[str] = None, accept: bool = True, sync_fails: bool = False,
                 order_status: str = 'accepted', lookup_fails: bool = False):
        self.held = list(held or [])
        self.accept = accept
        self.sync_fails = sync_fails
        self.order_status = order_status
        self.lookup_fails = lookup_fails
        self.orders = []
        self.lookups = []

    def list_positions(self):
        if self.sync_fails:
            raise DataSourceError("positions unavailable", 503)
        return [BrokerPosition(symbol=s, qty=1.0, avg_entry_price=100.0,
                               market_value=100.0, asset_class='us_equity')
                for s in self.held]

    def submit_order(self, symbol, qty, side, order_type='market', time_in_force=None):
        self.orders.append((symbol, qty, side))
        if not self.accept:
            return OrderResult(accepted=False, status='rejected', message='insufficient buying power')
        return OrderResult(accepted=True, status=self.order_status,
                           order_id=f"order-{len(self.orders)}", filled_qty=qty)

    def get_order(self, order_id):
        self.lookups.append(order_id)
        if self.lookup_fails:
            raise DataSourceError("order lookup failed", 503)
        return OrderResult(accepted=self.order_status not in REJECTED_STATUSES,
                           status=self.order_status, order_id=order_id)


class StaticLoader:
    """Loader returning a fixed ChunkResult every cycle."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def load(self, universe, holdings=(), params=None, weights=None, now=None):
        self.calls.append((list(universe), list(holdings)))
        return self.result
