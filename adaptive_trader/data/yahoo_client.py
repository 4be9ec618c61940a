"""
Secondary market data source using yfinance.

Used for:
- Symbols the broker data API does not serve (forex, futures)
- Daily history when the primary source has no daily bars
- Latest quotes for holdings without a cycle price
- The buy-and-hold benchmark series
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from datetime import datetime, time as dtime
from typing import Callable, Dict, List, Optional
import logging
import time

import pandas as pd
import pytz
import yfinance as yf

from .symbols import YahooSymbols, is_crypto

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['open', 'high', 'low', 'close', 'volume']

EXCHANGE_TZ = pytz.timezone("America/New_York")
REGULAR_OPEN = dtime(9, 30)
REGULAR_CLOSE = dtime(16, 0)


@dataclass
class Quote:
    """Latest traded price for a symbol."""
    symbol: str
    price: float
    timestamp: Optional[datetime] = None
    is_extended_hours: bool = False


def clean_bars(df: pd.DataFrame) -> Optional[pd.DataFrame]:
    """
    Clean and standardize a yfinance frame.

    - Lowercase OHLCV column names
    - Drop rows with missing OHLC values
    - Remove duplicate indices, sort by time
    - Index as tz-aware UTC timestamps
    """
    if df is None or df.empty:
        return None

    df = df.copy()
    if isinstance(df.columns, pd.MultiIndex):
        df.columns = df.columns.get_level_values(0)

    column_map = {
        'Open': 'open',
        'High': 'high',
        'Low': 'low',
        'Close': 'close',
        'Volume': 'volume',
        'Adj Close': 'adj_close',
    }
    df.columns = [column_map.get(c, str(c).lower()) for c in df.columns]

    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            logger.error(f"Missing required column: {col}")
            return None
        df[col] = pd.to_numeric(df[col], errors='coerce')

    df = df.dropna(subset=['open', 'high', 'low', 'close'])
    df['volume'] = df['volume'].fillna(0.0)
    df = df[~df.index.duplicated(keep='first')]

    if not isinstance(df.index, pd.DatetimeIndex):
        df.index = pd.to_datetime(df.index)
    if df.index.tz is None:
        df.index = df.index.tz_localize('UTC')
    else:
        df.index = df.index.tz_convert('UTC')

    df = df.sort_index()
    return df[REQUIRED_COLUMNS] if len(df) else None


def is_extended_hours(symbol: str, ts: datetime) -> bool:
    """Whether a bar time falls outside regular US equity hours."""
    if is_crypto(symbol) or ts is None:
        return False
    local = ts.astimezone(EXCHANGE_TZ)
    return not (REGULAR_OPEN <= local.time() < REGULAR_CLOSE)


class YahooClient:
    """
    Per-symbol yfinance fetcher with bounded concurrency.

    Symbols are fetched in batches of `batch_size` on a thread pool, with
    `batch_delay` seconds between batches.
    """

    def __init__(self,
                 batch_size: int = 20,
                 batch_delay: float = 0.4,
                 max_workers: int = 8,
                 sleep: Callable[[float], None] = time.sleep):
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.max_workers = max_workers
        self._sleep = sleep

    def fetch_history(self, symbol: str, period: str = "3mo",
                      interval: str = "1d") -> Optional[pd.DataFrame]:
        """
        Fetch bars for one symbol.

        Args:
            symbol: Canonical symbol
            period: yfinance period ('5d', '3mo', ...)
            interval: yfinance interval ('5m', '1h', '1d', ...)

        Returns:
            OHLCV DataFrame or None when nothing usable was returned
        """
        try:
            ticker = yf.Ticker(YahooSymbols.to_provider(symbol))
            df = ticker.history(period=period, interval=interval, auto_adjust=False)
        except Exception as e:
            logger.warning(f"Error fetching {symbol} ({interval}): {e}")
            return None

        df = clean_bars(df)
        if df is None:
            logger.debug(f"No data returned for {symbol} ({interval})")
        return df

    def fetch_many(self, symbols: List[str], period: str = "3mo",
                   interval: str = "1d") -> Dict[str, pd.DataFrame]:
        """
        Fetch bars for many symbols.

        Returns:
            Dictionary mapping symbol to DataFrame; failures are omitted
        """
        results: Dict[str, pd.DataFrame] = {}
        failed = []

        for i in range(0, len(symbols), self.batch_size):
            batch = symbols[i:i + self.batch_size]
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(batch))) as executor:
                futures = {
                    executor.submit(self.fetch_history, sym, period, interval): sym
                    for sym in batch
                }
                for future in as_completed(futures):
                    sym = futures[future]
                    df = future.result()
                    if df is not None:
                        results[sym] = df
                    else:
                        failed.append(sym)

            if i + self.batch_size < len(symbols):
                self._sleep(self.batch_delay)

        if failed:
            logger.info(f"Secondary source returned nothing for {len(failed)} symbols")
        return results

    def fetch_daily(self, symbols: List[str]) -> Dict[str, pd.DataFrame]:
        """About three months of daily bars."""
        return self.fetch_many(symbols, period="3mo", interval="1d")

    def fetch_intraday(self, symbols: List[str]) -> Dict[str, pd.DataFrame]:
        """Five days of 5-minute bars."""
        return self.fetch_many(symbols, period="5d", interval="5m")

    def get_quote(self, symbol: str) -> Optional[Quote]:
        """
        Latest price including pre/post-market trades.

        Returns:
            Quote, or None when no price is available
        """
        try:
            df = yf.Ticker(YahooSymbols.to_provider(symbol)).history(
                period="1d", interval="1m", prepost=True, auto_adjust=False
            )
        except Exception as e:
            logger.warning(f"Quote for {symbol} failed: {e}")
            return None

        df = clean_bars(df)
        if df is None:
            return None

        ts = df.index[-1].to_pydatetime()
        return Quote(
            symbol=symbol,
            price=float(df['close'].iloc[-1]),
            timestamp=ts,
            is_extended_hours=is_extended_hours(symbol, ts),
        )

    def fetch_benchmark(self, symbol: str = "SPY", days: int = 90,
                        initial_capital: float = 10_000.0) -> List[Dict]:
        """
        Buy-and-hold curve of `symbol` scaled to the starting capital.

        Uses hourly closes over at least `days` days:
        value = close / first_valid_close * initial_capital.

        Returns:
            List of {'timestamp', 'value'} points, oldest first
        """
        df = self.fetch_history(symbol, period=f"{max(days, 90)}d", interval="1h")
        if df is None:
            return []

        closes = df['close']
        first = closes.iloc[0]
        if first <= 0:
            return []

        return [
            {'timestamp': ts.isoformat(), 'value': round(float(c) / first * initial_capital, 2)}
            for ts, c in closes.items()
        ]
