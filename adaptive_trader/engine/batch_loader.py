"""
Batch data orchestration.

Splits the universe into bounded chunks, fetches daily and intraday bars
for each chunk from both sources concurrently, runs the signal combiner
per symbol and keeps only the compact results (snapshot and price).
Bars are dropped as soon as a chunk has been analyzed.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Iterator, List, Optional, Tuple
import logging

import pandas as pd

from ..config import DataConfig
from ..data import AlpacaClient, YahooClient, dedupe, primary_supported
from ..errors import DataSourceError
from ..strategies import SignalCombiner, SignalSnapshot, StrategyParams

logger = logging.getLogger(__name__)

Bars = Dict[str, pd.DataFrame]


@dataclass
class ChunkResult:
    """Compact per-symbol results for one or more chunks."""
    snapshots: Dict[str, SignalSnapshot] = field(default_factory=dict)
    prices: Dict[str, float] = field(default_factory=dict)
    failed: List[str] = field(default_factory=list)

    def merge(self, other: 'ChunkResult'):
        self.snapshots.update(other.snapshots)
        self.prices.update(other.prices)
        self.failed.extend(other.failed)


class BatchLoader:
    """
    Fetches and analyzes the universe chunk by chunk.

    The primary source serves equities and crypto; forex and futures (and
    everything, when no primary client is configured) come from the
    secondary source. Symbols without primary daily bars fall back to the
    secondary source for daily history.
    """

    def __init__(self,
                 combiner: SignalCombiner,
                 primary: Optional[AlpacaClient] = None,
                 secondary: Optional[YahooClient] = None,
                 config: DataConfig = None):
        self.combiner = combiner
        self.primary = primary
        self.secondary = secondary
        self.config = config or DataConfig()

    def iter_chunks(self, universe: Iterable[str],
                    holdings: Iterable[str] = ()) -> Iterator[List[str]]:
        """
        Yield bounded chunks, holdings first.

        Args:
            universe: Symbols to analyze
            holdings: Currently held symbols (prioritized)
        """
        ordered = dedupe(list(holdings) + list(universe))
        size = max(1, self.config.chunk_size)
        for i in range(0, len(ordered), size):
            yield ordered[i:i + size]

    def fetch_chunk(self, symbols: List[str], now: datetime) -> Tuple[Bars, Bars]:
        """
        Fetch daily and intraday bars for one chunk.

        Returns:
            Tuple of (daily bars, intraday bars) keyed by symbol
        """
        if self.primary is not None:
            primary_syms = [s for s in symbols if primary_supported(s)]
        else:
            primary_syms = []
        secondary_syms = [s for s in symbols if s not in set(primary_syms)]

        daily_start = now - timedelta(days=self.config.daily_lookback_days)
        intraday_start = now - timedelta(days=self.config.intraday_lookback_days)

        daily: Bars = {}
        intraday: Bars = {}

        with ThreadPoolExecutor(max_workers=4) as executor:
            futures = {}
            if primary_syms:
                futures['primary_daily'] = executor.submit(
                    self._primary_bars, primary_syms, '1Day', daily_start)
                futures['primary_intraday'] = executor.submit(
                    self._primary_bars, primary_syms, self.config.intraday_timeframe, intraday_start)
            if secondary_syms and self.secondary is not None:
                futures['secondary_daily'] = executor.submit(
                    self.secondary.fetch_daily, secondary_syms)
                futures['secondary_intraday'] = executor.submit(
                    self.secondary.fetch_intraday, secondary_syms)

            for name, future in futures.items():
                target = daily if name.endswith('daily') else intraday
                target.update(future.result())

        missing_daily = [s for s in primary_syms if s not in daily]
        if missing_daily and self.secondary is not None:
            logger.debug(f"Falling back to secondary daily bars for {len(missing_daily)} symbols")
            daily.update(self.secondary.fetch_daily(missing_daily))

        return daily, intraday

    def _primary_bars(self, symbols: List[str], timeframe: str, start: datetime) -> Bars:
        try:
            return self.primary.fetch_bars(symbols, timeframe, start)
        except DataSourceError as e:
            logger.warning(f"Primary {timeframe} fetch failed: {e}")
            return {}
        except Exception as e:
            logger.error(f"Unexpected error in primary {timeframe} fetch: {e}")
            return {}

    def analyze_chunk(self, symbols: List[str],
                      params: StrategyParams = None,
                      weights: Dict[str, Dict[str, float]] = None,
                      now: datetime = None) -> ChunkResult:
        """Fetch and analyze one chunk. A failing symbol never aborts the chunk."""
        now = now or datetime.now(timezone.utc)
        daily, intraday = self.fetch_chunk(symbols, now)

        result = ChunkResult()
        for symbol in symbols:
            try:
                snapshot = self.combiner.analyze(
                    symbol, daily.get(symbol), intraday.get(symbol),
                    params=params, weights=weights, now=now,
                )
            except Exception as e:
                logger.warning(f"Analysis failed for {symbol}: {e}")
                result.failed.append(symbol)
                continue

            if snapshot is None:
                result.failed.append(symbol)
                continue

            result.snapshots[symbol] = snapshot
            if snapshot.price:
                result.prices[symbol] = snapshot.price

        return result

    def load(self, universe: Iterable[str],
             holdings: Iterable[str] = (),
             params: StrategyParams = None,
             weights: Dict[str, Dict[str, float]] = None,
             now: datetime = None) -> ChunkResult:
        """
        Analyze the whole universe.

        Args:
            universe: Symbols to analyze
            holdings: Held symbols, analyzed first
            params: Strategy parameters
            weights: Regime weights
            now: Cycle time

        Returns:
            Merged ChunkResult
        """
        now = now or datetime.now(timezone.utc)
        total = ChunkResult()

        for index, chunk in enumerate(self.iter_chunks(universe, holdings), start=1):
            result = self.analyze_chunk(chunk, params, weights, now)
            logger.info(f"Chunk {index}: {len(result.snapshots)}/{len(chunk)} symbols analyzed")
            total.merge(result)

        logger.info(f"Analyzed {len(total.snapshots)} symbols ({len(total.failed)} without signal)")
        return total
