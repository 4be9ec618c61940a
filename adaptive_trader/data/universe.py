"""
Trading universe construction.

- Calendar-aware cycle universe: 24/7 assets always, calendar-bound assets
  only on exchange trading days, current holdings always.
- Optional symbol file to extend the equity universe.
- Stratified, seeded sampling for backtests.
"""

from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import logging

import pytz

from .asset_lists import (
    CRYPTO_SYMBOLS, FOREX_SYMBOLS, FUTURES_SYMBOLS,
    SP500_SYMBOLS, ETF_SYMBOLS, NASDAQ_ADDITIONAL,
)
from .symbols import is_forex, is_futures

logger = logging.getLogger(__name__)


def is_trading_day(now: datetime, timezone: str = "America/New_York") -> bool:
    """Weekday check in the exchange's time zone."""
    tz = pytz.timezone(timezone)
    if now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(tz).weekday() < 5


def load_symbol_file(path: Path) -> List[str]:
    """
    Read one symbol per line; blank lines and '#' comments are skipped.

    Args:
        path: Text file path

    Returns:
        Symbols in file order
    """
    symbols = []
    with open(path) as f:
        for line in f:
            line = line.split('#', 1)[0].strip()
            if line:
                symbols.append(line.upper())
    return symbols


def dedupe(symbols: Iterable[str]) -> List[str]:
    """Remove duplicates, keeping first occurrence order."""
    seen = set()
    result = []
    for s in symbols:
        if s not in seen:
            seen.add(s)
            result.append(s)
    return result


class UniverseBuilder:
    """Builds the list of symbols to analyze in one cycle."""

    def __init__(self,
                 crypto: List[str] = None,
                 equities: List[str] = None,
                 forex: List[str] = None,
                 futures: List[str] = None,
                 timezone: str = "America/New_York",
                 extra_symbols_file: Optional[Path] = None):
        self.crypto = list(crypto if crypto is not None else CRYPTO_SYMBOLS)
        self.equities = list(equities if equities is not None
                             else SP500_SYMBOLS + ETF_SYMBOLS + NASDAQ_ADDITIONAL)
        self.forex = list(forex if forex is not None else FOREX_SYMBOLS)
        self.futures = list(futures if futures is not None else FUTURES_SYMBOLS)
        self.timezone = timezone

        if extra_symbols_file:
            extra = load_symbol_file(Path(extra_symbols_file))
            logger.info(f"Loaded {len(extra)} extra symbols from {extra_symbols_file}")
            self.equities.extend(extra)

    def build(self, now: datetime, holdings: Iterable[str] = ()) -> List[str]:
        """
        Universe for a cycle starting at `now`.

        Holdings are always included so sell decisions have signal data.
        """
        symbols = list(self.crypto)
        trading_day = is_trading_day(now, self.timezone)
        if trading_day:
            symbols.extend(self.equities)
            symbols.extend(self.forex)
            symbols.extend(self.futures)
        symbols.extend(holdings)

        universe = dedupe(symbols)
        logger.info(f"Universe: {len(universe)} symbols (trading day: {trading_day})")
        return universe


def seeded_shuffle(items: List[str], seed: int = 42) -> List[str]:
    """Deterministic Fisher-Yates shuffle driven by a 32-bit LCG."""
    result = list(items)
    state = seed

    def rand() -> float:
        nonlocal state
        state = (state * 1664525 + 1013904223) & 0xFFFFFFFF
        return state / 0xFFFFFFFF

    for i in range(len(result) - 1, 0, -1):
        j = min(i, int(rand() * (i + 1)))
        result[i], result[j] = result[j], result[i]
    return result


def stratified_sample(buckets: Dict[str, List[str]], count: int,
                      seed: int = 42, exclude_calendar_only: bool = True) -> List[str]:
    """
    Proportional sample across categories, at least one per category.

    Args:
        buckets: Category name -> symbols
        count: Target sample size
        seed: Shuffle seed
        exclude_calendar_only: Drop forex/futures symbols (no intraday
            history on the primary source)

    Returns:
        Up to `count` unique symbols
    """
    cleaned = {}
    for name, symbols in buckets.items():
        syms = [s for s in dedupe(symbols)
                if not (exclude_calendar_only and (is_forex(s) or is_futures(s)))]
        if syms:
            cleaned[name] = syms

    total = sum(len(s) for s in cleaned.values())
    if total == 0 or count <= 0:
        return []

    selected: List[str] = []
    chosen = set()
    for name, symbols in cleaned.items():
        quota = max(1, round(len(symbols) / total * count))
        added = 0
        for sym in seeded_shuffle(symbols, seed):
            if added >= quota:
                break
            if sym not in chosen:
                chosen.add(sym)
                selected.append(sym)
                added += 1

    if len(selected) < count:
        largest = max(cleaned.values(), key=len)
        for sym in seeded_shuffle(largest, seed):
            if len(selected) >= count:
                break
            if sym not in chosen:
                chosen.add(sym)
                selected.append(sym)

    return selected[:count]
