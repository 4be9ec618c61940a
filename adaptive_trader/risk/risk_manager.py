"""
Risk Management module.

Handles:
- Position sizing (1% risk per trade, ATR stop distance, 7% cap)
- ATR trailing stop on the high-water mark
- Tiered profit-taking
- Minimum hold, per-symbol cooldown and rotation selection
- Transaction costs on both sides
"""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional
import logging
import math

from ..config import PortfolioConfig, RiskConfig
from ..strategies import Recommendation, SignalSnapshot

logger = logging.getLogger(__name__)


class ExitReason(Enum):
    """Why a holding is being sold."""
    TRAILING_STOP = "trailing_stop"
    NO_SIGNAL = "no_signal"
    STRONG_SELL = "strong_sell"
    SELL_SIGNAL = "sell_signal"
    PROFIT_TARGET_2 = "profit_target_2"
    PROFIT_TARGET_1 = "profit_target_1"
    ROTATION = "rotation"
    DUST = "dust_cleanup"
    RECONCILIATION = "reconciliation"


@dataclass
class ExitDecision:
    """A sell decision for one holding."""
    reason: ExitReason
    fraction: float
    detail: str = ""

    @property
    def is_full_exit(self) -> bool:
        return self.fraction >= 1.0


class CooldownTracker:
    """
    Last-trade time per symbol.

    A symbol is cooling for `hours` after any BUY or SELL. Entries are
    pruned once expired.
    """

    def __init__(self, hours: float = 24, entries: Dict[str, datetime] = None):
        self.hours = hours
        self._last_trade: Dict[str, datetime] = dict(entries or {})

    def record(self, symbol: str, when: datetime):
        self._last_trade[symbol] = when

    def is_cooling(self, symbol: str, now: datetime) -> bool:
        last = self._last_trade.get(symbol)
        return last is not None and now - last < timedelta(hours=self.hours)

    def remaining(self, symbol: str, now: datetime) -> timedelta:
        last = self._last_trade.get(symbol)
        if last is None:
            return timedelta(0)
        return max(timedelta(0), last + timedelta(hours=self.hours) - now)

    def prune(self, now: datetime) -> int:
        """Drop expired entries. Returns number removed."""
        expired = [s for s in self._last_trade if not self.is_cooling(s, now)]
        for s in expired:
            del self._last_trade[s]
        return len(expired)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._last_trade

    def __len__(self) -> int:
        return len(self._last_trade)

    def to_dict(self) -> Dict[str, str]:
        return {s: t.isoformat() for s, t in self._last_trade.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, str], hours: float = 24) -> 'CooldownTracker':
        entries = {}
        for symbol, value in (data or {}).items():
            try:
                entries[symbol] = datetime.fromisoformat(value)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring malformed cooldown entry for {symbol}: {value!r}")
        return cls(hours=hours, entries=entries)


class RiskManager:
    """
    Manages trading risk and position sizing.

    Key functions:
    - Size new positions so that cost-inclusive spend never exceeds cash
    - Decide exits in priority order
    - Pick rotation victims when capital or slots are exhausted
    """

    def __init__(self, risk: RiskConfig = None, portfolio: PortfolioConfig = None):
        """
        Initialize risk manager.

        Args:
            risk: Risk parameters (uses defaults if None)
            portfolio: Portfolio limits (uses defaults if None)
        """
        self.risk = risk or RiskConfig()
        self.limits = portfolio or PortfolioConfig()

    def with_params(self, params: Dict[str, float]) -> 'RiskManager':
        """Copy with tuned multipliers applied."""
        overrides = {
            name: params[name]
            for name in ("atr_stop_multiplier", "atr_profit1_multiplier")
            if name in params
        }
        return RiskManager(replace(self.risk, **overrides), self.limits)

    @property
    def cost_rate(self) -> float:
        return self.risk.transaction_cost_bps / 10_000

    def transaction_cost(self, total: float) -> float:
        """Proportional cost for a trade of `total` value."""
        return total * self.cost_rate

    # ─────────────────────────────────────────────────────────────
    # ENTRY
    # ─────────────────────────────────────────────────────────────

    def position_size(self,
                      portfolio_value: float,
                      price: float,
                      atr: Optional[float],
                      available_cash: float) -> float:
        """
        Calculate shares to buy.

        Uses: shares = (value * risk_per_trade) / (atr_stop_multiplier * ATR),
        capped at value * max_position_size / price. Without ATR the flat
        max_position_size allocation is used.

        Args:
            portfolio_value: Current total portfolio value
            price: Entry price
            atr: ATR at entry (None when unavailable)
            available_cash: Cash that may be spent on this trade

        Returns:
            Shares floored to 4 decimals, or 0.0 when the trade would be
            below the minimum trade value
        """
        if price <= 0 or portfolio_value <= 0 or available_cash <= 0:
            return 0.0

        max_shares = portfolio_value * self.limits.max_position_size / price
        if atr and atr > 0:
            stop_distance = self.risk.atr_stop_multiplier * atr
            shares = min(portfolio_value * self.risk.risk_per_trade / stop_distance, max_shares)
        else:
            shares = max_shares

        affordable = available_cash / (price * (1 + self.cost_rate))
        shares = math.floor(min(shares, affordable) * 10_000) / 10_000

        if shares <= 0 or shares * price < self.limits.min_trade_value:
            return 0.0
        return shares

    def available_cash(self, cash: float, total_value: float) -> float:
        """Cash above the target reserve."""
        return max(0.0, cash - total_value * self.limits.target_cash_ratio)

    # ─────────────────────────────────────────────────────────────
    # EXIT
    # ─────────────────────────────────────────────────────────────

    def trailing_stop_price(self, high_water_mark: float,
                            entry_atr: Optional[float]) -> Optional[float]:
        """Trigger price = high-water mark - atr_stop_multiplier * entry ATR."""
        if not entry_atr or entry_atr <= 0:
            return None
        return high_water_mark - self.risk.atr_stop_multiplier * entry_atr

    def is_stop_triggered(self, price: float, high_water_mark: float,
                          entry_atr: Optional[float]) -> bool:
        """Strictly below the trigger; a price exactly at it does not fire."""
        trigger = self.trailing_stop_price(high_water_mark, entry_atr)
        return trigger is not None and price < trigger

    def profit_take(self, price: float, avg_cost: float,
                    entry_atr: Optional[float]) -> Optional[ExitDecision]:
        """Tiered profit-taking on per-share gain measured in entry ATRs."""
        if not entry_atr or entry_atr <= 0:
            return None
        gain = price - avg_cost
        if gain >= self.risk.atr_profit2_multiplier * entry_atr:
            return ExitDecision(ExitReason.PROFIT_TARGET_2, self.risk.profit2_sell_fraction,
                                f"Gain {gain / entry_atr:.1f}x ATR")
        if gain >= self.risk.atr_profit1_multiplier * entry_atr:
            return ExitDecision(ExitReason.PROFIT_TARGET_1, self.risk.profit1_sell_fraction,
                                f"Gain {gain / entry_atr:.1f}x ATR")
        return None

    def evaluate_exit(self, holding, snapshot: Optional[SignalSnapshot],
                      cooldowns: CooldownTracker, now: datetime) -> Optional[ExitDecision]:
        """
        Decide whether to sell a holding.

        Priority: trailing stop -> (min hold / cooldown guards) -> missing
        signal -> STRONG_SELL -> SELL -> profit tiers.

        Args:
            holding: Holding with refreshed price and high-water mark
            snapshot: This cycle's signal for the symbol (None if missing)
            cooldowns: Per-symbol cooldown tracker
            now: Cycle time

        Returns:
            ExitDecision or None to keep holding
        """
        price = holding.current_price
        if self.is_stop_triggered(price, holding.high_water_mark, holding.entry_atr):
            trigger = self.trailing_stop_price(holding.high_water_mark, holding.entry_atr)
            return ExitDecision(ExitReason.TRAILING_STOP, 1.0,
                                f"Price {price:.4f} below stop {trigger:.4f}")

        if holding.bars_held < self.risk.min_hold_bars:
            return None
        if cooldowns.is_cooling(holding.symbol, now):
            return None

        if snapshot is None:
            return ExitDecision(ExitReason.NO_SIGNAL, 1.0, "No signal data")
        if snapshot.recommendation == Recommendation.STRONG_SELL:
            return ExitDecision(ExitReason.STRONG_SELL, 1.0,
                                f"Strong sell ({snapshot.combined:+.2f})")
        if snapshot.recommendation == Recommendation.SELL:
            return ExitDecision(ExitReason.SELL_SIGNAL, self.risk.sell_signal_fraction,
                                f"Sell signal ({snapshot.combined:+.2f})")

        return self.profit_take(price, holding.avg_cost, holding.entry_atr)

    def shares_to_sell(self, shares: float, fraction: float, price: float) -> float:
        """
        Quantity for a (partial) exit.

        A partial sell whose remainder would be worth less than the minimum
        trade value becomes a full exit.
        """
        if fraction >= 1.0:
            return shares
        quantity = round(shares * fraction, 4)
        remainder = shares - quantity
        if quantity <= 0 or remainder * price < self.limits.min_trade_value:
            return shares
        return quantity

    def is_dust(self, market_value: float) -> bool:
        return market_value < self.limits.min_trade_value

    # ─────────────────────────────────────────────────────────────
    # ROTATION
    # ─────────────────────────────────────────────────────────────

    def needs_rotation(self, has_candidates: bool, available_cash: float,
                       position_count: int) -> bool:
        """Capital or slots exhausted while buy candidates are waiting."""
        if not has_candidates:
            return False
        return (available_cash < self.limits.min_trade_value
                or position_count >= self.limits.max_positions)

    def select_rotation(self,
                        holdings: Iterable,
                        snapshots: Dict[str, SignalSnapshot],
                        cooldowns: CooldownTracker,
                        now: datetime,
                        buy_threshold: float) -> List:
        """
        Weakest holdings to sell, up to max_rotations_per_cycle.

        Only holdings past minimum hold, not cooling and with a combined
        score below the buy threshold qualify.
        """
        eligible = [
            h for h in holdings
            if h.symbol in snapshots
            and h.bars_held >= self.risk.min_hold_bars
            and not cooldowns.is_cooling(h.symbol, now)
        ]
        eligible.sort(key=lambda h: snapshots[h.symbol].combined)

        selected = []
        for h in eligible:
            if len(selected) >= self.risk.max_rotations_per_cycle:
                break
            if snapshots[h.symbol].combined >= buy_threshold:
                break
            selected.append(h)
        return selected
