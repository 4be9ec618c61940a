"""
Portfolio Management module.

Tracks:
- Cash balance
- Open holdings (fractional shares, long only)
- Trade records for BUY and SELL fills

Holdings move OPEN -> (PARTIAL)* -> CLOSED. A holding is created on a BUY,
reduced on a partial SELL and removed on a full exit.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional
import logging
import uuid

from ..strategies import SignalSnapshot

logger = logging.getLogger(__name__)

# Fractional remainders below this are treated as a closed position
SHARE_EPSILON = 1e-6


class TradeAction(Enum):
    BUY = "BUY"
    SELL = "SELL"


def _iso(ts: Optional[datetime]) -> Optional[str]:
    return ts.isoformat() if ts else None


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _snapshot_dict(snapshot: Optional[SignalSnapshot]) -> Optional[Dict]:
    return snapshot.to_dict() if snapshot else None


def _snapshot_from(data: Optional[Dict]) -> Optional[SignalSnapshot]:
    return SignalSnapshot.from_dict(data) if data else None


@dataclass
class Holding:
    """Represents an open position."""
    symbol: str
    shares: float
    avg_cost: float
    entry_timestamp: datetime
    current_price: float = 0.0
    market_value: float = 0.0
    gain_loss: float = 0.0
    gain_loss_percent: float = 0.0
    high_water_mark: float = 0.0
    entry_atr: Optional[float] = None
    bars_held: int = 0
    entry_signals: Optional[SignalSnapshot] = None
    price_updated_at: Optional[datetime] = None
    is_extended_hours: bool = False

    def update_price(self, price: float, timestamp: datetime = None):
        """Update valuation and raise the high-water mark."""
        self.current_price = price
        self.market_value = self.shares * price
        self.gain_loss = (price - self.avg_cost) * self.shares
        self.gain_loss_percent = ((price - self.avg_cost) / self.avg_cost * 100
                                  if self.avg_cost > 0 else 0.0)
        self.high_water_mark = max(self.high_water_mark, price)
        self.price_updated_at = timestamp

    def to_dict(self) -> Dict:
        return {
            'symbol': self.symbol,
            'shares': self.shares,
            'avg_cost': self.avg_cost,
            'entry_timestamp': _iso(self.entry_timestamp),
            'current_price': self.current_price,
            'market_value': self.market_value,
            'gain_loss': self.gain_loss,
            'gain_loss_percent': self.gain_loss_percent,
            'high_water_mark': self.high_water_mark,
            'entry_atr': self.entry_atr,
            'bars_held': self.bars_held,
            'entry_signals': _snapshot_dict(self.entry_signals),
            'price_updated_at': _iso(self.price_updated_at),
            'is_extended_hours': self.is_extended_hours,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Holding':
        return cls(
            symbol=data['symbol'],
            shares=float(data['shares']),
            avg_cost=float(data['avg_cost']),
            entry_timestamp=_parse_ts(data.get('entry_timestamp')),
            current_price=data.get('current_price', 0.0),
            market_value=data.get('market_value', 0.0),
            gain_loss=data.get('gain_loss', 0.0),
            gain_loss_percent=data.get('gain_loss_percent', 0.0),
            high_water_mark=data.get('high_water_mark', data.get('avg_cost', 0.0)),
            entry_atr=data.get('entry_atr'),
            bars_held=data.get('bars_held', 0),
            entry_signals=_snapshot_from(data.get('entry_signals')),
            price_updated_at=_parse_ts(data.get('price_updated_at')),
            is_extended_hours=data.get('is_extended_hours', False),
        )


@dataclass(frozen=True)
class Trade:
    """Executed trade record. Immutable once created."""
    id: str
    timestamp: datetime
    symbol: str
    action: TradeAction
    shares: float
    price: float
    total: float
    reason: str
    transaction_cost: float = 0.0
    signals: Optional[SignalSnapshot] = None
    entry_signals: Optional[SignalSnapshot] = None
    gain_loss: Optional[float] = None
    gain_loss_percent: Optional[float] = None
    full_exit: bool = False

    @property
    def is_win(self) -> bool:
        return (self.gain_loss_percent or 0.0) > 0

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'timestamp': _iso(self.timestamp),
            'symbol': self.symbol,
            'action': self.action.value,
            'shares': self.shares,
            'price': self.price,
            'total': self.total,
            'reason': self.reason,
            'transaction_cost': self.transaction_cost,
            'signals': _snapshot_dict(self.signals),
            'entry_signals': _snapshot_dict(self.entry_signals),
            'gain_loss': self.gain_loss,
            'gain_loss_percent': self.gain_loss_percent,
            'full_exit': self.full_exit,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Trade':
        return cls(
            id=data['id'],
            timestamp=_parse_ts(data['timestamp']),
            symbol=data['symbol'],
            action=TradeAction(data['action']),
            shares=data['shares'],
            price=data['price'],
            total=data['total'],
            reason=data.get('reason', ''),
            transaction_cost=data.get('transaction_cost', 0.0),
            signals=_snapshot_from(data.get('signals')),
            entry_signals=_snapshot_from(data.get('entry_signals')),
            gain_loss=data.get('gain_loss'),
            gain_loss_percent=data.get('gain_loss_percent'),
            full_exit=data.get('full_exit', False),
        )


class Portfolio:
    """
    Single mutable aggregate of cash and holdings.

    total_value = cash + sum(market_value) and is recomputed from current
    holdings every cycle.
    """

    def __init__(self, initial_capital: float = 10_000.0, cash: float = None,
                 holdings: Dict[str, Holding] = None,
                 last_updated: Optional[datetime] = None):
        """
        Initialize portfolio.

        Args:
            initial_capital: Starting cash balance
            cash: Current cash (defaults to initial capital)
            holdings: Open holdings keyed by symbol
            last_updated: Time of the last recompute
        """
        self.initial_capital = initial_capital
        self.cash = initial_capital if cash is None else cash
        self.holdings: Dict[str, Holding] = dict(holdings or {})
        self.last_updated = last_updated
        self.total_value = self.cash
        self.recompute_totals(last_updated)

    # ─────────────────────────────────────────────────────────────
    # VALUATION
    # ─────────────────────────────────────────────────────────────

    def recompute_totals(self, now: datetime = None) -> float:
        """Recompute holding values and total value."""
        for holding in self.holdings.values():
            holding.market_value = holding.shares * holding.current_price
        self.total_value = self.cash + sum(h.market_value for h in self.holdings.values())
        if now is not None:
            self.last_updated = now
        return self.total_value

    def refresh_holding(self, symbol: str, price: float, now: datetime = None,
                        is_extended_hours: bool = False):
        """Per-cycle update: price, value, gain, high-water mark, bars held."""
        holding = self.holdings.get(symbol)
        if holding is None:
            return
        if price and price > 0:
            holding.update_price(price, now)
            holding.is_extended_hours = is_extended_hours
        holding.bars_held += 1

    @property
    def invested_value(self) -> float:
        return sum(h.market_value for h in self.holdings.values())

    @property
    def total_return_pct(self) -> float:
        if self.initial_capital <= 0:
            return 0.0
        return (self.total_value - self.initial_capital) / self.initial_capital * 100

    def has_holding(self, symbol: str) -> bool:
        return symbol in self.holdings

    def get_holding(self, symbol: str) -> Optional[Holding]:
        return self.holdings.get(symbol)

    @property
    def num_holdings(self) -> int:
        return len(self.holdings)

    # ─────────────────────────────────────────────────────────────
    # FILLS
    # ─────────────────────────────────────────────────────────────

    def apply_buy(self, symbol: str, shares: float, price: float,
                  now: datetime, reason: str,
                  cost_rate: float = 0.0,
                  atr: Optional[float] = None,
                  snapshot: Optional[SignalSnapshot] = None) -> Trade:
        """
        Record a filled BUY.

        Raises:
            ValueError: if shares/price are not positive or cash is insufficient
        """
        if shares <= 0 or price <= 0:
            raise ValueError(f"Invalid buy for {symbol}: {shares} @ {price}")

        total = shares * price
        cost = total * cost_rate
        if total + cost > self.cash + 1e-9:
            raise ValueError(f"Insufficient cash for {symbol}: need {total + cost:.2f}, have {self.cash:.2f}")

        self.cash = max(0.0, self.cash - total - cost)

        existing = self.holdings.get(symbol)
        if existing:
            new_shares = existing.shares + shares
            existing.avg_cost = (existing.avg_cost * existing.shares + total) / new_shares
            existing.shares = new_shares
            existing.update_price(price, now)
        else:
            holding = Holding(
                symbol=symbol,
                shares=shares,
                avg_cost=price,
                entry_timestamp=now,
                high_water_mark=price,
                entry_atr=atr,
                entry_signals=snapshot,
            )
            holding.update_price(price, now)
            self.holdings[symbol] = holding

        logger.info(f"BUY {shares:.4f} {symbol} @ {price:.4f} (${total:,.2f}) - {reason}")

        return Trade(
            id=str(uuid.uuid4()),
            timestamp=now,
            symbol=symbol,
            action=TradeAction.BUY,
            shares=shares,
            price=price,
            total=total,
            reason=reason,
            transaction_cost=cost,
            signals=snapshot,
        )

    def apply_sell(self, symbol: str, shares: float, price: float,
                   now: datetime, reason: str,
                   cost_rate: float = 0.0,
                   snapshot: Optional[SignalSnapshot] = None) -> Trade:
        """
        Record a filled SELL. Sells more than held are capped at the holding.

        Raises:
            KeyError: if the symbol is not held
        """
        holding = self.holdings.get(symbol)
        if holding is None:
            raise KeyError(f"No holding for {symbol}")

        shares = min(shares, holding.shares)
        total = shares * price
        cost = total * cost_rate
        self.cash += total - cost

        gain = (price - holding.avg_cost) * shares
        gain_pct = ((price - holding.avg_cost) / holding.avg_cost * 100
                    if holding.avg_cost > 0 else 0.0)

        holding.shares = round(holding.shares - shares, 8)
        full_exit = holding.shares <= SHARE_EPSILON
        if full_exit:
            del self.holdings[symbol]
        else:
            holding.update_price(price, now)

        logger.info(f"SELL {shares:.4f} {symbol} @ {price:.4f} (${total:,.2f}, "
                    f"{gain_pct:+.2f}%){' [closed]' if full_exit else ''} - {reason}")

        return Trade(
            id=str(uuid.uuid4()),
            timestamp=now,
            symbol=symbol,
            action=TradeAction.SELL,
            shares=shares,
            price=price,
            total=total,
            reason=reason,
            transaction_cost=cost,
            signals=snapshot,
            entry_signals=holding.entry_signals,
            gain_loss=gain,
            gain_loss_percent=gain_pct,
            full_exit=full_exit,
        )

    # ─────────────────────────────────────────────────────────────
    # SERIALIZATION
    # ─────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict:
        return {
            'cash': self.cash,
            'initial_capital': self.initial_capital,
            'total_value': self.total_value,
            'last_updated': _iso(self.last_updated),
            'holdings': [h.to_dict() for h in self.holdings.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Portfolio':
        holdings = {}
        for raw in data.get('holdings', []):
            holding = Holding.from_dict(raw)
            holdings[holding.symbol] = holding
        return cls(
            initial_capital=data.get('initial_capital', 10_000.0),
            cash=data.get('cash'),
            holdings=holdings,
            last_updated=_parse_ts(data.get('last_updated')),
        )

    @classmethod
    def fresh(cls, initial_capital: float) -> 'Portfolio':
        """Default portfolio: all cash, no holdings, never updated."""
        return cls(initial_capital=initial_capital)

    def symbols(self) -> List[str]:
        return list(self.holdings)
