"""
Signal types shared by the strategy generators, the combiner and the
portfolio ledger.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Any


class Recommendation(Enum):
    """Recommendation derived from the combined score."""
    STRONG_BUY = "STRONG_BUY"
    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"
    STRONG_SELL = "STRONG_SELL"


def clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class StrategySignal:
    """Output of a single strategy generator. Score and confidence are clamped."""
    name: str
    score: float
    confidence: float
    reason: str = ""

    def __post_init__(self):
        object.__setattr__(self, 'score', clamp(float(self.score)))
        object.__setattr__(self, 'confidence', clamp(float(self.confidence), 0.0, 1.0))

    @classmethod
    def unavailable(cls, name: str, reason: str = "Insufficient data") -> "StrategySignal":
        return cls(name=name, score=0.0, confidence=0.0, reason=reason)

    def to_dict(self) -> Dict:
        return {
            'name': self.name,
            'score': self.score,
            'confidence': self.confidence,
            'reason': self.reason,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "StrategySignal":
        return cls(
            name=data.get('name', ''),
            score=data.get('score', 0.0),
            confidence=data.get('confidence', 0.0),
            reason=data.get('reason', ''),
        )


@dataclass(frozen=True)
class StrategyParams:
    """Tunable strategy parameters (a subset of the learning registry)."""
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    sma_short: int = 10
    sma_long: int = 50
    bollinger_std_dev: float = 2.0

    @classmethod
    def from_params(cls, params: Dict[str, float]) -> "StrategyParams":
        """Build from a learning-state parameter map, ignoring other keys."""
        defaults = cls()
        return cls(
            rsi_oversold=float(params.get('rsi_oversold', defaults.rsi_oversold)),
            rsi_overbought=float(params.get('rsi_overbought', defaults.rsi_overbought)),
            sma_short=int(round(params.get('sma_short', defaults.sma_short))),
            sma_long=int(round(params.get('sma_long', defaults.sma_long))),
            bollinger_std_dev=float(params.get('bollinger_std_dev', defaults.bollinger_std_dev)),
        )


@dataclass
class SignalSnapshot:
    """All strategy output for one symbol in one cycle."""
    symbol: str
    timestamp: datetime
    trend_momentum: StrategySignal
    macd_trend: StrategySignal
    bollinger_rsi: StrategySignal
    vwap_reversion: StrategySignal
    trend_score: float
    reversion_score: float
    combined: float
    recommendation: Recommendation
    regime: str
    price: Optional[float] = None
    atr: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def trend_signals(self):
        return [self.trend_momentum, self.macd_trend]

    @property
    def reversion_signals(self):
        return [self.bollinger_rsi, self.vwap_reversion]

    def to_dict(self) -> Dict:
        """Convert to a JSON-safe dictionary."""
        return {
            'symbol': self.symbol,
            'timestamp': self.timestamp.isoformat(),
            'trend_momentum': self.trend_momentum.to_dict(),
            'macd_trend': self.macd_trend.to_dict(),
            'bollinger_rsi': self.bollinger_rsi.to_dict(),
            'vwap_reversion': self.vwap_reversion.to_dict(),
            'trend_score': self.trend_score,
            'reversion_score': self.reversion_score,
            'combined': self.combined,
            'recommendation': self.recommendation.value,
            'regime': self.regime,
            'price': self.price,
            'atr': self.atr,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "SignalSnapshot":
        return cls(
            symbol=data['symbol'],
            timestamp=datetime.fromisoformat(data['timestamp']),
            trend_momentum=StrategySignal.from_dict(data.get('trend_momentum', {})),
            macd_trend=StrategySignal.from_dict(data.get('macd_trend', {})),
            bollinger_rsi=StrategySignal.from_dict(data.get('bollinger_rsi', {})),
            vwap_reversion=StrategySignal.from_dict(data.get('vwap_reversion', {})),
            trend_score=data.get('trend_score', 0.0),
            reversion_score=data.get('reversion_score', 0.0),
            combined=data.get('combined', 0.0),
            recommendation=Recommendation(data.get('recommendation', 'HOLD')),
            regime=data.get('regime', 'UNKNOWN'),
            price=data.get('price'),
            atr=data.get('atr'),
        )
