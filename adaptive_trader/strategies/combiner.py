"""
Signal Combiner module.

Blends the trend and reversion strategy families with regime-dependent
weights and maps the blended score to a recommendation.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple
import logging

import pandas as pd

from ..data.market_regime import Regime, RegimeClassifier
from ..indicators import atr
from .signals import (
    StrategySignal, StrategyParams, SignalSnapshot, Recommendation, clamp,
)
from .trend import trend_momentum, macd_trend, MACD_TREND
from .reversion import (
    bollinger_rsi_reversion, vwap_reversion, BOLLINGER_RSI, VWAP_REVERSION,
)

logger = logging.getLogger(__name__)


# Trending regimes favor trend-following; range-bound favors reversion
DEFAULT_REGIME_WEIGHTS: Dict[str, Dict[str, float]] = {
    Regime.TRENDING_UP.value: {"trend": 0.80, "reversion": 0.20},
    Regime.TRENDING_DOWN.value: {"trend": 0.80, "reversion": 0.20},
    Regime.RANGE_BOUND.value: {"trend": 0.20, "reversion": 0.80},
    Regime.UNKNOWN.value: {"trend": 0.50, "reversion": 0.50},
}


def default_regime_weights() -> Dict[str, Dict[str, float]]:
    """Fresh copy of the default weight table."""
    return {regime: dict(w) for regime, w in DEFAULT_REGIME_WEIGHTS.items()}


def group_score(signals: List[StrategySignal]) -> float:
    """Confidence-weighted mean score; 0 when no signal has confidence."""
    total_confidence = sum(s.confidence for s in signals if s.confidence > 0)
    if total_confidence <= 0:
        return 0.0
    return sum(s.score * s.confidence for s in signals if s.confidence > 0) / total_confidence


class SignalCombiner:
    """
    Runs the four strategy generators for one symbol and blends them.

    Thresholds:
    - combined > strong_buy  -> STRONG_BUY
    - combined > buy         -> BUY
    - combined < strong_sell -> STRONG_SELL
    - combined < sell        -> SELL
    - otherwise HOLD
    """

    def __init__(self,
                 classifier: RegimeClassifier = None,
                 buy_threshold: float = 0.35,
                 strong_buy_threshold: float = 0.55,
                 sell_threshold: float = -0.35,
                 strong_sell_threshold: float = -0.55,
                 intraday_window: int = 80,
                 vwap_window: int = 78):
        self.classifier = classifier or RegimeClassifier()
        self.buy_threshold = buy_threshold
        self.strong_buy_threshold = strong_buy_threshold
        self.sell_threshold = sell_threshold
        self.strong_sell_threshold = strong_sell_threshold
        self.intraday_window = intraday_window
        self.vwap_window = vwap_window

    def recommend(self, combined: float) -> Recommendation:
        """Map a combined score to a recommendation."""
        if combined > self.strong_buy_threshold:
            return Recommendation.STRONG_BUY
        if combined > self.buy_threshold:
            return Recommendation.BUY
        if combined < self.strong_sell_threshold:
            return Recommendation.STRONG_SELL
        if combined < self.sell_threshold:
            return Recommendation.SELL
        return Recommendation.HOLD

    def combine(self,
                trend_signals: List[StrategySignal],
                reversion_signals: List[StrategySignal],
                regime: Regime,
                weights: Optional[Dict[str, Dict[str, float]]] = None
                ) -> Tuple[float, float, float, Recommendation]:
        """
        Blend both strategy families.

        Args:
            trend_signals: Trend-family signals
            reversion_signals: Reversion-family signals
            regime: Current regime
            weights: Learned regime weights; defaults when None

        Returns:
            Tuple of (trend_score, reversion_score, combined, recommendation)
        """
        table = weights or DEFAULT_REGIME_WEIGHTS
        regime_weights = table.get(regime.value) or DEFAULT_REGIME_WEIGHTS[regime.value]

        trend = group_score(trend_signals)
        reversion = group_score(reversion_signals)
        combined = clamp(trend * regime_weights["trend"]
                         + reversion * regime_weights["reversion"])
        return trend, reversion, combined, self.recommend(combined)

    def analyze(self,
                symbol: str,
                daily: Optional[pd.DataFrame],
                intraday: Optional[pd.DataFrame],
                params: StrategyParams = None,
                weights: Optional[Dict[str, Dict[str, float]]] = None,
                now: datetime = None) -> Optional[SignalSnapshot]:
        """
        Produce the SignalSnapshot for one symbol.

        Args:
            symbol: Canonical symbol
            daily: Daily OHLCV bars (may be None)
            intraday: Intraday OHLCV bars (may be None)
            params: Strategy parameters
            weights: Learned regime weights
            now: Snapshot timestamp

        Returns:
            SignalSnapshot, or None when there is no price data at all
        """
        params = params or StrategyParams()
        now = now or datetime.now(timezone.utc)

        has_daily = daily is not None and len(daily) > 0
        has_intraday = intraday is not None and len(intraday) > 0
        if not has_daily and not has_intraday:
            return None

        regime = self.classifier.classify(daily) if has_daily else Regime.UNKNOWN
        daily_closes = daily['close'].values if has_daily else []

        if has_intraday:
            recent = intraday.iloc[-self.intraday_window:]
            closes = recent['close'].values
            tm = trend_momentum(daily_closes, closes, params)
            mt = macd_trend(closes)
            bb = bollinger_rsi_reversion(closes, params)
            vw = vwap_reversion(recent['high'].values, recent['low'].values,
                                closes, recent['volume'].values, self.vwap_window)
            price = float(closes[-1])
            atr_value = atr(recent['high'].values, recent['low'].values, closes, 14)
        else:
            tm = trend_momentum(daily_closes, None, params)
            mt = StrategySignal.unavailable(MACD_TREND, "No intraday data")
            bb = StrategySignal.unavailable(BOLLINGER_RSI, "No intraday data")
            vw = StrategySignal.unavailable(VWAP_REVERSION, "No intraday data")
            price = float(daily_closes[-1])
            atr_value = None

        if atr_value is None and has_daily:
            atr_value = atr(daily['high'].values, daily['low'].values, daily_closes, 14)

        trend, reversion, combined, recommendation = self.combine(
            [tm, mt], [bb, vw], regime, weights
        )

        logger.debug(f"{symbol}: {regime.value} combined={combined:+.3f} {recommendation.value}")

        return SignalSnapshot(
            symbol=symbol,
            timestamp=now,
            trend_momentum=tm,
            macd_trend=mt,
            bollinger_rsi=bb,
            vwap_reversion=vw,
            trend_score=trend,
            reversion_score=reversion,
            combined=combined,
            recommendation=recommendation,
            regime=regime.value,
            price=price,
            atr=atr_value,
        )
