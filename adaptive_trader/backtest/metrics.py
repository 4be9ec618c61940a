"""
Performance metrics for backtest results.
"""

from typing import List, Sequence

import numpy as np

RISK_FREE_DAILY = 0.05 / 252  # ~5% annual
TRADING_DAYS = 252


def sharpe_ratio(daily_returns: Sequence[float],
                 risk_free: float = RISK_FREE_DAILY,
                 periods_per_year: int = TRADING_DAYS) -> float:
    """
    Annualized Sharpe ratio of daily returns.

    Uses the population standard deviation of excess returns; 0 when
    there are no returns or no variance.
    """
    returns = np.asarray(daily_returns, dtype=float)
    if len(returns) == 0:
        return 0.0
    excess = returns - risk_free
    std = excess.std()  # ddof=0
    if std <= 0:
        return 0.0
    return float(excess.mean() * np.sqrt(periods_per_year) / std)


def max_drawdown(daily_returns: Sequence[float]) -> float:
    """Largest peak-to-trough decline of the compounded curve, as a fraction."""
    value = 1.0
    peak = 1.0
    worst = 0.0
    for r in daily_returns:
        value *= (1 + r)
        peak = max(peak, value)
        worst = max(worst, (peak - value) / peak)
    return worst


def win_rate(wins: int, losses: int) -> float:
    """Win percentage of closed trades (0-100)."""
    total = wins + losses
    return wins / total * 100 if total > 0 else 0.0


def daily_returns_from_values(values: List[float], initial: float) -> List[float]:
    """Day-over-day returns from end-of-day values."""
    returns = []
    previous = initial
    for v in values:
        returns.append((v - previous) / previous if previous > 0 else 0.0)
        previous = v
    return returns
