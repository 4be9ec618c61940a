"""
Backtest module.

Provides:
- Intraday replay of the live trading cycle
- Sharpe, drawdown and win-rate metrics
"""

from .engine import (
    IntradayBacktester, BacktestConfig, BacktestResult, ReplayLoader, ReplayUniverse,
)
from .metrics import sharpe_ratio, max_drawdown, win_rate, daily_returns_from_values

__all__ = [
    'IntradayBacktester',
    'BacktestConfig',
    'BacktestResult',
    'ReplayLoader',
    'ReplayUniverse',
    'sharpe_ratio',
    'max_drawdown',
    'win_rate',
    'daily_returns_from_values',
]
