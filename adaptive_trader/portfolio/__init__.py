"""
Portfolio module.

Cash, holdings and trade records.
"""

from .portfolio import Portfolio, Holding, Trade, TradeAction

__all__ = ['Portfolio', 'Holding', 'Trade', 'TradeAction']
