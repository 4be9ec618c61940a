"""
Indicators module.

Pure technical indicator functions over numpy arrays.
"""

from .technical import (
    MACDResult, BollingerBands, VWAPResult,
    sma, sma_series, ema, ema_series, rsi, macd, bollinger_bands,
    true_range, atr, adx, roc, vwap_zscore,
)

__all__ = [
    'MACDResult', 'BollingerBands', 'VWAPResult',
    'sma', 'sma_series', 'ema', 'ema_series', 'rsi', 'macd',
    'bollinger_bands', 'true_range', 'atr', 'adx', 'roc', 'vwap_zscore',
]
