"""
Data module.

Handles market data sources, symbol conventions, universe construction
and market regime detection.
"""

from .alpaca_client import AlpacaClient, BrokerPosition, OrderResult, parse_bars
from .yahoo_client import YahooClient, Quote, clean_bars
from .market_regime import Regime, RegimeClassifier, RegimeReading, classify_regime
from .symbols import (
    AssetClass, AlpacaSymbols, YahooSymbols, get_asset_class,
    is_crypto, is_forex, is_futures, is_24_7, primary_supported,
)
from .universe import (
    UniverseBuilder, is_trading_day, load_symbol_file, dedupe,
    seeded_shuffle, stratified_sample,
)

__all__ = [
    # Sources
    'AlpacaClient', 'BrokerPosition', 'OrderResult', 'parse_bars',
    'YahooClient', 'Quote', 'clean_bars',
    # Regime
    'Regime', 'RegimeClassifier', 'RegimeReading', 'classify_regime',
    # Symbols
    'AssetClass', 'AlpacaSymbols', 'YahooSymbols', 'get_asset_class',
    'is_crypto', 'is_forex', 'is_futures', 'is_24_7', 'primary_supported',
    # Universe
    'UniverseBuilder', 'is_trading_day', 'load_symbol_file', 'dedupe',
    'seeded_shuffle', 'stratified_sample',
]
