"""
Symbol classification and per-source symbol normalization.

Canonical symbols use the Yahoo Finance convention:
- Stocks/ETFs: BRK-B
- Crypto: BTC-USD
- Forex: EURUSD=X
- Futures: ES=F

Each data source gets one bidirectional adapter that converts canonical
symbols to its own format and back.
"""

from enum import Enum
from typing import Iterable, Optional, Set


class AssetClass(Enum):
    """Tradable asset classes."""
    STOCK = "stock"
    ETF = "etf"
    CRYPTO = "crypto"
    FOREX = "forex"
    FUTURES = "futures"


def is_crypto(symbol: str) -> bool:
    return symbol.endswith("-USD")


def is_forex(symbol: str) -> bool:
    return symbol.endswith("=X")


def is_futures(symbol: str) -> bool:
    return symbol.endswith("=F")


def is_24_7(symbol: str) -> bool:
    """Crypto trades around the clock; everything else follows a calendar."""
    return is_crypto(symbol)


def get_asset_class(symbol: str, etf_symbols: Optional[Set[str]] = None) -> AssetClass:
    """
    Classify a canonical symbol.

    Args:
        symbol: Canonical symbol
        etf_symbols: Known ETF tickers (stocks otherwise)

    Returns:
        AssetClass
    """
    if is_crypto(symbol):
        return AssetClass.CRYPTO
    if is_forex(symbol):
        return AssetClass.FOREX
    if is_futures(symbol):
        return AssetClass.FUTURES
    if etf_symbols and symbol in etf_symbols:
        return AssetClass.ETF
    return AssetClass.STOCK


def primary_supported(symbol: str) -> bool:
    """Whether the broker data API serves this symbol (equities and crypto)."""
    return not (is_forex(symbol) or is_futures(symbol))


class AlpacaSymbols:
    """
    Canonical <-> Alpaca symbol conversion.

    Stocks use a dot for share classes (BRK.B); crypto uses a slash pair
    (BTC/USD) in market data and a bare pair (BTCUSD) in positions.
    """

    @staticmethod
    def to_provider(symbol: str) -> str:
        if is_crypto(symbol):
            return symbol.replace("-", "/")
        return symbol.replace("-", ".")

    @staticmethod
    def from_provider(symbol: str, crypto: bool = False) -> str:
        """
        Convert an Alpaca symbol back to canonical form.

        Args:
            symbol: Alpaca symbol (BRK.B, BTC/USD or BTCUSD)
            crypto: Set for bare crypto pairs from the positions endpoint
        """
        if "/" in symbol:
            return symbol.replace("/", "-")
        if crypto and symbol.endswith("USD") and "-" not in symbol:
            return f"{symbol[:-3]}-USD"
        return symbol.replace(".", "-")

    @classmethod
    def to_provider_many(cls, symbols: Iterable[str]):
        return [cls.to_provider(s) for s in symbols]


class YahooSymbols:
    """Canonical symbols already follow Yahoo's convention."""

    @staticmethod
    def to_provider(symbol: str) -> str:
        return symbol

    @staticmethod
    def from_provider(symbol: str) -> str:
        return symbol
