"""
Alpaca REST client (market data + paper trading).

Features:
- Batched multi-symbol bar fetch with pagination
- Exponential backoff on HTTP 429 with a bounded retry count
- Fixed delay between pages and batches to stay under the request quota
- Latest trade price, position listing and order submission
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple
import logging
import time

import pandas as pd
import requests

from ..errors import DataSourceError, RateLimitError
from .symbols import AlpacaSymbols, is_crypto

logger = logging.getLogger(__name__)

REJECTED_STATUSES = {"rejected", "canceled", "expired", "suspended"}
# Orders in these states will not fill any further
CLOSED_STATUSES = REJECTED_STATUSES | {"filled", "replaced"}


@dataclass
class BrokerPosition:
    """A position as reported by the broker, with canonical symbol."""
    symbol: str
    qty: float
    avg_entry_price: float
    market_value: float
    asset_class: str


@dataclass
class OrderResult:
    """Outcome of an order submission."""
    accepted: bool
    status: str
    order_id: Optional[str] = None
    filled_qty: float = 0.0
    filled_avg_price: Optional[float] = None
    message: str = ""

    @property
    def is_open(self) -> bool:
        """Accepted but not (fully) filled yet."""
        return self.accepted and self.status not in CLOSED_STATUSES

    @classmethod
    def from_order(cls, data: Dict) -> 'OrderResult':
        status = data.get('status', 'unknown')
        filled_price = data.get('filled_avg_price')
        return cls(
            accepted=status not in REJECTED_STATUSES,
            status=status,
            order_id=data.get('id'),
            filled_qty=float(data.get('filled_qty') or 0),
            filled_avg_price=float(filled_price) if filled_price else None,
        )


def parse_bars(bars: List[Dict]) -> pd.DataFrame:
    """
    Convert Alpaca bar dicts (t/o/h/l/c/v/vw) into an OHLCV DataFrame.

    Raises:
        KeyError, ValueError, TypeError: on a malformed bar payload
    """
    if not bars:
        return pd.DataFrame(columns=['open', 'high', 'low', 'close', 'volume'])
    df = pd.DataFrame(bars).rename(columns={
        't': 'timestamp', 'o': 'open', 'h': 'high', 'l': 'low',
        'c': 'close', 'v': 'volume', 'vw': 'vwap',
    })
    df['timestamp'] = pd.to_datetime(df['timestamp'], utc=True)
    df = df.set_index('timestamp').sort_index()
    columns = [c for c in ['open', 'high', 'low', 'close', 'volume', 'vwap'] if c in df.columns]
    return df[columns].astype(float)


class AlpacaClient:
    """
    Thin REST client for the broker's data and paper-trading APIs.

    All calls use a shared requests.Session with (connect, read) timeouts.
    """

    def __init__(self,
                 api_key: str,
                 secret_key: str,
                 data_url: str = "https://data.alpaca.markets",
                 trading_url: str = "https://paper-api.alpaca.markets",
                 batch_size: int = 50,
                 request_delay: float = 0.35,
                 max_retries: int = 5,
                 page_limit: int = 10_000,
                 timeout: Tuple[float, float] = (5.0, 30.0),
                 session: requests.Session = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Initialize client.

        Args:
            api_key: APCA-API-KEY-ID
            secret_key: APCA-API-SECRET-KEY
            data_url: Market data base URL
            trading_url: Trading base URL (paper)
            batch_size: Symbols per multi-symbol request
            request_delay: Seconds between pages and between batches
            max_retries: Retries on HTTP 429 before giving up
            page_limit: Bars per page
            timeout: (connect, read) timeout in seconds
            session: Optional requests session
            sleep: Sleep function (injectable for tests)
        """
        self.data_url = data_url.rstrip('/')
        self.trading_url = trading_url.rstrip('/')
        self.batch_size = batch_size
        self.request_delay = request_delay
        self.max_retries = max_retries
        self.page_limit = page_limit
        self.timeout = timeout
        self._sleep = sleep

        self.session = session or requests.Session()
        self.session.headers.update({
            'APCA-API-KEY-ID': api_key or '',
            'APCA-API-SECRET-KEY': secret_key or '',
            'Accept': 'application/json',
        })

    # ─────────────────────────────────────────────────────────────
    # HTTP
    # ─────────────────────────────────────────────────────────────

    def _request(self, method: str, url: str, params: Dict = None,
                 json_body: Dict = None) -> requests.Response:
        """Send a request, backing off 2^(n+1) seconds on each 429."""
        retries = 0
        while True:
            try:
                response = self.session.request(
                    method, url, params=params, json=json_body, timeout=self.timeout
                )
            except requests.RequestException as e:
                raise DataSourceError(f"{method} {url} failed: {e}") from e

            if response.status_code != 429:
                return response
            if retries >= self.max_retries:
                raise RateLimitError(f"Rate limited after {retries} retries: {url}", 429)

            backoff = 2 ** (retries + 1)
            logger.warning(f"Rate limited, backing off {backoff}s (retry {retries + 1}/{self.max_retries})")
            self._sleep(backoff)
            retries += 1

    def _get_json(self, url: str, params: Dict = None) -> Dict:
        response = self._request('GET', url, params=params)
        if not response.ok:
            raise DataSourceError(
                f"GET {url} returned {response.status_code}: {response.text[:200]}",
                response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise DataSourceError(f"Malformed JSON from {url}") from e

    # ─────────────────────────────────────────────────────────────
    # MARKET DATA
    # ─────────────────────────────────────────────────────────────

    def fetch_bars(self, symbols: List[str], timeframe: str,
                   start: datetime) -> Dict[str, pd.DataFrame]:
        """
        Fetch bars for many symbols.

        Stocks and crypto go to their own endpoints. A failed batch is
        logged and its symbols are simply missing from the result.

        Args:
            symbols: Canonical symbols
            timeframe: Alpaca timeframe ('5Min', '1Day', ...)
            start: Earliest bar time

        Returns:
            Dictionary mapping canonical symbol to OHLCV DataFrame
        """
        crypto = [s for s in symbols if is_crypto(s)]
        stocks = [s for s in symbols if not is_crypto(s)]

        results: Dict[str, pd.DataFrame] = {}
        if stocks:
            results.update(self._fetch_group(stocks, timeframe, start, crypto=False))
        if crypto:
            results.update(self._fetch_group(crypto, timeframe, start, crypto=True))
        return results

    def _fetch_group(self, symbols: List[str], timeframe: str, start: datetime,
                     crypto: bool) -> Dict[str, pd.DataFrame]:
        endpoint = (f"{self.data_url}/v1beta3/crypto/us/bars" if crypto
                    else f"{self.data_url}/v2/stocks/bars")
        results = {}

        for i in range(0, len(symbols), self.batch_size):
            batch = symbols[i:i + self.batch_size]
            try:
                raw = self._fetch_batch(endpoint, batch, timeframe, start)
            except DataSourceError as e:
                logger.warning(f"Bar batch {i // self.batch_size + 1} failed ({len(batch)} symbols): {e}")
                raw = {}

            for provider_symbol, bars in raw.items():
                if not bars:
                    continue
                symbol = AlpacaSymbols.from_provider(provider_symbol)
                try:
                    results[symbol] = parse_bars(bars)
                except (KeyError, ValueError, TypeError) as e:
                    logger.warning(f"Skipping {symbol}: malformed bars ({e})")

            if i + self.batch_size < len(symbols):
                self._sleep(self.request_delay)

        return results

    def _fetch_batch(self, endpoint: str, batch: List[str], timeframe: str,
                     start: datetime) -> Dict[str, List[Dict]]:
        """Follow next_page_token until exhausted."""
        params = {
            'symbols': ','.join(AlpacaSymbols.to_provider_many(batch)),
            'timeframe': timeframe,
            'start': start.strftime('%Y-%m-%dT%H:%M:%SZ'),
            'limit': self.page_limit,
        }
        collected: Dict[str, List[Dict]] = {}
        page = 0

        while True:
            if page > 0:
                self._sleep(self.request_delay)
            data = self._get_json(endpoint, params)
            for sym, bars in (data.get('bars') or {}).items():
                collected.setdefault(sym, []).extend(bars or [])
            page += 1

            token = data.get('next_page_token')
            if not token:
                break
            params['page_token'] = token

        logger.debug(f"Fetched {sum(len(b) for b in collected.values())} bars in {page} page(s)")
        return collected

    def get_latest_quote(self, symbol: str) -> Optional[float]:
        """Latest trade price, or None if unavailable."""
        provider = AlpacaSymbols.to_provider(symbol)
        try:
            if is_crypto(symbol):
                data = self._get_json(f"{self.data_url}/v1beta3/crypto/us/latest/trades",
                                      {'symbols': provider})
                trade = (data.get('trades') or {}).get(provider) or {}
            else:
                data = self._get_json(f"{self.data_url}/v2/stocks/{provider}/trades/latest")
                trade = data.get('trade') or {}
        except DataSourceError as e:
            logger.warning(f"Latest price for {symbol} unavailable: {e}")
            return None
        price = trade.get('p')
        return float(price) if price else None

    # ─────────────────────────────────────────────────────────────
    # TRADING
    # ─────────────────────────────────────────────────────────────

    def list_positions(self) -> List[BrokerPosition]:
        """
        Open positions at the broker.

        Raises:
            DataSourceError: when the broker cannot be reached
        """
        data = self._get_json(f"{self.trading_url}/v2/positions")
        positions = []
        for p in data or []:
            asset_class = p.get('asset_class', 'us_equity')
            positions.append(BrokerPosition(
                symbol=AlpacaSymbols.from_provider(p['symbol'], crypto=asset_class == 'crypto'),
                qty=float(p.get('qty', 0)),
                avg_entry_price=float(p.get('avg_entry_price', 0)),
                market_value=float(p.get('market_value', 0)),
                asset_class=asset_class,
            ))
        return positions

    def submit_order(self, symbol: str, qty: float, side: str,
                     order_type: str = 'market',
                     time_in_force: str = None) -> OrderResult:
        """
        Submit an order and report acceptance synchronously.

        Args:
            symbol: Canonical symbol
            qty: Quantity (fractional allowed)
            side: 'buy' or 'sell'
            order_type: Order type
            time_in_force: Defaults to 'gtc' for crypto, 'day' otherwise

        Returns:
            OrderResult (never raises for broker-side rejections)
        """
        if time_in_force is None:
            time_in_force = 'gtc' if is_crypto(symbol) else 'day'

        body = {
            'symbol': AlpacaSymbols.to_provider(symbol),
            'qty': str(qty),
            'side': side.lower(),
            'type': order_type,
            'time_in_force': time_in_force,
        }
        try:
            response = self._request('POST', f"{self.trading_url}/v2/orders", json_body=body)
        except DataSourceError as e:
            return OrderResult(accepted=False, status='error', message=str(e))

        if not response.ok:
            return OrderResult(accepted=False, status='rejected',
                               message=f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            data = response.json()
        except ValueError:
            return OrderResult(accepted=False, status='error', message="Malformed order response")

        return OrderResult.from_order(data)

    def get_order(self, order_id: str) -> OrderResult:
        """
        Current state of a submitted order.

        Raises:
            DataSourceError: when the broker cannot be reached or the
                order is unknown
        """
        data = self._get_json(f"{self.trading_url}/v2/orders/{order_id}")
        return OrderResult.from_order(data)
