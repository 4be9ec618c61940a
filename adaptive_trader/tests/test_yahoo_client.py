"""
Tests for the yfinance source with a stubbed Ticker.
"""

from datetime import datetime

import numpy as np
import pandas as pd
import pytest
import pytz

from adaptive_trader.data import YahooClient, clean_bars
from adaptive_trader.data import yahoo_client
from adaptive_trader.data.yahoo_client import is_extended_hours


def _raw_frame(closes, start="2024-03-06 14:30", freq="5min", tz="UTC"):
    index = pd.date_range(start, periods=len(closes), freq=freq, tz=tz)
    closes = np.asarray(closes, dtype=float)
    return pd.DataFrame({'Open': closes, 'High': closes + 1, 'Low': closes - 1,
                         'Close': closes, 'Volume': 100.0}, index=index)


class FakeTicker:
    frames = {}

    def __init__(self, symbol):
        self.symbol = symbol

    def history(self, period=None, interval=None, **kwargs):
        frame = self.frames.get(self.symbol)
        if isinstance(frame, Exception):
            raise frame
        return frame if frame is not None else pd.DataFrame()


@pytest.fixture
def ticker(monkeypatch):
    FakeTicker.frames = {}
    monkeypatch.setattr(yahoo_client.yf, "Ticker", FakeTicker)
    return FakeTicker


class TestCleanBars:

    def test_standardizes_columns_and_index(self):
        raw = _raw_frame([3.0, 1.0, 2.0], tz="America/New_York").iloc[::-1]
        df = clean_bars(raw)
        assert list(df.columns) == ['open', 'high', 'low', 'close', 'volume']
        assert str(df.index.tz) == "UTC"
        assert df.index.is_monotonic_increasing

    def test_drops_bad_rows_and_duplicates(self):
        raw = _raw_frame([1.0, 2.0, 3.0])
        raw.iloc[1, raw.columns.get_loc('Close')] = np.nan
        raw = pd.concat([raw, raw.iloc[[0]]])
        df = clean_bars(raw)
        assert list(df['close']) == [1.0, 3.0]

    def test_empty_or_missing_columns(self):
        assert clean_bars(None) is None
        assert clean_bars(pd.DataFrame()) is None
        assert clean_bars(_raw_frame([1.0]).drop(columns=['Volume'])) is None


class TestExtendedHours:

    def test_regular_session(self):
        ny = pytz.timezone("America/New_York")
        assert not is_extended_hours("AAPL", ny.localize(datetime(2024, 3, 6, 10, 0)))
        assert is_extended_hours("AAPL", ny.localize(datetime(2024, 3, 6, 8, 0)))
        assert is_extended_hours("AAPL", ny.localize(datetime(2024, 3, 6, 16, 0)))

    def test_crypto_never_extended(self):
        ny = pytz.timezone("America/New_York")
        assert not is_extended_hours("BTC-USD", ny.localize(datetime(2024, 3, 6, 3, 0)))


class TestYahooClient:

    def test_fetch_many_omits_failures(self, ticker):
        ticker.frames = {"AAPL": _raw_frame([1.0, 2.0]), "BAD": RuntimeError("404")}
        sleeps = []
        client = YahooClient(batch_size=1, sleep=sleeps.append, batch_delay=0.2)
        result = client.fetch_many(["AAPL", "BAD", "EMPTY"])
        assert list(result) == ["AAPL"]
        assert sleeps == [0.2, 0.2]

    def test_quote_from_last_bar(self, ticker):
        ticker.frames = {"AAPL": _raw_frame([1.0, 2.5], start="2024-03-06 22:00")}
        quote = YahooClient().get_quote("AAPL")
        assert quote.price == 2.5
        assert quote.is_extended_hours

    def test_quote_missing(self, ticker):
        assert YahooClient().get_quote("NONE") is None

    def test_benchmark_scaled_to_capital(self, ticker):
        ticker.frames = {"SPY": _raw_frame([400.0, 410.0, 380.0], freq="1h")}
        points = YahooClient().fetch_benchmark("SPY", 90, 10_000)
        assert [p['value'] for p in points] == [10_000.0, 10_250.0, 9_500.0]
        assert points[0]['timestamp'].startswith("2024-03-06T14:30")

    def test_benchmark_unavailable(self, ticker):
        assert YahooClient().fetch_benchmark("SPY") == []
