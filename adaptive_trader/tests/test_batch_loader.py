"""
Tests for chunked fetching, source routing and per-symbol isolation.
"""

import pytest

from adaptive_trader.config import DataConfig
from adaptive_trader.data import AlpacaClient
from adaptive_trader.engine import BatchLoader, ChunkResult
from adaptive_trader.strategies import SignalCombiner
from adaptive_trader.tests.helpers import (
    NOW, FakePrimary, FakeSecondary, rising_daily, rising_intraday,
)
from adaptive_trader.tests.test_alpaca_client import FakeResponse, FakeSession


class ExplodingCombiner(SignalCombiner):
    """Raises for one symbol, analyzes the rest normally."""

    def __init__(self, bad_symbol):
        super().__init__()
        self.bad_symbol = bad_symbol

    def analyze(self, symbol, *args, **kwargs):
        if symbol == self.bad_symbol:
            raise RuntimeError("corrupt bars")
        return super().analyze(symbol, *args, **kwargs)


class BrokenPrimary(FakePrimary):
    """Fails with an error that is not a DataSourceError."""

    def fetch_bars(self, symbols, timeframe, start):
        raise RuntimeError("unexpected payload shape")


def _bars(*symbols):
    return {s: rising_daily() for s in symbols}, {s: rising_intraday() for s in symbols}


class TestChunking:

    def test_holdings_first_and_bounded(self):
        loader = BatchLoader(SignalCombiner(), config=DataConfig(chunk_size=2))
        chunks = list(loader.iter_chunks(["A", "B", "C", "D"], holdings=["D", "Z"]))
        assert chunks == [["D", "Z"], ["A", "B"], ["C"]]

    def test_merge(self):
        a = ChunkResult(prices={"A": 1.0}, failed=["X"])
        a.merge(ChunkResult(prices={"B": 2.0}, failed=["Y"]))
        assert a.prices == {"A": 1.0, "B": 2.0}
        assert a.failed == ["X", "Y"]


class TestRouting:

    def test_forex_goes_to_secondary(self):
        daily, intraday = _bars("AAPL", "EURUSD=X")
        primary = FakePrimary({'1Day': {"AAPL": daily["AAPL"]},
                               '5Min': {"AAPL": intraday["AAPL"]}})
        secondary = FakeSecondary(daily={"EURUSD=X": daily["EURUSD=X"]},
                                  intraday={"EURUSD=X": intraday["EURUSD=X"]})
        loader = BatchLoader(SignalCombiner(), primary, secondary)

        result = loader.load(["AAPL", "EURUSD=X"], now=NOW)

        assert set(result.snapshots) == {"AAPL", "EURUSD=X"}
        assert all("EURUSD=X" not in syms for syms, _ in primary.requests)
        assert secondary.intraday_requests == [["EURUSD=X"]]

    def test_everything_secondary_without_primary(self):
        daily, intraday = _bars("AAPL", "BTC-USD")
        secondary = FakeSecondary(daily=daily, intraday=intraday)
        result = BatchLoader(SignalCombiner(), None, secondary).load(["AAPL", "BTC-USD"], now=NOW)
        assert set(result.snapshots) == {"AAPL", "BTC-USD"}
        assert result.prices["AAPL"] == pytest.approx(intraday["AAPL"]['close'].iloc[-1])
        assert result.snapshots["AAPL"].atr > 0

    def test_primary_failure_falls_back_for_daily(self):
        daily, _ = _bars("AAPL")
        secondary = FakeSecondary(daily=daily)
        loader = BatchLoader(SignalCombiner(), FakePrimary(fail=True), secondary)

        result = loader.load(["AAPL"], now=NOW)

        assert secondary.daily_requests[-1] == ["AAPL"]
        assert "AAPL" in result.snapshots
        assert result.snapshots["AAPL"].price == pytest.approx(daily["AAPL"]['close'].iloc[-1])


class TestIsolation:

    def test_failing_symbol_recorded(self):
        daily, intraday = _bars("AAPL", "MSFT")
        loader = BatchLoader(ExplodingCombiner("AAPL"), None,
                             FakeSecondary(daily=daily, intraday=intraday))
        result = loader.load(["AAPL", "MSFT"], now=NOW)
        assert result.failed == ["AAPL"]
        assert set(result.snapshots) == {"MSFT"}

    def test_symbol_without_data_is_failed(self):
        daily, intraday = _bars("AAPL")
        loader = BatchLoader(SignalCombiner(), None, FakeSecondary(daily=daily, intraday=intraday))
        result = loader.load(["AAPL", "NODATA"], now=NOW)
        assert result.failed == ["NODATA"]

    def test_malformed_primary_payload_degrades_to_no_signal(self):
        bad = {'bars': {'AAPL': [{'timestamp': "x", 'close': 1.0}]}}
        session = FakeSession([FakeResponse(200, bad), FakeResponse(200, bad)])
        client = AlpacaClient("key", "secret", session=session, sleep=lambda s: None)

        result = BatchLoader(SignalCombiner(), client).load(["AAPL", "MSFT"], now=NOW)

        assert result.snapshots == {}
        assert sorted(result.failed) == ["AAPL", "MSFT"]

    def test_unexpected_primary_error_degrades_to_no_signal(self):
        daily, intraday = _bars("MSFT")
        secondary = FakeSecondary(daily=daily, intraday=intraday)
        loader = BatchLoader(SignalCombiner(), BrokenPrimary(), secondary)

        result = loader.load(["AAPL", "MSFT"], now=NOW)

        assert result.failed == ["AAPL"]
        assert "MSFT" in result.snapshots
