"""
Tests for the interval service loop.
"""

import pytest

from adaptive_trader.engine import TradingService
from adaptive_trader.errors import PersistenceError


class ScriptedOrchestrator:
    """Raises the queued exceptions in order, then succeeds."""

    def __init__(self, errors=(), service=None, stop_after=None):
        self.errors = list(errors)
        self.calls = 0
        self.service = service
        self.stop_after = stop_after

    def run_cycle(self, now=None):
        self.calls += 1
        if self.service is not None and self.calls == self.stop_after:
            self.service.stop()
        if self.errors:
            raise self.errors.pop(0)
        return "report"


class TestTradingService:

    def test_run_once_propagates(self):
        service = TradingService(ScriptedOrchestrator([RuntimeError("boom")]), 0)
        with pytest.raises(RuntimeError):
            service.run_once()

    def test_max_cycles(self):
        orchestrator = ScriptedOrchestrator()
        service = TradingService(orchestrator, interval_seconds=0)
        assert service.run_forever(max_cycles=3) == 3
        assert orchestrator.calls == 3
        assert service.failures == 0

    def test_failures_do_not_stop_loop(self):
        orchestrator = ScriptedOrchestrator([PersistenceError("disk"), ValueError("bad")])
        service = TradingService(orchestrator, interval_seconds=0)
        assert service.run_forever(max_cycles=4) == 4
        assert service.failures == 2

    def test_stop_finishes_current_cycle(self):
        orchestrator = ScriptedOrchestrator(stop_after=2)
        service = TradingService(orchestrator, interval_seconds=0)
        orchestrator.service = service
        assert service.run_forever() == 2
        assert service.stopping

    def test_stopped_before_start_runs_nothing(self):
        orchestrator = ScriptedOrchestrator()
        service = TradingService(orchestrator, interval_seconds=0)
        service.stop()
        assert service.run_forever() == 0
        assert orchestrator.calls == 0

    def test_signal_handler_stops(self):
        service = TradingService(ScriptedOrchestrator(), interval_seconds=0)
        service._handle_signal(15, None)
        assert service.stopping
