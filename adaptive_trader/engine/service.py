"""
Trading service loop.

Runs cycles back to back on a fixed interval. Cycles never overlap: the
next one starts after the previous finished or the interval elapsed,
whichever is later. SIGINT/SIGTERM stop scheduling; an in-flight cycle
always runs to completion.
"""

from typing import Optional
import logging
import signal
import threading
import time

from ..errors import PersistenceError
from .cycle import CycleOrchestrator, CycleReport

logger = logging.getLogger(__name__)


class TradingService:
    """Interval scheduler around a CycleOrchestrator."""

    def __init__(self, orchestrator: CycleOrchestrator, interval_seconds: float = 600.0):
        self.orchestrator = orchestrator
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()
        self.cycles_run = 0
        self.failures = 0

    def install_signal_handlers(self):
        """Route SIGINT/SIGTERM to a graceful stop. Main thread only."""
        signal.signal(signal.SIGINT, self._handle_signal)
        signal.signal(signal.SIGTERM, self._handle_signal)

    def _handle_signal(self, signum, frame):
        logger.info(f"Received signal {signum}, finishing current cycle then stopping")
        self.stop()

    def stop(self):
        self._stop.set()

    @property
    def stopping(self) -> bool:
        return self._stop.is_set()

    def run_once(self) -> CycleReport:
        """Single cycle. Errors propagate to the caller."""
        report = self.orchestrator.run_cycle()
        self.cycles_run += 1
        return report

    def run_forever(self, max_cycles: Optional[int] = None) -> int:
        """
        Run cycles until stopped.

        Args:
            max_cycles: Stop after this many cycles (None = unbounded)

        Returns:
            Number of cycles run
        """
        logger.info(f"Service started, interval {self.interval_seconds:.0f}s")

        while not self._stop.is_set():
            started = time.monotonic()
            try:
                self.run_once()
            except PersistenceError as e:
                self.failures += 1
                self.cycles_run += 1
                logger.error(f"Cycle state not fully persisted: {e}")
            except Exception as e:
                self.failures += 1
                self.cycles_run += 1
                logger.exception(f"Cycle failed: {e}")

            if max_cycles is not None and self.cycles_run >= max_cycles:
                break

            elapsed = time.monotonic() - started
            wait = max(0.0, self.interval_seconds - elapsed)
            if wait > 0:
                logger.info(f"Next cycle in {wait:.0f}s")
            self._stop.wait(wait)

        logger.info(f"Service stopped after {self.cycles_run} cycles ({self.failures} failed)")
        return self.cycles_run
