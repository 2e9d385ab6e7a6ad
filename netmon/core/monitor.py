"""Periodic orchestration of data collectors."""

from __future__ import annotations

import logging
import threading
import time
from typing import Iterable, List

from ..collectors.base import BaseCollector, CollectorError
from ..rotation import RotatingWriter

LOGGER = logging.getLogger(__name__)

SOURCE = "NetworkMonitor"


class NetworkMonitor:
    """Run registered collectors at a fixed rate on a background thread.

    The monitor only borrows the writer; whoever created the writer is
    responsible for closing it after :meth:`stop`.
    """

    def __init__(
        self,
        writer: RotatingWriter,
        collectors: Iterable[BaseCollector] | None = None,
    ) -> None:
        self.writer = writer
        self._collectors: List[BaseCollector] = []
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self.cycles = 0
        for collector in collectors or ():
            self.add_collector(collector)

    @property
    def collectors(self) -> List[BaseCollector]:
        return list(self._collectors)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def add_collector(self, collector: BaseCollector) -> None:
        if not collector.name:
            raise CollectorError("Collector must define a name")
        if any(existing.name == collector.name for existing in self._collectors):
            raise CollectorError(f"Collector '{collector.name}' already registered")
        self._collectors.append(collector)
        self.writer.info(f"Registered data collector: {collector.name}", SOURCE)

    # ------------------------------------------------------------------
    def run_cycle(self) -> None:
        """Run every collector once, recording failures instead of raising."""

        self.writer.debug("Starting data collection cycle.", SOURCE)
        for collector in self._collectors:
            try:
                collector.collect(self.writer)
            except Exception as exc:  # noqa: BLE001 - one collector must not stop the others
                LOGGER.debug("Collector %s failed", collector.name, exc_info=True)
                self.writer.error(
                    f"Error during data collection from {collector.name}: {exc}",
                    SOURCE,
                )
        self.cycles += 1
        self.writer.debug("Data collection cycle finished.", SOURCE)

    def start(self, initial_delay: float, interval: float) -> bool:
        """Begin collecting every ``interval`` seconds after ``initial_delay``.

        Returns ``False`` without starting when no collectors are registered
        or the monitor is already running.
        """

        if not self._collectors:
            self.writer.warning("No data collectors registered. Monitoring will not start.", SOURCE)
            return False
        if self.running:
            LOGGER.debug("Monitor already running; ignoring start request")
            return False
        if interval <= 0:
            raise ValueError("Collection interval must be positive")

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            args=(max(0.0, initial_delay), interval),
            name="netmon-scheduler",
            daemon=True,
        )
        self._thread.start()
        self.writer.info(
            f"Network monitoring started. Collection interval: {interval:g} seconds.",
            SOURCE,
        )
        return True

    def stop(self, timeout: float = 5.0) -> bool:
        """Stop the scheduler thread; returns ``True`` if it exited in time."""

        self.writer.info("Attempting to stop network monitoring...", SOURCE)
        self._stop_event.set()
        thread, self._thread = self._thread, None
        graceful = True
        if thread is not None:
            thread.join(timeout)
            graceful = not thread.is_alive()
            if graceful:
                self.writer.info("Scheduler terminated gracefully.", SOURCE)
            else:
                self.writer.warning("Scheduler did not terminate within timeout.", SOURCE)
        self.writer.info("Network monitoring stopped.", SOURCE)
        return graceful

    # ------------------------------------------------------------------
    def _run(self, initial_delay: float, interval: float) -> None:
        if self._stop_event.wait(initial_delay):
            return
        next_run = time.monotonic()
        while True:
            self.run_cycle()
            next_run += interval
            if self._stop_event.wait(max(0.0, next_run - time.monotonic())):
                return


__all__ = ["NetworkMonitor"]
