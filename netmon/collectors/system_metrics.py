"""Memory and network interface metrics sampled with psutil."""

from __future__ import annotations

from typing import Any, Callable

import psutil

from ..rotation import RotatingWriter
from ..rotation.policy import MEGABYTE
from .base import BaseCollector

DEFAULT_MEMORY_WARNING_PERCENT = 90.0

_FAULT_COUNTERS = ("errin", "errout", "dropin", "dropout")


class SystemMetricsCollector(BaseCollector):
    """Log memory usage and aggregate network counters on every cycle."""

    name = "SystemMetricsCollector"

    def __init__(
        self,
        *,
        memory_warning_percent: float = DEFAULT_MEMORY_WARNING_PERCENT,
        memory_sampler: Callable[[], Any] | None = None,
        network_sampler: Callable[[], Any] | None = None,
    ) -> None:
        self.memory_warning_percent = memory_warning_percent
        self._memory_sampler = memory_sampler or psutil.virtual_memory
        self._network_sampler = network_sampler or psutil.net_io_counters
        self._previous_faults: dict | None = None

    def collect(self, writer: RotatingWriter) -> None:
        self._collect_memory(writer)
        self._collect_network(writer)

    def _collect_memory(self, writer: RotatingWriter) -> None:
        memory = self._memory_sampler()
        writer.info(
            "Memory usage: used=%d MB, available=%d MB, total=%d MB (%.1f%%)"
            % (
                memory.used // MEGABYTE,
                memory.available // MEGABYTE,
                memory.total // MEGABYTE,
                memory.percent,
            ),
            self.name,
        )
        if memory.percent >= self.memory_warning_percent:
            writer.warning(
                f"High memory usage: {memory.percent:.1f}% "
                f"(threshold {self.memory_warning_percent:.1f}%)",
                self.name,
            )

    def _collect_network(self, writer: RotatingWriter) -> None:
        counters = self._network_sampler()
        if counters is None:
            writer.debug("No network interfaces reported", self.name)
            return

        writer.debug(
            f"Network counters: bytes_sent={counters.bytes_sent}, "
            f"bytes_recv={counters.bytes_recv}, packets_sent={counters.packets_sent}, "
            f"packets_recv={counters.packets_recv}",
            self.name,
        )

        faults = {key: getattr(counters, key, 0) for key in _FAULT_COUNTERS}
        previous, self._previous_faults = self._previous_faults, faults
        if previous is None:
            return
        grown = {key: faults[key] - previous[key] for key in _FAULT_COUNTERS if faults[key] > previous[key]}
        if grown:
            details = ", ".join(f"{key}+{delta}" for key, delta in sorted(grown.items()))
            writer.warning(f"Network interface faults increased: {details}", self.name)


__all__ = ["SystemMetricsCollector"]
