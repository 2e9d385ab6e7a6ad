"""Collector interface used by the network monitor."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..rotation import RotatingWriter


class CollectorError(RuntimeError):
    """Raised when collector registration or sampling fails."""


class BaseCollector(ABC):
    """Base class for periodic data collectors.

    Collectors receive the shared writer on every cycle and log whatever they
    sampled through it. Exceptions escaping :meth:`collect` are caught by the
    monitor and recorded as ERROR records.
    """

    name: str = ""

    @abstractmethod
    def collect(self, writer: RotatingWriter) -> None:
        """Sample data and log it through ``writer``."""


__all__ = ["BaseCollector", "CollectorError"]
