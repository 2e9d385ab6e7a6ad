"""Data collectors feeding records to the rotating writer."""

from .base import BaseCollector, CollectorError
from .system_metrics import SystemMetricsCollector

__all__ = ["BaseCollector", "CollectorError", "SystemMetricsCollector"]
