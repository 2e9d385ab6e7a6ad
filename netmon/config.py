"""Application configuration loaded from an optional JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping

from .rotation import RotationPolicy

LOGGER = logging.getLogger(__name__)

DEFAULT_INITIAL_DELAY_SECONDS = 5.0
DEFAULT_INTERVAL_SECONDS = 60.0


def _as_seconds(value: Any, default: float, *, allow_zero: bool) -> float:
    if isinstance(value, bool):
        return default
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return default
    if seconds < 0 or (seconds == 0 and not allow_zero):
        return default
    return seconds


@dataclass
class AppConfig:
    """Top-level settings: log rotation plus monitor timing."""

    rotation: RotationPolicy = field(default_factory=RotationPolicy)
    initial_delay_seconds: float = DEFAULT_INITIAL_DELAY_SECONDS
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "AppConfig":
        logging_section = raw.get("logging")
        monitor_section = raw.get("monitor")
        if not isinstance(logging_section, Mapping):
            logging_section = {}
        if not isinstance(monitor_section, Mapping):
            monitor_section = {}
        return cls(
            rotation=RotationPolicy.from_mapping(logging_section),
            initial_delay_seconds=_as_seconds(
                monitor_section.get("initial_delay_seconds"),
                DEFAULT_INITIAL_DELAY_SECONDS,
                allow_zero=True,
            ),
            interval_seconds=_as_seconds(
                monitor_section.get("interval_seconds"),
                DEFAULT_INTERVAL_SECONDS,
                allow_zero=False,
            ),
        )

    def to_dict(self) -> Dict[str, Dict[str, object]]:
        return {
            "logging": {
                "file_name": self.rotation.file_name,
                "max_file_size_bytes": self.rotation.max_file_size_bytes,
                "max_backup_files": self.rotation.max_backup_files,
                "directory": str(self.rotation.directory),
            },
            "monitor": {
                "initial_delay_seconds": self.initial_delay_seconds,
                "interval_seconds": self.interval_seconds,
            },
        }


def load_config(path: Path | None = None) -> AppConfig:
    """Read ``path`` if it exists; anything unusable yields the defaults."""

    if path is None:
        return AppConfig()
    path = Path(path)
    if not path.exists():
        LOGGER.debug("Config file %s not found; using defaults", path)
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        LOGGER.warning("Config file %s is corrupted; using defaults", path)
        return AppConfig()
    except OSError as exc:
        LOGGER.warning("Unable to read config file %s: %s", path, exc)
        return AppConfig()

    if not isinstance(raw, dict):
        LOGGER.warning("Config file %s must contain a JSON object; using defaults", path)
        return AppConfig()
    return AppConfig.from_dict(raw)


__all__ = [
    "AppConfig",
    "DEFAULT_INITIAL_DELAY_SECONDS",
    "DEFAULT_INTERVAL_SECONDS",
    "load_config",
]
