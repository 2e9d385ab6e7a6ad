"""Log record value type and its canonical one-line rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

_LINE_PATTERN = re.compile(
    r"^(?P<timestamp>\S+) \[(?P<level>[A-Z]+)\] \[(?P<source>.*?)\] - (?P<message>.*)$",
    re.DOTALL,
)


class Level(str, Enum):
    """Severity of a log record."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, name: str) -> "Level":
        normalized = str(name).strip().upper()
        if normalized == "WARN":
            return cls.WARNING
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ValueError(f"Unknown log level '{name}'") from exc

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Record:
    """A single logged event.

    The rendered line is not escaped. A message containing a newline spans
    several lines on disk, and a source tag containing ``"] - "`` is split at
    that point by :meth:`parse`, which treats the first ``"] - "`` after the
    level as the end of the source.
    """

    timestamp: datetime
    level: Level
    source: str
    message: str

    @classmethod
    def create(
        cls,
        level: Level | str,
        message: str,
        source: str,
        *,
        timestamp: datetime | None = None,
    ) -> "Record":
        """Build a record stamped with the current local time.

        ``level`` may be a level name; unknown names raise ``ValueError``.
        """

        if not isinstance(level, Level):
            level = Level.parse(level)
        return cls(
            timestamp=timestamp or datetime.now(),
            level=level,
            source=source,
            message=message,
        )

    def render(self) -> str:
        stamp = self.timestamp.isoformat(timespec="microseconds")
        return f"{stamp} [{self.level.value}] [{self.source}] - {self.message}"

    def __str__(self) -> str:
        return self.render()

    @classmethod
    def parse(cls, line: str) -> "Record":
        """Recover a record from a line produced by :meth:`render`."""

        match = _LINE_PATTERN.match(line.rstrip("\n"))
        if match is None:
            raise ValueError(f"Not a canonical log line: {line!r}")
        try:
            timestamp = datetime.fromisoformat(match.group("timestamp"))
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp in log line: {line!r}") from exc
        return cls(
            timestamp=timestamp,
            level=Level.parse(match.group("level")),
            source=match.group("source"),
            message=match.group("message"),
        )


__all__ = ["Level", "Record"]
