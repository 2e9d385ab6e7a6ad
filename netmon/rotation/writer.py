"""Thread-safe log file writer with size-based rotation into numbered backups."""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from threading import Lock
from typing import List, TextIO

from .policy import RotationPolicy
from .record import Level, Record

LOGGER = logging.getLogger(__name__)


class RotatingWriter:
    """Append rendered records to one active file, rotating it by size.

    Every mutating operation runs under a single per-instance lock, so the
    size check, an optional rotation and the append of the next line happen
    as one unit. The writer never raises into the caller: I/O failures are
    written to a fallback stream (``sys.stderr`` unless one is supplied) and
    the writer carries on. When the log directory or file cannot be opened at
    start-up the writer stays in degraded mode and emits every record to the
    fallback stream instead.

    Backups are named ``<file_name>.<N>`` with ``.1`` the most recent. The
    rename chain is not atomic; a failure partway through leaves a valid but
    shorter backup set and the active file is reopened regardless.
    """

    def __init__(
        self,
        policy: RotationPolicy | None = None,
        *,
        fallback: TextIO | None = None,
    ) -> None:
        self.policy = policy or RotationPolicy()
        self.path = self.policy.active_path
        self.rotations = 0
        self._fallback = fallback
        self._lock = Lock()
        self._handle: TextIO | None = None
        self._degraded = False
        self._closed = False
        self._backup_pattern = re.compile(rf"^{re.escape(self.policy.file_name)}\.(\d+)$")
        self._initialize()

    @classmethod
    def initialize(
        cls,
        policy: RotationPolicy | None = None,
        *,
        fallback: TextIO | None = None,
    ) -> "RotatingWriter":
        """Create the log directory, open the active file and return the writer."""

        return cls(policy, fallback=fallback)

    # ------------------------------------------------------------------
    @property
    def degraded(self) -> bool:
        return self._degraded

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def fallback(self) -> TextIO:
        return self._fallback if self._fallback is not None else sys.stderr

    # ------------------------------------------------------------------
    def write(self, record: Record) -> None:
        """Append ``record`` to the active file, rotating first if it is full."""

        line = record.render()
        with self._lock:
            if self._degraded or self._closed:
                self._emit_fallback(line)
                return

            if self._handle is None:
                self._handle = self._open("a")
                if self._handle is None:
                    self._emit_fallback(line)
                    return

            if self._needs_rotation():
                self._rotate()
                if self._handle is None:
                    self._emit_fallback(line)
                    return

            try:
                self._handle.write(line + "\n")
                self._handle.flush()
            except (OSError, ValueError) as exc:
                self._report(f"Error writing to log {self.path}: {exc}")
                # Reopened on the next write.
                self._close_handle()

    def log(self, level: Level | str, message: str, source: str) -> None:
        try:
            record = Record.create(level, message, source)
        except ValueError as exc:
            with self._lock:
                self._report(f"Dropped record from {source}: {exc}: {message}")
            return
        self.write(record)

    def debug(self, message: str, source: str) -> None:
        self.log(Level.DEBUG, message, source)

    def info(self, message: str, source: str) -> None:
        self.log(Level.INFO, message, source)

    def warning(self, message: str, source: str) -> None:
        self.log(Level.WARNING, message, source)

    def error(self, message: str, source: str) -> None:
        self.log(Level.ERROR, message, source)

    def close(self) -> None:
        """Flush and release the active file. Safe to call more than once."""

        with self._lock:
            self._close_handle()
            self._closed = True

    def __enter__(self) -> "RotatingWriter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers (callers hold the lock unless noted)
    # ------------------------------------------------------------------
    def _initialize(self) -> None:
        try:
            self.policy.directory.mkdir(parents=True, exist_ok=True)
            self._handle = self.path.open("a", encoding="utf-8", newline="\n")
        except OSError as exc:
            self._degraded = True
            self._handle = None
            self._report(f"Error initializing log file {self.path}: {exc}; using console fallback")

    def _needs_rotation(self) -> bool:
        try:
            size = self.path.stat().st_size
        except OSError:
            return False
        return size >= self.policy.max_file_size_bytes

    def _rotate(self) -> None:
        self._close_handle()
        keep = self.policy.max_backup_files

        for index in self._backup_indices():
            if index >= keep:
                self._unlink(self.policy.backup_path(index))

        if keep > 0:
            for index in range(keep - 1, 0, -1):
                source = self.policy.backup_path(index)
                if source.exists():
                    self._replace(source, self.policy.backup_path(index + 1))
            promoted = True
            if self.path.exists():
                promoted = self._replace(self.path, self.policy.backup_path(1))
            mode = "w" if promoted else "a"
        else:
            self._unlink(self.path)
            mode = "w"

        self._handle = self._open(mode)
        self.rotations += 1
        LOGGER.debug("Log rotated: %s (rotation #%d)", self.path, self.rotations)

    def _backup_indices(self) -> List[int]:
        try:
            names = [entry.name for entry in self.policy.directory.iterdir()]
        except OSError as exc:
            self._report(f"Unable to list backups in {self.policy.directory}: {exc}")
            return []
        indices = []
        for name in names:
            match = self._backup_pattern.match(name)
            if match is not None and int(match.group(1)) >= 1:
                indices.append(int(match.group(1)))
        return sorted(indices, reverse=True)

    def _open(self, mode: str) -> TextIO | None:
        try:
            return self.path.open(mode, encoding="utf-8", newline="\n")
        except OSError as exc:
            self._report(f"Unable to open log file {self.path}: {exc}")
            return None

    def _close_handle(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        if handle.closed:
            return
        try:
            handle.flush()
            handle.close()
        except (OSError, ValueError) as exc:
            self._report(f"Error closing log file {self.path}: {exc}")

    def _replace(self, source: Path, target: Path) -> bool:
        try:
            os.replace(source, target)
        except OSError as exc:
            self._report(f"Unable to rename {source} to {target}: {exc}")
            return False
        return True

    def _unlink(self, path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            self._report(f"Unable to delete {path}: {exc}")

    def _emit_fallback(self, line: str) -> None:
        try:
            stream = self.fallback
            stream.write(line + "\n")
            stream.flush()
        except (OSError, ValueError):
            LOGGER.debug("Fallback stream unavailable; dropped record")

    def _report(self, message: str) -> None:
        self._emit_fallback(f"[{type(self).__name__}] {message}")


__all__ = ["RotatingWriter"]
