"""Rotation settings for :class:`~netmon.rotation.writer.RotatingWriter`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

MEGABYTE = 1024 * 1024

DEFAULT_FILE_NAME = "network_monitor.log"
DEFAULT_MAX_FILE_SIZE_MB = 10
DEFAULT_MAX_FILE_SIZE_BYTES = DEFAULT_MAX_FILE_SIZE_MB * MEGABYTE
DEFAULT_MAX_BACKUP_FILES = 5
DEFAULT_DIRECTORY = "logs"

_FILE_NAME_KEYS = ("fileName", "file_name")
_SIZE_BYTES_KEYS = ("maxFileSizeBytes", "max_file_size_bytes")
_SIZE_MB_KEYS = ("maxFileSizeMB", "max_file_size_mb")
_BACKUP_KEYS = ("maxBackupFiles", "max_backup_files")
_DIRECTORY_KEYS = ("directory", "logDirectory", "log_directory")


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _first(options: Mapping[str, Any], keys: tuple) -> Any:
    for key in keys:
        if key in options:
            return options[key]
    return None


@dataclass(frozen=True)
class RotationPolicy:
    """Immutable rotation configuration.

    Construction never fails: an empty file name, a non-positive size limit, a
    negative backup count or an empty directory are replaced with the module
    defaults. ``max_backup_files == 0`` keeps no backups at all; the rolled
    over file is discarded on every rotation.
    """

    file_name: str = DEFAULT_FILE_NAME
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES
    max_backup_files: int = DEFAULT_MAX_BACKUP_FILES
    directory: Path = Path(DEFAULT_DIRECTORY)

    def __post_init__(self) -> None:
        file_name = self.file_name
        if not isinstance(file_name, str) or not file_name.strip():
            file_name = DEFAULT_FILE_NAME

        size = _as_int(self.max_file_size_bytes)
        if size is None or size <= 0:
            size = DEFAULT_MAX_FILE_SIZE_BYTES

        backups = _as_int(self.max_backup_files)
        if backups is None or backups < 0:
            backups = DEFAULT_MAX_BACKUP_FILES

        directory = self.directory
        if directory is None or not str(directory).strip():
            directory = DEFAULT_DIRECTORY

        object.__setattr__(self, "file_name", file_name)
        object.__setattr__(self, "max_file_size_bytes", size)
        object.__setattr__(self, "max_backup_files", backups)
        object.__setattr__(self, "directory", Path(directory))

    # ------------------------------------------------------------------
    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "RotationPolicy":
        """Build a policy from a configuration mapping.

        Both camelCase and snake_case keys are recognized. A size given in
        megabytes is converted to bytes; an explicit byte size takes
        precedence. Unknown keys are ignored and unusable values fall back to
        the defaults.
        """

        options = options or {}

        size = _as_int(_first(options, _SIZE_BYTES_KEYS))
        if size is None or size <= 0:
            size_mb = _as_int(_first(options, _SIZE_MB_KEYS))
            size = size_mb * MEGABYTE if size_mb is not None and size_mb > 0 else None

        kwargs = {
            "file_name": _first(options, _FILE_NAME_KEYS),
            "max_file_size_bytes": size,
            "max_backup_files": _first(options, _BACKUP_KEYS),
            "directory": _first(options, _DIRECTORY_KEYS),
        }
        return cls(**{key: value for key, value in kwargs.items() if value is not None})

    @property
    def max_file_size_mb(self) -> float:
        return self.max_file_size_bytes / MEGABYTE

    @property
    def active_path(self) -> Path:
        return self.directory / self.file_name

    def backup_path(self, index: int) -> Path:
        return self.directory / f"{self.file_name}.{index}"


__all__ = [
    "DEFAULT_DIRECTORY",
    "DEFAULT_FILE_NAME",
    "DEFAULT_MAX_BACKUP_FILES",
    "DEFAULT_MAX_FILE_SIZE_BYTES",
    "DEFAULT_MAX_FILE_SIZE_MB",
    "MEGABYTE",
    "RotationPolicy",
]
