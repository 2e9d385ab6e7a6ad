"""Unit tests for RotationPolicy defaults and permissive construction."""

from __future__ import annotations

from pathlib import Path

import pytest

from netmon.rotation import RotationPolicy
from netmon.rotation.policy import (
    DEFAULT_FILE_NAME,
    DEFAULT_MAX_BACKUP_FILES,
    DEFAULT_MAX_FILE_SIZE_BYTES,
    MEGABYTE,
)


def test_defaults() -> None:
    policy = RotationPolicy()

    assert policy.file_name == "network_monitor.log"
    assert policy.max_file_size_bytes == 10 * 1024 * 1024
    assert policy.max_backup_files == 5
    assert policy.directory == Path("logs")
    assert policy.active_path == Path("logs") / "network_monitor.log"
    assert policy.backup_path(3) == Path("logs") / "network_monitor.log.3"


@pytest.mark.parametrize(
    "kwargs, attribute, expected",
    [
        ({"file_name": ""}, "file_name", DEFAULT_FILE_NAME),
        ({"file_name": "   "}, "file_name", DEFAULT_FILE_NAME),
        ({"max_file_size_bytes": 0}, "max_file_size_bytes", DEFAULT_MAX_FILE_SIZE_BYTES),
        ({"max_file_size_bytes": -5}, "max_file_size_bytes", DEFAULT_MAX_FILE_SIZE_BYTES),
        ({"max_backup_files": -1}, "max_backup_files", DEFAULT_MAX_BACKUP_FILES),
        ({"directory": ""}, "directory", Path("logs")),
    ],
)
def test_invalid_values_fall_back_to_defaults(kwargs, attribute, expected) -> None:
    policy = RotationPolicy(**kwargs)

    assert getattr(policy, attribute) == expected


def test_zero_backups_is_kept() -> None:
    assert RotationPolicy(max_backup_files=0).max_backup_files == 0


def test_from_mapping_accepts_camel_case_and_megabytes(tmp_path: Path) -> None:
    policy = RotationPolicy.from_mapping(
        {
            "fileName": "app.log",
            "maxFileSizeMB": 2,
            "maxBackupFiles": "3",
            "directory": str(tmp_path),
            "unrelated": True,
        }
    )

    assert policy.file_name == "app.log"
    assert policy.max_file_size_bytes == 2 * MEGABYTE
    assert policy.max_file_size_mb == 2
    assert policy.max_backup_files == 3
    assert policy.directory == tmp_path


def test_from_mapping_prefers_byte_size() -> None:
    policy = RotationPolicy.from_mapping({"max_file_size_bytes": 100, "max_file_size_mb": 7})

    assert policy.max_file_size_bytes == 100


def test_from_mapping_ignores_garbage() -> None:
    policy = RotationPolicy.from_mapping(
        {"file_name": 42, "max_file_size_mb": "lots", "max_backup_files": True}
    )

    assert policy == RotationPolicy()
    assert RotationPolicy.from_mapping(None) == RotationPolicy()
