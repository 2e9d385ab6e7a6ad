"""Tests for the psutil-backed system metrics collector."""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Iterator, List

from netmon.collectors import SystemMetricsCollector, system_metrics
from netmon.rotation import policy
from netmon.rotation import Level, Record, RotatingWriter, RotationPolicy

MB = 1024 * 1024


def _memory(percent: float) -> SimpleNamespace:
    return SimpleNamespace(used=512 * MB, available=1536 * MB, total=2048 * MB, percent=percent)


def _counters(errin: int = 0, dropout: int = 0) -> SimpleNamespace:
    return SimpleNamespace(
        bytes_sent=1000,
        bytes_recv=2000,
        packets_sent=10,
        packets_recv=20,
        errin=errin,
        errout=0,
        dropin=0,
        dropout=dropout,
    )


def _sequence(values: List[SimpleNamespace]):
    iterator: Iterator[SimpleNamespace] = iter(values)
    return lambda: next(iterator)


def _records(tmp_path: Path, collector: SystemMetricsCollector, cycles: int) -> List[Record]:
    writer = RotatingWriter(RotationPolicy(file_name="metrics.log", directory=tmp_path))
    for _ in range(cycles):
        collector.collect(writer)
    writer.close()
    return [Record.parse(line) for line in writer.path.read_text("utf-8").splitlines()]


def test_collect_logs_memory_and_network(tmp_path: Path) -> None:
    collector = SystemMetricsCollector(
        memory_sampler=lambda: _memory(25.0),
        network_sampler=lambda: _counters(),
    )

    records = _records(tmp_path, collector, cycles=1)

    assert [record.level for record in records] == [Level.INFO, Level.DEBUG]
    assert all(record.source == "SystemMetricsCollector" for record in records)
    assert records[0].message == "Memory usage: used=512 MB, available=1536 MB, total=2048 MB (25.0%)"
    assert "bytes_sent=1000" in records[1].message


def test_high_memory_usage_warns(tmp_path: Path) -> None:
    collector = SystemMetricsCollector(
        memory_warning_percent=80.0,
        memory_sampler=lambda: _memory(93.5),
        network_sampler=lambda: None,
    )

    records = _records(tmp_path, collector, cycles=1)

    warnings = [record for record in records if record.level is Level.WARNING]
    assert len(warnings) == 1
    assert "93.5%" in warnings[0].message


def test_growing_interface_faults_warn(tmp_path: Path) -> None:
    collector = SystemMetricsCollector(
        memory_sampler=lambda: _memory(10.0),
        network_sampler=_sequence([_counters(), _counters(), _counters(errin=3, dropout=1)]),
    )

    records = _records(tmp_path, collector, cycles=3)

    warnings = [record for record in records if record.level is Level.WARNING]
    assert len(warnings) == 1
    assert warnings[0].message == "Network interface faults increased: dropout+1, errin+3"


def test_default_samplers_use_psutil(tmp_path: Path) -> None:
    records = _records(tmp_path, SystemMetricsCollector(), cycles=1)

    assert records[0].message.startswith("Memory usage: ")


def test_memory_figures_use_rotation_megabyte() -> None:
    assert system_metrics.MEGABYTE is policy.MEGABYTE == MB
