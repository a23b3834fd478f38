"""Rates, percentages and averages derived from a delta snapshot and its interval."""
from __future__ import annotations

from dataclasses import dataclass

from .config import KB_DIVISOR, SECTOR_SIZE
from .counters import CpuCounters, DiskCounters

MS_PER_SEC = 1000.0


@dataclass(frozen=True)
class CpuPercentages:
    user: float = 0.0
    system: float = 0.0
    iowait: float = 0.0
    steal: float = 0.0
    idle: float = 0.0
    irq: float = 0.0


@dataclass(frozen=True)
class DeviceMetrics:
    """Per-device rates over one interval. read/written are in kB/s or MB/s depending on unit_divisor."""

    reads_per_sec: float = 0.0
    writes_per_sec: float = 0.0
    tps: float = 0.0
    read_per_sec: float = 0.0
    written_per_sec: float = 0.0
    read_merged_per_sec: float = 0.0
    write_merged_per_sec: float = 0.0
    await_ms: float = 0.0
    svctm_ms: float = 0.0
    util: float = 0.0


def cpu_percentages(delta: CpuCounters) -> CpuPercentages:
    """Share of each CPU state in the interval, in percent. All zero when no ticks elapsed."""
    total = delta.total
    if total == 0:
        return CpuPercentages()
    return CpuPercentages(
        user=(delta.user + delta.nice) / total * 100.0,
        system=delta.system / total * 100.0,
        iowait=delta.iowait / total * 100.0,
        steal=delta.steal / total * 100.0,
        idle=delta.idle / total * 100.0,
        irq=(delta.irq + delta.softirq) / total * 100.0,
    )


def sectors_to_rate(sectors: int, elapsed: float, unit_divisor: float = KB_DIVISOR) -> float:
    """Sectors over elapsed seconds as kB/s (unit_divisor 1) or MB/s (unit_divisor 1024)."""
    return sectors * SECTOR_SIZE / 1024.0 / elapsed / unit_divisor


def per_io_ms(time_ms: int, ios: int) -> float:
    return time_ms / ios if ios > 0 else 0.0


def utilization(io_time_ms: int, elapsed: float) -> float:
    """Percent of the interval with at least one request in flight, capped at 100."""
    return min(io_time_ms / (elapsed * MS_PER_SEC) * 100.0, 100.0)


def device_metrics(delta: DiskCounters, elapsed: float, unit_divisor: float = KB_DIVISOR) -> DeviceMetrics:
    """Basic and extended metrics for one device delta over elapsed seconds."""
    if elapsed <= 0:
        raise ValueError(f"elapsed must be > 0, got {elapsed}")
    reads_per_sec = delta.reads_completed / elapsed
    writes_per_sec = delta.writes_completed / elapsed
    ios = delta.ios_completed
    return DeviceMetrics(
        reads_per_sec=reads_per_sec,
        writes_per_sec=writes_per_sec,
        tps=reads_per_sec + writes_per_sec,
        read_per_sec=sectors_to_rate(delta.sectors_read, elapsed, unit_divisor),
        written_per_sec=sectors_to_rate(delta.sectors_written, elapsed, unit_divisor),
        read_merged_per_sec=delta.reads_merged / elapsed,
        write_merged_per_sec=delta.writes_merged / elapsed,
        await_ms=per_io_ms(delta.read_time_ms + delta.write_time_ms, ios),
        svctm_ms=per_io_ms(delta.io_time_ms, ios),
        util=utilization(delta.io_time_ms, elapsed),
    )
