"""Point-in-time CPU and block device counters as read from /proc/stat and /proc/diskstats."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass(frozen=True)
class CpuCounters:
    """Aggregate CPU time in clock ticks since boot (the 'cpu ' line of /proc/stat)."""

    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0

    CUMULATIVE_FIELDS: ClassVar[tuple[str, ...]] = (
        "user", "nice", "system", "idle", "iowait", "irq", "softirq", "steal",
    )

    @property
    def total(self) -> int:
        return sum(getattr(self, name) for name in self.CUMULATIVE_FIELDS)


@dataclass(frozen=True)
class DiskCounters:
    """One /proc/diskstats device line. Field order matches the kernel's column order.

    Everything is cumulative since boot except io_in_progress, which is the number of
    requests in flight at sampling time.
    """

    reads_completed: int = 0
    reads_merged: int = 0
    sectors_read: int = 0
    read_time_ms: int = 0
    writes_completed: int = 0
    writes_merged: int = 0
    sectors_written: int = 0
    write_time_ms: int = 0
    io_in_progress: int = 0
    io_time_ms: int = 0
    weighted_io_time_ms: int = 0

    CUMULATIVE_FIELDS: ClassVar[tuple[str, ...]] = (
        "reads_completed", "reads_merged", "sectors_read", "read_time_ms",
        "writes_completed", "writes_merged", "sectors_written", "write_time_ms",
        "io_time_ms", "weighted_io_time_ms",
    )
    GAUGE_FIELDS: ClassVar[tuple[str, ...]] = ("io_in_progress",)

    @property
    def ios_completed(self) -> int:
        return self.reads_completed + self.writes_completed


# Device name -> counters, whole disks only once it leaves the provider
DeviceMap = dict[str, DiskCounters]

# Kernel column order after the device name, used by the parser
DISKSTATS_COLUMNS: tuple[str, ...] = (
    "reads_completed", "reads_merged", "sectors_read", "read_time_ms",
    "writes_completed", "writes_merged", "sectors_written", "write_time_ms",
    "io_in_progress", "io_time_ms", "weighted_io_time_ms",
)


@dataclass(frozen=True)
class CounterSnapshot:
    cpu: CpuCounters = field(default_factory=CpuCounters)
    disks: DeviceMap = field(default_factory=dict)
