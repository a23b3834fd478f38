"""Counter snapshot providers: read CPU and block device counters from a procfs."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from .classifier import filter_whole_disks
from .config import PROC_ROOT
from .counters import DISKSTATS_COLUMNS, CounterSnapshot, CpuCounters, DeviceMap, DiskCounters

logger = logging.getLogger(__name__)


def _to_int(raw: str) -> int:
    # Counters are unsigned decimals; signs, separators and non-ASCII digits read as 0
    return int(raw) if raw.isascii() and raw.isdigit() else 0


def _fields(values: list[str], names: tuple[str, ...]) -> dict[str, int]:
    """Map names to integer values in order. Missing or non-numeric values become 0."""
    return {name: _to_int(values[i]) if i < len(values) else 0 for i, name in enumerate(names)}


def parse_proc_stat(content: str) -> CpuCounters:
    """CpuCounters from the aggregate 'cpu ' line of /proc/stat; all zero if there is none."""
    # cpu  user nice system idle iowait irq softirq steal guest guest_nice
    for line in content.splitlines():
        if line.startswith("cpu "):
            return CpuCounters(**_fields(line.split()[1:], CpuCounters.CUMULATIVE_FIELDS))
    logger.debug("No aggregate cpu line in /proc/stat, using zeroed counters")
    return CpuCounters()


def parse_diskstats(content: str) -> DeviceMap:
    """Whole-disk name -> DiskCounters, partitions dropped.

    Short lines keep their device with the missing counters zeroed.
    """
    # major minor name rd_ios rd_merges rd_sectors rd_ticks wr_ios wr_merges wr_sectors wr_ticks
    #   ios_in_progress io_ticks weighted_ticks [discard and flush fields, ignored]
    result: DeviceMap = {}
    for line in content.splitlines():
        parts = line.split()
        if len(parts) < 3:
            if parts:
                logger.debug("Skipping diskstats line without a device name: %r", line)
            continue
        name = parts[2]
        result[name] = DiskCounters(**_fields(parts[3:], DISKSTATS_COLUMNS))
    return filter_whole_disks(result)


class SnapshotProvider(ABC):
    """Source of counter snapshots. Read failures propagate to the caller unchanged."""

    @abstractmethod
    def read_cpu_counters(self) -> CpuCounters:
        ...

    @abstractmethod
    def read_disk_counters(self) -> DeviceMap:
        """Counters for whole disks only, keyed by device name."""
        ...

    def snapshot(self) -> CounterSnapshot:
        return CounterSnapshot(cpu=self.read_cpu_counters(), disks=self.read_disk_counters())


class ProcSnapshotProvider(SnapshotProvider):
    """Reads <proc_root>/stat and <proc_root>/diskstats on every call."""

    def __init__(self, proc_root: str | Path = PROC_ROOT) -> None:
        self.proc_root = Path(proc_root)
        self.stat_path = self.proc_root / "stat"
        self.diskstats_path = self.proc_root / "diskstats"

    def read_cpu_counters(self) -> CpuCounters:
        return parse_proc_stat(self.stat_path.read_text())

    def read_disk_counters(self) -> DeviceMap:
        return parse_diskstats(self.diskstats_path.read_text())

    def describe_sources(self) -> list[str]:
        """One line per counter source and the fields taken from it."""
        return [
            f"CPU: {self.stat_path} (aggregate cpu line: user nice system idle iowait irq softirq steal)",
            f"Disk: {self.diskstats_path} (whole disks only; 10 cumulative counters, io_in_progress as gauge)",
        ]
