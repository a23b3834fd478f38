"""CPU and block device I/O statistics from /proc, iostat style."""

from .classifier import is_partition
from .provider import ProcSnapshotProvider, SnapshotProvider
from .runner import ReportCycle

__all__ = ["is_partition", "ProcSnapshotProvider", "SnapshotProvider", "ReportCycle"]
