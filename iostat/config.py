"""Shared configuration for the report cycle."""
from __future__ import annotations

import os
from dataclasses import dataclass

# Root of the proc filesystem; point at a captured or container-mounted procfs to replay it.
PROC_ROOT = os.environ.get("IOSTAT_PROC_ROOT", "/proc")

# /proc/diskstats always counts 512-byte sectors, whatever the device's real block size
SECTOR_SIZE = 512

KB_DIVISOR = 1.0
MB_DIVISOR = 1024.0

# The since-boot report divides lifetime counters by this instead of a real interval
FIRST_REPORT_ELAPSED_SEC = 1.0

# Sentinel for "no report limit" (count 0 on the command line)
UNBOUNDED = None


@dataclass(frozen=True)
class ReportOptions:
    """What to show and how often. Built by the CLI, read by the runner and the formatter."""

    extended: bool = False
    show_cpu: bool = True
    show_device: bool = True
    unit_divisor: float = KB_DIVISOR
    omit_first: bool = False
    interval: float = 1.0
    count: int = 0

    @property
    def unit_label(self) -> str:
        return "MB" if self.unit_divisor == MB_DIVISOR else "kB"
