"""Report cycle: sample, optionally report since boot, then sleep/sample/report until the count runs out."""
from __future__ import annotations

import logging
import time
from typing import Callable

from .config import FIRST_REPORT_ELAPSED_SEC, UNBOUNDED, ReportOptions
from .counters import CounterSnapshot, CpuCounters, DiskCounters
from .delta import delta
from .metrics import cpu_percentages, device_metrics
from .provider import SnapshotProvider
from .report import Report, print_report

logger = logging.getLogger(__name__)


def boot_baseline(snapshot: CounterSnapshot) -> CounterSnapshot:
    """All-zero counters for every device in snapshot, so a delta against it yields counters since boot."""
    return CounterSnapshot(cpu=CpuCounters(), disks={name: DiskCounters() for name in snapshot.disks})


def build_report(delta_snapshot: CounterSnapshot, elapsed: float, options: ReportOptions) -> Report:
    """Derive display values for the sections enabled in options."""
    cpu = cpu_percentages(delta_snapshot.cpu) if options.show_cpu else None
    devices = None
    if options.show_device:
        devices = [
            (name, device_metrics(counters, elapsed, options.unit_divisor))
            for name, counters in sorted(delta_snapshot.disks.items())
        ]
    return Report(cpu=cpu, devices=devices)


class ReportCycle:
    """Owns the previous snapshot and the remaining report count for one run.

    Provider errors are not caught: a counter source that cannot be read ends the run.
    """

    def __init__(
        self,
        provider: SnapshotProvider,
        options: ReportOptions,
        emit: Callable[[Report, ReportOptions], None] = print_report,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.provider = provider
        self.options = options
        self.emit = emit
        self.sleep = sleep
        self.previous: CounterSnapshot | None = None
        self.remaining: int | None = options.count if options.count > 0 else UNBOUNDED
        self.reports_emitted = 0

    def _emit(self, report: Report) -> bool:
        """Emit one report; return True when the count is exhausted."""
        self.emit(report, self.options)
        self.reports_emitted += 1
        if self.remaining is UNBOUNDED:
            return False
        self.remaining = max(self.remaining - 1, 0)
        return self.remaining == 0

    def step(self) -> Report:
        """Sleep one interval, sample, and build the report against the previous sample."""
        self.sleep(self.options.interval)
        current = self.provider.snapshot()
        logger.debug("Sampled %d whole disks", len(current.disks))
        report = build_report(delta(current, self.previous), self.options.interval, self.options)
        self.previous = current
        return report

    def run(self) -> int:
        """Run until the count is exhausted (forever when unbounded). Returns the number of reports."""
        self.previous = self.provider.snapshot()
        logger.debug("Initial sample: %d whole disks", len(self.previous.disks))
        if not self.options.omit_first:
            since_boot = delta(self.previous, boot_baseline(self.previous))
            report = build_report(since_boot, FIRST_REPORT_ELAPSED_SEC, self.options)
            if self._emit(report):
                return self.reports_emitted
        while True:
            if self._emit(self.step()):
                return self.reports_emitted
