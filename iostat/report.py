"""Render reports as fixed-width columns: avg-cpu section, then the device section."""
from __future__ import annotations

import sys
from dataclasses import dataclass

from .config import ReportOptions
from .metrics import CpuPercentages, DeviceMetrics

DEVICE_WIDTH = 12


@dataclass(frozen=True)
class Report:
    """Display values for one interval. A section is None when it is not shown."""

    cpu: CpuPercentages | None = None
    devices: list[tuple[str, DeviceMetrics]] | None = None


def format_cpu_section(cpu: CpuPercentages) -> list[str]:
    return [
        "avg-cpu:",
        f"{'%user':>6} {'%sys':>6} {'%iowait':>6} {'%steal':>6} {'%idle':>6} {'%irq':>6}",
        f"{cpu.user:>6.2f} {cpu.system:>6.2f} {cpu.iowait:>6.2f} {cpu.steal:>6.2f} {cpu.idle:>6.2f} {cpu.irq:>6.2f}",
        "",
    ]


def format_device_header(extended: bool, unit: str = "kB") -> str:
    if extended:
        return (
            f"{'Device':<{DEVICE_WIDTH}} {'r/s':>8} {'w/s':>8} {f'r{unit}/s':>10} {f'w{unit}/s':>10} "
            f"{'rrqm/s':>8} {'wrqm/s':>8} {'await':>7} {'svctm':>7} {'%util':>6}"
        )
    return f"{'Device':<{DEVICE_WIDTH}} {'tps':>8} {f'{unit}_read/s':>10} {f'{unit}_wrtn/s':>10}"


def format_device_row(name: str, m: DeviceMetrics, extended: bool) -> str:
    if extended:
        return (
            f"{name:<{DEVICE_WIDTH}} {m.reads_per_sec:>8.2f} {m.writes_per_sec:>8.2f} "
            f"{m.read_per_sec:>10.2f} {m.written_per_sec:>10.2f} "
            f"{m.read_merged_per_sec:>8.2f} {m.write_merged_per_sec:>8.2f} "
            f"{m.await_ms:>7.2f} {m.svctm_ms:>7.2f} {m.util:>6.2f}"
        )
    return f"{name:<{DEVICE_WIDTH}} {m.tps:>8.2f} {m.read_per_sec:>10.2f} {m.written_per_sec:>10.2f}"


def format_device_section(devices: list[tuple[str, DeviceMetrics]], extended: bool, unit: str = "kB") -> list[str]:
    lines = ["Device:", format_device_header(extended, unit)]
    lines.extend(format_device_row(name, m, extended) for name, m in sorted(devices, key=lambda d: d[0]))
    lines.append("")
    return lines


def format_report(report: Report, options: ReportOptions) -> list[str]:
    lines: list[str] = []
    if report.cpu is not None:
        lines.extend(format_cpu_section(report.cpu))
    if report.devices is not None:
        lines.extend(format_device_section(report.devices, options.extended, options.unit_label))
    return lines


def print_report(report: Report, options: ReportOptions) -> None:
    for line in format_report(report, options):
        print(line)
    sys.stdout.flush()
