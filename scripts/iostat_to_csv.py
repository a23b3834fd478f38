#!/usr/bin/env python3
"""
Convert captured iostat text output (iostat.txt) to CSV for charting.
- Device rows go to the output CSV: report, device, then one column per header field.
- avg-cpu rows go to <output stem>_cpu.csv: report, user, sys, iowait, steal, idle, irq.
- Works for both basic and extended layouts; the first device header seen sets the columns.
"""

import csv
import sys
from pathlib import Path

CPU_COLUMNS = ["report", "user", "sys", "iowait", "steal", "idle", "irq"]


def header_to_columns(header: str) -> list[str]:
    """'Device tps kB_read/s kB_wrtn/s' -> ['device', 'tps', 'kB_read/s', 'kB_wrtn/s']."""
    cols = header.split()
    if cols and cols[0] == "Device":
        cols[0] = "device"
    return cols


def parse_report_text(lines) -> tuple[list[dict], list[dict], list[str]]:
    """Return (cpu_rows, device_rows, device_columns) from iostat output lines.

    A report is one avg-cpu section and/or one Device section; a Device section that
    does not directly follow an avg-cpu section starts a new report (device-only output).
    """
    cpu_rows: list[dict] = []
    device_rows: list[dict] = []
    device_columns: list[str] = []
    report = 0
    section = None  # "cpu-header", "cpu", "device-header", "device"
    last_section = None
    for raw in lines:
        line = raw.rstrip("\n")
        stripped = line.strip()
        if stripped == "avg-cpu:":
            report += 1
            section = last_section = "cpu-header"
            continue
        if stripped == "Device:":
            if last_section not in ("cpu-header", "cpu"):
                report += 1
            section = last_section = "device-header"
            continue
        if not stripped:
            section = None
            continue
        if section == "cpu-header":
            section = last_section = "cpu"
            continue
        if section == "cpu":
            values = stripped.split()
            if len(values) == len(CPU_COLUMNS) - 1:
                cpu_rows.append(dict(zip(CPU_COLUMNS, [str(report)] + values)))
            continue
        if section == "device-header":
            if not device_columns:
                device_columns = header_to_columns(stripped)
            section = last_section = "device"
            continue
        if section == "device":
            values = stripped.split()
            if len(values) != len(device_columns):
                continue
            row = {"report": str(report)}
            row.update(zip(device_columns, values))
            device_rows.append(row)
    return cpu_rows, device_rows, device_columns


def main():
    input_path = Path(__file__).parent.parent / "iostat.txt"
    output_path = Path(__file__).parent.parent / "iostat.csv"

    if len(sys.argv) >= 2:
        input_path = Path(sys.argv[1])
    if len(sys.argv) >= 3:
        output_path = Path(sys.argv[2])

    if not input_path.exists():
        print(f"Input not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    with open(input_path, "r") as f:
        cpu_rows, device_rows, device_columns = parse_report_text(f)

    with open(output_path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=["report"] + device_columns)
        w.writeheader()
        w.writerows(device_rows)

    cpu_path = output_path.with_name(f"{output_path.stem}_cpu.csv")
    with open(cpu_path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=CPU_COLUMNS)
        w.writeheader()
        w.writerows(cpu_rows)

    print(f"Wrote {len(device_rows)} device rows to {output_path}")
    print(f"Wrote {len(cpu_rows)} cpu rows to {cpu_path}")


if __name__ == "__main__":
    main()
