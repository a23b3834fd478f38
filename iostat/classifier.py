"""Whole-disk vs. partition classification for /proc/diskstats device names.

The kernel attributes the same I/O to a disk and to the partition it lands on, so
reporting both would double-count throughput. Only whole disks are reported.
Unknown naming schemes are treated as whole disks: showing a partition is better
than hiding a real device.
"""
from __future__ import annotations

from .counters import DeviceMap

_DISK_FAMILY_PREFIXES = ("sd", "hd", "vd")


def _is_digits(s: str) -> bool:
    # str.isdigit() also accepts non-ASCII digits
    return bool(s) and s.isascii() and s.isdigit()


def is_partition(name: str) -> bool:
    """True for partitions (sda1, nvme0n1p1, loop0p1), False for whole disks (sda, nvme0n1, loop0)."""
    # nvme<ctrl>n<ns>p<part>
    if "nvme" in name and "p" in name:
        return _is_digits(name.split("p")[-1])
    # sda1, hdb2, vdc3: single-letter disk suffix, then the partition number
    if name.startswith(_DISK_FAMILY_PREFIXES):
        return _is_digits(name[3:])
    # loop0p1; the separator is searched after the prefix, "loop" itself contains a 'p'
    if name.startswith("loop") and "p" in name[len("loop"):]:
        return True
    return False


def filter_whole_disks(disks: DeviceMap) -> DeviceMap:
    """Copy of disks without partition entries."""
    return {name: counters for name, counters in disks.items() if not is_partition(name)}
