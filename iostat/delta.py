"""Per-field differences between two consecutive counter snapshots.

Cumulative counters are subtracted with saturation at zero, so a counter reset
(reboot, driver reload, wraparound) shows as an idle interval instead of a huge
or negative rate. Gauges are carried over from the current sample unchanged.
"""
from __future__ import annotations

import logging

from .counters import CounterSnapshot, CpuCounters, DeviceMap, DiskCounters

logger = logging.getLogger(__name__)


def saturating_sub(current: int, previous: int) -> int:
    return max(current - previous, 0)


def delta_cpu(current: CpuCounters, previous: CpuCounters) -> CpuCounters:
    return CpuCounters(**{
        name: saturating_sub(getattr(current, name), getattr(previous, name))
        for name in CpuCounters.CUMULATIVE_FIELDS
    })


def delta_disk(current: DiskCounters, previous: DiskCounters) -> DiskCounters:
    """Saturating difference of the cumulative fields; gauge fields are taken from current."""
    values = {
        name: saturating_sub(getattr(current, name), getattr(previous, name))
        for name in DiskCounters.CUMULATIVE_FIELDS
    }
    values.update({name: getattr(current, name) for name in DiskCounters.GAUGE_FIELDS})
    return DiskCounters(**values)


def delta_disks(current: DeviceMap, previous: DeviceMap) -> DeviceMap:
    """Pair devices by name. Devices missing from either side are left out of this interval."""
    result: DeviceMap = {}
    for name, counters in current.items():
        prev = previous.get(name)
        if prev is None:
            logger.debug("Device %s appeared since last sample, skipping this interval", name)
            continue
        result[name] = delta_disk(counters, prev)
    for name in previous.keys() - current.keys():
        logger.debug("Device %s vanished since last sample", name)
    return result


def delta(current: CounterSnapshot, previous: CounterSnapshot) -> CounterSnapshot:
    return CounterSnapshot(
        cpu=delta_cpu(current.cpu, previous.cpu),
        disks=delta_disks(current.disks, previous.disks),
    )
