"""
Tests for the delta engine: saturating subtraction for cumulative counters, pass-through for gauges.
"""

import pytest


def _disk(**kwargs):
    from iostat.counters import DiskCounters

    return DiskCounters(**kwargs)


class TestDeltaCpu:
    """Tests for delta_cpu()."""

    def test_subtracts_every_field(self):
        """Each of the 8 fields is current minus previous."""
        from iostat.counters import CpuCounters
        from iostat.delta import delta_cpu

        prev = CpuCounters(1, 2, 3, 4, 5, 6, 7, 8)
        curr = CpuCounters(11, 22, 33, 44, 55, 66, 77, 88)

        assert delta_cpu(curr, prev) == CpuCounters(10, 20, 30, 40, 50, 60, 70, 80)

    def test_counter_reset_saturates_at_zero(self):
        """A field that went backwards gives 0, not a negative value."""
        from iostat.counters import CpuCounters
        from iostat.delta import delta_cpu

        prev = CpuCounters(user=1000, idle=5000)
        curr = CpuCounters(user=10, idle=5100)

        d = delta_cpu(curr, prev)

        assert d.user == 0
        assert d.idle == 100

    def test_example_interval_total(self):
        """Delta total for the reference interval is 175 ticks."""
        from iostat.counters import CpuCounters
        from iostat.delta import delta_cpu

        prev = CpuCounters(user=100, system=50, idle=800, iowait=10)
        curr = CpuCounters(user=150, system=70, idle=900, iowait=15)

        assert delta_cpu(curr, prev).total == 175


class TestDeltaDisk:
    """Tests for delta_disk()."""

    def test_cumulative_fields_subtracted(self):
        """All 10 cumulative fields are current minus previous."""
        from iostat.counters import DiskCounters
        from iostat.delta import delta_disk

        prev = DiskCounters(*range(11))
        curr = DiskCounters(*(v * 3 for v in range(11)))

        d = delta_disk(curr, prev)

        for name in DiskCounters.CUMULATIVE_FIELDS:
            assert getattr(d, name) == getattr(curr, name) - getattr(prev, name)

    @pytest.mark.parametrize("prev_gauge", [0, 3, 7, 1000])
    def test_gauge_is_current_value(self, prev_gauge):
        """io_in_progress is copied from current whatever previous held."""
        from iostat.delta import delta_disk

        d = delta_disk(_disk(io_in_progress=7), _disk(io_in_progress=prev_gauge))

        assert d.io_in_progress == 7

    def test_cumulative_reset_saturates_at_zero(self):
        """Counters that went backwards give 0."""
        from iostat.delta import delta_disk

        prev = _disk(reads_completed=500, sectors_written=9000, io_time_ms=100)
        curr = _disk(reads_completed=20, sectors_written=100, io_time_ms=150)

        d = delta_disk(curr, prev)

        assert d.reads_completed == 0
        assert d.sectors_written == 0
        assert d.io_time_ms == 50

    def test_field_groups_are_disjoint_and_complete(self):
        """Every DiskCounters field is in exactly one group."""
        from dataclasses import fields

        from iostat.counters import DiskCounters

        cumulative = set(DiskCounters.CUMULATIVE_FIELDS)
        gauge = set(DiskCounters.GAUGE_FIELDS)

        assert cumulative.isdisjoint(gauge)
        assert cumulative | gauge == {f.name for f in fields(DiskCounters)}
        assert len(cumulative) == 10


class TestDeltaDisks:
    """Tests for delta_disks() device pairing."""

    def test_pairs_by_name(self):
        """Devices in both maps are paired by name."""
        from iostat.delta import delta_disks

        prev = {"sda": _disk(reads_completed=10), "sdb": _disk(reads_completed=1)}
        curr = {"sdb": _disk(reads_completed=4), "sda": _disk(reads_completed=15)}

        d = delta_disks(curr, prev)

        assert d["sda"].reads_completed == 5
        assert d["sdb"].reads_completed == 3

    def test_new_device_is_dropped(self):
        """A device only in the current map is left out of this interval."""
        from iostat.delta import delta_disks

        d = delta_disks({"sda": _disk(), "sdc": _disk(reads_completed=9)}, {"sda": _disk()})

        assert list(d) == ["sda"]

    def test_vanished_device_is_dropped(self):
        """A device only in the previous map is left out."""
        from iostat.delta import delta_disks

        d = delta_disks({"sda": _disk()}, {"sda": _disk(), "sdb": _disk()})

        assert list(d) == ["sda"]


class TestDeltaSnapshot:
    """Tests for delta() over whole snapshots."""

    def test_applies_to_cpu_and_disks(self):
        """Snapshot delta covers CPU counters and every paired disk."""
        from iostat.counters import CounterSnapshot, CpuCounters
        from iostat.delta import delta

        prev = CounterSnapshot(cpu=CpuCounters(user=1), disks={"sda": _disk(sectors_read=100)})
        curr = CounterSnapshot(cpu=CpuCounters(user=4), disks={"sda": _disk(sectors_read=160, io_in_progress=2)})

        d = delta(curr, prev)

        assert d.cpu.user == 3
        assert d.disks["sda"].sectors_read == 60
        assert d.disks["sda"].io_in_progress == 2

    def test_does_not_alias_inputs(self):
        """The delta's disk map is a new mapping."""
        from iostat.counters import CounterSnapshot
        from iostat.delta import delta

        curr = CounterSnapshot(disks={"sda": _disk()})

        d = delta(curr, CounterSnapshot(disks={"sda": _disk()}))

        assert d.disks is not curr.disks
