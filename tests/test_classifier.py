"""
Tests for whole-disk vs. partition classification of /proc/diskstats names.
"""

import pytest


class TestIsPartition:
    """Tests for is_partition()."""

    @pytest.mark.parametrize("name", ["sda", "sdb", "hda", "vda", "nvme0n1", "nvme1n2", "loop0", "loop12"])
    def test_whole_disks(self, name):
        """Whole disks of every known family are not partitions."""
        from iostat.classifier import is_partition

        assert is_partition(name) is False

    @pytest.mark.parametrize("name", ["sda1", "sdb12", "hdc2", "vda3", "nvme0n1p1", "nvme0n1p15", "loop0p1"])
    def test_partitions(self, name):
        """Partitions of every known family are detected."""
        from iostat.classifier import is_partition

        assert is_partition(name) is True

    @pytest.mark.parametrize("name", ["dm-0", "md0", "sr0", "zram0", "mmcblk0", "nbd3", ""])
    def test_unknown_names_are_whole_disks(self, name):
        """Names outside the known families are reported as whole disks."""
        from iostat.classifier import is_partition

        assert is_partition(name) is False

    def test_nvme_trailing_separator_is_whole_disk(self):
        """nvme name ending in 'p' has an empty partition number."""
        from iostat.classifier import is_partition

        assert is_partition("nvme0n1p") is False

    def test_two_letter_disk_suffix_is_whole_disk(self):
        """sdaa1 has a non-numeric remainder after three characters."""
        from iostat.classifier import is_partition

        assert is_partition("sdaa") is False
        assert is_partition("sdaa1") is False

    def test_non_ascii_digits_are_not_partition_numbers(self):
        """Only ASCII digits count as a partition number."""
        from iostat.classifier import is_partition

        assert is_partition("sda١") is False


class TestFilterWholeDisks:
    """Tests for filter_whole_disks()."""

    def test_drops_partitions_only(self):
        """Partitions are removed, whole disks and unknown devices kept."""
        from iostat.classifier import filter_whole_disks
        from iostat.counters import DiskCounters

        disks = {name: DiskCounters() for name in ["sda", "sda1", "nvme0n1", "nvme0n1p2", "dm-0"]}

        assert sorted(filter_whole_disks(disks)) == ["dm-0", "nvme0n1", "sda"]

    def test_returns_new_map(self):
        """Input map is left untouched."""
        from iostat.classifier import filter_whole_disks
        from iostat.counters import DiskCounters

        disks = {"sda": DiskCounters(), "sda1": DiskCounters()}

        filter_whole_disks(disks)

        assert len(disks) == 2
