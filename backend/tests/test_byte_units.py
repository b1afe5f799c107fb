"""
Tests for byte formatting/conversion and relative time formatting.
"""

from datetime import datetime, timedelta, timezone

import pytest

from utils.byte_units import format_bytes, from_bytes, to_bytes
from utils.time_utils import diff_for_humans


class TestFormatBytes:
    """Human readable sizes"""

    @pytest.mark.parametrize("size, precision, expected", [
        (0, 2, "0 B"),
        (1, 2, "1 B"),
        (1023, 2, "1023 B"),
        (1024, 2, "1 KB"),
        (1536, 1, "1.5 KB"),
        (1536, 0, "2 KB"),
        (204800, 2, "200 KB"),
        (1048576, 2, "1 MB"),
        (1024 ** 2 * 5 + 1024 * 300, 2, "5.29 MB"),
        (1024 ** 3, 2, "1 GB"),
        (1024 ** 8, 2, "1 YB"),
    ])
    def test_format(self, size, precision, expected):
        assert format_bytes(size, precision) == expected

    def test_negative_sizes_are_zero(self):
        assert format_bytes(-10) == "0 B"

    def test_clamped_to_largest_unit(self):
        assert format_bytes(1024 ** 9) == "1024 YB"


class TestToBytes:
    """Unit strings back to bytes"""

    @pytest.mark.parametrize("value, expected", [
        ("2KB", 2048),
        ("1MB", 1048576),
        ("3gb", 3 * 1024 ** 3),
        ("1TB", 1024 ** 4),
        ("1YB", 1024 ** 8),
        ("1.5KB", 1536),
        ("KB", 0),
    ])
    def test_known_suffixes(self, value, expected):
        assert to_bytes(value) == expected

    @pytest.mark.parametrize("value", ["5XY", "100", "12 B", ""])
    def test_unknown_suffix_returns_input(self, value):
        assert to_bytes(value) == value

    @pytest.mark.parametrize("size", [
        1500,
        5 * 1024 ** 2 + 12345,
        7 * 1024 ** 3 + 999_999,
        3 * 1024 ** 4,
    ])
    def test_round_trip_within_one_unit_step(self, size):
        # format_bytes is lossy: precision 0 rounds to the nearest whole unit
        formatted = format_bytes(size, 0)
        unit = formatted.split(" ")[1]
        step = 1024 ** ["B", "KB", "MB", "GB", "TB"].index(unit)

        recovered = to_bytes(formatted.replace(" ", ""))

        assert abs(recovered - size) <= step


class TestFromBytes:
    """Bytes to a chosen unit"""

    def test_conversions(self):
        assert from_bytes(1048576, "MB") == "1.00MB"
        assert from_bytes(1048576, "KB") == "1,024.00KB"
        assert from_bytes(1536, "KB", 1) == "1.5KB"
        assert from_bytes(0, "GB") == "0.00GB"

    def test_unknown_unit(self):
        assert from_bytes(1024, "XB") == "0XB"


class TestDiffForHumans:
    """Relative timestamps"""

    NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)

    def _ago(self, **kwargs) -> float:
        return (self.NOW - timedelta(**kwargs)).timestamp()

    def test_past(self):
        assert diff_for_humans(self._ago(seconds=5), now=self.NOW) == "5 seconds ago"
        assert diff_for_humans(self._ago(minutes=1), now=self.NOW) == "1 minute ago"
        assert diff_for_humans(self._ago(hours=3), now=self.NOW) == "3 hours ago"
        assert diff_for_humans(self._ago(days=2), now=self.NOW) == "2 days ago"
        assert diff_for_humans(self._ago(days=14), now=self.NOW) == "2 weeks ago"
        assert diff_for_humans(self._ago(days=400), now=self.NOW) == "1 year ago"

    def test_future(self):
        assert diff_for_humans(self._ago(hours=-2), now=self.NOW) == "2 hours from now"

    def test_now(self):
        assert diff_for_humans(self.NOW.timestamp(), now=self.NOW) == "just now"
