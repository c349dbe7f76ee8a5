"""Tests for timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from task_tracker.utils import ZERO_TIME, format_relative, format_rfc3339, parse_decimal, parse_rfc3339

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestRfc3339:
    def test_utc_uses_z_suffix(self) -> None:
        assert format_rfc3339(NOW) == "2024-06-01T12:00:00Z"

    def test_drops_fractional_seconds(self) -> None:
        assert format_rfc3339(NOW.replace(microsecond=123456)) == "2024-06-01T12:00:00Z"

    def test_parse_z_and_offset(self) -> None:
        assert parse_rfc3339("2024-06-01T12:00:00Z") == NOW
        assert parse_rfc3339("2024-06-01T14:00:00+02:00") == NOW

    def test_parse_naive_assumes_utc(self) -> None:
        assert parse_rfc3339("2024-06-01T12:00:00") == NOW

    @pytest.mark.parametrize("raw", [None, "", "not a date", "2024-13-45T00:00:00Z"])
    def test_parse_invalid(self, raw) -> None:
        assert parse_rfc3339(raw) is None


class TestFormatRelative:
    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=10), "just now"),
            (timedelta(seconds=50), "50 seconds ago"),
            (timedelta(seconds=60), "a minute ago"),
            (timedelta(minutes=5), "5 minutes ago"),
            (timedelta(hours=1), "an hour ago"),
            (timedelta(hours=5), "5 hours ago"),
            (timedelta(days=1), "a day ago"),
            (timedelta(days=2), "2 days ago"),
            (timedelta(days=40), "a month ago"),
            (timedelta(days=400), "a year ago"),
        ],
    )
    def test_past(self, delta: timedelta, expected: str) -> None:
        assert format_relative(NOW - delta, NOW) == expected

    def test_future(self) -> None:
        assert format_relative(NOW + timedelta(hours=3), NOW) == "in 3 hours"

    def test_zero_time_is_unknown(self) -> None:
        assert format_relative(ZERO_TIME, NOW) == "unknown"


class TestParseDecimal:
    @pytest.mark.parametrize(("raw", "expected"), [("0", 0), ("42", 42), ("+7", 7), ("-3", -3), ("007", 7)])
    def test_valid(self, raw: str, expected: int) -> None:
        assert parse_decimal(raw) == expected

    @pytest.mark.parametrize("raw", ["", " 5", "5 ", "1_0", "٣", "1.0", "0x10", "+", "abc"])
    def test_invalid(self, raw: str) -> None:
        assert parse_decimal(raw) is None
