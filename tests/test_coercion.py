"""
Unit tests for value coercion.
"""

import queue
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from condition_engine.rules.coercion import (
    compare_values, is_empty, is_equal, to_bool, to_number, to_string, to_time
)


class TestToNumber:
    """Test cases for to_number."""

    @pytest.mark.parametrize("value,expected", [
        (25, 25.0),
        (88.5, 88.5),
        (Decimal("1.25"), 1.25),
        ("5", 5.0),
        ("-3.5e2", -350.0),
    ])
    def test_numeric_values(self, value, expected):
        """Test values that coerce to numbers."""
        assert to_number(value) == (expected, True)

    @pytest.mark.parametrize("value", [
        "5abc", " 5", "5 ", "", "1_000", True, False, None, [1], {"a": 1}
    ])
    def test_non_numeric_values(self, value):
        """Test that partial parses and non-numbers fail."""
        _, ok = to_number(value)
        assert ok is False


class TestToString:
    """Test cases for to_string."""

    def test_none_is_empty_string(self):
        assert to_string(None) == ""

    def test_booleans_are_lowercase(self):
        assert to_string(True) == "true"
        assert to_string(False) == "false"

    def test_integral_float_drops_fraction(self):
        assert to_string(25.0) == "25"
        assert to_string(88.5) == "88.5"

    def test_large_float_keeps_exponent(self):
        assert to_string(1e300) == "1e+300"
        assert to_string(-1e20) == "-1e+20"
        assert to_string(1e15) == "1000000000000000"

    def test_uses_str_representation(self):
        class Money:
            def __str__(self):
                return "10 THB"

        assert to_string(Money()) == "10 THB"
        assert to_string(42) == "42"


class TestToBoolAndEmpty:
    """Test cases for to_bool and is_empty."""

    @pytest.mark.parametrize("value,expected", [
        (None, False),
        (True, True),
        (False, False),
        ("TRUE", True),
        ("true", True),
        ("yes", False),
        (0, False),
        (2, True),
        (0.0, False),
        ([], False),
        ([1], True),
        ({}, False),
    ])
    def test_to_bool(self, value, expected):
        assert to_bool(value) is expected

    @pytest.mark.parametrize("value,expected", [
        (None, True),
        ("", True),
        ([], True),
        ({}, True),
        (set(), True),
        ("x", False),
        ([0], False),
        (0, False),
        (False, False),
    ])
    def test_is_empty(self, value, expected):
        assert is_empty(value) is expected

    def test_queue_is_empty_until_filled(self):
        q = queue.Queue()
        assert is_empty(q) is True
        q.put(1)
        assert is_empty(q) is False


class TestToTime:
    """Test cases for to_time."""

    def test_rfc3339_utc(self):
        t, ok = to_time("2024-07-01T12:00:00Z")
        assert ok is True
        assert t == datetime(2024, 7, 1, 12, tzinfo=timezone.utc)

    def test_rfc3339_with_offset_and_nanoseconds(self):
        t, ok = to_time("2024-07-01T19:00:00.123456789+07:00")
        assert ok is True
        assert t == datetime(2024, 7, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    def test_naive_formats_are_utc(self):
        t, ok = to_time("2024-07-01 12:30:00")
        assert ok is True
        assert t == datetime(2024, 7, 1, 12, 30, tzinfo=timezone.utc)

        t, ok = to_time("2024-07-01")
        assert ok is True
        assert t == datetime(2024, 7, 1, tzinfo=timezone.utc)

    def test_time_of_day(self):
        t, ok = to_time("08:15:00")
        assert ok is True
        assert (t.hour, t.minute, t.second) == (8, 15, 0)

    def test_native_values(self):
        aware = datetime(2024, 7, 1, tzinfo=timezone.utc)
        assert to_time(aware) == (aware, True)
        assert to_time(datetime(2024, 7, 1)) == (aware, True)
        assert to_time(date(2024, 7, 1)) == (aware, True)

    def test_epoch_seconds(self):
        t, ok = to_time(0)
        assert ok is True
        assert t == datetime(1970, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["not a date", "2024/07/01", 1.5, True, None, []])
    def test_unparseable(self, value):
        _, ok = to_time(value)
        assert ok is False


class TestCompareValues:
    """Test cases for compare_values."""

    def test_numeric_strings_compare_numerically(self):
        assert compare_values("5", "10") < 0
        assert compare_values(10, "9") > 0
        assert compare_values(25, 25.0) == 0

    def test_plain_strings_compare_lexicographically(self):
        assert compare_values("b", "a") > 0
        assert compare_values("a", "b") < 0
        assert compare_values("a", "a") == 0

    def test_times_compare_temporally(self):
        assert compare_values("2024-01-01", "2023-12-31") > 0
        assert compare_values("2024-07-01T12:00:00Z", "2024-07-01T13:00:00+01:00") == 0

        now = datetime(2024, 7, 1, tzinfo=timezone.utc)
        assert compare_values(now, now + timedelta(hours=1)) < 0

    def test_epoch_against_date_string(self):
        # 1700000000 is 2023-11-14
        assert compare_values(1700000000, "2024-01-01") < 0

    def test_mixed_falls_back_to_strings(self):
        assert compare_values("abc", 5) > 0


class TestIsEqual:
    """Test cases for is_equal."""

    def test_none_handling(self):
        assert is_equal(None, None) is True
        assert is_equal(None, 0) is False
        assert is_equal("", None) is False

    def test_structural_equality(self):
        assert is_equal([1, 2], [1, 2]) is True
        assert is_equal({"a": 1}, {"a": 1}) is True

    def test_numeric_equality_across_types(self):
        assert is_equal(25, "25") is True
        assert is_equal(1, 1.0) is True
        assert is_equal("1e2", 100) is True

    def test_booleans_are_not_numbers(self):
        assert is_equal(True, 1) is False
        assert is_equal(False, 0) is False

    def test_nested_booleans_are_not_numbers(self):
        assert is_equal([True], [1]) is False
        assert is_equal({"flag": False}, {"flag": 0}) is False
        assert is_equal((1, [True]), (1, [1])) is False
        assert is_equal([1, {"a": True}], [1, {"a": True}]) is True

    def test_string_equality_fallback(self):
        assert is_equal(True, "true") is True
        assert is_equal("TH", "TH") is True
        assert is_equal("TH", "th") is False
