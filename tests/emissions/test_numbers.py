"""Tests for numbers.py coercion helpers."""
import math

import pytest

from carbonprospect.emissions.numbers import first_present, safe_divide, safe_number


class TestSafeNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (12, 12.0),
            ("12.5", 12.5),
            (" 7 ", 7.0),
            ("", 0.0),
            ("n/a", 0.0),
            (None, 0.0),
            (float("nan"), 0.0),
            (math.inf, 0.0),
            ([1, 2], 0.0),
            ({"a": 1}, 0.0),
            (-3.5, -3.5),
        ],
    )
    def test_coercion(self, value, expected):
        assert safe_number(value) == expected

    def test_never_raises_on_objects(self):
        assert safe_number(object()) == 0.0


class TestSafeDivide:
    def test_divides_by_positive(self):
        assert safe_divide(10, 4) == 2.5

    @pytest.mark.parametrize("denominator", [0, 0.0, -5])
    def test_non_positive_denominator_gives_zero(self, denominator):
        assert safe_divide(10, denominator) == 0.0


def test_first_present_skips_none_but_keeps_zero():
    record = {"a": None, "b": 0, "c": 500}
    assert first_present(record, "a", "b", "c") == 0
    assert first_present(record, "a") is None
    assert first_present(record, "missing", "c") == 500
