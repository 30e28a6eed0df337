"""
Tests for selector expression parsing.
"""

import pytest

from rcut.models import FieldRange
from rcut.selector import EmptyRangeError, InvalidIntegerError, SelectorParseError, parse_selector


def _pairs(expression):
    return [(r.start, r.stop) for r in parse_selector(expression)]


class TestSingleValues:
    """Lone integers compile to single-field ranges."""

    @pytest.mark.parametrize("value", [1, 2, 17, -1, -4])
    def test_single_integer(self, value):
        assert _pairs(str(value)) == [(value, value)]

    def test_lone_negative_is_one_value(self):
        selector = parse_selector("-3")
        assert list(selector) == [FieldRange(start=-3, stop=-3)]

    def test_explicit_plus_sign(self):
        assert _pairs("+2") == [(2, 2)]

    def test_zero_is_accepted(self):
        assert _pairs("0") == [(0, 0)]


class TestSpans:
    """A-B spans keep their endpoints exactly as written."""

    def test_ascending_span(self):
        assert _pairs("1-2") == [(1, 2)]

    def test_descending_span_is_not_reordered(self):
        assert _pairs("2-1") == [(2, 1)]
        assert parse_selector("2-1") != parse_selector("1-2")

    def test_negative_endpoints(self):
        assert _pairs("-3--1") == [(-3, -1)]

    def test_mixed_sign_endpoints(self):
        assert _pairs("2--1") == [(2, -1)]
        assert _pairs("-2-5") == [(-2, 5)]


class TestLists:
    """Comma-separated lists keep order and repeats."""

    def test_order_is_preserved(self):
        assert _pairs("3,1,2") == [(3, 3), (1, 1), (2, 2)]

    def test_repeats_are_kept(self):
        assert _pairs("1,1,1-2,1-2") == [(1, 1), (1, 1), (1, 2), (1, 2)]

    def test_mixed_list(self):
        assert _pairs("1,3-5,-1") == [(1, 1), (3, 5), (-1, -1)]

    def test_negative_values_in_list(self):
        assert _pairs("-1,-3,-5") == [(-1, -1), (-3, -3), (-5, -5)]


class TestErrors:
    """Malformed expressions raise selector errors."""

    @pytest.mark.parametrize("expression", ["1,,2", "1,", ",1", ""])
    def test_empty_token(self, expression):
        with pytest.raises(EmptyRangeError):
            parse_selector(expression)

    def test_non_integer(self):
        with pytest.raises(InvalidIntegerError) as excinfo:
            parse_selector("1,x")
        assert excinfo.value.value == "x"

    def test_bad_span_component_is_reported(self):
        with pytest.raises(InvalidIntegerError) as excinfo:
            parse_selector("1-b")
        assert excinfo.value.value == "b"

    def test_open_span_is_rejected(self):
        with pytest.raises(InvalidIntegerError) as excinfo:
            parse_selector("3-")
        assert excinfo.value.value == ""

    @pytest.mark.parametrize("expression", [" 1", "1 ", "1 -2", "1_0"])
    def test_whitespace_and_underscores_are_significant(self, expression):
        with pytest.raises(InvalidIntegerError):
            parse_selector(expression)

    def test_errors_share_a_base_class(self):
        assert issubclass(EmptyRangeError, SelectorParseError)
        assert issubclass(InvalidIntegerError, SelectorParseError)
