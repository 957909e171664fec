"""Tests for the point-string codec."""

from __future__ import annotations

import pytest

from roibridge.codec.points import parse_points, points_to_string


def test_format():
    assert points_to_string([(1, 2), (3.5, 4.25)]) == "1.0,2.0 3.5,4.25"


def test_parse_inverts_format():
    points = [(0.1, 0.2), (-3.0, 1e-7), (123456.789, 42.0)]
    assert parse_points(points_to_string(points)) == points


def test_blank_string_is_empty():
    assert parse_points("") == []
    assert parse_points("   ") == []


def test_extra_whitespace_tolerated():
    assert parse_points("  1,2   3,4 ") == [(1.0, 2.0), (3.0, 4.0)]


@pytest.mark.parametrize("bad", ["1,2 3", "1;2", "a,b", "1,2,3"])
def test_malformed_raises(bad):
    with pytest.raises(ValueError):
        parse_points(bad)
