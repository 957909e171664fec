"""Tests for packed color conversion."""

from __future__ import annotations

import pytest

from roibridge.codec.colors import (
    argb_to_rgba,
    more_translucent,
    pack_argb,
    rgba_to_argb,
    to_signed32,
    unpack_argb,
)
from roibridge.models.remote_shapes import TRANSPARENT_FILL


def test_to_signed32_wraps_high_bit():
    assert to_signed32(0xFFFFFFFF) == -1
    assert to_signed32(0x7FFFFFFF) == 2**31 - 1
    assert to_signed32(0xFFFFFF00) == -256


def test_pack_and_unpack():
    red = pack_argb(255, 255, 0, 0)
    assert red == -65536
    assert unpack_argb(red) == (255, 255, 0, 0)


def test_pack_rejects_out_of_range_channel():
    with pytest.raises(ValueError):
        pack_argb(256, 0, 0, 0)


def test_opaque_red_to_rgba():
    # 0xFFFF0000 (ARGB) -> 0xFF0000FF (RGBA)
    assert argb_to_rgba(-65536) == to_signed32(0xFF0000FF)


def test_transparent_white_sentinel():
    assert argb_to_rgba(pack_argb(0, 255, 255, 255)) == TRANSPARENT_FILL


@pytest.mark.parametrize("value", [0, 1, -1, -256, -65536, 2**31 - 1, -(2**31), 0x12345678])
def test_rgba_argb_inverse(value):
    assert rgba_to_argb(argb_to_rgba(value)) == value
    assert argb_to_rgba(rgba_to_argb(value)) == value


def test_more_translucent_halves_alpha():
    a, r, g, b = unpack_argb(more_translucent(pack_argb(200, 10, 20, 30)))
    assert (a, r, g, b) == (100, 10, 20, 30)
