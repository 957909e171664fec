"""Packed color conversion between local ARGB and remote RGBA.

Both packings are returned as signed 32-bit integers, the convention of the
server schema (which is why the transparent fill sentinel is -256).
"""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF


def to_signed32(value: int) -> int:
    """Reinterpret the low 32 bits of ``value`` as a signed integer."""
    value &= _MASK32
    return value - (1 << 32) if value & 0x80000000 else value


def pack_argb(a: int, r: int, g: int, b: int) -> int:
    for channel in (a, r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"Color channel out of range: {channel}")
    return to_signed32((a << 24) | (r << 16) | (g << 8) | b)


def unpack_argb(argb: int) -> tuple[int, int, int, int]:
    """Return (a, r, g, b)."""
    v = argb & _MASK32
    return (v >> 24) & 0xFF, (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF


def argb_to_rgba(argb: int) -> int:
    a, r, g, b = unpack_argb(argb)
    return to_signed32((r << 24) | (g << 16) | (b << 8) | a)


def rgba_to_argb(rgba: int) -> int:
    v = rgba & _MASK32
    r, g, b, a = (v >> 24) & 0xFF, (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF
    return to_signed32((a << 24) | (r << 16) | (g << 8) | b)


def more_translucent(argb: int, factor: float = 0.5) -> int:
    """Scale the alpha channel down, keeping RGB."""
    a, r, g, b = unpack_argb(argb)
    return pack_argb(int(a * factor), r, g, b)
