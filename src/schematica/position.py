"""Packing of 2-D grid coordinates into a single signed 32-bit integer.

Layout: ``x`` occupies the high 16 bits and ``y`` the low 16 bits, both as
signed shorts. Coordinates outside -32768..32767 are truncated.
"""

from __future__ import annotations

_MASK16 = 0xFFFF


def _short(value: int) -> int:
    value &= _MASK16
    return value - 0x10000 if value & 0x8000 else value


def pack(x: int, y: int) -> int:
    """Combine ``x`` and ``y`` into one signed 32-bit value."""
    packed = ((x & _MASK16) << 16) | (y & _MASK16)
    return packed - 0x1_0000_0000 if packed & 0x8000_0000 else packed


def unpack_x(pos: int) -> int:
    return _short(pos >> 16)


def unpack_y(pos: int) -> int:
    return _short(pos)


def unpack(pos: int) -> tuple[int, int]:
    return unpack_x(pos), unpack_y(pos)
