from __future__ import annotations

import pytest

from schematica.position import pack, unpack, unpack_x, unpack_y


@pytest.mark.parametrize(
    ("x", "y"),
    [(0, 0), (1, 2), (300, 7), (-1, -1), (-5, 12), (12, -5), (32767, -32768), (-32768, 32767)],
)
def test_unpack_inverts_pack(x: int, y: int) -> None:
    pos = pack(x, y)

    assert unpack_x(pos) == x
    assert unpack_y(pos) == y
    assert unpack(pos) == (x, y)


def test_pack_fits_signed_32_bit() -> None:
    assert pack(0, 0) == 0
    assert pack(1, 0) == 0x10000
    assert pack(0, -1) == 0xFFFF
    assert pack(-1, -1) == -1
    assert pack(-32768, 0) == -0x8000_0000


def test_out_of_range_coordinates_truncate() -> None:
    assert unpack_x(pack(0x10005, 0)) == 5
    assert unpack_y(pack(0, 0x18000)) == -32768
