"""Binary reader/writer for the ``msch`` schematic format.

Layout::

    b"msch"   magic
    u8        version (0)
    ...       zlib stream containing:
                i16 width, i16 height
                u8 block count, then that many u16-length-prefixed UTF-8 names
                i32 tile count, then per tile:
                    u8 block index, i32 packed position, i32 config, i8 rotation

All multi-byte integers are big-endian.
"""

from __future__ import annotations

import io
import logging
import struct
import zlib
from pathlib import Path
from typing import BinaryIO

from schematica.dictionary import BlockDictionary, resolve_table
from schematica.errors import CapacityError, FormatError
from schematica.models import Schematic, Stile
from schematica.position import pack, unpack_x, unpack_y
from schematica.registry import StructureRegistry

HEADER = b"msch"
VERSION = 0
EXTENSION = "msch"

_I16 = (-0x8000, 0x7FFF)
_I32 = (-0x8000_0000, 0x7FFF_FFFF)
_I8 = (-0x80, 0x7F)
_MAX_NAME_BYTES = 0xFFFF

logger = logging.getLogger("schematica.codec")


class _Buf:
    """Bounds-checked big-endian cursor over an inflated body."""

    __slots__ = ("b", "o")

    def __init__(self, b: bytes):
        self.b = b
        self.o = 0

    def _take(self, fmt: str, size: int) -> int:
        if self.o + size > len(self.b):
            raise FormatError("Unexpected end of schematic data")
        v = struct.unpack_from(fmt, self.b, self.o)[0]
        self.o += size
        return v

    def read_u8(self) -> int:
        return self._take(">B", 1)

    def read_i8(self) -> int:
        return self._take(">b", 1)

    def read_i16(self) -> int:
        return self._take(">h", 2)

    def read_i32(self) -> int:
        return self._take(">i", 4)

    def read_str(self) -> str:
        n = self._take(">H", 2)
        if self.o + n > len(self.b):
            raise FormatError("Unexpected end of schematic data")
        raw = self.b[self.o : self.o + n]
        self.o += n
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FormatError("Block name is not valid UTF-8") from exc


def _check_range(value: int, bounds: tuple[int, int], what: str) -> None:
    lo, hi = bounds
    if not lo <= value <= hi:
        raise CapacityError(f"{what} {value} does not fit in [{lo}, {hi}]")


def _encode_body(schematic: Schematic, blocks: BlockDictionary) -> bytes:
    _check_range(schematic.width, _I16, "width")
    _check_range(schematic.height, _I16, "height")
    _check_range(len(schematic.tiles), _I32, "tile count")

    out = io.BytesIO()
    out.write(struct.pack(">hh", schematic.width, schematic.height))

    out.write(struct.pack(">B", len(blocks)))
    for name in blocks.names:
        encoded = name.encode("utf-8")
        if len(encoded) > _MAX_NAME_BYTES:
            raise CapacityError(f"Block name is too long to store: {name[:32]}...")
        out.write(struct.pack(">H", len(encoded)))
        out.write(encoded)

    out.write(struct.pack(">i", len(schematic.tiles)))
    for tile in schematic.tiles:
        _check_range(tile.config, _I32, "config")
        _check_range(tile.rotation, _I8, "rotation")
        out.write(struct.pack(">Biib", blocks.index_of(tile.block), pack(tile.x, tile.y), tile.config, tile.rotation))

    return out.getvalue()


def write(schematic: Schematic, output: BinaryIO, registry: StructureRegistry | None = None) -> None:
    """Serialize ``schematic`` to ``output``.

    Dictionary names come from ``registry.name_of`` when a registry is given,
    otherwise from each type's own ``name``.

    The body is fully built before the first byte is written, so a
    :class:`CapacityError` leaves ``output`` untouched.
    """
    blocks = BlockDictionary.build(schematic.tiles, registry)
    body = _encode_body(schematic, blocks)

    output.write(HEADER)
    output.write(bytes((VERSION,)))
    compressor = zlib.compressobj()
    output.write(compressor.compress(body))
    output.write(compressor.flush())


def encode(schematic: Schematic, registry: StructureRegistry | None = None) -> bytes:
    out = io.BytesIO()
    write(schematic, out, registry)
    return out.getvalue()


def write_file(schematic: Schematic, path: str | Path, registry: StructureRegistry | None = None) -> None:
    data = encode(schematic, registry)
    Path(path).write_bytes(data)
    logger.info("schematic_written", extra={"path": str(path), "size_bytes": len(data)})


def read(source: BinaryIO, registry: StructureRegistry, *, name: str | None = None) -> Schematic:
    """Decode one schematic from ``source``.

    Tiles whose stored type is unknown to ``registry`` are dropped.
    """
    if source.read(len(HEADER)) != HEADER:
        raise FormatError("Not a schematic file (missing header).")

    ver = source.read(1)
    if ver != bytes((VERSION,)):
        raise FormatError(f"Unknown version: {ver[0] if ver else -1}")

    inflater = zlib.decompressobj()
    try:
        body = inflater.decompress(source.read())
    except zlib.error as exc:
        raise FormatError(f"Corrupt schematic body: {exc}") from exc
    if not inflater.eof:
        raise FormatError("Truncated schematic body")

    buf = _Buf(body)
    width, height = buf.read_i16(), buf.read_i16()

    length = buf.read_u8()
    table = resolve_table([buf.read_str() for _ in range(length)], registry)

    total = buf.read_i32()
    if total < 0:
        raise FormatError(f"Negative tile count: {total}")

    tiles: list[Stile] = []
    for _ in range(total):
        index = buf.read_u8()
        position = buf.read_i32()
        config = buf.read_i32()
        rotation = buf.read_i8()
        if index >= len(table):
            raise FormatError(f"Block index {index} outside dictionary of {len(table)}")
        block = table[index]
        if block != registry.placeholder:
            tiles.append(Stile(block, unpack_x(position), unpack_y(position), config, rotation))

    return Schematic(width=width, height=height, tiles=tuple(tiles), name=name)


def decode(data: bytes, registry: StructureRegistry, *, name: str | None = None) -> Schematic:
    return read(io.BytesIO(data), registry, name=name)


def read_file(path: str | Path, registry: StructureRegistry) -> Schematic:
    target = Path(path)
    with target.open("rb") as handle:
        return read(handle, registry, name=target.stem)
