from __future__ import annotations

from dataclasses import dataclass, field

from schematica.position import unpack
from schematica.registry import StructureType


@dataclass(frozen=True, slots=True)
class Stile:
    """One placed structure inside a schematic, in schematic-local coordinates."""

    block: StructureType
    x: int
    y: int
    config: int = 0
    rotation: int = 0

    def config_position(self) -> tuple[int, int]:
        """Unpack ``config`` as a position; only meaningful for position-valued types."""
        return unpack(self.config)


@dataclass(frozen=True, slots=True)
class Schematic:
    """A relocatable blueprint: bounding box plus ordered tiles.

    Positive dimensions, tiles inside ``[0, width) x [0, height)`` and
    non-overlapping tiles are left to the caller; none of them are checked here.
    """

    width: int
    height: int
    tiles: tuple[Stile, ...] = field(default_factory=tuple)
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.tiles, tuple):
            object.__setattr__(self, "tiles", tuple(self.tiles))

    def block_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for tile in self.tiles:
            counts[tile.block.name] = counts.get(tile.block.name, 0) + 1
        return counts


@dataclass(frozen=True, slots=True)
class PlacementRequest:
    """A world-space placement command handed to the placement consumer."""

    x: int
    y: int
    rotation: int
    block: StructureType
    config: int
