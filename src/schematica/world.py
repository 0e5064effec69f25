"""Boundaries to the world tile grid and the placement consumer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from schematica.models import PlacementRequest
from schematica.registry import StructureType


@dataclass(slots=True)
class TileEntity:
    """A placed structure as reported by the world grid."""

    block: StructureType
    config: int = 0
    rotation: int = 0
    pos_config: bool | None = None

    @property
    def config_is_position(self) -> bool:
        if self.pos_config is None:
            return self.block.pos_config
        return self.pos_config


class WorldTileProvider(Protocol):
    """Read-only access to the authoritative tile grid."""

    def tile_at(self, x: int, y: int) -> TileEntity | None:
        """Return the structure occupying ``(x, y)``, if any."""


class PlacementConsumer(Protocol):
    """Receives placement requests; placing into the world is its job."""

    def place(self, requests: Sequence[PlacementRequest]) -> None:
        """Queue or apply the requests in order."""


@dataclass(slots=True)
class GridWorld:
    """Sparse in-memory tile grid keyed by world coordinates."""

    tiles: dict[tuple[int, int], TileEntity] = field(default_factory=dict)

    def put(self, x: int, y: int, entity: TileEntity) -> None:
        self.tiles[(x, y)] = entity

    def tile_at(self, x: int, y: int) -> TileEntity | None:
        return self.tiles.get((x, y))
