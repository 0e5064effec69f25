"""Per-schematic block dictionary mapping one-byte indices to structure names."""

from __future__ import annotations

import logging
import warnings
from typing import Iterable, Iterator

from schematica.errors import CapacityError, UnknownTypeWarning
from schematica.models import Stile
from schematica.registry import StructureRegistry, StructureType

MAX_BLOCKS = 255

logger = logging.getLogger("schematica.dictionary")


class BlockDictionary:
    """Ordered, name-deduplicated set of the structure types used by a schematic.

    Indices are dense, 0-based and assigned in first-seen order; the encoder and
    decoder both rely on that ordering.
    """

    __slots__ = ("_blocks", "_index", "_registry")

    def __init__(self, registry: StructureRegistry | None = None) -> None:
        self._registry = registry
        self._blocks: list[StructureType] = []
        self._index: dict[str, int] = {}

    @classmethod
    def build(cls, tiles: Iterable[Stile], registry: StructureRegistry | None = None) -> BlockDictionary:
        dictionary = cls(registry)
        for tile in tiles:
            dictionary.add(tile.block)
        return dictionary

    def name_of(self, block: StructureType) -> str:
        if self._registry is None:
            return block.name
        return self._registry.name_of(block)

    def add(self, block: StructureType) -> int:
        name = self.name_of(block)
        index = self._index.get(name)
        if index is not None:
            return index
        if len(self._blocks) >= MAX_BLOCKS:
            raise CapacityError(
                f"Schematic references more than {MAX_BLOCKS} distinct structure types"
            )
        index = len(self._blocks)
        self._blocks.append(block)
        self._index[name] = index
        return index

    def index_of(self, block: StructureType) -> int:
        try:
            return self._index[self.name_of(block)]
        except KeyError:
            raise KeyError(f"Structure type not in dictionary: {block.name}") from None

    @property
    def names(self) -> list[str]:
        return [self.name_of(block) for block in self._blocks]

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[StructureType]:
        return iter(self._blocks)


def resolve(name: str, registry: StructureRegistry) -> StructureType:
    """Look ``name`` up, falling back to the registry placeholder for unknown content."""
    block = registry.lookup_by_name(name)
    if block is not None:
        return block

    logger.warning("unknown_structure_type", extra={"structure_name": name})
    warnings.warn(f"Unknown structure type {name!r}; its tiles are skipped", UnknownTypeWarning, stacklevel=3)
    return registry.placeholder


def resolve_table(names: Iterable[str], registry: StructureRegistry) -> list[StructureType]:
    return [resolve(name, registry) for name in names]
