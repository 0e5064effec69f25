"""Structure-type descriptors and the registries that resolve them by name."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from pydantic import BaseModel, Field, ValidationError

from schematica.errors import RegistryError


@dataclass(frozen=True, slots=True)
class StructureType:
    """A placeable structure kind.

    ``pos_config`` marks types whose config value is a packed position that has
    to be rebased when a region is carved out of the world.
    """

    name: str
    size: int = 1
    rotate: bool = False
    pos_config: bool = False


AIR = StructureType(name="air")


class StructureRegistry(Protocol):
    """Name-based lookup of structure types."""

    placeholder: StructureType

    def lookup_by_name(self, name: str) -> StructureType | None:
        """Return the type registered under ``name``, if any."""

    def name_of(self, block: StructureType) -> str:
        """Return the name a type is stored under."""


class InMemoryStructureRegistry:
    """Dict-backed registry populated once before any decode call."""

    def __init__(self, types: Iterable[StructureType] = (), *, placeholder: StructureType = AIR) -> None:
        self.placeholder = placeholder
        self._types: dict[str, StructureType] = {placeholder.name: placeholder}
        for block in types:
            self.register(block)

    def register(self, block: StructureType) -> StructureType:
        existing = self._types.get(block.name)
        if existing == block:
            return existing
        if existing is not None:
            raise ValueError(f"Structure type already registered: {block.name}")
        self._types[block.name] = block
        return block

    def lookup_by_name(self, name: str) -> StructureType | None:
        return self._types.get(name)

    def name_of(self, block: StructureType) -> str:
        return block.name

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def __iter__(self):
        return iter(self._types.values())


class StructureTypeSpec(BaseModel):
    """One entry of a JSON registry document."""

    name: str = Field(min_length=1)
    size: int = Field(default=1, ge=1)
    rotate: bool = False
    pos_config: bool = False

    def to_type(self) -> StructureType:
        return StructureType(name=self.name, size=self.size, rotate=self.rotate, pos_config=self.pos_config)


class RegistryDocument(BaseModel):
    types: list[StructureTypeSpec]


def registry_from_payload(payload: object) -> InMemoryStructureRegistry:
    # A bare list is accepted as shorthand for {"types": [...]}.
    if isinstance(payload, list):
        payload = {"types": payload}
    try:
        document = RegistryDocument.model_validate(payload)
        return InMemoryStructureRegistry(spec.to_type() for spec in document.types)
    except (ValidationError, ValueError) as exc:
        raise RegistryError(f"Invalid registry document: {exc}") from exc


def load_registry(path: str | Path) -> InMemoryStructureRegistry:
    """Build a registry from a JSON document on disk."""
    target = Path(path)
    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RegistryError(f"Registry file is not valid JSON: {target}") from exc
    return registry_from_payload(payload)
