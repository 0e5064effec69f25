from __future__ import annotations

import json
from pathlib import Path

import pytest

from schematica.errors import RegistryError
from schematica.registry import AIR, InMemoryStructureRegistry, StructureType, load_registry, registry_from_payload


def test_load_registry_from_json(tmp_path: Path) -> None:
    path = tmp_path / "blocks.json"
    path.write_text(
        json.dumps(
            {
                "types": [
                    {"name": "conveyor", "rotate": True},
                    {"name": "bridge-conveyor", "pos_config": True},
                    {"name": "mechanical-drill", "size": 2},
                ]
            }
        ),
        encoding="utf-8",
    )

    registry = load_registry(path)

    assert registry.lookup_by_name("conveyor") == StructureType(name="conveyor", rotate=True)
    assert registry.lookup_by_name("bridge-conveyor").pos_config is True
    assert registry.lookup_by_name("mechanical-drill").size == 2
    assert registry.lookup_by_name("missing") is None
    assert registry.placeholder is AIR


def test_bare_list_document() -> None:
    registry = registry_from_payload([{"name": "router"}, {"name": "air"}])

    assert "router" in registry
    assert len(registry) == 2


@pytest.mark.parametrize(
    "payload",
    [
        {"types": [{"name": ""}]},
        {"types": [{"name": "drill", "size": 0}]},
        {"blocks": []},
        [{"name": "router"}, {"name": "router", "size": 2}],
    ],
)
def test_invalid_documents_raise(payload) -> None:
    with pytest.raises(RegistryError):
        registry_from_payload(payload)


def test_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(RegistryError):
        load_registry(path)


def test_conflicting_registration_raises() -> None:
    registry = InMemoryStructureRegistry([StructureType(name="router")])

    assert registry.register(StructureType(name="router")) == StructureType(name="router")
    with pytest.raises(ValueError):
        registry.register(StructureType(name="router", size=3))
    assert registry.name_of(StructureType(name="router")) == "router"
