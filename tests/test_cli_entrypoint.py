from __future__ import annotations

import importlib
import json
import logging
from pathlib import Path

import pytest

from schematica.codec import read_file, write_file
from schematica.models import Schematic, Stile
from schematica.registry import StructureType, load_registry


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("schematica.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_base64_export_and_import(tmp_path: Path) -> None:
    testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("schematica.main")
    runner = testing.CliRunner()

    registry_path = tmp_path / "blocks.json"
    registry_path.write_text(json.dumps([{"name": "router"}]), encoding="utf-8")
    source = tmp_path / "source.msch"
    schematic = Schematic(width=2, height=1, tiles=(Stile(StructureType(name="router"), 1, 0),))
    write_file(schematic, source)

    exported = runner.invoke(module.app, ["export-base64", str(source), "--registry", str(registry_path)])
    assert exported.exit_code == 0
    text = exported.stdout.strip().splitlines()[-1]

    target = tmp_path / "copy.msch"
    imported = runner.invoke(
        module.app,
        ["import-base64", text, "--output", str(target), "--registry", str(registry_path)],
    )
    assert imported.exit_code == 0

    assert read_file(target, load_registry(registry_path)) == schematic


def test_import_rejects_bad_text(tmp_path: Path) -> None:
    testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("schematica.main")

    result = testing.CliRunner().invoke(module.app, ["import-base64", "@@@", "--output", str(tmp_path / "x.msch")])

    assert result.exit_code == 1
    assert not (tmp_path / "x.msch").exists()


def test_list_summarizes_directory(tmp_path: Path) -> None:
    testing = pytest.importorskip("typer.testing")
    module = importlib.import_module("schematica.main")
    write_file(Schematic(width=3, height=3), tmp_path / "empty.msch")

    result = testing.CliRunner().invoke(module.app, ["list", "--directory", str(tmp_path)])

    assert result.exit_code == 0
    assert "empty" in result.stdout


def test_settings_read_environment(monkeypatch) -> None:
    from schematica.config import Settings

    monkeypatch.setenv("SCHEMATICA_SCHEMATIC_EXTENSION", "schem")
    monkeypatch.setenv("SCHEMATICA_REGISTRY_PATH", "/tmp/blocks.json")

    configured = Settings()

    assert configured.schematic_extension == "schem"
    assert configured.registry_path == "/tmp/blocks.json"


def test_configure_logging_installs_single_handler() -> None:
    from schematica.telemetry import configure_logging

    first = configure_logging("debug")
    second = configure_logging("INFO")

    assert first is second
    assert len(first.handlers) == 1
    assert first.level == logging.INFO
