"""CLI entrypoint for inspecting and sharing schematic files."""

from __future__ import annotations

from pathlib import Path

import typer
from rich import print

from schematica.config import settings
from schematica.errors import FormatError, RegistryError
from schematica.models import Schematic
from schematica.registry import InMemoryStructureRegistry, load_registry
from schematica.repository import SchematicRepository
from schematica.telemetry import configure_logging

app = typer.Typer(help="Schematic blueprint tools")


def _build_repository(registry_path: str | None) -> SchematicRepository:
    configure_logging(settings.log_level)
    path = registry_path or settings.registry_path
    if not path:
        registry = InMemoryStructureRegistry()
    else:
        try:
            registry = load_registry(path)
        except (RegistryError, OSError) as exc:
            print({"error": str(exc)})
            raise typer.Exit(code=1)
    return SchematicRepository(registry, extension=settings.schematic_extension)


def _summary(schematic: Schematic) -> dict:
    return {
        "name": schematic.name,
        "width": schematic.width,
        "height": schematic.height,
        "tiles": len(schematic.tiles),
        "blocks": schematic.block_counts(),
    }


@app.command("list")
def list_schematics(
    directory: str = typer.Option(None, help="Directory holding schematic files"),
    registry: str = typer.Option(None, help="Path to a JSON structure-type registry"),
) -> None:
    """Load every schematic in a directory and summarize it."""
    repository = _build_repository(registry)
    loaded = repository.load_directory(directory or settings.schematic_directory)
    print({"schematics": [_summary(s) for s in loaded]})


@app.command()
def inspect(
    file: Path = typer.Argument(..., help="Schematic file to decode"),
    registry: str = typer.Option(None, help="Path to a JSON structure-type registry"),
) -> None:
    repository = _build_repository(registry)
    try:
        schematic = repository.read(file)
    except (FormatError, OSError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    print(_summary(schematic))


@app.command("export-base64")
def export_base64(
    file: Path = typer.Argument(..., help="Schematic file to encode"),
    registry: str = typer.Option(None, help="Path to a JSON structure-type registry"),
) -> None:
    """Print a schematic as base64 text for sharing."""
    repository = _build_repository(registry)
    try:
        schematic = repository.read(file)
    except (FormatError, OSError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    typer.echo(repository.to_base64(schematic))


@app.command("import-base64")
def import_base64(
    text: str = typer.Argument(..., help="Base64 schematic text"),
    output: Path = typer.Option(..., help="Where to write the decoded schematic"),
    registry: str = typer.Option(None, help="Path to a JSON structure-type registry"),
) -> None:
    repository = _build_repository(registry)
    try:
        schematic = repository.from_base64(text)
    except FormatError as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    target = repository.save(schematic, output)
    print({"written": str(target), **_summary(schematic)})


if __name__ == "__main__":
    app()
