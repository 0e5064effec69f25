"""In-memory schematic repository: bulk load, carving, placement and base64 sharing."""

from __future__ import annotations

import base64
import binascii
import io
import logging
import threading
from pathlib import Path
from typing import Iterable

from schematica import codec
from schematica.errors import FormatError, UnknownTypeWarning
from schematica.models import PlacementRequest, Schematic, Stile
from schematica.position import pack, unpack_x, unpack_y
from schematica.registry import StructureRegistry
from schematica.world import WorldTileProvider


def _half(size: int) -> int:
    return int(size / 2)


class SchematicRepository:
    """Holds loaded schematics and converts them to and from other representations.

    The scratch buffer used by :meth:`to_base64` is owned by the repository and
    guarded by a lock, so one instance may be shared between threads.
    """

    def __init__(
        self,
        registry: StructureRegistry,
        *,
        extension: str = codec.EXTENSION,
        buffer_size: int = 1024,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._extension = extension.lstrip(".")
        self._logger = logger or logging.getLogger("schematica.repository")
        self._all: list[Schematic] = []
        self._out: io.BytesIO | None = io.BytesIO(bytes(buffer_size))
        self._out_lock = threading.Lock()

    @property
    def extension(self) -> str:
        return self._extension

    def all(self) -> list[Schematic]:
        return list(self._all)

    def add(self, schematic: Schematic) -> None:
        self._all.append(schematic)

    def remove(self, schematic: Schematic) -> None:
        self._all.remove(schematic)

    def load(self, files: Iterable[str | Path]) -> list[Schematic]:
        """Replace the loaded set with every readable schematic in ``files``.

        Files with another extension are ignored; unreadable ones are logged and
        skipped without affecting the rest, including when ``UnknownTypeWarning``
        is escalated to an error by the warnings filter.
        """
        self._all.clear()
        for entry in files:
            path = Path(entry)
            if path.suffix.lstrip(".") != self._extension:
                continue

            try:
                self._all.append(codec.read_file(path, self._registry))
            except (FormatError, OSError, UnknownTypeWarning):
                self._logger.exception("schematic_load_failed", extra={"path": str(path)})

        self._logger.info("schematics_loaded", extra={"count": len(self._all)})
        return self.all()

    def load_directory(self, directory: str | Path) -> list[Schematic]:
        root = Path(directory)
        if not root.is_dir():
            self._logger.warning("schematic_directory_missing", extra={"path": str(root)})
            self._all.clear()
            return []
        return self.load(sorted(p for p in root.iterdir() if p.is_file()))

    def read(self, path: str | Path) -> Schematic:
        return codec.read_file(path, self._registry)

    def save(self, schematic: Schematic, path: str | Path) -> Path:
        target = Path(path)
        if not target.suffix:
            target = target.with_suffix(f".{self._extension}")
        codec.write_file(schematic, target, self._registry)
        return target

    def to_placement_requests(self, schematic: Schematic, x: int, y: int) -> list[PlacementRequest]:
        """Map every tile to world coordinates centred on ``(x, y)``.

        The anchor is the schematic's centre cell: half of ``width`` and
        ``height``, truncated toward zero, is subtracted.
        """
        return [
            PlacementRequest(
                x=tile.x + x - _half(schematic.width),
                y=tile.y + y - _half(schematic.height),
                rotation=tile.rotation,
                block=tile.block,
                config=tile.config,
            )
            for tile in schematic.tiles
        ]

    def create_from_region(self, world: WorldTileProvider, x: int, y: int, x2: int, y2: int) -> Schematic:
        """Carve the rectangle between two corners into an origin-relative schematic."""
        if x > x2:
            x, x2 = x2, x
        if y > y2:
            y, y2 = y2, y

        width, height = x2 - x + 1, y2 - y + 1
        offset_x, offset_y = -x, -y

        tiles: list[Stile] = []
        for cx in range(x, x2 + 1):
            for cy in range(y, y2 + 1):
                entity = world.tile_at(cx, cy)
                if entity is None:
                    continue

                config = entity.config
                if entity.config_is_position:
                    config = pack(unpack_x(config) + offset_x, unpack_y(config) + offset_y)

                tiles.append(Stile(entity.block, cx + offset_x, cy + offset_y, config, entity.rotation))

        self._logger.debug(
            "schematic_carved",
            extra={"width": width, "height": height, "tile_count": len(tiles)},
        )
        return Schematic(width=width, height=height, tiles=tuple(tiles))

    def to_base64(self, schematic: Schematic) -> str:
        with self._out_lock:
            if self._out is None:
                raise RuntimeError("Repository is closed")
            self._out.seek(0)
            self._out.truncate(0)
            codec.write(schematic, self._out, self._registry)
            return base64.b64encode(self._out.getvalue()).decode("ascii")

    def from_base64(self, text: str) -> Schematic:
        """Decode a shared schematic. Raises :class:`FormatError` on bad input."""
        try:
            data = base64.b64decode(text.strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise FormatError(f"Schematic text is not valid base64: {exc}") from exc
        return codec.decode(data, self._registry)

    def close(self) -> None:
        """Release the scratch buffer and drop loaded schematics."""
        with self._out_lock:
            if self._out is not None:
                self._out.close()
                self._out = None
        self._all.clear()

    def __enter__(self) -> SchematicRepository:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
