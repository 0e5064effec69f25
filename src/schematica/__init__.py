"""Schematic blueprints: binary codec, data model and repository."""

from .codec import EXTENSION, HEADER, VERSION, decode, encode, read, read_file, write, write_file
from .dictionary import BlockDictionary
from .errors import CapacityError, FormatError, RegistryError, SchematicError, UnknownTypeWarning
from .models import PlacementRequest, Schematic, Stile
from .registry import AIR, InMemoryStructureRegistry, StructureRegistry, StructureType, load_registry
from .repository import SchematicRepository
from .world import GridWorld, PlacementConsumer, TileEntity, WorldTileProvider

__all__ = [
    "AIR",
    "BlockDictionary",
    "CapacityError",
    "EXTENSION",
    "FormatError",
    "GridWorld",
    "HEADER",
    "InMemoryStructureRegistry",
    "PlacementConsumer",
    "PlacementRequest",
    "RegistryError",
    "Schematic",
    "SchematicError",
    "SchematicRepository",
    "Stile",
    "StructureRegistry",
    "StructureType",
    "TileEntity",
    "UnknownTypeWarning",
    "VERSION",
    "WorldTileProvider",
    "decode",
    "encode",
    "load_registry",
    "read",
    "read_file",
    "write",
    "write_file",
]
