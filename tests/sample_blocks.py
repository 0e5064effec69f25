"""Structure types shared by the test modules."""

from schematica.registry import StructureType

CONVEYOR = StructureType(name="conveyor", size=1, rotate=True)
ROUTER = StructureType(name="router", size=1)
BRIDGE = StructureType(name="bridge-conveyor", size=1, rotate=False, pos_config=True)
SORTER = StructureType(name="sorter", size=1)
DRILL = StructureType(name="mechanical-drill", size=2)
