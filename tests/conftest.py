from __future__ import annotations

import pytest

from schematica.registry import InMemoryStructureRegistry
from sample_blocks import BRIDGE, CONVEYOR, DRILL, ROUTER, SORTER


@pytest.fixture
def registry() -> InMemoryStructureRegistry:
    return InMemoryStructureRegistry([CONVEYOR, ROUTER, BRIDGE, SORTER, DRILL])
