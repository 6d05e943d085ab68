from dataclasses import dataclass
from tiny_world.core.ecs import Component

@dataclass(slots=True)
class IsTerrainTile(Component):
    pass

@dataclass(slots=True)
class IsLandUse(Component):
    pass

@dataclass(slots=True)
class IsWarehouse(Component):
    pass
