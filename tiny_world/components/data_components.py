from dataclasses import dataclass
from tiny_world.core.ecs import Component
from tiny_world.world.terrain import Terrain

@dataclass(slots=True)
class TileComponent(Component):
    x: int
    y: int

@dataclass(slots=True)
class TerrainComponent(Component):
    terrain: Terrain

@dataclass(slots=True)
class SpriteComponent(Component):
    index: int
    height: int = 0  # Pixel height, used for draw order

@dataclass(slots=True)
class BuildRadiusComponent(Component):
    radius: int  # Tiles around this entity where purchasable structures may go

@dataclass(slots=True)
class PopulationComponent(Component):
    population: int  # Workers this structure occupies

@dataclass(slots=True)
class HousingComponent(Component):
    capacity: int  # Max population this structure adds
