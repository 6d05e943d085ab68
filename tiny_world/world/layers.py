import numpy as np
from tiny_world.core.ecs import Entity
from tiny_world.world.grid import Grid
from tiny_world.world.terrain import Terrain

class TypeLayer:
    """A tile layer holding one Terrain value per tile, AIR by default."""
    def __init__(self, width: int, height: int):
        self.grid: Grid[int] = Grid(width, height, int(Terrain.AIR), dtype=np.int16)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def contains(self, x: int, y: int) -> bool:
        return self.grid.contains(x, y)

    def get(self, x: int, y: int) -> Terrain:
        return Terrain(self.grid.get(x, y))

    def set(self, x: int, y: int, value: Terrain):
        self.grid.set(x, y, int(value))

    def resize(self, width: int, height: int):
        self.grid.resize(width, height)

    def to_list(self):
        """Nested [x][y] lists of type names."""
        return [[Terrain(v).name.lower() for v in column] for column in self.grid.data.tolist()]

class TerrainLayer(TypeLayer):
    """Natural ground classification."""
    pass

class LandUseLayer(TypeLayer):
    """Constructed content classification, layered on top of the terrain."""
    pass

class EntityLayer:
    """Per tile handle of the entity instantiating that tile's content, or Entity.NONE."""
    def __init__(self, width: int, height: int):
        self.grid: Grid[Entity] = Grid(width, height, Entity.NONE, dtype=object)

    def contains(self, x: int, y: int) -> bool:
        return self.grid.contains(x, y)

    def get(self, x: int, y: int) -> Entity:
        return self.grid.get(x, y)

    def set(self, x: int, y: int, entity: Entity):
        self.grid.set(x, y, entity)

    def clear(self, x: int, y: int):
        self.grid.set(x, y, Entity.NONE)

    def resize(self, width: int, height: int):
        self.grid.resize(width, height)
