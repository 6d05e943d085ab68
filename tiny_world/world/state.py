import random
from dataclasses import dataclass
from typing import Optional
from tiny_world.core.config_manager import ConfigManager
from tiny_world.core.ecs import EntityManager
from tiny_world.world.entity_factory import EntityFactory
from tiny_world.world.layers import TerrainLayer, LandUseLayer, EntityLayer
from tiny_world.world.selection import Selection
from tiny_world.world.sprites import SpriteIndex
from tiny_world.world.stock import Stock
from tiny_world.world.terrain import Terrain, TerrainRules, parse_cost
from tiny_world.world.view import View
from tiny_world.utils.logger import Logger

@dataclass
class WorldState:
    """
    Everything a tick reads and writes. Owned by the game loop and passed
    explicitly to the systems.
    """
    rules: TerrainRules
    sprites: SpriteIndex
    entity_manager: EntityManager
    terrain: TerrainLayer
    terrain_entities: EntityLayer
    land_use: LandUseLayer
    land_use_entities: EntityLayer
    stock: Stock
    selection: Selection
    view: View
    factory: EntityFactory
    base_max_population: int = 0

    @property
    def width(self) -> int:
        return self.terrain.width

    @property
    def height(self) -> int:
        return self.terrain.height

    def contains(self, x: int, y: int) -> bool:
        return self.terrain.contains(x, y)


def empty_world(width: int, height: int, rules: TerrainRules, sprites: SpriteIndex,
                view: Optional[View] = None, stock: Optional[Stock] = None,
                rng: Optional[random.Random] = None) -> WorldState:
    """A world of AIR everywhere, without any entities."""
    entity_manager = EntityManager()
    terrain = TerrainLayer(width, height)
    terrain_entities = EntityLayer(width, height)
    land_use = LandUseLayer(width, height)
    land_use_entities = EntityLayer(width, height)
    factory = EntityFactory(entity_manager, rules, sprites, terrain, terrain_entities,
                            land_use, land_use_entities, rng=rng)
    stock = stock or Stock()
    return WorldState(
        rules=rules,
        sprites=sprites,
        entity_manager=entity_manager,
        terrain=terrain,
        terrain_entities=terrain_entities,
        land_use=land_use,
        land_use_entities=land_use_entities,
        stock=stock,
        selection=Selection(),
        view=view or View(),
        factory=factory,
        base_max_population=stock.max_population,
    )

def view_from_config(config: ConfigManager) -> View:
    return View(
        tile_width=config.get("view.tile_width", 48),
        tile_height=config.get("view.tile_height", 24),
        zoom=config.get("view.zoom", 1.0),
    )

def stock_from_config(config: ConfigManager) -> Stock:
    stock = Stock()
    stock.resources.update(parse_cost(config.get("stock.resources", {})))
    stock.max_population = config.get("stock.max_population", 0)
    return stock

def new_world(config: ConfigManager, rules: TerrainRules, sprites: SpriteIndex,
              rng: Optional[random.Random] = None) -> WorldState:
    """
    Generates the starting world: a diamond of grass around the center,
    a ring of buildable ground around it and a warehouse in the middle.
    """
    width = config.get("world.width", 32)
    height = config.get("world.height", 32)
    radius = config.get("world.grass_radius", 3)

    state = empty_world(width, height, rules, sprites,
                        view=view_from_config(config), stock=stock_from_config(config), rng=rng)
    cx, cy = width // 2, height // 2

    for x, y in state.terrain.grid.tiles():
        dist = abs(x - cx) + abs(y - cy)
        if dist <= radius:
            state.factory.set(x, y, Terrain.GRASS, rand_sprite=True)
        elif dist == radius + 1:
            state.factory.set(x, y, Terrain.BUILDABLE)

    state.factory.set(cx, cy, Terrain.WAREHOUSE)

    # Center the camera on the warehouse
    view = state.view
    gx, gy = view.tile_center(cx, cy)
    screen_w = config.get("global.screen_width", 1280)
    screen_h = config.get("global.screen_height", 720)
    view.x = gx - int(screen_w / view.zoom) // 2
    view.y = gy - int(screen_h / view.zoom) // 2

    Logger.info(f"Generated world: {width}x{height} tiles, warehouse at ({cx}, {cy})")
    return state
