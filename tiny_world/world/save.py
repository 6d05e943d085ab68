import json
import os
import random
from typing import Optional
from tiny_world.core.config_manager import ConfigError
from tiny_world.world.selection import Selection
from tiny_world.world.sprites import SpriteIndex
from tiny_world.world.state import WorldState, empty_world
from tiny_world.world.stock import Stock
from tiny_world.world.terrain import Terrain, TerrainBits, TerrainRules, parse_terrain
from tiny_world.world.view import View
from tiny_world.utils.logger import Logger

def world_to_dict(state: WorldState) -> dict:
    return {
        "terrain": state.terrain.to_list(),
        "land_use": state.land_use.to_list(),
        "stock": state.stock.to_dict(),
        "base_max_population": state.base_max_population,
        "selection": state.selection.to_dict(),
        "view": state.view.to_dict(),
    }

def save_world(folder: str, name: str, state: WorldState) -> str:
    """Writes the world to <folder>/<name>.json, creating folders as needed."""
    path = os.path.join(folder, name) + ".json"
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(world_to_dict(state), f)
    Logger.info(f"Saved world to {path}")
    return path

def world_from_dict(data: dict, rules: TerrainRules, sprites: SpriteIndex,
                    rng: Optional[random.Random] = None) -> WorldState:
    """Rebuilds a world, recreating the entity of every non-AIR tile."""
    try:
        terrain = data["terrain"]
        land_use = data["land_use"]
        width = len(terrain)
        height = len(terrain[0]) if width else 0
        if len(land_use) != width or any(len(col) != height for col in terrain + land_use):
            raise ConfigError("terrain and land_use grids differ in size")

        stock = Stock.from_dict(data.get("stock", {}))
        state = empty_world(width, height, rules, sprites,
                            view=View(**data.get("view", {})), stock=stock, rng=rng)
        state.base_max_population = int(data.get("base_max_population", stock.max_population))
        state.selection = Selection.from_dict(data.get("selection", {}))
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(f"Malformed save data: {e}") from e

    for layer, is_terrain in ((terrain, True), (land_use, False)):
        for x, column in enumerate(layer):
            for y, name in enumerate(column):
                value = parse_terrain(name)
                if value == Terrain.AIR:
                    continue
                if rules[value].has(TerrainBits.IS_TERRAIN) != is_terrain:
                    raise ConfigError(f"{name!r} at ({x}, {y}) is in the wrong layer")
                state.factory.set(x, y, value)
    return state

def load_world(path: str, rules: TerrainRules, sprites: SpriteIndex,
               rng: Optional[random.Random] = None) -> WorldState:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to load save {path}: {e}") from e
    state = world_from_dict(data, rules, sprites, rng=rng)
    Logger.info(f"Loaded world from {path}")
    return state
