import json

import pytest

from tiny_world.components.tags import IsWarehouse
from tiny_world.core.config_manager import ConfigError, ConfigManager
from tiny_world.world.save import load_world, save_world
from tiny_world.world.state import new_world
from tiny_world.world.terrain import Resource, Terrain


def test_new_world_layout(config, rules, sprites):
    state = new_world(config, rules, sprites)
    cx, cy = state.width // 2, state.height // 2

    assert (state.width, state.height) == (32, 32)
    assert state.land_use.get(cx, cy) == Terrain.WAREHOUSE
    assert state.terrain.get(cx, cy) == Terrain.GRASS
    assert state.terrain.get(cx + 4, cy) == Terrain.BUILDABLE
    assert state.terrain.get(0, 0) == Terrain.AIR
    assert state.terrain_entities.get(0, 0).is_none()
    assert state.entity_manager.count_with(IsWarehouse) == 1
    assert state.stock.get(Resource.WOOD) == 30

    # The camera looks at the warehouse
    sx, sy = state.view.global_to_screen(*state.view.tile_center(cx, cy))
    assert abs(sx - 640) <= 1 and abs(sy - 360) <= 1


def test_save_and_load(tmp_path, world, rules, sprites):
    world.factory.set(3, 4, Terrain.HOUSE)
    world.stock.population = 2
    world.selection.build_type = Terrain.ROAD
    world.view.x = 17

    path = save_world(str(tmp_path / "saves"), "slot1", world)
    assert path.endswith("slot1.json")
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    assert data["land_use"][3][4] == "house"

    loaded = load_world(path, rules, sprites)

    assert loaded.land_use.get(3, 4) == Terrain.HOUSE
    assert loaded.land_use.get(5, 5) == Terrain.WAREHOUSE
    assert loaded.terrain.get(0, 0) == Terrain.GRASS
    assert loaded.entity_manager.is_alive(loaded.land_use_entities.get(3, 4))
    assert loaded.entity_manager.entity_count() == world.entity_manager.entity_count()
    assert loaded.stock == world.stock
    assert loaded.selection == world.selection
    assert loaded.view == world.view


def test_load_rejects_bad_save(tmp_path, rules, sprites):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"terrain": [["grass"]], "land_use": [["castle"]]}), encoding="utf-8")
    with pytest.raises(ConfigError):
        load_world(str(path), rules, sprites)

    with pytest.raises(ConfigError):
        load_world(str(tmp_path / "missing.json"), rules, sprites)


@pytest.mark.parametrize("terrain, land_use", [
    ([["house"]], [["farm"]]),
    ([["grass"]], [["water"]]),
])
def test_load_rejects_names_in_the_wrong_layer(tmp_path, rules, sprites, terrain, land_use):
    path = tmp_path / "swapped.json"
    path.write_text(json.dumps({"terrain": terrain, "land_use": land_use}), encoding="utf-8")
    with pytest.raises(ConfigError, match="wrong layer"):
        load_world(str(path), rules, sprites)


def test_config_manager_dot_paths(config):
    assert config.get("world.width") == 32
    assert config.get("world.nope", 5) == 5
    assert config.get("terrain.house.cost.wood") == 5


def test_config_manager_missing_file_is_fatal(tmp_path):
    with pytest.raises(ConfigError):
        ConfigManager(str(tmp_path / "nope.json"), watch=False)


def test_config_manager_keeps_old_config_on_bad_reload(tmp_path):
    path = tmp_path / "balance.json"
    path.write_text('{"world": {"width": 8}}', encoding="utf-8")
    config = ConfigManager(str(path), watch=False)

    path.write_text("{not json", encoding="utf-8")
    config.load_config()
    assert config.get("world.width") == 8

    path.write_text('{"world": {"width": 9}}', encoding="utf-8")
    config.load_config()
    assert config.get("world.width") == 9
