import random
from pathlib import Path

import pytest

from tiny_world.core.config_manager import ConfigManager
from tiny_world.core.input_manager import MOUSE_LEFT
from tiny_world.world.sprites import SpriteIndex
from tiny_world.world.state import WorldState, empty_world
from tiny_world.world.stock import Stock
from tiny_world.world.terrain import Resource, Terrain, TerrainRules, load_rules
from tiny_world.world.view import View

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config" / "balance.json"


class FakeInput:
    """Stands in for InputManager with one tick of scripted input."""

    def __init__(self):
        self.pos = (0, 0)
        self.keys = set()
        self.buttons = set()

    def cursor_position(self):
        return self.pos

    def is_key_just_pressed(self, key):
        return key in self.keys

    def is_mouse_just_pressed(self, button):
        return button in self.buttons


class FakeUI:
    def __init__(self):
        self.inside = False
        self.refreshes = 0
        self.seen_population = None

    def mouse_inside(self, x, y):
        return self.inside

    def replace_button(self, stock, rules):
        self.refreshes += 1
        self.seen_population = (stock.population, stock.max_population)


@pytest.fixture(scope="session")
def config() -> ConfigManager:
    return ConfigManager(str(CONFIG_PATH), watch=False)


@pytest.fixture(scope="session")
def rules(config) -> TerrainRules:
    return load_rules(config.get("terrain"))


@pytest.fixture(scope="session")
def sprites(config) -> SpriteIndex:
    return SpriteIndex(config.get("sprites"))


@pytest.fixture()
def world(rules, sprites) -> WorldState:
    """10x10 grass world with a warehouse at (5, 5) and a well stocked ledger."""
    stock = Stock()
    stock.resources.update({Resource.WOOD: 50, Resource.STONES: 50, Resource.FOOD: 50})
    stock.max_population = 5
    state = empty_world(10, 10, rules, sprites, view=View(), stock=stock, rng=random.Random(1))
    for x in range(10):
        for y in range(10):
            state.factory.set(x, y, Terrain.GRASS)
    state.factory.set(5, 5, Terrain.WAREHOUSE)
    return state


@pytest.fixture()
def fake_input() -> FakeInput:
    return FakeInput()


@pytest.fixture()
def fake_ui() -> FakeUI:
    return FakeUI()


def click(state: WorldState, inp: FakeInput, x: int, y: int, button: int = MOUSE_LEFT):
    """Scripts a click on the rendered center of tile (x, y)."""
    view = state.view
    inp.pos = view.global_to_screen(*view.tile_center(x, y))
    inp.buttons = {button}
