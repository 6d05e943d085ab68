import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pygame_gui
import pytest

from tiny_world.systems.ui_system import UISystem, format_cost
from tiny_world.world.selection import Selection
from tiny_world.world.stock import Stock
from tiny_world.world.terrain import Resource, Terrain

SCREEN_SIZE = (1280, 720)


@pytest.fixture(scope="module")
def ui(rules):
    pygame.init()
    screen = pygame.display.set_mode(SCREEN_SIZE)
    manager = pygame_gui.UIManager(SCREEN_SIZE)
    yield UISystem(screen, manager, rules)
    pygame.quit()


def make_stock(wood=50, stones=50, population=0, max_population=5):
    stock = Stock()
    stock.resources.update({Resource.WOOD: wood, Resource.STONES: stones, Resource.FOOD: 0})
    stock.population = population
    stock.max_population = max_population
    return stock


def test_menu_lists_buildable_types_and_bulldoze(ui):
    assert Terrain.HOUSE in ui.buttons
    assert Terrain.BULLDOZE in ui.buttons
    assert Terrain.AIR not in ui.buttons


def test_affordable_types_are_enabled(ui, rules):
    ui.replace_button(make_stock(), rules)

    assert ui.buttons[Terrain.HOUSE].is_enabled
    assert ui.buttons[Terrain.FARM].is_enabled
    assert "pop: 0/5" in ui.stock_label.text


def test_unaffordable_types_are_disabled(ui, rules):
    ui.replace_button(make_stock(wood=50, stones=1), rules)
    assert not ui.buttons[Terrain.HOUSE].is_enabled
    assert ui.buttons[Terrain.FARM].is_enabled

    ui.replace_button(make_stock(wood=0), rules)
    assert not ui.buttons[Terrain.HOUSE].is_enabled
    assert not ui.buttons[Terrain.BULLDOZE].is_enabled

    # Buttons come back once the stock recovers
    ui.replace_button(make_stock(), rules)
    assert ui.buttons[Terrain.HOUSE].is_enabled


def test_full_population_disables_workplaces_only(ui, rules):
    ui.replace_button(make_stock(population=5, max_population=5), rules)

    assert not ui.buttons[Terrain.FARM].is_enabled
    assert ui.buttons[Terrain.HOUSE].is_enabled
    assert "pop: 5/5" in ui.stock_label.text


def test_button_press_selects_type(ui):
    selection = Selection(build_type=Terrain.WATER, allow_remove=True)
    event = pygame.event.Event(pygame_gui.UI_BUTTON_PRESSED, ui_element=ui.buttons[Terrain.HOUSE])

    ui.process_event(event, selection)

    assert selection.build_type == Terrain.HOUSE
    assert selection.rand_sprite
    assert not selection.allow_remove


def test_unrelated_events_leave_selection_alone(ui):
    selection = Selection(build_type=Terrain.ROAD)

    ui.process_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a), selection)
    ui.process_event(pygame.event.Event(pygame_gui.UI_BUTTON_PRESSED, ui_element=ui.stock_label), selection)

    assert selection == Selection(build_type=Terrain.ROAD)


def test_mouse_inside_panel(ui):
    cx, cy = ui.build_panel.get_abs_rect().center
    assert ui.mouse_inside(cx, cy)
    assert not ui.mouse_inside(0, 0)


def test_format_cost():
    assert format_cost({}) == "free"
    assert format_cost({Resource.WOOD: 5, Resource.STONES: 2}) == "wood:5 stones:2"
