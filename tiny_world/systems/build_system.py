from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple
import pygame
from tiny_world.core.ecs import System, EntityManager
from tiny_world.core.input_manager import InputManager, MOUSE_LEFT, MOUSE_RIGHT
from tiny_world.components.data_components import TileComponent, BuildRadiusComponent
from tiny_world.components.tags import IsWarehouse
from tiny_world.systems.stats_system import StatsSystem
from tiny_world.world.state import WorldState
from tiny_world.world.terrain import Resource, Terrain, TerrainBits, TerrainProperties
from tiny_world.utils.logger import Logger

def is_buildable(x: int, y: int, entity_manager: EntityManager) -> bool:
    """True if (x, y) lies within the build radius of any structure that has one."""
    for _, tile, radius in entity_manager.get_entities_with(TileComponent, BuildRadiusComponent):
        dx, dy = x - tile.x, y - tile.y
        if dx * dx + dy * dy <= radius.radius * radius.radius:
            return True
    return False

class ActionKind(Enum):
    BULLDOZE = "bulldoze"
    PLACE_TERRAIN = "place_terrain"
    PLACE_LAND_USE = "place_land_use"

@dataclass(frozen=True)
class BuildAction:
    """A fully validated change to one tile, ready to be applied."""
    kind: ActionKind
    x: int
    y: int
    build_type: Terrain
    cost: Dict[Resource, int] = field(default_factory=dict)
    rand_sprite: bool = False
    clear_existing: bool = False

class BuildSystem(System):
    """
    Turns a click with the build tool into at most one tile change per tick.

    Every rule violation is a silent refusal: plan() returns None and
    nothing is mutated.
    """
    def __init__(self, state: WorldState, input_manager: InputManager, ui,
                 stats: Optional[StatsSystem] = None):
        self.state = state
        self.input_manager = input_manager
        self.ui = ui
        self.stats = stats

    def update(self, dt: float):
        if self.check_abort():
            return
        x, y = self.target_tile()
        action = self.plan(x, y)
        if action is not None:
            self.apply(action)

    # --- Input ---

    def check_abort(self) -> bool:
        sel = self.state.selection
        inp = self.input_manager

        if inp.is_key_just_pressed(pygame.K_ESCAPE):
            sel.reset()
            return True

        mx, my = inp.cursor_position()
        if self.ui.mouse_inside(mx, my):
            return True

        if inp.is_mouse_just_pressed(MOUSE_RIGHT):
            sel.reset()
            return True
        if not inp.is_mouse_just_pressed(MOUSE_LEFT):
            return True

        props = self.state.rules[sel.build_type]
        if sel.build_type != Terrain.BULLDOZE and not props.has(TerrainBits.CAN_BUILD):
            return True
        return False

    def target_tile(self) -> Tuple[int, int]:
        view = self.state.view
        gx, gy = view.screen_to_global(*self.input_manager.cursor_position())
        return view.global_to_tile(gx, gy)

    # --- Decision ---

    def plan(self, x: int, y: int) -> Optional[BuildAction]:
        """Evaluates the current selection at (x, y) without mutating anything."""
        state = self.state
        sel = state.selection
        props = state.rules[sel.build_type]

        if not state.contains(x, y):
            return None
        if props.has(TerrainBits.CAN_BUY) and not is_buildable(x, y, state.entity_manager):
            return None

        if sel.build_type == Terrain.BULLDOZE:
            return self._plan_bulldoze(x, y, props)
        return self._plan_construction(x, y, props)

    def _plan_bulldoze(self, x: int, y: int, props: TerrainProperties) -> Optional[BuildAction]:
        state = self.state
        lu_props = state.rules[state.land_use.get(x, y)]

        if lu_props.has(TerrainBits.IS_WAREHOUSE) and self.is_last_warehouse():
            return None
        if not lu_props.has(TerrainBits.CAN_BUILD):
            return None
        if not state.stock.can_pay(props.build_cost):
            return None
        return BuildAction(ActionKind.BULLDOZE, x, y, Terrain.BULLDOZE, dict(props.build_cost))

    def _plan_construction(self, x: int, y: int, props: TerrainProperties) -> Optional[BuildAction]:
        guards = (self._can_afford, self._has_population_room)
        if not all(guard(props) for guard in guards):
            return None

        if props.has(TerrainBits.IS_TERRAIN):
            return self._plan_terrain(x, y, props)
        return self._plan_land_use(x, y, props)

    def _can_afford(self, props: TerrainProperties) -> bool:
        return self.state.stock.can_pay(props.build_cost)

    def _has_population_room(self, props: TerrainProperties) -> bool:
        stock = self.state.stock
        return props.population <= 0 or stock.population + props.population <= stock.max_population

    def _plan_terrain(self, x: int, y: int, props: TerrainProperties) -> Optional[BuildAction]:
        sel = self.state.selection
        here = self.state.terrain.get(x, y)
        override = sel.allow_remove and here != Terrain.AIR and here != sel.build_type
        if here not in props.build_on and not override:
            return None
        return BuildAction(ActionKind.PLACE_TERRAIN, x, y, sel.build_type, dict(props.build_cost),
                           rand_sprite=sel.rand_sprite, clear_existing=here != Terrain.AIR)

    def _plan_land_use(self, x: int, y: int, props: TerrainProperties) -> Optional[BuildAction]:
        state = self.state
        sel = state.selection
        if state.terrain.get(x, y) not in props.build_on:
            return None

        here = state.land_use.get(x, y)
        natural = not state.rules[here].has(TerrainBits.CAN_BUY)
        if here != Terrain.AIR and not (natural and props.has(TerrainBits.CAN_BUY)):
            return None
        return BuildAction(ActionKind.PLACE_LAND_USE, x, y, sel.build_type, dict(props.build_cost),
                           rand_sprite=sel.rand_sprite, clear_existing=here != Terrain.AIR)

    def is_last_warehouse(self) -> bool:
        return self.state.entity_manager.count_with(IsWarehouse) <= 1

    # --- Mutation ---

    def apply(self, action: BuildAction):
        """Applies a planned action to layers, entities and stock as one unit."""
        state = self.state
        fac = state.factory
        x, y = action.x, action.y

        if action.kind == ActionKind.BULLDOZE:
            removed = state.land_use.get(x, y)
            fac.clear(x, y, is_terrain=False)
            Logger.gameplay(f"Bulldozed {removed.name.lower()} at ({x}, {y})")
        else:
            is_terrain = action.kind == ActionKind.PLACE_TERRAIN
            if action.clear_existing:
                fac.clear(x, y, is_terrain=is_terrain)
            fac.set(x, y, action.build_type, action.rand_sprite)
            Logger.gameplay(f"Built {action.build_type.name.lower()} at ({x}, {y})")

        state.stock.pay(action.cost)
        # Population changed with the structure, recount before the menu reads it
        if self.stats is not None:
            self.stats.update(0.0)
        self.ui.replace_button(state.stock, state.rules)
