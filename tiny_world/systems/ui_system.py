import pygame
import pygame_gui
from pygame_gui.elements import UIPanel, UILabel, UIButton
from pygame_gui.core import ObjectID
from typing import Dict
from tiny_world.core.ecs import System
from tiny_world.world.selection import Selection
from tiny_world.world.stock import Stock
from tiny_world.world.terrain import Resource, Terrain, TerrainBits, TerrainRules
from tiny_world.utils.logger import Logger, LogCategory

def format_cost(cost) -> str:
    if not cost:
        return "free"
    return " ".join(f"{res.name.lower()}:{amount}" for res, amount in cost.items())

class UISystem(System):
    """Build menu along the bottom edge plus a stock readout."""
    def __init__(self, screen: pygame.Surface, manager: pygame_gui.UIManager, rules: TerrainRules):
        self.screen = screen
        self.manager = manager

        screen_width, screen_height = screen.get_size()

        # --- Build Panel (Bottom) ---
        button_size = 64
        buildable = [t for t, p in rules if p.has(TerrainBits.CAN_BUILD) or t == Terrain.BULLDOZE]
        panel_width = len(buildable) * (button_size + 4) + 10
        panel_height = button_size + 45
        self.build_panel = UIPanel(
            relative_rect=pygame.Rect(((screen_width - panel_width) // 2, screen_height - panel_height - 10),
                                      (panel_width, panel_height)),
            manager=self.manager,
            object_id=ObjectID(class_id='@build_panel', object_id='#build_panel')
        )

        self.stock_label = UILabel(
            relative_rect=pygame.Rect((5, 5), (panel_width - 10, 20)),
            text="",
            manager=self.manager,
            container=self.build_panel
        )

        self.buttons: Dict[Terrain, UIButton] = {}
        for i, terrain in enumerate(buildable):
            props = rules[terrain]
            self.buttons[terrain] = UIButton(
                relative_rect=pygame.Rect((5 + i * (button_size + 4), 30), (button_size, button_size)),
                text=props.name,
                manager=self.manager,
                container=self.build_panel,
                tool_tip_text=f"{props.name}: {format_cost(props.build_cost)}"
            )

    def mouse_inside(self, x: int, y: int) -> bool:
        return self.build_panel.get_abs_rect().collidepoint(x, y)

    def replace_button(self, stock: Stock, rules: TerrainRules):
        """Refreshes the stock readout and greys out what cannot be built right now."""
        resources = " ".join(f"{r.name.lower()}: {stock.get(r)}" for r in Resource)
        self.stock_label.set_text(f"{resources}  pop: {stock.population}/{stock.max_population}")

        for terrain, button in self.buttons.items():
            props = rules[terrain]
            affordable = stock.can_pay(props.build_cost)
            room = props.population <= 0 or stock.population + props.population <= stock.max_population
            if affordable and room:
                button.enable()
            else:
                button.disable()

    def process_event(self, event: pygame.event.Event, selection: Selection):
        """Selects the build type of a pressed menu button."""
        if event.type != pygame_gui.UI_BUTTON_PRESSED:
            return
        for terrain, button in self.buttons.items():
            if event.ui_element == button:
                selection.reset()
                selection.build_type = terrain
                selection.rand_sprite = True
                Logger.log(LogCategory.UI, f"Selected {terrain.name.lower()}")
                return

    def update(self, dt: float):
        self.manager.update(dt)
        self.manager.draw_ui(self.screen)
