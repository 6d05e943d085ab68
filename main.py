import pygame
import pygame_gui
import os
import argparse
import sys
from tiny_world.core.config_manager import ConfigManager, ConfigError
from tiny_world.core.input_manager import InputManager
from tiny_world.core.time_manager import TimeManager
from tiny_world.world.sprites import SpriteIndex
from tiny_world.world.terrain import load_rules
from tiny_world.world.state import new_world
from tiny_world.world.save import save_world, load_world
from tiny_world.systems.build_system import BuildSystem
from tiny_world.systems.stats_system import StatsSystem
from tiny_world.systems.ui_system import UISystem
from tiny_world.utils.logger import Logger, LogCategory

def main():
    # 0. Parse Arguments
    parser = argparse.ArgumentParser(description="Tiny World")
    parser.add_argument("--headless", action="store_true", help="Run in headless mode (no GUI)")
    parser.add_argument("--config", default="config/balance.json", help="Balance config file")
    parser.add_argument("--load", default=None, help="Save file to load instead of generating a world")
    parser.add_argument("--save", default=None, help="Save the world under this name on exit")
    parser.add_argument("--save-dir", default="save", help="Folder for save files")
    parser.add_argument("--ticks", type=int, default=600, help="Ticks to simulate in headless mode")
    parser.add_argument("--quiet", action="store_true", help="Hide input and UI log lines")
    args = parser.parse_args()

    if args.quiet:
        Logger.mute(LogCategory.INPUT, LogCategory.UI)
    if args.headless:
        os.environ["SDL_VIDEODRIVER"] = "dummy"

    # 1. Static data. Any problem here is fatal.
    try:
        config_manager = ConfigManager(args.config)
        rules = load_rules(config_manager.get("terrain", {}))
        sprites = SpriteIndex(config_manager.get("sprites", []))
        state = load_world(args.load, rules, sprites) if args.load else new_world(config_manager, rules, sprites)
    except ConfigError as e:
        Logger.error(str(e))
        sys.exit(1)

    pygame.init()

    global_conf = config_manager.get("global", {})
    tick_rate = global_conf.get("tick_rate", 60)
    screen_width = global_conf.get("screen_width", 1280)
    screen_height = global_conf.get("screen_height", 720)

    time_manager = TimeManager(tick_rate=tick_rate)
    Logger.set_time_manager(time_manager)

    # 2. Display and UI (dummy driver when headless)
    screen = pygame.display.set_mode((screen_width, screen_height))
    pygame.display.set_caption(global_conf.get("title", "Tiny World"))
    ui_manager = pygame_gui.UIManager((screen_width, screen_height))

    input_manager = InputManager(ui_manager)
    ui_system = UISystem(screen, ui_manager, rules)
    stats_system = StatsSystem(state)
    build_system = BuildSystem(state, input_manager, ui_system, stats=stats_system)

    stats_system.update(0.0)
    ui_system.replace_button(state.stock, rules)
    Logger.info("Game Loop Started")

    # 3. Game Loop
    running = True
    while running:
        dt = time_manager.tick()

        events = pygame.event.get()
        input_manager.process_events(events)
        for event in events:
            ui_system.process_event(event, state.selection)

        if input_manager.should_quit:
            running = False

        # Camera
        move_x, move_y = input_manager.get_camera_movement()
        speed = config_manager.get("global.camera_speed", 8)
        state.view.x += move_x * speed
        state.view.y += move_y * speed
        zoom_change = input_manager.get_zoom_change()
        if zoom_change != 0:
            state.view.zoom = max(0.5, min(state.view.zoom * (2.0 ** zoom_change), 4.0))

        stats_system.update(dt)
        build_system.update(dt)

        if not args.headless:
            screen.fill((0, 0, 0))
            ui_system.update(dt)
            pygame.display.flip()
        elif time_manager.total_ticks >= args.ticks:
            Logger.info(f"Headless run finished after {time_manager.total_ticks} ticks, stock: {state.stock.to_dict()}")
            running = False

    if args.save:
        save_world(args.save_dir, args.save, state)

    config_manager.stop()
    pygame.quit()
    Logger.info("Game Terminated")

if __name__ == "__main__":
    main()
