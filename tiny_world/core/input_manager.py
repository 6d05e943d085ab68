import pygame
from typing import Iterable, Optional, Set, Tuple
from tiny_world.utils.logger import Logger, LogCategory

MOUSE_LEFT = 1
MOUSE_RIGHT = 3

class InputManager:
    """
    Collects one tick worth of pygame events into edge-triggered queries:
    "was this key / button pressed during this tick".
    """
    def __init__(self, ui_manager=None):
        self.ui_manager = ui_manager

        # Logical states
        self.camera_move_vector = [0, 0] # [x, y]
        self.zoom_change = 0
        self.should_quit = False
        self.mouse_pos: Tuple[int, int] = (0, 0)

        self.keys_just_pressed: Set[int] = set()
        self.buttons_just_pressed: Set[int] = set()

        # Key mappings for camera panning
        self.key_map = {
            pygame.K_w: (0, -1),
            pygame.K_s: (0, 1),
            pygame.K_a: (-1, 0),
            pygame.K_d: (1, 0),
            pygame.K_UP: (0, -1),
            pygame.K_DOWN: (0, 1),
            pygame.K_LEFT: (-1, 0),
            pygame.K_RIGHT: (1, 0)
        }
        self.keys_held: Set[int] = set()

    def process_events(self, events: Optional[Iterable[pygame.event.Event]] = None):
        """
        Process this tick's events and update state.
        Reads the pygame event queue when no events are given.
        """
        self.camera_move_vector = [0, 0]
        self.zoom_change = 0
        self.keys_just_pressed.clear()
        self.buttons_just_pressed.clear()

        if events is None:
            events = pygame.event.get()

        for event in events:
            # Pass event to UI Manager first
            if self.ui_manager is not None:
                self.ui_manager.process_events(event)

            if event.type == pygame.QUIT:
                self.should_quit = True

            elif event.type == pygame.KEYDOWN:
                self.keys_just_pressed.add(event.key)
                self.keys_held.add(event.key)

            elif event.type == pygame.KEYUP:
                self.keys_held.discard(event.key)

            elif event.type == pygame.MOUSEWHEEL:
                self.zoom_change = event.y # +1 or -1 typically

            elif event.type == pygame.MOUSEMOTION:
                self.mouse_pos = event.pos

            elif event.type == pygame.MOUSEBUTTONDOWN:
                self.mouse_pos = event.pos
                self.buttons_just_pressed.add(event.button)
                Logger.log(LogCategory.INPUT, f"Mouse button {event.button} at {event.pos}")

        for key, (dx, dy) in self.key_map.items():
            if key in self.keys_held:
                self.camera_move_vector[0] += dx
                self.camera_move_vector[1] += dy

    def get_camera_movement(self) -> Tuple[int, int]:
        return tuple(self.camera_move_vector)

    def get_zoom_change(self) -> int:
        return self.zoom_change

    def cursor_position(self) -> Tuple[int, int]:
        return self.mouse_pos

    def is_key_just_pressed(self, key: int) -> bool:
        return key in self.keys_just_pressed

    def is_mouse_just_pressed(self, button: int) -> bool:
        return button in self.buttons_just_pressed
