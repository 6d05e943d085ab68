import math
from dataclasses import dataclass
from typing import Tuple
import pygame

def _div(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    return int(a / b)

@dataclass
class View:
    """
    Camera over the isometric plane.

    Three coordinate spaces are involved: screen pixels, the "global" logical
    plane (camera position x, y lives here) and integer tile indices.
    """
    tile_width: int = 48
    tile_height: int = 24
    x: int = 0
    y: int = 0
    zoom: float = 1.0

    def offset(self) -> Tuple[int, int]:
        """Pixel offset of the camera."""
        return int(self.x * self.zoom), int(self.y * self.zoom)

    def bounds(self, width: int, height: int) -> pygame.Rect:
        """
        Part of the global plane visible in a width x height viewport, with a
        margin so partially visible tiles at the edges are included.
        """
        vw, vh = int(width / self.zoom), int(height / self.zoom)
        left, top = self.x - self.tile_width, self.y - 3 * self.tile_height
        right, bottom = self.x + vw, self.y + vh - self.tile_height
        return pygame.Rect(left, top, right - left, bottom - top)

    def tile_to_screen(self, x: int, y: int) -> Tuple[int, int]:
        """Top-left corner of a tile's footprint on the global plane."""
        return (_div((x - y) * self.tile_width, 2),
                _div((x + y) * self.tile_height, 2))

    def tile_center(self, x: int, y: int) -> Tuple[int, int]:
        px, py = self.tile_to_screen(x, y)
        return px + self.tile_width // 2, py + self.tile_height // 2

    def screen_to_global(self, x: int, y: int) -> Tuple[int, int]:
        return (self.x + int(x / self.zoom),
                self.y + int(y / self.zoom))

    def global_to_screen(self, x: int, y: int) -> Tuple[int, int]:
        return (int((x - self.x) * self.zoom),
                int((y - self.y) * self.zoom))

    def global_to_tile(self, x: int, y: int) -> Tuple[int, int]:
        """Tile whose diamond contains the global point."""
        fx = x / self.tile_width
        fy = y / self.tile_height
        return (math.floor(fx + fy - 0.5),
                math.floor(fy - fx + 0.5))

    def screen_to_tile(self, x: int, y: int) -> Tuple[int, int]:
        return self.global_to_tile(*self.screen_to_global(x, y))

    def to_dict(self) -> dict:
        return {
            "tile_width": self.tile_width,
            "tile_height": self.tile_height,
            "x": self.x,
            "y": self.y,
            "zoom": self.zoom,
        }
