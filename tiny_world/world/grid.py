from typing import Any, Generic, TypeVar
import numpy as np

T = TypeVar('T')

class GridBoundsError(IndexError):
    """Raised on access outside the grid's fixed bounds."""
    pass

class Grid(Generic[T]):
    """
    Dense 2D store indexed by integer tile coordinates.

    Bounds are fixed at creation. Reads and writes outside them raise
    GridBoundsError; growing the grid is an explicit call to resize().
    """
    def __init__(self, width: int, height: int, fill: T, dtype: Any = object):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid grid size {width}x{height}")
        self.width = width
        self.height = height
        self.fill = fill
        self.dtype = dtype
        # Indexed as data[x, y], same as the tile coordinates
        self.data = np.full((width, height), fill, dtype=dtype)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int):
        if not self.contains(x, y):
            raise GridBoundsError(f"Tile ({x}, {y}) outside grid {self.width}x{self.height}")

    def get(self, x: int, y: int) -> T:
        self._check(x, y)
        value = self.data[x, y]
        # Hand out plain Python values, not numpy scalars
        return value.item() if isinstance(value, np.generic) else value

    def set(self, x: int, y: int, value: T):
        self._check(x, y)
        self.data[x, y] = value

    def resize(self, width: int, height: int):
        """Resizes in place, keeping the overlapping region and filling new cells."""
        resized = np.full((width, height), self.fill, dtype=self.dtype)
        w, h = min(width, self.width), min(height, self.height)
        resized[:w, :h] = self.data[:w, :h]
        self.data = resized
        self.width = width
        self.height = height

    def tiles(self):
        """Yields every (x, y) in bounds, column by column."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y
