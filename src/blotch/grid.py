"""
Grid state, pixels and the recency buffer used during generation.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

Color = Tuple[int, int, int]
Coordinate = Tuple[int, int]


class PlacementInvariantError(RuntimeError):
    """Internal bookkeeping of the placement engine is inconsistent."""


@dataclass(frozen=True)
class Pixel:
    """Single placed pixel."""

    color: Color
    loc: Coordinate  # Grid position, always in-bounds
    center: Coordinate  # Anchor of the blotch this pixel belongs to


class GridState:
    """
    Square grid of optional pixels, indexed ``[x][y]``.

    A cell is filled exactly once and never cleared.
    """

    def __init__(self, size: int):
        self.size = size
        self._cells: List[List[Optional[Pixel]]] = [[None] * size for _ in range(size)]
        self._filled = 0

    def in_bounds(self, loc: Coordinate) -> bool:
        x, y = loc
        return 0 <= x < self.size and 0 <= y < self.size

    def is_filled(self, loc: Coordinate) -> bool:
        x, y = loc
        return self._cells[x][y] is not None

    def get(self, loc: Coordinate) -> Optional[Pixel]:
        x, y = loc
        return self._cells[x][y]

    def place(self, pixel: Pixel):
        """
        Commit a pixel at its location.

        Raises:
            PlacementInvariantError: If the cell is already filled
        """
        x, y = pixel.loc
        if self._cells[x][y] is not None:
            raise PlacementInvariantError(f"Cell {pixel.loc} is already filled")

        self._cells[x][y] = pixel
        self._filled += 1

    @property
    def filled_count(self) -> int:
        return self._filled

    def is_complete(self) -> bool:
        return self._filled == self.size * self.size

    def all_coordinates(self) -> Iterator[Coordinate]:
        """All coordinates, ``x`` outer and ``y`` inner."""
        for x in range(self.size):
            for y in range(self.size):
                yield (x, y)

    def open_coordinates(self) -> Iterator[Coordinate]:
        for loc in self.all_coordinates():
            if not self.is_filled(loc):
                yield loc

    def pixels(self) -> Iterator[Pixel]:
        for column in self._cells:
            for pixel in column:
                if pixel is not None:
                    yield pixel

    def color_array(self) -> np.ndarray:
        """
        Colors as a ``(size, size, 3)`` uint8 array in image order ``[y, x]``.

        Unfilled cells are black.
        """
        colors = np.zeros((self.size, self.size, 3), dtype=np.uint8)
        for pixel in self.pixels():
            x, y = pixel.loc
            colors[y, x] = pixel.color
        return colors

    def center_array(self) -> np.ndarray:
        """
        Blotch centers as a ``(size, size, 2)`` int64 array in image order.

        Unfilled cells hold -1.
        """
        centers = np.full((self.size, self.size, 2), -1, dtype=np.int64)
        for pixel in self.pixels():
            x, y = pixel.loc
            centers[y, x] = pixel.center
        return centers


class RecencyBuffer:
    """Most-recent-first history of placed pixels with fixed capacity."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._pixels = deque(maxlen=capacity)

    def push(self, pixel: Pixel):
        """Insert at the front, evicting the oldest entry when full."""
        self._pixels.appendleft(pixel)

    def __len__(self) -> int:
        return len(self._pixels)

    def __iter__(self) -> Iterator[Pixel]:
        return iter(self._pixels)

    def __getitem__(self, index: int) -> Pixel:
        return self._pixels[index]
