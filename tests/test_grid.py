"""Tests for grid state and the recency buffer."""

from __future__ import annotations

import numpy as np
import pytest

from blotch.grid import GridState, Pixel, PlacementInvariantError, RecencyBuffer


def _pixel(loc, color=(0, 0, 0), center=None) -> Pixel:
    return Pixel(color=color, loc=loc, center=center if center is not None else loc)


class TestGridState:
    """Occupancy bookkeeping for the generation grid."""

    def test_cells_fill_once(self) -> None:
        """A second placement at the same location is an internal fault."""

        grid = GridState(3)
        grid.place(_pixel((1, 2)))

        assert grid.is_filled((1, 2))
        assert grid.filled_count == 1
        with pytest.raises(PlacementInvariantError):
            grid.place(_pixel((1, 2), color=(9, 9, 9)))
        assert grid.get((1, 2)).color == (0, 0, 0)

    def test_open_coordinates_shrink_as_cells_fill(self) -> None:
        grid = GridState(2)
        grid.place(_pixel((0, 1)))

        assert list(grid.open_coordinates()) == [(0, 0), (1, 0), (1, 1)]
        assert not grid.is_complete()

    def test_color_array_uses_image_order(self) -> None:
        """Arrays are indexed [y, x] so they can be handed straight to an image encoder."""

        grid = GridState(2)
        grid.place(_pixel((1, 0), color=(10, 20, 30), center=(0, 1)))

        colors = grid.color_array()
        centers = grid.center_array()

        assert colors.shape == (2, 2, 3)
        assert colors.dtype == np.uint8
        assert tuple(colors[0, 1]) == (10, 20, 30)
        assert tuple(colors[1, 0]) == (0, 0, 0)
        assert tuple(centers[0, 1]) == (0, 1)
        assert tuple(centers[1, 1]) == (-1, -1)

    def test_in_bounds(self) -> None:
        grid = GridState(4)
        assert grid.in_bounds((0, 3))
        assert not grid.in_bounds((4, 0))
        assert not grid.in_bounds((-1, 2))


class TestRecencyBuffer:
    """Most-recent-first history with bounded capacity."""

    def test_front_insertion_and_eviction(self) -> None:
        buffer = RecencyBuffer(2)
        a, b, c = _pixel((0, 0)), _pixel((0, 1)), _pixel((0, 2))

        buffer.push(a)
        buffer.push(b)
        buffer.push(c)

        assert list(buffer) == [c, b]
        assert buffer[0] is c
        assert len(buffer) == 2

    def test_capacity_one_keeps_latest(self) -> None:
        buffer = RecencyBuffer(1)
        for y in range(5):
            buffer.push(_pixel((0, y)))
        assert [p.loc for p in buffer] == [(0, 4)]
