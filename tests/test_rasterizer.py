"""Tests for image, HDF5 and visualization output."""

from __future__ import annotations

from pathlib import Path

import h5py
import numpy as np
import pytest
from PIL import Image

from blotch.grid import GridState, Pixel
from blotch.placement import BlotchConfig, BlotchPlacer
from blotch.rasterizer import Rasterizer, format_filename


def _filled_grid(size: int) -> GridState:
    grid = GridState(size)
    for x in range(size):
        for y in range(size):
            grid.place(Pixel(color=(x * 10, y * 10, 7), loc=(x, y), center=(x, 0)))
    return grid


class TestFormatFilename:
    """Filenames encode all six configuration values."""

    def test_default_config_name(self) -> None:
        config = BlotchConfig(
            size=1000, num_centers=20, num_lookback=1000, start_spread=0.5, cont_spread=0.1, seed=19
        )
        assert format_filename(config) == "img-1000-20-1000-0.5-0.1-19.png"

    def test_integral_reals_drop_fraction(self) -> None:
        config = BlotchConfig(
            size=8, num_centers=0, num_lookback=1, start_spread=1.0, cont_spread=0.0, seed=2**64 - 1
        )
        assert format_filename(config, "hdf5") == f"img-8-0-1-1-0-{2**64 - 1}.hdf5"

    def test_small_reals_stay_positional(self) -> None:
        """Tiny spreads are written out in full rather than in exponent form."""

        config = BlotchConfig(
            size=8, num_centers=1, num_lookback=1, start_spread=0.00001, cont_spread=0.1, seed=1
        )
        assert format_filename(config) == "img-8-1-1-0.00001-0.1-1.png"


class TestRasterizer:
    """Pixel mapping and file writing for finished grids."""

    def test_pixel_xy_matches_grid_xy(self) -> None:
        grid = _filled_grid(3)
        image = Rasterizer().to_image(grid)

        assert image.size == (3, 3)
        assert image.mode == "RGB"
        for x in range(3):
            for y in range(3):
                assert image.getpixel((x, y)) == grid.get((x, y)).color

    def test_incomplete_grid_rejected(self) -> None:
        """Partial images are never produced."""

        grid = GridState(2)
        grid.place(Pixel(color=(1, 2, 3), loc=(0, 0), center=(0, 0)))

        with pytest.raises(ValueError, match="incomplete"):
            Rasterizer().to_image(grid)

    def test_save_image_round_trips_colors(self, tmp_path: Path) -> None:
        grid = _filled_grid(4)
        path = Rasterizer().save_image(grid, tmp_path / "nested" / "out.png")

        with Image.open(path) as img:
            np.testing.assert_array_equal(np.asarray(img), grid.color_array())

    def test_save_hdf5(self, tmp_path: Path, small_config: BlotchConfig) -> None:
        grid = BlotchPlacer(small_config).generate()
        path = Rasterizer().save_hdf5(grid, tmp_path / "grid.hdf5", small_config)

        with h5py.File(path, "r") as f:
            np.testing.assert_array_equal(f["colors"][()], grid.color_array())
            np.testing.assert_array_equal(f["centers"][()], grid.center_array())
            assert f.attrs["size"] == small_config.size
            assert f.attrs["seed"] == str(small_config.seed)

    def test_save_center_viz_groups_by_center(self, tmp_path: Path) -> None:
        """Pixels sharing a center share a visualization color."""

        grid = _filled_grid(4)
        path = Rasterizer().save_center_viz(grid, tmp_path / "viz.png")

        with Image.open(path) as img:
            viz = np.asarray(img)

        # Centers are (x, 0), so every column is one color and columns differ
        for x in range(4):
            assert (viz[:, x] == viz[0, x]).all()
        assert len({tuple(viz[0, x]) for x in range(4)}) == 4
