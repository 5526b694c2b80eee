"""
Convert a finished grid to image files (PNG, HDF5, center visualization).
"""

from pathlib import Path
import logging

import h5py
import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

from blotch.grid import GridState
from blotch.placement import BlotchConfig

logger = logging.getLogger(__name__)


def _format_real(value: float) -> str:
    """Shortest round-trip text for a real, positional notation, no trailing point."""
    return np.format_float_positional(float(value), trim="-")


def format_filename(config: BlotchConfig, extension: str = "png") -> str:
    """
    Output filename encoding every configuration value.

    Example: ``img-1000-20-1000-0.5-0.1-19.png``
    """
    return (
        f"img-{config.size}-{config.num_centers}-{config.num_lookback}-"
        f"{_format_real(config.start_spread)}-{_format_real(config.cont_spread)}-"
        f"{config.seed}.{extension}"
    )


class Rasterizer:
    """Write a completed GridState to disk."""

    def to_image(self, grid: GridState) -> Image.Image:
        """
        Build an RGB image where pixel ``(x, y)`` is the grid color at ``(x, y)``.

        Raises:
            ValueError: If the grid is not completely filled
        """
        self._require_complete(grid)
        return Image.fromarray(grid.color_array())

    def save_image(self, grid: GridState, output_path: Path) -> Path:
        """
        Encode the grid as an image. Format follows the file suffix.

        Args:
            grid: Completed grid
            output_path: Destination file

        Returns:
            Path to the written image
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        image = self.to_image(grid)
        image.save(output_path)
        logger.info(f"✓ Saved image: {output_path}")
        return output_path

    def save_hdf5(self, grid: GridState, output_path: Path, config: BlotchConfig) -> Path:
        """
        Store raw colors and blotch centers in an HDF5 file.

        Datasets ``colors`` (uint8, ``[y, x, rgb]``) and ``centers``
        (int64, ``[y, x, (cx, cy)]``); config values are file attributes.
        """
        self._require_complete(grid)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with h5py.File(output_path, "w") as f:
            f.create_dataset("colors", data=grid.color_array(), compression="gzip")
            f.create_dataset("centers", data=grid.center_array(), compression="gzip")
            f.attrs["size"] = config.size
            f.attrs["num_centers"] = config.num_centers
            f.attrs["num_lookback"] = config.num_lookback
            f.attrs["start_spread"] = config.start_spread
            f.attrs["cont_spread"] = config.cont_spread
            # uint64 seeds do not fit an HDF5 int64 attribute
            f.attrs["seed"] = str(config.seed)

        logger.info(f"✓ Saved HDF5 grid: {output_path}")
        return output_path

    def save_center_viz(self, grid: GridState, output_path: Path) -> Path:
        """
        Colorize each pixel by the blotch center it grew from.

        Useful for seeing how blotches spread independently of their colors.
        """
        self._require_complete(grid)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        centers = grid.center_array()
        flat = centers.reshape(-1, 2)
        unique_centers, labels = np.unique(flat, axis=0, return_inverse=True)
        labels = labels.reshape(centers.shape[:2])
        logger.debug(f"Colorizing {len(unique_centers)} unique centers")

        colors_map = plt.cm.tab20(np.arange(20))
        palette = (colors_map[:, :3] * 255).astype(np.uint8)
        viz = palette[labels % 20]

        Image.fromarray(viz).save(output_path)
        logger.info(f"✓ Saved center visualization: {output_path}")
        return output_path

    @staticmethod
    def _require_complete(grid: GridState):
        if not grid.is_complete():
            raise ValueError(
                f"Grid is incomplete: {grid.filled_count}/{grid.size * grid.size} cells filled"
            )
