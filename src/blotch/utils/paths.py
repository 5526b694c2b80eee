"""
Output path management.
"""

from pathlib import Path
from typing import Dict

from blotch.placement import BlotchConfig
from blotch.rasterizer import format_filename


class PathManager:
    """Resolve where images, grids and logs are written."""

    def __init__(self, base_dir: Path, paths_config: Dict[str, str]):
        """
        Initialize path manager.

        Args:
            base_dir: Base directory for all generated data
            paths_config: ``paths`` section of pipeline.yaml
        """
        self.base_dir = Path(base_dir)
        self.images_dir = self.base_dir / paths_config.get("images", "images")
        self.grids_dir = self.base_dir / paths_config.get("grids", "grids")
        self.viz_dir = self.base_dir / paths_config.get("viz", "viz")
        self.logs_dir = self.base_dir / paths_config.get("logs", "logs")

        for dir_path in [self.images_dir, self.grids_dir, self.viz_dir, self.logs_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)

    def get_image_path(self, config: BlotchConfig, extension: str = "png") -> Path:
        return self.images_dir / format_filename(config, extension)

    def get_grid_path(self, config: BlotchConfig) -> Path:
        return self.grids_dir / format_filename(config, "hdf5")

    def get_viz_path(self, config: BlotchConfig) -> Path:
        stem = Path(format_filename(config)).stem
        return self.viz_dir / f"{stem}_centers.png"

    def get_log_path(self, image_id: int) -> Path:
        return self.logs_dir / f"image_{image_id:06d}.log"
