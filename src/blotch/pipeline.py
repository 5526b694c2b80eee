"""
Pipeline orchestration - generate, write and validate blotch images.
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional
import logging

from blotch.placement import BlotchConfig, BlotchPlacer
from blotch.rasterizer import Rasterizer, format_filename
from blotch.utils.paths import PathManager
from blotch.utils.validation import (
    validate_blotch_config,
    validate_hdf5_file,
    validate_image_file,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("png", "hdf5")


@dataclass
class PipelineConfig:
    """High-level pipeline configuration."""

    formats: List[str]
    center_viz: bool
    base_seed: Optional[int]
    auto_increment: bool
    paths: dict
    check_outputs: bool

    @classmethod
    def from_dict(cls, config: dict) -> "PipelineConfig":
        """Create config from dictionary."""
        output = config.get("output", {})
        seed = config.get("seed", {})

        formats = output.get("formats", ["png"])
        unknown = [fmt for fmt in formats if fmt not in OUTPUT_FORMATS]
        if unknown or not formats:
            raise ValueError(f"output.formats must be a non-empty subset of {OUTPUT_FORMATS}, got {formats}")

        return cls(
            formats=list(formats),
            center_viz=output.get("center_viz", False),
            base_seed=seed.get("base"),
            auto_increment=seed.get("auto_increment", False),
            paths=config.get("paths", {}),
            check_outputs=config.get("validation", {}).get("check_outputs", True),
        )


class Pipeline:
    """
    Generate blotch images from a base configuration.
    """

    def __init__(
        self,
        blotch_config: BlotchConfig,
        pipeline_config: PipelineConfig,
        base_dir: Path,
    ):
        """
        Initialize pipeline.

        Args:
            blotch_config: Generation parameters (seed may be replaced per image)
            pipeline_config: Output and seeding configuration
            base_dir: Base directory for all output
        """
        self.blotch_config = blotch_config
        self.pipeline_config = pipeline_config
        self.paths = PathManager(base_dir, pipeline_config.paths)
        self.rasterizer = Rasterizer()

        logger.info("Pipeline initialized")

    def config_for(self, image_id: int) -> BlotchConfig:
        """Blotch config for one image, with its derived seed."""
        return replace(self.blotch_config, seed=self._get_seed(image_id))

    def generate_image(self, image_id: int) -> Optional[Path]:
        """
        Generate a single image and write the configured outputs.

        Args:
            image_id: Image ID (offsets the seed when auto-increment is on)

        Returns:
            Path to the primary output file (or None if failed)
        """
        logger.info("=" * 60)
        logger.info(f"Generating image {image_id}")
        logger.info("=" * 60)

        try:
            config = validate_blotch_config(self.config_for(image_id))
            logger.info(f"Start {format_filename(config)}")

            # Step 1: Grow the grid
            logger.info("Step 1: Placing pixels...")
            grid = BlotchPlacer(config).generate()

            # Step 2: Write outputs
            logger.info("Step 2: Writing outputs...")
            outputs = []

            if "png" in self.pipeline_config.formats:
                image_path = self.rasterizer.save_image(grid, self.paths.get_image_path(config))
                if self.pipeline_config.check_outputs:
                    if not validate_image_file(image_path, config.size):
                        raise RuntimeError(f"Image validation failed: {image_path}")
                outputs.append(image_path)

            if "hdf5" in self.pipeline_config.formats:
                grid_path = self.rasterizer.save_hdf5(grid, self.paths.get_grid_path(config), config)
                if self.pipeline_config.check_outputs:
                    if not validate_hdf5_file(grid_path, config.size):
                        raise RuntimeError(f"HDF5 validation failed: {grid_path}")
                outputs.append(grid_path)

            # Step 3: Optional center visualization
            if self.pipeline_config.center_viz:
                logger.info("Step 3: Writing center visualization...")
                self.rasterizer.save_center_viz(grid, self.paths.get_viz_path(config))

            logger.info(f"Image {image_id} complete: {outputs[0]}")
            return outputs[0]

        except Exception as e:
            logger.error(f"Image {image_id} failed: {e}", exc_info=True)
            return None

    def _get_seed(self, image_id: int) -> int:
        """Get seed for this image."""
        base = self.pipeline_config.base_seed
        if base is None:
            base = self.blotch_config.seed
        if self.pipeline_config.auto_increment:
            return base + image_id
        return base
