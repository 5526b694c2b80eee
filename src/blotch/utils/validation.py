"""
Configuration and output file validation.
"""

from pathlib import Path
import logging

import h5py
from PIL import Image, UnidentifiedImageError

from blotch.placement import BlotchConfig

logger = logging.getLogger(__name__)

MAX_SEED = 2**64 - 1


def validate_blotch_config(config: BlotchConfig) -> BlotchConfig:
    """
    Reject configurations the placement engine does not support.

    Args:
        config: Configuration to check

    Returns:
        The same config, for chaining

    Raises:
        ValueError: Listing every invalid field
    """
    errors = []

    if not isinstance(config.size, int) or config.size <= 0:
        errors.append(f"size must be a positive integer (got {config.size!r})")
    elif not isinstance(config.num_centers, int) or not 0 <= config.num_centers <= config.size ** 2:
        errors.append(
            f"num_centers must be an integer in [0, {config.size ** 2}] (got {config.num_centers!r})"
        )

    if not isinstance(config.num_lookback, int) or config.num_lookback <= 0:
        errors.append(f"num_lookback must be a positive integer (got {config.num_lookback!r})")

    if not 0.0 <= config.start_spread <= 1.0:
        errors.append(f"start_spread must be in [0, 1] (got {config.start_spread!r})")

    if not config.cont_spread >= 0.0:
        errors.append(f"cont_spread must be >= 0 (got {config.cont_spread!r})")

    if not isinstance(config.seed, int) or not 0 <= config.seed <= MAX_SEED:
        errors.append(f"seed must be an integer in [0, 2**64) (got {config.seed!r})")

    if errors:
        raise ValueError("Invalid blotch config: " + "; ".join(errors))

    logger.debug(f"Blotch config validated: {config}")
    return config


def validate_image_file(file_path: Path, expected_size: int) -> bool:
    """
    Validate a generated image.

    Args:
        file_path: Path to the image
        expected_size: Expected side length in pixels

    Returns:
        True if valid, False otherwise
    """
    if not file_path.exists():
        logger.error(f"Image file does not exist: {file_path}")
        return False

    if file_path.stat().st_size == 0:
        logger.error(f"Image file is empty: {file_path}")
        return False

    try:
        with Image.open(file_path) as img:
            if img.size != (expected_size, expected_size):
                logger.error(
                    f"Image has size {img.size}, expected {expected_size}x{expected_size}: {file_path}"
                )
                return False
            if img.mode != "RGB":
                logger.error(f"Image has mode {img.mode}, expected RGB: {file_path}")
                return False
    except (OSError, UnidentifiedImageError) as e:
        logger.error(f"Error reading image file {file_path}: {e}")
        return False

    logger.debug(f"Image file validated: {file_path}")
    return True


def validate_hdf5_file(file_path: Path, expected_size: int) -> bool:
    """
    Validate an exported HDF5 grid.

    Args:
        file_path: Path to the .hdf5 file
        expected_size: Expected side length of the grid

    Returns:
        True if valid, False otherwise
    """
    if not file_path.exists():
        logger.error(f"HDF5 file does not exist: {file_path}")
        return False

    try:
        with h5py.File(file_path, "r") as f:
            missing_keys = [key for key in ("colors", "centers") if key not in f]
            if missing_keys:
                logger.error(f"HDF5 file missing keys {missing_keys}: {file_path}")
                return False

            if f["colors"].shape != (expected_size, expected_size, 3):
                logger.error(f"HDF5 colors have shape {f['colors'].shape}: {file_path}")
                return False
            if f["centers"].shape != (expected_size, expected_size, 2):
                logger.error(f"HDF5 centers have shape {f['centers'].shape}: {file_path}")
                return False
    except OSError as e:
        logger.error(f"Error reading HDF5 file {file_path}: {e}")
        return False

    logger.debug(f"HDF5 file validated: {file_path}")
    return True
