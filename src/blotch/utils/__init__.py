"""
Utility modules for blotch image generation.
"""

from blotch.utils.config import load_config, apply_overrides, ConfigLoader
from blotch.utils.logging import setup_logging, get_logger
from blotch.utils.paths import PathManager
from blotch.utils.validation import validate_blotch_config, validate_image_file, validate_hdf5_file

__all__ = [
    "load_config",
    "apply_overrides",
    "ConfigLoader",
    "setup_logging",
    "get_logger",
    "PathManager",
    "validate_blotch_config",
    "validate_image_file",
    "validate_hdf5_file",
]
