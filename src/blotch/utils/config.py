"""
YAML configuration loading.
"""

from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Mapping
import yaml


class ConfigLoader:
    """Load YAML configuration files from a directory."""

    def __init__(self, config_dir: Path):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing ``*.yaml`` files

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        self.config_dir = Path(config_dir)
        if not self.config_dir.is_dir():
            raise FileNotFoundError(f"Config directory not found: {config_dir}")

    def path_for(self, config_name: str) -> Path:
        return self.config_dir / f"{config_name}.yaml"

    def load(self, config_name: str) -> Dict[str, Any]:
        """
        Load one configuration file.

        Args:
            config_name: File name without the ``.yaml`` extension

        Returns:
            Parsed mapping (empty if the file is empty)

        Raises:
            FileNotFoundError: If the file doesn't exist
            yaml.YAMLError: If the file is not valid YAML
            ValueError: If the top level is not a mapping
        """
        config_path = self.path_for(config_name)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "r") as f:
            config = yaml.safe_load(f)

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ValueError(f"Config file must contain a mapping: {config_path}")
        return config

    def load_all(self) -> Dict[str, Dict[str, Any]]:
        """Load every config file, keyed by file stem."""
        return {path.stem: self.load(path.stem) for path in sorted(self.config_dir.glob("*.yaml"))}


def load_config(config_dir: Path, config_name: str) -> Dict[str, Any]:
    """Convenience wrapper around ``ConfigLoader(config_dir).load(config_name)``."""
    return ConfigLoader(config_dir).load(config_name)


def apply_overrides(config: Mapping[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``config`` with dotted-key overrides applied.

    ``None`` values are skipped so unset CLI options leave the file value alone.

    Example:
        apply_overrides(cfg, {"seed": 7, "image.size": 64})
    """
    result = deepcopy(dict(config))
    for dotted_key, value in overrides.items():
        if value is None:
            continue
        *parents, leaf = dotted_key.split(".")
        node = result
        for key in parents:
            node = node.setdefault(key, {})
        node[leaf] = value
    return result
