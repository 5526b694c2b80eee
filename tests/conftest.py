from pathlib import Path

import pytest
from hypothesis import settings

from blotch.placement import BlotchConfig

settings.register_profile("default", deadline=None, max_examples=50)
settings.load_profile("default")

CONFIG_DIR = Path(__file__).parent.parent / "config"


@pytest.fixture()
def config_dir() -> Path:
    return CONFIG_DIR


@pytest.fixture()
def small_config() -> BlotchConfig:
    """Small grid that exercises seeding, growth and fallback paths."""

    return BlotchConfig(
        size=12,
        num_centers=3,
        num_lookback=50,
        start_spread=0.5,
        cont_spread=0.1,
        seed=19,
    )
