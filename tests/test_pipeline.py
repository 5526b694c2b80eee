"""End-to-end pipeline tests."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import pytest

from blotch.pipeline import Pipeline, PipelineConfig
from blotch.placement import BlotchConfig
from blotch.rasterizer import format_filename
from blotch.utils.config import load_config
from blotch.utils.validation import validate_hdf5_file, validate_image_file


def _pipeline_config(**overrides) -> PipelineConfig:
    raw = {
        "output": {"formats": ["png", "hdf5"], "center_viz": True},
        "seed": {"base": 100, "auto_increment": True},
        "validation": {"check_outputs": True},
    }
    config = PipelineConfig.from_dict(raw)
    return replace(config, **overrides)


class TestPipelineConfig:
    def test_shipped_pipeline_config(self, config_dir: Path) -> None:
        config = PipelineConfig.from_dict(load_config(config_dir, "pipeline"))

        assert config.formats == ["png"]
        assert config.base_seed == 19
        assert config.auto_increment is True

    def test_unknown_format_rejected(self) -> None:
        with pytest.raises(ValueError):
            PipelineConfig.from_dict({"output": {"formats": ["gif"]}})

    def test_defaults(self) -> None:
        config = PipelineConfig.from_dict({})
        assert config.formats == ["png"]
        assert config.base_seed is None
        assert config.check_outputs is True


class TestPipeline:
    """Generate, write and validate images."""

    def test_generate_image_writes_all_outputs(
        self, tmp_path: Path, small_config: BlotchConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        pipeline = Pipeline(small_config, _pipeline_config(), tmp_path)

        with caplog.at_level(logging.INFO):
            output = pipeline.generate_image(2)

        config = pipeline.config_for(2)
        assert config.seed == 102
        assert output == tmp_path / "images" / format_filename(config)
        assert validate_image_file(output, small_config.size)
        assert validate_hdf5_file(pipeline.paths.get_grid_path(config), small_config.size)
        assert pipeline.paths.get_viz_path(config).exists()
        assert f"Start {format_filename(config)}" in caplog.text

    def test_seed_without_auto_increment(self, tmp_path: Path, small_config: BlotchConfig) -> None:
        pipeline = Pipeline(small_config, _pipeline_config(auto_increment=False), tmp_path)
        assert pipeline.config_for(5).seed == 100

    def test_falls_back_to_blotch_seed(self, tmp_path: Path, small_config: BlotchConfig) -> None:
        pipeline = Pipeline(small_config, _pipeline_config(base_seed=None), tmp_path)
        assert pipeline.config_for(1).seed == small_config.seed + 1

    def test_invalid_config_reports_failure(self, tmp_path: Path, small_config: BlotchConfig) -> None:
        """Validation errors are logged and the image is reported as failed."""

        bad = replace(small_config, num_centers=small_config.size ** 2 + 1)
        pipeline = Pipeline(bad, _pipeline_config(), tmp_path)

        assert pipeline.generate_image(0) is None
        assert not any((tmp_path / "images").iterdir())
