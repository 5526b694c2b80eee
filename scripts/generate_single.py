#!/usr/bin/env python3
"""
Generate a single blotch image.

Usage:
    python scripts/generate_single.py --image-id 0 --output-dir data
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blotch.pipeline import Pipeline, PipelineConfig
from blotch.placement import BlotchConfig
from blotch.utils.config import apply_overrides, load_config
from blotch.utils.logging import setup_logging
from blotch.utils.paths import PathManager


def main():
    parser = argparse.ArgumentParser(description="Generate a single blotch image")
    parser.add_argument("--image-id", type=int, default=0, help="Image ID (offsets the seed)")
    parser.add_argument("--seed", type=int, default=None, help="Override the base seed")
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=Path(__file__).parent.parent / "config",
        help="Configuration directory",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(__file__).parent.parent / "data",
        help="Output directory",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO", help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )
    args = parser.parse_args()

    # Load configurations
    blotch_config_dict = load_config(args.config_dir, "blotch")
    pipeline_config_dict = apply_overrides(
        load_config(args.config_dir, "pipeline"), {"seed.base": args.seed}
    )

    blotch_config = BlotchConfig.from_dict(blotch_config_dict)
    pipeline_config = PipelineConfig.from_dict(pipeline_config_dict)

    # Setup logging
    paths = PathManager(args.output_dir, pipeline_config.paths)
    setup_logging(level=args.log_level, log_file=paths.get_log_path(args.image_id))

    pipeline = Pipeline(
        blotch_config=blotch_config,
        pipeline_config=pipeline_config,
        base_dir=args.output_dir,
    )

    output_path = pipeline.generate_image(args.image_id)

    if output_path:
        print(f"Success: {output_path}")
        sys.exit(0)
    else:
        print(f"Failed to generate image {args.image_id}")
        sys.exit(1)


if __name__ == "__main__":
    main()
