#!/usr/bin/env python3
"""
Generate a batch of blotch images with consecutive image IDs.

Usage:
    python scripts/generate_batch.py --num-images 10 --output-dir data
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blotch.pipeline import Pipeline, PipelineConfig
from blotch.placement import BlotchConfig
from blotch.utils.config import apply_overrides, load_config
from blotch.utils.logging import setup_logging, get_logger

logger = get_logger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Generate a batch of blotch images")
    parser.add_argument("--num-images", type=int, required=True, help="Number of images to generate")
    parser.add_argument("--start-id", type=int, default=0, help="Starting image ID")
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

    log_file = args.output_dir / "logs" / "batch_generation.log"
    setup_logging(level=args.log_level, log_file=log_file)

    logger.info(f"Starting batch generation: {args.num_images} images")

    blotch_config = BlotchConfig.from_dict(load_config(args.config_dir, "blotch"))
    pipeline_config = PipelineConfig.from_dict(
        apply_overrides(load_config(args.config_dir, "pipeline"), {"seed.base": args.seed})
    )
    if not pipeline_config.auto_increment:
        logger.warning("seed.auto_increment is off: every image in the batch will be identical")

    pipeline = Pipeline(
        blotch_config=blotch_config,
        pipeline_config=pipeline_config,
        base_dir=args.output_dir,
    )

    success_count = 0
    failed_images = []

    for i in range(args.num_images):
        image_id = args.start_id + i

        logger.info(f"Generating image {image_id} ({i+1}/{args.num_images})")

        if pipeline.generate_image(image_id):
            success_count += 1
        else:
            failed_images.append(image_id)

    # Summary
    logger.info("=" * 60)
    logger.info("Batch generation complete")
    logger.info(f"  Success: {success_count}/{args.num_images}")
    logger.info(f"  Failed: {len(failed_images)}")
    if failed_images:
        logger.info(f"  Failed image IDs: {failed_images}")
    logger.info("=" * 60)

    if success_count == args.num_images:
        sys.exit(0)
    elif success_count > 0:
        sys.exit(2)  # Partial success
    else:
        sys.exit(1)


if __name__ == "__main__":
    main()
