"""
Command line entry point.

    dominant-colors <image> <count> [--output-dir DIR]

Prints the dominant colors and writes classification.png, quantized.png and
palette.png next to each other in the output directory.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from dominant_colors.config import config
from dominant_colors.services.colors.errors import InvalidColorCount
from dominant_colors.services.colors.partition import find_dominant_colors, validate_color_count
from dominant_colors.services.colors.results import SUPPORTED_ORDERS, class_summary
from dominant_colors.services.colors.swatches import render_palette_strip, rgb_to_hex
from dominant_colors.services.imaging import downscale_to_width, load_image, write_png
from dominant_colors.utils.logging import get_logger

EXIT_OK = 0
EXIT_UNREADABLE_IMAGE = 1
EXIT_BAD_COUNT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dominant-colors",
        description="Find the dominant colors of an image by PCA color partitioning."
    )
    parser.add_argument("image", help="PNG or JPEG image to analyze")
    parser.add_argument("count", type=int, help=f"number of colors ({config.MIN_COUNT}-{config.MAX_COUNT})")
    parser.add_argument("--output-dir", default=".", type=Path,
                        help="directory for classification.png, quantized.png and palette.png")
    parser.add_argument("--work-width", default=config.WORK_WIDTH, type=int,
                        help="shrink the image to this width first, 0 keeps it (default: %(default)s)")
    parser.add_argument("--order", default=config.DEFAULT_ORDER, choices=SUPPORTED_ORDERS,
                        help="palette order (default: %(default)s)")
    parser.add_argument("--no-images", action="store_true", help="only print the colors")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="loguru level (default: %(default)s)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not config.validate_work_width(args.work_width):
        parser.error(f"--work-width must be between 0 and {config.MAX_WORK_WIDTH}")
    get_logger(args.log_level)

    try:
        count = validate_color_count(args.count)
    except InvalidColorCount as e:
        print(str(e), file=sys.stderr)
        return EXIT_BAD_COUNT

    try:
        image = load_image(args.image)
    except ValueError as e:
        print(f"Unable to open the file: {args.image} ({e})", file=sys.stderr)
        return EXIT_UNREADABLE_IMAGE

    image = downscale_to_width(image, args.work_width)
    result = find_dominant_colors(image, count)

    for entry in class_summary(result.tree, args.order):
        print(f"{rgb_to_hex(entry['rgb'])}  rgb={tuple(entry['rgb'])}  ratio={entry['ratio']:.3f}")

    if not args.no_images:
        output_dir: Path = args.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)
        write_png(output_dir / "classification.png", result.classification())
        write_png(output_dir / "quantized.png", result.quantized())
        write_png(output_dir / "palette.png",
                  render_palette_strip(result.colors(args.order), tile_size=config.PALETTE_TILE_SIZE))
        logger.info(f"Wrote classification.png, quantized.png and palette.png to {output_dir}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
