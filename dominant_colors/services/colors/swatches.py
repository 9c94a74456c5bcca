"""
Swatch Rendering Module

Provides utilities for creating visual color palette representations.
Generates a palette strip with one square tile per dominant color.
"""

from typing import Sequence, Tuple

import numpy as np
from loguru import logger


def rgb_to_hex(rgb_u8: Sequence[int]) -> str:
    """Convert RGB uint8 triple to hex color string."""
    r, g, b = [int(x) for x in rgb_u8]
    return f"#{r:02X}{g:02X}{b:02X}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color string to RGB tuple."""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def render_palette_strip(colors: Sequence[Sequence[int]], tile_size: int = 64) -> np.ndarray:
    """
    Render a horizontal strip of square color tiles.

    Args:
        colors: Sequence of RGB uint8 triples, drawn left to right
        tile_size: Edge length of each tile in pixels

    Returns:
        RGB image of shape (tile_size, tile_size * len(colors), 3)
    """
    if len(colors) == 0:
        raise ValueError("Empty colors list provided")
    if tile_size <= 0:
        raise ValueError("tile_size must be positive")

    k = len(colors)
    logger.debug(f"Rendering palette strip with {k} colors, tile_size={tile_size}")

    img = np.zeros((tile_size, tile_size * k, 3), dtype=np.uint8)
    for i, color in enumerate(colors):
        x_start = i * tile_size
        x_end = (i + 1) * tile_size
        img[:, x_start:x_end, :] = np.asarray(color, dtype=np.uint8)

    return img
