"""
Result extraction from a finished class tree.

Turns the leaves of the tree into the dominant color list and renders the
label map into output buffers: the posterized image, a compact 8-bit label
map and a false-color classification overlay for inspection.
"""

from typing import Dict, List

import numpy as np
from loguru import logger

from .tree import ColorClassTree, ColorNode

ORDER_TREE = "tree"
ORDER_PROMINENCE = "prominence"
SUPPORTED_ORDERS = (ORDER_TREE, ORDER_PROMINENCE)

# Label colors for the classification overlay
CLASSIFICATION_PALETTE = np.array([
    (0, 0, 0),
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (0, 255, 255),
    (255, 0, 255),
    (128, 128, 128),
    (128, 255, 128),
    (32, 32, 32),
    (255, 128, 128),
    (128, 128, 255),
    (255, 255, 255),
    (32, 128, 128),
    (128, 32, 128),
    (128, 128, 32),
    (128, 32, 32),
    (32, 128, 32),
], dtype=np.uint8)


def denormalize(mean: np.ndarray) -> np.ndarray:
    """Scale a [0, 1] color back to uint8, rounding to nearest."""
    return np.clip(np.rint(np.asarray(mean) * 255.0), 0, 255).astype(np.uint8)


def ordered_leaves(tree: ColorClassTree, order: str = ORDER_TREE) -> List[ColorNode]:
    """
    Leaves in the requested order.

    'tree' keeps breadth-first discovery order; 'prominence' sorts by pixel
    count, largest first, keeping discovery order among equal counts.
    """
    if order not in SUPPORTED_ORDERS:
        raise ValueError(f"Unsupported order '{order}'. Supported: {', '.join(SUPPORTED_ORDERS)}")

    leaves = tree.leaves()
    if order == ORDER_PROMINENCE:
        leaves = sorted(leaves, key=lambda node: -node.pixel_count)
    return leaves


def dominant_colors(tree: ColorClassTree, order: str = ORDER_TREE) -> np.ndarray:
    """Return a (k, 3) uint8 array with one color per leaf."""
    leaves = ordered_leaves(tree, order)
    return np.array([denormalize(leaf.mean) for leaf in leaves], dtype=np.uint8).reshape(-1, 3)


def leaf_ratios(tree: ColorClassTree, order: str = ORDER_TREE) -> List[float]:
    """Share of the image covered by each leaf, in the same order as dominant_colors."""
    leaves = ordered_leaves(tree, order)
    total = sum(leaf.pixel_count for leaf in leaves)
    if total == 0:
        return [0.0 for _ in leaves]
    return [leaf.pixel_count / total for leaf in leaves]


def _leaf_lookup(labels: np.ndarray, tree: ColorClassTree, values: np.ndarray) -> np.ndarray:
    """Map every label in the image to the row of values belonging to its leaf."""
    leaves = tree.leaves()
    table_size = max(int(labels.max(initial=0)), max(leaf.classid for leaf in leaves)) + 1
    index = np.full(table_size, -1, dtype=np.int64)
    for i, leaf in enumerate(leaves):
        index[leaf.classid] = i

    positions = index[labels]
    if np.any(positions < 0):
        stray = np.unique(labels[positions < 0]).tolist()
        raise ValueError(f"Label map contains ids that are not leaves: {stray}")
    return values[positions]


def quantized_image(labels: np.ndarray, tree: ColorClassTree) -> np.ndarray:
    """Replace every pixel with the mean color of its class."""
    colors = dominant_colors(tree, ORDER_TREE)
    return _leaf_lookup(labels, tree, colors).astype(np.uint8)


def compact_labels(labels: np.ndarray, tree: ColorClassTree) -> np.ndarray:
    """
    Renumber class ids to 0..k-1 following breadth-first leaf order.

    Class ids grow by two with every split and may exceed 255; the compact
    map always fits in 8 bits because k <= 255.
    """
    positions = np.arange(len(tree.leaves()), dtype=np.uint8)
    return _leaf_lookup(labels, tree, positions)


def classification_overlay(labels: np.ndarray, tree: ColorClassTree) -> np.ndarray:
    """Paint each class with a fixed, easily distinguishable color."""
    compact = compact_labels(labels, tree)
    palette_size = len(CLASSIFICATION_PALETTE)
    if len(tree.leaves()) > palette_size:
        logger.warning(
            f"{len(tree.leaves())} classes but only {palette_size} overlay colors; colors will repeat"
        )
    return CLASSIFICATION_PALETTE[compact.astype(np.intp) % palette_size]


def class_summary(tree: ColorClassTree, order: str = ORDER_TREE) -> List[Dict]:
    """Per-leaf summary used by the API and CLI outputs."""
    leaves = ordered_leaves(tree, order)
    ratios = leaf_ratios(tree, order)
    return [
        {
            "class_id": leaf.classid,
            "rgb": denormalize(leaf.mean).tolist(),
            "pixel_count": leaf.pixel_count,
            "ratio": ratio,
        }
        for leaf, ratio in zip(leaves, ratios)
    ]
