"""
PCA-based color partitioning.

Drives the class tree: starting from a single class holding every pixel,
repeatedly splits the class with the largest color variance along its
principal axis until the requested number of classes exists.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np
from loguru import logger

from .errors import DegenerateSplit, EmptyImage, InvalidColorCount
from .results import (
    ORDER_TREE,
    classification_overlay,
    compact_labels,
    dominant_colors,
    quantized_image,
)
from .splitter import split_class
from .statistics import compute_stats, normalize_pixels
from .tree import ROOT_CLASS_ID, ColorClassTree

MIN_COLOR_COUNT = 1
MAX_COLOR_COUNT = 255


@dataclass
class PartitionResult:
    """Finished class tree together with the label map it produced."""
    tree: ColorClassTree
    labels: np.ndarray
    count: int
    splits: int
    terminal_classes: List[int] = field(default_factory=list)

    def colors(self, order: str = ORDER_TREE) -> np.ndarray:
        return dominant_colors(self.tree, order)

    def quantized(self) -> np.ndarray:
        return quantized_image(self.labels, self.tree)

    def compact_labels(self) -> np.ndarray:
        return compact_labels(self.labels, self.tree)

    def classification(self) -> np.ndarray:
        return classification_overlay(self.labels, self.tree)


def validate_color_count(count) -> int:
    """Reject counts that cannot be represented by single-byte class ids."""
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidColorCount(count, MIN_COLOR_COUNT, MAX_COLOR_COUNT)
    if count < MIN_COLOR_COUNT or count > MAX_COLOR_COUNT:
        raise InvalidColorCount(count, MIN_COLOR_COUNT, MAX_COLOR_COUNT)
    return int(count)


def validate_image(image: np.ndarray) -> np.ndarray:
    """Ensure a non-empty (H, W, 3) image."""
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    height, width = image.shape[:2]
    if width == 0 or height == 0:
        raise EmptyImage(width, height)
    return image


def find_dominant_colors(image: np.ndarray, count: int) -> PartitionResult:
    """
    Partition an image into `count` color classes.

    Args:
        image: (H, W, 3) uint8 image in any 3-channel encoding
        count: Number of classes wanted (1-255)

    Returns:
        PartitionResult with the class tree and label map. The tree has
        fewer than `count` leaves only when no remaining class can be split,
        e.g. when the image has fewer distinct colors than requested.

    Raises:
        InvalidColorCount: If count is outside [1, 255]
        EmptyImage: If the image has zero width or height
    """
    count = validate_color_count(count)
    image = validate_image(image)
    height, width = image.shape[:2]

    logger.info(f"Partitioning {width}×{height} image into {count} classes")

    normalized = normalize_pixels(image)
    labels = np.full((height, width), ROOT_CLASS_ID, dtype=np.uint16)

    tree = ColorClassTree()
    root = tree.create_root()
    compute_stats(normalized, labels, root)

    terminal_classes: List[int] = []
    splits = 0
    while splits < count - 1:
        target = tree.max_eigenvalue_leaf()
        if target is None:
            logger.warning(
                f"No splittable classes left after {splits} splits; "
                f"returning {splits + 1} of {count} requested colors"
            )
            break

        id_base = tree.next_class_id()
        try:
            left, right = split_class(normalized, labels, id_base, id_base + 1, tree, target)
        except DegenerateSplit as e:
            logger.warning(f"{e}; keeping class {target.classid} as final")
            tree.mark_terminal(target)
            terminal_classes.append(target.classid)
            continue

        compute_stats(normalized, labels, left)
        compute_stats(normalized, labels, right)
        splits += 1

    logger.info(f"Partitioning complete: {splits} splits, {len(tree.leaves())} classes")

    return PartitionResult(
        tree=tree,
        labels=labels,
        count=count,
        splits=splits,
        terminal_classes=terminal_classes,
    )
