"""
Per-class color statistics.

Computes the mean vector and covariance matrix of every pixel currently
assigned to a color class. Colors are normalized to [0, 1] before any
accumulation so that summing outer products over large images stays well
conditioned.
"""

from typing import TYPE_CHECKING, Tuple

import numpy as np
from loguru import logger

if TYPE_CHECKING:
    from .tree import ColorNode


def normalize_pixels(image: np.ndarray) -> np.ndarray:
    """Convert a (H, W, 3) uint8 image to float64 colors in [0, 1]."""
    return np.asarray(image, dtype=np.float64) / 255.0


def compute_stats(normalized: np.ndarray, labels: np.ndarray, node: "ColorNode") -> "ColorNode":
    """
    Compute mean and covariance for the pixels labeled with node.classid.

    Args:
        normalized: Float image (H, W, 3) from normalize_pixels
        labels: Class label map (H, W), read only
        node: Class node whose statistics are (re)computed in place

    Returns:
        The same node, with mean, covariance and pixel_count set

    Raises:
        ValueError: If no pixel carries the node's class id
    """
    members = normalized[labels == node.classid]
    pixel_count = members.shape[0]
    if pixel_count == 0:
        raise ValueError(f"Class {node.classid} has no pixels")

    total = members.sum(axis=0)
    outer = members.T @ members

    # Centered second moment, intentionally not divided by pixel_count
    covariance = outer - np.outer(total, total) / pixel_count
    mean = total / pixel_count

    node.mean = mean
    node.covariance = covariance
    node.pixel_count = int(pixel_count)

    logger.debug(f"Class {node.classid}: {pixel_count} pixels, mean={np.round(mean, 4).tolist()}")
    return node


def principal_component(covariance: np.ndarray) -> Tuple[float, np.ndarray]:
    """Return the largest eigenvalue of a symmetric 3×3 matrix and its eigenvector."""
    eigenvalues, eigenvectors = np.linalg.eigh(covariance)
    # eigh sorts ascending
    return float(eigenvalues[-1]), eigenvectors[:, -1]
