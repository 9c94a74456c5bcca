"""
Dominant Colors Core

Partitions an image's pixels into color classes with a binary tree of
mean/covariance statistics, splitting the class of greatest variance along
its principal eigenvector until the requested number of colors is reached.
"""

from .errors import DegenerateSplit, DominantColorsError, EmptyImage, InvalidColorCount
from .partition import PartitionResult, find_dominant_colors
from .results import (
    classification_overlay,
    compact_labels,
    dominant_colors,
    quantized_image,
)
from .tree import ColorClassTree, ColorNode

__all__ = [
    "ColorClassTree",
    "ColorNode",
    "DegenerateSplit",
    "DominantColorsError",
    "EmptyImage",
    "InvalidColorCount",
    "PartitionResult",
    "classification_overlay",
    "compact_labels",
    "dominant_colors",
    "find_dominant_colors",
    "quantized_image",
]
