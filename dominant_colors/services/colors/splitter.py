"""
Class splitting along the principal axis of color variance.
"""

from typing import Tuple

import numpy as np
from loguru import logger

from .errors import DegenerateSplit
from .statistics import principal_component
from .tree import ColorClassTree, ColorNode


def split_class(normalized: np.ndarray, labels: np.ndarray,
                left_id: int, right_id: int,
                tree: ColorClassTree, node: ColorNode) -> Tuple[ColorNode, ColorNode]:
    """
    Split a class into two children and relabel its pixels.

    The class mean is projected onto the dominant eigenvector of the class
    covariance; pixels whose projection is <= that threshold move to
    left_id, the rest to right_id.

    Args:
        normalized: Float image (H, W, 3) in [0, 1]
        labels: Class label map, relabeled in place
        left_id: Class id for pixels on the low side of the threshold
        right_id: Class id for pixels on the high side
        tree: Tree owning the node
        node: Leaf to split; its statistics must be current

    Returns:
        Tuple of (left, right) child nodes, without statistics

    Raises:
        DegenerateSplit: If either side would receive no pixels. Neither the
            tree nor the label map is modified in that case.
    """
    if not node.is_leaf:
        raise ValueError(f"Class {node.classid} has already been split")

    _, axis = principal_component(node.covariance)
    threshold = float(axis @ node.mean)

    member_mask = labels == node.classid
    projections = normalized[member_mask] @ axis
    goes_left = projections <= threshold

    left_count = int(np.count_nonzero(goes_left))
    right_count = int(goes_left.size - left_count)
    if left_count == 0 or right_count == 0:
        raise DegenerateSplit(node.classid, left_count, right_count)

    left, right = tree.add_children(node, left_id, right_id)
    labels[member_mask] = np.where(goes_left, left_id, right_id).astype(labels.dtype)

    logger.debug(
        f"Split class {node.classid} at {threshold:.4f}: "
        f"{left_id}={left_count} px, {right_id}={right_count} px"
    )
    return left, right
