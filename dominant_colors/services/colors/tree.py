"""
Binary tree of color classes.

Nodes live in an arena owned by the tree and refer to their children by
index. A node has either no children (a leaf, i.e. a current color class)
or exactly two, created together when the class is split.
"""

from collections import deque
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np

from .statistics import principal_component

ROOT_CLASS_ID = 1


@dataclass
class ColorNode:
    """One color class: id, statistics and child links."""
    classid: int
    mean: Optional[np.ndarray] = None
    covariance: Optional[np.ndarray] = None
    pixel_count: int = 0
    left: Optional[int] = None
    right: Optional[int] = None
    terminal: bool = False  # a split was attempted and found degenerate

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class ColorClassTree:
    """Arena-backed tree of color classes."""

    def __init__(self):
        self._nodes: List[ColorNode] = []

    @property
    def root(self) -> ColorNode:
        if not self._nodes:
            raise RuntimeError("Tree has no root; call create_root() first")
        return self._nodes[0]

    @property
    def nodes(self) -> List[ColorNode]:
        """All nodes in creation order."""
        return list(self._nodes)

    @property
    def split_count(self) -> int:
        return sum(1 for node in self._nodes if not node.is_leaf)

    def __len__(self) -> int:
        return len(self._nodes)

    def create_root(self) -> ColorNode:
        """Allocate the root class (id 1). Statistics must be computed by the caller."""
        if self._nodes:
            raise RuntimeError("Tree already has a root")
        root = ColorNode(classid=ROOT_CLASS_ID)
        self._nodes.append(root)
        return root

    def add_children(self, node: ColorNode, left_id: int, right_id: int) -> Tuple[ColorNode, ColorNode]:
        """Attach two fresh children to a leaf and return them."""
        if not node.is_leaf:
            raise ValueError(f"Class {node.classid} has already been split")

        left = ColorNode(classid=left_id)
        right = ColorNode(classid=right_id)
        self._nodes.append(left)
        node.left = len(self._nodes) - 1
        self._nodes.append(right)
        node.right = len(self._nodes) - 1
        return left, right

    def mark_terminal(self, node: ColorNode) -> None:
        node.terminal = True

    def walk(self, visitor: Callable[[ColorNode], None]) -> None:
        """Visit every node breadth-first, starting at the root."""
        queue = deque([0] if self._nodes else [])
        while queue:
            node = self._nodes[queue.popleft()]
            visitor(node)
            if node.left is not None and node.right is not None:
                queue.append(node.left)
                queue.append(node.right)

    def find(self, classid: int) -> Optional[ColorNode]:
        for node in self._nodes:
            if node.classid == classid:
                return node
        return None

    def next_class_id(self) -> int:
        """One more than the largest id anywhere in the tree, split nodes included."""
        max_id = 0

        def visit(node: ColorNode) -> None:
            nonlocal max_id
            if node.classid > max_id:
                max_id = node.classid

        self.walk(visit)
        return max_id + 1

    def leaves(self) -> List[ColorNode]:
        """Current color classes in breadth-first order."""
        found: List[ColorNode] = []

        def visit(node: ColorNode) -> None:
            if node.is_leaf:
                found.append(node)

        self.walk(visit)
        return found

    def max_eigenvalue_leaf(self) -> Optional[ColorNode]:
        """
        Return the leaf whose covariance has the largest principal eigenvalue.

        A tree holding only its root returns the root without any eigen
        computation. Terminal leaves are never candidates, and the first leaf
        in traversal order keeps the maximum on ties. Returns None when no
        leaf can be split any further.
        """
        root = self.root
        if root.is_leaf:
            return None if root.terminal else root

        best: Optional[ColorNode] = None
        max_eigen = -1.0
        for leaf in self.leaves():
            if leaf.terminal:
                continue
            eigenvalue, _ = principal_component(leaf.covariance)
            if eigenvalue > max_eigen:
                max_eigen = eigenvalue
                best = leaf
        return best
