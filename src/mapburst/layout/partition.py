"""
Hierarchical Partition Layout.

Assigns every node of a :class:`TreeNode` tree an angular extent
``[x0, x1]`` (fraction of the full circle) and a radial extent ``[y0, y1]``
(fraction of the radius). Angles are split among children proportionally to
their aggregated size; radii are equal-depth rings.

The result is a flat, breadth-first list. Parent and child links are list
indices rather than object references, so a node never owns its parent.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.types import TreeNode

logger = logging.getLogger(__name__)


@dataclass
class PartitionedNode:
    """A tree node together with its computed layout."""
    index: int
    data: TreeNode
    depth: int
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    height: int = 0
    value: int = 0
    x0: float = 0.0
    x1: float = 0.0
    y0: float = 0.0
    y1: float = 0.0

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def is_file(self) -> bool:
        return self.data.is_file

    @property
    def has_children(self) -> bool:
        return bool(self.children)


def _index_tree(tree: TreeNode) -> List[PartitionedNode]:
    nodes: List[PartitionedNode] = []
    queue = deque([(tree, None, 0)])
    while queue:
        data, parent, depth = queue.popleft()
        node = PartitionedNode(index=len(nodes), data=data, depth=depth, parent=parent)
        nodes.append(node)
        if parent is not None:
            nodes[parent].children.append(node.index)
        for child in data.children:
            queue.append((child, node.index, depth + 1))
    return nodes


def aggregate(nodes: List[PartitionedNode]) -> None:
    """Fill ``value`` and ``height`` bottom-up; a node's own size counts too."""
    for node in reversed(nodes):
        node.value = (node.data.size or 0) + sum(nodes[i].value for i in node.children)
        node.height = max((nodes[i].height + 1 for i in node.children), default=0)


def partition(tree: TreeNode) -> List[PartitionedNode]:
    """
    Lay out a tree as nested rings.

    Returns:
        All nodes in breadth-first order; ``nodes[0]`` is the root and spans
        the whole circle. Children with zero aggregated value get a
        zero-width span at their position.
    """
    nodes = _index_tree(tree)
    aggregate(nodes)

    root = nodes[0]
    rings = root.height + 1
    root.x0, root.x1 = 0.0, 1.0
    root.y0, root.y1 = 0.0, 1.0 / rings

    for node in nodes:
        if not node.children:
            continue
        scale = (node.x1 - node.x0) / node.value if node.value else 0.0
        x = node.x0
        for i in node.children:
            child = nodes[i]
            child.x0 = x
            x += child.value * scale
            child.x1 = x
            child.y0 = child.depth / rings
            child.y1 = (child.depth + 1) / rings

    logger.debug(f"Partitioned {len(nodes)} nodes into {rings} rings")
    return nodes


def ancestor_path(nodes: List[PartitionedNode], node: PartitionedNode) -> List[PartitionedNode]:
    """
    Chain from the top-level ancestor down to ``node`` itself.

    The synthetic root never appears, so the root's own path is empty.
    """
    chain: List[PartitionedNode] = []
    current = node
    while current.parent is not None:
        chain.append(current)
        current = nodes[current.parent]
    chain.reverse()
    return chain


def ancestors(nodes: List[PartitionedNode], node: PartitionedNode) -> List[PartitionedNode]:
    """Strict ancestors of ``node``, root-first, excluding the root and the node."""
    return ancestor_path(nodes, node)[:-1]
