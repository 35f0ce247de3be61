"""Independent structural validator for file trees.

The checker re-derives every invariant a FileTree and its nodes are
supposed to maintain, using only read-side accessors, and reports the
first violation it finds. It never mutates the tree.
"""

import logging
from typing import Optional

from models.node import FileTreeNode
from models.status import FileTreeError

logger = logging.getLogger(__name__)


def _report(violation: str) -> str:
    logger.warning(f"File tree invariant violated: {violation}")
    return violation


def _check_node(node: Optional[FileTreeNode]) -> Optional[str]:
    """Check the invariants local to a single node."""
    if node is None:
        return "A node is None"

    parent = node.parent
    if parent is not None:
        node_path = node.path
        parent_path = parent.path

        # parent's path must be the longest proper prefix of the node's path
        if node_path.shared_prefix_depth(parent_path) != node_path.depth - 1:
            return (
                f"Parent and child nodes do not have parent-child paths: "
                f"({parent_path}) ({node_path})"
            )
        if node_path.depth < 2 or node_path.prefix(node_path.depth - 1).compare_path(parent_path) != 0:
            return (
                f"Parent path ({parent_path}) is not the prefix of child path ({node_path})"
            )

    if node.is_file:
        if node.num_children != 0:
            return f"File ({node.path}) reports {node.num_children} children"
        try:
            node.get_child(0)
        except FileTreeError:
            pass
        else:
            return f"File ({node.path}) returned a child"

    return None


def _check_subtree(node: FileTreeNode) -> tuple[Optional[str], int]:
    """Pre-order walk of the subtree rooted at ``node``.

    Returns:
        The first violation found (or None) and the number of nodes reached.
    """
    violation = _check_node(node)
    if violation:
        return violation, 0

    reached = 1
    num_children = node.num_children
    previous: Optional[FileTreeNode] = None

    for index in range(num_children):
        try:
            child = node.get_child(index)
        except FileTreeError:
            return (
                f"Directory ({node.path}) reports {num_children} children "
                f"but child {index} cannot be fetched"
            ), reached

        if child is None:
            return f"Directory ({node.path}) has a None child at index {index}", reached

        if child.parent is not node:
            return (
                f"Child ({child.path}) does not link back to its parent ({node.path})"
            ), reached

        if previous is not None:
            if previous.compare(child) == 0:
                return f"Duplicate node detected ({child.path})", reached
            if previous.path.compare_string(child.path.pathname) > 0:
                return (
                    f"Children are not in lexicographic order "
                    f"({previous.path} > {child.path})"
                ), reached

        violation, child_reached = _check_subtree(child)
        reached += child_reached
        if violation:
            return violation, reached
        previous = child

    return None, reached


def find_violation(
    initialized: bool, root: Optional[FileTreeNode], count: int
) -> Optional[str]:
    """Validate a tree given its initialization flag, root and node count.

    Args:
        initialized: Whether the tree is initialized.
        root: The root node, or None.
        count: The node count the tree maintains.

    Returns:
        Description of the first violation found, or None if the tree is valid.
    """
    if not initialized:
        if count != 0:
            return _report(f"Not initialized, but count is {count}")
        if root is not None:
            return _report(f"Not initialized, but root is ({root.path})")

    reached = 0
    if root is not None:
        if root.parent is not None:
            return _report(f"Root ({root.path}) has a parent ({root.parent.path})")
        if root.path.depth != 1:
            return _report(f"Root ({root.path}) has depth {root.path.depth}, expected 1")

        violation, reached = _check_subtree(root)
        if violation:
            return _report(violation)

    if reached != count:
        return _report(
            f"Tree count ({count}) does not match number of nodes reachable ({reached})"
        )

    return None


def is_valid(initialized: bool, root: Optional[FileTreeNode], count: int) -> bool:
    """True if ``find_violation`` finds nothing."""
    return find_violation(initialized, root, count) is None
