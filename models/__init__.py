"""File tree data models package.

This package contains the in-memory file tree: the path value type, the
ordered child collection, directory/file nodes, the FileTree orchestrator
and the independent invariant checker.
"""

from models.status import FileTreeError, Status
from models.path import FilePath
from models.ordered_collection import OrderedCollection
from models.node import FileTreeNode
from models.tree import NOT_FOUND, FileTree, NodeStat
from models.checker import find_violation, is_valid

__all__ = [
    "Status",
    "FileTreeError",
    "FilePath",
    "OrderedCollection",
    "FileTreeNode",
    "FileTree",
    "NodeStat",
    "NOT_FOUND",
    "find_violation",
    "is_valid",
]
