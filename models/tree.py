"""File tree orchestrator.

This module contains the FileTree, the context object holding the
initialization flag, root node and live node count of one tree, along
with the traversal algorithm every tree-level operation is built on.
"""

import logging
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field

from models.node import Contents, FileTreeNode
from models.path import FilePath
from models.status import FileTreeError, Status

logger = logging.getLogger(__name__)


class _Lookup(Enum):
    NOT_FOUND = "not_found"

    def __repr__(self) -> str:
        return "NOT_FOUND"


# Returned by content lookups that fail; distinct from a file holding None.
NOT_FOUND = _Lookup.NOT_FOUND

ContentsResult = Union[Optional[bytes], _Lookup]


class NodeStat(BaseModel):
    """Kind and size of a node in the tree.

    Args:
        is_file: True for files, False for directories.
        size: Content length in bytes for files, None for directories.
    """

    is_file: bool = Field(description="True for files, False for directories")
    size: Optional[int] = Field(default=None, description="Content length (files only)")


class FileTree(BaseModel):
    """A rooted hierarchy of directories and files.

    Every operation reports its outcome through a ``Status`` instead of
    raising. Directory inserts create any missing ancestors on the way
    down; if any step fails, everything created by that call is freed so
    the tree is left exactly as it was.

    Args:
        initialized: Whether ``init`` has been called (and not undone by ``destroy``).
        root: The root directory, or None for an empty tree.
        count: Number of nodes currently reachable from the root.

    Example:
        >>> tree = FileTree()
        >>> tree.init()
        <Status.SUCCESS: 'success'>
        >>> tree.insert_file("/a/b/f.txt", b"hi")
        <Status.SUCCESS: 'success'>
        >>> print(tree.to_string(), end="")
        /a
        /a/b
        /a/b/f.txt
    """

    initialized: bool = Field(default=False, description="Whether the tree is initialized")
    root: Optional[FileTreeNode] = Field(default=None, description="Root directory node")
    count: int = Field(default=0, description="Number of nodes reachable from the root")

    class Config:
        arbitrary_types_allowed = True

    # ===== Lifecycle =====

    def init(self) -> Status:
        """Put the tree into an empty, initialized state."""
        if self.initialized:
            return Status.ALREADY_INITIALIZED

        self.initialized = True
        self.root = None
        self.count = 0
        logger.info("File tree initialized")
        return Status.SUCCESS

    def destroy(self) -> Status:
        """Free every node and return the tree to the uninitialized state."""
        if not self.initialized:
            return Status.UNINITIALIZED

        freed = self.root.free() if self.root is not None else 0
        self.root = None
        self.count = 0
        self.initialized = False
        logger.info(f"File tree destroyed ({freed} nodes freed)")
        return Status.SUCCESS

    # ===== Traversal =====

    def _traverse(self, path: FilePath) -> Optional[FileTreeNode]:
        """Walk from the root as far as possible toward ``path``.

        Returns:
            The deepest existing node on the way to path (possibly path's
            own node), or None if the tree has no root.

        Raises:
            FileTreeError: CONFLICTING_PATH if the root is not a prefix of path.
        """
        if self.root is None:
            return None

        if self.root.path.compare_path(path.prefix(1)) != 0:
            raise FileTreeError(
                Status.CONFLICTING_PATH,
                f"root {self.root.path} is not a prefix of {path}",
            )

        current = self.root
        for depth in range(2, path.depth + 1):
            found, index = current.has_child(path.prefix(depth))
            if not found:
                break
            current = current.get_child(index)
        return current

    def _find(self, pathname: str) -> FileTreeNode:
        """Return the node whose path is exactly ``pathname``.

        Raises:
            FileTreeError: BAD_PATH, CONFLICTING_PATH or NO_SUCH_PATH.
        """
        path = FilePath.parse(pathname)
        node = self._traverse(path)
        if node is None or node.path.compare_path(path) != 0:
            raise FileTreeError(Status.NO_SUCH_PATH, f"{pathname} is not in the tree")
        return node

    # ===== Insertion =====

    def insert_dir(self, pathname: str) -> Status:
        """Insert a directory, creating any missing ancestor directories.

        Returns:
            SUCCESS, or UNINITIALIZED, BAD_PATH, CONFLICTING_PATH,
            NOT_A_DIRECTORY, ALREADY_IN_TREE or OUT_OF_MEMORY.
        """
        return self._insert(pathname, is_file=False, contents=None)

    def insert_file(self, pathname: str, contents: Contents = None) -> Status:
        """Insert a file holding a copy of ``contents``.

        Missing ancestor directories are created. A file can never be the
        root, so a depth-1 path gives CONFLICTING_PATH.

        Returns:
            SUCCESS, or UNINITIALIZED, BAD_PATH, CONFLICTING_PATH,
            NOT_A_DIRECTORY, ALREADY_IN_TREE or OUT_OF_MEMORY.
        """
        return self._insert(pathname, is_file=True, contents=contents)

    def _insert(self, pathname: str, is_file: bool, contents: Contents) -> Status:
        if not self.initialized:
            return Status.UNINITIALIZED

        try:
            path = FilePath.parse(pathname)
            if is_file and path.depth == 1:
                raise FileTreeError(
                    Status.CONFLICTING_PATH, f"file {path} cannot be the root"
                )

            furthest = self._traverse(path)
            if furthest is not None:
                if furthest.path.compare_path(path) == 0:
                    raise FileTreeError(Status.ALREADY_IN_TREE, f"{path} already exists")
                if furthest.is_file:
                    raise FileTreeError(
                        Status.NOT_A_DIRECTORY, f"{furthest.path} is a file"
                    )

            created = self._build_chain(path, furthest, is_file, contents)
        except FileTreeError as e:
            logger.debug(f"Insert of {pathname!r} failed: {e.status.value}")
            return e.status

        if self.root is None:
            self.root = created[0]
        self.count += len(created)
        logger.debug(f"Inserted {pathname!r} ({len(created)} new nodes)")
        return Status.SUCCESS

    def _build_chain(
        self,
        path: FilePath,
        furthest: Optional[FileTreeNode],
        is_file: bool,
        contents: Contents,
    ) -> list[FileTreeNode]:
        """Create one node per missing level below ``furthest`` down to ``path``.

        Returns:
            The created nodes, outermost first.

        Raises:
            FileTreeError: If any node cannot be created; every node made by
                this call has been freed by then.
        """
        created: list[FileTreeNode] = []
        current = furthest
        start = furthest.path.depth + 1 if furthest is not None else 1

        try:
            for depth in range(start, path.depth + 1):
                prefix = path.prefix(depth)
                if is_file and depth == path.depth:
                    current = FileTreeNode.new_file(prefix, current, contents)
                else:
                    current = FileTreeNode.new_dir(prefix, current)
                created.append(current)
        except FileTreeError:
            if created:
                freed = created[0].free()
                logger.warning(f"Rolled back insert of {path}: freed {freed} new nodes")
            raise

        return created

    # ===== Removal =====

    def rm_dir(self, pathname: str) -> Status:
        """Remove a directory and everything below it.

        Returns:
            SUCCESS, or UNINITIALIZED, BAD_PATH, CONFLICTING_PATH,
            NO_SUCH_PATH or NOT_A_DIRECTORY.
        """
        return self._remove(pathname, is_file=False)

    def rm_file(self, pathname: str) -> Status:
        """Remove a file.

        Returns:
            SUCCESS, or UNINITIALIZED, BAD_PATH, CONFLICTING_PATH,
            NO_SUCH_PATH or NOT_A_FILE.
        """
        return self._remove(pathname, is_file=True)

    def _remove(self, pathname: str, is_file: bool) -> Status:
        if not self.initialized:
            return Status.UNINITIALIZED

        try:
            node = self._find(pathname)
        except FileTreeError as e:
            return e.status

        if is_file and not node.is_file:
            return Status.NOT_A_FILE
        if not is_file and node.is_file:
            return Status.NOT_A_DIRECTORY

        is_root = node is self.root
        freed = node.free()
        self.count -= freed
        if is_root:
            self.root = None
        logger.debug(f"Removed {pathname!r} ({freed} nodes)")
        return Status.SUCCESS

    # ===== Queries =====

    def contains_dir(self, pathname: str) -> bool:
        """True if ``pathname`` is a directory in the tree; any error gives False."""
        return self._contains(pathname, is_file=False)

    def contains_file(self, pathname: str) -> bool:
        """True if ``pathname`` is a file in the tree; any error gives False."""
        return self._contains(pathname, is_file=True)

    def _contains(self, pathname: str, is_file: bool) -> bool:
        if not self.initialized:
            return False
        try:
            node = self._find(pathname)
        except FileTreeError:
            return False
        return node.is_file == is_file

    def _find_file(self, pathname: str) -> Optional[FileTreeNode]:
        if not self.initialized:
            return None
        try:
            node = self._find(pathname)
        except FileTreeError:
            return None
        return node if node.is_file else None

    def get_file_contents(self, pathname: str) -> ContentsResult:
        """Contents of the file at ``pathname``.

        Returns:
            The contents (which may be None), or NOT_FOUND if there is no
            such file or the lookup fails.
        """
        node = self._find_file(pathname)
        if node is None:
            return NOT_FOUND
        return node.get_contents()

    def replace_file_contents(self, pathname: str, new_contents: Contents) -> ContentsResult:
        """Swap in ``new_contents`` for the file at ``pathname``.

        Returns:
            The previous contents, now owned by the caller, or NOT_FOUND if
            there is no such file or the lookup fails.
        """
        node = self._find_file(pathname)
        if node is None:
            return NOT_FOUND
        return node.replace_contents(new_contents)

    def stat(self, pathname: str) -> tuple[Status, Optional[NodeStat]]:
        """Report the kind of ``pathname`` and, for files, its size.

        Returns:
            ``(SUCCESS, NodeStat)``, or a failure status (UNINITIALIZED,
            BAD_PATH, CONFLICTING_PATH, NO_SUCH_PATH) and None.
        """
        if not self.initialized:
            return Status.UNINITIALIZED, None
        try:
            node = self._find(pathname)
        except FileTreeError as e:
            return e.status, None
        return Status.SUCCESS, NodeStat(is_file=node.is_file, size=node.size)

    # ===== Serialization =====

    def to_string(self) -> Optional[str]:
        """Render the tree one path per line.

        Pre-order, depth first; at each directory its files come before its
        subdirectories, and each group is in lexicographic order.

        Returns:
            The rendering (empty for an empty tree), or None if uninitialized.
        """
        if not self.initialized:
            return None
        if self.root is None:
            return ""

        lines: list[str] = []
        self._render(self.root, lines)
        return "\n".join(lines) + "\n"

    def _render(self, node: FileTreeNode, lines: list[str]) -> None:
        lines.append(node.to_string())
        children = [node.get_child(i) for i in range(node.num_children)]
        for child in children:
            if child.is_file:
                lines.append(child.to_string())
        for child in children:
            if not child.is_file:
                self._render(child, lines)

    # ===== Validation =====

    def validate(self) -> list[str]:
        """Check every structural invariant of the tree.

        Returns:
            Empty list if valid, otherwise a one-element list describing the
            first violation found.
        """
        from models.checker import find_violation

        violation = find_violation(self.initialized, self.root, self.count)
        return [violation] if violation else []

    @property
    def summary(self) -> str:
        """Brief human-readable description of the tree."""
        if not self.initialized:
            return "uninitialized"
        if self.root is None:
            return "empty"
        return f"{self.count} nodes under {self.root.path}"
