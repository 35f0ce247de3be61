"""Directory and file nodes of the file tree."""

import weakref
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, PrivateAttr

from models.ordered_collection import OrderedCollection
from models.path import FilePath
from models.status import FileTreeError, Status

Contents = Optional[Union[bytes, str]]


def _as_bytes(contents: Contents) -> Optional[bytes]:
    """Normalize file contents to an owned bytes buffer (or None)."""
    if contents is None:
        return None
    if isinstance(contents, str):
        return contents.encode("utf-8")
    return bytes(contents)


def _compare_to_pathname(node: "FileTreeNode", pathname: str) -> int:
    return node.path.compare_string(pathname)


def _compare_nodes(first: "FileTreeNode", second: "FileTreeNode") -> int:
    return first.compare(second)


class FileTreeNode(BaseModel):
    """A single directory or file in the file tree.

    Nodes are only ever created already linked into the tree: ``new_dir``
    and ``new_file`` validate the requested path against the parent and
    insert the node at its sorted position among the parent's children
    before returning it. A directory owns its children and, through them,
    its whole subtree. The parent link is a weak reference used for
    lookups and for detaching on ``free``; it never keeps a parent alive.

    Args:
        path: The node's absolute path.
        is_file: True for file nodes, False for directories.
        contents: File contents; always None for directories.
    """

    path: FilePath = Field(description="The node's absolute path")
    is_file: bool = Field(default=False, description="True for files, False for directories")
    contents: Optional[bytes] = Field(default=None, description="File contents (files only)")

    _parent: Optional[weakref.ReferenceType] = PrivateAttr(default=None)
    _children: Optional[OrderedCollection["FileTreeNode"]] = PrivateAttr(default=None)

    class Config:
        arbitrary_types_allowed = True

    def model_post_init(self, __context: Any) -> None:
        if not self.is_file and self._children is None:
            self._children = OrderedCollection()

    # ===== Construction =====

    @classmethod
    def new_dir(cls, path: FilePath, parent: Optional["FileTreeNode"] = None) -> "FileTreeNode":
        """Create a directory node at ``path`` and link it under ``parent``.

        Args:
            path: Absolute path of the new directory.
            parent: Directory one level above ``path``, or None for the root.

        Returns:
            The new, linked directory node.

        Raises:
            FileTreeError: NOT_A_DIRECTORY if parent is a file,
                CONFLICTING_PATH if parent is not an ancestor of path,
                NO_SUCH_PATH if parent is not path's direct parent (or is None
                while path is deeper than one level), ALREADY_IN_TREE if the
                parent already has this child, OUT_OF_MEMORY on allocation failure.
        """
        if parent is not None and parent.is_file:
            raise FileTreeError(
                Status.NOT_A_DIRECTORY, f"parent {parent.path} is a file"
            )

        try:
            node = cls(path=path, is_file=False)
        except MemoryError as e:
            raise FileTreeError(Status.OUT_OF_MEMORY) from e

        node._link_to_parent(parent)
        return node

    @classmethod
    def new_file(
        cls,
        path: FilePath,
        parent: Optional["FileTreeNode"],
        contents: Contents = None,
    ) -> "FileTreeNode":
        """Create a file node at ``path`` holding a copy of ``contents``.

        Raises the same errors as ``new_dir``.
        """
        if parent is not None and parent.is_file:
            raise FileTreeError(
                Status.NOT_A_DIRECTORY, f"parent {parent.path} is a file"
            )

        try:
            node = cls(path=path, is_file=True, contents=_as_bytes(contents))
        except MemoryError as e:
            raise FileTreeError(Status.OUT_OF_MEMORY) from e

        node._link_to_parent(parent)
        return node

    def _link_to_parent(self, parent: Optional["FileTreeNode"]) -> None:
        """Validate this node's path against ``parent`` and insert it there.

        On any failure nothing is linked and the parent is left untouched.
        """
        if parent is None:
            if self.path.depth != 1:
                raise FileTreeError(
                    Status.NO_SUCH_PATH,
                    f"{self.path} has no parent but is not at depth 1",
                )
            return

        parent_depth = parent.path.depth
        if (
            self.path.rooted != parent.path.rooted
            or self.path.shared_prefix_depth(parent.path) < parent_depth
        ):
            raise FileTreeError(
                Status.CONFLICTING_PATH,
                f"{parent.path} is not an ancestor of {self.path}",
            )
        if self.path.depth != parent_depth + 1:
            raise FileTreeError(
                Status.NO_SUCH_PATH,
                f"{parent.path} is not the direct parent of {self.path}",
            )

        found, index = parent.has_child(self.path)
        if found:
            raise FileTreeError(Status.ALREADY_IN_TREE, f"{self.path} already exists")

        try:
            parent._children.insert_at(index, self)
        except MemoryError as e:
            raise FileTreeError(Status.OUT_OF_MEMORY) from e
        self._parent = weakref.ref(parent)

    # ===== Destruction =====

    def free(self) -> int:
        """Detach this node from its parent and destroy its whole subtree.

        Returns:
            Number of nodes destroyed, this one included.
        """
        parent = self.parent
        if parent is not None and parent._children is not None:
            found, index = parent._children.bsearch(self, _compare_nodes)
            if found:
                parent._children.remove_at(index)
        self._parent = None

        count = 0
        if self.is_file:
            self.contents = None
        else:
            while len(self._children) != 0:
                count += self._children.get(0).free()
            self._children = None

        return count + 1

    # ===== Accessors =====

    @property
    def parent(self) -> Optional["FileTreeNode"]:
        """The parent directory, or None for the root."""
        if self._parent is None:
            return None
        return self._parent()

    @property
    def num_children(self) -> int:
        """Number of children (always 0 for files)."""
        if self.is_file or self._children is None:
            return 0
        return len(self._children)

    def has_child(self, path: FilePath) -> tuple[bool, int]:
        """Look up a child by exact path.

        Returns:
            ``(True, index)`` of the child if present, otherwise
            ``(False, index)`` where index is the position such a child
            would be inserted at. Files always give ``(False, 0)``.
        """
        if self.is_file or self._children is None:
            return False, 0
        return self._children.bsearch(path.pathname, _compare_to_pathname)

    def get_child(self, index: int) -> "FileTreeNode":
        """Return the child at position ``index``.

        Raises:
            FileTreeError: NO_SUCH_PATH if index is out of range or this is a file.
        """
        if self.is_file or index < 0 or index >= self.num_children:
            raise FileTreeError(
                Status.NO_SUCH_PATH, f"{self.path} has no child at index {index}"
            )
        return self._children.get(index)

    def compare(self, other: "FileTreeNode") -> int:
        """Order two nodes by path; zero iff their paths are identical."""
        return self.path.compare_path(other.path)

    def get_contents(self) -> Optional[bytes]:
        """File contents, or None for a directory."""
        if not self.is_file:
            return None
        return self.contents

    def replace_contents(self, new_contents: Contents) -> Optional[bytes]:
        """Install ``new_contents`` and hand back the previous buffer.

        Raises:
            FileTreeError: NOT_A_FILE if this node is a directory.
        """
        if not self.is_file:
            raise FileTreeError(Status.NOT_A_FILE, f"{self.path} is a directory")
        old_contents, self.contents = self.contents, _as_bytes(new_contents)
        return old_contents

    @property
    def size(self) -> Optional[int]:
        """Content length for files, None for directories."""
        if not self.is_file:
            return None
        return len(self.contents) if self.contents is not None else 0

    def to_string(self) -> str:
        """The node's absolute path as text."""
        return self.path.pathname

    def __str__(self) -> str:
        return self.to_string()
