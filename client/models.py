"""Response models returned by the file tree client."""

from typing import Optional

from pydantic import BaseModel, Field


class OperationResult(BaseModel):
    """Outcome of a successful mutating request.

    Attributes:
        status: Tree status (always "success"; failures raise).
        path: The path operated on, if any.
        count: Number of nodes in the tree afterwards.
    """

    status: str
    path: Optional[str] = None
    count: int


class TreeSummary(BaseModel):
    """Overview of the server's tree.

    Attributes:
        initialized: Whether the tree is initialized.
        count: Number of nodes in the tree.
        summary: Brief human-readable description.
    """

    initialized: bool
    count: int
    summary: str


class NodeStatResult(BaseModel):
    """Kind and size of a node.

    Attributes:
        path: The node's path.
        is_file: True for files, False for directories.
        size: Content length in bytes for files, None for directories.
    """

    path: str
    is_file: bool
    size: Optional[int] = None


class ValidationResult(BaseModel):
    """Result of the server-side invariant check.

    Attributes:
        valid: Whether the tree passed every check.
        errors: Description of the first violation found (empty if valid).
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
