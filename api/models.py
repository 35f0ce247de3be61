"""Shared request and response models for the file tree endpoints.

File contents travel as UTF-8 text; ``None`` means the file holds no
contents at all.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


# Request models


class PathRequest(BaseModel):
    """Request body naming a single path.

    Attributes:
        path: Absolute path in the tree (e.g. "/a/b").
    """

    path: str = Field(description="Absolute path in the tree")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Reject empty paths before they reach the tree."""
        if not v or not v.strip():
            raise ValueError("path cannot be empty")
        return v


class FileRequest(PathRequest):
    """Request body for inserting a file or replacing its contents.

    Attributes:
        path: Absolute path of the file.
        contents: New file contents, or None for an empty file.
    """

    contents: Optional[str] = Field(default=None, description="File contents as text")


# Response models


class OperationResponse(BaseModel):
    """Result of a successful mutating operation.

    Attributes:
        status: Always "success" (failures are reported as HTTP errors).
        path: The path operated on, if any.
        count: Number of nodes in the tree afterwards.
    """

    status: str
    path: Optional[str] = None
    count: int


class TreeSummaryResponse(BaseModel):
    """Overview of the shared tree.

    Attributes:
        initialized: Whether the tree is initialized.
        count: Number of nodes in the tree.
        summary: Brief human-readable description.
    """

    initialized: bool
    count: int
    summary: str


class ContainsResponse(BaseModel):
    """Answer to a contains query.

    Attributes:
        path: The path that was looked up.
        kind: "dir" or "file".
        contains: Whether a node of that kind exists at path.
    """

    path: str
    kind: Literal["dir", "file"]
    contains: bool


class ContentsResponse(BaseModel):
    """Contents of a file.

    Attributes:
        path: The file's path.
        contents: File contents as text, or None.
    """

    path: str
    contents: Optional[str] = None


class ReplaceContentsResponse(BaseModel):
    """Result of replacing a file's contents.

    Attributes:
        path: The file's path.
        old_contents: The contents before replacement.
    """

    path: str
    old_contents: Optional[str] = None


class StatResponse(BaseModel):
    """Kind and size of a node.

    Attributes:
        path: The node's path.
        is_file: True for files, False for directories.
        size: Content length in bytes for files, None for directories.
    """

    path: str
    is_file: bool
    size: Optional[int] = None


class RenderResponse(BaseModel):
    """Text rendering of the whole tree.

    Attributes:
        rendering: One path per line, or None when the tree is uninitialized.
        count: Number of nodes in the tree.
    """

    rendering: Optional[str] = None
    count: int


class ValidationResponse(BaseModel):
    """Result of running the invariant checker.

    Attributes:
        valid: Whether the tree passed every check.
        errors: Description of the first violation found (empty if valid).
    """

    valid: bool
    errors: list[str] = Field(default_factory=list)
