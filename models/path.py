"""Immutable hierarchical path value."""

from pydantic import BaseModel, Field, field_validator

from models.status import FileTreeError, Status

SEPARATOR = "/"


class FilePath(BaseModel):
    """An absolute location in the file tree.

    A path is one or more non-empty components joined by ``/``. A single
    leading ``/`` is allowed and kept when the path is rendered, so
    ``FilePath.parse("/a/b")`` renders back as ``"/a/b"``.

    Args:
        components: Ordered name components, outermost first.
        rooted: Whether the rendered form starts with a separator.
    """

    components: tuple[str, ...] = Field(description="Ordered name components")
    rooted: bool = Field(default=False, description="Rendered with a leading separator")

    class Config:
        frozen = True

    @field_validator("components")
    @classmethod
    def validate_components(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Validate that there is at least one component and none is empty.

        Raises:
            ValueError: If the component list is empty or malformed.
        """
        if not v:
            raise ValueError("path must have at least one component")
        for component in v:
            if not component or SEPARATOR in component:
                raise ValueError(f"invalid path component: {component!r}")
        return v

    @classmethod
    def parse(cls, text: str) -> "FilePath":
        """Build a path from its string form.

        Args:
            text: Path string such as ``"/a/b/c.txt"``.

        Returns:
            The parsed path.

        Raises:
            FileTreeError: With BAD_PATH if the string is malformed.
        """
        if not isinstance(text, str) or not text:
            raise FileTreeError(Status.BAD_PATH, f"malformed path: {text!r}")

        rooted = text.startswith(SEPARATOR)
        body = text[1:] if rooted else text
        parts = tuple(body.split(SEPARATOR))
        if not body or any(not part for part in parts):
            raise FileTreeError(Status.BAD_PATH, f"malformed path: {text!r}")

        return cls(components=parts, rooted=rooted)

    @property
    def depth(self) -> int:
        """Number of components in this path."""
        return len(self.components)

    @property
    def pathname(self) -> str:
        """The rendered path string."""
        joined = SEPARATOR.join(self.components)
        return SEPARATOR + joined if self.rooted else joined

    def prefix(self, depth: int) -> "FilePath":
        """Return the path made of the first ``depth`` components.

        Raises:
            FileTreeError: With NO_SUCH_PATH if depth is out of range.
        """
        if depth < 1 or depth > self.depth:
            raise FileTreeError(
                Status.NO_SUCH_PATH,
                f"no prefix of depth {depth} for {self.pathname}",
            )
        return FilePath(components=self.components[:depth], rooted=self.rooted)

    def shared_prefix_depth(self, other: "FilePath") -> int:
        """Length of the longest common leading run of components."""
        shared = 0
        for mine, theirs in zip(self.components, other.components):
            if mine != theirs:
                break
            shared += 1
        return shared

    def compare_path(self, other: "FilePath") -> int:
        """Structural comparison, component by component.

        A proper prefix sorts before its extensions. Paths with identical
        components are ordered by their rendered strings.

        Returns:
            Negative, zero or positive as self sorts before, equal to or after other.
        """
        for mine, theirs in zip(self.components, other.components):
            if mine != theirs:
                return -1 if mine < theirs else 1
        if self.depth != other.depth:
            return -1 if self.depth < other.depth else 1
        return self.compare_string(other.pathname)

    def compare_string(self, text: str) -> int:
        """Compare the rendered path against a plain string."""
        mine = self.pathname
        if mine == text:
            return 0
        return -1 if mine < text else 1

    def __str__(self) -> str:
        return self.pathname
