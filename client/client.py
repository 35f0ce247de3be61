"""Main file tree client class.

Example:
    Synchronous usage::

        from client import FileTreeClient

        with FileTreeClient(base_url="http://localhost:8000") as client:
            client.insert_file("/docs/readme.txt", "hello")
            print(client.render())
"""

from typing import Any, Optional

import httpx

from client._http import HTTPClient
from client.models import NodeStatResult, OperationResult, TreeSummary, ValidationResult


class FileTreeClient:
    """Synchronous client for the file tree REST API.

    Each method maps onto one endpoint. Failed tree operations raise the
    matching ``client.exceptions`` error; its ``tree_status`` attribute
    carries the server's status (e.g. "already_in_tree").

    Attributes:
        base_url: The base URL of the file tree server.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: The base URL of the file tree server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., MockTransport for testing).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._http.base_url

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    def __enter__(self) -> "FileTreeClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # ===== Lifecycle =====

    def summary(self) -> TreeSummary:
        """Get a brief overview of the tree."""
        return TreeSummary(**self._http.get("/tree"))

    def init(self) -> OperationResult:
        """Initialize the tree.

        Raises:
            ConflictError: If the tree is already initialized.
        """
        return OperationResult(**self._http.post("/tree/init"))

    def destroy(self) -> OperationResult:
        """Free the whole tree and return it to the uninitialized state.

        Raises:
            ConflictError: If the tree is not initialized.
        """
        return OperationResult(**self._http.post("/tree/destroy"))

    # ===== Insertion and removal =====

    def insert_dir(self, path: str) -> OperationResult:
        """Insert a directory, creating missing ancestors.

        Raises:
            ValidationError: If path is malformed.
            ConflictError: If path is already present, lies below a file, or
                does not start at the root.
        """
        return OperationResult(**self._http.post("/tree/dirs", json={"path": path}))

    def insert_file(self, path: str, contents: Optional[str] = None) -> OperationResult:
        """Insert a file, creating missing ancestor directories."""
        response = self._http.post("/tree/files", json={"path": path, "contents": contents})
        return OperationResult(**response)

    def rm_dir(self, path: str) -> OperationResult:
        """Remove a directory and its whole subtree.

        Raises:
            NotFoundError: If there is nothing at path.
            ConflictError: If path is a file.
        """
        return OperationResult(**self._http.delete("/tree/dirs", params={"path": path}))

    def rm_file(self, path: str) -> OperationResult:
        """Remove a file.

        Raises:
            NotFoundError: If there is nothing at path.
            ConflictError: If path is a directory.
        """
        return OperationResult(**self._http.delete("/tree/files", params={"path": path}))

    # ===== Queries =====

    def contains_dir(self, path: str) -> bool:
        """Whether a directory exists at path."""
        response = self._http.get("/tree/contains", params={"path": path, "kind": "dir"})
        return response["contains"]

    def contains_file(self, path: str) -> bool:
        """Whether a file exists at path."""
        response = self._http.get("/tree/contains", params={"path": path, "kind": "file"})
        return response["contains"]

    def get_file_contents(self, path: str) -> Optional[str]:
        """Contents of the file at path.

        Raises:
            NotFoundError: If there is no file at path.
        """
        return self._http.get("/tree/files/contents", params={"path": path})["contents"]

    def replace_file_contents(self, path: str, contents: Optional[str]) -> Optional[str]:
        """Replace a file's contents and return the previous contents.

        Raises:
            NotFoundError: If there is no file at path.
        """
        response = self._http.put(
            "/tree/files/contents", json={"path": path, "contents": contents}
        )
        return response["old_contents"]

    def stat(self, path: str) -> NodeStatResult:
        """Kind and size of the node at path.

        Raises:
            NotFoundError: If there is nothing at path.
        """
        return NodeStatResult(**self._http.get("/tree/stat", params={"path": path}))

    def render(self) -> Optional[str]:
        """The whole tree, one path per line (None when uninitialized)."""
        return self._http.get("/tree/render")["rendering"]

    def validate(self) -> ValidationResult:
        """Run the server-side invariant checker."""
        return ValidationResult(**self._http.get("/tree/validate"))
