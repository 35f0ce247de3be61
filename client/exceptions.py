"""Exception hierarchy for the file tree API client.

Exception Hierarchy:
    FileTreeClientError (base)
    ├── ConnectionError - Network/connection failures
    ├── TimeoutError - Request timeout
    └── APIError - Server returned an error response
        ├── ValidationError (HTTP 422, e.g. a malformed path)
        ├── NotFoundError (HTTP 404, e.g. no node at the path)
        ├── ConflictError (HTTP 409, e.g. path already in the tree)
        └── ServerError (HTTP 5xx)

Example:
    Catching specific errors::

        try:
            client.insert_dir("/a/b")
        except ConflictError as e:
            print(f"Could not insert: {e.tree_status}")
"""

from typing import Any


class FileTreeClientError(Exception):
    """Base exception for all file tree client errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConnectionError(FileTreeClientError):
    """Failed to connect to the file tree server.

    Attributes:
        url: The URL that failed to connect.
        cause: The underlying httpx exception.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.url = url
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} (url: {self.url})" if self.url else self.message


class TimeoutError(FileTreeClientError):
    """Request timed out.

    Attributes:
        timeout: The timeout value in seconds.
        url: The URL that timed out.
    """

    def __init__(
        self,
        message: str,
        timeout: float | None = None,
        url: str | None = None,
    ) -> None:
        self.timeout = timeout
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.timeout is None:
            return self.message
        return f"{self.message} (after {self.timeout}s)"


class APIError(FileTreeClientError):
    """Server returned an error response.

    Attributes:
        status_code: HTTP status code from the server.
        tree_status: The file tree status reported by the server, e.g.
            "already_in_tree". None when the request never reached the tree
            (request validation, unexpected server errors).
        details: Extra information such as the offending path or the list
            of request validation errors.
        response_body: Raw response body for debugging.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        tree_status: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        self.status_code = status_code
        self.tree_status = tree_status
        self.details = details
        self.response_body = response_body
        super().__init__(message)

    def __str__(self) -> str:
        prefix = f"[HTTP {self.status_code}]"
        if self.tree_status:
            prefix += f" [{self.tree_status}]"
        return f"{prefix} {self.message}"


class _FixedStatusError(APIError):
    """APIError for a single HTTP status, set by each subclass."""

    http_status: int

    def __init__(
        self,
        message: str,
        tree_status: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=self.http_status,
            tree_status=tree_status,
            details=details,
            response_body=response_body,
        )


class ValidationError(_FixedStatusError):
    """Request validation failed, or the path is malformed (HTTP 422)."""

    http_status = 422


class NotFoundError(_FixedStatusError):
    """No node (or no file) at the requested path (HTTP 404)."""

    http_status = 404


class ConflictError(_FixedStatusError):
    """Operation conflicts with the current tree (HTTP 409).

    Common cases include inserting a path that is already present,
    inserting below a file, removing a file with rm_dir, or calling
    init twice.
    """

    http_status = 409


class ServerError(APIError):
    """Server-side error (HTTP 5xx), including failed invariant checks."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        tree_status: str | None = None,
        details: dict[str, Any] | None = None,
        response_body: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            tree_status=tree_status,
            details=details,
            response_body=response_body,
        )
