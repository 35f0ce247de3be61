"""File tree API client library.

This module provides a Python client for the file tree REST API.

Example:
    Synchronous usage::

        from client import FileTreeClient

        with FileTreeClient(base_url="http://localhost:8000") as client:
            client.insert_dir("/projects/demo")
            client.insert_file("/projects/demo/notes.txt", "first draft")
            assert client.contains_file("/projects/demo/notes.txt")

Exports:
    FileTreeClient: Synchronous client for the file tree REST API.

    Exceptions:
        FileTreeClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: No node at the requested path (HTTP 404).
        ConflictError: Operation conflicts with the tree (HTTP 409).
        ServerError: Server-side error (HTTP 5xx).
"""

from client.client import FileTreeClient
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    FileTreeClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)
from client.models import NodeStatResult, OperationResult, TreeSummary, ValidationResult

__all__ = [
    "FileTreeClient",
    "OperationResult",
    "TreeSummary",
    "NodeStatResult",
    "ValidationResult",
    "FileTreeClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
]
