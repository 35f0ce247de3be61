"""Internal HTTP handling utilities for the file tree client.

This module wraps httpx with response parsing, error mapping and optional
retry with exponential backoff. It is not meant to be imported directly.
"""

import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract message, tree status and details from an error response.

    Understands the server's file tree error body
    (``{"error", "detail", "status", "path"}``), FastAPI's validation error
    list and plain-text bodies.

    Returns:
        A tuple of (message, tree_status, details).
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, None

    if not isinstance(body, dict):
        return str(body), None, None

    detail = body.get("detail")
    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
        ]
        return "; ".join(messages), None, {"errors": detail}

    details = {"path": body["path"]} if body.get("path") else None
    if isinstance(detail, str):
        return detail, body.get("status"), details
    if "error" in body:
        return str(body["error"]), body.get("status"), details
    return str(body), None, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error response.

    Raises:
        ValidationError: For HTTP 422 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, tree_status, details = _parse_error_response(response)
    status_code = response.status_code
    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    kwargs = {
        "message": message,
        "tree_status": tree_status,
        "details": details,
        "response_body": response_body,
    }
    if status_code == 422:
        raise ValidationError(**kwargs)
    if status_code == 404:
        raise NotFoundError(**kwargs)
    if status_code == 409:
        raise ConflictError(**kwargs)
    if status_code >= 500:
        raise ServerError(status_code=status_code, **kwargs)
    raise APIError(status_code=status_code, **kwargs)


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay for a 0-indexed retry attempt, capped."""
    return min(base * (2 ** attempt), DEFAULT_RETRY_BACKOFF_MAX)


class HTTPClient:
    """Synchronous JSON-over-HTTP transport for the file tree API.

    Every call goes through ``request``, which sends at most
    ``max_retries + 1`` attempts when retry is enabled. Only network
    failures and 502/503/504 responses are retried; tree failures are
    deterministic and raised on the first attempt.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries
        self._client = httpx.Client(
            base_url=self.base_url, timeout=timeout, transport=transport
        )

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _send(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None,
        json: dict[str, Any] | None,
    ) -> httpx.Response:
        """Send one attempt, translating httpx transport errors.

        Raises:
            ConnectionError: If the server cannot be reached.
            TimeoutError: If the request times out.
        """
        url = f"{self.base_url}{path}"
        try:
            return self._client.request(method, path, params=params, json=json)
        except httpx.ConnectError as e:
            raise ConnectionError(
                message=f"Failed to connect to {url}", url=url, cause=e
            ) from e
        except httpx.TimeoutException as e:
            raise TimeoutError(
                message=f"Request to {url} timed out", timeout=self.timeout, url=url
            ) from e

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request and return the decoded JSON body.

        Args:
            method: The HTTP method.
            path: The URL path (appended to base_url).
            params: Query parameters; None values are dropped.
            json: JSON body to send with the request.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails on the last attempt.
            TimeoutError: If the last attempt times out.
            APIError: If the server returns an error response.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        attempts = self.max_retries + 1 if self.retry_enabled else 1
        for attempt in range(attempts):
            final = attempt == attempts - 1
            try:
                response = self._send(method, path, params, json)
            except (ConnectionError, TimeoutError):
                if final:
                    raise
                time.sleep(_calculate_backoff(attempt))
                continue

            if response.status_code in RETRYABLE_STATUS_CODES and not final:
                time.sleep(_calculate_backoff(attempt))
                continue

            _raise_for_status(response)
            return response.json() if response.content else None

        raise RuntimeError("Retry loop exited without a response")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: dict[str, Any] | None = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("DELETE", path, params=params)
