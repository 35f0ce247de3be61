"""Shared fixtures for API integration tests.

This module provides common fixtures used across all API test files,
including TestClient setup and FileTree dependency injection.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import Settings
from api.dependencies import get_file_tree, get_settings
from main import app


@pytest.fixture
def client_with_tree(fresh_tree):
    """Provide a TestClient with a fresh FileTree injected.

    Uses FastAPI's dependency override system to inject the test tree
    instead of the global one, with invariant checking turned off.

    Args:
        fresh_tree: A pytest fixture providing a fresh, initialized FileTree.

    Yields:
        A tuple of (TestClient, FileTree) for testing.

    Example:
        def test_something(client_with_tree):
            client, tree = client_with_tree
            response = client.get("/tree/render")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_file_tree] = lambda: fresh_tree
    app.dependency_overrides[get_settings] = lambda: Settings(check_invariants=False)

    yield TestClient(app), fresh_tree

    app.dependency_overrides.clear()


@pytest.fixture
def checking_client(fresh_tree, checking_settings):
    """Like client_with_tree, but validating the tree after every mutation."""
    app.dependency_overrides[get_file_tree] = lambda: fresh_tree
    app.dependency_overrides[get_settings] = lambda: checking_settings

    yield TestClient(app), fresh_tree

    app.dependency_overrides.clear()
