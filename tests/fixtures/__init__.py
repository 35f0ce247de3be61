"""Test fixtures for the file tree.

This package provides reusable test fixtures:
- tree: FileTree, node and path factories plus pre-built trees
- api: TestClient and shared-tree fixtures for API tests
"""
