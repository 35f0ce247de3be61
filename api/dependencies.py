"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to shared resources like the FileTree and settings.
"""

import logging
from typing import Annotated

from fastapi import Depends

from api.config import Settings, load_settings
from models.tree import FileTree

logger = logging.getLogger(__name__)

# Global state
# One file tree per process, created when the app starts
_file_tree: FileTree | None = None
_settings: Settings | None = None


def get_file_tree() -> FileTree:
    """Get the shared FileTree instance.

    This function is a FastAPI dependency. When you add it to a route handler's
    parameters, FastAPI will automatically call this function and inject the result.

    Returns:
        The shared FileTree instance.

    Raises:
        RuntimeError: If the tree hasn't been created yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(tree: Annotated[FileTree, Depends(get_file_tree)]):
            return {"summary": tree.summary}
    """
    if _file_tree is None:
        raise RuntimeError(
            "FileTree not initialized. Call initialize_file_tree() first."
        )

    return _file_tree


def get_settings() -> Settings:
    """Get the settings loaded at startup, loading them on first use."""
    global _settings

    if _settings is None:
        _settings = load_settings()
    return _settings


def initialize_file_tree(settings: Settings | None = None) -> FileTree:
    """Create the shared FileTree instance.

    This should be called once when the FastAPI app starts up. The tree is
    initialized right away unless settings turn ``auto_init`` off, in which
    case clients must POST /tree/init first.

    Args:
        settings: Settings to use; loaded from the environment if omitted.

    Returns:
        The newly created FileTree instance.
    """
    global _file_tree, _settings

    _settings = settings or get_settings()
    _file_tree = FileTree()
    if _settings.auto_init:
        _file_tree.init()
    logger.info(f"Shared file tree created ({_file_tree.summary})")

    return _file_tree


def shutdown_file_tree() -> None:
    """Destroy the shared FileTree, freeing every node."""
    global _file_tree

    if _file_tree is not None and _file_tree.initialized:
        _file_tree.destroy()

    _file_tree = None


# Type aliases for dependency injection
FileTreeDep = Annotated[FileTree, Depends(get_file_tree)]
SettingsDep = Annotated[Settings, Depends(get_settings)]
