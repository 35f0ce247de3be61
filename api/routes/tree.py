"""File tree endpoints.

These endpoints expose every FileTree operation on the shared tree:
lifecycle (init/destroy), insertion and removal of directories and files,
content access, lookups, rendering and validation.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Query

from api.config import Settings
from api.dependencies import FileTreeDep, SettingsDep
from api.exceptions import FileTreeOperationError
from api.models import (
    ContainsResponse,
    ContentsResponse,
    FileRequest,
    OperationResponse,
    PathRequest,
    RenderResponse,
    ReplaceContentsResponse,
    StatResponse,
    TreeSummaryResponse,
    ValidationResponse,
)
from models.status import Status
from models.tree import NOT_FOUND, FileTree

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tree",
    tags=["tree"],
)


def _decode(contents: Optional[bytes]) -> Optional[str]:
    if contents is None:
        return None
    return contents.decode("utf-8", errors="replace")


def _complete(
    tree: FileTree, settings: Settings, result: Status, path: str | None = None
) -> OperationResponse:
    """Turn a mutating operation's status into a response.

    Raises:
        FileTreeOperationError: If the operation failed.
        RuntimeError: If invariant checking is on and the tree is now invalid.
    """
    if result != Status.SUCCESS:
        raise FileTreeOperationError(result, path)

    if settings.check_invariants:
        errors = tree.validate()
        if errors:
            raise RuntimeError(f"File tree failed invariant check: {errors[0]}")

    return OperationResponse(status=result.value, path=path, count=tree.count)


# Route Handlers


@router.get("", response_model=TreeSummaryResponse)
async def get_tree_summary(tree: FileTreeDep):
    """Get a brief overview of the shared tree."""
    return TreeSummaryResponse(
        initialized=tree.initialized,
        count=tree.count,
        summary=tree.summary,
    )


@router.post("/init", response_model=OperationResponse)
async def init_tree(tree: FileTreeDep, settings: SettingsDep):
    """Initialize the tree.

    Raises:
        FileTreeOperationError: 409 if the tree is already initialized.
    """
    return _complete(tree, settings, tree.init())


@router.post("/destroy", response_model=OperationResponse)
async def destroy_tree(tree: FileTreeDep, settings: SettingsDep):
    """Free every node and return the tree to the uninitialized state.

    Raises:
        FileTreeOperationError: 409 if the tree is not initialized.
    """
    return _complete(tree, settings, tree.destroy())


@router.post("/dirs", response_model=OperationResponse)
async def insert_dir(request: PathRequest, tree: FileTreeDep, settings: SettingsDep):
    """Insert a directory, creating missing ancestors.

    Args:
        request: The directory path.
        tree: The FileTree instance (injected by FastAPI).
        settings: The API settings (injected by FastAPI).

    Returns:
        The outcome and the new node count.
    """
    result = tree.insert_dir(request.path)
    return _complete(tree, settings, result, request.path)


@router.delete("/dirs", response_model=OperationResponse)
async def rm_dir(tree: FileTreeDep, settings: SettingsDep, path: str = Query(...)):
    """Remove a directory and its whole subtree."""
    return _complete(tree, settings, tree.rm_dir(path), path)


@router.post("/files", response_model=OperationResponse)
async def insert_file(request: FileRequest, tree: FileTreeDep, settings: SettingsDep):
    """Insert a file, creating missing ancestor directories.

    Args:
        request: The file path and its contents.
        tree: The FileTree instance (injected by FastAPI).
        settings: The API settings (injected by FastAPI).

    Returns:
        The outcome and the new node count.
    """
    result = tree.insert_file(request.path, request.contents)
    return _complete(tree, settings, result, request.path)


@router.delete("/files", response_model=OperationResponse)
async def rm_file(tree: FileTreeDep, settings: SettingsDep, path: str = Query(...)):
    """Remove a file."""
    return _complete(tree, settings, tree.rm_file(path), path)


@router.get("/files/contents", response_model=ContentsResponse)
async def get_file_contents(tree: FileTreeDep, path: str = Query(...)):
    """Get the contents of a file.

    Raises:
        FileTreeOperationError: 404 if there is no file at path.
    """
    contents = tree.get_file_contents(path)
    if contents is NOT_FOUND:
        raise FileTreeOperationError(Status.NO_SUCH_PATH, path)
    return ContentsResponse(path=path, contents=_decode(contents))


@router.put("/files/contents", response_model=ReplaceContentsResponse)
async def replace_file_contents(request: FileRequest, tree: FileTreeDep, settings: SettingsDep):
    """Replace the contents of a file and return the previous contents.

    Raises:
        FileTreeOperationError: 404 if there is no file at path.
    """
    old_contents = tree.replace_file_contents(request.path, request.contents)
    if old_contents is NOT_FOUND:
        raise FileTreeOperationError(Status.NO_SUCH_PATH, request.path)

    _complete(tree, settings, Status.SUCCESS, request.path)
    return ReplaceContentsResponse(path=request.path, old_contents=_decode(old_contents))


@router.get("/contains", response_model=ContainsResponse)
async def contains(
    tree: FileTreeDep,
    path: str = Query(...),
    kind: Literal["dir", "file"] = Query("dir"),
):
    """Check whether a directory or file exists at path.

    Lookup errors of any kind are reported as ``contains: false``.
    """
    found = tree.contains_file(path) if kind == "file" else tree.contains_dir(path)
    return ContainsResponse(path=path, kind=kind, contains=found)


@router.get("/stat", response_model=StatResponse)
async def stat(tree: FileTreeDep, path: str = Query(...)):
    """Get the kind and size of a node.

    Raises:
        FileTreeOperationError: If the lookup fails.
    """
    result, node_stat = tree.stat(path)
    if result != Status.SUCCESS:
        raise FileTreeOperationError(result, path)
    return StatResponse(path=path, is_file=node_stat.is_file, size=node_stat.size)


@router.get("/render", response_model=RenderResponse)
async def render_tree(tree: FileTreeDep):
    """Render the whole tree, one path per line."""
    return RenderResponse(rendering=tree.to_string(), count=tree.count)


@router.get("/validate", response_model=ValidationResponse)
async def validate_tree(tree: FileTreeDep):
    """Run the invariant checker over the tree."""
    errors = tree.validate()
    if errors:
        logger.warning(f"Validation requested and failed: {errors[0]}")
    return ValidationResponse(valid=not errors, errors=errors)
