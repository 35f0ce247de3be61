"""Result taxonomy for file tree operations."""

from enum import Enum


class Status(str, Enum):
    """Outcome of a file tree operation."""

    SUCCESS = "success"
    UNINITIALIZED = "uninitialized"
    ALREADY_INITIALIZED = "already_initialized"
    BAD_PATH = "bad_path"
    CONFLICTING_PATH = "conflicting_path"
    NOT_A_DIRECTORY = "not_a_directory"
    NOT_A_FILE = "not_a_file"
    NO_SUCH_PATH = "no_such_path"
    ALREADY_IN_TREE = "already_in_tree"
    OUT_OF_MEMORY = "out_of_memory"


class FileTreeError(Exception):
    """Raised by paths and nodes when an operation cannot complete.

    The tree catches these at its public boundary and hands the status
    back to the caller, so they never escape a FileTree method.

    Args:
        status: The failure status.
        message: Optional human-readable detail.
    """

    def __init__(self, status: Status, message: str | None = None):
        self.status = status
        self.message = message or status.value.replace("_", " ")
        super().__init__(self.message)
