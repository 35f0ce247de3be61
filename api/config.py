"""Load API settings from environment variables.

Values can also come from a ``.env`` file in the working directory.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the file tree API.

    Args:
        log_level: Name of the root logging level.
        check_invariants: Run the checker after every mutating request.
        auto_init: Initialize the shared tree when the app starts.
    """

    log_level: str = "INFO"
    check_invariants: bool = False
    auto_init: bool = True


def _getenv(name: str, default: str) -> str:
    """os.getenv wrapper that strips inline comments (e.g. 'true  # note' -> 'true')."""
    raw = os.getenv(name, default)
    return raw.split(" #")[0].strip()


def _getbool(name: str, default: bool) -> bool:
    value = _getenv(name, "true" if default else "false").lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Environment variable {name} must be a boolean, got {value!r}")


def load_settings() -> Settings:
    """Build Settings from the environment.

    Raises:
        ValueError: If a variable holds an unusable value.
    """
    log_level = _getenv("FT_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"FT_LOG_LEVEL is not a logging level: {log_level!r}")

    return Settings(
        log_level=log_level,
        check_invariants=_getbool("FT_CHECK_INVARIANTS", False),
        auto_init=_getbool("FT_AUTO_INIT", True),
    )
