from __future__ import annotations

import logging
import os

DEFAULT_MAX_SHOWN = 50
DEFAULT_MAX_ENUMERATED = 1000


def default_library_path() -> str:
    # Repo-local by default (works well for Streamlit Community Cloud too).
    return os.path.join(".", "data", "puzzles.json")


def resolve_library_path() -> str:
    return os.environ.get("BLOCKSUDOKU_LIBRARY", default_library_path())


def resolve_log_level() -> int:
    name = os.environ.get("BLOCKSUDOKU_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def _positive_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        n = int(raw)
    except ValueError:
        return default
    return n if n > 0 else default


def resolve_max_shown() -> int:
    return _positive_int_env("BLOCKSUDOKU_MAX_SHOWN", DEFAULT_MAX_SHOWN)


def resolve_max_enumerated() -> int:
    """Cap on solutions the UI enumerates before reporting "at least N"."""
    return _positive_int_env("BLOCKSUDOKU_MAX_ENUMERATED", DEFAULT_MAX_ENUMERATED)


def setup_logging() -> None:
    """Configure the root logger once; later calls are no-ops."""
    logging.basicConfig(
        level=resolve_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
