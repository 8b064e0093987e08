"""Storage configuration for Lifepath.

This module reads content and run-length configuration from the environment
and provides the factory that builds the configured content repository.
"""

import os
from pathlib import Path

from lifepath.parameters import DEFAULT_TOTAL_TURNS

from .file_repo import FileContentRepository
from .repository import ContentRepository

# Bundled content shipped inside the package
DEFAULT_CONTENT_PATH = Path(__file__).resolve().parent.parent / "data"


def get_content_path() -> Path:
    """Get configured content directory from environment."""
    configured = os.environ.get("LIFEPATH_CONTENT_PATH")
    if configured:
        return Path(configured)
    return DEFAULT_CONTENT_PATH


def get_total_turns() -> int:
    """Get configured run length from environment.

    Returns:
        LIFEPATH_TOTAL_TURNS if set, else DEFAULT_TOTAL_TURNS

    Raises:
        ValueError: If the variable is not a positive integer
    """
    raw = os.environ.get("LIFEPATH_TOTAL_TURNS")
    if not raw:
        return DEFAULT_TOTAL_TURNS
    try:
        turns = int(raw)
    except ValueError:
        raise ValueError(f"LIFEPATH_TOTAL_TURNS must be an integer, got {raw!r}") from None
    if turns < 1:
        raise ValueError(f"LIFEPATH_TOTAL_TURNS must be at least 1, got {turns}")
    return turns


def get_content_repository(content_path: str | Path | None = None) -> ContentRepository:
    """Factory function to create the content repository.

    Args:
        content_path: Content directory. If None, uses environment config.

    Returns:
        ContentRepository instance
    """
    if content_path is None:
        content_path = get_content_path()
    return FileContentRepository(content_path)
