"""Storage module for Lifepath.

This module provides the content repository interface and its implementations
for loading scenarios and dream cards.

Usage:
    from lifepath.storage import get_content_repository

    # Get repository using configured content directory (from environment)
    repo = get_content_repository()
    cards = repo.list_dream_cards()
    scenarios = repo.list_scenarios()

    # Or point at a directory explicitly
    repo = get_content_repository("path/to/content")

Configuration via environment variables:
    LIFEPATH_CONTENT_PATH: Content directory (default: bundled lifepath/data)
    LIFEPATH_TOTAL_TURNS: Default run length (default: 50)
"""

from .config import (
    DEFAULT_CONTENT_PATH,
    get_content_path,
    get_content_repository,
    get_total_turns,
)
from .file_repo import FileContentRepository
from .repository import ContentRepository, InMemoryContentRepository

__all__ = [
    # Abstract interface
    "ContentRepository",
    # Implementations
    "FileContentRepository",
    "InMemoryContentRepository",
    # Configuration
    "DEFAULT_CONTENT_PATH",
    "get_content_path",
    "get_total_turns",
    # Factory functions
    "get_content_repository",
]
