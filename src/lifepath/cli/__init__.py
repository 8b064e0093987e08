"""Lifepath CLI module.

Provides a Textual-based terminal interface for living a Lifepath run.

Usage:
    uv run lifepath

Or directly:
    python -m lifepath.cli.app
"""

from lifepath.cli.app import LifepathApp, main

__all__ = ["LifepathApp", "main"]
