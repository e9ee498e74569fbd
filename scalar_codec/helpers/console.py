"""Shared console and utilities for CLI commands."""

from __future__ import annotations

from rich.console import Console

console = Console()


def format_path(path: tuple[str, ...]) -> str:
    """Render a scalar path as a dotted string (``$`` for the root)."""
    return ".".join(path) if path else "$"
