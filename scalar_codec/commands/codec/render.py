"""Rich rendering for resolved scalar paths."""

from __future__ import annotations

from rich.table import Table

from scalar_codec.helpers.console import console, format_path


def render_paths(rows: list[tuple[str, str, tuple[str, ...]]], *, title: str) -> None:
    """Print a table of (direction, scalar, path) rows."""
    if not rows:
        console.print(f"[yellow]No custom scalar paths in {title}[/yellow]")
        return

    table = Table(title=f"Scalar paths: {title}")
    table.add_column("Direction", style="cyan")
    table.add_column("Scalar")
    table.add_column("Path")
    for direction, name, path in rows:
        table.add_row(direction, name, format_path(path))
    console.print(table)
    console.print(f"  {len(rows)} path(s)")
