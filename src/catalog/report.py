"""Terminal rendering of a published catalog."""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from rich.console import Console
from rich.table import Table

console = Console()


def library_table(items: Iterable[Mapping[str, Any]], limit: Optional[int] = None) -> Table:
    """Return a table of libraries ordered by name."""

    table = Table(title="Libraries")
    table.add_column("Name")
    table.add_column("Last version")
    table.add_column("Versions", justify="right")
    table.add_column("Zip")
    ordered = sorted(items, key=lambda item: str(item.get("name", "")).lower())
    for item in ordered[:limit] if limit else ordered:
        table.add_row(
            str(item.get("name", "")),
            str(item.get("lastversion") or "-"),
            str(len(item.get("versions", []))),
            str(item.get("zip", "")),
        )
    return table


def print_libraries(items: Iterable[Mapping[str, Any]], limit: Optional[int] = None) -> None:
    console.print(library_table(items, limit=limit))
