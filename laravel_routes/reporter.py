"""Rich console output: route table and summary."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from .models import RouteRecord


def print_report(routes: List[RouteRecord], show_resources: bool = True,
                 console: Optional[Console] = None) -> None:
    """Print a table of resolved routes followed by summary counts."""
    console = console or Console()

    if not routes:
        console.print("[yellow]No routes discovered.[/yellow]")
        return

    display = routes if show_resources else [
        r for r in routes if not r.is_resource_collection
    ]
    multi_file = len({r.source_file for r in routes}) > 1

    table = Table(title="Laravel Routes")
    if multi_file:
        table.add_column("File", style="dim", max_width=30)
    table.add_column("Line", justify="right", width=6)
    table.add_column("Method", style="bold cyan", width=24)
    table.add_column("Route Path", style="white", max_width=60)
    table.add_column("Raw Path", style="dim", max_width=40)

    for route in sorted(display, key=lambda r: (r.source_file, r.line_index)):
        style = _method_style(route.http_method)
        row = [
            str(route.line_index + 1),
            f"[{style}]{route.method_label}[/{style}]",
            route.resolved_path,
            route.raw_path,
        ]
        if multi_file:
            row.insert(0, route.source_file)
        table.add_row(*row)

    console.print(table)
    console.print()

    _print_summary(console, routes)


def _print_summary(console: Console, routes: List[RouteRecord]) -> None:
    """Print summary statistics."""
    by_method = Counter(r.http_method for r in routes)
    resources = sum(1 for r in routes if r.is_resource_collection)

    console.print("[bold]Summary:[/bold]")
    console.print(f"  Total routes:      {len(routes)}")
    for method, count in sorted(by_method.items()):
        if method in ("APIRESOURCE", "RESOURCE"):
            continue
        console.print(f"  {method + ':':<18} {count:>4}")

    if resources:
        console.print(
            f"  [magenta]Resource collections (not expanded): {resources}[/magenta]"
        )

    console.print()


def _method_style(method: str) -> str:
    """Return a Rich style for an HTTP method."""
    styles = {
        "GET": "green",
        "POST": "yellow",
        "PUT": "blue",
        "PATCH": "blue",
        "DELETE": "red",
        "OPTIONS": "cyan",
        "ANY": "white",
        "APIRESOURCE": "magenta",
        "RESOURCE": "magenta",
    }
    return styles.get(method, "white")
