from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from analyze_ndjson.core.container import Container, load_container
from analyze_ndjson.core.csr import parse_edge_ref, table_size, total_edges
from analyze_ndjson.core.errors import MalformedContainer

console = Console()


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def describe_container(container: Container) -> tuple[list[tuple[str, int]], list[tuple[str, int, int, int]]]:
    """Return (list fields with their lengths, tables with offset, slot and edge counts)."""
    lists: list[tuple[str, int]] = []
    tables: list[tuple[str, int, int, int]] = []
    for key, value in container.header.items():
        if isinstance(value, list):
            lists.append((key, len(value)))
            continue
        ref = parse_edge_ref(value)
        if ref is None:
            continue
        tables.append((key, ref.offset, table_size(container.binary, ref), total_edges(container.binary, ref)))
    return lists, tables


def inspect(
    path: Annotated[Path, typer.Argument(help="Path to a modules.data or analyze.data file.")],
) -> None:
    """Show the header fields and edge tables of one container."""
    try:
        container = load_container(path)
        lists, tables = describe_container(container)
    except (OSError, MalformedContainer) as exc:
        console.print(f"[red]Cannot read {path}: {exc}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]{path}[/green]: binary segment of {len(container.binary)} bytes")
    _render_table(["field", "entries"], lists)
    _render_table(["table", "offset", "slots", "edges"], tables)
