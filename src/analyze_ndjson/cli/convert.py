from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from analyze_ndjson.core.convert import load_modules, run_convert
from analyze_ndjson.core.errors import MalformedContainer
from analyze_ndjson.log import configure_logging
from analyze_ndjson.settings import get_settings
from analyze_ndjson.storage.ndjson import NdjsonSink

console = Console()


def convert(
    input_dir: Annotated[
        Path | None,
        typer.Option("--input", help="Directory holding modules.data and per-route analyze.data files."),
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", help="Directory to write NDJSON files into.")] = None,
    flush_threshold: Annotated[
        int | None,
        typer.Option(min=0, help="Buffered characters per file before appending to disk."),
    ] = None,
    log_level: Annotated[str | None, typer.Option(help="Logging level (DEBUG, INFO, WARNING, ...).")] = None,
) -> None:
    """Convert bundle analyzer .data files to NDJSON."""
    try:
        settings = get_settings()
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None

    input_dir = input_dir or settings.input_dir
    output_dir = output or settings.output_dir
    try:
        configure_logging(log_level or settings.log_level)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None

    if not input_dir.is_dir():
        console.print(f"[red]Input directory not found: {input_dir}[/red]")
        console.print("Run 'next experimental-analyze --output' first.")
        raise typer.Exit(1)

    # Opening the sink truncates existing output, so fail on modules.data first.
    try:
        modules = load_modules(input_dir)
    except (FileNotFoundError, MalformedContainer) as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None

    threshold = settings.flush_threshold if flush_threshold is None else flush_threshold
    with NdjsonSink(output_dir, threshold) as sink:
        summary = run_convert(input_dir, sink, modules)
        counts = sink.close()

    table = Table(show_lines=False)
    table.add_column("file")
    table.add_column("records", justify="right")
    for category, count in counts.items():
        table.add_row(f"{category}.ndjson", str(count))
    console.print(table)

    for route, reason in summary.failed_routes.items():
        console.print(f"[yellow]Skipped route {route}:[/yellow] {reason}")
    console.print(f"[green]Output written to[/green] {output_dir}/")
