"""Output formatting utilities for CLI.

Follows the golden rule:
- stdout = data (JSON, or tables when printing for a human)
- stderr = human-readable logs (progress, errors, info)

This separation allows piping ``--json`` output to other tools while keeping
logs visible in the terminal.
"""

import json
import logging
import math
from datetime import date, datetime
from typing import Any, Optional

import polars as pl
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

# stdout console for tables
console = Console()
# stderr console for human logs (preserves colors when redirected)
err_console = Console(stderr=True)


def setup_logging(level: str = "WARNING") -> None:
    """Route library logging to stderr through Rich."""
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    root = logging.getLogger("expdb")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _clean(value: Any) -> Any:
    # NaN is not valid JSON; list and struct cells can hold it too
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, dict):
        return {k: _clean(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_clean(v) for v in value]
    return value


def output_json(data: Any, indent: Optional[int] = 2):
    """Output JSON to stdout (machine-readable).

    Args:
        data: Data to serialize as JSON
        indent: Indentation level (None for compact)
    """
    print(json.dumps(data, indent=indent, default=_json_default), flush=True)


def frame_to_records(df: pl.DataFrame) -> list[dict[str, Any]]:
    """Convert a DataFrame to JSON-ready row dicts."""
    return [{k: _clean(v) for k, v in row.items()} for row in df.to_dicts()]


def frame_to_table(df: pl.DataFrame, title: str | None = None) -> Table:
    """Render a DataFrame as a Rich table, columns in frame order."""
    table = Table(title=title)
    for i, name in enumerate(df.columns):
        table.add_column(escape(name), style="cyan" if i == 0 else None, overflow="fold")
    for row in df.iter_rows():
        table.add_row(*("" if v is None else escape(str(v)) for v in row))
    return table


def emit_frame(df: pl.DataFrame, *, as_json: bool, title: str | None = None) -> None:
    """Write a DataFrame as JSON rows or as a table."""
    if as_json:
        output_json(frame_to_records(df))
        return
    if df.is_empty():
        log_warning("No rows found")
        return
    console.print(frame_to_table(df, title))
    log_info(f"{df.height} row(s)")


def emit_names(names: list[str], *, as_json: bool, title: str) -> None:
    """Write a list of names as a JSON array or a one-column table."""
    if as_json:
        output_json(names)
        return
    if not names:
        log_warning("No tables found in database")
        return
    table = Table(title=title)
    table.add_column("Table Name", style="cyan")
    for name in names:
        table.add_row(escape(name))
    console.print(table)
    log_info(f"Total: {len(names)} table(s)")


def log_info(message: str, quiet: bool = False):
    """Log info message to stderr."""
    if not quiet:
        err_console.print(f"[blue]ℹ[/blue] {escape(message)}")


def log_success(message: str, quiet: bool = False):
    """Log success message to stderr."""
    if not quiet:
        err_console.print(f"[green]✓[/green] {escape(message)}")


def log_error(message: str):
    """Log error message to stderr (always shown)."""
    err_console.print(f"[red]✗[/red] {escape(message)}", style="bold red")


def log_warning(message: str, quiet: bool = False):
    """Log warning message to stderr."""
    if not quiet:
        err_console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")
