"""Options and helpers shared by CLI commands."""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from expdb.cli.output import log_error
from expdb.config import ExpdbConfig
from expdb.persistence import Database

DbPathOption = Annotated[
    Optional[Path],
    typer.Option("--db-path", "-d", help="Path to database file (default: from config)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Write JSON rows to stdout instead of a table"),
]


def get_settings(ctx: typer.Context) -> ExpdbConfig:
    return ctx.obj if isinstance(ctx.obj, ExpdbConfig) else ExpdbConfig()


def open_store(
    ctx: typer.Context,
    db_path: Optional[Path],
    must_exist: bool = True,
    read_only: bool = True,
) -> Database:
    """Open the database named on the command line or in the config.

    Exits with code 1 if no path is known, or if the file is missing and
    must_exist is set (DuckDB would otherwise create an empty store).
    Read-only unless asked otherwise, so query commands cannot change the
    store or hold its write lock.
    """
    path = db_path or get_settings(ctx).database
    if path is None:
        log_error("No database given. Use --db-path or set 'database' in the config.")
        raise typer.Exit(code=1)
    if must_exist and not Path(path).exists():
        log_error(f"Database file not found: {path}")
        raise typer.Exit(code=1)
    return Database(path, read_only=read_only)
