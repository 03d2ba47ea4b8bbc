"""expdb CLI - Main entry point."""

from pathlib import Path
from typing import Optional

import typer
import yaml
from typing_extensions import Annotated

from expdb import __version__
from expdb.cli.output import log_error, setup_logging
from expdb.config import resolve_config

app = typer.Typer(
    name="expdb",
    help="expdb - query experiments, runs and result tables in an experiment database",
    add_completion=True,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from expdb.cli.output import console
        console.print(f"[bold]expdb[/bold] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML configuration file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging on stderr"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """expdb CLI - inspect an experiment database from the terminal."""
    try:
        settings = resolve_config(config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


# Import commands after app is defined to avoid circular imports
from expdb.cli.commands.db import db_app
from expdb.cli.commands.query import (
    query_experiments,
    query_results,
    query_runs,
    query_sql,
)

app.add_typer(db_app, name="db")
app.command(name="experiments", help="List experiments, or summarize them")(query_experiments)
app.command(name="runs", help="List runs with optional filters")(query_runs)
app.command(name="results", help="Show the result table of a run")(query_results)
app.command(name="query", help="Run an arbitrary read query")(query_sql)


if __name__ == "__main__":
    app()
