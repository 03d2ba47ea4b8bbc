"""
Database Management CLI Commands

Commands for inspecting and preparing an experiment database:
- init: Create the fixed schema in a new or existing store
- validate: Check the fixed tables against the record models
- list: List all tables (or only result tables)
- info: Show column metadata of a table
"""

from typing import Annotated

import typer

from expdb.cli.commands.common import DbPathOption, JsonOption, open_store
from expdb.cli.output import (
    emit_frame,
    emit_names,
    log_error,
    log_info,
    log_success,
    output_json,
)
from expdb.persistence import (
    ExpdbError,
    get_table_info,
    list_all_tables,
    list_result_tables,
)

# Create sub-app for database commands
db_app = typer.Typer(help="Database management commands")


@db_app.command("init")
def db_init(ctx: typer.Context, db_path: DbPathOption = None) -> None:
    """Create experiments, runs, layouts and dependencies tables."""
    try:
        db = open_store(ctx, db_path, must_exist=False, read_only=False)
        with db:
            if db.is_initialized():
                log_info(f"Database already initialized at {db.db_path}")
                return
            log_info(f"Initializing database at {db.db_path}...")
            db.initialize_schema()
        log_success("Database initialized")
    except ExpdbError as e:
        log_error(str(e))
        raise typer.Exit(code=1)


@db_app.command("validate")
def db_validate(ctx: typer.Context, db_path: DbPathOption = None, as_json: JsonOption = False) -> None:
    """Validate the fixed tables against the record models."""
    try:
        with open_store(ctx, db_path) as db:
            report = db.validate_schema()
    except ExpdbError as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    is_valid = all(not errors for errors in report.values())
    if as_json:
        output_json({"valid": is_valid, "tables": report})
    else:
        for table_name, errors in report.items():
            if errors:
                log_error(f"{table_name}:")
                for error in errors:
                    log_error(f"    {error}")
            else:
                log_success(table_name)

    if not is_valid:
        if not as_json:
            log_error("Schema validation failed")
        raise typer.Exit(code=1)
    if not as_json:
        log_success("Schema validation passed")


@db_app.command("list")
def db_list(
    ctx: typer.Context,
    db_path: DbPathOption = None,
    results: Annotated[
        bool,
        typer.Option("--results", "-r", help="Only list result tables"),
    ] = False,
    as_json: JsonOption = False,
) -> None:
    """List all tables in the database."""
    try:
        with open_store(ctx, db_path) as db:
            names = list_result_tables(conn=db) if results else list_all_tables(conn=db)
    except ExpdbError as e:
        log_error(f"Error listing tables: {e}")
        raise typer.Exit(code=1)

    emit_names(names, as_json=as_json, title="Result Tables" if results else "Database Tables")


@db_app.command("info")
def db_info(
    ctx: typer.Context,
    table_name: Annotated[str, typer.Argument(help="Table to describe")],
    db_path: DbPathOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show column information for a table."""
    try:
        with open_store(ctx, db_path) as db:
            info = get_table_info(table_name, conn=db)
    except ExpdbError as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    if info.is_empty() and not as_json:
        log_error(f"Table not found: {table_name}")
        raise typer.Exit(code=1)

    emit_frame(info, as_json=as_json, title=f"Columns of {table_name}")


