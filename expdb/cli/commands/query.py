"""
Query CLI Commands

Read-only views of experiments, runs and result tables:
- experiments: List experiments, filter by name, or summarize run counts
- runs: List runs, filtered by experiment, completion, age or GUID
- results: Show the result table of a run
- query: Run arbitrary SQL
"""

from typing import Annotated, Optional

import typer

from expdb.cli.commands.common import DbPathOption, JsonOption, get_settings, open_store
from expdb.cli.output import emit_frame, log_error
from expdb.persistence import (
    ExpdbError,
    execute_query,
    get_all_experiments,
    get_all_runs,
    get_completed_runs,
    get_experiment_summary,
    get_experiments_by_name,
    get_recent_runs,
    get_result_data_by_run_id,
    get_runs_by_experiment,
    search_runs_by_guid,
)


def query_experiments(
    ctx: typer.Context,
    db_path: DbPathOption = None,
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Only experiments whose name contains this text"),
    ] = None,
    summary: Annotated[
        bool,
        typer.Option("--summary", "-s", help="Include run counts and time range"),
    ] = False,
    as_json: JsonOption = False,
) -> None:
    """List experiments in the database."""
    try:
        with open_store(ctx, db_path) as db:
            if summary:
                df = get_experiment_summary(conn=db)
                if name is not None:
                    df = df.filter(df["name"].str.contains(name, literal=True))
            elif name is not None:
                df = get_experiments_by_name(name, conn=db)
            else:
                df = get_all_experiments(conn=db)
    except ExpdbError as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    emit_frame(df, as_json=as_json, title="Experiment Summary" if summary else "Experiments")


def query_runs(
    ctx: typer.Context,
    db_path: DbPathOption = None,
    exp_id: Annotated[
        Optional[int],
        typer.Option("--exp-id", "-e", help="Only runs of this experiment"),
    ] = None,
    completed: Annotated[
        bool,
        typer.Option("--completed", help="Only completed runs"),
    ] = False,
    recent: Annotated[
        Optional[int],
        typer.Option("--recent", help="Only runs started in the last N hours", min=0),
    ] = None,
    guid: Annotated[
        Optional[str],
        typer.Option("--guid", "-g", help="Only runs whose GUID contains this text"),
    ] = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Maximum number of runs (default: from config)", min=0),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """List runs, newest first unless filtered by experiment."""
    # --exp-id and --completed combine; the other filters stand alone
    selectors = [completed or exp_id is not None, recent is not None, guid is not None]
    if sum(selectors) > 1:
        log_error("--recent and --guid cannot be combined with other filters")
        raise typer.Exit(code=2)

    settings = get_settings(ctx)
    try:
        with open_store(ctx, db_path) as db:
            if completed:
                df = get_completed_runs(exp_id, conn=db)
            elif exp_id is not None:
                df = get_runs_by_experiment(exp_id, conn=db)
            elif recent is not None:
                df = get_recent_runs(recent, conn=db)
            elif guid is not None:
                df = search_runs_by_guid(guid, conn=db)
            else:
                df = get_all_runs(settings.run_limit if limit is None else limit, conn=db)
    except ExpdbError as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    if limit is not None:
        df = df.head(limit)
    emit_frame(df, as_json=as_json, title="Runs")


def query_results(
    ctx: typer.Context,
    run_id: Annotated[int, typer.Argument(help="Run whose result table to show")],
    db_path: DbPathOption = None,
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-l", help="Maximum number of rows (default: from config)", min=0),
    ] = None,
    as_json: JsonOption = False,
) -> None:
    """Show the result data of a run, ordered by id."""
    settings = get_settings(ctx)
    try:
        with open_store(ctx, db_path) as db:
            df = get_result_data_by_run_id(
                run_id, settings.result_limit if limit is None else limit, conn=db
            )
    except ExpdbError as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    emit_frame(df, as_json=as_json, title=f"Results of run {run_id}")


def query_sql(
    ctx: typer.Context,
    sql: Annotated[str, typer.Argument(help="SQL query to run")],
    db_path: DbPathOption = None,
    as_json: JsonOption = False,
) -> None:
    """Run an arbitrary read query and print its rows."""
    try:
        with open_store(ctx, db_path) as db:
            df = execute_query(sql, conn=db)
    except ExpdbError as e:
        log_error(str(e))
        raise typer.Exit(code=1)

    emit_frame(df, as_json=as_json)
