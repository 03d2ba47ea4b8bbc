"""
Experiment Query Interface

Pre-defined queries over the fixed schema (experiments, runs, layouts,
dependencies) and the per-run result tables. All functions return Polars
DataFrames, except the table listings, which return lists of names.

Every function takes an optional ``conn`` (a Database or DuckDB connection);
without it the process-wide database from ``open_database()`` is used.
Values are always bound parameters. Table names are the one thing that must
be interpolated, and they go through the identifier check first.

Not-found handling differs by design:

- Direct lookups (``get_experiment_by_id``, ``get_run_by_id``) return an
  empty DataFrame for an unknown id.
- ``get_result_data_by_run_id`` raises NotFoundError for an unknown run and
  MissingResultTableError for a run without a result table.
"""

import time

import polars as pl

from .errors import MissingResultTableError, NotFoundError
from .executor import Connectable, execute_query
from .identifiers import quote_identifier
from .introspection import get_table_info, list_all_tables, list_result_tables

DEFAULT_RUN_LIMIT = 100
DEFAULT_RECENT_HOURS = 24
DEFAULT_RESULT_LIMIT = 1000

__all__ = [
    "get_all_experiments",
    "get_experiment_by_id",
    "get_experiments_by_name",
    "get_experiment_summary",
    "get_all_runs",
    "get_runs_by_experiment",
    "get_run_by_id",
    "get_completed_runs",
    "get_recent_runs",
    "search_runs_by_guid",
    "get_layouts_for_run",
    "get_dependencies_for_run",
    "get_result_data",
    "get_result_data_by_run_id",
    "list_all_tables",
    "list_result_tables",
    "get_table_info",
]


def _check_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


# ============================================================================
# Experiment Queries
# ============================================================================


def get_all_experiments(*, conn: Connectable = None) -> pl.DataFrame:
    """Retrieve all experiments, ordered by exp_id."""
    return execute_query("SELECT * FROM experiments ORDER BY exp_id", conn=conn)


def get_experiment_by_id(exp_id: int, *, conn: Connectable = None) -> pl.DataFrame:
    """Retrieve a specific experiment by its ID.

    Returns:
        DataFrame with one row, or zero rows if the experiment does not exist
    """
    return execute_query(
        "SELECT * FROM experiments WHERE exp_id = ?", [exp_id], conn=conn
    )


def get_experiments_by_name(
    name_pattern: str, *, conn: Connectable = None
) -> pl.DataFrame:
    """Retrieve experiments whose name contains ``name_pattern``.

    The pattern is a literal substring; ``%`` and ``_`` have no wildcard
    meaning. An empty pattern matches every experiment.

    Examples:
        >>> get_experiments_by_name("cooldown")["name"].to_list()
        ['cooldown_1', 'cooldown_2']
    """
    return execute_query(
        "SELECT * FROM experiments WHERE contains(name, ?) ORDER BY exp_id",
        [name_pattern],
        conn=conn,
    )


def get_experiment_summary(*, conn: Connectable = None) -> pl.DataFrame:
    """Summarize every experiment with its run counts.

    Experiments without runs still appear, with actual_run_count and
    completed_runs of 0 and null first_run/last_run.

    Returns:
        Polars DataFrame with columns:
        - exp_id, name, sample_name, run_counter: From experiments
        - actual_run_count: Number of rows in runs for the experiment
        - first_run: Earliest run_timestamp
        - last_run: Latest run_timestamp
        - completed_runs: Number of completed runs
    """
    query = """
        SELECT
            e.exp_id,
            e.name,
            e.sample_name,
            e.run_counter,
            COUNT(r.run_id) AS actual_run_count,
            MIN(r.run_timestamp) AS first_run,
            MAX(r.run_timestamp) AS last_run,
            COUNT(CASE WHEN CAST(r.is_completed AS BOOLEAN) THEN 1 END) AS completed_runs
        FROM experiments e
        LEFT JOIN runs r ON e.exp_id = r.exp_id
        GROUP BY e.exp_id, e.name, e.sample_name, e.run_counter
        ORDER BY e.exp_id
    """
    return execute_query(query, conn=conn)


# ============================================================================
# Run Queries
# ============================================================================


def get_all_runs(
    limit: int = DEFAULT_RUN_LIMIT, *, conn: Connectable = None
) -> pl.DataFrame:
    """Retrieve the most recent runs, newest run_id first.

    Args:
        limit: Maximum number of runs; 0 returns an empty DataFrame

    Raises:
        ValueError: If limit is negative
    """
    _check_non_negative("limit", limit)
    return execute_query(
        "SELECT * FROM runs ORDER BY run_id DESC LIMIT ?", [limit], conn=conn
    )


def get_runs_by_experiment(exp_id: int, *, conn: Connectable = None) -> pl.DataFrame:
    """Retrieve all runs of an experiment, ordered by run_id."""
    return execute_query(
        "SELECT * FROM runs WHERE exp_id = ? ORDER BY run_id", [exp_id], conn=conn
    )


def get_run_by_id(run_id: int, *, conn: Connectable = None) -> pl.DataFrame:
    """Retrieve a specific run; zero rows if it does not exist."""
    return execute_query("SELECT * FROM runs WHERE run_id = ?", [run_id], conn=conn)


def get_completed_runs(
    exp_id: int | None = None, *, conn: Connectable = None
) -> pl.DataFrame:
    """Retrieve completed runs, most recently completed first.

    Args:
        exp_id: Restrict to one experiment (optional)
    """
    sql = "SELECT * FROM runs WHERE CAST(is_completed AS BOOLEAN)"
    params: list = []
    if exp_id is not None:
        sql += " AND exp_id = ?"
        params.append(exp_id)
    sql += " ORDER BY completed_timestamp DESC"
    return execute_query(sql, params, conn=conn)


def get_recent_runs(
    hours: int = DEFAULT_RECENT_HOURS, *, conn: Connectable = None
) -> pl.DataFrame:
    """Retrieve runs started in the last ``hours`` hours, newest first.

    run_timestamp is compared against the current unix time minus the
    window, so ``hours=0`` only matches runs stamped in the future.

    Raises:
        ValueError: If hours is negative
    """
    _check_non_negative("hours", hours)
    cutoff = int(time.time()) - hours * 3600
    return execute_query(
        "SELECT * FROM runs WHERE run_timestamp > ? ORDER BY run_timestamp DESC",
        [cutoff],
        conn=conn,
    )


def search_runs_by_guid(guid_pattern: str, *, conn: Connectable = None) -> pl.DataFrame:
    """Retrieve runs whose GUID contains ``guid_pattern``, newest first.

    An empty pattern matches every run.
    """
    return execute_query(
        "SELECT * FROM runs WHERE contains(guid, ?) ORDER BY run_timestamp DESC",
        [guid_pattern],
        conn=conn,
    )


# ============================================================================
# Layout Queries
# ============================================================================


def get_layouts_for_run(run_id: int, *, conn: Connectable = None) -> pl.DataFrame:
    """Retrieve the parameter layouts of a run, ordered by layout_id."""
    return execute_query(
        "SELECT * FROM layouts WHERE run_id = ? ORDER BY layout_id", [run_id], conn=conn
    )


def get_dependencies_for_run(run_id: int, *, conn: Connectable = None) -> pl.DataFrame:
    """Retrieve the dependent/setpoint links between a run's parameters.

    Returns:
        Polars DataFrame with columns:
        - dependent, independent, axis_num: From dependencies
        - dependent_parameter: Parameter name of the dependent layout
        - independent_parameter: Parameter name of the setpoint layout
    """
    query = """
        SELECT
            d.dependent,
            d.independent,
            d.axis_num,
            dl.parameter AS dependent_parameter,
            il.parameter AS independent_parameter
        FROM dependencies d
        JOIN layouts dl ON d.dependent = dl.layout_id
        LEFT JOIN layouts il ON d.independent = il.layout_id
        WHERE dl.run_id = ?
        ORDER BY d.dependent, d.axis_num
    """
    return execute_query(query, [run_id], conn=conn)


# ============================================================================
# Result Data Queries
# ============================================================================


def get_result_data(
    table_name: str, limit: int = DEFAULT_RESULT_LIMIT, *, conn: Connectable = None
) -> pl.DataFrame:
    """Retrieve rows from a result table, ordered by id.

    Args:
        table_name: Result table name, e.g. ``results-1-5``
        limit: Maximum number of rows

    Raises:
        InvalidIdentifierError: If table_name has disallowed characters
        QueryError: If the table does not exist
        ValueError: If limit is negative
    """
    table = quote_identifier(table_name)
    _check_non_negative("limit", limit)
    return execute_query(
        f"SELECT * FROM {table} ORDER BY id LIMIT ?", [limit], conn=conn
    )


def get_result_data_by_run_id(
    run_id: int, limit: int = DEFAULT_RESULT_LIMIT, *, conn: Connectable = None
) -> pl.DataFrame:
    """Retrieve result data of a run by looking up its result table.

    Raises:
        NotFoundError: If the run does not exist
        MissingResultTableError: If the run has no result table recorded
        InvalidIdentifierError: If the recorded table name is unsafe
        QueryError: If the recorded table does not exist
    """
    run = get_run_by_id(run_id, conn=conn)
    if run.is_empty():
        raise NotFoundError(run_id)

    table_name = run["result_table_name"][0]
    if not table_name:
        raise MissingResultTableError(run_id)

    return get_result_data(table_name, limit, conn=conn)
