"""
Query Executor

Runs SQL against an explicit connection or the process-wide active one.
Read queries come back as Polars DataFrames; statements return nothing.
Engine failures surface as QueryError carrying the SQL text.
"""

import logging
from collections.abc import Sequence
from typing import Any

import duckdb
import polars as pl

from .connection import Database, resolve_connection
from .errors import QueryError

logger = logging.getLogger(__name__)

Connectable = Database | duckdb.DuckDBPyConnection | None


def execute_query(
    sql: str,
    params: Sequence[Any] | None = None,
    *,
    conn: Connectable = None,
) -> pl.DataFrame:
    """Execute a read query and return its result as a DataFrame.

    Row order is whatever the query's ORDER BY (or the engine) produces.

    Args:
        sql: SQL text, with ``?`` placeholders for bound values
        params: Values bound to the placeholders, in order
        conn: Database or DuckDB connection (default: process-wide)

    Returns:
        Polars DataFrame with one column per result column

    Raises:
        NoConnectionError: If no connection is available
        QueryError: If the engine rejects the query

    Examples:
        >>> df = execute_query("SELECT COUNT(*) AS count FROM experiments")
        >>> df["count"][0]
        3
    """
    connection = resolve_connection(conn)
    try:
        return connection.execute(sql, params).pl()
    except duckdb.Error as e:
        logger.debug("Query failed: %s", e)
        raise QueryError(sql, str(e), params) from e


def execute_statement(
    sql: str,
    params: Sequence[Any] | None = None,
    *,
    conn: Connectable = None,
) -> None:
    """Execute a statement (INSERT, UPDATE, DELETE, CREATE, ...) for its side effects.

    Args:
        sql: SQL text, with ``?`` placeholders for bound values
        params: Values bound to the placeholders, in order
        conn: Database or DuckDB connection (default: process-wide)

    Raises:
        NoConnectionError: If no connection is available
        QueryError: If the engine rejects the statement
    """
    connection = resolve_connection(conn)
    try:
        connection.execute(sql, params)
    except duckdb.Error as e:
        logger.debug("Statement failed: %s", e)
        raise QueryError(sql, str(e), params) from e
    logger.debug("Statement executed successfully.")
