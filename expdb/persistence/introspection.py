"""
Schema Introspection

Catalog lookups: table listing, result-table discovery by naming convention,
and per-table column metadata. Result tables have experiment-specific
columns, so this is the only way to learn their shape.
"""

import polars as pl

from .executor import Connectable, execute_query
from .identifiers import validate_identifier
from .models import RESULT_TABLE_PREFIX

# Base tables of the opened database; temporary tables are excluded
_TABLES_SQL = """
    SELECT table_name AS name
    FROM duckdb_tables()
    WHERE database_name = current_database()
      AND schema_name = 'main'
      AND NOT temporary
"""

_COLUMNS_SQL = """
    SELECT
        c.column_index - 1 AS cid,
        c.column_name AS name,
        c.data_type AS type,
        NOT c.is_nullable AS notnull,
        c.column_default AS dflt_value,
        EXISTS (
            SELECT 1 FROM duckdb_constraints() k
            WHERE k.database_name = c.database_name
              AND k.schema_name = c.schema_name
              AND k.table_name = c.table_name
              AND k.constraint_type = 'PRIMARY KEY'
              AND list_contains(k.constraint_column_names, c.column_name)
        ) AS pk
    FROM duckdb_columns() c
    WHERE c.database_name = current_database()
      AND c.schema_name = 'main'
      AND lower(c.table_name) = lower(?)
    ORDER BY c.column_index
"""


def list_all_tables(*, conn: Connectable = None) -> list[str]:
    """List every table in the database, alphabetically.

    Examples:
        >>> list_all_tables()
        ['dependencies', 'experiments', 'layouts', 'results-1-1', 'runs']
    """
    df = execute_query(_TABLES_SQL + " ORDER BY table_name", conn=conn)
    return df["name"].to_list()


def list_result_tables(*, conn: Connectable = None) -> list[str]:
    """List the per-run result tables (names starting with ``results-``), alphabetically."""
    df = execute_query(
        _TABLES_SQL + " AND starts_with(table_name, ?) ORDER BY table_name",
        [RESULT_TABLE_PREFIX],
        conn=conn,
    )
    return df["name"].to_list()


def get_table_info(table_name: str, *, conn: Connectable = None) -> pl.DataFrame:
    """Get column information for a table.

    Args:
        table_name: Table to describe; must pass the identifier check
        conn: Database or DuckDB connection (default: process-wide)

    Returns:
        DataFrame with columns cid, name, type, notnull, dflt_value, pk, in
        column order. Names match case-insensitively, as DuckDB resolves
        them. Zero rows if the table does not exist.

    Raises:
        InvalidIdentifierError: If table_name has disallowed characters
    """
    validate_identifier(table_name)
    return execute_query(_COLUMNS_SQL, [table_name], conn=conn)
