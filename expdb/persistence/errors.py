"""
Persistence Errors

Exception hierarchy raised by the connection, executor, and query layers.
Every error derives from ExpdbError so callers can catch the whole family.
"""

from collections.abc import Sequence
from typing import Any


class ExpdbError(Exception):
    """Base class for all expdb errors."""


class DatabaseConnectionError(ExpdbError, ConnectionError):
    """Opening the database file failed (filesystem or engine failure).

    A file that simply does not exist yet is not an error: DuckDB creates an
    empty store in its place.
    """

    def __init__(self, db_path: str, message: str):
        self.db_path = db_path
        self.engine_message = message
        super().__init__(f"Failed to open database {db_path}: {message}")


class NoConnectionError(ExpdbError):
    """An operation needed a connection but none is open."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "No database connection. Call open_database() first."
        )


class QueryError(ExpdbError):
    """The engine rejected a query or statement.

    Attributes:
        sql: The SQL text that failed
        params: Bound parameters, if any
        engine_message: The underlying DuckDB error message
    """

    def __init__(
        self, sql: str, engine_message: str, params: Sequence[Any] | None = None
    ):
        self.sql = sql
        self.params = list(params) if params is not None else None
        self.engine_message = engine_message
        super().__init__(f"Failed to execute query: {engine_message}\nQuery: {sql}")


class InvalidIdentifierError(ExpdbError, ValueError):
    """A table name failed the identifier character-set check."""

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(f"Invalid table name: {identifier!r}")


class NotFoundError(ExpdbError, LookupError):
    """A run referenced by id does not exist."""

    def __init__(self, run_id: int):
        self.run_id = run_id
        super().__init__(f"Run with ID {run_id} not found")


class MissingResultTableError(ExpdbError, LookupError):
    """A run exists but has no result table recorded."""

    def __init__(self, run_id: int):
        self.run_id = run_id
        super().__init__(f"No result table specified for run {run_id}")
