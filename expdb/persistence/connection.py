"""
DuckDB Connection Manager

Manages the database connection for an experiment store: opening, schema
initialization for empty stores, validation, and closing.

Two ways to hold a connection:

- An explicit ``Database`` handle, passed to query functions via ``conn=``
- The process-wide active database, set by ``open_database()`` and used by
  every query function called without ``conn``
"""

import logging
from pathlib import Path

import duckdb

from .errors import DatabaseConnectionError, NoConnectionError, QueryError
from .models import SCHEMA_MODELS
from .schema_generator import generate_schema_statements, validate_table_schema

logger = logging.getLogger(__name__)


class Database:
    """Owns one DuckDB connection to an experiment store.

    Usage:
        # Simple usage
        db = Database("experiments.duckdb")
        df = get_all_experiments(conn=db)
        db.close()

        # Context manager usage
        with Database("experiments.duckdb") as db:
            df = get_all_experiments(conn=db)

    A path whose file does not exist yet opens an empty store. ``":memory:"``
    opens an in-memory store.
    """

    def __init__(self, db_path: str | Path = ":memory:", read_only: bool = False):
        """Open the connection.

        Args:
            db_path: Path to the DuckDB database file, or ":memory:"
            read_only: Open without write access; the engine rejects any
                statement that would change the store

        Raises:
            DatabaseConnectionError: If DuckDB cannot open the file (for
                example, its parent directory does not exist)
        """
        self.db_path = db_path if str(db_path) == ":memory:" else Path(db_path)
        self.read_only = read_only
        self._conn: duckdb.DuckDBPyConnection | None = None
        try:
            self._conn = duckdb.connect(str(self.db_path), read_only=read_only)
        except duckdb.Error as e:
            raise DatabaseConnectionError(str(db_path), str(e)) from e

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def conn(self) -> duckdb.DuckDBPyConnection:
        """The underlying DuckDB connection.

        Raises:
            NoConnectionError: If this database has been closed
        """
        if self._conn is None:
            raise NoConnectionError(f"Database {self.db_path} is closed.")
        return self._conn

    def get_connection(self) -> duckdb.DuckDBPyConnection:
        return self.conn

    def initialize_schema(self) -> None:
        """Create the fixed tables (experiments, runs, layouts, dependencies).

        Uses CREATE TABLE IF NOT EXISTS, so it is safe to run on a store that
        already has them. Existing tables are never altered.

        Raises:
            QueryError: If the engine rejects a DDL statement
        """
        for statement in generate_schema_statements():
            try:
                self.conn.execute(statement)
            except duckdb.Error as e:
                raise QueryError(statement, str(e)) from e
        logger.info("Schema initialized in %s", self.db_path)

    def is_initialized(self) -> bool:
        """Check whether every fixed table exists.

        Examples:
            >>> db = Database(":memory:")
            >>> db.is_initialized()
            False
            >>> db.initialize_schema()
            >>> db.is_initialized()
            True
        """
        rows = self.conn.execute(
            """
            SELECT table_name FROM duckdb_tables()
            WHERE database_name = current_database() AND NOT temporary
            """
        ).fetchall()
        existing = {row[0] for row in rows}
        return all(model.model_config["table_name"] in existing for model in SCHEMA_MODELS)

    def validate_schema(self) -> dict[str, list[str]]:
        """Check the fixed tables against the record models.

        Returns:
            Mapping of table name to its list of problems; an empty list
            means the table matches.
        """
        report = {}
        for model in SCHEMA_MODELS:
            _is_valid, errors = validate_table_schema(self.conn, model)
            report[model.model_config["table_name"]] = errors
        return report

    def close(self) -> None:
        """Close the connection. Closing twice is harmless."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"Database({str(self.db_path)!r}, {state})"


# ============================================================================
# Process-wide Connection
# ============================================================================

_active: Database | None = None


def open_database(db_path: str | Path, read_only: bool = False) -> Database:
    """Open a database and make it the process-wide active connection.

    If a database is already active it is closed before being replaced.

    Args:
        db_path: Path to the DuckDB database file
        read_only: Open without write access

    Returns:
        The newly opened Database

    Raises:
        DatabaseConnectionError: If the file cannot be opened

    Examples:
        >>> db = open_database("experiments.duckdb")
        >>> get_database() is db
        True
    """
    global _active
    db = Database(db_path, read_only=read_only)
    if _active is not None:
        logger.info("Closing previously open database %s", _active.db_path)
        _active.close()
    _active = db
    logger.info("Database opened successfully: %s", db_path)
    return db


def close_database() -> None:
    """Close the process-wide connection; a no-op if none is open."""
    global _active
    if _active is None:
        logger.debug("No database connection to close.")
        return
    _active.close()
    logger.info("Database connection closed: %s", _active.db_path)
    _active = None


def get_database() -> Database:
    """Return the process-wide active database.

    Raises:
        NoConnectionError: If no database is open
    """
    if _active is None:
        raise NoConnectionError()
    return _active


def get_connection() -> duckdb.DuckDBPyConnection:
    """Return the DuckDB connection of the process-wide active database.

    Raises:
        NoConnectionError: If no database is open
    """
    return get_database().conn


def resolve_connection(
    conn: "Database | duckdb.DuckDBPyConnection | None" = None,
) -> duckdb.DuckDBPyConnection:
    """Pick the connection an operation should run on.

    Args:
        conn: Explicit Database or DuckDB connection; None selects the
            process-wide active database

    Raises:
        NoConnectionError: If conn is None and no database is open, or conn
            is a closed Database
    """
    if conn is None:
        return get_connection()
    if isinstance(conn, Database):
        return conn.conn
    return conn
