"""
Persistence layer for expdb.

DuckDB-backed access to experiments, runs, layouts, dependencies and the
per-run result tables.
"""

from .connection import (
    Database,
    close_database,
    get_connection,
    get_database,
    open_database,
    resolve_connection,
)
from .errors import (
    DatabaseConnectionError,
    ExpdbError,
    InvalidIdentifierError,
    MissingResultTableError,
    NoConnectionError,
    NotFoundError,
    QueryError,
)
from .executor import execute_query, execute_statement
from .identifiers import is_valid_identifier, quote_identifier, validate_identifier
from .models import (
    RESULT_TABLE_PREFIX,
    DependencyRecord,
    ExperimentRecord,
    LayoutRecord,
    RunRecord,
    result_table_name,
)
from .queries import *  # noqa: F401,F403
from .queries import __all__ as _query_names

__all__ = [
    "Database",
    "open_database",
    "close_database",
    "get_database",
    "get_connection",
    "resolve_connection",
    "execute_query",
    "execute_statement",
    "validate_identifier",
    "quote_identifier",
    "is_valid_identifier",
    "ExpdbError",
    "DatabaseConnectionError",
    "NoConnectionError",
    "QueryError",
    "InvalidIdentifierError",
    "NotFoundError",
    "MissingResultTableError",
    "ExperimentRecord",
    "RunRecord",
    "LayoutRecord",
    "DependencyRecord",
    "RESULT_TABLE_PREFIX",
    "result_table_name",
    *_query_names,
]
