"""
DDL Generation from Pydantic Models

Generates CREATE TABLE and CREATE INDEX statements for the fixed schema from
the record models, and checks an existing database against them.
"""

from typing import Any, Type, get_args

import duckdb
from pydantic import BaseModel

from .models import SCHEMA_MODELS


# ============================================================================
# Type Mapping
# ============================================================================

PYTHON_TO_SQL_TYPE_MAP = {
    str: "VARCHAR",
    int: "BIGINT",
    float: "DOUBLE",
    bool: "BOOLEAN",
}


def python_type_to_sql_type(py_type: Any) -> str:
    """Convert Python type annotation to SQL type.

    Examples:
        >>> python_type_to_sql_type(str)
        'VARCHAR'
        >>> python_type_to_sql_type(int | None)
        'BIGINT'
    """
    args = get_args(py_type)
    if args:
        # Optional[X]: take the first non-None member
        py_type = next((arg for arg in args if arg is not type(None)), str)

    return PYTHON_TO_SQL_TYPE_MAP.get(py_type, "VARCHAR")


# ============================================================================
# DDL Generation
# ============================================================================


def _table_name(model: Type[BaseModel]) -> str:
    table_name = model.model_config.get("table_name")
    if not table_name:
        raise ValueError(f"Model {model.__name__} missing model_config['table_name']")
    return table_name


def generate_create_table_ddl(model: Type[BaseModel]) -> str:
    """Generate CREATE TABLE DDL from a record model.

    Args:
        model: Pydantic model class with model_config["table_name"]

    Returns:
        SQL CREATE TABLE statement

    Raises:
        ValueError: If model is missing its table name

    Examples:
        >>> from expdb.persistence.models import LayoutRecord
        >>> ddl = generate_create_table_ddl(LayoutRecord)
        >>> "CREATE TABLE IF NOT EXISTS layouts" in ddl
        True
    """
    table_name = _table_name(model)
    primary_key = model.model_config.get("primary_key", [])

    columns = []
    for field_name, field_info in model.model_fields.items():
        sql_type = python_type_to_sql_type(field_info.annotation)
        null_constraint = "" if _is_field_optional(field_info) else " NOT NULL"
        default = _default_clause(field_info.default)
        columns.append(f"    {field_name} {sql_type}{null_constraint}{default}")

    if primary_key:
        columns.append(f"    PRIMARY KEY ({', '.join(primary_key)})")

    ddl = f"CREATE TABLE IF NOT EXISTS {table_name} (\n"
    ddl += ",\n".join(columns)
    ddl += "\n);"
    return ddl


def generate_create_indexes_ddl(model: Type[BaseModel]) -> list[str]:
    """Generate CREATE INDEX statements from model_config["indexes"]."""
    table_name = _table_name(model)
    return [
        f"CREATE INDEX IF NOT EXISTS {index_name} ON {table_name} ({', '.join(columns)});"
        for index_name, columns in model.model_config.get("indexes", [])
    ]


def generate_schema_statements() -> list[str]:
    """All DDL statements for the fixed schema, tables before their indexes."""
    statements = []
    for model in SCHEMA_MODELS:
        statements.append(generate_create_table_ddl(model))
        statements.extend(generate_create_indexes_ddl(model))
    return statements


def generate_full_schema_ddl() -> str:
    """Generate the complete fixed-schema DDL as one script.

    Examples:
        >>> ddl = generate_full_schema_ddl()
        >>> "experiments" in ddl and "dependencies" in ddl
        True
    """
    return "\n\n".join(generate_schema_statements())


def _is_field_optional(field_info: Any) -> bool:
    """A field is nullable if its annotation admits None."""
    return type(None) in get_args(field_info.annotation)


def _default_clause(default: Any) -> str:
    """Render a literal model default as a DEFAULT clause, or nothing."""
    # bool before int: bool is an int subclass
    if isinstance(default, bool):
        return f" DEFAULT {'TRUE' if default else 'FALSE'}"
    if isinstance(default, int):
        return f" DEFAULT {default}"
    if isinstance(default, str):
        escaped = default.replace("'", "''")
        return f" DEFAULT '{escaped}'"
    return ""


# ============================================================================
# Schema Validation
# ============================================================================


def validate_table_schema(
    conn: duckdb.DuckDBPyConnection, model: Type[BaseModel]
) -> tuple[bool, list[str]]:
    """Validate that a database table has the columns a record model expects.

    Extra columns are reported as errors too; column types are not compared.

    Args:
        conn: DuckDB connection
        model: Record model to validate against

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    table_name = _table_name(model)

    try:
        # DESCRIBE returns: column_name, column_type, null, key, default, extra
        result = conn.execute(f"DESCRIBE {table_name}").fetchall()
    except duckdb.Error as e:
        return False, [f"Table {table_name} does not exist: {e}"]

    db_fields = {row[0] for row in result}
    model_fields = set(model.model_fields)

    errors = [
        f"Column '{col}' missing from table {table_name}"
        for col in sorted(model_fields - db_fields)
    ]
    extra_columns = db_fields - model_fields
    if extra_columns:
        errors.append(f"Unexpected columns in {table_name}: {sorted(extra_columns)}")

    return not errors, errors
