"""
Schema Generator Tests

DDL for the fixed tables is derived from the record models.
"""

import duckdb
import pytest
from pydantic import BaseModel

from expdb.persistence.models import (
    DependencyRecord,
    ExperimentRecord,
    LayoutRecord,
    RunRecord,
    result_table_name,
)
from expdb.persistence.schema_generator import (
    generate_create_indexes_ddl,
    generate_create_table_ddl,
    generate_full_schema_ddl,
    generate_schema_statements,
    python_type_to_sql_type,
    validate_table_schema,
)


class TestTypeMapping:
    """Test Python to SQL type mapping."""

    def test_basic_types(self):
        assert python_type_to_sql_type(str) == "VARCHAR"
        assert python_type_to_sql_type(int) == "BIGINT"
        assert python_type_to_sql_type(float) == "DOUBLE"
        assert python_type_to_sql_type(bool) == "BOOLEAN"

    def test_optional_types_use_inner_type(self):
        assert python_type_to_sql_type(int | None) == "BIGINT"
        assert python_type_to_sql_type(str | None) == "VARCHAR"


class TestCreateTableDDL:
    """Test CREATE TABLE generation."""

    def test_experiments_table(self):
        ddl = generate_create_table_ddl(ExperimentRecord)

        assert "CREATE TABLE IF NOT EXISTS experiments" in ddl
        assert "exp_id BIGINT NOT NULL" in ddl
        assert "PRIMARY KEY (exp_id)" in ddl

    def test_optional_fields_are_nullable(self):
        ddl = generate_create_table_ddl(RunRecord)

        assert "result_table_name VARCHAR," in ddl
        assert "guid VARCHAR NOT NULL" in ddl

    def test_literal_defaults_are_rendered(self):
        ddl = generate_create_table_ddl(RunRecord)
        assert "is_completed BOOLEAN NOT NULL DEFAULT FALSE" in ddl

        ddl = generate_create_table_ddl(ExperimentRecord)
        assert "run_counter BIGINT NOT NULL DEFAULT 0" in ddl
        assert "format_string VARCHAR NOT NULL DEFAULT '{}-{}-{}'" in ddl

    def test_dependencies_have_no_primary_key(self):
        ddl = generate_create_table_ddl(DependencyRecord)
        assert "PRIMARY KEY" not in ddl

    def test_model_without_table_name_is_rejected(self):
        class Untabled(BaseModel):
            x: int

        with pytest.raises(ValueError, match="table_name"):
            generate_create_table_ddl(Untabled)


class TestIndexesAndFullSchema:
    """Test index and full schema generation."""

    def test_indexes_for_runs(self):
        indexes = generate_create_indexes_ddl(RunRecord)
        assert "CREATE INDEX IF NOT EXISTS idx_runs_exp_id ON runs (exp_id);" in indexes

    def test_full_schema_mentions_all_tables(self):
        ddl = generate_full_schema_ddl()
        for table in ("experiments", "runs", "layouts", "dependencies"):
            assert f"CREATE TABLE IF NOT EXISTS {table}" in ddl

    def test_statements_execute_on_duckdb(self):
        conn = duckdb.connect(":memory:")
        for statement in generate_schema_statements():
            conn.execute(statement)

        tables = {
            row[0]
            for row in conn.execute(
                "SELECT table_name FROM information_schema.tables WHERE table_schema = 'main'"
            ).fetchall()
        }
        assert tables == {"experiments", "runs", "layouts", "dependencies"}
        conn.close()


class TestValidateTableSchema:
    """Test schema validation against models."""

    def test_matching_table_is_valid(self):
        conn = duckdb.connect(":memory:")
        conn.execute(generate_create_table_ddl(LayoutRecord))

        is_valid, errors = validate_table_schema(conn, LayoutRecord)

        assert is_valid
        assert errors == []
        conn.close()

    def test_missing_table_is_reported(self):
        conn = duckdb.connect(":memory:")

        is_valid, errors = validate_table_schema(conn, LayoutRecord)

        assert not is_valid
        assert "does not exist" in errors[0]
        conn.close()

    def test_missing_and_extra_columns_are_reported(self):
        conn = duckdb.connect(":memory:")
        conn.execute("CREATE TABLE layouts (layout_id BIGINT, run_id BIGINT, extra VARCHAR)")

        is_valid, errors = validate_table_schema(conn, LayoutRecord)

        assert not is_valid
        assert "Column 'parameter' missing from table layouts" in errors
        assert any("extra" in error for error in errors)
        conn.close()


def test_result_table_name_convention():
    assert result_table_name(1, 5) == "results-1-5"
