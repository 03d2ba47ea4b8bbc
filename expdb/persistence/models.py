"""
Pydantic Models for the Fixed Schema

Record models for the four fixed tables: experiments, runs, layouts and
dependencies. DDL generation and schema validation are derived from them.

Result tables (``results-<exp_id>-<counter>``) are deliberately absent: their
columns vary per experiment and are discovered at runtime through
introspection.
"""

from pydantic import BaseModel, ConfigDict, Field

RESULT_TABLE_PREFIX = "results-"


def result_table_name(exp_id: int, counter: int) -> str:
    """Build the conventional result-table name for an experiment run.

    Examples:
        >>> result_table_name(1, 5)
        'results-1-5'
    """
    return f"{RESULT_TABLE_PREFIX}{exp_id}-{counter}"


# ============================================================================
# Experiment Record
# ============================================================================


class ExperimentRecord(BaseModel):
    """Experiment record (``experiments`` table)."""

    model_config = ConfigDict(  # type: ignore[typeddict-unknown-key]
        table_name="experiments",
        primary_key=["exp_id"],
        indexes=[],
    )

    exp_id: int = Field(..., description="Experiment identifier")
    name: str = Field(..., description="Experiment name")
    sample_name: str = Field(..., description="Sample measured in this experiment")
    start_time: int | None = Field(None, description="Unix timestamp of creation")
    end_time: int | None = Field(None, description="Unix timestamp of finish")
    run_counter: int = Field(0, description="Number of runs started", ge=0)
    format_string: str = Field(
        "{}-{}-{}", description="Format used for result table names"
    )


# ============================================================================
# Run Record
# ============================================================================


class RunRecord(BaseModel):
    """Run record (``runs`` table).

    ``result_table_name`` may be NULL or empty, meaning the run has no
    result table yet.
    """

    model_config = ConfigDict(  # type: ignore[typeddict-unknown-key]
        table_name="runs",
        primary_key=["run_id"],
        indexes=[
            ("idx_runs_exp_id", ["exp_id"]),
            ("idx_runs_guid", ["guid"]),
        ],
    )

    run_id: int = Field(..., description="Run identifier")
    exp_id: int = Field(..., description="Foreign key to experiments table")
    name: str | None = Field(None, description="Run name")
    result_table_name: str | None = Field(None, description="Per-run data table")
    result_counter: int | None = Field(None, description="Counter within the experiment")
    run_timestamp: int | None = Field(None, description="Unix timestamp of start")
    completed_timestamp: int | None = Field(None, description="Unix timestamp of completion")
    is_completed: bool = Field(False, description="Run finished writing data")
    parameters: str | None = Field(None, description="Comma-separated parameter names")
    guid: str = Field(..., description="Globally unique run identifier")
    run_description: str | None = Field(None, description="Serialized interdependencies")
    snapshot: str | None = Field(None, description="Instrument snapshot JSON")
    captured_run_id: int | None = Field(None, description="Run id at capture time")
    captured_counter: int | None = Field(None, description="Counter at capture time")
    parent_datasets: str | None = Field(None, description="Links to parent runs")


# ============================================================================
# Layout Record
# ============================================================================


class LayoutRecord(BaseModel):
    """Parameter layout of a run (``layouts`` table)."""

    model_config = ConfigDict(  # type: ignore[typeddict-unknown-key]
        table_name="layouts",
        primary_key=["layout_id"],
        indexes=[
            ("idx_layouts_run_id", ["run_id"]),
        ],
    )

    layout_id: int = Field(..., description="Layout identifier")
    run_id: int = Field(..., description="Foreign key to runs table")
    parameter: str = Field(..., description="Parameter name")
    label: str | None = Field(None, description="Human readable label")
    unit: str | None = Field(None, description="Physical unit")
    inferred_from: str | None = Field(None, description="Parameters this one is inferred from")


# ============================================================================
# Dependency Record
# ============================================================================


class DependencyRecord(BaseModel):
    """Dependent/independent parameter link (``dependencies`` table)."""

    model_config = ConfigDict(  # type: ignore[typeddict-unknown-key]
        table_name="dependencies",
        primary_key=[],
        indexes=[
            ("idx_dependencies_dependent", ["dependent"]),
        ],
    )

    dependent: int = Field(..., description="Layout id of the dependent parameter")
    independent: int = Field(..., description="Layout id of the setpoint parameter")
    axis_num: int = Field(..., description="Axis position of the setpoint", ge=0)


SCHEMA_MODELS: list[type[BaseModel]] = [
    ExperimentRecord,
    RunRecord,
    LayoutRecord,
    DependencyRecord,
]
