"""Configuration schemas."""

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from expdb.persistence.queries import (
    DEFAULT_RECENT_HOURS,
    DEFAULT_RESULT_LIMIT,
    DEFAULT_RUN_LIMIT,
)


class ExpdbConfig(BaseModel):
    """User configuration for the expdb command line.

    Example YAML:
        database: ~/data/experiments.duckdb
        run_limit: 50
        result_limit: 500
        recent_hours: 48
        log_level: info
    """

    database: Path | None = Field(None, description="Default database file")
    run_limit: int = Field(DEFAULT_RUN_LIMIT, description="Default run listing size", ge=0)
    result_limit: int = Field(
        DEFAULT_RESULT_LIMIT, description="Default result table row cap", ge=0
    )
    recent_hours: int = Field(
        DEFAULT_RECENT_HOURS, description="Default window for recent runs", ge=0
    )
    log_level: str = Field("WARNING", description="Logging level name")

    @field_validator("database")
    @classmethod
    def expand_database(cls, v: Path | None) -> Path | None:
        return v.expanduser() if v is not None else None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ExpdbConfig":
        return cls.model_validate(config_dict)
