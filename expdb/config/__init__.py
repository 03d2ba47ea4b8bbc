"""Configuration for expdb."""

from .loader import CONFIG_ENV_VAR, DATABASE_ENV_VAR, load_config, resolve_config
from .schemas import ExpdbConfig

__all__ = [
    "CONFIG_ENV_VAR",
    "DATABASE_ENV_VAR",
    "ExpdbConfig",
    "load_config",
    "resolve_config",
]
