"""YAML configuration loader."""
import os
from pathlib import Path

import yaml

from .schemas import ExpdbConfig

CONFIG_ENV_VAR = "EXPDB_CONFIG"
DATABASE_ENV_VAR = "EXPDB_DATABASE"


def load_config(config_path: str | Path) -> ExpdbConfig:
    """
    Load and validate expdb configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated ExpdbConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        raise ValueError(f"Empty configuration file: {config_path}")

    try:
        config = ExpdbConfig.from_dict(config_dict)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    return config


def resolve_config(config_path: str | Path | None = None) -> ExpdbConfig:
    """
    Build the effective configuration.

    Uses config_path if given, else the file named by EXPDB_CONFIG, else
    defaults. EXPDB_DATABASE, when set, overrides the database path.
    """
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    config = load_config(config_path) if config_path else ExpdbConfig()

    database = os.environ.get(DATABASE_ENV_VAR)
    if database:
        config = config.model_copy(update={"database": Path(database).expanduser()})

    return config
