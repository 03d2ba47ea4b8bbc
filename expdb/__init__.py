"""
expdb - query layer for experiment databases.

Open a store, query experiments, runs and their result tables, close it:

    >>> import expdb
    >>> expdb.open_database("experiments.duckdb")
    >>> expdb.get_experiment_summary()
    >>> expdb.get_result_data_by_run_id(12, limit=10)
    >>> expdb.close_database()
"""

from expdb.config import ExpdbConfig, load_config
from expdb.persistence import *  # noqa: F401,F403
from expdb.persistence import __all__ as _persistence_names

__version__ = "0.1.0"

__all__ = ["ExpdbConfig", "load_config", "__version__", *_persistence_names]
