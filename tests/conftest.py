"""
Pytest configuration and shared fixtures.

Provides an experiment store fixture with a known layout:

- exp 1 "cooldown_1": runs 10, 11, 12, each with a result table
- exp 2 "cooldown_2": no runs
- exp 3 "rf_sweep": run 13 (NULL result table), run 14 (empty result
  table name), run 15 (result table that was never created)
"""

import logging
from pathlib import Path

import pytest

from expdb.persistence import Database, close_database

BASE_TS = 1_700_000_000

EXPERIMENTS = [
    (1, "cooldown_1", "sample_A", 3),
    (2, "cooldown_2", "sample_B", 0),
    (3, "rf_sweep", "sample_A", 3),
]

# run_id, exp_id, result_table_name, run_timestamp, completed_timestamp, is_completed, guid
RUNS = [
    (10, 1, "results-1-1", BASE_TS, BASE_TS + 50, True, "aaaa-0001-0010"),
    (11, 1, "results-1-2", BASE_TS + 100, BASE_TS + 150, True, "aaaa-0001-0011"),
    (12, 1, "results-1-3", BASE_TS + 200, None, False, "aaaa-0001-0012"),
    (13, 3, None, BASE_TS + 300, BASE_TS + 350, True, "bbbb-0003-0013"),
    (14, 3, "", BASE_TS + 400, None, False, "bbbb-0003-0014"),
    (15, 3, "results-3-9", BASE_TS + 500, None, False, "bbbb-0003-0015"),
]

# layout_id, run_id, parameter, label, unit
LAYOUTS = [
    (2, 10, "voltage", "Gate voltage", "V"),
    (1, 10, "current", "Drain current", "A"),
    (3, 11, "frequency", "Frequency", "Hz"),
    (4, 11, "power", "Power", "dBm"),
]

# dependent, independent, axis_num
DEPENDENCIES = [
    (1, 2, 0),
    (4, 3, 0),
]

RESULT_ROWS = {
    "results-1-1": [(i, i * 0.1, i * 2.0) for i in range(5, 0, -1)],
    "results-1-2": [(i, i * 0.5, -i * 1.0) for i in range(1, 4)],
    "results-1-3": [],
}


def build_store(db_path: Path) -> Path:
    """Create and populate an experiment store at db_path."""
    with Database(db_path) as db:
        db.initialize_schema()
        conn = db.conn
        conn.executemany(
            "INSERT INTO experiments (exp_id, name, sample_name, run_counter) VALUES (?, ?, ?, ?)",
            EXPERIMENTS,
        )
        conn.executemany(
            """
            INSERT INTO runs (run_id, exp_id, result_table_name, run_timestamp,
                              completed_timestamp, is_completed, guid)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            RUNS,
        )
        conn.executemany(
            "INSERT INTO layouts (layout_id, run_id, parameter, label, unit) VALUES (?, ?, ?, ?, ?)",
            LAYOUTS,
        )
        conn.executemany(
            "INSERT INTO dependencies (dependent, independent, axis_num) VALUES (?, ?, ?)",
            DEPENDENCIES,
        )
        for table_name, rows in RESULT_ROWS.items():
            conn.execute(f'CREATE TABLE "{table_name}" (id INTEGER, x DOUBLE, y DOUBLE)')
            if rows:
                conn.executemany(f'INSERT INTO "{table_name}" VALUES (?, ?, ?)', rows)
        # Looks like a result table but does not follow the naming convention
        conn.execute("CREATE TABLE results_archive (id INTEGER)")
    return db_path


@pytest.fixture
def db_path(tmp_path) -> Path:
    """Path of a populated experiment store."""
    return build_store(tmp_path / "experiments.duckdb")


@pytest.fixture
def db(db_path):
    """Explicit Database handle on the populated store."""
    with Database(db_path) as database:
        yield database


@pytest.fixture
def opened(db_path):
    """Populated store opened as the process-wide database."""
    from expdb.persistence import open_database

    return open_database(db_path)


@pytest.fixture(autouse=True)
def _reset_process_state():
    """Close the process-wide database and undo CLI logging setup."""
    yield
    close_database()
    logger = logging.getLogger("expdb")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
