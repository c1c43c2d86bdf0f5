import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from simpledb import SimpleDB  # noqa: E402

SCHEMA = [
    "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL)",
    """
    CREATE TABLE scores (
        player TEXT NOT NULL,
        game   TEXT NOT NULL,
        points INTEGER,
        PRIMARY KEY (player, game)
    )
    """,
]


@pytest.fixture()
def db_path(tmp_path):
    return tmp_path / "simpledb_test.db"


@pytest.fixture()
def db(db_path):
    database = SimpleDB(f"sqlite:{db_path}")
    for statement in SCHEMA:
        database.raw_query(statement)
    yield database
    database.close()
