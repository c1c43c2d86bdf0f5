"""Upsert strategies."""

import sqlite3

import pytest

from simpledb import Dialect, InvalidArgumentError, SimpleDB, UnsupportedDialectError
from simpledb.db.dialects import MYSQL, POSTGRESQL, SQLITE
from simpledb.db.statements import named
from simpledb.db.upsert import (
    InsertOnConflictUpsert,
    InsertOnDuplicateUpsert,
    InsertOrIgnoreUpsert,
    UpsertStrategy,
)


class RecordingDB:
    """Stands in for SimpleDB and records what would be executed."""

    def __init__(self, dialect):
        self.dialect = dialect
        self.calls = []

    def raw_query(self, sql, bindings=None):
        self.calls.append((sql, bindings))
        return True


def test_sqlite_upsert_inserts_then_updates_in_place(db):
    assert db.upsert("users", {"name": "Alice"}, {"id": 1}) is True
    assert db.select("users", {"id": 1}) == [{"id": 1, "name": "Alice"}]

    assert db.upsert("users", {"name": "Bob"}, {"id": 1}) is True
    assert db.count("users", {"id": 1}) == 1
    assert db.select_single_value("users", {"id": 1}, "name") == "Bob"


def test_sqlite_upsert_composite_key(db):
    key = {"player": "ann", "game": "chess"}
    db.upsert("scores", {"points": 1}, key)
    db.upsert("scores", {"points": 5}, key)
    db.upsert("scores", {"points": 2}, {"player": "ann", "game": "go"})
    assert db.count("scores", {"player": "ann"}) == 2
    assert db.select_single_value("scores", key, "points") == 5


def test_sqlite_upsert_leaves_other_rows_alone(db):
    db.insert("users", {"id": 2, "name": "Control"})
    db.upsert("users", {"name": "Alice"}, {"id": 1})
    assert db.select_single_value("users", {"id": 2}, "name") == "Control"


def test_upsert_unsupported_dialect():
    db = SimpleDB.from_connection(sqlite3.connect(":memory:"), Dialect("custom", sqlite3, named))
    with pytest.raises(UnsupportedDialectError):
        db.upsert("users", {"name": "Alice"}, {"id": 1})
    db.close()


def test_mysql_strategy_issues_single_statement():
    db = RecordingDB(MYSQL)
    assert InsertOnDuplicateUpsert().upsert(db, "users", {"name": "Alice"}, {"id": 1}) is True
    [(sql, bindings)] = db.calls
    assert sql == (
        "INSERT INTO users (id, name) VALUES (%(id)s, %(name)s)"
        " ON DUPLICATE KEY UPDATE name=%(update_name)s;"
    )
    assert bindings == {"id": 1, "name": "Alice", "update_name": "Alice"}


def test_postgresql_strategy_issues_single_statement():
    db = RecordingDB(POSTGRESQL)
    InsertOnConflictUpsert().upsert(db, "users", {"name": "Alice"}, {"id": 1})
    [(sql, bindings)] = db.calls
    assert sql == (
        "INSERT INTO users (id, name) VALUES (%(id)s, %(name)s)"
        " ON CONFLICT (id) DO UPDATE SET name = EXCLUDED.name;"
    )
    assert bindings == {"id": 1, "name": "Alice"}


def test_dialects_pick_their_strategy():
    assert isinstance(MYSQL.upsert, InsertOnDuplicateUpsert)
    assert isinstance(POSTGRESQL.upsert, InsertOnConflictUpsert)


@pytest.mark.parametrize("data, primarykey", [
    ({"player": "x", "game": "y", "points": 1}, {}),
    ({}, {"player": "x", "game": "y"}),
])
def test_sqlite_upsert_with_empty_map_writes_nothing(db, data, primarykey):
    with pytest.raises(InvalidArgumentError):
        db.upsert("scores", data, primarykey)
    assert db.count("scores", {"player": "x"}) == 0


@pytest.mark.parametrize("data, primarykey", [
    ({"name": "Alice"}, {}),
    ({}, {"id": 1}),
])
def test_strategy_rejects_empty_maps_before_executing(data, primarykey):
    db = RecordingDB(SQLITE)
    with pytest.raises(InvalidArgumentError):
        InsertOrIgnoreUpsert().upsert(db, "users", data, primarykey)
    assert db.calls == []


def test_sqlite_upsert_data_wins_over_primary_key_values(db):
    db.upsert("users", {"id": 1, "name": "Alice"}, {"id": 1})
    assert db.select("users", {"id": 1}) == [{"id": 1, "name": "Alice"}]

    db.upsert("scores", {"game": "go", "points": 7}, {"player": "ann", "game": "chess"})
    assert db.count("scores", {"player": "ann", "game": "chess"}) == 0
    assert db.select_single_value("scores", {"player": "ann", "game": "go"}, "points") == 7


def test_upsert_strategies_must_implement_upsert():
    with pytest.raises(TypeError):
        UpsertStrategy()
