"""
simpledb/db/upsert.py
---------------------
Upsert strategies. A dialect picks one at construction time; SimpleDB.upsert
delegates to it instead of branching on the driver name.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping

from simpledb.db.statements import (
    build_insert_on_conflict,
    build_insert_on_duplicate,
    build_insert_or_ignore,
    merge_key,
    require_columns,
)

if TYPE_CHECKING:
    from simpledb.db.database import SimpleDB


class UpsertStrategy(ABC):
    """Insert-if-absent, update-if-present, keyed by primary key."""

    @abstractmethod
    def upsert(
        self,
        db: "SimpleDB",
        table: str,
        data: Mapping[str, Any],
        primarykey: Mapping[str, Any],
    ) -> bool:
        """Write ``data`` to the row identified by ``primarykey``."""


class InsertOrIgnoreUpsert(UpsertStrategy):
    """
    SQLite: ``INSERT OR IGNORE`` the merged row, then ``UPDATE`` it.

    The two statements are not wrapped in a transaction; the update runs
    whether or not the insert was ignored.
    """

    def upsert(
        self,
        db: "SimpleDB",
        table: str,
        data: Mapping[str, Any],
        primarykey: Mapping[str, Any],
    ) -> bool:
        # Both maps are checked before the insert runs; the update needs them too.
        require_columns(primarykey, "Primary key")
        require_columns(data, "Data")
        sql, bindings = build_insert_or_ignore(
            table, merge_key(primarykey, data), db.dialect.placeholder
        )
        db.raw_query(sql, bindings)
        return db.update(table, data, primarykey)


class InsertOnDuplicateUpsert(UpsertStrategy):
    """MySQL: single ``INSERT ... ON DUPLICATE KEY UPDATE`` statement."""

    def upsert(
        self,
        db: "SimpleDB",
        table: str,
        data: Mapping[str, Any],
        primarykey: Mapping[str, Any],
    ) -> bool:
        sql, bindings = build_insert_on_duplicate(
            table, data, primarykey, db.dialect.placeholder
        )
        return db.raw_query(sql, bindings)


class InsertOnConflictUpsert(UpsertStrategy):
    """PostgreSQL: single ``INSERT ... ON CONFLICT (pk) DO UPDATE`` statement."""

    def upsert(
        self,
        db: "SimpleDB",
        table: str,
        data: Mapping[str, Any],
        primarykey: Mapping[str, Any],
    ) -> bool:
        sql, bindings = build_insert_on_conflict(
            table, data, primarykey, db.dialect.placeholder
        )
        return db.raw_query(sql, bindings)
