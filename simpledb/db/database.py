"""
simpledb/db/database.py
-----------------------
SimpleDB: builds parameterized statements from column -> value mappings and
executes them on the single connection it owns.

Usage:
    with SimpleDB("sqlite:app.db") as db:
        db.insert("users", {"id": 1, "name": "Alice"})
        db.select("users", {"id": 1})
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Mapping, Optional

from simpledb import config
from simpledb.db.connection import close_connection, open_connection
from simpledb.db.dialects import Dialect, dialect_for_connection
from simpledb.db.statements import (
    build_count,
    build_delete,
    build_insert,
    build_select,
    build_update,
    require_columns,
)
from simpledb.exceptions import (
    ClosedConnectionError,
    ConnectionError,
    ExecutionError,
    UnsupportedDialectError,
)
from simpledb.utils.logger import get_logger

logger = get_logger(__name__)

Row = dict[str, Any]


def _row_to_dict(cursor, row) -> Row:
    if hasattr(row, "keys"):
        return dict(row)
    columns = [d[0] for d in cursor.description]
    return dict(zip(columns, row))


def _first_value(row) -> Any:
    if isinstance(row, Mapping):
        return next(iter(row.values()))
    return row[0]


class SimpleDB:
    """Query-builder facade over one database connection."""

    def __init__(
        self,
        target: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
    ):
        """
        Open the connection.

        Args:
            target: Connection target; defaults to ``config.DATABASE_URL``.
            user: Optional user name, overrides the one in the target.
            password: Optional password, overrides the one in the target.

        Raises:
            ConnectionError: If the target is malformed or unreachable.
        """
        self._conn, self._dialect = open_connection(
            target or config.DATABASE_URL, user, password
        )

    @classmethod
    def from_connection(cls, conn, dialect: Optional[Dialect] = None) -> "SimpleDB":
        """
        Adopt an already-open DB-API connection.

        The connection's transaction settings are left untouched and the
        returned SimpleDB owns it from now on (close() closes it).
        """
        db = cls.__new__(cls)
        db._conn = conn
        db._dialect = dialect or dialect_for_connection(conn)
        return db

    # ── Lifetime ──────────────────────────────────────────

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def closed(self) -> bool:
        return self._conn is None

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        close_connection(conn, self._dialect)

    def __enter__(self) -> "SimpleDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # ── Execution ─────────────────────────────────────────

    def _run(self, sql: str, bindings: Optional[Mapping[str, Any]], fetch: Optional[Callable] = None):
        """Execute one statement and hand the cursor to ``fetch``."""
        if self._conn is None:
            raise ClosedConnectionError()
        logger.debug(f"Executing: {sql}")
        cursor = None
        try:
            cursor = self._conn.cursor()
            if bindings is None:
                cursor.execute(sql)
            else:
                cursor.execute(sql, bindings)
            return fetch(cursor) if fetch else True
        except self._dialect.driver.Error as e:
            # A cursor that cannot be opened means the connection is unusable.
            if cursor is None or self._dialect.is_disconnect(self._conn, e):
                logger.error(f"Lost {self._dialect.name} connection: {e}")
                raise ConnectionError(f"Lost {self._dialect.name} connection: {e}", e) from e
            logger.error(f"Statement failed: {e} | {sql}")
            raise ExecutionError(f"Statement failed: {e}", sql, e) from e
        finally:
            if cursor is not None:
                cursor.close()

    def raw_query(self, sql: str, bindings: Optional[Mapping[str, Any]] = None) -> bool:
        """
        Execute an arbitrary statement.

        Args:
            sql: Statement text using the dialect's placeholder syntax.
            bindings: Placeholder name -> value.

        Returns:
            True on success.

        Raises:
            ExecutionError: If the backend rejects the statement.
            ConnectionError: If the connection was lost.
        """
        return self._run(sql, bindings)

    # ── Write operations ──────────────────────────────────

    def insert(self, table: str, data: Mapping[str, Any]) -> bool:
        """Insert one row; ``data`` keys are column names."""
        return self.raw_query(*build_insert(table, data, self._dialect.placeholder))

    def update(self, table: str, data: Mapping[str, Any], conditions: Mapping[str, Any]) -> bool:
        """
        Set ``data`` on every row matching ``conditions``.

        Matching no rows is still a success.
        """
        return self.raw_query(*build_update(table, data, conditions, self._dialect.placeholder))

    def upsert(self, table: str, data: Mapping[str, Any], primarykey: Mapping[str, Any]) -> bool:
        """
        Insert ``data`` or update the existing row with ``primarykey``.

        The table must have a primary key or unique constraint over the
        ``primarykey`` columns; composite keys are supported.

        Raises:
            InvalidArgumentError: If ``data`` or ``primarykey`` is empty.
            UnsupportedDialectError: If the dialect has no upsert strategy.
        """
        if self._conn is None:
            raise ClosedConnectionError()
        require_columns(primarykey, "Primary key")
        require_columns(data, "Data")
        strategy = self._dialect.upsert
        if strategy is None:
            raise UnsupportedDialectError(
                f"upsert is not supported for dialect {self._dialect.name!r}"
            )
        return strategy.upsert(self, table, data, primarykey)

    def delete(self, table: str, conditions: Mapping[str, Any]) -> bool:
        """Delete every row matching ``conditions``."""
        return self.raw_query(*build_delete(table, conditions, self._dialect.placeholder))

    # ── Read operations ───────────────────────────────────

    def select(
        self,
        table: str,
        conditions: Mapping[str, Any],
        sortby: Optional[str] = None,
        sortdesc: bool = False,
    ) -> list[Row]:
        """
        Select all rows matching the conditions.

        Args:
            table: Table to select from.
            conditions: Column -> value equality conditions, ANDed.
            sortby: Optional column to order by.
            sortdesc: Order descending when True.

        Returns:
            Every matching row as a dict, possibly empty.
        """
        sql, bindings = build_select(
            table, conditions, sortby=sortby, sortdesc=sortdesc,
            placeholder=self._dialect.placeholder,
        )
        return self._run(
            sql, bindings, lambda cur: [_row_to_dict(cur, r) for r in cur.fetchall()]
        )

    def select_single_row(
        self,
        table: str,
        conditions: Mapping[str, Any],
        sortby: Optional[str] = None,
        sortdesc: bool = False,
    ) -> Optional[Row]:
        """
        Select the first row matching the conditions, or None.

        No LIMIT is added to the statement; only the first row is fetched.
        """
        sql, bindings = build_select(
            table, conditions, sortby=sortby, sortdesc=sortdesc,
            placeholder=self._dialect.placeholder,
        )

        def first(cur):
            row = cur.fetchone()
            return _row_to_dict(cur, row) if row is not None else None

        return self._run(sql, bindings, first)

    def select_single_value(
        self,
        table: str,
        conditions: Mapping[str, Any],
        column: str,
        sortby: Optional[str] = None,
        sortdesc: bool = False,
    ) -> Any:
        """Select ``column`` from the first matching row, or None."""
        sql, bindings = build_select(
            table, conditions, column=column, sortby=sortby, sortdesc=sortdesc,
            placeholder=self._dialect.placeholder,
        )

        def value(cur):
            row = cur.fetchone()
            return _first_value(row) if row is not None else None

        return self._run(sql, bindings, value)

    def count(self, table: str, conditions: Mapping[str, Any]) -> int:
        """Count the rows matching the conditions."""
        sql, bindings = build_count(table, conditions, self._dialect.placeholder)
        return self._run(sql, bindings, lambda cur: int(_first_value(cur.fetchone())))


@contextmanager
def connect(
    target: Optional[str] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
) -> Iterator[SimpleDB]:
    """
    Open a SimpleDB and close it on every exit path.

    Usage:
        with connect("sqlite:app.db") as db:
            db.count("users", {"active": 1})
    """
    db = SimpleDB(target, user, password)
    try:
        yield db
    finally:
        db.close()
