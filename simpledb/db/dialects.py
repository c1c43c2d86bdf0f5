"""
simpledb/db/dialects.py
-----------------------
Supported backends: the DB-API driver behind each one, its placeholder
syntax, its upsert strategy and how it reports a lost connection.
"""

import sqlite3
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Callable, Optional

import psycopg2
import pymysql

from simpledb.db.statements import Placeholder, named, pyformat
from simpledb.db.upsert import (
    InsertOnConflictUpsert,
    InsertOnDuplicateUpsert,
    InsertOrIgnoreUpsert,
    UpsertStrategy,
)
from simpledb.exceptions import UnsupportedDialectError

# MySQL client codes: CR_SERVER_GONE_ERROR, CR_SERVER_LOST.
_MYSQL_LOST_CONNECTION = (2006, 2013)


def never_disconnected(conn: Any, error: Exception) -> bool:
    """Statement errors never mean the connection is gone."""
    return False


def postgresql_disconnected(conn: Any, error: Exception) -> bool:
    """psycopg2 flags a dead connection through ``conn.closed``."""
    return isinstance(error, psycopg2.InterfaceError) or bool(getattr(conn, "closed", 0))


def mysql_disconnected(conn: Any, error: Exception) -> bool:
    if isinstance(error, pymysql.err.InterfaceError):
        return True
    return (
        isinstance(error, pymysql.err.OperationalError)
        and bool(error.args)
        and error.args[0] in _MYSQL_LOST_CONNECTION
    )


@dataclass(frozen=True)
class Dialect:
    """
    A database engine's SQL variant plus the driver used to reach it.

    Attributes:
        name: Dialect name ('sqlite', 'postgresql', 'mysql').
        driver: DB-API module; its ``Error`` class is what execution wraps.
        placeholder: Renders a bound parameter name for the driver.
        upsert: Upsert strategy, or None when the dialect has none.
        is_disconnect: Tells whether a driver error raised while executing
            means the connection was lost.
    """
    name: str
    driver: ModuleType
    placeholder: Placeholder
    upsert: Optional[UpsertStrategy] = None
    is_disconnect: Callable[[Any, Exception], bool] = never_disconnected


SQLITE = Dialect("sqlite", sqlite3, named, InsertOrIgnoreUpsert())
POSTGRESQL = Dialect(
    "postgresql", psycopg2, pyformat, InsertOnConflictUpsert(), postgresql_disconnected
)
MYSQL = Dialect("mysql", pymysql, pyformat, InsertOnDuplicateUpsert(), mysql_disconnected)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (SQLITE, POSTGRESQL, MYSQL)}

# Scheme aliases accepted in connection targets.
_ALIASES = {"postgres": "postgresql", "pgsql": "postgresql", "sqlite3": "sqlite"}


def get_dialect(name: str) -> Dialect:
    """
    Look up a dialect by name or alias.

    Raises:
        UnsupportedDialectError: If the name is unknown.
    """
    key = _ALIASES.get(name.lower(), name.lower())
    try:
        return DIALECTS[key]
    except KeyError:
        raise UnsupportedDialectError(f"Unsupported database dialect: {name!r}") from None


def dialect_for_connection(conn) -> Dialect:
    """Infer the dialect from the module that defines an open connection's class."""
    module = type(conn).__module__.split(".")[0]
    for dialect in DIALECTS.values():
        if dialect.driver.__name__ == module:
            return dialect
    raise UnsupportedDialectError(
        f"Cannot infer a dialect for connection type {type(conn).__module__}.{type(conn).__name__}"
    )
