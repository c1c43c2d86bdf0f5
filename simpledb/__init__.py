"""
simpledb - Lightweight query builder
====================================
Builds parameterized INSERT, SELECT, UPDATE, DELETE, UPSERT and COUNT
statements from column -> value mappings and runs them on one DB-API
connection (SQLite, PostgreSQL or MySQL).
"""

from simpledb.db.database import SimpleDB, connect
from simpledb.db.dialects import Dialect, get_dialect
from simpledb.exceptions import (
    ClosedConnectionError,
    ConnectionError,
    ExecutionError,
    InvalidArgumentError,
    SimpleDBError,
    UnsupportedDialectError,
)

__all__ = [
    "SimpleDB",
    "connect",
    "Dialect",
    "get_dialect",
    "SimpleDBError",
    "ConnectionError",
    "ClosedConnectionError",
    "ExecutionError",
    "InvalidArgumentError",
    "UnsupportedDialectError",
]
