"""
simpledb/exceptions.py
----------------------
Error hierarchy raised by SimpleDB. Driver exceptions never leak out
unwrapped; the original is kept as ``cause`` and ``__cause__``.
"""

from typing import Optional


class SimpleDBError(Exception):
    """
    Base exception for all SimpleDB errors.

    Attributes:
        message: Error message.
        cause: Optional underlying driver exception.
    """

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class ConnectionError(SimpleDBError):
    """The connection could not be established or was lost."""


class ClosedConnectionError(SimpleDBError):
    """An operation was attempted after close()."""

    def __init__(self, message: str = "Database connection is closed."):
        super().__init__(message)


class ExecutionError(SimpleDBError):
    """
    The backend rejected a statement (syntax, constraint or type mismatch).

    Attributes:
        sql: The statement text that failed.
    """

    def __init__(self, message: str, sql: str = "", cause: Optional[Exception] = None):
        super().__init__(message, cause)
        self.sql = sql


class UnsupportedDialectError(SimpleDBError):
    """The active dialect has no strategy for the requested operation."""


class InvalidArgumentError(SimpleDBError, ValueError):
    """A data or condition map that would produce invalid SQL."""
