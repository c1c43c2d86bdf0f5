"""
simpledb/db/statements.py
-------------------------
Pure SQL builders. Each function returns ``(sql, bindings)`` and never
touches a connection, so the generated text can be checked on its own.

Table and column names are interpolated as given; only values are bound.
"""

from typing import Any, Callable, Mapping, Optional

from simpledb.exceptions import InvalidArgumentError

Bindings = dict[str, Any]
Placeholder = Callable[[str], str]


def named(name: str) -> str:
    """Placeholder for drivers using the ``named`` paramstyle (sqlite3)."""
    return f":{name}"


def pyformat(name: str) -> str:
    """Placeholder for drivers using the ``pyformat`` paramstyle (psycopg2, PyMySQL)."""
    return f"%({name})s"


def require_columns(values: Mapping[str, Any], what: str) -> None:
    """Raise InvalidArgumentError when a column map is empty."""
    if not values:
        raise InvalidArgumentError(f"{what} must contain at least one column.")


def build_where_clause(
    conditions: Mapping[str, Any],
    prefix: str = "",
    placeholder: Placeholder = named,
) -> tuple[str, Bindings]:
    """
    Build an equality-only WHERE clause, ANDed in mapping order.

    Args:
        conditions: Column -> value mapping.
        prefix: Prepended to every placeholder name (e.g. ``where_``) so the
            clause can share a statement with SET placeholders.
        placeholder: Renders a parameter name for the driver's paramstyle.

    Returns:
        ``(" WHERE a=:a AND b=:b", {"a": ..., "b": ...})``.

    Raises:
        InvalidArgumentError: If ``conditions`` is empty.
    """
    require_columns(conditions, "Conditions")
    parts = []
    bindings: Bindings = {}
    for field, value in conditions.items():
        parts.append(f"{field}={placeholder(prefix + field)}")
        bindings[prefix + field] = value
    return " WHERE " + " AND ".join(parts), bindings


def _assignments(
    data: Mapping[str, Any], prefix: str, placeholder: Placeholder
) -> tuple[str, Bindings]:
    parts = []
    bindings: Bindings = {}
    for field, value in data.items():
        parts.append(f"{field}={placeholder(prefix + field)}")
        bindings[prefix + field] = value
    return ", ".join(parts), bindings


def _order_by(sortby: Optional[str], sortdesc: bool) -> str:
    if sortby is None:
        return ""
    return f" ORDER BY {sortby}" + (" DESC" if sortdesc else "")


def _insert(
    verb: str, table: str, data: Mapping[str, Any], placeholder: Placeholder
) -> tuple[str, Bindings]:
    require_columns(data, "Data")
    columns = ", ".join(data)
    values = ", ".join(placeholder(field) for field in data)
    return f"{verb} {table} ({columns}) VALUES ({values})", dict(data)


def build_insert(
    table: str, data: Mapping[str, Any], placeholder: Placeholder = named
) -> tuple[str, Bindings]:
    """INSERT INTO <table> (<cols>) VALUES (<placeholders>);"""
    sql, bindings = _insert("INSERT INTO", table, data, placeholder)
    return sql + ";", bindings


def build_select(
    table: str,
    conditions: Mapping[str, Any],
    column: str = "*",
    sortby: Optional[str] = None,
    sortdesc: bool = False,
    placeholder: Placeholder = named,
) -> tuple[str, Bindings]:
    """SELECT <column> FROM <table> WHERE ... [ORDER BY <sortby> [DESC]];"""
    where, bindings = build_where_clause(conditions, placeholder=placeholder)
    sql = f"SELECT {column} FROM {table}{where}{_order_by(sortby, sortdesc)};"
    return sql, bindings


def build_count(
    table: str, conditions: Mapping[str, Any], placeholder: Placeholder = named
) -> tuple[str, Bindings]:
    """SELECT COUNT(*) FROM <table> WHERE ...;"""
    return build_select(table, conditions, column="COUNT(*)", placeholder=placeholder)


def build_update(
    table: str,
    data: Mapping[str, Any],
    conditions: Mapping[str, Any],
    placeholder: Placeholder = named,
) -> tuple[str, Bindings]:
    """
    UPDATE <table> SET c=:c, ... WHERE k=:where_k AND ...;

    Condition placeholders carry the ``where_`` prefix so a column may
    appear in both ``data`` and ``conditions``.
    """
    require_columns(data, "Data")
    assignments, bindings = _assignments(data, "", placeholder)
    where, where_bindings = build_where_clause(conditions, "where_", placeholder)
    bindings.update(where_bindings)
    return f"UPDATE {table} SET {assignments}{where};", bindings


def build_delete(
    table: str, conditions: Mapping[str, Any], placeholder: Placeholder = named
) -> tuple[str, Bindings]:
    """DELETE FROM <table> WHERE ...;"""
    where, bindings = build_where_clause(conditions, placeholder=placeholder)
    return f"DELETE FROM {table}{where};", bindings


def merge_key(primarykey: Mapping[str, Any], data: Mapping[str, Any]) -> dict[str, Any]:
    """Primary key fields first, then data; data wins on overlap."""
    merged = dict(primarykey)
    merged.update(data)
    return merged


def build_insert_or_ignore(
    table: str, data: Mapping[str, Any], placeholder: Placeholder = named
) -> tuple[str, Bindings]:
    """INSERT OR IGNORE INTO <table> (<cols>) VALUES (<placeholders>);"""
    sql, bindings = _insert("INSERT OR IGNORE INTO", table, data, placeholder)
    return sql + ";", bindings


def build_insert_on_duplicate(
    table: str,
    data: Mapping[str, Any],
    primarykey: Mapping[str, Any],
    placeholder: Placeholder = pyformat,
) -> tuple[str, Bindings]:
    """
    INSERT INTO ... VALUES (...) ON DUPLICATE KEY UPDATE c=:update_c, ...;

    No WHERE clause follows the update list: MySQL scopes the update to the
    conflicting row already.
    """
    require_columns(primarykey, "Primary key")
    require_columns(data, "Data")
    sql, bindings = _insert("INSERT INTO", table, merge_key(primarykey, data), placeholder)
    assignments, update_bindings = _assignments(data, "update_", placeholder)
    bindings.update(update_bindings)
    return f"{sql} ON DUPLICATE KEY UPDATE {assignments};", bindings


def build_insert_on_conflict(
    table: str,
    data: Mapping[str, Any],
    primarykey: Mapping[str, Any],
    placeholder: Placeholder = pyformat,
) -> tuple[str, Bindings]:
    """INSERT INTO ... VALUES (...) ON CONFLICT (<pk>) DO UPDATE SET c = EXCLUDED.c, ...;"""
    require_columns(primarykey, "Primary key")
    require_columns(data, "Data")
    sql, bindings = _insert("INSERT INTO", table, merge_key(primarykey, data), placeholder)
    target = ", ".join(primarykey)
    assignments = ", ".join(f"{field} = EXCLUDED.{field}" for field in data)
    return f"{sql} ON CONFLICT ({target}) DO UPDATE SET {assignments};", bindings
