"""
db/statements.py
----------------
Builds statement text (and bound parameters where the dialect allows them)
for each CRUD shape.

INSERT and SELECT bind values through the driver (`%s` placeholders).
ALTER TABLE ... UPDATE/DELETE cannot take bound parameters, so their values
are inlined as escaped literals by `db.safety`.
"""

from typing import Any, Mapping, Optional, Sequence

from db.errors import UnsupportedValue
from db.safety import (
    WILDCARD,
    convert_value,
    literal_of,
    substitute_placeholders,
    validate_identifier,
    validate_order_by,
)
from models.query import Condition, Statement

PLACEHOLDER = "%s"


def build_insert(table: str, rows: Sequence[Mapping[str, Any]]) -> Statement:
    """
    Build a multi-row INSERT with bound parameters.

    Only the first row's keys are validated and used as the column list;
    every later row must carry the same columns. A key missing from a later
    row is bound as NULL.

    Args:
        table: Target table name.
        rows: Non-empty list of column -> JSON value mappings.

    Returns:
        Statement with parameters in row-major, column order.
    """
    validate_identifier(table)
    if not rows:
        raise UnsupportedValue("Insert requires at least one row")

    columns = list(rows[0].keys())
    if not columns:
        raise UnsupportedValue("Insert rows have no columns")
    for col in columns:
        validate_identifier(col)

    tuple_sql = "(" + ",".join(PLACEHOLDER for _ in columns) + ")"
    sql = f"INSERT INTO {table} ({','.join(columns)}) VALUES " + ",".join(tuple_sql for _ in rows)
    params = [convert_value(row.get(col)).native for row in rows for col in columns]
    return Statement(sql, params)


def build_select(
    table: str,
    columns: Optional[Sequence[str]] = None,
    filters: Optional[Mapping[str, Any]] = None,
    order_by: Optional[str] = None,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
) -> Statement:
    """
    Build a SELECT with equality filters, optional ORDER BY and paging.

    The ORDER BY clause is appended verbatim, but only after it has been
    checked against the `col [ASC|DESC], ...` grammar.
    """
    validate_identifier(table)
    columns = list(columns or [])
    for col in columns:
        if col != WILDCARD:
            validate_identifier(col)

    columns_part = WILDCARD if not columns or columns == [WILDCARD] else ", ".join(columns)
    sql = f"SELECT {columns_part} FROM {table}"
    params: list[Any] = []

    if filters:
        for key in filters:
            validate_identifier(key)
        sql += " WHERE " + " AND ".join(f"{key} = {PLACEHOLDER}" for key in filters)
        params.extend(convert_value(v).native for v in filters.values())

    if order_by is not None:
        sql += f" ORDER BY {validate_order_by(order_by)}"

    if limit is not None:
        sql += f" LIMIT {PLACEHOLDER}"
        params.append(_paging_value("limit", limit))

    if offset is not None:
        sql += f" OFFSET {PLACEHOLDER}"
        params.append(_paging_value("offset", offset))

    return Statement(sql, params)


def _paging_value(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise UnsupportedValue(f"{name} must be a non-negative integer, got {value!r}")
    return value


def build_mutation_where(condition: Condition) -> str:
    """Inline the condition's parameters into its `?` placeholders."""
    return substitute_placeholders(condition.text, condition.params)


def build_update(table: str, data: Mapping[str, Any], condition: Condition) -> tuple[Statement, Statement]:
    """
    Build an ALTER TABLE ... UPDATE and the COUNT query sharing its WHERE clause.

    Returns:
        (count_statement, mutation_statement). The count runs first and is
        the operation's result, since the mutation itself is asynchronous
        and reports no affected-row count.
    """
    validate_identifier(table)
    if not data:
        raise UnsupportedValue("Update requires at least one column to set")
    for col in data:
        validate_identifier(col)

    set_clause = ", ".join(f"{col} = {literal_of(convert_value(v))}" for col, v in data.items())
    where = build_mutation_where(condition)
    count = Statement(f"SELECT count() AS cnt FROM {table} WHERE {where}")
    mutation = Statement(f"ALTER TABLE {table} UPDATE {set_clause} WHERE {where}")
    return count, mutation


def build_delete(table: str, condition: Condition) -> Statement:
    """Build an ALTER TABLE ... DELETE. No match count is computed for deletes."""
    validate_identifier(table)
    where = build_mutation_where(condition)
    return Statement(f"ALTER TABLE {table} DELETE WHERE {where}")


def build_bulk_insert(table: str, rows: Sequence[Mapping[str, Any]]) -> Statement:
    """
    Build a raw multi-row INSERT with every value inlined as a literal.

    Nested arrays/objects are rejected rather than stringified.
    """
    validate_identifier(table)
    if not rows:
        raise UnsupportedValue("Bulk insert requires at least one row")

    if not isinstance(rows[0], Mapping):
        raise UnsupportedValue(f"Bulk insert expects JSON objects, got {type(rows[0]).__name__}")
    columns = list(rows[0].keys())
    if not columns:
        raise UnsupportedValue("Bulk insert rows have no columns")
    for col in columns:
        validate_identifier(col)

    tuples = []
    for row in rows:
        if not isinstance(row, Mapping):
            raise UnsupportedValue(f"Bulk insert expects JSON objects, got {type(row).__name__}")
        literals = [literal_of(convert_value(row.get(col), strict=True)) for col in columns]
        tuples.append("(" + ", ".join(literals) + ")")

    return Statement(f"INSERT INTO {table} ({', '.join(columns)}) VALUES " + ", ".join(tuples))
