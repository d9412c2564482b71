"""
repositories/table_repo.py
--------------------------
Generic data access for any ClickHouse table.
Builds safe statements via db.statements and runs them via the QueryExecutor.
"""

import json
from typing import Any, Mapping, Optional, Sequence

from db.errors import UnsupportedValue
from db.executor import QueryExecutor
from db.statements import build_bulk_insert, build_delete, build_insert, build_select, build_update
from models.query import Condition, Record
from utils.logger import get_logger

logger = get_logger(__name__)


class TableRepository:
    """Repository for CRUD operations on caller-named tables."""

    def __init__(self, executor: QueryExecutor):
        self.executor = executor

    # ── CREATE ────────────────────────────────────────────

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> int:
        """
        Insert rows with bound parameters.

        Args:
            table: Target table.
            rows: Column -> JSON value mappings; the first row defines the columns.

        Returns:
            Number of rows inserted (0 for an empty list, without touching the store).
        """
        if not rows:
            return 0
        stmt = build_insert(table, rows)
        self.executor.run_bound_update(stmt.sql, stmt.params)
        logger.info(f"Inserted {len(rows)} row(s) into {table}")
        return len(rows)

    def insert_bulk(self, table: str, json_text: str) -> int:
        """
        Insert a JSON array of objects as one raw statement with inlined literals.

        Raises:
            UnsupportedValue: If the payload is not valid JSON, not an array of
                objects, or holds nested arrays/objects.
        """
        try:
            rows = json.loads(json_text)
        except (TypeError, ValueError) as e:
            raise UnsupportedValue(f"Error parsing JSON: {e}") from e
        if not isinstance(rows, list):
            raise UnsupportedValue(f"Bulk insert expects a JSON array, got {type(rows).__name__}")
        if not rows:
            return 0

        stmt = build_bulk_insert(table, rows)
        self.executor.run_raw(stmt.sql)
        logger.info(f"Bulk inserted {len(rows)} row(s) into {table}")
        return len(rows)

    # ── READ ──────────────────────────────────────────────

    def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Record]:
        """
        Fetch rows matching all equality filters.

        Returns:
            List of Records, one per row, keys in the result's column order.
        """
        stmt = build_select(table, columns, filters, order_by, limit, offset)
        return self.executor.run_bound_query(stmt.sql, stmt.params)

    # ── UPDATE ────────────────────────────────────────────

    def update(
        self, table: str, data: Mapping[str, Any], condition: str, params: Sequence[Any] = ()
    ) -> int:
        """
        Update matching rows through an ALTER TABLE ... UPDATE mutation.

        The mutation is applied asynchronously by the store and reports no
        affected-row count, so the number of rows matching the condition is
        counted on the same connection right before the mutation is issued.

        Returns:
            Number of rows that matched the condition before the update.
        """
        count_stmt, mutation = build_update(table, data, Condition(condition, list(params)))
        with self.executor.session() as s:
            rows = s.query(count_stmt.sql)
            matched = int(rows[0]["cnt"]) if rows else 0
            s.command(mutation.sql)
        logger.info(f"Submitted update on {table} ({matched} row(s) matched)")
        return matched

    # ── DELETE ────────────────────────────────────────────

    def delete(self, table: str, condition: str, params: Sequence[Any] = ()) -> int:
        """
        Delete matching rows through an ALTER TABLE ... DELETE mutation.

        Unlike update, no match count is computed.

        Returns:
            0 on success; any failure is raised instead.
        """
        stmt = build_delete(table, Condition(condition, list(params)))
        self.executor.run_raw(stmt.sql)
        logger.info(f"Submitted delete on {table}")
        return 0
