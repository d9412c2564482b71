"""
db/executor.py
--------------
Runs built statements on a pooled connection and maps results to Records.

Every call follows the same path: acquire a connection, execute, map the
rows, release. The release happens exactly once on every exit path after a
successful acquire, including when execution or mapping raises.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

from clickhouse_connect.driver.exceptions import ClickHouseError, StreamFailureError

from db.connection import ConnectionPool
from db.errors import DataAccessError, StoreConnectionError
from models.query import Record
from utils.logger import get_logger

logger = get_logger(__name__)


def result_to_records(result: Any) -> list[Record]:
    """
    Convert a clickhouse-connect QueryResult into a list of Records.

    Column order in each Record follows the result's physical column order.
    """
    columns = list(result.column_names)
    return [dict(zip(columns, row)) for row in result.result_rows]


class Session:
    """One checked-out connection, usable for several statements in a row."""

    def __init__(self, conn: Any):
        self._conn = conn

    def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> list[Record]:
        """Run a read statement and return its rows as Records."""
        # Rows stream lazily, so server errors can surface while mapping.
        try:
            result = self._conn.query(sql, parameters=list(params) if params else None)
            return result_to_records(result)
        except (ClickHouseError, StreamFailureError) as e:
            logger.error(f"Query failed: {e} | sql={sql}")
            raise StoreConnectionError(f"Error executing query: {e}") from e

    def command(self, sql: str, params: Optional[Sequence[Any]] = None) -> Any:
        """Run a write/mutation statement; returns the driver's summary."""
        try:
            return self._conn.command(sql, parameters=list(params) if params else None)
        except ClickHouseError as e:
            logger.error(f"Update failed: {e} | sql={sql}")
            raise StoreConnectionError(f"Error executing update: {e}") from e


class QueryExecutor:
    """Executes statements against the store through a ConnectionPool."""

    def __init__(self, pool: ConnectionPool, acquire_timeout: Optional[float] = None):
        self.pool = pool
        self.acquire_timeout = acquire_timeout

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Hold one connection for the duration of the block."""
        with self.pool.connection(self.acquire_timeout) as conn:
            yield Session(conn)

    # ── BOUND ─────────────────────────────────────────────

    def run_bound_query(self, sql: str, params: Sequence[Any]) -> list[Record]:
        with self.session() as s:
            return s.query(sql, params)

    def run_bound_update(self, sql: str, params: Sequence[Any]) -> Any:
        with self.session() as s:
            return s.command(sql, params)

    # ── RAW ───────────────────────────────────────────────

    def run_raw(self, sql: str) -> Any:
        """Run a statement with no parameter binding (mutations)."""
        with self.session() as s:
            return s.command(sql)

    def run_raw_query(self, sql: str) -> list[Record]:
        with self.session() as s:
            return s.query(sql)

    # ── HEALTH ────────────────────────────────────────────

    def health_check(self) -> dict:
        """
        Run `SELECT 1` on a pooled connection.

        Returns:
            Dict with 'ok' plus the pool counters, and 'error' when not ok.
        """
        health: dict = {"ok": False}
        try:
            rows = self.run_raw_query("SELECT 1 AS ok")
            health["ok"] = bool(rows) and rows[0].get("ok") == 1
        except DataAccessError as e:
            logger.error(f"Health check failed: {e}")
            health["error"] = str(e)
        health["pool"] = self.pool.stats()
        return health
