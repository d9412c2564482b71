"""
services/crud_service.py
------------------------
Async entry points for the request-handling layer.

Each operation runs the blocking repository call on a worker thread, so a
caller waiting for a pooled connection never stalls the event loop. The
pool's capacity and timeout guarantees are the same as for threaded callers.
"""

import asyncio
from typing import Any, Mapping, Optional, Sequence

from db.errors import DataAccessError
from models.query import Record
from repositories.table_repo import TableRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class CrudService:
    """
    Exposes insert/select/update/delete over the generic table repository.

    Workflow per call:
        1. Validate and build the statement (repository / db.statements).
        2. Acquire a pooled connection and execute (db.executor).
        3. Map rows to Records and release the connection.
    """

    def __init__(self, repo: TableRepository):
        self.repo = repo

    async def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> int:
        return await self._run("insert", table, self.repo.insert, table, rows)

    async def insert_bulk(self, table: str, json_text: str) -> int:
        return await self._run("insert_bulk", table, self.repo.insert_bulk, table, json_text)

    async def select(
        self,
        table: str,
        columns: Optional[Sequence[str]] = None,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Record]:
        return await self._run(
            "select", table, self.repo.select, table, columns, filters, order_by, limit, offset
        )

    async def update(
        self, table: str, data: Mapping[str, Any], condition: str, params: Sequence[Any] = ()
    ) -> int:
        return await self._run("update", table, self.repo.update, table, data, condition, params)

    async def delete(self, table: str, condition: str, params: Sequence[Any] = ()) -> int:
        return await self._run("delete", table, self.repo.delete, table, condition, params)

    @staticmethod
    async def _run(op: str, table: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except DataAccessError as e:
            logger.warning(f"{op} on {table!r} failed: {e}")
            raise
