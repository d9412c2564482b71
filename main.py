"""
main.py
-------
Entry point for the ClickHouse data-access layer.

Responsibilities:
    - Build the connection pool from configuration.
    - Wire the executor, repository and service together.
    - Verify store connectivity with a health check.
"""

import sys
from dataclasses import dataclass
from typing import Optional

from db.connection import ConnectionFactory, ConnectionPool, create_pool_from_config
from db.errors import DataAccessError
from db.executor import QueryExecutor
from repositories.table_repo import TableRepository
from services.crud_service import CrudService
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class DataAccess:
    """Everything a request-handling front end needs, built once at startup."""
    pool: ConnectionPool
    executor: QueryExecutor
    repo: TableRepository
    service: CrudService

    def close(self) -> None:
        self.pool.shutdown()


def build_data_access(factory: Optional[ConnectionFactory] = None) -> DataAccess:
    """
    Create and initialize the pool, then wire the layers on top of it.

    Raises:
        StoreConnectionError: If the initial connections cannot be opened.
    """
    pool = create_pool_from_config(factory)
    pool.initialize()
    executor = QueryExecutor(pool)
    repo = TableRepository(executor)
    return DataAccess(pool=pool, executor=executor, repo=repo, service=CrudService(repo))


def main() -> int:
    """Start up, check the store, and shut down again."""

    # ── 1. Pool setup ─────────────────────────────────────
    logger.info("Initializing ClickHouse connection pool...")
    try:
        access = build_data_access()
    except DataAccessError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    # ── 2. Health check ───────────────────────────────────
    try:
        health = access.executor.health_check()
        if health["ok"]:
            logger.info(f"ClickHouse is reachable. Pool: {health['pool']}")
        else:
            logger.error(f"ClickHouse health check failed: {health.get('error')}")
        return 0 if health["ok"] else 1

    # ── 3. Cleanup ────────────────────────────────────────
    finally:
        access.close()


if __name__ == "__main__":
    sys.exit(main())
