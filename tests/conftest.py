import threading
from types import SimpleNamespace

import pytest

from db.connection import ConnectionPool
from db.executor import QueryExecutor
from repositories.table_repo import TableRepository


class FakeStore:
    """Shared state behind every FakeClient: canned results plus a statement log."""

    def __init__(self):
        self.statements = []  # (kind, sql, params)
        self.responses = []   # (sql prefix, column names, rows)
        self.fail_on = None   # sql prefix that raises on execution
        self.clients = []
        self._lock = threading.Lock()

    def respond(self, prefix, columns, rows):
        self.responses.append((prefix, list(columns), [tuple(r) for r in rows]))

    def record(self, kind, sql, params):
        with self._lock:
            self.statements.append((kind, sql, params))

    def lookup(self, sql):
        for prefix, columns, rows in self.responses:
            if sql.startswith(prefix):
                return columns, rows
        return [], []


class FakeClient:
    """Stands in for a clickhouse-connect client."""

    def __init__(self, store, close_error=None):
        self.store = store
        self.closed = False
        self.close_error = close_error

    def _maybe_fail(self, sql):
        from clickhouse_connect.driver.exceptions import ClickHouseError

        if self.store.fail_on and sql.startswith(self.store.fail_on):
            raise ClickHouseError(f"Code: 62. Syntax error near {sql[:20]!r}")

    def query(self, sql, parameters=None):
        self.store.record("query", sql, parameters)
        self._maybe_fail(sql)
        columns, rows = self.store.lookup(sql)
        return SimpleNamespace(column_names=tuple(columns), result_rows=list(rows))

    def command(self, sql, parameters=None):
        self.store.record("command", sql, parameters)
        self._maybe_fail(sql)
        return SimpleNamespace(written_rows=0)

    def close(self):
        if self.close_error:
            raise self.close_error
        self.closed = True


@pytest.fixture()
def store():
    return FakeStore()


@pytest.fixture()
def factory(store):
    def _factory():
        client = FakeClient(store)
        store.clients.append(client)
        return client
    return _factory


@pytest.fixture()
def pool(factory):
    p = ConnectionPool(factory, capacity=3, min_idle=1, timeout=0.5)
    p.initialize()
    yield p
    p.shutdown()


@pytest.fixture()
def executor(pool):
    return QueryExecutor(pool)


@pytest.fixture()
def repo(executor):
    return TableRepository(executor)
