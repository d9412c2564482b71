import pytest

from db.errors import InvalidIdentifier, InvalidOrderBy, MissingParameter, UnsupportedValue
from db.statements import build_bulk_insert, build_delete, build_insert, build_select, build_update
from models.query import Condition


# ── insert ──────────────────────────────────────────────

def test_insert_two_rows():
    stmt = build_insert("t1", [
        {"id": 1, "name": "Alice", "age": 30},
        {"id": 2, "name": "Bob", "age": 25},
    ])
    assert stmt.sql == "INSERT INTO t1 (id,name,age) VALUES (%s,%s,%s),(%s,%s,%s)"
    assert stmt.params == [1, "Alice", 30, 2, "Bob", 25]


def test_insert_validates_only_first_row_columns():
    with pytest.raises(InvalidIdentifier):
        build_insert("t1", [{"id; DROP": 1}])
    # later rows are bound by the first row's columns; extra keys are ignored
    stmt = build_insert("t1", [{"id": 1}, {"id": 2, "bad key": 3}])
    assert stmt.params == [1, 2]


def test_insert_missing_key_in_later_row_binds_null():
    stmt = build_insert("t1", [{"id": 1, "name": "a"}, {"id": 2}])
    assert stmt.params == [1, "a", 2, None]


def test_insert_rejects_bad_table():
    with pytest.raises(InvalidIdentifier):
        build_insert("t1 --", [{"id": 1}])


# ── select ──────────────────────────────────────────────

def test_select_with_filter_order_and_limit():
    stmt = build_select("t1", filters={"age": 30}, order_by="id ASC", limit=10)
    assert stmt.sql == "SELECT * FROM t1 WHERE age = %s ORDER BY id ASC LIMIT %s"
    assert stmt.params == [30, 10]


def test_select_columns_and_offset():
    stmt = build_select("t1", columns=["id", "name"], filters={"a": "x", "b": True}, offset=5)
    assert stmt.sql == "SELECT id, name FROM t1 WHERE a = %s AND b = %s OFFSET %s"
    assert stmt.params == ["x", True, 5]


@pytest.mark.parametrize("columns", [None, [], ["*"]])
def test_select_wildcard(columns):
    assert build_select("t1", columns=columns).sql == "SELECT * FROM t1"


def test_select_rejects_bad_column_and_filter_key():
    with pytest.raises(InvalidIdentifier):
        build_select("t1", columns=["id", "count(*)"])
    with pytest.raises(InvalidIdentifier):
        build_select("t1", filters={"1=1 OR a": 1})


def test_select_rejects_bad_order_by():
    with pytest.raises(InvalidOrderBy):
        build_select("t1", order_by="id; DROP TABLE t1")


@pytest.mark.parametrize("limit", [-1, "10", 1.5, True])
def test_select_rejects_bad_limit(limit):
    with pytest.raises(UnsupportedValue):
        build_select("t1", limit=limit)


# ── update ──────────────────────────────────────────────

def test_update_inlines_literals_and_shares_where():
    count, mutation = build_update("t1", {"age": 35}, Condition("id = ?", ["1"]))
    assert count.sql == "SELECT count() AS cnt FROM t1 WHERE id = '1'"
    assert mutation.sql == "ALTER TABLE t1 UPDATE age = 35 WHERE id = '1'"
    assert count.params == [] and mutation.params == []


def test_update_set_clause_all_kinds():
    _, mutation = build_update(
        "t1", {"a": None, "b": 1.5, "c": False, "d": "it's"}, Condition("1 = 1")
    )
    assert mutation.sql == "ALTER TABLE t1 UPDATE a = NULL, b = 1.5, c = 0, d = 'it''s' WHERE 1 = 1"


def test_update_validates_data_keys():
    with pytest.raises(InvalidIdentifier):
        build_update("t1", {"age = 1, name": 2}, Condition("id = ?", [1]))


def test_update_missing_parameter():
    with pytest.raises(MissingParameter):
        build_update("t1", {"age": 1}, Condition("id = ? AND x = ?", [1]))


# ── delete ──────────────────────────────────────────────

def test_delete_escapes_quote():
    stmt = build_delete("t1", Condition("name = ?", ["O'Brien"]))
    assert stmt.sql == "ALTER TABLE t1 DELETE WHERE name = 'O''Brien'"


def test_delete_rejects_bad_table():
    with pytest.raises(InvalidIdentifier):
        build_delete("t1; DROP TABLE t2", Condition("1 = 1"))


# ── bulk insert ─────────────────────────────────────────

def test_bulk_insert_inlines_literals():
    stmt = build_bulk_insert("t1", [{"id": 1, "name": "O'Brien"}, {"id": 2, "name": None}])
    assert stmt.sql == "INSERT INTO t1 (id, name) VALUES (1, 'O''Brien'), (2, NULL)"
    assert stmt.params == []


def test_bulk_insert_rejects_nested_values():
    with pytest.raises(UnsupportedValue):
        build_bulk_insert("t1", [{"id": 1, "tags": ["a"]}])


def test_bulk_insert_rejects_non_objects():
    with pytest.raises(UnsupportedValue):
        build_bulk_insert("t1", [1, 2])
