"""Integration tests: clause + templating → execute against a real SQLite in-memory DB.

Covers prepared and direct execution, IN lists, grouped OR conditions,
raw-SQL conditions, joins, query variables, the scalar helpers, existence
checks and error wrapping.
"""
from __future__ import annotations

import sqlite3

import pytest

import clauseql
from clauseql import (
    Clause,
    ConnectionSettings,
    ExecutorConfig,
    Join,
    JoinType,
    QueryExecutionError,
    RowStyle,
    StatementExecutor,
    use_connection,
)


@pytest.fixture()
def executor(sqlite_db) -> StatementExecutor:
    return StatementExecutor(sqlite_db)


def test_prepared_clause(executor):
    where = Clause().add_condition("age", ">", 18)
    names = executor.fetch_column("SELECT name FROM users", where=where)
    assert sorted(names) == ["Alice", "Carol", "Dave"]


def test_literal_in_list(executor):
    where = Clause().add_condition("status", "IN", ["1", 3.2], prepared=False)
    rows = executor.fetch_all("SELECT id FROM users", where=where, row_style=RowStyle.SEQUENCE)
    assert sorted(r[0] for r in rows) == [1, 3, 4]


def test_grouped_or_with_raw_condition(executor):
    where = (
        Clause()
        .add_condition("deleted_at", "IS", None, prepared=False)
        .add_condition("age", "<", 18, prefix="AND", parens_before=1)
        .add_condition("status", "=", 1, prefix="OR", parens_after=1)
        .add_raw_condition("name <> ?", prepared=True, value="Dave")
    )
    names = executor.fetch_column("SELECT name FROM users", where=where)
    assert sorted(names) == ["Alice", "Bob"]


def test_keyword_column(executor):
    where = Clause().add_condition("order", "=", 1)
    assert executor.fetch_scalar("SELECT name FROM users", where=where) == "Bob"


def test_keyword_checked_quoting_runs(sqlite_db):
    executor = StatementExecutor(sqlite_db, ExecutorConfig(check_keywords=True))
    where = Clause().add_condition("users.order", ">", 1).add_condition("age", ">", 30)
    assert executor.fetch_column("SELECT name FROM users", where=where) == ["Alice"]


def test_join(executor):
    join = Join(JoinType.INNER, "memberships", "memberships.user_id", "users.id")
    sql = "SELECT DISTINCT users.name FROM users" + join.render(executor.engine)
    where = Clause().add_condition("memberships.team_id", "=", 2)
    assert sorted(executor.fetch_column(sql, where=where)) == ["Alice", "Dave"]


def test_query_vars_and_binds(executor):
    sql = "SELECT name FROM users WHERE age {$cmp=>} ? ORDER BY id LIMIT {$lim=10}"
    assert executor.fetch_column(sql, [30], query_vars={"cmp": "<"}) == ["Bob", "Dave"]
    assert executor.fetch_column(sql, [30], query_vars={"cmp": ">", "lim": 1}) == ["Alice"]


def test_fetch_record_and_none(executor):
    assert executor.fetch_record("SELECT id, name FROM users WHERE id = ?", [3]) == {"id": 3, "name": "Carol"}
    assert executor.fetch_record("SELECT id FROM users WHERE id = ?", [99]) is None


def test_key_value_pairs(executor):
    pairs = executor.fetch_key_value_pairs("SELECT name, value FROM app_settings", "name", "value")
    assert pairs == {"maintenance": "yes", "max_rows": "250", "ratio": "0.75"}


def test_iterate_key_value_pairs(executor):
    pairs = list(executor.iterate_key_value_pairs("SELECT id, name FROM users ORDER BY id", "id", "name"))
    assert pairs[0] == (1, "Alice")
    assert len(pairs) == 4


def test_scalar_helpers(executor):
    setting = "SELECT value FROM app_settings WHERE name = ?"
    assert executor.fetch_bool(setting, ["maintenance"]) is True
    assert executor.fetch_int(setting, ["max_rows"]) == 250
    assert executor.fetch_float(setting, ["ratio"]) == 0.75
    assert executor.fetch_int(setting, ["unknown"], default=-1) == -1
    assert executor.fetch_bool(setting, ["retired"]) is False


def test_count(executor):
    assert executor.count("users") == 4
    assert executor.count("users", Clause().add_condition("status", "=", 1)) == 2
    assert executor.count("users", "age > ?", [30]) == 2


def test_execute_returns_rowcount(executor):
    where = Clause().add_condition("status", "IN", [1, 2])
    assert executor.execute("UPDATE users SET age = age + ?", [1], where=where) == 3
    assert executor.fetch_int("SELECT age FROM users WHERE id = ?", [2]) == 18


def test_existence_checks(executor):
    assert executor.table_exists("users") is True
    assert executor.table_exists("nope") is False
    assert executor.database_exists("main") is False


def test_driver_error_is_wrapped(executor):
    with pytest.raises(QueryExecutionError) as exc_info:
        executor.fetch_all("SELECT missing FROM users WHERE id = ?", [1])
    assert exc_info.value.params == (1,)
    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)


def test_connect_and_current_connection():
    executor = clauseql.connect(ConnectionSettings(engine="sqlite"))
    try:
        with use_connection(executor.connection):
            assert StatementExecutor.for_current().fetch_scalar("SELECT 40 + 2") == 42
    finally:
        executor.connection.close()  # type: ignore[attr-defined]
