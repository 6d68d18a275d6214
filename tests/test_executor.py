"""Unit tests for StatementExecutor against a recording connection."""

from __future__ import annotations

import logging

import pytest

from clauseql.compile.clause import Clause
from clauseql.errors import ConfigurationError, QueryExecutionError, TemplatingError
from clauseql.execute.context import current_connection, use_connection
from clauseql.execute.executor import StatementExecutor
from clauseql.schema.engine import Engine
from clauseql.schema.settings import ExecutorConfig, RowStyle
from tests.fixtures.connections import FakeCursor, RecordingConnection


def _conn(columns=(), rows=(), **kw) -> RecordingConnection:
    return RecordingConnection(cursor=FakeCursor(columns, rows, **kw))


class TestRunPrimitive:
    def test_no_binds_executes_directly(self, fake_conn):
        StatementExecutor(fake_conn).execute("DELETE FROM t")
        assert [c[0] for c in fake_conn.calls] == ["execute"]
        assert fake_conn.last_sql == "DELETE FROM t"

    def test_binds_use_prepared_path(self, fake_conn):
        StatementExecutor(fake_conn).execute("DELETE FROM t WHERE id = ?", [5])
        assert [c[0] for c in fake_conn.calls] == ["prepare", "execute_prepared"]
        assert fake_conn.last_params == (5,)

    def test_query_vars_are_substituted_before_execution(self, fake_conn):
        StatementExecutor(fake_conn).execute(
            "DELETE FROM t WHERE age {$cmp=>} ?", [3], query_vars={"cmp": "<"}
        )
        assert fake_conn.calls[0] == ("prepare", "DELETE FROM t WHERE age < ?", ())

    def test_defaults_only_applied_when_always_parse(self, fake_conn):
        sql = "SELECT 1 LIMIT {$n=5}"
        StatementExecutor(fake_conn).execute(sql)
        assert fake_conn.last_sql == sql
        StatementExecutor(fake_conn, ExecutorConfig(parse_query_vars_always=True)).execute(sql)
        assert fake_conn.last_sql == "SELECT 1 LIMIT 5"

    def test_templating_error_is_not_wrapped(self, fake_conn):
        with pytest.raises(TemplatingError):
            StatementExecutor(fake_conn).execute("SELECT {$x}", query_vars={"x": "1 --"})
        assert fake_conn.calls == []

    def test_driver_failure_is_wrapped(self, caplog):
        conn = RecordingConnection(error=RuntimeError("server gone"))
        executor = StatementExecutor(conn)
        with caplog.at_level(logging.WARNING, logger="clauseql.execute.executor"):
            with pytest.raises(QueryExecutionError) as exc_info:
                executor.execute("UPDATE t SET a = ? WHERE b {$op}", [1], query_vars={"op": "= 2"})
        err = exc_info.value
        assert err.sql == "UPDATE t SET a = ? WHERE b = 2"
        assert err.params == (1,)
        assert isinstance(err.__cause__, RuntimeError)
        assert "SQL:" in str(err) and "PARAMS:" in str(err)
        assert "server gone" in caplog.text

    def test_fetch_failure_is_wrapped(self):
        conn = _conn(["a"], [(1,)], fetch_error=RuntimeError("broken pipe"))
        with pytest.raises(QueryExecutionError):
            StatementExecutor(conn).fetch_all("SELECT a FROM t")

    def test_requests_do_not_leak_between_calls(self, fake_conn):
        executor = StatementExecutor(fake_conn)
        executor.execute("DELETE FROM t WHERE id = ?", [1])
        executor.execute("DELETE FROM t")
        assert fake_conn.calls[-1] == ("execute", "DELETE FROM t", ())


class TestWhere:
    def test_clause_binds_follow_params(self, fake_conn):
        where = Clause().add_condition("age", ">", 18)
        StatementExecutor(fake_conn).execute("UPDATE users SET flag = ?", ["x"], where=where)
        assert fake_conn.calls[0][1] == 'UPDATE users SET flag = ? WHERE "age" > ?'
        assert fake_conn.last_params == ("x", 18)

    def test_clause_renders_for_connection_engine(self):
        conn = RecordingConnection(engine=Engine.MYSQL)
        StatementExecutor(conn).execute("DELETE FROM t", where=Clause().add_condition("a", "=", 1))
        assert conn.calls[0][1] == "DELETE FROM t WHERE `a` = ?"

    def test_ansi_quotes_from_config(self):
        conn = RecordingConnection(engine=Engine.MYSQL)
        executor = StatementExecutor(conn, ExecutorConfig(ansi_quotes=True))
        assert executor.dialect.quote_char == '"'
        executor.execute("DELETE FROM t", where=Clause().add_condition("a", "=", 1))
        assert conn.calls[0][1] == 'DELETE FROM t WHERE "a" = ?'

    def test_ansi_quotes_ignored_by_other_engines(self, fake_conn):
        executor = StatementExecutor(fake_conn, ExecutorConfig(ansi_quotes=True))
        executor.execute("DELETE FROM t", where=Clause().add_condition("a", "=", 1))
        assert fake_conn.calls[0][1] == 'DELETE FROM t WHERE "a" = ?'

    def test_check_keywords_from_config(self, fake_conn):
        where = Clause().add_condition("order", "=", 1).add_condition("age", "=", 2)
        executor = StatementExecutor(fake_conn, ExecutorConfig(check_keywords=True))
        executor.execute("DELETE FROM t", where=where)
        assert fake_conn.calls[0][1] == 'DELETE FROM t WHERE "order" = ? AND age = ?'

    def test_string_where_gets_keyword(self, fake_conn):
        StatementExecutor(fake_conn).execute("DELETE FROM t", where="a = 1")
        assert fake_conn.last_sql == "DELETE FROM t WHERE a = 1"

    def test_string_where_keeps_existing_keyword(self, fake_conn):
        StatementExecutor(fake_conn).execute("DELETE FROM t", where="  where a = 1")
        assert fake_conn.last_sql == "DELETE FROM t where a = 1"

    def test_empty_clause_adds_nothing(self, fake_conn):
        StatementExecutor(fake_conn).execute("DELETE FROM t", where=Clause())
        assert fake_conn.last_sql == "DELETE FROM t"


class TestRows:
    def test_fetch_all_mapping(self):
        conn = _conn(["id", "name"], [(1, "a"), (2, "b")])
        rows = StatementExecutor(conn).fetch_all("SELECT id, name FROM t")
        assert rows == [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]
        assert conn.cursor.closed

    def test_fetch_all_sequence_from_config(self):
        conn = _conn(["id"], [(1,), (2,)])
        executor = StatementExecutor(conn, ExecutorConfig(row_style=RowStyle.SEQUENCE))
        assert executor.fetch_all("SELECT id FROM t") == [(1,), (2,)]

    def test_fetch_all_empty(self):
        assert StatementExecutor(_conn(["id"], [])).fetch_all("SELECT id FROM t") == []

    def test_iterate_all_is_lazy(self, fake_conn):
        iterator = StatementExecutor(fake_conn).iterate_all("SELECT 1")
        assert fake_conn.calls == []
        assert list(iterator) == []
        assert len(fake_conn.calls) == 1

    def test_iterate_all_spans_batches(self):
        conn = _conn(["n"], [(i,) for i in range(250)])
        values = [row["n"] for row in StatementExecutor(conn).iterate_all("SELECT n FROM t")]
        assert values == list(range(250))

    def test_fetch_record(self):
        conn = _conn(["id", "name"], [(1, "a"), (2, "b")])
        assert StatementExecutor(conn).fetch_record("SELECT * FROM t") == {"id": 1, "name": "a"}

    def test_fetch_record_not_found_is_none(self):
        assert StatementExecutor(_conn(["id"], [])).fetch_record("SELECT id FROM t") is None

    def test_fetch_record_sequence(self):
        conn = _conn(["id", "name"], [(1, "a")])
        record = StatementExecutor(conn).fetch_record("SELECT * FROM t", row_style=RowStyle.SEQUENCE)
        assert record == (1, "a")

    def test_fetch_column_takes_first_column(self):
        conn = _conn(["id", "name"], [(1, "a"), (2, "b")])
        assert StatementExecutor(conn).fetch_column("SELECT id, name FROM t") == [1, 2]

    def test_key_value_pairs_skip_nulls(self):
        conn = _conn(["k", "v"], [("a", 1), (None, 2), ("c", None), ("d", 4)])
        pairs = StatementExecutor(conn).fetch_key_value_pairs("SELECT k, v FROM t", "k", "v")
        assert pairs == {"a": 1, "d": 4}

    def test_key_value_pairs_missing_column(self):
        conn = _conn(["k", "v"], [("a", 1)])
        assert StatementExecutor(conn).fetch_key_value_pairs("SELECT k, v FROM t", "k", "nope") == {}


class TestScalars:
    def test_fetch_scalar(self):
        assert StatementExecutor(_conn(["n"], [(3,)])).fetch_scalar("SELECT 3") == 3

    def test_fetch_scalar_default_when_no_row(self):
        assert StatementExecutor(_conn(["n"], [])).fetch_scalar("SELECT n", default="none") == "none"

    def test_fetch_scalar_null_is_not_default(self):
        assert StatementExecutor(_conn(["n"], [(None,)])).fetch_scalar("SELECT n", default=1) is None

    @pytest.mark.parametrize("raw, expected", [("yes", True), ("0", False), (5, True), ("maybe", False)])
    def test_fetch_bool(self, raw, expected):
        assert StatementExecutor(_conn(["b"], [(raw,)])).fetch_bool("SELECT b") is expected

    def test_fetch_bool_default(self):
        assert StatementExecutor(_conn(["b"], [])).fetch_bool("SELECT b", default=True) is True

    def test_fetch_int(self):
        assert StatementExecutor(_conn(["n"], [("42",)])).fetch_int("SELECT n") == 42
        assert StatementExecutor(_conn(["n"], [("x",)])).fetch_int("SELECT n", default=7) == 7
        assert StatementExecutor(_conn(["n"], [])).fetch_int("SELECT n", default=7) == 7

    def test_fetch_float(self):
        assert StatementExecutor(_conn(["n"], [("0.5",)])).fetch_float("SELECT n") == 0.5
        assert StatementExecutor(_conn(["n"], [(True,)])).fetch_float("SELECT n") == 1.0

    def test_failure_never_becomes_default(self):
        conn = RecordingConnection(error=RuntimeError("boom"))
        with pytest.raises(QueryExecutionError):
            StatementExecutor(conn).fetch_int("SELECT n", default=3)


class TestStatements:
    def test_execute_returns_rowcount(self):
        assert StatementExecutor(_conn(rowcount=3)).execute("DELETE FROM t") == 3

    def test_execute_unknown_rowcount(self, fake_conn):
        assert StatementExecutor(fake_conn).execute("CREATE TABLE x (a int)") == -1

    def test_count_with_clause(self):
        conn = _conn(["cnt"], [(2,)])
        where = Clause().add_condition("status", "IN", [1, 2])
        assert StatementExecutor(conn).count("users", where) == 2
        assert conn.calls[0][1] == 'SELECT COUNT(*) AS cnt FROM users WHERE "status" IN ( ?, ? )'
        assert conn.last_params == (1, 2)

    def test_count_with_string_where_and_params(self):
        conn = _conn(["cnt"], [(1,)])
        assert StatementExecutor(conn).count("users", "age > ?", [30]) == 1
        assert conn.calls[0][1] == "SELECT COUNT(*) AS cnt FROM users WHERE age > ?"

    def test_count_rejects_bad_table_name(self, fake_conn):
        with pytest.raises(ConfigurationError):
            StatementExecutor(fake_conn).count("users; DROP TABLE users")
        assert fake_conn.calls == []


class TestCatalogChecks:
    def test_table_exists_sqlite(self):
        conn = _conn(["c"], [(1,)])
        assert StatementExecutor(conn).table_exists("users") is True
        assert conn.last_params == ("users",)

    def test_table_exists_uses_connection_database(self):
        conn = RecordingConnection(engine=Engine.PGSQL, database_name="shop", cursor=FakeCursor(["e"], [(True,)]))
        assert StatementExecutor(conn).table_exists("users") is True
        assert conn.last_params == ("users", "shop")

    def test_table_exists_invalid_name(self, fake_conn):
        assert StatementExecutor(fake_conn).table_exists("1users") is False
        assert fake_conn.calls == []

    def test_database_exists_false_on_sqlite(self, fake_conn):
        assert StatementExecutor(fake_conn).database_exists("main") is False
        assert fake_conn.calls == []

    def test_database_exists_mysql(self):
        conn = RecordingConnection(engine=Engine.MYSQL, cursor=FakeCursor(["c"], [(1,)]))
        assert StatementExecutor(conn).database_exists("shop") is True
        assert conn.last_params == ("shop",)

    def test_database_exists_invalid_name(self):
        conn = RecordingConnection(engine=Engine.PGSQL)
        assert StatementExecutor(conn).database_exists("shop.x") is False
        assert conn.calls == []


class TestCurrentConnection:
    def test_for_current(self, fake_conn):
        with use_connection(fake_conn):
            assert current_connection() is fake_conn
            assert StatementExecutor.for_current().connection is fake_conn

    def test_no_current_connection(self):
        with pytest.raises(ConfigurationError):
            StatementExecutor.for_current()

    def test_nested_blocks_restore_previous(self):
        outer, inner = RecordingConnection(), RecordingConnection()
        with use_connection(outer):
            with use_connection(inner):
                assert current_connection() is inner
            assert current_connection() is outer
