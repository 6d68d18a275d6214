"""Unit tests for StatementRequest building."""

from __future__ import annotations

import dataclasses

import pytest

from clauseql.compile.clause import Clause
from clauseql.execute.request import StatementRequest
from clauseql.schema.engine import Engine
from clauseql.template.query_vars import QueryVarTemplater


def test_build_without_where():
    req = StatementRequest.build("SELECT 1", [1, 2], engine=Engine.SQLITE)
    assert req.sql == "SELECT 1"
    assert req.params == (1, 2)
    assert req.prepared


def test_build_with_clause_appends_binds():
    where = Clause().add_condition("a", "=", 3)
    req = StatementRequest.build("SELECT * FROM t WHERE x = ? AND", ["x"], where=Clause(), engine=Engine.SQLITE)
    assert req.sql == "SELECT * FROM t WHERE x = ? AND"
    req = StatementRequest.build("SELECT * FROM t", ["x"], where=where, engine=Engine.MYSQL)
    assert req.sql == "SELECT * FROM t WHERE `a` = ?"
    assert req.params == ("x", 3)


@pytest.mark.parametrize(
    "where, expected",
    [
        ("a = 1", "SELECT * FROM t WHERE a = 1"),
        ("WHERE a = 1", "SELECT * FROM t WHERE a = 1"),
        ("\n where\ta = 1", "SELECT * FROM t where\ta = 1"),
        ("whereabouts = 1", "SELECT * FROM t WHERE whereabouts = 1"),
        ("   ", "SELECT * FROM t"),
    ],
)
def test_build_with_string_where(where, expected):
    assert StatementRequest.build("SELECT * FROM t", where=where, engine=Engine.SQLITE).sql == expected


def test_request_is_immutable():
    req = StatementRequest.build("SELECT 1", query_vars={"a": "1"}, engine=Engine.SQLITE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        req.sql = "SELECT 2"  # type: ignore[misc]
    with pytest.raises(TypeError):
        req.query_vars["a"] = "2"  # type: ignore[index]


def test_query_vars_are_copied():
    variables = {"a": "1"}
    req = StatementRequest.build("SELECT {$a}", query_vars=variables, engine=Engine.SQLITE)
    variables["a"] = "2"
    assert req.query_vars["a"] == "1"


def test_templated_returns_new_request():
    req = StatementRequest.build("SELECT {$a}", [1], query_vars={"a": "x"}, engine=Engine.SQLITE)
    templated = req.templated(QueryVarTemplater())
    assert templated.sql == "SELECT x"
    assert templated.params == (1,)
    assert req.sql == "SELECT {$a}"


def test_templated_without_changes_returns_self():
    req = StatementRequest.build("SELECT 1", engine=Engine.SQLITE)
    assert req.templated(QueryVarTemplater()) is req


def test_engine_is_required():
    with pytest.raises(TypeError):
        StatementRequest.build("SELECT 1", where=Clause().add_condition("a", "=", 1))  # type: ignore[call-arg]


def test_clause_is_quoted_for_the_given_engine():
    where = Clause().add_condition("a", "=", 1)
    assert StatementRequest.build("SELECT * FROM t", where=where, engine="postgres").sql == (
        'SELECT * FROM t WHERE "a" = ?'
    )
