"""Immutable per-call statement request.

Every executor helper builds a fresh :class:`StatementRequest`; nothing
about a call is stored on the executor itself, so one executor can serve
concurrent callers.
"""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from clauseql.compile.clause import Clause
from clauseql.engines.base import EngineDialect
from clauseql.schema.engine import Engine
from clauseql.template.query_vars import QueryVarTemplater

_EMPTY_VARS: Mapping[str, Any] = MappingProxyType({})
_WHERE_KEYWORD = re.compile(r"^WHERE\s", re.IGNORECASE)


@dataclass(frozen=True)
class StatementRequest:
    """One statement to run.

    Attributes:
        sql: SQL text with ``?`` bind placeholders.
        params: Bind values in placeholder order.
        query_vars: Read-only query-variable values for templating.
    """

    sql: str
    params: tuple[Any, ...] = ()
    query_vars: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_VARS)

    @classmethod
    def build(
        cls,
        sql: str,
        params: Sequence[Any] = (),
        query_vars: Mapping[str, Any] | None = None,
        where: Clause | str | None = None,
        *,
        engine: Engine | str | EngineDialect,
        check_keywords: bool = False,
    ) -> StatementRequest:
        """Assemble a request, appending ``where`` to ``sql``.

        A :class:`Clause` is rendered for ``engine`` and its bind values
        follow ``params``.  A string is appended as-is, with ``" WHERE "``
        put in front unless it already starts with ``WHERE``.
        """
        binds = list(params)
        if isinstance(where, Clause):
            sql += where.render(binds, engine, check_keywords)
        elif where and where.strip():
            fragment = where.strip()
            if _WHERE_KEYWORD.match(fragment):
                sql += " " + fragment
            else:
                sql += " WHERE " + fragment
        return cls(
            sql=sql,
            params=tuple(binds),
            query_vars=MappingProxyType(dict(query_vars)) if query_vars else _EMPTY_VARS,
        )

    @property
    def prepared(self) -> bool:
        """``True`` when the statement carries bind values."""
        return bool(self.params)

    def templated(self, templater: QueryVarTemplater, always_parse: bool = False) -> StatementRequest:
        """Return a copy with query variables substituted into the SQL.

        Raises:
            TemplatingError: If a variable value is rejected or missing.
        """
        sql = templater.substitute(self.sql, self.query_vars, always_parse)
        if sql == self.sql:
            return self
        return replace(self, sql=sql)
