"""The WHERE clause: an ordered collection of conditions.

Order is significant: conditions render left to right, and grouping is
expressed only through each condition's parentheses and ``AND``/``OR``
prefix.  Conditions are never removed individually; :meth:`Clause.clear`
drops them all.

Usage::

    where = (
        Clause()
        .add_condition("age", ">", 18)
        .add_condition("status", "IN", [1, 2], prefix="OR", parens_before=1)
        .add_raw_condition("deleted_at IS NULL )")
    )
    rendered = where.compile(Engine.SQLITE)
    cursor.execute("SELECT * FROM users" + rendered.sql, rendered.params)
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from clauseql.compile.condition import Condition
from clauseql.compile.context import RenderContext, RenderedSQL
from clauseql.engines.base import EngineDialect
from clauseql.errors import ConfigurationError
from clauseql.schema.engine import Engine


class Clause(Sequence[Condition]):
    """An ordered sequence of :class:`Condition` objects.

    Args:
        conditions: Optional initial conditions, kept in order.
    """

    def __init__(self, conditions: Iterable[Condition] = ()) -> None:
        self._conditions: list[Condition] = []
        for cond in conditions:
            self.append(cond)

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> Condition: ...

    @overload
    def __getitem__(self, index: slice) -> list[Condition]: ...

    def __getitem__(self, index: int | slice) -> Condition | list[Condition]:
        return self._conditions[index]

    def __setitem__(self, index: int, condition: Condition) -> None:
        self._conditions[index] = _checked(condition)

    def __len__(self) -> int:
        return len(self._conditions)

    def __iter__(self) -> Iterator[Condition]:
        return iter(self._conditions)

    def __bool__(self) -> bool:
        return bool(self._conditions)

    def __repr__(self) -> str:
        return f"Clause({self._conditions!r})"

    # ------------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------------

    def append(self, condition: Condition) -> Clause:
        self._conditions.append(_checked(condition))
        return self

    def add_condition(
        self,
        column: str,
        operator: str,
        value: Any = None,
        prepared: bool = True,
        prefix: str = "AND",
        parens_before: int = 0,
        parens_after: int = 0,
        value_sql: str | None = None,
    ) -> Clause:
        """Append a new condition; prepared (bound) by default.

        Raises:
            ConfigurationError: If any argument is invalid.
        """
        return self.append(
            Condition(column, operator, value, prefix)
            .set_prepared(prepared)
            .set_parens_after(parens_after)
            .set_parens_before(parens_before)
            .set_value_sql(value_sql)
        )

    def add_raw_condition(
        self,
        raw_sql: str,
        prepared: bool = False,
        value: Any = None,
        prefix: str = "AND",
    ) -> Clause:
        """Append a literal SQL condition; not prepared by default."""
        return self.append(Condition.from_raw_sql(raw_sql, prepared, value, prefix))

    def clear(self) -> Clause:
        """Remove all conditions."""
        self._conditions = []
        return self

    @property
    def index_of_last(self) -> int:
        """Index of the last condition, ``-1`` when empty."""
        return len(self._conditions) - 1

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        params: list[Any],
        engine: Engine | str | EngineDialect,
        check_keywords: bool = False,
    ) -> str:
        """Render ``" WHERE …"`` and append bind values to ``params``.

        Returns an empty string when the clause has no conditions, so the
        result can always be concatenated onto a base statement.
        """
        if not self._conditions:
            return ""
        ctx = RenderContext.for_engine(engine, check_keywords)
        parts = [
            cond.render_with(params, ctx, include_prefix=i > 0)
            for i, cond in enumerate(self._conditions)
        ]
        return " WHERE" + "".join(parts)

    def compile(
        self,
        engine: Engine | str | EngineDialect,
        check_keywords: bool = False,
    ) -> RenderedSQL:
        """Render into a fresh :class:`RenderedSQL` (own bind list)."""
        params: list[Any] = []
        sql = self.render(params, engine, check_keywords)
        dialect_engine = engine.engine if isinstance(engine, EngineDialect) else Engine.parse(engine)
        return RenderedSQL(sql=sql, params=params, engine=dialect_engine)


def _checked(condition: Any) -> Condition:
    if not isinstance(condition, Condition):
        raise ConfigurationError(
            f"A clause only holds Condition objects, got {type(condition).__name__}.",
            field="condition",
            value=condition,
        )
    return condition
