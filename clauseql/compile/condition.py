"""A single WHERE clause predicate.

A :class:`Condition` holds one ``<column> <operator> <value>`` predicate
together with its grouping parentheses and the ``AND``/``OR`` prefix that
joins it to the previous predicate of a :class:`~clauseql.compile.clause.Clause`.

Values are either sent as prepared-statement binds (``?`` placeholders,
appended to a caller-owned accumulator) or written into the SQL text as
they are.  Inline values are NOT escaped::

    params: list = []
    cond = Condition("age", ">", 18).set_prepared(True)
    cond.render(params, Engine.PGSQL, include_prefix=False)
    # ' "age" > ?'   params == [18]
"""
from __future__ import annotations

import re
from typing import Any

from clauseql.compile.context import RenderContext
from clauseql.engines.base import EngineDialect
from clauseql.errors import ConfigurationError
from clauseql.schema.column_reference import ColumnReference
from clauseql.schema.engine import Engine
from clauseql.schema.values import ConditionValue, IntSequence, ScalarValue, to_condition_value

#: Comparison operators a condition accepts (case-insensitive).
OPERATOR_PATTERN = re.compile(r"^(<|>|<>|=|LIKE|IN|IS(\s+NOT)?)$", re.IGNORECASE)

PREFIX_PATTERN = re.compile(r"^(AND|OR)$", re.IGNORECASE)

#: Upper bound for the grouping parentheses around one condition.
MAX_PARENS = 10


class Condition:
    """One predicate of a WHERE clause.

    Args:
        column: Column name, ``column`` or ``table.column``.
        operator: One of ``<``, ``>``, ``<>``, ``=``, ``LIKE``, ``IN``,
            ``IS``, ``IS NOT``.
        value: Scalar value, or a sequence of integers for ``IN``.
        prefix: ``AND`` or ``OR``; joins this condition to the previous one.

    Raises:
        ConfigurationError: If the column, operator, value or prefix is invalid.
    """

    def __init__(
        self,
        column: str,
        operator: str,
        value: Any = None,
        prefix: str = "AND",
    ) -> None:
        self._column: ColumnReference | None = None
        self._operator = ""
        self._raw_value: Any = None
        self._value: ConditionValue = ScalarValue()
        self._value_sql: str | None = None
        self._prepared = False
        self._prefix = "AND"
        self._parens_before = 0
        self._parens_after = 0
        self._raw_sql: str | None = None

        self._raw_value = value
        self.set_column(column)
        self.set_operator(operator)
        self.set_prefix(prefix)

    @classmethod
    def from_raw_sql(
        cls,
        raw_sql: str,
        prepared: bool = False,
        value: Any = None,
        prefix: str = "AND",
    ) -> Condition:
        """Build a condition from a literal SQL predicate such as ``(foo > 0)``.

        Args:
            raw_sql: The predicate SQL, used instead of column/operator/value.
            prepared: Whether ``raw_sql`` contains a ``?`` bound to ``value``.
            value: The bind value when ``prepared`` is set.
            prefix: ``AND`` or ``OR``.
        """
        if not raw_sql or not raw_sql.strip():
            raise ConfigurationError(
                "A raw SQL condition can not be empty!", field="raw_sql", value=raw_sql
            )
        cond = cls.__new__(cls)
        cond._column = None
        cond._operator = ""
        cond._raw_value = value
        cond._value = to_condition_value(value, "")
        cond._value_sql = None
        cond._prepared = prepared
        cond._prefix = "AND"
        cond._parens_before = 0
        cond._parens_after = 0
        cond._raw_sql = raw_sql
        cond.set_prefix(prefix)
        return cond

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def column(self) -> str:
        return "" if self._column is None else str(self._column)

    @property
    def operator(self) -> str:
        return self._operator

    @property
    def value(self) -> ConditionValue:
        return self._value

    @property
    def value_sql(self) -> str | None:
        return self._value_sql

    @property
    def prepared(self) -> bool:
        return self._prepared

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def parens_before(self) -> int:
        return self._parens_before

    @property
    def parens_after(self) -> int:
        return self._parens_after

    @property
    def raw_sql(self) -> str | None:
        return self._raw_sql

    # ------------------------------------------------------------------
    # Fluent setters
    # ------------------------------------------------------------------

    def set_column(self, column: str) -> Condition:
        self._column = ColumnReference.parse(column)
        return self

    def set_operator(self, operator: str) -> Condition:
        if not operator or not OPERATOR_PATTERN.match(operator.strip()):
            raise ConfigurationError(
                f"Invalid where operator: {operator!r}.", field="operator", value=operator
            )
        normalized = " ".join(operator.split()).upper()
        # The value tag depends on the operator.
        self._value = to_condition_value(self._raw_value, normalized)
        self._operator = normalized
        return self

    def set_value(self, value: Any) -> Condition:
        """Set the value; for ``IN`` it is coerced to an integer sequence."""
        self._value = to_condition_value(value, self._operator)
        self._raw_value = value
        return self

    def set_value_sql(self, value_sql: str | None) -> Condition:
        """Set an SQL expression such as ``(? + 1)`` used in place of ``?``.

        Only applies to prepared, non-``IN`` conditions.
        """
        self._value_sql = value_sql or None
        return self

    def set_prepared(self, prepared: bool) -> Condition:
        self._prepared = bool(prepared)
        return self

    def set_prefix(self, prefix: str) -> Condition:
        if not PREFIX_PATTERN.match(prefix or ""):
            raise ConfigurationError(
                f"Invalid where prefix {prefix!r} (AND/OR is valid)!",
                field="prefix",
                value=prefix,
            )
        self._prefix = prefix.upper()
        return self

    def set_parens_before(self, count: int) -> Condition:
        self._parens_before = _clamp_parens("parens_before", count)
        return self

    def set_parens_after(self, count: int) -> Condition:
        self._parens_after = _clamp_parens("parens_after", count)
        return self

    def set_raw_sql(self, raw_sql: str | None) -> Condition:
        """Replace the column/operator/value rendering by literal SQL.

        An empty string clears the override.
        """
        if not raw_sql and self._column is None:
            raise ConfigurationError(
                "Can not clear the raw SQL of a condition that has no column.",
                field="raw_sql",
                value=raw_sql,
            )
        self._raw_sql = raw_sql or None
        return self

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        params: list[Any],
        engine: Engine | str | EngineDialect,
        include_prefix: bool = True,
        check_keywords: bool = False,
    ) -> str:
        """Render the condition and register its bind values.

        Args:
            params: Bind-value accumulator; prepared values are appended.
            engine: Target engine (or dialect instance).
            include_prefix: Emit the ``AND``/``OR`` prefix.
            check_keywords: Quote only column parts that are reserved words.

        Returns:
            The SQL fragment, starting with a space.
        """
        return self.render_with(params, RenderContext.for_engine(engine, check_keywords), include_prefix)

    def render_with(self, params: list[Any], ctx: RenderContext, include_prefix: bool = True) -> str:
        """Render using a prepared :class:`RenderContext`."""
        prefix = f" {self._prefix}" if include_prefix else ""

        if self._raw_sql is not None:
            if self._prepared:
                params.extend(self._value.bind_values())
            return f"{prefix} {self._raw_sql.lstrip()}"

        column = self._column
        if column is None:
            raise ConfigurationError("A condition without raw SQL needs a column.", field="column")
        sql = " " + "( " * self._parens_before
        sql += f"{column.quoted(ctx.dialect, ctx.check_keywords)} {self._operator}"

        value = self._value
        if isinstance(value, IntSequence):
            if self._prepared:
                sql += " ( " + ", ".join("?" for _ in value.values) + " )"
                params.extend(value.bind_values())
            else:
                sql += f" ( {value.literal_sql()} )"
        elif self._prepared:
            sql += f" {self._value_sql.lstrip()}" if self._value_sql else " ?"
            params.extend(value.bind_values())
        else:
            sql += f" {value.literal_sql()}"

        sql += " )" * self._parens_after
        return f"{prefix}{sql}"

    def __repr__(self) -> str:
        if self._raw_sql is not None:
            return f"Condition.from_raw_sql({self._raw_sql!r}, prepared={self._prepared})"
        return (
            f"Condition({self.column!r}, {self._operator!r}, {self._raw_value!r}, "
            f"prefix={self._prefix!r}, prepared={self._prepared})"
        )


def _clamp_parens(field: str, count: int) -> int:
    if count > MAX_PARENS:
        raise ConfigurationError(
            f"A where condition can not use more than {MAX_PARENS} parentheses ({field}={count}).",
            field=field,
            value=count,
        )
    return max(0, int(count))
