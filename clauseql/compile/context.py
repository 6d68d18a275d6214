"""Render context and rendered-SQL value objects.

Packages the ``(dialect, check_keywords)`` pair that every condition and
join needs into one immutable object, and gives whole-clause rendering a
result type that carries the SQL together with its bind values.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from clauseql.engines.base import EngineDialect
from clauseql.engines.registry import get_dialect
from clauseql.schema.engine import Engine


@dataclass(frozen=True)
class RenderContext:
    """Immutable context for a single render run.

    Attributes:
        dialect: Engine dialect supplying quote character and keywords.
        check_keywords: Quote only identifiers that are reserved words.
    """

    dialect: EngineDialect
    check_keywords: bool = False

    @classmethod
    def for_engine(
        cls, engine: Engine | str | EngineDialect, check_keywords: bool = False
    ) -> RenderContext:
        return cls(dialect=get_dialect(engine), check_keywords=check_keywords)


@dataclass
class RenderedSQL:
    """The output of rendering a clause.

    Attributes:
        sql: The SQL fragment with ``?`` bind placeholders.
        params: Bind values in placeholder order.
        engine: The engine the fragment was rendered for.
    """

    sql: str
    params: list[Any] = field(default_factory=list)
    engine: Engine = Engine.PGSQL

    def with_params_before(self, params: list[Any] | tuple[Any, ...]) -> list[Any]:
        """Return ``params`` followed by this fragment's bind values.

        Use when the fragment is appended after SQL that already carries
        its own placeholders.
        """
        return [*params, *self.params]
