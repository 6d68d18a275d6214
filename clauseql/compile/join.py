"""A single ``JOIN … ON …`` fragment."""
from __future__ import annotations

from enum import Enum

from clauseql.compile.context import RenderContext
from clauseql.engines.base import EngineDialect
from clauseql.errors import ConfigurationError
from clauseql.schema.column_reference import ColumnReference
from clauseql.schema.engine import Engine


class JoinType(str, Enum):
    """The join kinds; ``NONE`` renders a bare ``JOIN``."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"
    INNER = "INNER"
    OUTER = "OUTER"
    NONE = ""


class Join:
    """Joins a foreign table on ``foreign_column = this_column``.

    Both columns are usually qualified (``table.column``).  Identifiers are
    validated like condition columns and quoted per engine.

    Args:
        join_type: The :class:`JoinType` (or its name).
        foreign_table: The table being joined in.
        foreign_column: Join column on the foreign table.
        this_column: Join column on the current table.
    """

    def __init__(
        self,
        join_type: JoinType | str,
        foreign_table: str,
        foreign_column: str,
        this_column: str,
    ) -> None:
        self.join_type = _parse_join_type(join_type)
        self.foreign_table = ColumnReference.parse(foreign_table)
        self.foreign_column = ColumnReference.parse(foreign_column)
        self.this_column = ColumnReference.parse(this_column)

    def render(self, engine: Engine | str | EngineDialect, check_keywords: bool = False) -> str:
        ctx = RenderContext.for_engine(engine, check_keywords)
        # A table reference parses like a column: "schema.table" or "table".
        table = self.foreign_table.quoted(ctx.dialect, ctx.check_keywords)
        left = self.foreign_column.quoted(ctx.dialect, ctx.check_keywords)
        right = self.this_column.quoted(ctx.dialect, ctx.check_keywords)
        keyword = f"{self.join_type.value} JOIN" if self.join_type.value else "JOIN"
        return f" {keyword} {table} ON {left} = {right}"

    def __repr__(self) -> str:
        return (
            f"Join({self.join_type.value!r}, {str(self.foreign_table)!r}, "
            f"{str(self.foreign_column)!r}, {str(self.this_column)!r})"
        )


def _parse_join_type(join_type: JoinType | str) -> JoinType:
    if isinstance(join_type, JoinType):
        return join_type
    try:
        return JoinType(join_type.strip().upper())
    except ValueError:
        raise ConfigurationError(
            f"Invalid join type {join_type!r}.", field="join_type", value=join_type
        ) from None
