"""Typed column-reference class.

Owns the column-name syntax check and the per-engine quoting of each
dot-separated part, so conditions and joins never split strings
themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from clauseql.errors import ConfigurationError

if TYPE_CHECKING:
    from clauseql.engines.base import EngineDialect

#: ``column``, ``table.column``, each part optionally wrapped in ``"``.
COLUMN_NAME_PATTERN = re.compile(
    r'^"?[A-Za-z_][A-Za-z0-9_]*"?(\."?[A-Za-z_][A-Za-z0-9_]*"?)?$'
)


@dataclass(frozen=True)
class ColumnReference:
    """A parsed ``table.column`` or bare ``column`` reference.

    Attributes:
        table: Table qualifier, or ``None`` for unqualified references.
        column: Column name.
    """

    table: str | None
    column: str

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, ref: str) -> ColumnReference:
        """Validate and parse a ``"table.column"`` or bare ``"column"`` string.

        Args:
            ref: The raw column name given by the caller.

        Returns:
            A :class:`ColumnReference` with quotes stripped from each part.

        Raises:
            ConfigurationError: If ``ref`` is empty or not a valid name.
        """
        if not ref:
            raise ConfigurationError(
                "A where column name can not be empty!", field="column", value=ref
            )
        if not COLUMN_NAME_PATTERN.match(ref):
            if "`" in ref:
                raise ConfigurationError(
                    "Invalid where column name format! Backtick quoting is not "
                    "accepted; pass the bare name and let the engine quote it.",
                    field="column",
                    value=ref,
                )
            raise ConfigurationError(
                f"Invalid where column name format: {ref!r}.", field="column", value=ref
            )
        if "." in ref:
            table, column = ref.split(".", 1)
            return cls(table=table.strip('"'), column=column.strip('"'))
        return cls(table=None, column=ref.strip('"'))

    @property
    def parts(self) -> list[str]:
        if self.table is None:
            return [self.column]
        return [self.table, self.column]

    def __str__(self) -> str:
        return ".".join(self.parts)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def quoted(self, dialect: EngineDialect, check_keywords: bool = False) -> str:
        """Return the reference with each part quoted for ``dialect``.

        Args:
            dialect: The engine dialect supplying quote char and keywords.
            check_keywords: When ``True`` only parts that collide with a
                reserved word are quoted; otherwise every part is quoted.
        """
        rendered = []
        for part in self.parts:
            if check_keywords and not dialect.is_keyword(part):
                rendered.append(part)
            else:
                rendered.append(dialect.quote_identifier(part))
        return ".".join(rendered)
