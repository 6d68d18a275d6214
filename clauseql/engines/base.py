"""Engine dialect abstraction: the EngineDialect ABC.

The Template Method pattern (GoF) is used:
- ``EngineDialect`` implements the shared behaviour (keyword lookup,
  identifier quoting) on top of a small set of abstract hooks.
- ``PostgresDialect``, ``MySQLDialect`` and ``SQLiteDialect`` supply the
  engine-specific steps (quote character, reserved words, catalog queries).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from clauseql.schema.engine import Engine

#: A SQL string plus its positional bind values.
CatalogQuery = tuple[str, list[Any]]


class EngineDialect(ABC):
    """Abstract base for per-engine metadata.

    Subclasses are stateless apart from construction options, so one
    instance can be shared by every renderer and executor.
    """

    @property
    @abstractmethod
    def engine(self) -> Engine:
        """Return the :class:`~clauseql.schema.engine.Engine` this dialect serves."""

    @property
    @abstractmethod
    def quote_char(self) -> str:
        """Return the identifier quote character."""

    @property
    @abstractmethod
    def keywords(self) -> frozenset[str]:
        """Return the upper-cased reserved words of the engine."""

    @property
    @abstractmethod
    def default_port(self) -> int:
        """Return the server's default TCP port (0 when not networked)."""

    @property
    @abstractmethod
    def default_paramstyle(self) -> str:
        """Return the PEP 249 paramstyle of the engine's default driver."""

    @abstractmethod
    def database_exists_query(self, name: str) -> CatalogQuery | None:
        """Return the query answering "does database ``name`` exist?".

        ``None`` means the engine has no notion of named databases and the
        answer is always ``False``.
        """

    @abstractmethod
    def table_exists_query(self, table: str, database: str | None) -> CatalogQuery:
        """Return the query counting tables named ``table`` in ``database``.

        Args:
            table: Table name.
            database: Database/catalog name; ``None`` means the current one.
        """

    def is_keyword(self, token: str) -> bool:
        """Case-insensitive reserved-word membership test."""
        return token.strip().strip(self.quote_char + '"').upper() in self.keywords

    def quote_identifier(self, name: str) -> str:
        """Return ``name`` wrapped in the engine's quote character.

        Surrounding whitespace and any existing quote characters are
        stripped first, so already-quoted input is not quoted twice.
        """
        bare = name.strip(" \t\r\n").strip(self.quote_char + '"')
        escaped = bare.replace(self.quote_char, self.quote_char * 2)
        return f"{self.quote_char}{escaped}{self.quote_char}"
