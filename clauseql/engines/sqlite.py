"""SQLite dialect."""
from __future__ import annotations

from clauseql.engines.base import CatalogQuery, EngineDialect
from clauseql.engines.keywords import SQLITE_KEYWORDS
from clauseql.schema.engine import Engine


class SQLiteDialect(EngineDialect):
    """SQLite metadata.

    Parameter style: ``qmark`` – Python's built-in ``sqlite3`` accepts the
    ``?`` placeholders rendered by conditions without translation.

    Note: SQLite has no named databases; ``database_exists`` is always False.
    """

    @property
    def engine(self) -> Engine:
        return Engine.SQLITE

    @property
    def quote_char(self) -> str:
        return '"'

    @property
    def keywords(self) -> frozenset[str]:
        return SQLITE_KEYWORDS

    @property
    def default_port(self) -> int:
        return 0

    @property
    def default_paramstyle(self) -> str:
        return "qmark"

    def database_exists_query(self, name: str) -> CatalogQuery | None:
        return None

    def table_exists_query(self, table: str, database: str | None) -> CatalogQuery:
        return "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = ?", [table]
