"""PostgreSQL engine dialect."""

from __future__ import annotations

from clauseql.engines.base import CatalogQuery, EngineDialect
from clauseql.engines.keywords import POSTGRES_KEYWORDS
from clauseql.schema.engine import Engine


class PostgresDialect(EngineDialect):
    """PostgreSQL metadata.

    Identifiers use ANSI double quotes.  The default driver is ``psycopg``
    whose paramstyle is ``format`` (``%s``).
    """

    @property
    def engine(self) -> Engine:
        return Engine.PGSQL

    @property
    def quote_char(self) -> str:
        return '"'

    @property
    def keywords(self) -> frozenset[str]:
        return POSTGRES_KEYWORDS

    @property
    def default_port(self) -> int:
        return 5432

    @property
    def default_paramstyle(self) -> str:
        return "format"

    def database_exists_query(self, name: str) -> CatalogQuery | None:
        return "SELECT EXISTS (SELECT 1 FROM pg_database WHERE datname = ?)", [name]

    def table_exists_query(self, table: str, database: str | None) -> CatalogQuery:
        sql = "SELECT EXISTS (SELECT 1 FROM information_schema.tables WHERE table_name = ?"
        if database is None:
            return f"{sql} AND table_catalog = current_database())", [table]
        return f"{sql} AND table_catalog = ?)", [table, database]
