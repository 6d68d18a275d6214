"""MySQL dialect."""

from __future__ import annotations

from clauseql.engines.base import CatalogQuery, EngineDialect
from clauseql.engines.keywords import MYSQL_KEYWORDS
from clauseql.schema.engine import Engine


class MySQLDialect(EngineDialect):
    """MySQL / MariaDB metadata.

    Identifiers are quoted with backticks (`` ` ``) rather than
    double-quotes.  Servers running with ``sql_mode=ANSI_QUOTES`` accept
    ANSI quoting instead; pass ``ansi_quotes=True`` for those.

    Note: the default driver is ``PyMySQL``, paramstyle ``format``.

    Args:
        ansi_quotes: Quote identifiers with ``"`` instead of a backtick.
    """

    def __init__(self, ansi_quotes: bool = False) -> None:
        self._ansi_quotes = ansi_quotes

    @property
    def engine(self) -> Engine:
        return Engine.MYSQL

    @property
    def quote_char(self) -> str:
        return '"' if self._ansi_quotes else "`"

    @property
    def keywords(self) -> frozenset[str]:
        return MYSQL_KEYWORDS

    @property
    def default_port(self) -> int:
        return 3306

    @property
    def default_paramstyle(self) -> str:
        return "format"

    def database_exists_query(self, name: str) -> CatalogQuery | None:
        return (
            "SELECT COUNT(*) FROM information_schema.SCHEMATA WHERE SCHEMA_NAME = ?",
            [name],
        )

    def table_exists_query(self, table: str, database: str | None) -> CatalogQuery:
        sql = "SELECT COUNT(*) FROM information_schema.TABLES WHERE TABLE_NAME = ?"
        if database is None:
            return f"{sql} AND TABLE_SCHEMA = DATABASE()", [table]
        return f"{sql} AND TABLE_SCHEMA = ?", [table, database]
