"""clauseQL engine registry: per-engine quoting, keywords and catalog queries."""
from clauseql.engines.base import EngineDialect
from clauseql.engines.mysql import MySQLDialect
from clauseql.engines.postgres import PostgresDialect
from clauseql.engines.registry import (
    DialectRegistry,
    get_dialect,
    is_keyword,
    is_known_engine,
    quote_char,
)
from clauseql.engines.sqlite import SQLiteDialect

DialectRegistry.register_class("pgsql", PostgresDialect)
DialectRegistry.register_class("mysql", MySQLDialect)
DialectRegistry.register_class("sqlite", SQLiteDialect)

__all__ = [
    "EngineDialect",
    "DialectRegistry",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "get_dialect",
    "is_keyword",
    "is_known_engine",
    "quote_char",
]
