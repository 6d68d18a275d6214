"""clauseQL – dialect-aware WHERE clauses and query execution.

Bind the values. Quote the names.

Public API
----------
``Clause`` / ``Condition``
    Compose a WHERE clause from predicates; render it for PostgreSQL, MySQL
    or SQLite with ``?`` placeholders and an ordered list of bind values.

``QueryVarTemplater`` / ``substitute``
    Replace ``{$Name}`` / ``{$Name=Default}`` query variables in SQL text.

``StatementExecutor``
    Run SQL (plus an optional clause) on a connection and shape the result:
    rows, columns, key/value pairs, scalars, counts, existence checks.

``connect``
    Open a connection from ``ConnectionSettings`` and wrap it in an executor.

Re-exported types
-----------------
``Engine``, ``ColumnReference``, ``Join``, ``ConnectionSettings``,
``ExecutorConfig``, ``DBAPIConnection``, and all error classes.

Extensibility
-------------
Engine dialects are looked up in ``DialectRegistry``; a replacement dialect
for one of the supported engines can be registered via::

    from clauseql.engines.registry import DialectRegistry

    @DialectRegistry.register("mysql")
    class MariaDBDialect(MySQLDialect):
        ...
"""

from __future__ import annotations

from clauseql.compile.clause import Clause
from clauseql.compile.condition import Condition
from clauseql.compile.context import RenderContext, RenderedSQL
from clauseql.compile.join import Join, JoinType
from clauseql.engines import (
    DialectRegistry,
    EngineDialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    get_dialect,
    is_keyword,
    is_known_engine,
    quote_char,
)
from clauseql.errors import (
    ClauseQLError,
    ConfigurationError,
    DatabaseConnectionError,
    QueryExecutionError,
    TemplatingError,
)
from clauseql.execute.coerce import coerce_bool, coerce_float, coerce_int
from clauseql.execute.connection import (
    Connection,
    DBAPIConnection,
    PreparedStatement,
    open_connection,
)
from clauseql.execute.context import current_connection, use_connection
from clauseql.execute.executor import StatementExecutor
from clauseql.execute.request import StatementRequest
from clauseql.schema.column_reference import ColumnReference
from clauseql.schema.engine import Engine
from clauseql.schema.settings import ConnectionSettings, ExecutorConfig, RowStyle
from clauseql.schema.values import IntSequence, ScalarValue
from clauseql.template.query_vars import Placeholder, QueryVarTemplater, substitute

__all__ = [
    # Entry points
    "connect",
    "substitute",
    # Composition
    "Clause",
    "Condition",
    "Join",
    "JoinType",
    "ColumnReference",
    "RenderContext",
    "RenderedSQL",
    "ScalarValue",
    "IntSequence",
    # Engines
    "Engine",
    "EngineDialect",
    "DialectRegistry",
    "PostgresDialect",
    "MySQLDialect",
    "SQLiteDialect",
    "get_dialect",
    "quote_char",
    "is_keyword",
    "is_known_engine",
    # Templating
    "QueryVarTemplater",
    "Placeholder",
    # Execution
    "StatementExecutor",
    "StatementRequest",
    "Connection",
    "DBAPIConnection",
    "PreparedStatement",
    "open_connection",
    "use_connection",
    "current_connection",
    "coerce_bool",
    "coerce_int",
    "coerce_float",
    # Configuration
    "ConnectionSettings",
    "ExecutorConfig",
    "RowStyle",
    # Errors
    "ClauseQLError",
    "ConfigurationError",
    "TemplatingError",
    "QueryExecutionError",
    "DatabaseConnectionError",
]


def connect(
    settings: ConnectionSettings,
    config: ExecutorConfig | None = None,
) -> StatementExecutor:
    """Open a connection and return an executor bound to it.

    The caller owns the connection; close it via
    ``executor.connection.close()`` (or use ``open_connection`` as a context
    manager and build the executor yourself)::

        executor = clauseql.connect(ConnectionSettings(engine="sqlite", database="app.db"))
        adults = executor.fetch_all(
            "SELECT name FROM users",
            where=Clause().add_condition("age", ">", 17),
        )

    Args:
        settings: Where and how to connect.
        config: Executor switches; defaults to ``ExecutorConfig()``.

    Returns:
        A ``StatementExecutor`` on the new connection.

    Raises:
        DatabaseConnectionError: If the connection can not be opened.
    """
    return StatementExecutor(open_connection(settings), config)
