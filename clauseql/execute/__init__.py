"""clauseQL statement execution: connections, requests and the executor."""
from clauseql.execute.coerce import coerce_bool, coerce_float, coerce_int
from clauseql.execute.connection import (
    Connection,
    DBAPIConnection,
    PreparedStatement,
    open_connection,
    translate_placeholders,
)
from clauseql.execute.context import current_connection, use_connection
from clauseql.execute.executor import StatementExecutor
from clauseql.execute.request import StatementRequest

__all__ = [
    "Connection",
    "DBAPIConnection",
    "PreparedStatement",
    "StatementExecutor",
    "StatementRequest",
    "coerce_bool",
    "coerce_float",
    "coerce_int",
    "current_connection",
    "open_connection",
    "translate_placeholders",
    "use_connection",
]
