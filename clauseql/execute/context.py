"""The "current connection" for code that does not pass one explicitly.

The connection is set by the composition root for a bounded scope and is
local to the running thread or asyncio task::

    with use_connection(open_connection(settings)) as conn:
        StatementExecutor.for_current().fetch_all("SELECT 1")
"""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TypeVar

from clauseql.errors import ConfigurationError
from clauseql.execute.connection import Connection

_current: ContextVar[Connection | None] = ContextVar("clauseql_connection", default=None)

C = TypeVar("C", bound=Connection)


@contextmanager
def use_connection(connection: C) -> Iterator[C]:
    """Make ``connection`` the current connection inside the ``with`` block.

    The previous connection (if any) is restored on exit.  The connection
    itself is not closed.
    """
    token = _current.set(connection)
    try:
        yield connection
    finally:
        _current.reset(token)


def current_connection() -> Connection:
    """Return the current connection.

    Raises:
        ConfigurationError: If no :func:`use_connection` block is active.
    """
    connection = _current.get()
    if connection is None:
        raise ConfigurationError(
            "No current database connection; wrap the call in use_connection(...).",
            field="connection",
        )
    return connection
