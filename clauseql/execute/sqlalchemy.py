"""Bridge from SQLAlchemy to the clauseQL connection protocol.

Requires the ``sqlalchemy`` extra.  The adapter runs statements on the raw
DB-API connection underneath SQLAlchemy, so SQLAlchemy's own compilation
is bypassed::

    from sqlalchemy import create_engine
    from clauseql import StatementExecutor
    from clauseql.execute.sqlalchemy import connection_from_sqlalchemy

    sa_engine = create_engine("sqlite:///app.db")
    executor = StatementExecutor(connection_from_sqlalchemy(sa_engine))
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from clauseql.errors import ConfigurationError
from clauseql.execute.connection import DBAPIConnection
from clauseql.schema.engine import Engine

if TYPE_CHECKING:
    import sqlalchemy

_log = logging.getLogger(__name__)


def connection_from_sqlalchemy(
    bind: sqlalchemy.engine.Engine | sqlalchemy.engine.Connection,
) -> DBAPIConnection:
    """Adapt a SQLAlchemy ``Engine`` or ``Connection``.

    For an ``Engine`` a new pooled raw connection is checked out; closing
    the returned adapter returns it to the pool.  For a ``Connection`` its
    current DB-API connection is shared and must stay open while the
    adapter is used.

    Raises:
        ConfigurationError: If the SQLAlchemy dialect is not one of
            PostgreSQL, MySQL/MariaDB or SQLite.
    """
    from sqlalchemy.engine import Connection as SAConnection

    sa_engine = bind.engine if isinstance(bind, SAConnection) else bind
    dialect = sa_engine.dialect
    try:
        engine = Engine.parse(dialect.name)
    except ConfigurationError:
        raise ConfigurationError(
            f"SQLAlchemy dialect '{dialect.name}' is not supported.",
            field="dialect",
            value=dialect.name,
        ) from None

    raw: Any = bind.connection if isinstance(bind, SAConnection) else bind.raw_connection()

    # Statements go to the DB-API driver directly, so its own paramstyle counts.
    paramstyle = getattr(dialect.dbapi, "paramstyle", None) or dialect.paramstyle
    _log.debug("Adapting SQLAlchemy %s connection (paramstyle=%s)", dialect.name, paramstyle)
    return DBAPIConnection(raw, engine, sa_engine.url.database, paramstyle)
