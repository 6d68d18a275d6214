"""Connection collaborator: protocol, DB-API adapter and connection opening.

The executor talks to a database only through the small :class:`Connection`
protocol.  :class:`DBAPIConnection` implements it on top of any PEP 249
connection (sqlite3, psycopg, PyMySQL, or a SQLAlchemy raw connection) and
rewrites the library's ``?`` placeholders into the driver's paramstyle::

    with open_connection(ConnectionSettings(engine="sqlite")) as conn:
        stmt = conn.prepare("SELECT * FROM t WHERE id = ?")
        cursor = conn.execute_prepared(stmt, (1,))

Connection lifecycle, pooling and transactions stay with the caller.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Protocol

from clauseql.engines.registry import get_dialect
from clauseql.errors import ConfigurationError, DatabaseConnectionError
from clauseql.schema.engine import Engine
from clauseql.schema.settings import ConnectionSettings

_log = logging.getLogger(__name__)

#: Paramstyles ``?`` placeholders can be rewritten to.
SUPPORTED_PARAMSTYLES = frozenset({"qmark", "format", "pyformat", "numeric"})

_CHARSET_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True)
class PreparedStatement:
    """A statement ready for :meth:`DBAPIConnection.execute_prepared`.

    Attributes:
        sql: The statement as written, with ``?`` placeholders.
        driver_sql: The statement in the driver's paramstyle.
        placeholders: Number of ``?`` placeholders found.
    """

    sql: str
    driver_sql: str
    placeholders: int


class Connection(Protocol):
    """What the statement executor needs from a database connection."""

    @property
    def engine(self) -> Engine: ...

    @property
    def database_name(self) -> str | None: ...

    def prepare(self, sql: str) -> Any: ...

    def execute(self, sql: str) -> Any: ...

    def execute_prepared(self, statement: Any, params: Sequence[Any]) -> Any: ...


class DBAPIConnection:
    """Adapts a PEP 249 connection to the :class:`Connection` protocol.

    Args:
        raw: The driver connection.
        engine: The engine behind ``raw``.
        database_name: Name of the connected database, if known.
        paramstyle: The driver's paramstyle; defaults to the engine's usual
            driver (``format`` for PostgreSQL/MySQL, ``qmark`` for SQLite).

    Raises:
        ConfigurationError: If ``paramstyle`` is not supported.
    """

    def __init__(
        self,
        raw: Any,
        engine: Engine | str,
        database_name: str | None = None,
        paramstyle: str | None = None,
    ) -> None:
        self._raw = raw
        self._engine = Engine.parse(engine)
        self._database_name = database_name or None
        style = paramstyle or get_dialect(self._engine).default_paramstyle
        if style not in SUPPORTED_PARAMSTYLES:
            raise ConfigurationError(
                f"Unsupported driver paramstyle {style!r}; "
                f"supported: {sorted(SUPPORTED_PARAMSTYLES)}.",
                field="paramstyle",
                value=style,
            )
        self._paramstyle = style

    @property
    def raw(self) -> Any:
        """The wrapped driver connection."""
        return self._raw

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def database_name(self) -> str | None:
        return self._database_name

    @property
    def paramstyle(self) -> str:
        return self._paramstyle

    def prepare(self, sql: str) -> PreparedStatement:
        """Translate ``sql`` into the driver's paramstyle."""
        driver_sql, count = translate_placeholders(
            sql, self._paramstyle, backslash_escapes=self._engine is Engine.MYSQL
        )
        return PreparedStatement(sql=sql, driver_sql=driver_sql, placeholders=count)

    def execute(self, sql: str) -> Any:
        """Run ``sql`` without bind values and return the cursor."""
        cursor = self._raw.cursor()
        try:
            cursor.execute(sql)
        except Exception:
            cursor.close()
            raise
        return cursor

    def execute_prepared(self, statement: PreparedStatement, params: Sequence[Any]) -> Any:
        """Run a prepared statement with ``params`` and return the cursor."""
        cursor = self._raw.cursor()
        try:
            cursor.execute(statement.driver_sql, tuple(params))
        except Exception:
            cursor.close()
            raise
        return cursor

    def set_charset(self, charset: str) -> None:
        """Set the client charset of the session.

        SQLite connections are always UTF-8 and ignore the call.

        Raises:
            ConfigurationError: If ``charset`` is not a plain charset name.
            DatabaseConnectionError: If the server rejects the charset.
        """
        if not _CHARSET_PATTERN.match(charset or ""):
            raise ConfigurationError(
                f"Invalid charset name {charset!r}.", field="charset", value=charset
            )
        if self._engine is Engine.SQLITE:
            return
        if self._engine is Engine.PGSQL:
            sql = f"SET client_encoding TO '{charset}'"
        else:
            sql = f"SET NAMES {_mysql_charset(charset)}"
        try:
            self.execute(sql).close()
        except Exception as exc:
            raise DatabaseConnectionError(
                f"Could not set the client charset to '{charset}': {exc}",
                engine=self._engine.value,
            ) from exc

    def commit(self) -> None:
        self._raw.commit()

    def rollback(self) -> None:
        self._raw.rollback()

    def close(self) -> None:
        _log.debug("Closing %s connection to %r", self._engine.value, self._database_name)
        self._raw.close()

    def __enter__(self) -> DBAPIConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"DBAPIConnection(engine={self._engine.value!r}, "
            f"database_name={self._database_name!r}, paramstyle={self._paramstyle!r})"
        )


# ----------------------------------------------------------------------
# Placeholder translation
# ----------------------------------------------------------------------


def translate_placeholders(
    sql: str, paramstyle: str, backslash_escapes: bool = False
) -> tuple[str, int]:
    """Rewrite ``?`` placeholders of ``sql`` into ``paramstyle``.

    Question marks inside quoted literals, quoted identifiers, dollar
    quotes and comments are left alone.  For ``format``/``pyformat`` every
    literal ``%`` is doubled, since those drivers interpolate the whole
    statement text.

    A backslash escapes the next character inside '...' only when
    ``backslash_escapes`` is set (MySQL) or the literal carries the
    PostgreSQL ``E`` prefix.

    Args:
        sql: The statement with ``?`` placeholders.
        paramstyle: Target DB-API paramstyle.
        backslash_escapes: Whether plain '...' literals use backslash escapes.

    Returns:
        ``(translated_sql, placeholder_count)``.

    Raises:
        ConfigurationError: If ``paramstyle`` is not supported.
    """
    if paramstyle not in SUPPORTED_PARAMSTYLES:
        raise ConfigurationError(
            f"Unsupported driver paramstyle {paramstyle!r}.", field="paramstyle", value=paramstyle
        )
    percent = paramstyle in ("format", "pyformat")
    out: list[str] = []
    count = 0
    i = 0
    length = len(sql)

    def emit(text: str) -> None:
        out.append(text.replace("%", "%%") if percent else text)

    while i < length:
        ch = sql[i]

        if ch in ("'", '"', "`"):
            quote = ch
            start = i
            escapes = quote == "'" and (backslash_escapes or _is_escape_string(sql, i))
            i += 1
            while i < length:
                c = sql[i]
                if c == quote:
                    if i + 1 < length and sql[i + 1] == quote:
                        i += 2
                        continue
                    i += 1
                    break
                if c == "\\" and escapes and i + 1 < length:
                    i += 2
                    continue
                i += 1
            emit(sql[start:i])
            continue

        if ch == "$" and i + 1 < length and sql[i + 1] == "$":
            end = sql.find("$$", i + 2)
            end = length if end == -1 else end + 2
            emit(sql[i:end])
            i = end
            continue

        if ch == "-" and i + 1 < length and sql[i + 1] == "-":
            end = sql.find("\n", i)
            end = length if end == -1 else end + 1
            emit(sql[i:end])
            i = end
            continue

        if ch == "/" and i + 1 < length and sql[i + 1] == "*":
            end = sql.find("*/", i + 2)
            end = length if end == -1 else end + 2
            emit(sql[i:end])
            i = end
            continue

        if ch == "?":
            count += 1
            if paramstyle == "qmark":
                out.append("?")
            elif paramstyle == "numeric":
                out.append(f":{count}")
            else:
                out.append("%s")
            i += 1
            continue

        emit(ch)
        i += 1

    return "".join(out), count


def _is_escape_string(sql: str, quote_at: int) -> bool:
    """Whether the quote at ``quote_at`` opens a PostgreSQL ``E'...'`` literal."""
    if quote_at == 0 or sql[quote_at - 1] not in "Ee":
        return False
    return quote_at == 1 or not (sql[quote_at - 2].isalnum() or sql[quote_at - 2] in "_$")


# ----------------------------------------------------------------------
# Rows
# ----------------------------------------------------------------------


def column_names(cursor: Any) -> list[str]:
    """Return the result column names of ``cursor`` (empty for no result set)."""
    desc = cursor.description
    if not desc:
        return []
    return [d[0] for d in desc]


def row_values(row: Any, names: Sequence[str]) -> tuple[Any, ...]:
    """Return the values of ``row`` in column order.

    Works for plain tuples, ``sqlite3.Row`` and dict-style cursor rows.
    """
    if isinstance(row, Mapping):
        return tuple(row.get(name) for name in names)
    return tuple(row)


# ----------------------------------------------------------------------
# Opening connections
# ----------------------------------------------------------------------


def open_connection(settings: ConnectionSettings) -> DBAPIConnection:
    """Open a driver connection described by ``settings``.

    Drivers are imported on first use: ``sqlite3`` for SQLite, ``psycopg``
    for PostgreSQL (``clauseql[postgres]``) and ``pymysql`` for MySQL
    (``clauseql[mysql]``).

    Raises:
        DatabaseConnectionError: If the driver is missing, the connection
            can not be opened or the charset can not be applied.
    """
    engine = settings.engine
    password = settings.password if settings.password is not None else ""
    _log.info(
        "Opening %s connection to %r on %s",
        engine.value,
        settings.database,
        settings.host or settings.database_path,
    )

    if engine is Engine.SQLITE:
        import sqlite3

        try:
            raw = sqlite3.connect(settings.database_path)
        except sqlite3.Error as exc:
            raise DatabaseConnectionError(
                f"Could not open SQLite database '{settings.database_path}': {exc}",
                engine=engine.value,
            ) from exc
        return DBAPIConnection(raw, engine, settings.database, sqlite3.paramstyle)

    if engine is Engine.PGSQL:
        psycopg = _import_driver("psycopg", "postgres", engine)
        try:
            raw = psycopg.connect(
                host=settings.host,
                port=settings.effective_port,
                dbname=settings.database,
                user=settings.username,
                password=password,
            )
        except psycopg.Error as exc:
            raise DatabaseConnectionError(
                f"Could not connect to PostgreSQL on '{settings.host}': {exc}",
                engine=engine.value,
            ) from exc
        conn = DBAPIConnection(raw, engine, settings.database, psycopg.paramstyle)
        try:
            conn.set_charset(settings.charset)
        except Exception:
            conn.close()
            raise
        return conn

    pymysql = _import_driver("pymysql", "mysql", engine)
    try:
        raw = pymysql.connect(
            host=settings.host,
            port=settings.effective_port,
            database=settings.database,
            user=settings.username,
            password=password,
            charset=_mysql_charset(settings.charset),
        )
    except pymysql.MySQLError as exc:
        raise DatabaseConnectionError(
            f"Could not connect to MySQL on '{settings.host}': {exc}",
            engine=engine.value,
        ) from exc
    return DBAPIConnection(raw, engine, settings.database, pymysql.paramstyle)


def _import_driver(module: str, extra: str, engine: Engine) -> Any:
    import importlib

    try:
        return importlib.import_module(module)
    except ImportError as exc:
        raise DatabaseConnectionError(
            f"The '{module}' driver is required for {engine.value} connections; "
            f"install clauseql[{extra}].",
            engine=engine.value,
        ) from exc


def _mysql_charset(charset: str) -> str:
    # MySQL's "utf8" is the 3-byte variant.
    normalized = charset.lower().replace("-", "")
    return "utf8mb4" if normalized == "utf8" else normalized
