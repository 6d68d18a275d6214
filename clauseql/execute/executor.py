"""StatementExecutor: runs SQL with binds and query variables on a connection.

Every public helper builds a fresh :class:`~clauseql.execute.request.StatementRequest`
and routes it through one primitive, :meth:`StatementExecutor.run`:

1. substitute query variables (skipped when there are none, unless
   :attr:`ExecutorConfig.parse_query_vars_always` is set);
2. with bind values: prepare the statement and execute it with the binds;
3. without bind values: execute the SQL directly;
4. wrap any driver failure into :class:`QueryExecutionError` carrying the
   final SQL and the binds that were sent.

The helpers only differ in how they shape the cursor's result.  An empty
result falls back to the caller's default; a failure always propagates.

Usage::

    executor = StatementExecutor(open_connection(settings))
    where = Clause().add_condition("status", "IN", [1, 2])
    rows = executor.fetch_all("SELECT * FROM orders", where=where)
    total = executor.count("orders", where="paid = 1")
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, cast

from clauseql.compile.clause import Clause
from clauseql.engines.base import EngineDialect
from clauseql.engines.registry import get_dialect
from clauseql.errors import ClauseQLError, ConfigurationError, QueryExecutionError
from clauseql.execute.coerce import coerce_bool, coerce_float, coerce_int
from clauseql.execute.connection import Connection, column_names, row_values
from clauseql.execute.context import current_connection
from clauseql.execute.request import StatementRequest
from clauseql.schema.engine import Engine
from clauseql.schema.settings import ExecutorConfig, RowStyle
from clauseql.template.query_vars import QueryVarTemplater

_log = logging.getLogger(__name__)

DATABASE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")
TABLE_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z_0-9.]*$")

Row = dict[str, Any] | tuple[Any, ...]
Where = Clause | str | None

_FETCH_BATCH = 100


class StatementExecutor:
    """Executes statements on one connection.

    The executor keeps no per-call state; it is safe to share between
    threads as far as the underlying connection is.

    Args:
        connection: The connection collaborator (see
            :class:`~clauseql.execute.connection.Connection`).
        config: Behaviour switches; defaults to :class:`ExecutorConfig()`.
        templater: Query-variable templater; a default one is created.
    """

    def __init__(
        self,
        connection: Connection,
        config: ExecutorConfig | None = None,
        templater: QueryVarTemplater | None = None,
    ) -> None:
        self._connection = connection
        self._config = config or ExecutorConfig()
        self._templater = templater or QueryVarTemplater()

    @classmethod
    def for_current(cls, config: ExecutorConfig | None = None) -> StatementExecutor:
        """Create an executor on the connection set by ``use_connection``.

        Raises:
            ConfigurationError: If no current connection is set.
        """
        return cls(current_connection(), config)

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def config(self) -> ExecutorConfig:
        return self._config

    @property
    def engine(self) -> Engine:
        return self._connection.engine

    @property
    def dialect(self) -> EngineDialect:
        """The dialect used to render clauses and catalog queries."""
        return get_dialect(self.engine, self._config.ansi_quotes)

    # ------------------------------------------------------------------
    # Core primitive
    # ------------------------------------------------------------------

    def request(
        self,
        sql: str,
        params: Sequence[Any] = (),
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> StatementRequest:
        """Build the request for one call, rendering ``where`` for this engine."""
        return StatementRequest.build(
            sql,
            params,
            query_vars,
            where,
            engine=self.dialect,
            check_keywords=self._config.check_keywords,
        )

    def run(self, request: StatementRequest, message: str = "Query execution fails.") -> tuple[Any, StatementRequest]:
        """Template and execute ``request``.

        Args:
            request: The statement to run.
            message: Context message for a :class:`QueryExecutionError`.

        Returns:
            ``(cursor, final_request)``; ``final_request`` holds the SQL
            after query-variable substitution.

        Raises:
            TemplatingError: If a query variable is rejected or missing.
            QueryExecutionError: If the driver fails.
        """
        request = request.templated(self._templater, self._config.parse_query_vars_always)
        _log.debug(
            "Executing %s statement (%d binds): %s",
            "prepared" if request.prepared else "direct",
            len(request.params),
            request.sql,
        )
        with self._wrapping(request, message):
            if request.prepared:
                statement = self._connection.prepare(request.sql)
                cursor = self._connection.execute_prepared(statement, request.params)
            else:
                cursor = self._connection.execute(request.sql)
        return cursor, request

    @contextmanager
    def _wrapping(self, request: StatementRequest, message: str) -> Iterator[None]:
        try:
            yield
        except ClauseQLError:
            raise
        except Exception as exc:
            _log.warning("%s %s: %s", message, type(exc).__name__, exc)
            raise QueryExecutionError(message, request.sql, request.params) from exc

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------

    def fetch_all(
        self,
        sql: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
        row_style: RowStyle | None = None,
    ) -> list[Row]:
        """Return every result row; ``[]`` when nothing matched."""
        return list(
            self.iterate_all(sql, params, query_vars=query_vars, where=where, row_style=row_style)
        )

    def iterate_all(
        self,
        sql: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
        row_style: RowStyle | None = None,
    ) -> Iterator[Row]:
        """Yield result rows one by one.

        The statement runs on the first ``next()``; the cursor is closed
        when the iterator is exhausted or closed.
        """
        style = row_style or self._config.row_style
        cursor, request = self.run(self.request(sql, params, query_vars, where), "Fetching records fails.")
        try:
            names = column_names(cursor)
            if not names:
                return
            while True:
                with self._wrapping(request, "Fetching records fails."):
                    batch = cursor.fetchmany(_FETCH_BATCH)
                if not batch:
                    break
                for raw in batch:
                    yield _shape(row_values(raw, names), names, style)
        finally:
            _close(cursor)

    def fetch_record(
        self,
        sql: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
        row_style: RowStyle | None = None,
    ) -> Row | None:
        """Return the first result row, or ``None`` when nothing matched.

        A matched row without readable columns comes back as an empty
        ``dict``/``tuple``, never as ``None``.
        """
        style = row_style or self._config.row_style
        cursor, request = self.run(self.request(sql, params, query_vars, where), "Fetching a record fails.")
        try:
            names = column_names(cursor)
            if not names:
                return None
            with self._wrapping(request, "Fetching a record fails."):
                raw = cursor.fetchone()
            if raw is None:
                return None
            return _shape(row_values(raw, names), names, style)
        finally:
            _close(cursor)

    def fetch_column(
        self,
        sql: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> list[Any]:
        """Return the first column of every result row."""
        return list(self.iterate_column(sql, params, query_vars=query_vars, where=where))

    def iterate_column(
        self,
        sql: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> Iterator[Any]:
        """Yield the first column of every result row."""
        for row in self.iterate_all(
            sql, params, query_vars=query_vars, where=where, row_style=RowStyle.SEQUENCE
        ):
            if row:
                yield row[0]

    def fetch_key_value_pairs(
        self,
        sql: str,
        key_column: str,
        value_column: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> dict[Any, Any]:
        """Return ``{row[key_column]: row[value_column]}`` for all rows.

        Rows where either column is missing or NULL are skipped; a later
        row overwrites an earlier one with the same key.
        """
        return dict(
            self.iterate_key_value_pairs(
                sql, key_column, value_column, params, query_vars=query_vars, where=where
            )
        )

    def iterate_key_value_pairs(
        self,
        sql: str,
        key_column: str,
        value_column: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> Iterator[tuple[Any, Any]]:
        """Yield ``(key, value)`` pairs; see :meth:`fetch_key_value_pairs`."""
        for row in self.iterate_all(
            sql, params, query_vars=query_vars, where=where, row_style=RowStyle.MAPPING
        ):
            mapping = cast(dict[str, Any], row)
            key = mapping.get(key_column)
            value = mapping.get(value_column)
            if key is None or value is None:
                continue
            yield key, value

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    def fetch_scalar(
        self,
        sql: str,
        params: Sequence[Any] = (),
        default: Any = None,
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> Any:
        """Return the first column of the first row.

        ``default`` is returned when no row matched or the row has no
        columns.  A NULL value is returned as ``None``.
        """
        row = self.fetch_record(
            sql, params, query_vars=query_vars, where=where, row_style=RowStyle.SEQUENCE
        )
        if not row:
            return default
        return row[0]

    def fetch_bool(
        self,
        sql: str,
        params: Sequence[Any] = (),
        default: bool = False,
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> bool:
        """Return the scalar result as a boolean (see :func:`coerce_bool`)."""
        return coerce_bool(self.fetch_scalar(sql, params, default, query_vars=query_vars, where=where))

    def fetch_int(
        self,
        sql: str,
        params: Sequence[Any] = (),
        default: int = 0,
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> int:
        """Return the scalar result as an integer, ``default`` if not numeric."""
        value = self.fetch_scalar(sql, params, default, query_vars=query_vars, where=where)
        return coerce_int(value, default)

    def fetch_float(
        self,
        sql: str,
        params: Sequence[Any] = (),
        default: float = 0.0,
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> float:
        """Return the scalar result as a float, ``default`` if not numeric."""
        value = self.fetch_scalar(sql, params, default, query_vars=query_vars, where=where)
        return coerce_float(value, default)

    # ------------------------------------------------------------------
    # Statements and catalog checks
    # ------------------------------------------------------------------

    def execute(
        self,
        sql: str,
        params: Sequence[Any] = (),
        *,
        query_vars: Mapping[str, Any] | None = None,
        where: Where = None,
    ) -> int:
        """Run a statement that returns no rows.

        Returns:
            The affected-row count reported by the driver, ``-1`` when the
            driver does not know it.
        """
        cursor, _ = self.run(self.request(sql, params, query_vars, where), "Query execution fails.")
        try:
            rowcount = getattr(cursor, "rowcount", -1)
            return -1 if rowcount is None else int(rowcount)
        finally:
            _close(cursor)

    def count(self, table: str, where: Where = None, params: Sequence[Any] = ()) -> int:
        """Return ``SELECT COUNT(*)`` of ``table``, optionally filtered.

        Args:
            table: Table name (``table`` or ``schema.table``), inserted as is.
            where: A :class:`Clause` or a WHERE expression string.
            params: Binds of a string ``where``; a Clause's binds follow them.

        Raises:
            ConfigurationError: If ``table`` is not a plain table name.
        """
        if not TABLE_NAME_PATTERN.match(table or ""):
            raise ConfigurationError(f"Invalid table name {table!r}.", field="table", value=table)
        return self.fetch_int(f"SELECT COUNT(*) AS cnt FROM {table}", params, where=where)

    def table_exists(self, table: str, database: str | None = None) -> bool:
        """Return whether ``table`` exists.

        ``database`` defaults to the connection's database; when that is
        unknown too, the server's current database is checked.  Invalid
        table names are reported as not existing.
        """
        if not TABLE_NAME_PATTERN.match(table or ""):
            return False
        database = database or self._connection.database_name
        sql, params = self.dialect.table_exists_query(table, database)
        return self.fetch_bool(sql, params)

    def database_exists(self, name: str) -> bool:
        """Return whether the database ``name`` exists on the server.

        Always ``False`` on SQLite and for names that are not plain
        identifiers.
        """
        if not DATABASE_NAME_PATTERN.match(name or ""):
            return False
        query = self.dialect.database_exists_query(name)
        if query is None:
            return False
        sql, params = query
        return self.fetch_bool(sql, params)


def _shape(values: tuple[Any, ...], names: list[str], style: RowStyle) -> Row:
    if style is RowStyle.SEQUENCE:
        return values
    return dict(zip(names, values))


def _close(cursor: Any) -> None:
    close = getattr(cursor, "close", None)
    if close is not None:
        close()
