"""Pydantic models for connection and executor configuration.

``ConnectionSettings`` describes how to reach a database; it is consumed by
:func:`clauseql.execute.connection.open_connection`.  ``ExecutorConfig``
tunes a :class:`~clauseql.execute.executor.StatementExecutor`::

    from clauseql import ConnectionSettings, ExecutorConfig, StatementExecutor, open_connection

    settings = ConnectionSettings(engine="postgres", host="db", database="app",
                                  username="svc", password="secret")
    executor = StatementExecutor(
        open_connection(settings),
        ExecutorConfig(parse_query_vars_always=True),
    )
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from clauseql.errors import ConfigurationError
from clauseql.schema.engine import Engine


class RowStyle(str, Enum):
    """Shape of the rows returned by the fetch helpers."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"


class ExecutorConfig(BaseModel):
    """Per-executor behaviour switches.

    Attributes:
        parse_query_vars_always: Run the query-variable templater on every
            statement, even when no variables are passed, so placeholder
            defaults are applied.  Costs a regex scan per statement.
        check_keywords: When a :class:`~clauseql.compile.clause.Clause` is
            rendered by the executor, quote only identifiers that collide
            with a reserved word.
        row_style: Default row shape for the fetch helpers.
        ansi_quotes: Quote MySQL identifiers with ``"`` for servers running
            with the ``ANSI_QUOTES`` SQL mode.  Ignored by other engines.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    parse_query_vars_always: bool = False
    check_keywords: bool = False
    row_style: RowStyle = RowStyle.MAPPING
    ansi_quotes: bool = False


class ConnectionSettings(BaseModel):
    """Connection parameters for one database.

    Attributes:
        engine: Target engine; aliases such as ``"postgres"`` are accepted.
        host: Server host name or IP address (not used by SQLite).
        database: Database name, or the file path for SQLite.
        username: Login user name.
        password: Login password.
        charset: Client/connection charset.
        port: Server port; ``None`` means the engine default.
    """

    model_config = ConfigDict(extra="forbid")

    engine: Engine
    host: str | None = None
    database: str | None = None
    username: str | None = None
    password: str | None = None
    charset: str = "UTF8"
    port: int | None = None

    @field_validator("engine", mode="before")
    @classmethod
    def _parse_engine(cls, value: Any) -> Engine:
        return Engine.parse(value)

    @field_validator("host", "database", "username", "password", mode="before")
    @classmethod
    def _empty_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and value == "":
            return None
        return value

    @model_validator(mode="after")
    def _require_host(self) -> ConnectionSettings:
        if self.engine is not Engine.SQLITE and self.host is None:
            raise ConfigurationError(
                f"Can not connect to a '{self.engine.value}' database without a host.",
                field="host",
                value=self.host,
            )
        return self

    @property
    def effective_port(self) -> int:
        """Return the configured port or the engine's default port."""
        from clauseql.engines.registry import get_dialect

        if self.engine is Engine.SQLITE:
            return 0
        return self.port if self.port else get_dialect(self.engine).default_port

    @property
    def database_path(self) -> str:
        """Return the SQLite database file, ``:memory:`` when unset."""
        return self.database or ":memory:"
