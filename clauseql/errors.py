"""Custom exception hierarchy for clauseQL.

All public errors inherit from ClauseQLError so callers can catch the base
class for any clauseQL-specific failure.  The concrete kinds are kept apart
so that programmer errors (``ConfigurationError``, ``TemplatingError``) and
environmental failures (``QueryExecutionError``, ``DatabaseConnectionError``)
can be handled with different retry and logging policies.
"""
from __future__ import annotations

import pprint
import textwrap
from collections.abc import Sequence
from typing import Any


class ClauseQLError(Exception):
    """Base exception for all clauseQL errors."""


class ConfigurationError(ClauseQLError):
    """Raised when a builder, setter or setting receives an invalid value.

    Detected at construction time, before any SQL is produced, so the
    developer gets a clear message instead of a broken statement later.

    Args:
        message: Human-readable description.
        field: Name of the property/argument that got the bad value.
        value: The rejected value.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class TemplatingError(ClauseQLError):
    """Raised when a ``{$Name}`` query variable cannot be substituted.

    Args:
        message: Human-readable description.
        variable: Name of the offending query variable.
        sql: The SQL text that was being templated.
    """

    def __init__(self, message: str, variable: str, sql: str | None = None) -> None:
        super().__init__(message)
        self.variable = variable
        self.sql = sql


class QueryExecutionError(ClauseQLError):
    """Raised when the driver fails to prepare or execute a statement.

    The string form carries the context message plus the final SQL text and
    the bind values that were sent, so log output is self-contained.

    Args:
        message: Human-readable context message.
        sql: The final SQL text (after query-variable substitution).
        params: The bind values actually sent to the driver.
    """

    def __init__(self, message: str, sql: str, params: Sequence[Any] = ()) -> None:
        self.message = message
        self.sql = sql
        self.params: tuple[Any, ...] = tuple(params)
        super().__init__(self._format())

    def _format(self) -> str:
        sql = "\n      ".join(textwrap.wrap(self.sql, 120)) if self.sql else ""
        params = pprint.pformat(list(self.params)).replace("\n", "\n   ")
        return f"{self.message}\nSQL:\n   {sql}\nPARAMS:\n   {params}"


class DatabaseConnectionError(ClauseQLError):
    """Raised when a database connection cannot be opened or configured.

    Args:
        message: Human-readable description.
        engine: The engine the connection was opened for.
    """

    def __init__(self, message: str, engine: str | None = None) -> None:
        super().__init__(message)
        self.engine = engine
