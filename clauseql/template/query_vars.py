"""Query-variable templating: ``{$Name}`` / ``{$Name=Default}`` placeholders.

A second, purely textual substitution pass over SQL source.  It exists for
structural fragments that can not be sent as bind parameters (a comparison
operator, a default ``LIMIT``); data values belong in prepared-statement
binds.

Security: substituted values become literal SQL text.  The only guard is a
whitelist of ``[A-Za-z0-9 \\t?_:.<=>-]`` plus a ban on the ``--`` comment
marker; a value failing either check raises :class:`TemplatingError`.

Placeholders are replaced in a single scan, so text produced by a
substitution is never rescanned.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from clauseql.errors import TemplatingError

#: ``{$VarName}`` or ``{$VarName=Default}``.  Group 1 = name, group 4 = default.
PLACEHOLDER_PATTERN = re.compile(
    r"\{\$([A-Za-z0-9_.-]+)((\s*=)([A-Za-z0-9 \t?_:.<=>-]+)?)?\}"
)

#: Characters a substituted value may consist of.
SAFE_VALUE_PATTERN = re.compile(r"^[A-Za-z0-9 \t?_:.<=>-]+$")

#: SQL line-comment marker; never allowed inside a substituted value.
COMMENT_MARKER = "--"


@dataclass(frozen=True)
class Placeholder:
    """One placeholder found in a SQL string.

    Attributes:
        name: Variable name.
        default: Trimmed default value, or ``None`` when none is declared.
    """

    name: str
    default: str | None = None


class QueryVarTemplater:
    """Substitutes query variables into SQL text."""

    def substitute(
        self,
        sql: str,
        variables: Mapping[str, Any] | None = None,
        always_parse: bool = False,
    ) -> str:
        """Replace every placeholder in ``sql``.

        Args:
            sql: SQL text that may contain placeholders.
            variables: Values by variable name.  ``None`` entries count as
                not supplied.
            always_parse: Scan even when ``variables`` is empty so declared
                defaults are applied.

        Returns:
            The rewritten SQL; ``sql`` itself when nothing needs parsing.

        Raises:
            TemplatingError: A supplied value fails the character guard, or
                a placeholder has neither a value nor a default.
        """
        if not variables and not always_parse:
            return sql
        variables = variables or {}

        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            default = match.group(4).strip() if match.group(4) else None
            value = variables.get(name)
            if value is not None:
                return self._checked_value(name, value, sql)
            if default is None:
                raise TemplatingError(
                    f'The query declares the query variable placeholder "{name}" without '
                    "a default value and without an assigned replacement value!",
                    variable=name,
                    sql=sql,
                )
            return default

        return PLACEHOLDER_PATTERN.sub(_replace, sql)

    def find_placeholders(self, sql: str) -> list[Placeholder]:
        """Return the placeholders of ``sql`` in order of appearance."""
        return [
            Placeholder(m.group(1), m.group(4).strip() if m.group(4) else None)
            for m in PLACEHOLDER_PATTERN.finditer(sql)
        ]

    @staticmethod
    def _checked_value(name: str, value: Any, sql: str) -> str:
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise TemplatingError(
                f'The query variable "{name}" must be a string or a number, '
                f"got {type(value).__name__}.",
                variable=name,
                sql=sql,
            )
        text = str(value)
        if COMMENT_MARKER in text or not SAFE_VALUE_PATTERN.match(text):
            raise TemplatingError(
                f'The defined query variable "{name}" defines a value with invalid format!',
                variable=name,
                sql=sql,
            )
        return text


_DEFAULT = QueryVarTemplater()


def substitute(
    sql: str,
    variables: Mapping[str, Any] | None = None,
    always_parse: bool = False,
) -> str:
    """Module-level shortcut for :meth:`QueryVarTemplater.substitute`."""
    return _DEFAULT.substitute(sql, variables, always_parse)
