"""Typed condition values.

A condition value is either a single scalar or, for the ``IN`` operator, a
sequence of integers.  Modelling the two cases as distinct frozen models
lets renderers branch on the type instead of inspecting raw Python values.

Usage::

    from clauseql.schema.values import to_condition_value

    to_condition_value(18, ">")           # ScalarValue(value=18)
    to_condition_value(["1", 2.9], "IN")  # IntSequence(values=(1, 2))
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field

from clauseql.errors import ConfigurationError

_FROZEN = ConfigDict(extra="forbid", frozen=True)

#: Python types a scalar condition value may hold.
Scalar = Union[str, int, float, bool, None]


class ScalarValue(BaseModel):
    """A single bind or literal value: ``'abc'``, ``42``, ``1.5``, ``True``, ``None``."""

    model_config = _FROZEN

    value: Scalar = None

    def bind_values(self) -> list[Any]:
        return [self.value]

    def literal_sql(self) -> str:
        """Return the value as it is written into non-prepared SQL.

        The text is emitted verbatim; escaping is the caller's job.
        """
        if self.value is None:
            return "NULL"
        if isinstance(self.value, bool):
            return "TRUE" if self.value else "FALSE"
        return str(self.value)


class IntSequence(BaseModel):
    """The integer list of an ``IN ( … )`` condition."""

    model_config = _FROZEN

    values: tuple[int, ...] = Field(min_length=1)

    def bind_values(self) -> list[Any]:
        return list(self.values)

    def literal_sql(self) -> str:
        return ", ".join(str(v) for v in self.values)


ConditionValue = Union[ScalarValue, IntSequence]


def _truncate_to_int(item: Any) -> int:
    if isinstance(item, bool):
        return int(item)
    if isinstance(item, int):
        return item
    if isinstance(item, float):
        if math.isnan(item) or math.isinf(item):
            raise ConfigurationError(
                f"IN value {item!r} is not a finite number.", field="value", value=item
            )
        return int(item)
    if isinstance(item, str):
        text = item.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return _truncate_to_int(float(text))
        except ValueError:
            pass
    raise ConfigurationError(
        f"IN value {item!r} can not be converted to an integer.", field="value", value=item
    )


def to_condition_value(raw: Any, operator: str) -> ConditionValue:
    """Convert a raw Python value into the tagged value for ``operator``.

    Args:
        raw: The caller-supplied value (or an already-typed value).
        operator: The normalised (upper-case) condition operator.

    Returns:
        ``IntSequence`` for ``IN``, ``ScalarValue`` for every other operator.

    Raises:
        ConfigurationError: If an ``IN`` list is empty or holds an element
            that is not integer-like, or a non-``IN`` operator receives a
            sequence.
    """
    if operator == "IN":
        if isinstance(raw, IntSequence):
            return raw
        if isinstance(raw, ScalarValue):
            raw = raw.value
        items: Iterable[Any]
        if isinstance(raw, (list, tuple, set, frozenset, range)):
            items = raw
        else:
            items = [raw]
        values = tuple(_truncate_to_int(i) for i in items)
        if not values:
            raise ConfigurationError(
                "IN needs at least one value.", field="value", value=raw
            )
        return IntSequence(values=values)

    if isinstance(raw, ScalarValue):
        return raw
    if isinstance(raw, IntSequence) or isinstance(raw, (list, tuple, set, frozenset)):
        raise ConfigurationError(
            f"Operator '{operator}' needs a single value, got a sequence.",
            field="value",
            value=raw,
        )
    if raw is not None and not isinstance(raw, (str, int, float, bool)):
        raise ConfigurationError(
            f"Unsupported condition value type '{type(raw).__name__}'.",
            field="value",
            value=raw,
        )
    return ScalarValue(value=raw)
