"""clauseQL schema models: engines, condition values, column references, settings."""
from clauseql.schema.column_reference import ColumnReference
from clauseql.schema.engine import Engine
from clauseql.schema.settings import ConnectionSettings, ExecutorConfig, RowStyle
from clauseql.schema.values import (
    ConditionValue,
    IntSequence,
    ScalarValue,
    to_condition_value,
)

__all__ = [
    "ColumnReference",
    "ConditionValue",
    "ConnectionSettings",
    "Engine",
    "ExecutorConfig",
    "IntSequence",
    "RowStyle",
    "ScalarValue",
    "to_condition_value",
]
