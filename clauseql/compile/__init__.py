"""clauseQL composition layer: conditions and clauses → SQL + bind values."""
from clauseql.compile.clause import Clause
from clauseql.compile.condition import Condition
from clauseql.compile.context import RenderContext, RenderedSQL
from clauseql.compile.join import Join, JoinType

__all__ = [
    "Clause",
    "Condition",
    "Join",
    "JoinType",
    "RenderContext",
    "RenderedSQL",
]
