"""clauseQL query-variable templating."""
from clauseql.template.query_vars import Placeholder, QueryVarTemplater, substitute

__all__ = ["Placeholder", "QueryVarTemplater", "substitute"]
