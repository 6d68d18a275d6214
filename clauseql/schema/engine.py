"""The supported database engines."""
from __future__ import annotations

from enum import Enum

from clauseql.errors import ConfigurationError

_ALIASES: dict[str, str] = {
    "pgsql": "pgsql",
    "postgres": "pgsql",
    "postgresql": "pgsql",
    "mysql": "mysql",
    "mariadb": "mysql",
    "sqlite": "sqlite",
    "sqlite3": "sqlite",
}


class Engine(str, Enum):
    """SQL backends clauseQL can render for."""

    PGSQL = "pgsql"
    MYSQL = "mysql"
    SQLITE = "sqlite"

    @classmethod
    def parse(cls, name: Engine | str) -> Engine:
        """Resolve an engine from a member, its value, or a common alias.

        Args:
            name: ``Engine`` member or name such as ``"postgres"``.

        Returns:
            The matching :class:`Engine`.

        Raises:
            ConfigurationError: If ``name`` is not a known engine.
        """
        if isinstance(name, Engine):
            return name
        key = _ALIASES.get(str(name).strip().lower())
        if key is None:
            raise ConfigurationError(
                f"Unknown database engine '{name}'. Known engines: "
                f"{sorted(e.value for e in cls)}.",
                field="engine",
                value=name,
            )
        return cls(key)
