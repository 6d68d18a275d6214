"""Engine dialect registry (Open/Closed Principle).

``DialectRegistry``
    Central registry for :class:`~clauseql.engines.base.EngineDialect`
    implementations.  Register a dialect once; conditions, clauses and the
    statement executor look it up by :class:`~clauseql.schema.engine.Engine`.

The module-level helpers :func:`quote_char`, :func:`is_keyword` and
:func:`is_known_engine` are the pure lookups the rest of the library uses.

Usage::

    from clauseql.engines.registry import DialectRegistry

    @DialectRegistry.register(Engine.MYSQL)
    class MySQLDialect(EngineDialect):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from clauseql.engines.base import EngineDialect
from clauseql.errors import ConfigurationError
from clauseql.schema.engine import Engine


class DialectRegistry:
    """Registry mapping engines to :class:`EngineDialect` classes.

    Example::

        @DialectRegistry.register(Engine.SQLITE)
        class SQLiteDialect(EngineDialect):
            ...

        dialect = DialectRegistry.create("sqlite")
    """

    _dialects: ClassVar[dict[Engine, type[EngineDialect]]] = {}

    @classmethod
    def register(cls, engine: Engine | str) -> Callable[[type[EngineDialect]], type[EngineDialect]]:
        """Decorator that registers a dialect class under ``engine``.

        Args:
            engine: The engine (or engine name) served by the class.

        Returns:
            A decorator that registers and returns the dialect class.
        """

        def decorator(dialect_cls: type[EngineDialect]) -> type[EngineDialect]:
            cls._dialects[Engine.parse(engine)] = dialect_cls
            return dialect_cls

        return decorator

    @classmethod
    def register_class(cls, engine: Engine | str, dialect_cls: type[EngineDialect]) -> None:
        """Register a dialect class without using the decorator form."""
        cls._dialects[Engine.parse(engine)] = dialect_cls

    @classmethod
    def create(cls, engine: Engine | str, **options: Any) -> EngineDialect:
        """Instantiate the dialect registered for ``engine``.

        Args:
            engine: The engine or engine name.
            **options: Constructor options of the dialect class
                (e.g. ``ansi_quotes=True`` for MySQL).

        Returns:
            A fresh :class:`EngineDialect` instance.

        Raises:
            ConfigurationError: If ``engine`` is unknown or has no dialect.
        """
        key = Engine.parse(engine)
        dialect_cls = cls._dialects.get(key)
        if dialect_cls is None:
            raise ConfigurationError(
                f"No dialect registered for engine '{key.value}'. "
                f"Registered engines: {cls.registered_engines()}.",
                field="engine",
                value=engine,
            )
        return dialect_cls(**options)

    @classmethod
    def registered_engines(cls) -> list[str]:
        """Return the sorted list of registered engine names."""
        return sorted(e.value for e in cls._dialects)


def get_dialect(engine: Engine | str | EngineDialect, ansi_quotes: bool = False) -> EngineDialect:
    """Return a dialect for ``engine``; dialect instances pass through."""
    if isinstance(engine, EngineDialect):
        return engine
    key = Engine.parse(engine)
    if key is Engine.MYSQL and ansi_quotes:
        return DialectRegistry.create(key, ansi_quotes=True)
    return DialectRegistry.create(key)


def quote_char(engine: Engine | str, ansi_quotes: bool = False) -> str:
    """Return the identifier quote character of ``engine``."""
    return get_dialect(engine, ansi_quotes).quote_char


def is_keyword(engine: Engine | str, token: str) -> bool:
    """Return whether ``token`` is a reserved word of ``engine`` (case-insensitive)."""
    return get_dialect(engine).is_keyword(token)


def is_known_engine(name: object) -> bool:
    """Return whether ``name`` resolves to a registered engine."""
    if not isinstance(name, str):
        return False
    try:
        key = Engine.parse(name)
    except ConfigurationError:
        return False
    return key.value in DialectRegistry.registered_engines()
