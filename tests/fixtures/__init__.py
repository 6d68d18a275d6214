"""Test fixtures: sample DDL and seed rows shared by the integration tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

_FIXTURES_DIR = Path(__file__).parent

#: (id, name, age, status, order, deleted_at)
USERS: list[tuple[Any, ...]] = [
    (1, "Alice", 34, 1, 3, None),
    (2, "Bob", 17, 2, 1, None),
    (3, "Carol", 52, 3, None, "2024-01-01"),
    (4, "Dave", 25, 1, 2, None),
]

#: (id, title)
TEAMS: list[tuple[Any, ...]] = [
    (1, "admins"),
    (2, "editors"),
]

#: (user_id, team_id)
MEMBERSHIPS: list[tuple[Any, ...]] = [
    (1, 1),
    (1, 2),
    (4, 2),
]

#: (name, value)
APP_SETTINGS: list[tuple[Any, ...]] = [
    ("maintenance", "yes"),
    ("max_rows", "250"),
    ("ratio", "0.75"),
    ("retired", None),
]


def load_ddl(target: Literal["sqlite", "postgres"] = "sqlite") -> str:
    """Return the sample DDL SQL string for the given backend.

    Args:
        target: ``'sqlite'`` (default) or ``'postgres'``.

    Returns:
        DDL string ready to execute against the target backend.
    """
    filename = f"ddl_{target}.sql"
    return (_FIXTURES_DIR / filename).read_text()


def seed_statements() -> list[tuple[str, list[tuple[Any, ...]]]]:
    """Return ``(insert_sql, rows)`` pairs with ``?`` placeholders."""
    return [
        ('INSERT INTO users (id, name, age, status, "order", deleted_at) VALUES (?, ?, ?, ?, ?, ?)', USERS),
        ("INSERT INTO teams (id, title) VALUES (?, ?)", TEAMS),
        ("INSERT INTO memberships (user_id, team_id) VALUES (?, ?)", MEMBERSHIPS),
        ("INSERT INTO app_settings (name, value) VALUES (?, ?)", APP_SETTINGS),
    ]
