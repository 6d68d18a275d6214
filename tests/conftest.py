"""Shared pytest fixtures for clauseQL unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from clauseql.execute.connection import DBAPIConnection
from clauseql.schema.engine import Engine
from tests.fixtures import load_ddl, seed_statements
from tests.fixtures.connections import RecordingConnection


@pytest.fixture()
def fake_conn() -> RecordingConnection:
    """SQLite-flavoured connection double with an empty result."""
    return RecordingConnection()


@pytest.fixture()
def sqlite_db() -> Iterator[DBAPIConnection]:
    """Seeded in-memory SQLite database wrapped in a DBAPIConnection."""
    raw = sqlite3.connect(":memory:")
    raw.executescript(load_ddl("sqlite"))
    for sql, rows in seed_statements():
        raw.executemany(sql, rows)
    raw.commit()
    conn = DBAPIConnection(raw, Engine.SQLITE, "main", sqlite3.paramstyle)
    yield conn
    conn.close()
