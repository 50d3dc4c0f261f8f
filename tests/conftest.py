"""Shared pytest fixtures for sqlweave unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from tests.fixtures import CATEGORIES, USERS, load_ddl


@pytest.fixture()
def db() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database with the sample schema and seed rows."""
    conn = sqlite3.connect(":memory:")
    conn.executescript(load_ddl("sqlite"))
    conn.executemany("INSERT INTO users VALUES (?,?,?,?,?,?)", USERS)
    conn.executemany("INSERT INTO categories VALUES (?,?,?)", CATEGORIES)
    conn.commit()
    yield conn
    conn.close()
