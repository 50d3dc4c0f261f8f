"""Test fixtures: sample DDL, seed rows and in-memory capabilities."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

_FIXTURES_DIR = Path(__file__).parent

#: (id, name, email, age, created_at, prefs)
USERS: list[tuple[Any, ...]] = [
    (1, "Alice", "alice@example.com", 34, "2024-01-15 09:30:00", '{"theme": "dark", "pinned": [1, 2]}'),
    (2, "Bob", None, 27, "2024-02-01 12:00:00", None),
    (3, "Carol", "carol@example.com", None, "2024-03-10 18:45:00", '{"theme": "light", "pinned": []}'),
    (4, "Dave", "dave@example.com", 41, "2024-04-22 07:05:00", None),
]

#: (id, parent_id, name)
CATEGORIES: list[tuple[Any, ...]] = [
    (1, None, "root"),
    (2, 1, "books"),
    (3, 2, "fiction"),
    (4, 3, "fantasy"),
]


@dataclass
class User:
    """Row target used across the test-suite."""

    id: int = 0
    name: str = ""
    email: str = ""
    age: int | None = None
    created_at: datetime | None = None
    prefs: Any = None


def load_ddl(target: Literal["sqlite", "postgres"] = "sqlite") -> str:
    """Return the sample DDL SQL string for the given backend."""
    return (_FIXTURES_DIR / f"ddl_{target}.sql").read_text()


# ---------------------------------------------------------------------------
# In-memory capabilities for unit tests
# ---------------------------------------------------------------------------


@dataclass
class FakeCursor:
    """ResultCursor over canned rows that records how it was used."""

    names: list[str]
    data: list[tuple[Any, ...]]
    close_calls: int = 0
    fetched: int = 0

    def columns(self) -> list[str]:
        return self.names

    def fetchone(self) -> tuple[Any, ...] | None:
        if self.fetched >= len(self.data):
            return None
        row = self.data[self.fetched]
        self.fetched += 1
        return row

    def close(self) -> None:
        self.close_calls += 1


@dataclass
class FakeQuerier:
    """Querier returning a FakeCursor and recording every call."""

    names: list[str]
    data: list[tuple[Any, ...]] = field(default_factory=list)
    calls: list[tuple[str, tuple[Any, ...], Any]] = field(default_factory=list)
    cursors: list[FakeCursor] = field(default_factory=list)

    def query(self, sql: str, args: Sequence[Any], context: Any = None) -> FakeCursor:
        self.calls.append((sql, tuple(args), context))
        cursor = FakeCursor(list(self.names), list(self.data))
        self.cursors.append(cursor)
        return cursor


@dataclass
class FakeExecutor:
    """Executor returning a fixed outcome and recording every call."""

    outcome: Any = None
    calls: list[tuple[str, tuple[Any, ...], Any]] = field(default_factory=list)

    def execute(self, sql: str, args: Sequence[Any], context: Any = None) -> Any:
        self.calls.append((sql, tuple(args), context))
        return self.outcome
