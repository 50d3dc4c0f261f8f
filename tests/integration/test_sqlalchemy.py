"""Integration tests: the SQLAlchemy adapter over an in-memory SQLite engine.

SQL reaches the driver through ``exec_driver_sql``, so the pysqlite ``qmark``
style is used as is.
"""
from __future__ import annotations

import pytest

sqlalchemy = pytest.importorskip("sqlalchemy", reason="sqlalchemy required for adapter tests")

from sqlweave import (  # noqa: E402
    DialectProfile,
    Exec,
    Query,
    SQLAlchemyConnection,
    expr,
    list_of,
    scan_time,
    set_attr,
    stmt,
    values,
    where,
)
from sqlweave.errors import NoRowsError  # noqa: E402
from tests.fixtures import CATEGORIES, USERS, User, load_ddl  # noqa: E402

QMARK = DialectProfile.builder().placeholder("sqlite").build().rewriter()

USERS_OLDER_THAN = Query(
    stmt(
        "SELECT id, name, created_at FROM users ? ORDER BY id",
        where(expr(lambda age: ("age > ?", [age]) if age is not None else ("", []))),
    ),
    {
        "id": set_attr("id"),
        "name": set_attr("name"),
        "created_at": scan_time("%Y-%m-%d %H:%M:%S", lambda u, v: setattr(u, "created_at", v)),
    },
    factory=User,
    placeholder=QMARK,
)


@pytest.fixture()
def sa_conn():
    """SQLAlchemy connection with the sample schema and seed rows."""
    engine = sqlalchemy.create_engine("sqlite://")
    with engine.connect() as conn:
        for ddl in load_ddl("sqlite").split(";"):
            if ddl.strip():
                conn.exec_driver_sql(ddl)
        conn.exec_driver_sql("INSERT INTO users VALUES (?,?,?,?,?,?)", USERS)
        conn.exec_driver_sql("INSERT INTO categories VALUES (?,?,?)", CATEGORIES)
        yield conn
    engine.dispose()


def test_query_through_sqlalchemy(sa_conn):
    users = USERS_OLDER_THAN.all(SQLAlchemyConnection(sa_conn), 30)
    assert [u.name for u in users] == ["Alice", "Dave"]
    assert users[0].created_at.year == 2024


def test_execution_options_from_context(sa_conn):
    users = USERS_OLDER_THAN.all(
        SQLAlchemyConnection(sa_conn), None, context={"logging_token": "test"}
    )
    assert len(users) == 4


def test_scalar_and_in_list(sa_conn):
    querier = SQLAlchemyConnection(sa_conn)
    count = Query(stmt("SELECT COUNT(*) FROM users"), placeholder=QMARK)
    assert count.one(querier, None) == 4

    names = Query(
        stmt("SELECT name FROM users WHERE id IN (?) ORDER BY id", list_of()),
        placeholder=QMARK,
    )
    assert names.all(querier, [1, 3]) == ["Alice", "Carol"]


def test_no_rows(sa_conn):
    by_id = Query(stmt("SELECT name FROM users WHERE id = ?"), placeholder=QMARK)
    with pytest.raises(NoRowsError):
        by_id.first(SQLAlchemyConnection(sa_conn), 42)


def test_exec_through_sqlalchemy(sa_conn):
    insert = Exec(
        stmt("INSERT INTO categories (parent_id, name) VALUES ?", values(lambda c: list(c))),
        placeholder=QMARK,
    )
    outcome = insert.result(SQLAlchemyConnection(sa_conn), (2, "poetry"))
    assert outcome.rows_affected == 1
    assert outcome.last_insert_id == 5
