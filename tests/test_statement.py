"""Unit tests for statement trees (templates and composite nodes)."""
from __future__ import annotations

import pytest

from sqlweave.errors import BuildError, ProfileConfigError, RecursionDepthError
from sqlweave.statement import (
    EMPTY,
    Fragment,
    Join,
    Prefix,
    Template,
    and_,
    expr,
    having,
    join,
    list_of,
    map_param,
    prefix,
    recursive,
    stmt,
    values,
    where,
)
from tests.fixtures import User


def _empty(_param):
    return "", []


def _cond(sql, key):
    return expr(lambda p: (sql, [p[key]]) if p.get(key) is not None else ("", []))


# ---------------------------------------------------------------------------
# Fragment
# ---------------------------------------------------------------------------


def test_fragment_of_empty_sql_drops_arguments():
    fragment = Fragment.of("", [1, 2])
    assert fragment is EMPTY
    assert fragment.args == ()
    assert not fragment


def test_fragment_args_are_tuples():
    fragment = Fragment.of("a = ?", [1])
    assert fragment.args == (1,)
    assert fragment


# ---------------------------------------------------------------------------
# Template
# ---------------------------------------------------------------------------


def test_unbound_marker_takes_whole_parameter():
    r = stmt("SELECT * FROM users WHERE id = ?").to_sql(7)
    assert r.sql == "SELECT * FROM users WHERE id = ?"
    assert r.args == (7,)


def test_bound_children_spliced_in_marker_order():
    s = stmt(
        "a = ? AND b IN (?)",
        expr(lambda p: ("x + ?", [p["x"]])),
        expr(lambda p: ("?, ?", [p["y"], p["z"]])),
    )
    r = s.to_sql({"x": 1, "y": 2, "z": 3})
    assert r.sql == "a = x + ? AND b IN (?, ?)"
    assert r.args == (1, 2, 3)


def test_empty_child_collapses_one_space():
    r = stmt("A ? B", expr(_empty)).to_sql(None)
    assert r.sql == "A B"
    assert r.args == ()


def test_optional_where_clause_disappears():
    s = stmt("SELECT id FROM users ? LIMIT 10", where(_cond("name = ?", "name")))
    assert s.to_sql({}).sql == "SELECT id FROM users LIMIT 10"

    r = s.to_sql({"name": "Alice"})
    assert r.sql == "SELECT id FROM users WHERE name = ? LIMIT 10"
    assert r.args == ("Alice",)


def test_doubled_marker_is_kept_and_consumes_no_argument():
    r = stmt("SELECT data ?? 'key' FROM t WHERE id = ?").to_sql(5)
    assert r.sql == "SELECT data ?? 'key' FROM t WHERE id = ?"
    assert r.args == (5,)


def test_doubled_marker_does_not_consume_a_binding():
    r = stmt("?? ?", expr(lambda p: ("x = ?", [p]))).to_sql(3)
    assert r.sql == "?? x = ?"
    assert r.args == (3,)


def test_none_binding_binds_parameter():
    s = stmt("? AND ?", None, expr(lambda p: ("b = ?", [p + 1])))
    r = s.to_sql(1)
    assert r.sql == "? AND b = ?"
    assert r.args == (1, 2)


def test_surplus_bindings_are_appended_with_a_space():
    s = stmt(
        "SELECT id FROM users",
        where(expr(lambda p: ("age > ?", [p]))),
        expr(lambda p: ("LIMIT 5", [])),
    )
    r = s.to_sql(30)
    assert r.sql == "SELECT id FROM users WHERE age > ? LIMIT 5"
    assert r.args == (30,)


def test_surplus_empty_bindings_are_skipped():
    s = stmt("SELECT id FROM users", where(expr(_empty)), None, expr(_empty))
    r = s.to_sql(None)
    assert r.sql == "SELECT id FROM users"
    assert r.args == ()


def test_result_is_trimmed():
    assert stmt("  SELECT 1 ?", expr(_empty)).to_sql(None).sql == "SELECT 1"


def test_empty_template_is_empty():
    assert stmt("").to_sql(1) is EMPTY


def test_child_error_aborts_resolution():
    def boom(_param):
        raise BuildError("no such filter")

    with pytest.raises(BuildError, match="no such filter"):
        stmt("SELECT ? FROM t ?", None, expr(boom)).to_sql(1)


def test_foreign_exception_propagates_verbatim():
    def boom(_param):
        raise KeyError("missing")

    with pytest.raises(KeyError):
        stmt("x = ?", expr(boom)).to_sql({})


def test_custom_marker():
    r = stmt("a = # AND b = ##", marker="#").to_sql(1)
    assert r.sql == "a = # AND b = ##"
    assert r.args == (1,)


def test_multi_character_marker_rejected():
    with pytest.raises(ProfileConfigError):
        Template("a = ?", marker="??")


def test_statement_reused_across_parameters():
    s = stmt("SELECT * FROM users ?", where(_cond("age > ?", "age")))
    first = s.to_sql({"age": 20})
    second = s.to_sql({})
    again = s.to_sql({"age": 40})
    assert first.args == (20,)
    assert second.sql == "SELECT * FROM users"
    assert again.args == (40,)


# ---------------------------------------------------------------------------
# Prefix / Join / and_
# ---------------------------------------------------------------------------


def test_prefix_elides_with_empty_child():
    assert prefix("WHERE", expr(_empty)).to_sql(None) is EMPTY
    assert Prefix("WHERE").to_sql(None) is EMPTY


def test_prefix_wraps_child():
    r = prefix("HAVING", expr(lambda p: ("COUNT(*) > ?", [p]))).to_sql(2)
    assert r.sql == "HAVING COUNT(*) > ?"
    assert r.args == (2,)


def test_join_skips_empty_children():
    s = join(
        " AND ",
        expr(_empty),
        expr(lambda p: ("x = ?", [1])),
        expr(_empty),
        expr(lambda p: ("y = ?", [2])),
    )
    r = s.to_sql(None)
    assert r.sql == "x = ? AND y = ?"
    assert r.args == (1, 2)


def test_join_of_literal_templates():
    r = join(" AND ", stmt("x=1"), None, stmt("y=2")).to_sql(None)
    assert r.sql == "x=1 AND y=2"
    assert r.args == ()


def test_join_of_nothing_is_empty():
    assert Join(", ").to_sql(None) is EMPTY


def test_having_combines_conditions():
    s = having(_cond("SUM(total) > ?", "min"), _cond("COUNT(*) < ?", "max"))
    r = s.to_sql({"min": 10, "max": 3})
    assert r.sql == "HAVING SUM(total) > ? AND COUNT(*) < ?"
    assert r.args == (10, 3)


def test_and_group_parenthesised_or_empty():
    s = and_(_cond("a = ?", "a"), _cond("b = ?", "b"))
    r = s.to_sql({"a": 1, "b": 2})
    assert r.sql == "(a = ? AND b = ?)"
    assert r.args == (1, 2)
    assert s.to_sql({}) is EMPTY


# ---------------------------------------------------------------------------
# ListOf / Map / values
# ---------------------------------------------------------------------------


def test_list_applies_child_per_element():
    row = stmt("(?,?)", map_param(lambda r: r[0]), map_param(lambda r: r[1]))
    r = list_of(row).to_sql([("a", 1), ("b", 2), ("c", 3)])
    assert r.sql == "(?,?),(?,?),(?,?)"
    assert r.args == ("a", 1, "b", 2, "c", 3)


def test_list_without_child_expands_markers():
    s = stmt("SELECT * FROM users WHERE id IN (?)", list_of())
    r = s.to_sql([1, 2, 3])
    assert r.sql == "SELECT * FROM users WHERE id IN (?,?,?)"
    assert r.args == (1, 2, 3)


def test_list_skips_empty_elements_and_uses_separator():
    child = expr(lambda v: ("id = ?", [v]) if v else ("", []))
    r = list_of(child, sep=" OR ").to_sql([1, 0, 2])
    assert r.sql == "id = ? OR id = ?"
    assert r.args == (1, 2)


def test_list_of_empty_sequence_is_empty():
    assert list_of().to_sql([]) is EMPTY


def test_empty_separator_rejected():
    with pytest.raises(ProfileConfigError) as exc_info:
        list_of(sep="")
    assert exc_info.value.field == "sep"
    with pytest.raises(ProfileConfigError):
        join("", stmt("a = ?"), stmt("?"))


def test_map_without_child_binds_converted_value():
    r = map_param(lambda u: u.id).to_sql(User(id=9))
    assert r.sql == "?"
    assert r.args == (9,)


def test_map_adapts_parameter_for_child():
    s = stmt("id IN (?)", map_param(lambda f: f["ids"], list_of()))
    r = s.to_sql({"ids": [4, 5]})
    assert r.sql == "id IN (?,?)"
    assert r.args == (4, 5)


def test_values_renders_tuple_of_markers():
    s = stmt(
        "INSERT INTO users (name, age) VALUES ?",
        values(lambda u: [u.name, u.age]),
    )
    r = s.to_sql(User(name="Eve", age=22))
    assert r.sql == "INSERT INTO users (name, age) VALUES (?,?)"
    assert r.args == ("Eve", 22)
    assert values(lambda _: []).to_sql(None) is EMPTY


# ---------------------------------------------------------------------------
# Recursive
# ---------------------------------------------------------------------------


def _nest(self, n):
    if n == 0:
        return "leaf = ?", [n]
    inner = self.to_sql(n - 1)
    return f"({inner.sql})", inner.args


def test_recursive_builds_nested_fragment():
    r = recursive(3, _nest).to_sql(3)
    assert r.sql == "(((leaf = ?)))"
    assert r.args == (0,)


def test_recursive_depth_exhausted():
    with pytest.raises(RecursionDepthError) as exc_info:
        recursive(2, _nest).to_sql(3)
    assert exc_info.value.depth == 2


def test_recursive_unbounded_self_reference_fails():
    runaway = recursive(10, lambda self, p: self.to_sql(p))
    with pytest.raises(RecursionDepthError):
        runaway.to_sql("x")


def test_recursive_is_a_build_error():
    with pytest.raises(BuildError):
        recursive(0, lambda self, p: self.to_sql(p)).to_sql(None)
