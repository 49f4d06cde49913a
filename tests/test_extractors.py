from __future__ import annotations

from sql_diagram.extractors import (
    extract_from_tables,
    extract_join_clauses,
    extract_select_part,
)

JOIN_SQL = (
    "SELECT a.id, b.name FROM a LEFT OUTER JOIN b ON a.id = b.a_id "
    "INNER JOIN c ON b.id = c.b_id AND c.active = 1 "
    "CROSS JOIN d WHERE a.x = 1 ORDER BY a.id"
)


def test_select_part_strips_distinct() -> None:
    assert extract_select_part("SELECT DISTINCT a, b FROM t") == "a, b"


def test_select_part_skips_nested_from() -> None:
    sql = "SELECT (SELECT max(x) FROM y) AS m, z FROM t"
    assert extract_select_part(sql) == "(SELECT max(x) FROM y) AS m, z"


def test_select_part_without_from_is_empty() -> None:
    assert extract_select_part("SELECT 1") == ""
    assert extract_select_part("UPDATE t SET a = 1") == ""
    assert extract_select_part("SELECT FROM") == ""


def test_from_list_split_on_commas() -> None:
    sql = "SELECT * FROM a, sales.b x WHERE a.id = x.id"
    assert extract_from_tables(sql) == ["a", "sales.b x"]


def test_from_list_stops_at_join_and_semicolon() -> None:
    assert extract_from_tables("SELECT * FROM a JOIN b ON a.id = b.id") == ["a"]
    assert extract_from_tables("select * from a;") == ["a"]


def test_from_list_keeps_subquery_intact() -> None:
    sql = "SELECT m.id FROM (SELECT id FROM t WHERE id > 1) m;"
    assert extract_from_tables(sql) == ["(SELECT id FROM t WHERE id > 1) m"]


def test_from_missing() -> None:
    assert extract_from_tables("SELECT 1") == []
    assert extract_join_clauses("SELECT 1") == []


def test_join_clauses_in_source_order() -> None:
    joins = extract_join_clauses(JOIN_SQL)
    assert [join.join_type for join in joins] == [
        "left outer join",
        "inner join",
        "cross join",
    ]
    assert [join.kind for join in joins] == ["left", "inner", "cross"]
    assert [join.table_expr for join in joins] == ["b", "c", "d"]
    assert joins[0].on_text == "a.id = b.a_id"
    assert joins[1].on_text == "b.id = c.b_id AND c.active = 1"
    assert joins[2].on_text == ""
    assert joins[0].raw == "LEFT OUTER JOIN b ON a.id = b.a_id"


def test_bare_join_is_plain() -> None:
    sql = "SELECT * FROM users u JOIN orders AS o ON u.id = o.user_id;"
    joins = extract_join_clauses(sql)
    assert len(joins) == 1
    assert joins[0].join_type == "join"
    assert joins[0].kind == "plain"
    assert joins[0].table_expr == "orders AS o"
    assert joins[0].on_text == "u.id = o.user_id"


def test_joins_inside_subqueries_are_ignored() -> None:
    sql = (
        "SELECT * FROM (SELECT * FROM x JOIN y ON x.id = y.id) s "
        "RIGHT JOIN z ON s.id = z.id"
    )
    joins = extract_join_clauses(sql)
    assert len(joins) == 1
    assert joins[0].join_type == "right join"
    assert joins[0].table_expr == "z"


def test_join_keyword_case_is_normalized() -> None:
    joins = extract_join_clauses("select * from a Full Outer Join b on a.id = b.id")
    assert joins[0].join_type == "full outer join"
    assert joins[0].kind == "full"
