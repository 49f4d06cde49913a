from __future__ import annotations

from sql_diagram.splitter import (
    matching_paren,
    split_top_level,
    strip_outer_parens,
    top_level_mask,
)


def test_split_simple_list() -> None:
    assert split_top_level("a, b ,c") == ["a", "b", "c"]


def test_split_respects_parentheses() -> None:
    text = "COUNT(a, b), COALESCE(x, (SELECT 1, 2)), c"
    assert split_top_level(text) == ["COUNT(a, b)", "COALESCE(x, (SELECT 1, 2))", "c"]


def test_split_respects_quotes() -> None:
    text = "'x,y', \"a,b\", `c,d`, e"
    assert split_top_level(text) == ["'x,y'", '"a,b"', "`c,d`", "e"]


def test_split_ignores_escaped_quotes() -> None:
    text = "'it\\'s, fine', b"
    assert split_top_level(text) == ["'it\\'s, fine'", "b"]


def test_quote_kinds_do_not_interfere() -> None:
    text = "\"it's, quoted\", b"
    assert split_top_level(text) == ["\"it's, quoted\"", "b"]


def test_unbalanced_parentheses_do_not_raise() -> None:
    assert split_top_level(")) a, b") == [")) a", "b"]
    assert split_top_level("((a, b") == ["((a, b"]


def test_split_round_trip() -> None:
    # Holds only for lists without empty items: "a,,b" rejoins as "a, b".
    assert ", ".join(split_top_level("a,,b")) == "a, b"
    for text in ["a, f(b, c), 'd, e'", "x", "(a, b), (c, d)", "u.id AS x, `q, r`"]:
        assert ", ".join(split_top_level(text, ",")) == text


def test_split_on_other_separator() -> None:
    assert split_top_level("a;(b;c);d", ";") == ["a", "(b;c)", "d"]


def test_empty_parts_dropped() -> None:
    assert split_top_level("") == []
    assert split_top_level(" , a") == ["a"]


def test_top_level_mask() -> None:
    mask = top_level_mask("a(b)'c'd")
    assert mask == [True, True, False, True, False, False, False, True]


def test_matching_paren_and_strip() -> None:
    assert matching_paren("(a (b) ')' c) d", 0) == 12
    assert matching_paren("(a", 0) is None
    assert strip_outer_parens(" ((a = b)) ") == "a = b"
    assert strip_outer_parens("(a) AND (b)") == "(a) AND (b)"
