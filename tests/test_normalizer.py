from __future__ import annotations

from sql_diagram.normalizer import collapse_whitespace, normalize_sql, strip_comments


def test_comments_and_whitespace_removed() -> None:
    sql = """
    SELECT a,   b -- trailing comment
    FROM t /* block
    comment */ WHERE a = 1
    """
    normalized = normalize_sql(sql)
    assert normalized.text == "SELECT a, b FROM t WHERE a = 1"
    assert normalized.diagnostics == []


def test_comment_markers_inside_strings_are_kept() -> None:
    normalized = normalize_sql("SELECT a FROM t WHERE note = '-- keep /* me */'")
    assert normalized.text == "SELECT a FROM t WHERE note = '-- keep /* me */'"


def test_adjacent_tokens_stay_adjacent() -> None:
    sql = "SELECT u.id FROM users u JOIN orders o ON u.id=o.user_id;"
    assert normalize_sql(sql).text == sql


def test_empty_and_comment_only_input() -> None:
    assert normalize_sql("").text == ""
    assert normalize_sql("   \n\t ").text == ""
    assert not normalize_sql("-- nothing here\n/* or here */")


def test_unterminated_quote_falls_back_to_patterns() -> None:
    normalized = normalize_sql("SELECT 'abc FROM t -- note")
    assert normalized.text == "SELECT 'abc FROM t"
    assert normalized.diagnostics
    assert normalized.diagnostics[0].startswith("Tokenizer error")


def test_pattern_helpers() -> None:
    assert strip_comments("a -- x\nb /* y */ c") == "a \nb   c"
    assert collapse_whitespace("  a \n\t b  ") == "a b"


def test_unterminated_block_comment_is_dropped() -> None:
    assert normalize_sql("SELECT a FROM t /* unterminated").text == "SELECT a FROM t"
    assert strip_comments("a /* open\nb") == "a "
