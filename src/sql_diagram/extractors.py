"""Clause extraction from normalized SELECT text."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from sql_diagram.models import JOIN_KINDS, JoinClause
from sql_diagram.splitter import (
    find_top_level,
    finditer_top_level,
    split_top_level,
    top_level_mask,
)

logger = logging.getLogger(__name__)


def _keyword_alternation(keywords) -> str:
    return "|".join(r"\s+".join(keyword.split()) for keyword in keywords)


# Longest keywords first so "left outer join" never matches as a bare "join".
JOIN_KEYWORDS = sorted(JOIN_KINDS, key=lambda keyword: -len(keyword.split()))

_SELECT = re.compile(r"\bselect\b", re.IGNORECASE)
_FROM = re.compile(r"\bfrom\b", re.IGNORECASE)
_DISTINCT = re.compile(r"^distinct\b\s*", re.IGNORECASE)
_ON = re.compile(r"\bon\b", re.IGNORECASE)
_JOIN = re.compile(r"\b(%s)\b" % _keyword_alternation(JOIN_KEYWORDS), re.IGNORECASE)
_CLAUSE_END = re.compile(
    r"\b(?:where|group\s+by|having|order\s+by|limit|union|except|intersect)\b|;",
    re.IGNORECASE,
)
_FROM_END = re.compile(
    r"\b(?:where|group\s+by|having|order\s+by|limit|union|except|intersect|%s)\b|;"
    % _keyword_alternation(JOIN_KEYWORDS),
    re.IGNORECASE,
)
_SPACES = re.compile(r"\s+")


def _clause_end(sql: str, start: int, pattern, mask: List[bool]) -> int:
    """Return the index where the clause starting at `start` stops."""

    match = find_top_level(sql, pattern, start, mask)
    return match.start() if match else len(sql)


def _from_start(sql: str, mask: List[bool]) -> Optional[re.Match]:
    """Locate the top-level FROM that belongs to the first top-level SELECT."""

    select = find_top_level(sql, _SELECT, 0, mask)
    start = select.end() if select else 0
    return find_top_level(sql, _FROM, start, mask)


def extract_select_part(sql: str) -> str:
    """Return the SELECT list text, without a leading DISTINCT.

    An empty string is returned when the query has no top-level SELECT or no
    FROM after it.
    """

    mask = top_level_mask(sql)
    select = find_top_level(sql, _SELECT, 0, mask)
    if select is None:
        return ""
    from_match = find_top_level(sql, _FROM, select.end(), mask)
    if from_match is None:
        return ""
    select_part = sql[select.end() : from_match.start()].strip()
    return _DISTINCT.sub("", select_part).strip()


def extract_from_tables(sql: str) -> List[str]:
    """Return the comma-separated FROM list items."""

    mask = top_level_mask(sql)
    from_match = _from_start(sql, mask)
    if from_match is None:
        return []
    end = _clause_end(sql, from_match.end(), _FROM_END, mask)
    return split_top_level(sql[from_match.end() : end], ",")


def extract_join_clauses(sql: str) -> List[JoinClause]:
    """Return the JOIN clauses of the outer query in source order."""

    mask = top_level_mask(sql)
    from_match = _from_start(sql, mask)
    if from_match is None:
        return []
    clause_end = _clause_end(sql, from_match.end(), _CLAUSE_END, mask)
    matches = [
        match
        for match in finditer_top_level(sql, _JOIN, from_match.end(), mask)
        if match.start() < clause_end
    ]

    joins: List[JoinClause] = []
    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else clause_end
        segment = sql[match.end() : end]
        on_match = find_top_level(segment, _ON, 0, mask[match.end() : end])
        if on_match:
            table_expr = segment[: on_match.start()].strip()
            on_text = segment[on_match.end() :].strip()
        else:
            table_expr = segment.strip()
            on_text = ""
        joins.append(
            JoinClause(
                join_type=_SPACES.sub(" ", match.group(1).lower()),
                table_expr=table_expr,
                on_text=on_text,
                raw=sql[match.start() : end].strip(),
            )
        )
    logger.debug("Extracted %d join clauses", len(joins))
    return joins
