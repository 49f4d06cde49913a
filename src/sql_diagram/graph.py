"""Graph builder assembling tables, join edges and diagnostics."""

from __future__ import annotations

import logging
from typing import List

from sql_diagram.columns import attribute_columns, extract_columns
from sql_diagram.conditions import build_edges
from sql_diagram.extractors import (
    extract_from_tables,
    extract_join_clauses,
    extract_select_part,
)
from sql_diagram.models import AnalysisResult, ExtractionTrace
from sql_diagram.normalizer import normalize_sql
from sql_diagram.resolver import TableRegistry

logger = logging.getLogger(__name__)


def build_graph(sql: str) -> AnalysisResult:
    """Analyze a SELECT statement into tables, join edges and diagnostics.

    Malformed input never raises: recognized problems are reported in
    `diagnostics` next to whatever could be extracted, and an unexpected
    failure yields an empty result with a single parse error message.
    """

    diagnostics: List[str] = []
    try:
        normalized = normalize_sql(sql)
        if not normalized:
            return AnalysisResult(tables=[], edges=[], diagnostics=["Empty SQL query"])
        diagnostics.extend(normalized.diagnostics)
        return _build(normalized.text, diagnostics)
    except Exception as exc:
        logger.warning("Failed to analyze query: %s", exc, exc_info=True)
        return AnalysisResult(
            tables=[], edges=[], diagnostics=diagnostics + [f"Parse error: {exc}"]
        )


def _build(text: str, diagnostics: List[str]) -> AnalysisResult:
    """Run extraction, resolution, attribution and join decomposition."""

    select_part = extract_select_part(text)
    from_parts = extract_from_tables(text)
    joins = extract_join_clauses(text)
    logger.debug(
        "Extracted select=%r, %d FROM items, %d joins",
        select_part,
        len(from_parts),
        len(joins),
    )
    if not select_part:
        diagnostics.append("No SELECT list found")
    if not from_parts and not joins:
        diagnostics.append("No FROM clause found")

    registry = TableRegistry()
    for part in from_parts:
        registry.register(part)
    for join in joins:
        if join.table_expr:
            registry.register(join.table_expr)

    columns = extract_columns(select_part)
    attribute_columns(columns, registry, diagnostics)
    edges = build_edges(joins, registry)

    return AnalysisResult(
        tables=registry.to_list(),
        edges=edges,
        diagnostics=diagnostics,
        trace=ExtractionTrace(
            select=select_part, from_parts=from_parts, joins=joins, columns=columns
        ),
    )
