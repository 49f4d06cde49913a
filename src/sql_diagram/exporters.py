"""Exporters for SQL diagrams."""

from __future__ import annotations

import json
import logging
import re
from typing import List

from sql_diagram.analyzer import result_to_dict
from sql_diagram.layout import layout
from sql_diagram.models import AnalysisResult, ColumnRef, TableRef

logger = logging.getLogger(__name__)

_RECORD_SPECIAL = re.compile(r"[{}|<>]")

EXPORT_FORMATS = ("json", "mermaid_er", "graphviz_dot")


def export_graph(result: AnalysisResult, format: str = "json") -> str:
    """Export an analysis result to the requested format."""

    normalized_format = format.lower()
    if normalized_format == "mermaid_er":
        return _export_mermaid_er(result)
    if normalized_format == "graphviz_dot":
        return _export_graphviz_dot(result)
    if normalized_format != "json":
        logger.warning("Unsupported export format %r, exporting JSON", format)
    return json.dumps(result_to_dict(result), indent=2, ensure_ascii=False)


def _export_mermaid_er(result: AnalysisResult) -> str:
    """Export tables and join edges into Mermaid ER diagram syntax."""

    lines = ["erDiagram"]
    for table in result.tables:
        lines.append(f"  {_sanitize_er_name(table.id)} {{")
        for column in table.columns:
            column_type = "expr" if column.is_function else "string"
            column_name = _sanitize_er_name(_column_label(column))
            lines.append(f"    {column_type} {column_name}")
        lines.append("  }")
    for edge in result.edges:
        source = _sanitize_er_name(edge.source)
        target = _sanitize_er_name(edge.target)
        lines.append(f'  {source} ||--o{{ {target} : "{edge.join_type}"')
    return "\n".join(lines)


def _export_graphviz_dot(result: AnalysisResult) -> str:
    """Export tables and join edges into Graphviz DOT syntax with fixed positions."""

    lines = ["digraph sql_diagram {", "  node [shape=record];"]
    for positioned in layout(result.tables):
        table = positioned.table
        lines.append(
            f'  {_dot_id(table.id)} [label="{_dot_label(table)}", '
            f'pos="{positioned.x:.1f},{positioned.y:.1f}!"];'
        )
    for edge in result.edges:
        label = _dot_escape(f"{edge.join_type.upper()}: {edge.condition}")
        lines.append(
            f'  {_dot_id(edge.source)} -> {_dot_id(edge.target)} [label="{label}"];'
        )
    lines.append("}")
    return "\n".join(lines)


def _column_label(column: ColumnRef) -> str:
    """Return the display name of a column."""

    return column.alias or column.name or column.expression


def _sanitize_er_name(name: str) -> str:
    """Sanitize names for Mermaid ER diagrams."""

    sanitized = "".join(char if char.isalnum() else "_" for char in name)
    return sanitized or "_"


def _dot_id(node_id: str) -> str:
    """Quote node ids for DOT."""

    return f'"{_dot_escape(node_id)}"'


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _dot_label(table: TableRef) -> str:
    """Create a record label listing the table header and its columns."""

    header = f"{table.name} ({table.alias})" if table.alias else table.name
    fields: List[str] = [header] + [_column_label(column) for column in table.columns]
    escaped = [_RECORD_SPECIAL.sub(r"\\\g<0>", _dot_escape(field)) for field in fields]
    return "{" + "|".join(escaped) + "}"
