"""Top-level SQL diagram analyzer."""

from __future__ import annotations

import json
from typing import Dict

from sql_diagram.graph import build_graph
from sql_diagram.layout import layout
from sql_diagram.models import AnalysisResult


def result_to_dict(result: AnalysisResult) -> Dict[str, object]:
    """Serialize an analysis result with laid-out table positions."""

    data = result.to_dict()
    data["tables"] = [table.to_dict() for table in layout(result.tables)]
    return data


def analyze(sql: str) -> Dict[str, object]:
    """Analyze SQL and return a JSON-compatible diagram dictionary."""

    return result_to_dict(build_graph(sql))


def to_json(sql: str, indent: int = 2) -> str:
    """Serialize the diagram analysis into JSON."""

    return json.dumps(analyze(sql), indent=indent, ensure_ascii=False)
