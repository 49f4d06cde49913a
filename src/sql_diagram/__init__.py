"""Public interface for the sql_diagram package."""

from __future__ import annotations

from sql_diagram.analyzer import analyze, to_json
from sql_diagram.exporters import export_graph
from sql_diagram.graph import build_graph
from sql_diagram.layout import layout
from sql_diagram.normalizer import normalize_sql
from sql_diagram.splitter import split_top_level

__all__ = [
    "analyze",
    "build_graph",
    "export_graph",
    "layout",
    "normalize_sql",
    "split_top_level",
    "to_json",
]
