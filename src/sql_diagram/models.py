"""Data models for SQL diagram analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


VIRTUAL_TABLE_ID = "__unspecified__"

JOIN_KINDS = {
    "inner join": "inner",
    "left outer join": "left",
    "right outer join": "right",
    "full outer join": "full",
    "left join": "left",
    "right join": "right",
    "full join": "full",
    "cross join": "cross",
    "natural join": "natural",
    "join": "plain",
}


@dataclass(frozen=True)
class ColumnRef:
    """Column owned by a table in the diagram."""

    name: Optional[str]
    alias: Optional[str]
    expression: str
    is_function: bool = False

    def to_dict(self) -> Dict[str, object]:
        """Serialize the column reference to a dictionary."""

        return {
            "name": self.name,
            "alias": self.alias,
            "expression": self.expression,
            "is_function": self.is_function,
        }


@dataclass
class TableRef:
    """Table node keyed by its normalized alias or name."""

    id: str
    name: str
    alias: Optional[str] = None
    is_subquery: bool = False
    is_virtual: bool = False
    is_orphan: bool = False
    raw: Optional[str] = None
    columns: List[ColumnRef] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """Serialize the table to a dictionary."""

        return {
            "id": self.id,
            "name": self.name,
            "alias": self.alias,
            "is_subquery": self.is_subquery,
            "is_virtual": self.is_virtual,
            "is_orphan": self.is_orphan,
            "raw": self.raw,
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class SelectItem:
    """One parsed item of a SELECT list before it is attributed to a table."""

    raw: str
    expression: str
    table: Optional[str]
    column: Optional[str]
    alias: Optional[str] = None
    is_function: bool = False

    def to_column(self) -> ColumnRef:
        """Convert the item to the column stored on a table."""

        return ColumnRef(
            name=self.column,
            alias=self.alias,
            expression=self.raw,
            is_function=self.is_function,
        )

    def to_dict(self) -> Dict[str, object]:
        """Serialize the select item to a dictionary."""

        return {
            "raw": self.raw,
            "table": self.table,
            "column": self.column,
            "alias": self.alias,
            "is_function": self.is_function,
        }


@dataclass(frozen=True)
class JoinClause:
    """A `[type] JOIN table [ON condition]` fragment."""

    join_type: str
    table_expr: str
    on_text: str
    raw: str

    @property
    def kind(self) -> str:
        """Return the join category, e.g. `left` for both LEFT and LEFT OUTER."""

        return JOIN_KINDS.get(self.join_type, "plain")

    def to_dict(self) -> Dict[str, object]:
        """Serialize the join clause to a dictionary."""

        return {
            "type": self.join_type,
            "kind": self.kind,
            "table": self.table_expr,
            "on": self.on_text,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class JoinCondition:
    """Atomic comparison taken from an ON clause."""

    raw: str
    left: Optional[str] = None
    operator: Optional[str] = None
    right: Optional[str] = None

    @property
    def is_comparison(self) -> bool:
        return self.left is not None and self.right is not None


@dataclass(frozen=True)
class Edge:
    """Directed relationship between two tables from one join condition."""

    id: str
    source: str
    target: str
    join_type: str
    condition: str
    source_column: str
    target_column: str
    operator: str

    def to_dict(self) -> Dict[str, object]:
        """Serialize the edge to a dictionary."""

        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "join_type": self.join_type,
            "condition": self.condition,
            "source_column": self.source_column,
            "target_column": self.target_column,
            "operator": self.operator,
        }


@dataclass(frozen=True)
class ExtractionTrace:
    """Intermediate clause text kept for callers inspecting the analysis."""

    select: str = ""
    from_parts: List[str] = field(default_factory=list)
    joins: List[JoinClause] = field(default_factory=list)
    columns: List[SelectItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """Serialize the trace to a dictionary."""

        return {
            "select": self.select,
            "from": list(self.from_parts),
            "joins": [join.to_dict() for join in self.joins],
            "columns": [column.to_dict() for column in self.columns],
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Tables, edges and diagnostics produced for one query."""

    tables: List[TableRef]
    edges: List[Edge]
    diagnostics: List[str]
    trace: ExtractionTrace = field(default_factory=ExtractionTrace)

    def table_ids(self) -> List[str]:
        """Return the table identifiers in registration order."""

        return [table.id for table in self.tables]

    def summary(self) -> Dict[str, int]:
        """Count tables, join edges and columns."""

        return {
            "table_count": len(self.tables),
            "join_count": len(self.edges),
            "column_count": sum(len(table.columns) for table in self.tables),
        }

    def to_dict(self) -> Dict[str, object]:
        """Serialize the result to a dictionary."""

        return {
            "tables": [table.to_dict() for table in self.tables],
            "edges": [edge.to_dict() for edge in self.edges],
            "diagnostics": list(self.diagnostics),
            "summary": self.summary(),
            "raw": self.trace.to_dict(),
        }


@dataclass(frozen=True)
class PositionedTable:
    """Table with the 2D coordinates assigned by the layout engine."""

    table: TableRef
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.table.id

    def to_dict(self) -> Dict[str, object]:
        """Serialize the positioned table to a flat dictionary."""

        data = self.table.to_dict()
        data["x"] = self.x
        data["y"] = self.y
        return data
