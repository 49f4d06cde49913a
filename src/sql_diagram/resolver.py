"""Table expression parsing and table resolution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from sql_diagram.models import VIRTUAL_TABLE_ID, TableRef
from sql_diagram.splitter import matching_paren

_ALIASED = re.compile(r"^(.+?)\s+(?:as\s+)?([a-zA-Z_]\w*)$", re.IGNORECASE)
_DOTTED_NAME = re.compile(r"^([a-zA-Z_][\w.]*)$")
_TRAILING_ALIAS = re.compile(r"^\s*(?:as\s+)?([a-zA-Z_]\w*)", re.IGNORECASE)
_QUOTE_CHARS = re.compile(r"[\"`']")


@dataclass(frozen=True)
class ParsedTable:
    """Table expression split into name and alias."""

    name: str
    alias: Optional[str]
    is_subquery: bool = False


def normalize_identifier(identifier: Optional[str]) -> Optional[str]:
    """Strip quote characters and lowercase an identifier."""

    if not identifier:
        return identifier
    return _QUOTE_CHARS.sub("", identifier).lower()


def last_segment(name: str) -> str:
    """Return the last dot-separated segment of a name."""

    return name.split(".")[-1]


def table_key(name: str, alias: Optional[str]) -> str:
    """Return the registry key: the normalized alias, else the last name segment."""

    return normalize_identifier(alias or last_segment(name)) or ""


def split_alias(expression: str) -> Tuple[str, Optional[str]]:
    """Split `expr [AS] alias` into its expression and alias."""

    match = _ALIASED.match(expression)
    if match:
        return match.group(1).strip(), match.group(2)
    return expression, None


def parse_table_and_alias(table_expr: str) -> ParsedTable:
    """Parse a FROM or JOIN table expression.

    A leading parenthesised group is an opaque subquery whose trailing
    identifier, optionally after AS, is its alias. Otherwise `name [AS] alias`
    is tried before a bare dotted name; anything else is kept verbatim as the
    table name.
    """

    expr = table_expr.strip()
    if expr.startswith("("):
        close = matching_paren(expr, 0)
        if close is not None:
            alias_match = _TRAILING_ALIAS.match(expr[close + 1 :])
            return ParsedTable(
                name=expr[: close + 1],
                alias=alias_match.group(1) if alias_match else None,
                is_subquery=True,
            )

    name, alias = split_alias(expr)
    if alias is not None:
        return ParsedTable(name=name, alias=alias)
    match = _DOTTED_NAME.match(expr)
    if match:
        return ParsedTable(name=match.group(1), alias=None)
    return ParsedTable(name=expr, alias=None)


class TableRegistry:
    """Tables of one analysis call, keyed by id in first-registration order."""

    def __init__(self) -> None:
        self.tables: Dict[str, TableRef] = {}

    def __contains__(self, table_id: str) -> bool:
        return table_id in self.tables

    def __len__(self) -> int:
        return len(self.tables)

    def register(self, table_expr: str) -> TableRef:
        """Register a FROM/JOIN table expression; the first table with an id wins."""

        parsed = parse_table_and_alias(table_expr)
        key = table_key(parsed.name, parsed.alias)
        existing = self.tables.get(key)
        if existing is not None:
            return existing
        table = TableRef(
            id=key,
            name=parsed.name,
            alias=parsed.alias,
            is_subquery=parsed.is_subquery,
            raw=table_expr,
        )
        self.tables[key] = table
        return table

    def find(self, reference: Optional[str]) -> Optional[TableRef]:
        """Resolve a qualifier by id, then by alias or trailing name segment."""

        key = normalize_identifier(reference)
        if not key:
            return None
        if key in self.tables:
            return self.tables[key]
        for table in self.tables.values():
            if table.is_virtual:
                continue
            if normalize_identifier(table.alias) == key:
                return table
            if normalize_identifier(last_segment(table.name)) == key:
                return table
        return None

    def orphan(self, reference: str) -> TableRef:
        """Synthesize a placeholder for a qualifier no table answers to."""

        key = normalize_identifier(reference) or reference
        table = TableRef(id=key, name=key, is_orphan=True)
        self.tables[key] = table
        return table

    def virtual(self) -> TableRef:
        """Return the bucket for unqualified columns, creating it on first use."""

        table = self.tables.get(VIRTUAL_TABLE_ID)
        if table is None:
            table = TableRef(id=VIRTUAL_TABLE_ID, name="Unspecified", is_virtual=True)
            self.tables[VIRTUAL_TABLE_ID] = table
        return table

    def real_tables(self) -> List[TableRef]:
        """Return tables that came from FROM or JOIN clauses."""

        return [
            table
            for table in self.tables.values()
            if not (table.is_orphan or table.is_virtual)
        ]

    def to_list(self) -> List[TableRef]:
        return list(self.tables.values())
