"""Join condition decomposition into table-to-table edges."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from sql_diagram.models import Edge, JoinClause, JoinCondition
from sql_diagram.resolver import TableRegistry
from sql_diagram.splitter import split_on_keywords, strip_outer_parens

logger = logging.getLogger(__name__)

_BOOLEAN = re.compile(r"\b(?:and|or)\b", re.IGNORECASE)
_COMPARISON = re.compile(
    r"^(.+?)\s*(<>|!=|<=|>=|=|<|>|\bnot\s+in\b|\blike\b|\bin\b)\s*(.+)$",
    re.IGNORECASE | re.DOTALL,
)
_SPACES = re.compile(r"\s+")


def flatten_conditions(on_text: str) -> List[str]:
    """Split an ON clause into atoms over AND/OR, unwrapping parenthesised groups.

    AND and OR are treated alike; no precedence is kept.
    """

    atoms: List[str] = []
    for part in split_on_keywords(strip_outer_parens(on_text), _BOOLEAN):
        unwrapped = strip_outer_parens(part)
        if unwrapped != part.strip():
            atoms.extend(flatten_conditions(unwrapped))
        elif unwrapped:
            atoms.append(unwrapped)
    return atoms


def parse_on_conditions(on_text: str) -> List[JoinCondition]:
    """Parse an ON clause into comparisons; other atoms keep only their text."""

    if not on_text:
        return []
    conditions: List[JoinCondition] = []
    for atom in flatten_conditions(on_text):
        match = _COMPARISON.match(atom)
        if match:
            conditions.append(
                JoinCondition(
                    raw=atom,
                    left=match.group(1).strip(),
                    operator=_SPACES.sub(" ", match.group(2).lower()),
                    right=match.group(3).strip(),
                )
            )
        else:
            conditions.append(JoinCondition(raw=atom))
    return conditions


def split_reference(reference: str) -> Tuple[Optional[str], str]:
    """Split `table.column` into its qualifier and column."""

    parts = reference.split(".")
    if len(parts) >= 2:
        return parts[0], ".".join(parts[1:])
    return None, reference


def build_edges(joins: List[JoinClause], registry: TableRegistry) -> List[Edge]:
    """Emit one edge per comparison joining two different known tables."""

    edges: List[Edge] = []
    for join_index, join in enumerate(joins):
        for condition_index, condition in enumerate(parse_on_conditions(join.on_text)):
            if not condition.is_comparison:
                continue
            left_table, left_column = split_reference(condition.left)
            right_table, right_column = split_reference(condition.right)
            source = registry.find(left_table)
            target = registry.find(right_table)
            if source is None or target is None:
                logger.debug(
                    "Dropped join condition with unresolved table: %s", condition.raw
                )
                continue
            if source.id == target.id:
                continue
            edges.append(
                Edge(
                    id=f"edge_{join_index}_{condition_index}",
                    source=source.id,
                    target=target.id,
                    join_type=join.join_type,
                    condition=condition.raw,
                    source_column=left_column,
                    target_column=right_column,
                    operator=condition.operator,
                )
            )
    return edges
