"""SELECT list parsing and column-to-table attribution."""

from __future__ import annotations

import logging
import re
from typing import List

from sql_diagram.models import SelectItem
from sql_diagram.resolver import TableRegistry, normalize_identifier, split_alias
from sql_diagram.splitter import split_top_level

logger = logging.getLogger(__name__)

_QUALIFIED = re.compile(r"^([a-zA-Z_]\w*)\.([a-zA-Z_*]\w*)$")
_FUNCTION_CALL = re.compile(r"\w+\s*\(")


def _parse_item(raw: str) -> SelectItem:
    """Classify one SELECT item as qualified column, function or bare column."""

    expression, alias = split_alias(raw)
    qualified = _QUALIFIED.match(expression)
    if qualified:
        return SelectItem(
            raw=raw,
            expression=expression,
            table=qualified.group(1),
            column=qualified.group(2),
            alias=alias,
        )
    is_function = bool(_FUNCTION_CALL.search(expression))
    return SelectItem(
        raw=raw,
        expression=expression,
        table=None,
        column=None if is_function else expression,
        alias=alias,
        is_function=is_function,
    )


def extract_columns(select_part: str) -> List[SelectItem]:
    """Parse a SELECT list into column descriptors.

    An empty list or a bare `*` yields a single unqualified `*` column.
    """

    if not select_part or select_part.strip() == "*":
        return [SelectItem(raw="*", expression="*", table=None, column="*")]
    return [_parse_item(part) for part in split_top_level(select_part, ",")]


def attribute_columns(
    items: List[SelectItem], registry: TableRegistry, diagnostics: List[str]
) -> None:
    """Attach each column to the table its qualifier names.

    Unknown qualifiers get an orphan table so the column stays visible.
    Unqualified columns go to the virtual table, except a bare `*`, which
    belongs to the only FROM/JOIN table when there is exactly one.
    """

    real_tables = registry.real_tables()
    single_source = real_tables[0] if len(real_tables) == 1 else None
    for item in items:
        if item.table is None:
            if item.column == "*" and single_source is not None:
                target = single_source
            else:
                target = registry.virtual()
        else:
            target = registry.find(item.table)
            if target is None:
                target = registry.orphan(item.table)
                diagnostics.append(
                    f"Unknown table reference '{normalize_identifier(item.table)}'"
                    f" for column '{item.raw}'"
                )
                logger.debug("Created orphan table %s", target.id)
        target.columns.append(item.to_column())
