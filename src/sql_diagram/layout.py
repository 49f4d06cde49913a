"""Circular layout of diagram tables."""

from __future__ import annotations

import math
from typing import Iterable, List, Tuple

from sql_diagram.models import PositionedTable, TableRef

DEFAULT_CENTER: Tuple[float, float] = (430.0, 230.0)
MIN_RADIUS = 150.0
RADIUS_STEP = 40.0


def layout_radius(
    count: int, min_radius: float = MIN_RADIUS, radius_step: float = RADIUS_STEP
) -> float:
    """Return the circle radius used for `count` tables."""

    return max(min_radius, count * radius_step)


def layout(
    tables: Iterable[TableRef],
    center: Tuple[float, float] = DEFAULT_CENTER,
    min_radius: float = MIN_RADIUS,
    radius_step: float = RADIUS_STEP,
) -> List[PositionedTable]:
    """Place tables clockwise on a circle starting at 12 o'clock.

    A single table sits on the center. Positions depend only on table order.
    """

    tables = list(tables)
    center_x, center_y = center
    if len(tables) == 1:
        return [PositionedTable(table=tables[0], x=center_x, y=center_y)]

    radius = layout_radius(len(tables), min_radius, radius_step)
    positioned: List[PositionedTable] = []
    for index, table in enumerate(tables):
        angle = 2 * math.pi * index / len(tables) - math.pi / 2
        positioned.append(
            PositionedTable(
                table=table,
                x=center_x + radius * math.cos(angle),
                y=center_y + radius * math.sin(angle),
            )
        )
    return positioned
