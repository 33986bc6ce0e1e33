"""Derived geometry for renderers: group extents and per-cell offsets.

Column indices from the partition search are per row, so offsets are computed
from the cells that precede an item (to its left in an overlapping row, or
above it) rather than from a global column grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig
from app.albumgrid.layout.models import GroupLayout, LayoutPosition


@dataclass(frozen=True)
class CellRect:
    key: str
    x: int
    y: int
    width: int
    height: int


def _rows(positions: Sequence[LayoutPosition]) -> int:
    return max((p.row_max for p in positions), default=-1) + 1


def _cols(positions: Sequence[LayoutPosition]) -> int:
    return max((p.col_max for p in positions), default=-1) + 1


def group_width(positions: Sequence[LayoutPosition]) -> int:
    """Widest row, in canvas units."""

    widths = [0] * _rows(positions)
    for pos in positions:
        for row in range(pos.row_min, pos.row_max + 1):
            widths[row] += pos.width_units
    return max(widths, default=0)


def group_height(positions: Sequence[LayoutPosition]) -> float:
    """Tallest column stack, as a fraction of the canvas height."""

    heights = [0.0] * _cols(positions)
    for pos in positions:
        for col in range(pos.col_min, pos.col_max + 1):
            heights[col] += pos.height_fraction
    return max(heights, default=0.0)


def cell_left(positions: Sequence[LayoutPosition], target: LayoutPosition) -> int:
    sums = [0] * (target.row_max - target.row_min + 1)
    for pos in positions:
        if pos is target or pos.col_max >= target.col_min:
            continue
        start = max(pos.row_min, target.row_min)
        end = min(pos.row_max, target.row_max)
        for row in range(start, end + 1):
            sums[row - target.row_min] += pos.width_units
    return max(sums, default=0)


def cell_top(positions: Sequence[LayoutPosition], target: LayoutPosition) -> float:
    sums = [0.0] * _cols(positions)
    for pos in positions:
        if pos is target or pos.row_max >= target.row_min:
            continue
        for col in range(pos.col_min, pos.col_max + 1):
            sums[col] += pos.height_fraction
    return max(sums, default=0.0)


def cell_rects(
    layout: GroupLayout,
    *,
    width_px: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> List[CellRect]:
    """Scale a layout to pixels for a group drawn `width_px` wide.

    The canvas maps to `width_px`; heights scale by the same factor applied to
    `config.canvas_height`.
    """

    if width_px <= 0:
        raise ValueError("width_px must be > 0")
    if not layout.positions:
        return []

    scale = width_px / layout.canvas_width
    height_px = config.canvas_height * scale
    positions = layout.positions
    rects: List[CellRect] = []
    for pos in positions:
        rects.append(
            CellRect(
                key=pos.key,
                x=int(round(cell_left(positions, pos) * scale)),
                y=int(round(cell_top(positions, pos) * height_px)),
                width=max(1, int(round(pos.width_units * scale))),
                height=max(1, int(round(pos.height_fraction * height_px))),
            )
        )
    return rects
