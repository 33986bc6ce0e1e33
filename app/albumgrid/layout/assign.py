"""Turn a winning partition into positions."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from app.albumgrid.layout.aspect import round_half_up
from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig
from app.albumgrid.layout.models import BorderFlags, Draft, LayoutPosition
from app.albumgrid.layout.search import LayoutAttempt


def assign_positions(
    attempt: LayoutAttempt,
    cropped: Sequence[float],
    ratios: Sequence[float],
    keys: Sequence[str],
    *,
    is_out: bool,
    canvas_width: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Draft:
    """Place items row by row, left to right.

    Each row's rounding remainder (positive or negative) goes to one item:
    the first in the row for outgoing groups, the last otherwise.
    """

    count = len(keys)
    last_line = len(attempt.line_counts) - 1
    positions: List[LayoutPosition] = []
    max_x = 0
    index = 0

    for line, (per_line, line_h) in enumerate(zip(attempt.line_counts, attempt.heights)):
        max_x = max(max_x, per_line - 1)
        height = min(1.0, max(config.min_height_fraction, line_h / config.canvas_height))
        span_left = canvas_width
        row: List[LayoutPosition] = []

        for k in range(per_line):
            width = round_half_up(cropped[index] * line_h)
            span_left -= width

            flags = BorderFlags.NONE
            if line == 0:
                flags |= BorderFlags.TOP
            if line == last_line:
                flags |= BorderFlags.BOTTOM
            if k == 0:
                flags |= BorderFlags.LEFT
            if k == per_line - 1:
                flags |= BorderFlags.RIGHT

            row.append(
                LayoutPosition.cell(
                    keys[index],
                    index,
                    cols=(k, k),
                    rows=(line, line),
                    width=width,
                    height=height,
                    flags=flags,
                    aspect_ratio=ratios[index],
                    is_last=index == count - 1,
                )
            )
            index += 1

        fix = 0 if is_out else len(row) - 1
        row[fix] = replace(
            row[fix],
            width_units=row[fix].width_units + span_left,
            span_size=row[fix].span_size + span_left,
        )
        assert sum(p.width_units for p in row) == canvas_width
        assert all(p.width_units > 0 for p in row)
        positions.extend(row)

    assert index == count
    return Draft(positions=tuple(positions), max_x=max_x)
