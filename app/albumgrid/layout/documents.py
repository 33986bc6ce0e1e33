"""Stacked layout for groups made only of files or audio."""

from __future__ import annotations

from typing import Sequence

from app.albumgrid.layout.aspect import NEUTRAL_RATIO
from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig
from app.albumgrid.layout.models import FULL_ROW_SENTINEL, BorderFlags, Draft, LayoutPosition


def layout_documents(
    keys: Sequence[str],
    *,
    canvas_width: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Draft:
    """One full-width row per item."""

    count = len(keys)
    height = config.document_row_height / config.canvas_height
    positions = []
    for index, key in enumerate(keys):
        flags = BorderFlags.LEFT | BorderFlags.RIGHT
        if index == 0:
            flags |= BorderFlags.TOP
        if index == count - 1:
            flags |= BorderFlags.BOTTOM

        pos = LayoutPosition(
            key=key,
            index=index,
            col_min=0,
            col_max=0,
            row_min=index,
            row_max=index,
            width_units=canvas_width,
            height_fraction=height,
            aspect_ratio=NEUTRAL_RATIO,
            flags=flags,
            span_size=FULL_ROW_SENTINEL,
            is_edge=True,
            is_last=index == count - 1,
        )
        positions.append(pos)
    return Draft(positions=tuple(positions), max_x=0)
