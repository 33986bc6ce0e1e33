"""Adjustments applied to every layout after it is placed.

* Span padding: the column facing away from the sender (leading column for
  outgoing groups, trailing column for incoming ones) gets extra span in the
  caller's span grid. Row-spanning siblings always reach that side.
* Edge marking: items touching the sender's side absorb reserved space.
* Avatar reservation: incoming groups whose sender shows an avatar reserve
  `avatar_reserve` units on each row's edge item.

Full-row sentinel spans are never resized.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Tuple

from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig
from app.albumgrid.layout.models import (
    FULL_ROW_SENTINEL,
    BorderFlags,
    Draft,
    GroupContext,
    LayoutPosition,
)


def effective_canvas_width(canvas_width: int, context: GroupContext, config: LayoutConfig) -> int:
    if context.need_share:
        return canvas_width - config.share_margin
    return canvas_width


def effective_span_padding(context: GroupContext, config: LayoutConfig) -> int:
    if context.need_share:
        return config.span_padding + config.share_margin
    return config.span_padding


def apply_post_processing(
    draft: Draft,
    context: GroupContext,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Tuple[LayoutPosition, ...]:
    padding = effective_span_padding(context, config)
    reserve = config.avatar_reserve if (not context.is_out and context.needs_avatar) else 0

    out = []
    for pos in draft.positions:
        span = pos.span_size
        width = pos.width_units
        left_offset = pos.left_span_offset
        is_edge = pos.is_edge
        is_right = bool(pos.flags & BorderFlags.RIGHT)

        if context.is_out:
            pad = pos.col_min == 0 or pos.spans_row
            is_edge = is_edge or is_right
        else:
            pad = pos.col_max == draft.max_x or is_right or pos.spans_row
            is_edge = is_edge or bool(pos.flags & BorderFlags.LEFT)

        if pad and span != FULL_ROW_SENTINEL:
            span += padding

        if reserve:
            if is_edge:
                if span != FULL_ROW_SENTINEL:
                    span += reserve
                width += reserve
            elif is_right:
                # The avatar column is shared by the whole row.
                if left_offset:
                    left_offset += reserve
                elif span != FULL_ROW_SENTINEL:
                    span -= reserve

        out.append(
            replace(
                pos,
                span_size=span,
                width_units=width,
                left_span_offset=left_offset,
                is_edge=is_edge,
            )
        )
    return tuple(out)
