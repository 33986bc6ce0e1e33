"""Grouped-media (album) layout entry point.

Given the items of one group, in display order, compute where each one goes on
a virtual canvas `config.canvas_width` units wide. Callers scale the result to
pixels and reconcile with decoded media later; nothing here loads media.

Pipeline: aspect analysis, then one of documents / template / partition
search, then post-processing. Every call builds its result from scratch.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from app.albumgrid.layout.aspect import analyze, cropped_ratios
from app.albumgrid.layout.assign import assign_positions
from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig
from app.albumgrid.layout.documents import layout_documents
from app.albumgrid.layout.models import (
    Draft,
    GroupContext,
    GroupLayout,
    LayoutPosition,
    MediaItem,
    TemplateKind,
)
from app.albumgrid.layout.postprocess import apply_post_processing, effective_canvas_width
from app.albumgrid.layout.search import enumerate_attempts, find_optimal
from app.albumgrid.layout.templates import TEMPLATES, select_kind

logger = logging.getLogger(__name__)


def _empty(canvas_width: int, context: GroupContext, kind: Optional[TemplateKind] = None) -> GroupLayout:
    return GroupLayout(
        positions=(),
        kind=kind,
        max_x=0,
        canvas_width=canvas_width,
        has_caption=context.has_caption,
    )


def _check_invariants(positions, count: int) -> None:
    assert len(positions) == count
    for index, pos in enumerate(positions):
        assert pos.index == index
        assert 0 < pos.height_fraction <= 1, pos
        assert pos.row_max >= pos.row_min and pos.col_max >= pos.col_min, pos
        assert pos.is_last == (index == count - 1)


def compute_group_layout(
    items: Iterable[MediaItem],
    context: Optional[GroupContext] = None,
    *,
    canvas_width: Optional[int] = None,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> GroupLayout:
    """Lay out one group.

    Returns an empty layout for fewer than two items, and when no row
    partition fits the search caps; callers then fall back to stacking items
    individually.

    Raises ValueError if canvas_width is not positive.
    """

    items = list(items)
    if context is None:
        context = GroupContext.for_items(items)
    if canvas_width is not None:
        config = config.for_canvas(canvas_width)

    count = len(items)
    if count <= 1:
        return _empty(config.canvas_width, context)

    summary = analyze(items, config)
    is_documents = context.is_documents or all(it.is_document for it in items)
    kind = select_kind(count, summary, is_documents)
    keys = [it.key for it in items]

    if kind is TemplateKind.DOCUMENTS:
        width = config.canvas_width
        draft = layout_documents(keys, canvas_width=width, config=config)
    else:
        width = effective_canvas_width(config.canvas_width, context, config)
        template = TEMPLATES.get(kind)
        if template is not None:
            draft = template(summary, keys, is_out=context.is_out, canvas_width=width, config=config)
        else:
            draft = _search(summary, keys, context, width, config)
            if draft is None:
                return _empty(width, context, kind)

    positions = apply_post_processing(draft, context, config)
    _check_invariants(positions, count)

    logger.debug(
        "laid out %d items as %s (proportions=%s, avg=%.3f, max_x=%d)",
        count,
        kind.value,
        summary.proportions,
        summary.average_aspect_ratio,
        draft.max_x,
    )
    return GroupLayout(
        positions=positions,
        kind=kind,
        max_x=draft.max_x,
        canvas_width=width,
        has_caption=context.has_caption or any(it.has_caption for it in items),
    )


def _search(summary, keys, context: GroupContext, width: int, config: LayoutConfig) -> Optional[Draft]:
    cropped = cropped_ratios(summary, config)
    attempts = enumerate_attempts(cropped, summary.average_aspect_ratio, width, config)
    optimal = find_optimal(attempts, width, config)
    if optimal is None:
        return None
    return assign_positions(
        optimal,
        cropped,
        summary.ratios,
        keys,
        is_out=context.is_out,
        canvas_width=width,
        config=config,
    )


def layout_group(
    items: Iterable[MediaItem],
    context: Optional[GroupContext] = None,
    *,
    canvas_width: Optional[int] = None,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> List[LayoutPosition]:
    """Positions for `items`, same order; empty when no grid layout applies."""

    return list(compute_group_layout(items, context, canvas_width=canvas_width, config=config).positions)
