"""Hand-tuned arrangements for groups of 2, 3 and 4 items.

Each template owns its decision table, keyed on the proportion letters of the
group ("w" wide, "n" narrow, "q" square) and the average aspect ratio.
Heights are computed in canvas units and stored as fractions of
`config.canvas_height`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, Sequence, Tuple

from app.albumgrid.layout.aspect import NARROW, WIDE, AspectSummary, round_half_up
from app.albumgrid.layout.config import LayoutConfig
from app.albumgrid.layout.models import BorderFlags, Draft, LayoutPosition, TemplateKind

L = BorderFlags.LEFT
R = BorderFlags.RIGHT
T = BorderFlags.TOP
B = BorderFlags.BOTTOM


def select_kind(count: int, summary: AspectSummary, is_documents: bool) -> TemplateKind:
    if is_documents:
        return TemplateKind.DOCUMENTS
    if not summary.force_calc:
        if count == 2:
            return TemplateKind.PAIR
        if count == 3:
            return TemplateKind.TRIPLE
        if count == 4:
            return TemplateKind.QUAD
    return TemplateKind.GENERAL_SEARCH


def _split_half(width: int, is_out: bool) -> Tuple[int, int]:
    # Odd widths: the row's edge item takes the extra unit.
    half = width // 2
    if is_out:
        return width - half, half
    return half, width - half


class _Cells:
    """Builds positions for one template call."""

    def __init__(self, summary: AspectSummary, keys: Sequence[str]):
        self.summary = summary
        self.keys = keys
        self.count = len(keys)

    def place(self, index: int, cols, rows, width, height, flags) -> LayoutPosition:
        return LayoutPosition.cell(
            self.keys[index],
            index,
            cols=cols,
            rows=rows,
            width=width,
            height=height,
            flags=flags,
            aspect_ratio=self.summary.ratios[index],
            is_last=index == self.count - 1,
        )


def layout_pair(
    summary: AspectSummary,
    keys: Sequence[str],
    *,
    is_out: bool,
    canvas_width: int,
    config: LayoutConfig,
) -> Draft:
    cells = _Cells(summary, keys)
    w_max = canvas_width
    h_max = config.canvas_height
    r1, r2 = summary.ratios
    max_aspect_ratio = w_max / h_max

    if (
        summary.proportions == WIDE * 2
        and summary.average_aspect_ratio > 1.4 * max_aspect_ratio
        and r1 - r2 < 0.2
    ):
        # Two similar panoramas: stack them.
        height = round_half_up(min(w_max / r1, w_max / r2, h_max / 2.0)) / h_max
        return Draft(
            positions=(
                cells.place(0, (0, 0), (0, 0), w_max, height, L | R | T),
                cells.place(1, (0, 0), (1, 1), w_max, height, L | R | B),
            ),
            max_x=0,
        )

    if summary.proportions in ("ww", "qq"):
        w1, w2 = _split_half(w_max, is_out)
        width = w_max / 2
        height = round_half_up(min(width / r1, width / r2, h_max)) / h_max
    else:
        w2 = int(max(0.4 * w_max, round_half_up(w_max / r1 / (1.0 / r1 + 1.0 / r2))))
        w1 = w_max - w2
        if w1 < config.min_row_width:
            diff = config.min_row_width - w1
            w1 = config.min_row_width
            w2 -= diff
        height = min(h_max, round_half_up(min(w1 / r1, w2 / r2))) / h_max

    return Draft(
        positions=(
            cells.place(0, (0, 0), (0, 0), w1, height, L | B | T),
            cells.place(1, (1, 1), (0, 0), w2, height, R | B | T),
        ),
        max_x=1,
    )


def layout_triple(
    summary: AspectSummary,
    keys: Sequence[str],
    *,
    is_out: bool,
    canvas_width: int,
    config: LayoutConfig,
) -> Draft:
    cells = _Cells(summary, keys)
    w_max = canvas_width
    h_max = config.canvas_height
    r1, r2, r3 = summary.ratios

    if summary.proportions[0] == NARROW:
        # Portrait on the left, two items stacked on the right.
        third_h = min(h_max * 0.5, round_half_up(r2 * w_max / (r3 + r2)))
        second_h = h_max - third_h
        right_w = int(
            max(
                config.min_row_width,
                min(w_max * 0.5, round_half_up(min(third_h * r3, second_h * r2))),
            )
        )
        left_w = round_half_up(min(h_max * r1 + config.paddings_width, w_max - right_w))

        first = cells.place(0, (0, 0), (0, 1), left_w, 1.0, L | B | T)
        second = cells.place(1, (1, 1), (0, 0), right_w, second_h / h_max, R | T)
        third = cells.place(2, (1, 1), (1, 1), right_w, third_h / h_max, R | B)

        first = replace(first, sibling_heights=(second_h / h_max, third_h / h_max))
        third = replace(third, span_size=w_max, spans_row=True)
        if is_out:
            first = replace(first, span_size=w_max - right_w)
        else:
            second = replace(second, span_size=w_max - left_w)
            third = replace(third, left_span_offset=left_w)
        return Draft(positions=(first, second, third), max_x=1)

    first_h = round_half_up(min(w_max / r1, h_max * 0.66)) / h_max
    w2, w3 = _split_half(w_max, is_out)
    half = w_max / 2
    second_h = min(h_max, round_half_up(min(half / r2, half / r3))) / h_max
    second_h = max(second_h, config.min_height_fraction)

    return Draft(
        positions=(
            cells.place(0, (0, 1), (0, 0), w_max, first_h, L | R | T),
            cells.place(1, (0, 0), (1, 1), w2, second_h, L | B),
            cells.place(2, (1, 1), (1, 1), w3, second_h, R | B),
        ),
        max_x=1,
    )


def layout_quad(
    summary: AspectSummary,
    keys: Sequence[str],
    *,
    is_out: bool,
    canvas_width: int,
    config: LayoutConfig,
) -> Draft:
    cells = _Cells(summary, keys)
    w_max = canvas_width
    h_max = config.canvas_height
    min_w = config.min_row_width
    r1, r2, r3, r4 = summary.ratios

    if summary.proportions[0] == WIDE:
        # Wide item on top, three below.
        h0 = round_half_up(min(w_max / r1, h_max * 0.66)) / h_max
        h = float(round_half_up(w_max / (r2 + r3 + r4)))
        w0 = int(max(min_w, min(w_max * 0.4, h * r2)))
        w2 = int(max(max(min_w, w_max * 0.33), h * r4))
        w1 = w_max - w0 - w2

        if w1 < config.min_middle_width:
            diff = config.min_middle_width - w1
            w1 = config.min_middle_width
            w0 -= diff // 2
            w2 -= diff - diff // 2

        h = max(min(h_max, h) / h_max, config.min_height_fraction)

        return Draft(
            positions=(
                cells.place(0, (0, 2), (0, 0), w_max, h0, L | R | T),
                cells.place(1, (0, 0), (1, 1), w0, h, L | B),
                cells.place(2, (1, 1), (1, 1), w1, h, B),
                cells.place(3, (2, 2), (1, 1), w2, h, R | B),
            ),
            max_x=2,
        )

    # Tall item on the left, three stacked on the right.
    w = max(min_w, round_half_up(h_max / (1.0 / r2 + 1.0 / r3 + 1.0 / r4)))
    h0 = min(0.33, max(config.min_item_height, w / r2) / h_max)
    h1 = min(0.33, max(config.min_item_height, w / r3) / h_max)
    h2 = 1.0 - h0 - h1
    w0 = round_half_up(min(h_max * r1 + config.paddings_width, w_max - w))

    first = cells.place(0, (0, 0), (0, 2), w0, 1.0, L | T | B)
    second = cells.place(1, (1, 1), (0, 0), w, h0, R | T)
    third = cells.place(2, (1, 1), (1, 1), w, h1, R)
    fourth = cells.place(3, (1, 1), (2, 2), w, h2, R | B)

    first = replace(first, sibling_heights=(h0, h1, h2))
    third = replace(third, span_size=w_max, spans_row=True)
    fourth = replace(fourth, span_size=w_max, spans_row=True)
    if is_out:
        first = replace(first, span_size=w_max - w)
    else:
        second = replace(second, span_size=w_max - w0)
        third = replace(third, left_span_offset=w0)
        fourth = replace(fourth, left_span_offset=w0)
    return Draft(positions=(first, second, third, fourth), max_x=1)


TemplateFn = Callable[..., Draft]

TEMPLATES: Dict[TemplateKind, TemplateFn] = {
    TemplateKind.PAIR: layout_pair,
    TemplateKind.TRIPLE: layout_triple,
    TemplateKind.QUAD: layout_quad,
}
