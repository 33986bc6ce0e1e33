"""Row-partition search for groups the templates do not cover.

Every split of the ordered items into 1-4 contiguous lines is scored. A line
holding items [a, b) is drawn at the single height where its items, sized at
their cropped ratios, exactly fill the canvas width.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig

logger = logging.getLogger(__name__)

MIN_LINES = 1
MAX_LINES = 4
MAX_PER_LINE = 3
# Second line of a three-line layout in a portrait-heavy group.
MAX_PORTRAIT_SECOND_LINE = 4

INVERTED_PENALTY = 1.2
THIN_ROW_PENALTY = 1.5


@dataclass(frozen=True)
class LayoutAttempt:
    line_counts: Tuple[int, ...]
    heights: Tuple[float, ...]


def line_height(cropped: Sequence[float], start: int, end: int, canvas_width: float) -> float:
    return canvas_width / sum(cropped[start:end])


def _compositions(total: int, parts: int) -> Iterator[Tuple[int, ...]]:
    """Ordered splits of `total` into `parts` positive integers, lexicographic."""

    if parts == 1:
        if total >= 1:
            yield (total,)
        return
    for first in range(1, total - parts + 2):
        for rest in _compositions(total - first, parts - 1):
            yield (first,) + rest


def _line_caps(lines: int, average_aspect_ratio: float, config: LayoutConfig) -> List[int]:
    caps = [MAX_PER_LINE] * lines
    if lines == 3 and average_aspect_ratio < config.portrait_second_line:
        caps[1] = MAX_PORTRAIT_SECOND_LINE
    return caps


def enumerate_attempts(
    cropped: Sequence[float],
    average_aspect_ratio: float,
    canvas_width: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> List[LayoutAttempt]:
    count = len(cropped)
    attempts: List[LayoutAttempt] = []
    for lines in range(MIN_LINES, MAX_LINES + 1):
        caps = _line_caps(lines, average_aspect_ratio, config)
        for counts in _compositions(count, lines):
            if any(c > cap for c, cap in zip(counts, caps)):
                continue
            heights = []
            start = 0
            for c in counts:
                heights.append(line_height(cropped, start, start + c, canvas_width))
                start += c
            attempts.append(LayoutAttempt(line_counts=counts, heights=tuple(heights)))
    return attempts


def target_height(canvas_width: int) -> float:
    return canvas_width * 4.0 / 3.0


def score_attempt(
    attempt: LayoutAttempt,
    canvas_width: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> float:
    """Distance from the target height, with shape penalties. Lower is better."""

    diff = abs(sum(attempt.heights) - target_height(canvas_width))

    counts = attempt.line_counts
    if any(counts[i] > counts[i + 1] for i in range(len(counts) - 1)):
        diff *= INVERTED_PENALTY

    if min(attempt.heights) < config.min_row_width:
        diff *= THIN_ROW_PENALTY

    return diff


def find_optimal(
    attempts: Sequence[LayoutAttempt],
    canvas_width: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Optional[LayoutAttempt]:
    """Lowest-scoring attempt; the first one wins ties. None if there are none."""

    optimal: Optional[LayoutAttempt] = None
    optimal_diff = 0.0
    for attempt in attempts:
        diff = score_attempt(attempt, canvas_width, config)
        if optimal is None or diff < optimal_diff:
            optimal = attempt
            optimal_diff = diff

    if optimal is None:
        logger.debug("partition search: no candidates")
    else:
        logger.debug(
            "partition search: %d candidates, chose %s (diff=%.2f)",
            len(attempts),
            optimal.line_counts,
            optimal_diff,
        )
    return optimal
