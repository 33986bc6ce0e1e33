"""Aspect-ratio normalization and group-level proportion analysis."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig

NEUTRAL_RATIO = 1.0

WIDE = "w"
NARROW = "n"
SQUARE = "q"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_ratio(value: Optional[float]) -> float:
    """Return a usable width/height ratio; unusable input becomes 1.0."""

    if value is None:
        return NEUTRAL_RATIO
    try:
        ratio = float(value)
    except (TypeError, ValueError):
        return NEUTRAL_RATIO
    if not math.isfinite(ratio) or ratio <= 0:
        return NEUTRAL_RATIO
    return ratio


def ratio_from_size(width: Optional[float], height: Optional[float]) -> float:
    if not width or not height or width <= 0 or height <= 0:
        return NEUTRAL_RATIO
    return normalize_ratio(width / height)


def classify(ratio: float, config: LayoutConfig = DEFAULT_CONFIG) -> str:
    if ratio > config.wide_ratio:
        return WIDE
    if ratio < config.narrow_ratio:
        return NARROW
    return SQUARE


@dataclass(frozen=True)
class AspectSummary:
    ratios: Tuple[float, ...]
    proportions: str
    average_aspect_ratio: float
    force_calc: bool

    @property
    def count(self) -> int:
        return len(self.ratios)


def analyze(items: Iterable, config: LayoutConfig = DEFAULT_CONFIG) -> AspectSummary:
    """Summarize the ratios of `items` (anything with an `aspect_ratio`)."""

    ratios = tuple(normalize_ratio(getattr(it, "aspect_ratio", None)) for it in items)
    proportions = "".join(classify(r, config) for r in ratios)
    average = sum(ratios) / len(ratios) if ratios else NEUTRAL_RATIO
    force_calc = any(r > config.force_calc_ratio for r in ratios)
    return AspectSummary(
        ratios=ratios,
        proportions=proportions,
        average_aspect_ratio=average,
        force_calc=force_calc,
    )


def cropped_ratios(summary: AspectSummary, config: LayoutConfig = DEFAULT_CONFIG) -> Tuple[float, ...]:
    """Bias each ratio toward the group's dominant orientation, then clamp."""

    landscape = summary.average_aspect_ratio > config.landscape_bias
    out = []
    for r in summary.ratios:
        biased = max(1.0, r) if landscape else min(1.0, r)
        out.append(max(config.cropped_min, min(config.cropped_max, biased)))
    return tuple(out)
