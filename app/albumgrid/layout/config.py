"""Engine constants for grouped-media layouts.

All sizes are in virtual canvas units. The canvas is `canvas_width` units wide
and `canvas_height` units tall; callers scale the result to screen pixels.

The ratio thresholds are empirically tuned presentation parameters. Change
them only together with a visual review of the affected templates.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class LayoutConfig:
    canvas_width: int = 800
    canvas_height: float = 814.0

    # Degenerate-row threshold for the partition search, also the minimum
    # column width used by the templates.
    min_row_width: int = 266
    min_item_height: float = 120.0
    min_row_height: float = 100.0
    min_middle_width: int = 58
    # Extra width allowed for the tall item of an "L" layout.
    paddings_width: int = 88

    avatar_reserve: int = 108
    share_margin: int = 50
    span_padding: int = 200
    document_row_height: float = 100.0

    wide_ratio: float = 1.2
    narrow_ratio: float = 0.8
    force_calc_ratio: float = 2.0
    landscape_bias: float = 1.1
    portrait_second_line: float = 0.85
    cropped_min: float = 0.66667
    cropped_max: float = 1.7

    def __post_init__(self) -> None:
        if self.canvas_width <= 0:
            raise ValueError("canvas_width must be > 0")
        if self.canvas_height <= 0:
            raise ValueError("canvas_height must be > 0")
        if self.min_row_width <= 0:
            raise ValueError("min_row_width must be > 0")
        if self.min_middle_width <= 0:
            raise ValueError("min_middle_width must be > 0")
        if self.min_row_height <= 0 or self.min_row_height > self.canvas_height:
            raise ValueError("min_row_height must be in (0, canvas_height]")
        if self.avatar_reserve < 0:
            raise ValueError("avatar_reserve must be >= 0")
        if self.share_margin < 0 or self.share_margin >= self.canvas_width:
            raise ValueError("share_margin must be >= 0 and < canvas_width")
        if self.span_padding < 0:
            raise ValueError("span_padding must be >= 0")
        if not 0 < self.document_row_height <= self.canvas_height:
            raise ValueError("document_row_height must be in (0, canvas_height]")
        if not 0 < self.narrow_ratio <= self.wide_ratio:
            raise ValueError("narrow_ratio must be > 0 and <= wide_ratio")
        if not 0 < self.cropped_min <= self.cropped_max:
            raise ValueError("cropped_min must be > 0 and <= cropped_max")

    @property
    def min_height_fraction(self) -> float:
        return self.min_row_height / self.canvas_height

    def for_canvas(self, canvas_width: int) -> "LayoutConfig":
        """Same config on a canvas of another width.

        Width-derived minimums scale with the canvas; heights do not.
        """

        if canvas_width <= 0:
            raise ValueError("canvas_width must be > 0")
        if canvas_width == self.canvas_width:
            return self
        scale = canvas_width / self.canvas_width
        return replace(
            self,
            canvas_width=int(canvas_width),
            min_row_width=max(1, int(self.min_row_width * scale)),
            min_middle_width=max(1, int(self.min_middle_width * scale)),
            paddings_width=int(self.paddings_width * scale),
        )

    def with_overrides(self, **overrides) -> "LayoutConfig":
        """Return a validated copy with the given fields replaced."""

        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"unknown layout option(s): {', '.join(unknown)}")
        return replace(self, **overrides)


DEFAULT_CONFIG = LayoutConfig()
