"""Input and output records for grouped-media layouts.

This module is intentionally UI-framework agnostic: widths are integer
virtual-canvas units and heights are fractions of the group's virtual height.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from app.albumgrid.layout.aspect import ratio_from_size

# Span value meaning "occupies the whole row" in the caller's span grid.
FULL_ROW_SENTINEL = 1000


class BorderFlags(enum.IntFlag):
    """Outer edges of the group an item touches."""

    NONE = 0
    LEFT = 1
    RIGHT = 2
    TOP = 4
    BOTTOM = 8


class TemplateKind(enum.Enum):
    PAIR = "pair"
    TRIPLE = "triple"
    QUAD = "quad"
    GENERAL_SEARCH = "general_search"
    DOCUMENTS = "documents"


@dataclass(frozen=True)
class MediaItem:
    """Input item for a group layout.

    aspect_ratio: width / height. None (or any unusable value) means 1.0.
    payload is never read by the engine; callers correlate results by index
    or key.
    """

    key: str
    aspect_ratio: Optional[float] = None
    is_document: bool = False
    has_caption: bool = False
    payload: Any = None

    @classmethod
    def from_size(
        cls,
        key: str,
        width: Optional[float],
        height: Optional[float],
        **kwargs: Any,
    ) -> "MediaItem":
        return cls(key, aspect_ratio=ratio_from_size(width, height), **kwargs)


@dataclass(frozen=True)
class GroupContext:
    is_out: bool = False
    need_share: bool = False
    is_documents: bool = False
    has_caption: bool = False
    # Incoming sender draws an avatar glyph beside the group.
    needs_avatar: bool = False

    @classmethod
    def for_items(
        cls,
        items: Iterable[MediaItem],
        *,
        is_out: bool = False,
        need_share: bool = False,
        needs_avatar: bool = False,
    ) -> "GroupContext":
        """Derive document and caption flags from the items themselves."""

        items = list(items)
        return cls(
            is_out=is_out,
            need_share=need_share,
            is_documents=bool(items) and all(it.is_document for it in items),
            has_caption=any(it.has_caption for it in items),
            needs_avatar=needs_avatar,
        )


@dataclass(frozen=True)
class LayoutPosition:
    key: str
    index: int
    col_min: int
    col_max: int
    row_min: int
    row_max: int
    width_units: int
    height_fraction: float
    aspect_ratio: float
    flags: BorderFlags
    span_size: int
    left_span_offset: int = 0
    is_edge: bool = False
    is_last: bool = False
    sibling_heights: Tuple[float, ...] = ()
    # Span starts at the row's left edge even though the cell sits in a later
    # column (lower stacked siblings of an "L" layout).
    spans_row: bool = False

    @classmethod
    def cell(
        cls,
        key: str,
        index: int,
        *,
        cols: Tuple[int, int],
        rows: Tuple[int, int],
        width: int,
        height: float,
        flags: BorderFlags,
        aspect_ratio: float,
        is_last: bool = False,
    ) -> "LayoutPosition":
        """Place an item; its span starts out equal to its width."""

        return cls(
            key=key,
            index=index,
            col_min=cols[0],
            col_max=cols[1],
            row_min=rows[0],
            row_max=rows[1],
            width_units=int(width),
            height_fraction=float(height),
            aspect_ratio=aspect_ratio,
            flags=flags,
            span_size=int(width),
            is_last=is_last,
        )

    def has_flags(self, flags: BorderFlags) -> bool:
        return self.flags & flags == flags

    @property
    def is_full_row_span(self) -> bool:
        return self.span_size == FULL_ROW_SENTINEL


@dataclass(frozen=True)
class Draft:
    """Positions produced by one layout pass, before post-processing."""

    positions: Tuple[LayoutPosition, ...]
    max_x: int


@dataclass(frozen=True)
class GroupLayout:
    """Complete result of one layout call."""

    positions: Tuple[LayoutPosition, ...]
    kind: Optional[TemplateKind]
    max_x: int
    canvas_width: int
    has_caption: bool = False

    @property
    def has_sibling(self) -> bool:
        return any(p.sibling_heights for p in self.positions)

    def find_with_flags(self, flags: BorderFlags) -> Optional[LayoutPosition]:
        """First position whose border flags contain all of `flags`."""

        for pos in self.positions:
            if pos.has_flags(flags):
                return pos
        return None

    def primary(self) -> Optional[LayoutPosition]:
        return self.find_with_flags(BorderFlags.TOP | BorderFlags.LEFT)

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self):
        return iter(self.positions)
