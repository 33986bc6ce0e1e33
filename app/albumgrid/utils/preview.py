"""Draw a computed group layout as coloured boxes, for eyeballing results."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw

from app.albumgrid.layout.config import DEFAULT_CONFIG, LayoutConfig
from app.albumgrid.layout.geometry import cell_rects, group_height, group_width
from app.albumgrid.layout.models import BorderFlags, GroupLayout

PALETTE = [
    (66, 133, 244),
    (219, 68, 55),
    (244, 180, 0),
    (15, 157, 88),
    (171, 71, 188),
    (0, 172, 193),
    (255, 112, 67),
    (158, 157, 36),
    (92, 107, 192),
    (240, 98, 146),
]
BACKGROUND = (245, 245, 245)
EDGE_MARK = (0, 0, 0)


def render_preview(
    layout: GroupLayout,
    *,
    width_px: int = 400,
    gap_px: int = 2,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Image.Image:
    """Render `layout` to an RGB image `width_px` wide.

    Edge items get a thin black bar on the side they absorb reserved space.
    """
    if width_px <= 0:
        raise ValueError("width_px must be > 0")
    if gap_px < 0:
        raise ValueError("gap_px must be >= 0")

    scale = width_px / layout.canvas_width
    canvas_w = max(1, int(round(group_width(layout.positions) * scale)))
    canvas_h = max(1, int(round(group_height(layout.positions) * config.canvas_height * scale)))
    img = Image.new("RGB", (canvas_w, canvas_h), BACKGROUND)
    draw = ImageDraw.Draw(img)

    for pos, rect in zip(layout.positions, cell_rects(layout, width_px=width_px, config=config)):
        x0 = rect.x + gap_px // 2
        y0 = rect.y + gap_px // 2
        x1 = max(x0, rect.x + rect.width - 1 - gap_px // 2)
        y1 = max(y0, rect.y + rect.height - 1 - gap_px // 2)
        draw.rectangle([x0, y0, x1, y1], fill=PALETTE[pos.index % len(PALETTE)])
        draw.text((x0 + 4, y0 + 4), str(pos.index), fill=(255, 255, 255))

        if pos.is_edge:
            if pos.flags & BorderFlags.LEFT:
                draw.line([x0, y0, x0, y1], fill=EDGE_MARK, width=2)
            elif pos.flags & BorderFlags.RIGHT:
                draw.line([x1, y0, x1, y1], fill=EDGE_MARK, width=2)
    return img


def save_preview(layout: GroupLayout, path: str | Path, *, width_px: int = 400, config: Optional[LayoutConfig] = None) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    render_preview(layout, width_px=width_px, config=config or DEFAULT_CONFIG).save(out)
    return out
