from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from app.albumgrid.layout.group import compute_group_layout
from app.albumgrid.layout.models import GroupContext, GroupLayout, MediaItem
from app.albumgrid.utils.media_size import media_item_for_path
from app.albumgrid.utils.preview import save_preview


def build_items(ratios: Sequence[float], paths: Sequence[str], documents: bool = False) -> List[MediaItem]:
    items = [MediaItem(f"r{i}", aspect_ratio=r, is_document=documents) for i, r in enumerate(ratios)]
    items.extend(media_item_for_path(p) for p in paths)
    return items


def format_layout(layout: GroupLayout) -> List[str]:
    if not layout.positions:
        return ["(no grid layout; show items individually)"]
    lines = [f"kind={layout.kind.value} canvas={layout.canvas_width} max_x={layout.max_x}"]
    for pos in layout.positions:
        flags = "|".join(f.name for f in type(pos.flags) if f.value and pos.flags & f) or "-"
        line = (
            f"[{pos.index}] {pos.key}: cols {pos.col_min}-{pos.col_max} rows {pos.row_min}-{pos.row_max}"
            f" w={pos.width_units} h={pos.height_fraction:.3f} span={pos.span_size}"
            f" flags={flags}"
        )
        if pos.left_span_offset:
            line += f" left_offset={pos.left_span_offset}"
        if pos.is_edge:
            line += " edge"
        if pos.sibling_heights:
            line += " siblings=" + ",".join(f"{h:.3f}" for h in pos.sibling_heights)
        lines.append(line)
    return lines


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Lay out a media group and print the positions")
    parser.add_argument("--ratio", type=float, action="append", default=[], help="Item aspect ratio w/h (repeatable)")
    parser.add_argument("--image", action="append", default=[], help="Media file path (repeatable)")
    parser.add_argument("--canvas-width", type=int, default=None, help="Virtual canvas width in units")
    parser.add_argument("--outgoing", action="store_true", help="Group was sent by the local user")
    parser.add_argument("--share", action="store_true", help="Reserve room for a forward button")
    parser.add_argument("--avatar", action="store_true", help="Incoming sender shows an avatar")
    parser.add_argument("--documents", action="store_true", help="Treat ratio items as file attachments")
    parser.add_argument("--preview", default=None, help="Write a PNG preview to this path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    items = build_items(args.ratio, args.image, documents=args.documents)
    context = GroupContext.for_items(
        items,
        is_out=args.outgoing,
        need_share=args.share,
        needs_avatar=args.avatar,
    )
    layout = compute_group_layout(items, context, canvas_width=args.canvas_width)
    for line in format_layout(layout):
        print(line)

    if args.preview and layout.positions:
        print(f"Preview: {save_preview(layout, args.preview)}")


if __name__ == "__main__":
    main()
