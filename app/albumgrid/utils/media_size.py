from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from PIL import ExifTags, Image

from app.albumgrid.layout.models import MediaItem

IMAGE_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".tif", ".tiff"}
VIDEO_SUFFIXES = {".mp4", ".webm", ".mkv", ".mov"}

# EXIF orientations that rotate the stored pixels by 90 or 270 degrees.
_ROTATED_ORIENTATIONS = {5, 6, 7, 8}


def read_media_size(path: str | Path) -> Tuple[int, int]:
    """Display size (width, height) of an image file.

    Sizes are reported as shown, so EXIF-rotated images swap width and
    height. Raises PIL.UnidentifiedImageError / OSError for unreadable files.
    """
    with Image.open(path) as img:
        width, height = img.size
        orientation = img.getexif().get(ExifTags.Base.Orientation, 1)
    if orientation in _ROTATED_ORIENTATIONS:
        return height, width
    return width, height


def media_item_for_path(path: str | Path, key: Optional[str] = None) -> MediaItem:
    """Build a layout item for a file on disk.

    Images are probed for their size; videos are visual with an unknown ratio;
    anything else is treated as a document attachment.
    """
    p = Path(path)
    key = key or p.name
    suffix = p.suffix.lower()
    if suffix in IMAGE_SUFFIXES:
        width, height = read_media_size(p)
        return MediaItem.from_size(key, width, height, payload=str(p))
    if suffix in VIDEO_SUFFIXES:
        return MediaItem(key, aspect_ratio=None, payload=str(p))
    return MediaItem(key, is_document=True, payload=str(p))
