import shutil
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from app.albumgrid.utils.media_size import media_item_for_path, read_media_size


class TestMediaSize(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp_path = Path(tempfile.mkdtemp(prefix="albumgrid-media-"))

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp_path, ignore_errors=True)

    def _image(self, name: str, size, orientation=None) -> Path:
        path = self.tmp_path / name
        img = Image.new("RGB", size, (10, 20, 30))
        if orientation is None:
            img.save(path)
        else:
            exif = Image.Exif()
            exif[0x0112] = orientation
            img.save(path, exif=exif.tobytes())
        return path

    def test_plain_image_size(self):
        path = self._image("wide.png", (40, 20))
        self.assertEqual(read_media_size(path), (40, 20))

    def test_rotated_jpeg_swaps_dimensions(self):
        path = self._image("rotated.jpg", (40, 20), orientation=6)
        self.assertEqual(read_media_size(path), (20, 40))
        path = self._image("upside_down.jpg", (40, 20), orientation=3)
        self.assertEqual(read_media_size(path), (40, 20))

    def test_item_for_image(self):
        path = self._image("photo.png", (30, 60))
        item = media_item_for_path(path)
        self.assertEqual(item.key, "photo.png")
        self.assertAlmostEqual(item.aspect_ratio, 0.5)
        self.assertFalse(item.is_document)
        self.assertEqual(item.payload, str(path))

    def test_item_for_video_and_document(self):
        video = media_item_for_path(self.tmp_path / "clip.MP4", key="v")
        self.assertEqual(video.key, "v")
        self.assertIsNone(video.aspect_ratio)
        self.assertFalse(video.is_document)

        doc = media_item_for_path(self.tmp_path / "report.pdf")
        self.assertTrue(doc.is_document)

    def test_unreadable_image_raises(self):
        path = self.tmp_path / "broken.jpg"
        path.write_text("not an image")
        with self.assertRaises(OSError):
            read_media_size(path)


if __name__ == "__main__":
    unittest.main()
