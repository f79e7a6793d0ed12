"""Tests for BLP reading and image writing."""

import os
import shutil
import tempfile
import unittest

import numpy as np
from PIL import Image

from BLPConverter.core import bgra_to_rgba, read_blp, save_pixels


def _bgra(h=2, w=3):
    pixels = np.zeros((h, w, 4), dtype=np.uint8)
    pixels[:, :, 0] = 11   # B
    pixels[:, :, 1] = 22   # G
    pixels[:, :, 2] = 33   # R
    pixels[:, :, 3] = 44   # A
    return pixels


class TestChannelOrder(unittest.TestCase):
    def test_bgra_to_rgba(self):
        rgba = bgra_to_rgba(_bgra())
        self.assertEqual(rgba[0, 0].tolist(), [33, 22, 11, 44])
        self.assertTrue(rgba.flags["C_CONTIGUOUS"])

    def test_rejects_wrong_shape(self):
        with self.assertRaises(ValueError):
            bgra_to_rgba(np.zeros((2, 2, 3), dtype=np.uint8))


class TestSavePixels(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_png_roundtrip_keeps_rgba(self):
        path = os.path.join(self.tmpdir, "out.png")
        save_pixels(_bgra(), path, "png")
        with Image.open(path) as img:
            self.assertEqual(img.format, "PNG")
            self.assertEqual(img.mode, "RGBA")
            self.assertEqual(img.size, (3, 2))
            self.assertEqual(img.getpixel((0, 0)), (33, 22, 11, 44))

    def test_tga_output(self):
        path = os.path.join(self.tmpdir, "out.tga")
        save_pixels(_bgra(), path, "tga")
        with Image.open(path) as img:
            self.assertEqual(img.format, "TGA")
            self.assertEqual(img.mode, "RGBA")
            self.assertEqual(img.getpixel((2, 1)), (33, 22, 11, 44))

    def test_first_row_is_top_row(self):
        pixels = _bgra(h=2, w=1)
        pixels[0, 0] = [0, 0, 255, 255]
        pixels[1, 0] = [255, 0, 0, 255]
        path = os.path.join(self.tmpdir, "rows.png")
        save_pixels(pixels, path)
        with Image.open(path) as img:
            self.assertEqual(img.getpixel((0, 0)), (255, 0, 0, 255))
            self.assertEqual(img.getpixel((0, 1)), (0, 0, 255, 255))

    def test_creates_parent_dirs_and_leaves_no_temp(self):
        path = os.path.join(self.tmpdir, "a", "b", "out.png")
        save_pixels(_bgra(), path)
        self.assertTrue(os.path.exists(path))
        self.assertEqual(os.listdir(os.path.dirname(path)), ["out.png"])

    def test_unknown_format_rejected(self):
        with self.assertRaises(ValueError):
            save_pixels(_bgra(), os.path.join(self.tmpdir, "x.bmp"), "bmp")

    def test_empty_image_rejected(self):
        with self.assertRaises(ValueError):
            save_pixels(np.zeros((0, 4, 4), dtype=np.uint8),
                        os.path.join(self.tmpdir, "empty.png"))


class TestReadBlp(unittest.TestCase):
    def test_reads_bytes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "a.blp")
            with open(path, "wb") as f:
                f.write(b"BLP2abc")
            self.assertEqual(read_blp(path), b"BLP2abc")

    def test_missing_file_raises_oserror(self):
        with self.assertRaises(OSError):
            read_blp(os.path.join(tempfile.gettempdir(), "does-not-exist.blp"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
