"""Tests for batch conversion and failure accounting."""

import os
import shutil
import tempfile
import unittest
from unittest import mock

import numpy as np
from PIL import Image

from BLPConverter.config import ConverterConfig
from BLPConverter.converter import BatchConverter, BatchResult, format_header_info
from BLPConverter.core import ConversionJob, parse_header

from conftest import make_blp


def _write(path, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    return path


class TestBatchConverter(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.src = os.path.join(self.tmpdir, "in")
        self.out = os.path.join(self.tmpdir, "out")
        self.config = ConverterConfig(output_dir=self.out, jobs=2, show_progress=False)
        self.good = make_blp([bytes([0, 1, 2, 3]), bytes([9])], width=2, height=2)

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_converts_single_file(self):
        path = _write(os.path.join(self.src, "tex.blp"), self.good)
        result = BatchConverter(self.config).run([path])
        self.assertEqual((result.expected, result.converted), (1, 1))
        self.assertTrue(result.ok)
        with Image.open(os.path.join(self.out, "tex.png")) as img:
            self.assertEqual(img.size, (2, 2))
            self.assertEqual(img.getpixel((1, 1)), (3, 3, 3, 255))

    def test_mip_level_option(self):
        path = _write(os.path.join(self.src, "tex.blp"), self.good)
        self.config.mip_level = 5
        BatchConverter(self.config).run([path])
        with Image.open(os.path.join(self.out, "tex.png")) as img:
            self.assertEqual(img.size, (1, 1))
            self.assertEqual(img.getpixel((0, 0)), (9, 9, 9, 255))

    def test_bad_file_does_not_stop_batch(self):
        for i in range(3):
            _write(os.path.join(self.src, f"good{i}.blp"), self.good)
        _write(os.path.join(self.src, "bad.blp"), b"BLP1" + bytes(2000))
        _write(os.path.join(self.src, "short.blp"), self.good[:-2])

        with self.assertLogs("blp_converter", level="ERROR") as cm:
            result = BatchConverter(self.config).run([self.src])

        self.assertEqual(result.expected, 5)
        self.assertEqual(result.converted, 3)
        self.assertEqual(result.failed, 2)
        self.assertFalse(result.ok)
        joined = "\n".join(cm.output)
        self.assertIn("unsupported format BLP1", joined)
        self.assertIn("Failed to convert 2 image(s)", joined)
        for i in range(3):
            self.assertTrue(os.path.exists(os.path.join(self.out, "in", f"good{i}.png")))

    def test_sequential_and_parallel_agree(self):
        for i in range(6):
            _write(os.path.join(self.src, f"t{i}.blp"), self.good)
        self.config.jobs = 1
        seq = BatchConverter(self.config).run([self.src])
        self.config.jobs = 4
        par = BatchConverter(self.config).run([self.src])
        self.assertEqual((seq.expected, seq.converted), (par.expected, par.converted))

    def test_tga_output(self):
        path = _write(os.path.join(self.src, "tex.blp"), self.good)
        self.config.output_format = "tga"
        BatchConverter(self.config).run([path])
        self.assertTrue(os.path.exists(os.path.join(self.out, "tex.tga")))

    def test_infos_mode_prints_and_writes_nothing(self):
        path = _write(os.path.join(self.src, "tex.blp"), self.good)
        self.config.infos = True
        with mock.patch("builtins.print") as fake_print:
            result = BatchConverter(self.config).run([path])
        self.assertTrue(result.ok)
        self.assertFalse(os.path.exists(self.out))
        text = fake_print.call_args[0][0]
        self.assertIn("Infos about `tex.blp`", text)
        self.assertIn("Uncompressed paletted image, no alpha", text)

    def test_unreadable_file_counts_as_failure(self):
        converter = BatchConverter(self.config)
        job = ConversionJob(os.path.join(self.src, "gone.blp"),
                            os.path.join(self.out, "gone.png"))
        with self.assertLogs("blp_converter", level="ERROR"):
            self.assertFalse(converter.convert_file(job))

    def test_save_failure_is_reported(self):
        path = _write(os.path.join(self.src, "tex.blp"), self.good)
        with mock.patch("BLPConverter.converter.save_pixels",
                        side_effect=OSError("disk full")):
            with self.assertLogs("blp_converter", level="ERROR") as cm:
                result = BatchConverter(self.config).run([path])
        self.assertEqual(result.converted, 0)
        self.assertTrue(any("Failed to save the image" in m for m in cm.output))

    def test_unexpected_worker_error_is_counted(self):
        path = _write(os.path.join(self.src, "tex.blp"), self.good)
        with mock.patch("BLPConverter.converter.decode_mipmap",
                        side_effect=RuntimeError("boom")):
            with self.assertLogs("blp_converter", level="ERROR"):
                result = BatchConverter(self.config).run([path])
        self.assertEqual(result.failed, 1)

    def test_injected_codec_is_used_for_dxt(self):
        data = make_blp([bytes(8)], width=4, height=4, encoding=2)
        path = _write(os.path.join(self.src, "dxt.blp"), data)
        calls = []

        def codec(window, width, height, variant):
            calls.append(variant)
            return np.full((height, width, 4), 128, dtype=np.uint8)

        result = BatchConverter(self.config, codec=codec).run([path])
        self.assertTrue(result.ok)
        self.assertEqual(len(calls), 1)


class TestBatchResult(unittest.TestCase):
    def test_counts(self):
        result = BatchResult(expected=4, converted=3)
        self.assertEqual(result.failed, 1)
        self.assertFalse(result.ok)
        self.assertTrue(BatchResult().ok)


class TestHeaderInfo(unittest.TestCase):
    def test_report_fields(self):
        header = parse_header(make_blp([bytes(64), bytes(16)], width=8, height=8,
                                       encoding=3))
        text = format_header_info("x.blp", header)
        self.assertEqual(text, (
            "Infos about `x.blp`:\n"
            "  - Version:    BLP2\n"
            "  - Format:     Uncompressed raw 32-bit BGRA\n"
            "  - Dimensions: 8x8\n"
            "  - Mip levels: 2\n"
        ))


if __name__ == "__main__":
    unittest.main(verbosity=2)
