"""Shared test fixtures and synthetic BLP2 builders."""

import shutil
import struct
import tempfile

import pytest

from BLPConverter.config import ConverterConfig

HEADER_SIZE = 1172


def grey_palette():
    """Palette where entry i is (B, G, R, A) = (i, i, i, 255)."""
    return bytes(b for i in range(256) for b in (i, i, i, 255))


def make_blp(
    mips,
    width=4,
    height=4,
    encoding=1,
    alpha_depth=0,
    alpha_encoding=0,
    type_=1,
    has_mips=None,
    palette=None,
    magic=b"BLP2",
    offsets=None,
    lengths=None,
):
    """Build a BLP2 file with *mips* payloads appended after the header.

    ``offsets``/``lengths`` override the computed mip table (16 entries,
    padded with zeros).
    """
    palette = palette if palette is not None else grey_palette()
    computed_offsets = []
    computed_lengths = []
    pos = HEADER_SIZE
    for payload in mips:
        computed_offsets.append(pos)
        computed_lengths.append(len(payload))
        pos += len(payload)

    offsets = list(offsets if offsets is not None else computed_offsets)
    lengths = list(lengths if lengths is not None else computed_lengths)
    offsets += [0] * (16 - len(offsets))
    lengths += [0] * (16 - len(lengths))
    if has_mips is None:
        has_mips = 1 if len(mips) > 1 else 0

    header = struct.pack(
        "<4sIBBBBII16I16I",
        magic, type_, encoding, alpha_depth, alpha_encoding, has_mips,
        width, height, *offsets, *lengths,
    )
    assert len(header) + len(palette) == HEADER_SIZE
    return header + palette + b"".join(mips)


def solid_dxt1_block(r5=31, g6=0, b5=0):
    """One DXT1 block whose 16 texels all use color0."""
    color = (r5 << 11) | (g6 << 5) | b5
    return struct.pack("<HHI", color, 0, 0)


@pytest.fixture
def tmp_dir():
    d = tempfile.mkdtemp()
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def default_config():
    return ConverterConfig()
