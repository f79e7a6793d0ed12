"""Pixel unpacking for every BLP2 payload format.

All routines return a fresh ``(height, width, 4)`` uint8 array in BGRA order
and check the payload length before reading it.
"""

import logging
from typing import Optional

import numpy as np

from .bcn import BlockCodec, BlockCodecAdapter, BlockVariant
from .errors import TruncatedPixelData, UnsupportedFormat
from .formats import BLPFormat, friendly_name
from .header import BLPHeader, BytesLike
from .mipmap import locate_mipmap

logger = logging.getLogger("blp_converter.unpack")


def _require(window: BytesLike, expected: int, kind: str) -> np.ndarray:
    """Return *window* as a uint8 array once it holds at least *expected* bytes."""
    if len(window) < expected:
        raise TruncatedPixelData(expected, len(window), kind=kind)
    if expected == 0:
        return np.zeros(0, dtype=np.uint8)
    return np.frombuffer(window, dtype=np.uint8, count=expected)


def _palette_colors(buf: np.ndarray, palette: np.ndarray, count: int) -> np.ndarray:
    return palette[buf[:count]]


def unpack_paletted_no_alpha(window: BytesLike, palette: np.ndarray,
                             width: int, height: int) -> np.ndarray:
    count = width * height
    buf = _require(window, count, "paletted")
    pixels = _palette_colors(buf, palette, count)
    pixels[:, 3] = 0xFF
    return pixels.reshape(height, width, 4)


def unpack_paletted_alpha1(window: BytesLike, palette: np.ndarray,
                           width: int, height: int) -> np.ndarray:
    """Palette colors plus a trailing 1-bit alpha bitmap, LSB first."""
    count = width * height
    buf = _require(window, count + (count + 7) // 8, "paletted")
    pixels = _palette_colors(buf, palette, count)
    bits = np.unpackbits(buf[count:], bitorder="little")[:count]
    pixels[:, 3] = bits * 0xFF
    return pixels.reshape(height, width, 4)


def unpack_paletted_alpha4(window: BytesLike, palette: np.ndarray,
                           width: int, height: int) -> np.ndarray:
    """Palette colors plus trailing alpha nibbles (low nibble = even pixel)."""
    count = width * height
    buf = _require(window, count + (count + 1) // 2, "paletted")
    pixels = _palette_colors(buf, palette, count)
    packed = buf[count:]
    nibbles = np.empty(packed.size * 2, dtype=np.uint8)
    nibbles[0::2] = packed & 0x0F
    nibbles[1::2] = packed >> 4
    # v << 4 | v
    pixels[:, 3] = nibbles[:count] * 17
    return pixels.reshape(height, width, 4)


def unpack_paletted_alpha8(window: BytesLike, palette: np.ndarray,
                           width: int, height: int) -> np.ndarray:
    count = width * height
    buf = _require(window, count * 2, "paletted")
    pixels = _palette_colors(buf, palette, count)
    pixels[:, 3] = buf[count:]
    return pixels.reshape(height, width, 4)


def unpack_raw_bgra(window: BytesLike, width: int, height: int) -> np.ndarray:
    count = width * height
    buf = _require(window, count * 4, "raw")
    return buf.reshape(height, width, 4).copy()


_PALETTED = {
    BLPFormat.PALETTED_NO_ALPHA: unpack_paletted_no_alpha,
    BLPFormat.PALETTED_ALPHA_1: unpack_paletted_alpha1,
    BLPFormat.PALETTED_ALPHA_4: unpack_paletted_alpha4,
    BLPFormat.PALETTED_ALPHA_8: unpack_paletted_alpha8,
}

_BLOCK_VARIANTS = {
    BLPFormat.DXT1_NO_ALPHA: BlockVariant.DXT1,
    BLPFormat.DXT1_ALPHA_1: BlockVariant.DXT1,
    BLPFormat.DXT3_ALPHA_4: BlockVariant.DXT3,
    BLPFormat.DXT3_ALPHA_8: BlockVariant.DXT3,
    BLPFormat.DXT5_ALPHA_8: BlockVariant.DXT5,
}


def decode_mipmap(header: BLPHeader, data: BytesLike, level: int = 0,
                  codec: Optional[BlockCodec] = None) -> np.ndarray:
    """Decode mip *level* of the BLP2 file held in *data* into BGRA pixels.

    Args:
        header: Header parsed from the same *data*.
        data: The complete file contents.
        level: Requested mip level; clamped to the last available level.
        codec: Optional block decompressor for DXT payloads; defaults to
            Pillow's BCn decoder.

    Raises:
        EmptyMipChain: The header lists no mip levels.
        TruncatedMipData: The mip window runs past the end of *data*.
        TruncatedPixelData: The window is shorter than the format needs.
        UnsupportedFormat: JPEG payloads and unknown format combinations.

    """
    tag = header.format
    mip = locate_mipmap(header, level, len(data))
    window = memoryview(data)[mip.offset:mip.end]

    if tag in _PALETTED:
        return _PALETTED[tag](window, header.palette, mip.width, mip.height)
    if tag == BLPFormat.RAW_BGRA:
        return unpack_raw_bgra(window, mip.width, mip.height)
    if tag in _BLOCK_VARIANTS:
        adapter = BlockCodecAdapter(codec)
        return adapter.decode(window, mip.width, mip.height, _BLOCK_VARIANTS[tag])

    logger.debug("No unpack rule for format tag 0x%06x", int(tag))
    raise UnsupportedFormat(friendly_name(tag))
