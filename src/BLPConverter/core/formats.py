"""Classify BLP2 headers into a single format tag and name them."""

from enum import IntEnum
from typing import Dict, Union


class Encoding(IntEnum):
    """Enumerate BLP2 payload encodings."""

    UNCOMPRESSED = 1
    DXT = 2
    UNCOMPRESSED_RAW_BGRA = 3


class AlphaDepth(IntEnum):
    """Enumerate supported alpha bit depths."""

    NONE = 0
    BITS_1 = 1
    BITS_4 = 4
    BITS_8 = 8


class AlphaEncoding(IntEnum):
    """Enumerate DXT sub-variants stored in the alpha encoding byte."""

    DXT1 = 0
    DXT3 = 1
    DXT5 = 7


def _tag(encoding: int, alpha_depth: int = 0, alpha_encoding: int = 0) -> int:
    return (encoding << 16) | (alpha_depth << 8) | alpha_encoding


class BLPFormat(IntEnum):
    """Known format tags, used as dispatch keys for pixel unpacking."""

    JPEG = 0

    PALETTED_NO_ALPHA = _tag(Encoding.UNCOMPRESSED, AlphaDepth.NONE)
    PALETTED_ALPHA_1 = _tag(Encoding.UNCOMPRESSED, AlphaDepth.BITS_1)
    PALETTED_ALPHA_4 = _tag(Encoding.UNCOMPRESSED, AlphaDepth.BITS_4)
    PALETTED_ALPHA_8 = _tag(Encoding.UNCOMPRESSED, AlphaDepth.BITS_8)

    RAW_BGRA = _tag(Encoding.UNCOMPRESSED_RAW_BGRA)

    DXT1_NO_ALPHA = _tag(Encoding.DXT, AlphaDepth.NONE, AlphaEncoding.DXT1)
    DXT1_ALPHA_1 = _tag(Encoding.DXT, AlphaDepth.BITS_1, AlphaEncoding.DXT1)
    DXT3_ALPHA_4 = _tag(Encoding.DXT, AlphaDepth.BITS_4, AlphaEncoding.DXT3)
    DXT3_ALPHA_8 = _tag(Encoding.DXT, AlphaDepth.BITS_8, AlphaEncoding.DXT3)
    DXT5_ALPHA_8 = _tag(Encoding.DXT, AlphaDepth.BITS_8, AlphaEncoding.DXT5)


FormatTag = Union[BLPFormat, int]

UNKNOWN_FORMAT_NAME = "Unknown"

FRIENDLY_NAMES: Dict[BLPFormat, str] = {
    BLPFormat.JPEG: "JPEG",
    BLPFormat.PALETTED_NO_ALPHA: "Uncompressed paletted image, no alpha",
    BLPFormat.PALETTED_ALPHA_1: "Uncompressed paletted image, 1-bit alpha",
    BLPFormat.PALETTED_ALPHA_4: "Uncompressed paletted image, 4-bit alpha",
    BLPFormat.PALETTED_ALPHA_8: "Uncompressed paletted image, 8-bit alpha",
    BLPFormat.RAW_BGRA: "Uncompressed raw 32-bit BGRA",
    BLPFormat.DXT1_NO_ALPHA: "DXT1, no alpha",
    BLPFormat.DXT1_ALPHA_1: "DXT1, 1-bit alpha",
    BLPFormat.DXT3_ALPHA_4: "DXT3, 4-bit alpha",
    BLPFormat.DXT3_ALPHA_8: "DXT3, 8-bit alpha",
    BLPFormat.DXT5_ALPHA_8: "DXT5, 8-bit alpha",
}


def classify(header) -> FormatTag:
    """Derive the format tag of a parsed header.

    Never fails: combinations without a ``BLPFormat`` member come back as a
    plain ``int`` and are rejected later, at decode time.
    """
    if header.type == 0:
        return BLPFormat.JPEG

    if header.encoding == Encoding.UNCOMPRESSED:
        tag = _tag(header.encoding, header.alpha_depth)
    elif header.encoding == Encoding.UNCOMPRESSED_RAW_BGRA:
        tag = _tag(header.encoding)
    else:
        tag = _tag(header.encoding, header.alpha_depth, header.alpha_encoding)

    try:
        return BLPFormat(tag)
    except ValueError:
        return tag


def friendly_name(tag: FormatTag) -> str:
    """Return a human-readable description of *tag* (``"Unknown"`` if unlisted)."""
    return FRIENDLY_NAMES.get(tag, UNKNOWN_FORMAT_NAME)
