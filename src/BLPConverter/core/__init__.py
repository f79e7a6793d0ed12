"""Core decoder and utilities -- re-exports all public symbols for convenience."""

from .errors import (
    BLPError,
    FormatError,
    TooShortForMagic,
    UnsupportedVersion,
    UnknownMagic,
    TooShortForHeader,
    DataError,
    TruncatedMipData,
    TruncatedPixelData,
    EmptyMipChain,
    UnsupportedFormat,
)
from .formats import (
    Encoding, AlphaDepth, AlphaEncoding, BLPFormat,
    classify, friendly_name,
)
from .header import BLPHeader, HEADER_SIZE, parse_header
from .mipmap import MipLocation, locate_mipmap
from .bcn import BlockCodecAdapter, BlockVariant, pillow_bcn_codec
from .unpack import (
    unpack_paletted_no_alpha,
    unpack_paletted_alpha1,
    unpack_paletted_alpha4,
    unpack_paletted_alpha8,
    unpack_raw_bgra,
    decode_mipmap,
)
from .io import read_blp, save_pixels, bgra_to_rgba
from .scanning import ConversionJob, collect_jobs
from .logging import setup_logging

__all__ = [
    "BLPError", "FormatError", "TooShortForMagic", "UnsupportedVersion",
    "UnknownMagic", "TooShortForHeader", "DataError", "TruncatedMipData",
    "TruncatedPixelData", "EmptyMipChain", "UnsupportedFormat",
    "Encoding", "AlphaDepth", "AlphaEncoding", "BLPFormat",
    "classify", "friendly_name",
    "BLPHeader", "HEADER_SIZE", "parse_header",
    "MipLocation", "locate_mipmap",
    "BlockCodecAdapter", "BlockVariant", "pillow_bcn_codec",
    "unpack_paletted_no_alpha", "unpack_paletted_alpha1",
    "unpack_paletted_alpha4", "unpack_paletted_alpha8", "unpack_raw_bgra",
    "decode_mipmap",
    "read_blp", "save_pixels", "bgra_to_rgba",
    "ConversionJob", "collect_jobs",
    "setup_logging",
]
