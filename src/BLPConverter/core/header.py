"""BLP2 header parsing.

The fixed header is 1172 bytes, little-endian::

    0    magic           4s
    4    type            u32
    8    encoding        u8
    9    alpha_depth     u8
    10   alpha_encoding  u8
    11   has_mips        u8
    12   width           u32
    16   height          u32
    20   offsets         16 x u32
    84   lengths         16 x u32
    148  palette         256 x BGRA

Mip payloads live at the absolute file offsets listed in ``offsets``.
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import Tuple, Union

import numpy as np

from .errors import (
    EmptyMipChain,
    TooShortForHeader,
    TooShortForMagic,
    UnknownMagic,
    UnsupportedVersion,
)
from .formats import FormatTag, classify, friendly_name

logger = logging.getLogger("blp_converter.header")

BLP2_MAGIC = b"BLP2"
BLP1_MAGIC = b"BLP1"

MAX_MIP_LEVELS = 16
PALETTE_SIZE = 256

_FIELDS = struct.Struct("<4sIBBBBII")
_MIP_TABLE = struct.Struct(f"<{MAX_MIP_LEVELS}I")

OFFSETS_POS = _FIELDS.size
LENGTHS_POS = OFFSETS_POS + _MIP_TABLE.size
PALETTE_POS = LENGTHS_POS + _MIP_TABLE.size
HEADER_SIZE = PALETTE_POS + PALETTE_SIZE * 4

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class BLPHeader:
    """Parsed, read-only BLP2 header."""

    magic: bytes
    type: int
    encoding: int
    alpha_depth: int
    alpha_encoding: int
    has_mips: int
    width: int
    height: int
    offsets: Tuple[int, ...]
    lengths: Tuple[int, ...]
    palette: np.ndarray = field(repr=False, compare=False)
    mip_count: int = 0

    @property
    def format(self) -> FormatTag:
        return classify(self)

    @property
    def friendly_format(self) -> str:
        return friendly_name(self.format)

    def clamp_level(self, level: int) -> int:
        """Clamp *level* to the coarsest available mip level.

        Raises EmptyMipChain when the header lists no mip data at all.
        """
        if level < 0:
            raise ValueError(f"mip level must be >= 0, got {level}")
        if self.mip_count == 0:
            raise EmptyMipChain()
        return min(level, self.mip_count - 1)

    def mip_width(self, level: int = 0) -> int:
        return self.width >> self.clamp_level(level)

    def mip_height(self, level: int = 0) -> int:
        return self.height >> self.clamp_level(level)


def _count_mip_levels(offsets) -> int:
    count = 0
    while count < MAX_MIP_LEVELS and offsets[count] != 0:
        count += 1
    return count


def parse_header(data: BytesLike) -> BLPHeader:
    """Parse and validate the fixed BLP2 header at the start of *data*."""
    if len(data) < 4:
        raise TooShortForMagic(len(data))

    magic = bytes(data[:4])
    if magic == BLP1_MAGIC:
        raise UnsupportedVersion(magic)
    if magic != BLP2_MAGIC:
        raise UnknownMagic(magic)

    if len(data) < HEADER_SIZE:
        raise TooShortForHeader(HEADER_SIZE, len(data))

    (
        _magic, type_, encoding, alpha_depth, alpha_encoding, has_mips,
        width, height,
    ) = _FIELDS.unpack_from(data, 0)
    offsets = _MIP_TABLE.unpack_from(data, OFFSETS_POS)
    lengths = _MIP_TABLE.unpack_from(data, LENGTHS_POS)

    palette = np.frombuffer(
        bytes(data[PALETTE_POS:HEADER_SIZE]), dtype=np.uint8
    ).reshape(PALETTE_SIZE, 4)

    mip_count = _count_mip_levels(offsets)
    logger.debug(
        "Parsed BLP2 header: %dx%d, encoding=%d alpha_depth=%d "
        "alpha_encoding=%d, %d mip level(s)",
        width, height, encoding, alpha_depth, alpha_encoding, mip_count,
    )

    return BLPHeader(
        magic=magic,
        type=type_,
        encoding=encoding,
        alpha_depth=alpha_depth,
        alpha_encoding=alpha_encoding,
        has_mips=has_mips,
        width=width,
        height=height,
        offsets=offsets,
        lengths=lengths,
        palette=palette,
        mip_count=mip_count,
    )
