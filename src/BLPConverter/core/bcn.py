"""Adapter around an external DXT (BC1/BC2/BC3) block decompressor.

A codec is any callable ``codec(window, width, height, variant)`` returning
``width * height`` RGBA pixels. The adapter validates the payload size,
calls the codec and converts its RGBA output to BGRA.
"""

import logging
from enum import Enum
from typing import Callable, Optional

import numpy as np
from PIL import Image

from .errors import TruncatedPixelData

logger = logging.getLogger("blp_converter.bcn")


class BlockVariant(Enum):
    """DXT block algorithms, with their Pillow ``bcn`` decoder number."""

    DXT1 = 1
    DXT3 = 2
    DXT5 = 3

    @property
    def block_size(self) -> int:
        return 8 if self is BlockVariant.DXT1 else 16


BlockCodec = Callable[[bytes, int, int, BlockVariant], np.ndarray]


def expected_block_length(width: int, height: int, variant: BlockVariant) -> int:
    """Return the payload size of a ``width`` x ``height`` image in 4x4 blocks."""
    blocks_x = (width + 3) // 4
    blocks_y = (height + 3) // 4
    return blocks_x * blocks_y * variant.block_size


def pillow_bcn_codec(window: bytes, width: int, height: int,
                     variant: BlockVariant) -> np.ndarray:
    """Decompress DXT blocks with Pillow's built-in BCn decoder (RGBA output)."""
    if width == 0 or height == 0:
        return np.zeros((height, width, 4), dtype=np.uint8)
    with Image.frombytes("RGBA", (width, height), bytes(window), "bcn",
                         variant.value) as img:
        return np.asarray(img, dtype=np.uint8)


class BlockCodecAdapter:
    """Run a block codec and normalize its output to canonical BGRA pixels."""

    def __init__(self, codec: Optional[BlockCodec] = None):
        self.codec = codec or pillow_bcn_codec

    def decode(self, window: bytes, width: int, height: int,
               variant: BlockVariant) -> np.ndarray:
        expected = expected_block_length(width, height, variant)
        if len(window) < expected:
            raise TruncatedPixelData(expected, len(window), kind=variant.name)

        logger.debug("Decoding %dx%d %s payload (%d bytes)",
                     width, height, variant.name, len(window))
        rgba = np.asarray(self.codec(window, width, height, variant), dtype=np.uint8)
        pixels = rgba.reshape(height, width, 4).copy()
        pixels[:, :, [0, 2]] = pixels[:, :, [2, 0]]
        return pixels
