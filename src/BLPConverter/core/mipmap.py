"""Locate the byte window and dimensions of a mip level."""

import logging
from dataclasses import dataclass

from .errors import TruncatedMipData
from .header import BLPHeader

logger = logging.getLogger("blp_converter.mipmap")


@dataclass(frozen=True)
class MipLocation:
    """Where a mip level lives in the source buffer and how big it is."""

    level: int
    width: int
    height: int
    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length


def locate_mipmap(header: BLPHeader, level: int, data_size: int) -> MipLocation:
    """Resolve *level* against *header* for a source buffer of *data_size* bytes.

    Levels past the end of the chain are clamped to the smallest one. The
    returned window is guaranteed to fit inside the buffer.
    """
    clamped = header.clamp_level(level)
    if clamped != level:
        logger.debug(
            "Mip level %d not available (%d level(s)); using level %d",
            level, header.mip_count, clamped,
        )

    offset = header.offsets[clamped]
    length = header.lengths[clamped]
    if offset + length > data_size:
        raise TruncatedMipData(offset, length, data_size)

    return MipLocation(
        level=clamped,
        width=header.width >> clamped,
        height=header.height >> clamped,
        offset=offset,
        length=length,
    )
