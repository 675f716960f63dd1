"""UF2 container format checks.

This module only uses the standard library so the build hook can load it
from the source tree before the package's dependencies are installed.
"""

import struct


UF2_BLOCK_SIZE = 512
UF2_MAGIC_START0 = 0x0A324655  # "UF2\n"
UF2_MAGIC_START1 = 0x9E5D5157
UF2_MAGIC_END = 0x0AB16F30

_HEADER = struct.Struct("<II")
_TRAILER = struct.Struct("<I")


def is_uf2_block(block: bytes) -> bool:
    """Check the start and end magic numbers of one 512-byte block."""
    if len(block) != UF2_BLOCK_SIZE:
        return False
    start0, start1 = _HEADER.unpack_from(block, 0)
    (end,) = _TRAILER.unpack_from(block, UF2_BLOCK_SIZE - _TRAILER.size)
    return (
        start0 == UF2_MAGIC_START0
        and start1 == UF2_MAGIC_START1
        and end == UF2_MAGIC_END
    )


def looks_like_uf2(data: bytes) -> bool:
    """Check that ``data`` is a non-empty sequence of valid UF2 blocks."""
    if not data or len(data) % UF2_BLOCK_SIZE:
        return False
    return all(
        is_uf2_block(data[offset : offset + UF2_BLOCK_SIZE])
        for offset in range(0, len(data), UF2_BLOCK_SIZE)
    )

