"""
Constants for the BLZ compression format.

Reference: the "bottom LZ" overlay format used by Nintendo DS toolchains.
"""

from __future__ import annotations

# ===========================================================================
# Footer Layout
# ===========================================================================
#
# Every artifact ends with a fixed 8-byte footer:
#
#   [N-8, N-5)  compressed length (24 bits, little-endian)
#   [N-5]       header length (top byte of the same 32-bit word)
#   [N-4, N)    size difference (signed 32 bits, little-endian)

FOOTER_SIZE: int = 8
"""Size of the trailing footer in bytes."""

ALIGNMENT: int = 4
"""The raw prefix plus token stream is padded to a multiple of this."""

PADDING_BYTE: int = 0xFF
"""Value of every alignment padding byte."""

MIN_HEADER_LENGTH: int = FOOTER_SIZE
"""Smallest header length: footer, no padding."""

MAX_HEADER_LENGTH: int = FOOTER_SIZE + ALIGNMENT - 1
"""Largest header length: footer plus three padding bytes."""

MAX_COMPRESSED_LENGTH: int = 0xFFFFFF
"""Largest compressed length the 24-bit footer field can hold."""

COMPRESSED_LENGTH_MASK: int = 0x00FFFFFF
"""Mask selecting the compressed length from the packed footer word."""

# ===========================================================================
# Token Layout
# ===========================================================================
#
# Tokens are grouped in runs of up to 8. Each run is preceded by a flag byte
# whose bits, most significant first, select:
#
#   0 = literal (1 raw byte)
#   1 = back-reference (2 bytes)
#
# A back-reference packs its length and offset, both biased by 3:
#
#   b1 = (length - 3) << 4 | (offset - 3) >> 8
#   b2 = (offset - 3) & 0xFF

FLAG_GROUP_SIZE: int = 8
"""Number of tokens selected by one flag byte."""

FLAG_HIGH_BIT: int = 0x80
"""Flag bit selecting the first token of a run."""

MIN_MATCH_LENGTH: int = 3
"""Shortest back-reference. Shorter matches are emitted as literals."""

MAX_MATCH_LENGTH: int = 0x12
"""Longest back-reference (4-bit length field plus bias: 15 + 3 = 18)."""

MIN_OFFSET: int = 3
"""Smallest back-reference offset."""

MAX_OFFSET: int = 0x1002
"""Largest back-reference offset (12-bit offset field plus bias: 4095 + 3)."""

LENGTH_BIAS: int = 3
"""Subtracted from the match length before packing."""

OFFSET_BIAS: int = 3
"""Subtracted from the match offset before packing."""

OFFSET_HIGH_MASK: int = 0x0F
"""Mask selecting the high offset nibble from the first token byte."""
