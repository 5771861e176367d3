"""
Footer and token encoding for the BLZ format.

This module provides the low-level primitives shared by the compressor and
decompressor:

1. **Footer codec**: the fixed 8 bytes at the end of every artifact that
   describe where the raw prefix ends and how large the output will be.

2. **Back-reference packing**: the 2-byte form of a (length, offset) pair.
"""

from __future__ import annotations

from pydantic import Field

from .base import StrictBaseModel
from .constants import (
    ALIGNMENT,
    COMPRESSED_LENGTH_MASK,
    FOOTER_SIZE,
    LENGTH_BIAS,
    MAX_COMPRESSED_LENGTH,
    MAX_HEADER_LENGTH,
    MAX_MATCH_LENGTH,
    MAX_OFFSET,
    MIN_HEADER_LENGTH,
    MIN_MATCH_LENGTH,
    MIN_OFFSET,
    OFFSET_BIAS,
    OFFSET_HIGH_MASK,
)
from .exceptions import MalformedInputError

# Footer
#
# The artifact is laid out front to back as:
#
#   [raw prefix][token stream][padding][footer]
#   |<-- N - compressed -->|<---- compressed length ---->|
#                          |<- tokens ->|<- header len ->|
#
# The header length counts the padding AND the footer, so it is 8 to 11.
# The raw prefix length is therefore simply N - compressed length.
#
# Some writers store only the padding in the header length (0 to 3) and leave
# the footer outside the compressed length. Both readings are accepted; the
# two ranges never overlap.
#
# Example: 31 token bytes, no raw prefix.
#
#   padding           = (4 - 31 % 4) % 4 = 1
#   header length     = 1 + 8 = 9
#   compressed length = 31 + 9 = 40
#   N                 = 31 + 1 + 8 = 40
#
#   Footer word 0 = 9 << 24 | 40 = 0x09000028 -> 28 00 00 09


class Footer(StrictBaseModel):
    """The trailing 8 bytes of a BLZ artifact."""

    compressed_length: int = Field(ge=0, le=MAX_COMPRESSED_LENGTH)
    """Token stream length plus header length."""

    header_length: int = Field(ge=0, le=0xFF)
    """Padding length, plus the footer size when the footer is counted."""

    size_diff: int = Field(ge=-(2**31), lt=2**31)
    """Decompressed size minus artifact size."""

    @property
    def includes_footer(self) -> bool:
        """Whether the header length counts the 8 footer bytes."""
        return self.header_length >= FOOTER_SIZE

    @property
    def padding_length(self) -> int:
        """Number of 0xFF alignment bytes before the footer."""
        if self.includes_footer:
            return self.header_length - FOOTER_SIZE
        return self.header_length

    @property
    def token_length(self) -> int:
        """Number of token stream bytes."""
        return self.compressed_length - self.header_length

    def raw_length(self, artifact_length: int) -> int:
        """Length of the verbatim prefix in an artifact of the given size."""
        if self.includes_footer:
            return artifact_length - self.compressed_length
        return artifact_length - FOOTER_SIZE - self.compressed_length

    def decompressed_length(self, artifact_length: int) -> int:
        """Size of the output this footer describes."""
        return artifact_length + self.size_diff

    def encode(self) -> bytes:
        """Serialize to the 8-byte wire form."""
        word = (self.header_length << 24) | (self.compressed_length & COMPRESSED_LENGTH_MASK)
        return word.to_bytes(4, "little") + self.size_diff.to_bytes(4, "little", signed=True)


def decode_footer(data: bytes) -> Footer:
    """Parse and validate the footer at the end of an artifact.

    Args:
        data: The complete artifact.

    Returns:
        The parsed footer.

    Raises:
        MalformedInputError: If the artifact is shorter than the footer or the
            footer describes regions that do not fit the artifact.
    """
    if len(data) < FOOTER_SIZE:
        raise MalformedInputError(
            f"Artifact is {len(data)} bytes, shorter than the {FOOTER_SIZE}-byte footer"
        )

    word = int.from_bytes(data[-FOOTER_SIZE:-4], "little")
    footer = Footer(
        compressed_length=word & COMPRESSED_LENGTH_MASK,
        header_length=word >> 24,
        size_diff=int.from_bytes(data[-4:], "little", signed=True),
    )

    # Header length must name one of the two known conventions.
    #
    #   0 .. 3   padding only
    #   8 .. 11  padding plus footer
    if not (
        footer.header_length < ALIGNMENT
        or MIN_HEADER_LENGTH <= footer.header_length <= MAX_HEADER_LENGTH
    ):
        raise MalformedInputError(f"Invalid header length {footer.header_length}")

    if footer.compressed_length < footer.header_length:
        raise MalformedInputError(
            f"Compressed length {footer.compressed_length} is smaller than "
            f"header length {footer.header_length}"
        )

    if footer.raw_length(len(data)) < 0:
        raise MalformedInputError(
            f"Compressed length {footer.compressed_length} exceeds artifact "
            f"of {len(data)} bytes"
        )

    return footer


def encode_footer(compressed_length: int, header_length: int, size_diff: int) -> bytes:
    """Build the 8-byte footer for the given field values."""
    return Footer(
        compressed_length=compressed_length,
        header_length=header_length,
        size_diff=size_diff,
    ).encode()


# Back-references
#
# Both fields are stored minus a bias of 3, giving:
#
#   length  3 .. 18    in 4 bits
#   offset  3 .. 4098  in 12 bits
#
# In decode order the first byte carries the length and the offset's high
# nibble; the second carries the offset's low byte.
#
# Example: length = 5, offset = 300
#
#   length - 3 = 2      -> 0x2
#   offset - 3 = 297    -> 0x129
#
#   b1 = 0x2 << 4 | 0x1 = 0x21
#   b2 = 0x29


def encode_back_reference(length: int, offset: int) -> tuple[int, int]:
    """Pack a back-reference into its two bytes, in decode order.

    Raises:
        ValueError: If length or offset is out of range.
    """
    if not MIN_MATCH_LENGTH <= length <= MAX_MATCH_LENGTH:
        raise ValueError(f"Back-reference length must be 3-18, got {length}")
    if not MIN_OFFSET <= offset <= MAX_OFFSET:
        raise ValueError(f"Back-reference offset must be 3-4098, got {offset}")

    packed_offset = offset - OFFSET_BIAS
    b1 = ((length - LENGTH_BIAS) << 4) | (packed_offset >> 8)
    b2 = packed_offset & 0xFF
    return b1, b2


def decode_back_reference(b1: int, b2: int) -> tuple[int, int]:
    """Unpack two bytes, in decode order, into ``(length, offset)``."""
    length = (b1 >> 4) + LENGTH_BIAS
    offset = (((b1 & OFFSET_HIGH_MASK) << 8) | b2) + OFFSET_BIAS
    return length, offset
