"""Pure Python BLZ compression library.

BLZ is a backward LZ77 variant used to shrink firmware and overlay images
that are decompressed in place: the loader grows the buffer holding the
compressed image and expands it from the tail toward the head, so no second
buffer is needed.

Usage::

    from blz import compress, decompress

    # Compress an image; empty output means "store it uncompressed"
    compressed = compress(image) or image

    # Expand a compressed image
    original = decompress(compressed)
"""

from __future__ import annotations

from .compress import compress
from .config import DEFAULT_CONFIG, EncoderConfig
from .decompress import decompress, get_decompressed_length, is_valid_artifact, read_footer
from .exceptions import BLZDecompressionError, BLZError, InvalidSizeError, MalformedInputError
from .footer import Footer

__all__ = [
    # Core API
    "compress",
    "decompress",
    # Configuration
    "EncoderConfig",
    "DEFAULT_CONFIG",
    # Utilities
    "Footer",
    "read_footer",
    "get_decompressed_length",
    "is_valid_artifact",
    # Exceptions
    "BLZError",
    "BLZDecompressionError",
    "MalformedInputError",
    "InvalidSizeError",
]
