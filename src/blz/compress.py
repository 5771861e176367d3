"""
BLZ compression implementation.


HOW COMPRESSION WORKS
---------------------
The encoder walks its input from the END toward the START, the same
direction the decoder writes. At each position it asks the match finder for
the longest run of upcoming bytes that also appears among the bytes already
encoded (to the right, up to 4098 bytes away):

  - 3 or more bytes: emit a back-reference and skip over the run.
  - otherwise: emit the byte as a literal.

Tokens are produced in decode order, with a flag byte reserved ahead of every
run of 8. Once the input is exhausted the stream is reversed into its
physical position in the artifact.


Example:
-------
Input: 200 bytes of "A"

    cursor 200  nothing encoded yet          -> literal "A"
    cursor 199  best match 1 byte            -> literal "A"
    cursor 198  best match 2 bytes           -> literal "A"
    cursor 197  3 bytes at offset 3          -> back-reference (3, 3)
    cursor 194  6 bytes at offset 6          -> back-reference (6, 6)
    ...
    cursor 176  18 bytes at offset 18        -> back-reference (18, 18)
    ...

Result: 31 token bytes + 1 padding byte + 8 footer bytes = 40 bytes.


IN-PLACE SAFETY
---------------
The finished stream is checked by the overwrite safety check. When the
decoder's write cursor would overtake its read cursor, the input left of
that point is stored verbatim as a raw prefix and the tokens describing it
are dropped.


NOT COMPRESSIBLE
----------------
An empty result means "store the input as is". It is returned when:

  - the token stream grows larger than the input,
  - the tokens cannot be laid out safely,
  - the artifact would not be strictly smaller than the input,
  - the compressed length does not fit the 24-bit footer field.
"""

from __future__ import annotations

import logging

from .config import DEFAULT_CONFIG, EncoderConfig
from .constants import (
    ALIGNMENT,
    FLAG_GROUP_SIZE,
    FOOTER_SIZE,
    MAX_COMPRESSED_LENGTH,
    MIN_MATCH_LENGTH,
    PADDING_BYTE,
)
from .footer import encode_back_reference, encode_footer
from .match import find_match
from .overwrite import find_safe_split

logger = logging.getLogger(__name__)


def compress(data: bytes, config: EncoderConfig = DEFAULT_CONFIG) -> bytes:
    """Compress data into a BLZ artifact.

    Args:
        data: Uncompressed input bytes.
        config: Match finder parameters. The default reproduces the
            standard BLZ encoder exactly.

    Returns:
        The artifact, or empty bytes if compressing is not worthwhile.

    Output format:
        [raw prefix] [token stream, reversed] [0xFF padding] [footer]
    """
    tokens = _encode_tokens(data, config)
    if tokens is None:
        logger.debug("Token stream outgrew the %d-byte input", len(data))
        return b""

    # Step 1: Find the in-place safe layout.
    split = find_safe_split(len(data), tokens)
    if split is None:
        logger.debug("No safe in-place layout for %d-byte input", len(data))
        return b""

    if split.source_offset:
        logger.debug(
            "Storing %d leading bytes raw to keep in-place expansion safe",
            split.source_offset,
        )

    # Step 2: Lay out the body.
    #
    # Kept tokens are the first ones in decode order; physically they sit
    # last, right before the footer.
    kept = tokens[: len(tokens) - split.token_offset]
    body = data[: split.source_offset] + bytes(reversed(kept))

    # Step 3: Pad and check the result is worth having.
    padding = -len(body) % ALIGNMENT
    final_size = len(body) + padding + FOOTER_SIZE
    if final_size >= len(data):
        logger.debug("Artifact of %d bytes does not shrink %d-byte input", final_size, len(data))
        return b""

    header_length = padding + FOOTER_SIZE
    compressed_length = len(kept) + header_length
    if compressed_length > MAX_COMPRESSED_LENGTH:
        logger.debug("Compressed length %d does not fit the footer", compressed_length)
        return b""

    # Step 4: Append padding and footer.
    footer = encode_footer(compressed_length, header_length, len(data) - final_size)
    return body + bytes([PADDING_BYTE]) * padding + footer


def _encode_tokens(data: bytes, config: EncoderConfig) -> bytearray | None:
    """Encode the whole input into a token stream in decode order.

    Returns:
        The token stream, or None once it grows larger than the input.
    """
    tokens = bytearray()
    cursor = len(data)

    while cursor > 0:
        # Reserve the flag byte; its bits are known once the run is done.
        flag_index = len(tokens)
        tokens.append(0)
        flag = 0

        for _ in range(FLAG_GROUP_SIZE):
            flag <<= 1
            if cursor == 0:
                # Trailing bits of the last run stay 0; the decoder stops
                # when the stream ends.
                continue

            chunk_size = min(cursor, config.max_match_length)
            search_size = min(len(data) - cursor, config.window_size)
            match = find_match(data, cursor - chunk_size, chunk_size, cursor, search_size)

            if match.length < MIN_MATCH_LENGTH:
                cursor -= 1
                tokens.append(data[cursor])
            else:
                cursor -= match.length
                tokens.extend(encode_back_reference(match.length, match.offset))
                flag |= 1

        tokens[flag_index] = flag

        if len(tokens) > len(data):
            return None

    return tokens
