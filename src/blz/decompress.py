"""
BLZ decompression implementation.


HOW DECOMPRESSION WORKS
-----------------------
An artifact is laid out as::

    [ raw prefix ][ token stream ][ padding ][ footer ]

The footer says how long the output is and where the token stream starts.
The raw prefix is copied to the start of the output unchanged. The token
stream is then read from its END toward its START, and output is written
from the END of the output buffer toward its START::

    artifact:  [ raw | t5 t4 t3 t2 t1 flag | pad | footer ]
                                        <-- read
    output:    [ raw | ..................... ]
                                   <-- write

Decoding is finished when the token stream is exhausted. At that point the
write cursor must sit exactly at the end of the raw prefix.


TOKENS
------
A flag byte selects, most significant bit first, what each of the next
(up to) 8 tokens is:

  0 = LITERAL: one byte, written at the write cursor.
  1 = BACK-REFERENCE: two bytes giving (length, offset). The next `length`
      output bytes are copied from `offset` bytes to their right.


OVERLAPPING COPIES
------------------
When offset < length, the copy reads bytes it is itself writing. Copying
from the rightmost byte leftward makes this work, exactly as forward LZ77
copies do in the other direction.

Example: output tail "A", back-reference length 3, offset 1::

    [ . . . A ]  write position 0, copy j = 2 .. 0
    [ . . A A ]  j = 2: output[2] = output[3]
    [ . A A A ]  j = 1: output[1] = output[2]
    [ A A A A ]  j = 0: output[0] = output[1]
"""

from __future__ import annotations

import logging

from .constants import FLAG_HIGH_BIT
from .exceptions import BLZDecompressionError, InvalidSizeError, MalformedInputError
from .footer import Footer, decode_back_reference, decode_footer

logger = logging.getLogger(__name__)


def decompress(data: bytes) -> bytes:
    """Decompress a BLZ artifact.

    Args:
        data: The complete artifact, footer included.

    Returns:
        The original uncompressed data.

    Raises:
        MalformedInputError: If the artifact is structurally invalid.
        InvalidSizeError: If the declared output size is unusable.
    """
    footer = decode_footer(data)

    output_length = footer.decompressed_length(len(data))
    raw_length = footer.raw_length(len(data))

    if output_length < 0:
        raise InvalidSizeError(output_length, "size is negative")
    if output_length < raw_length:
        raise InvalidSizeError(
            output_length, f"output cannot hold the {raw_length}-byte raw prefix"
        )

    logger.debug(
        "Decompressing %d bytes (%d raw, %d tokens) into %d bytes",
        len(data),
        raw_length,
        footer.token_length,
        output_length,
    )

    # Step 1: Allocate the whole output and copy the raw prefix.
    output = bytearray(output_length)
    output[:raw_length] = data[:raw_length]

    # Step 2: Walk the token stream backward.
    #
    #   stream_start  first physical token byte (end of the raw prefix)
    #   read          one past the next byte to read
    #   write         one past the next byte to write
    stream_start = raw_length
    read = raw_length + footer.token_length
    write = output_length

    while read > stream_start:
        read -= 1
        flag = data[read]

        bit = FLAG_HIGH_BIT
        while bit and read > stream_start:
            if not flag & bit:
                # LITERAL
                if write <= raw_length:
                    raise MalformedInputError(
                        f"Literal at stream byte {read - 1} overwrites the raw prefix"
                    )
                read -= 1
                write -= 1
                output[write] = data[read]
            else:
                # BACK-REFERENCE
                #
                # In decode order the first byte holds the length, so it is
                # the one at the higher address.
                if read - stream_start < 2:
                    raise MalformedInputError(
                        f"Token stream ends inside a back-reference at byte {read}"
                    )
                length, offset = decode_back_reference(data[read - 1], data[read - 2])
                read -= 2
                write -= length
                _execute_copy(output, write, length, offset, raw_length)

            bit >>= 1

    # Step 3: The tokens must have produced exactly the non-raw part.
    if write != raw_length:
        raise MalformedInputError(
            f"Token stream produced {output_length - write} bytes, "
            f"expected {output_length - raw_length}"
        )

    return bytes(output)


def _execute_copy(
    output: bytearray, position: int, length: int, offset: int, floor: int
) -> None:
    """Fill ``output[position : position + length]`` from ``offset`` bytes to the right.

    Args:
        output: The output buffer (modified in place).
        position: Index of the first destination byte.
        length: Number of bytes to copy.
        offset: Distance from each destination byte to its source byte.
        floor: Lowest index the copy may write (end of the raw prefix).

    Raises:
        MalformedInputError: If the copy writes below ``floor`` or reads past
            the end of the output.
    """
    if position < floor:
        raise MalformedInputError(
            f"Back-reference of length {length} overwrites the raw prefix"
        )
    if position + length - 1 + offset >= len(output):
        raise MalformedInputError(
            f"Back-reference offset {offset} reads past the end of the output"
        )

    # Rightmost byte first, so overlapping sources are already written.
    for j in range(length - 1, -1, -1):
        output[position + j] = output[position + j + offset]


def read_footer(data: bytes) -> Footer:
    """Parse and validate the footer of an artifact without decoding it.

    Raises:
        MalformedInputError: If the footer is missing or inconsistent.
    """
    return decode_footer(data)


def get_decompressed_length(data: bytes) -> int:
    """Read the decompressed size from an artifact without decompressing.

    Raises:
        MalformedInputError: If the footer is missing or inconsistent.
        InvalidSizeError: If the declared size is negative.
    """
    length = decode_footer(data).decompressed_length(len(data))
    if length < 0:
        raise InvalidSizeError(length, "size is negative")
    return length


def is_valid_artifact(data: bytes) -> bool:
    """Check if data has a structurally valid BLZ footer.

    This does NOT decode the token stream. A True result only means the
    footer is consistent with the artifact length; the tokens may still be
    corrupt.
    """
    try:
        footer = decode_footer(data)
    except BLZDecompressionError:
        return False

    output_length = footer.decompressed_length(len(data))
    return output_length >= footer.raw_length(len(data))
