"""
Overwrite safety check for in-place decompression.


THE PROBLEM
-----------
A BLZ artifact is meant to be expanded inside the buffer it was loaded into.
The buffer is grown to the decompressed size and the decoder then:

  - reads tokens from the end of the compressed data toward its start,
  - writes output from the end of the grown buffer toward its start.

Both cursors move left. The write cursor starts further right, but every
back-reference moves it further than the read cursor moves. If it ever
passes the read cursor, the decoder overwrites compressed bytes it has not
read yet::

    compressed: [ ....unread tokens.... | read ]
    output:     [ ....pending.... | written .... ]
                                  ^ write cursor must stay right of
                                    the read cursor


THE FIX
-------
Walk the tokens in decode order, tracking both cursors. At the first
back-reference after which the write cursor has passed the read cursor,
stop. Everything the decoder would still have to produce from that point on
is stored verbatim instead, as a raw prefix that needs no decoding::

    [ raw prefix = input[:source_offset] ][ tokens[token_offset:] ][ footer ]

If the cursors never cross, the whole stream is safe and nothing is split.
"""

from __future__ import annotations

from typing import NamedTuple

from .constants import FLAG_HIGH_BIT
from .footer import decode_back_reference


class SafeSplit(NamedTuple):
    """Where to cut an encoded input into raw prefix and kept tokens."""

    source_offset: int
    """Number of leading input bytes stored verbatim."""

    token_offset: int
    """Physical index of the first kept token stream byte."""


NO_SPLIT = SafeSplit(source_offset=0, token_offset=0)
"""The whole token stream is safe: no raw prefix, every token kept."""


def find_safe_split(source_length: int, tokens: bytes) -> SafeSplit | None:
    """Find where in-place expansion of a token stream stops being safe.

    Args:
        source_length: Length of the input the tokens encode.
        tokens: The token stream in DECODE order (flag byte first).

    Returns:
        The split point, ``NO_SPLIT`` if the whole stream is safe, or None if
        the tokens do not describe exactly ``source_length`` bytes.
    """
    # Two virtual cursors, counted as bytes remaining to the left:
    #
    #   source_pos      output bytes still to be written
    #   compressed_pos  token bytes still to be read
    source_pos = source_length
    compressed_pos = len(tokens)

    while source_pos > 0:
        if compressed_pos < 1:
            return None

        flag = tokens[len(tokens) - compressed_pos]
        compressed_pos -= 1

        bit = FLAG_HIGH_BIT
        while bit and source_pos > 0:
            if not flag & bit:
                if compressed_pos < 1:
                    return None

                # Literal: one byte read, one byte written.
                compressed_pos -= 1
                source_pos -= 1
            else:
                if compressed_pos < 2:
                    return None

                position = len(tokens) - compressed_pos
                length, _ = decode_back_reference(tokens[position], tokens[position + 1])

                source_pos -= length
                if source_pos < 0:
                    return None
                compressed_pos -= 2

                # Write cursor has passed the read cursor.
                if source_pos < compressed_pos:
                    return SafeSplit(source_offset=source_pos, token_offset=compressed_pos)

            bit >>= 1

    return NO_SPLIT
