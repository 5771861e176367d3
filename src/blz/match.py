"""
Sliding-window match finder for the BLZ encoder.


SCAN DIRECTION
--------------
The encoder walks its input from the END toward the START. At any moment
the input splits at the cursor::

    [ ...not yet encoded... | chunk ][ search area ... ]
                                    ^
                                  cursor

  - The chunk is up to 18 bytes ending just before the cursor. These are
    the bytes the encoder wants to emit next.
  - The search area is up to 4098 bytes starting at the cursor. These are
    already encoded, so the decoder will have written them by the time it
    reaches the chunk.


MATCHING
--------
A match is anchored on the chunk's LAST byte. For every position in the
search area holding that byte, bytes are compared walking both regions
backward::

    chunk:        . . X Y Z
                          ^ chunk end
    search area:  . X Y Z . . .
                        ^ anchor (i = 3)

    Z == Z, Y == Y, X == X -> 3 matching bytes, offset = i + 1 = 4

The count is capped by the chunk size and by i + 1, so a match never reads
bytes left of the cursor. Offsets of 1 or 2 can therefore only ever give
matches of 1 or 2 bytes, which the encoder emits as literals.


TIE-BREAKING
------------
Candidates are visited in increasing i (nearest first) and only a STRICTLY
longer match replaces the best one. The nearest of several equally long
matches wins. Changing this changes the emitted bytes.
"""

from __future__ import annotations

from typing import NamedTuple


class Match(NamedTuple):
    """Result of a match search."""

    length: int
    """Number of matching bytes (0 when nothing matched)."""

    offset: int
    """Distance from the chunk end to the match end, bias included."""


NO_MATCH = Match(length=0, offset=0)
"""Returned when no byte in the search area matches the chunk end."""


def find_match(
    data: bytes,
    chunk_start: int,
    chunk_size: int,
    cursor: int,
    search_size: int,
) -> Match:
    """Find the longest match for a chunk in the area after the cursor.

    Args:
        data: The whole uncompressed input.
        chunk_start: Index of the first chunk byte.
        chunk_size: Number of chunk bytes (the chunk ends at ``cursor``).
        cursor: Index of the first search area byte.
        search_size: Number of search area bytes.

    Returns:
        The longest match found, or ``NO_MATCH``.
    """
    if chunk_size <= 0 or search_size <= 0:
        return NO_MATCH

    chunk_end = chunk_start + chunk_size - 1
    search_end = cursor + search_size
    last_byte = data[chunk_end]

    best = NO_MATCH

    # Jump between positions holding the chunk's last byte.
    #
    # This visits exactly the positions a byte-by-byte scan would test,
    # in the same increasing order.
    anchor = data.find(last_byte, cursor, search_end)
    while anchor != -1:
        distance = anchor - cursor + 1
        limit = min(distance, chunk_size)
        length = count_backward_matches(data, chunk_end, anchor, limit)

        if length > best.length:
            best = Match(length=length, offset=distance)

            # Nothing later can be strictly longer than the whole chunk.
            if length == chunk_size:
                break

        anchor = data.find(last_byte, anchor + 1, search_end)

    return best


def count_backward_matches(data: bytes, first: int, second: int, limit: int) -> int:
    """Count equal bytes walking backward from two positions, up to ``limit``."""
    count = 0
    while count < limit and data[first - count] == data[second - count]:
        count += 1
    return count
