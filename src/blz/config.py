"""
Encoder configuration.

The defaults reproduce the standard BLZ encoder byte for byte. Narrower settings
trade compression ratio for speed; the artifacts they produce still decode
with any BLZ decoder.
"""

from typing import Final

from pydantic import Field

from .base import StrictBaseModel
from .constants import MAX_MATCH_LENGTH, MAX_OFFSET, MIN_MATCH_LENGTH

WINDOW_SIZE: Final = MAX_OFFSET
"""Bytes searched behind the cursor. The full offset range of the format."""

MATCH_LENGTH: Final = MAX_MATCH_LENGTH
"""Longest match the finder tries to extend to."""


class EncoderConfig(StrictBaseModel):
    """Tunable parameters of the greedy encoder."""

    window_size: int = Field(default=WINDOW_SIZE, ge=1, le=MAX_OFFSET)
    """How many already-encoded bytes the match finder searches."""

    max_match_length: int = Field(
        default=MATCH_LENGTH, ge=MIN_MATCH_LENGTH, le=MAX_MATCH_LENGTH
    )
    """Upper bound on the length of a single back-reference."""


DEFAULT_CONFIG: Final = EncoderConfig()
"""Configuration matching the standard BLZ encoder."""
