"""Tests for encoder configuration."""

from __future__ import annotations

import random

import pytest
from pydantic import ValidationError

from blz import DEFAULT_CONFIG, EncoderConfig, compress, decompress
from blz.config import MATCH_LENGTH, WINDOW_SIZE


class TestEncoderConfig:
    """Tests for EncoderConfig validation."""

    def test_defaults_match_format_limits(self) -> None:
        """The default configuration searches the whole format range."""
        assert DEFAULT_CONFIG.window_size == WINDOW_SIZE == 4098
        assert DEFAULT_CONFIG.max_match_length == MATCH_LENGTH == 18

    @pytest.mark.parametrize("window_size", [0, -1, 4099])
    def test_window_size_bounds(self, window_size: int) -> None:
        """Windows beyond the 12-bit offset field are rejected."""
        with pytest.raises(ValidationError):
            EncoderConfig(window_size=window_size)

    @pytest.mark.parametrize("max_match_length", [0, 2, 19])
    def test_match_length_bounds(self, max_match_length: int) -> None:
        """Match lengths outside 3-18 are rejected."""
        with pytest.raises(ValidationError):
            EncoderConfig(max_match_length=max_match_length)

    def test_strict_types(self) -> None:
        """Values are not coerced from other types."""
        with pytest.raises(ValidationError):
            EncoderConfig(window_size="100")  # type: ignore[arg-type]

    def test_unknown_field_rejected(self) -> None:
        """Unknown parameters are rejected."""
        with pytest.raises(ValidationError):
            EncoderConfig(level=9)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        """Configurations are immutable."""
        with pytest.raises(ValidationError):
            DEFAULT_CONFIG.window_size = 10  # type: ignore[misc]


class TestConfiguredCompression:
    """Tests for compressing with non-default parameters."""

    def test_narrow_window_round_trip(self) -> None:
        """Artifacts from a narrow window still decode."""
        data = b"the quick brown fox jumps over the lazy dog. " * 20
        config = EncoderConfig(window_size=64)
        compressed = compress(data, config)
        assert compressed
        assert decompress(compressed) == data

    def test_short_matches_round_trip(self) -> None:
        """Capping match length still compresses a repeated byte."""
        data = b"A" * 200
        compressed = compress(data, EncoderConfig(max_match_length=3))
        assert compressed
        assert len(compressed) > len(compress(data))
        assert decompress(compressed) == data

    def test_window_limits_reach(self) -> None:
        """A repeat beyond the window is not found."""
        block = random.Random(2).randbytes(200)
        data = block + random.Random(3).randbytes(100) + block
        assert compress(data, EncoderConfig(window_size=64)) == b""

        compressed = compress(data)
        assert compressed
        assert decompress(compressed) == data
