"""Shared fixtures for the BLZ codec tests."""

from __future__ import annotations

import random

import pytest

REPEATED_A_TOKENS = bytes.fromhex(
    # Run 1: literal x3, back-references (3, 3) (6, 6) (12, 12) (18, 18) x2
    "1f" "414141" "0000" "3003" "9009" "f00f" "f00f"
    # Run 2: back-references (18, 18) x7, (14, 14)
    "ff" + "f00f" * 7 + "b00b"
)
"""Token stream, in decode order, for 200 bytes of 0x41."""

REPEATED_A_ARTIFACT = (
    bytes(reversed(REPEATED_A_TOKENS))
    + b"\xff"
    # compressed length 40, header length 9, size diff 160
    + bytes.fromhex("28000009" "a0000000")
)
"""Reference artifact for 200 bytes of 0x41."""


@pytest.fixture
def repeated_a_tokens() -> bytes:
    """Reference token stream for 200 bytes of 0x41."""
    return REPEATED_A_TOKENS


@pytest.fixture
def repeated_a_artifact() -> bytes:
    """Reference artifact for 200 bytes of 0x41."""
    return REPEATED_A_ARTIFACT


@pytest.fixture
def repeated_a() -> bytes:
    """200 bytes of 0x41."""
    return b"A" * 200


@pytest.fixture
def noise() -> bytes:
    """4 KiB of high-entropy bytes."""
    return random.Random(0).randbytes(4096)
