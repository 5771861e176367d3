"""Exception hierarchy for the BLZ codec."""

from __future__ import annotations


class BLZError(Exception):
    """
    Base exception for all BLZ-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class BLZDecompressionError(BLZError):
    """Raised when an artifact cannot be decompressed."""


class MalformedInputError(BLZDecompressionError):
    """
    Raised when an artifact is structurally invalid.

    Covers artifacts shorter than the footer, footers whose lengths do not
    fit the artifact, token streams that end mid-token, and tokens that would
    write into the raw prefix or read past the end of the output.
    """


class InvalidSizeError(BLZDecompressionError):
    """
    Raised when the declared decompressed size is unusable.

    Attributes:
        size: The decompressed size computed from the footer.
    """

    def __init__(self, size: int, detail: str) -> None:
        self.size = size
        super().__init__(f"Invalid decompressed size {size}: {detail}")
