"""Internal shared utilities for unistream."""

from __future__ import annotations

#: Maximum number of bytes read ahead of the stream to resolve its encoding.
LOOKAHEAD_SIZE: int = 10_240

#: Number of source bytes pulled per decode step.
DEFAULT_CHUNK_SIZE: int = 8_192


def _validate_positive_int(value: int, what: str) -> None:
    """Raise ValueError if *value* is not a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"{what} must be a positive integer"
        raise ValueError(msg)


def _validate_lookahead_size(lookahead_size: int) -> None:
    """Raise ValueError if *lookahead_size* is not a positive integer."""
    _validate_positive_int(lookahead_size, "lookahead_size")


def _validate_chunk_size(chunk_size: int) -> None:
    """Raise ValueError if *chunk_size* is not a positive integer."""
    _validate_positive_int(chunk_size, "chunk_size")
