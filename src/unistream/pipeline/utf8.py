"""Stage 4: UTF-8 validity heuristic."""

from __future__ import annotations

from unistream.pipeline import ResolutionResult
from unistream.registry import NOP

# A UTF-8 sequence is at most 4 bytes, so a cut-off one leaves at most 3.
_MAX_PARTIAL = 3


def trim_partial_sequence(data: bytes) -> bytes:
    """Drop a multi-byte sequence that may have been cut off at the end.

    Walks back over at most the last three bytes.  Stops at the first ASCII
    byte, and cuts *data* at the first lead byte it meets.  A trailing
    sequence that happens to be complete is dropped as well, which is
    harmless for a validity check.

    :param data: The lookahead prefix, possibly cut mid-sequence.
    :returns: *data* without its last (possibly partial) sequence.
    """
    for i in range(len(data) - 1, max(len(data) - 1 - _MAX_PARTIAL, -1), -1):
        byte = data[i]
        if byte < 0x80:
            break
        if byte & 0xC0 != 0x80:
            return data[:i]
    return data


def detect_utf8(data: bytes) -> ResolutionResult | None:
    """Return the no-op result if *data* is non-ASCII, valid UTF-8.

    Pure ASCII returns ``None`` so that the Latin-1 fallback applies; the
    two agree below 0x80 anyway.

    :param data: The raw byte data to examine.
    :returns: A :class:`ResolutionResult` for UTF-8, or ``None``.
    """
    data = trim_partial_sequence(data)
    if data.isascii():
        return None
    try:
        data.decode("utf-8", errors="strict")
    except UnicodeDecodeError:
        return None
    return ResolutionResult(encoding=NOP, name="utf-8", certain=False)
