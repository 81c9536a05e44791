"""Stage 1: BOM (Byte Order Mark) detection."""

from __future__ import annotations

from unistream.pipeline import ResolutionResult
from unistream.registry import REGISTRY

# The two UTF-16 marks come first: a 2-byte UTF-16 mark must never be
# shadowed by the 3-byte UTF-8 one, and vice versa.
BOMS: tuple[tuple[bytes, str], ...] = (
    (b"\xfe\xff", "utf-16be"),
    (b"\xff\xfe", "utf-16le"),
    (b"\xef\xbb\xbf", "utf-8"),
)

UTF8_BOM: bytes = b"\xef\xbb\xbf"


def detect_bom(data: bytes) -> ResolutionResult | None:
    """Check for a BOM at the start of data. Returns result or None."""
    for bom_bytes, label in BOMS:
        if data.startswith(bom_bytes):
            encoding = REGISTRY[label]
            return ResolutionResult(encoding=encoding, name=encoding.name, certain=True)
    return None
