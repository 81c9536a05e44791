"""Read text of any encoding as BOM-free UTF-8."""

from __future__ import annotations

from unistream.opener import must_open_and_close, open_and_close, open_reader
from unistream.pipeline import ResolutionResult
from unistream.pipeline.orchestrator import determine_encoding
from unistream.reader import new_reader, normalize, strip_bom

__version__ = "1.0.0"
__all__ = [
    "ResolutionResult",
    "determine_encoding",
    "must_open_and_close",
    "new_reader",
    "normalize",
    "open_and_close",
    "open_reader",
    "strip_bom",
]
