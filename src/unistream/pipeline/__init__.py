"""Encoding resolution stages and shared types."""

from __future__ import annotations

import dataclasses

from unistream.registry import Encoding


@dataclasses.dataclass(frozen=True, slots=True)
class ResolutionResult:
    """The outcome of resolving the encoding of a byte stream.

    ``certain`` is ``True`` when the encoding came from a BOM or a declared
    content-type, and ``False`` for best-effort guesses (meta tags, the
    UTF-8 heuristic and the Latin-1 fallback).  It is advisory only.
    """

    encoding: Encoding
    name: str
    certain: bool

    def to_dict(self) -> dict[str, str | bool]:
        """Convert this result to a plain dict.

        :returns: A dict with ``'encoding'`` and ``'certain'`` keys.
        """
        return {"encoding": self.name, "certain": self.certain}
