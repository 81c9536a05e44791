"""Stage 3: HTML ``<meta>`` charset prescan.

Follows the prescan of the HTML Standard's "determining the character
encoding" algorithm: only ``<meta>`` tags are looked at, and a charset in a
``content`` attribute only counts when the same tag carries an
``http-equiv="content-type"`` pragma.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser

from unistream.enums import PragmaState
from unistream.registry import NOP, Encoding, lookup

logger = logging.getLogger(__name__)

_ASCII_WHITESPACE = " \t\n\f\r"
_UNQUOTED_TERMINATORS = frozenset(";" + _ASCII_WHITESPACE)


def charset_from_content(value: str) -> str:
    """Extract the charset name from a ``<meta content=...>`` value.

    :param value: The attribute value, e.g. ``"text/html; charset=utf-8"``.
    :returns: The charset name, or ``""`` if none could be extracted.
    """
    rest = value
    while rest:
        loc = rest.find("charset")
        if loc == -1:
            return ""
        rest = rest[loc + len("charset") :].lstrip(_ASCII_WHITESPACE)
        if not rest.startswith("="):
            continue
        rest = rest[1:].lstrip(_ASCII_WHITESPACE)
        if not rest:
            return ""
        quote = rest[0]
        if quote in "\"'":
            close = rest.find(quote, 1)
            if close == -1:
                return ""
            return rest[1:close]
        end = len(rest)
        for i, char in enumerate(rest):
            if char in _UNQUOTED_TERMINATORS:
                end = i
                break
        return rest[:end]
    return ""


def _charset_from_meta(attrs: list[tuple[str, str | None]]) -> Encoding | None:
    """Return the encoding a single ``<meta>`` tag declares, if accepted."""
    seen: set[str] = set()
    got_pragma = False
    pragma = PragmaState.UNKNOWN
    encoding: Encoding | None = None

    for key, raw_value in attrs:
        if key in seen:
            continue
        seen.add(key)
        value = (raw_value or "").lower()

        if key == "http-equiv":
            if value == "content-type":
                got_pragma = True
        elif key == "content":
            if encoding is None:
                name = charset_from_content(value)
                if name:
                    encoding = lookup(name)
                    if encoding is not None:
                        pragma = PragmaState.NEEDS_PRAGMA
        elif key == "charset":
            encoding = lookup(value)
            pragma = PragmaState.EXEMPT

    if pragma is PragmaState.UNKNOWN:
        return None
    if pragma is PragmaState.NEEDS_PRAGMA and not got_pragma:
        return None

    # A UTF-16 declaration can't be true of a document that was readable
    # as ASCII-compatible markup.
    if encoding is not None and encoding.name.startswith("utf-16"):
        return NOP
    return encoding


class _MetaScanner(HTMLParser):
    """Tokenizer that records the first accepted ``<meta>`` charset."""

    def __init__(self) -> None:
        super().__init__()
        self.encoding: Encoding | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.encoding is not None or tag != "meta":
            return
        self.encoding = _charset_from_meta(attrs)


def detect_meta_charset(content: bytes) -> Encoding | None:
    """Scan *content* as HTML for a charset-declaring ``<meta>`` tag.

    The parser is fed but never closed, so a tag left incomplete at the end
    of *content* is never reported.

    :param content: The bounded lookahead prefix of the document.
    :returns: The declared :class:`~unistream.registry.Encoding`, or ``None``.
    """
    if not content:
        return None

    scanner = _MetaScanner()
    try:
        # latin-1 maps every byte to one code point, so offsets are preserved
        scanner.feed(content.decode("latin-1"))
    except AssertionError as e:
        # html.parser reports unrecoverable declarations this way
        logger.debug("meta prescan stopped on malformed markup: %s", e)
    return scanner.encoding
