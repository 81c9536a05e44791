"""Pipeline orchestrator: resolves an encoding from the lookahead prefix."""

from __future__ import annotations

import logging

from unistream._utils import LOOKAHEAD_SIZE
from unistream.pipeline import ResolutionResult
from unistream.pipeline.bom import detect_bom
from unistream.pipeline.content_type import charset_from_content_type
from unistream.pipeline.markup import detect_meta_charset
from unistream.pipeline.utf8 import detect_utf8
from unistream.registry import LATIN_1, lookup

logger = logging.getLogger(__name__)

_FALLBACK_RESULT = ResolutionResult(encoding=LATIN_1, name="iso-8859-1", certain=False)


def determine_encoding(
    content: bytes,
    content_type: str = "",
    max_bytes: int = LOOKAHEAD_SIZE,
) -> ResolutionResult:
    """Determine the encoding of *content*.

    Rules are tried in order and the first one that matches wins:

    1. a byte order mark (certain),
    2. the ``charset`` of the declared *content_type* (certain),
    3. a ``<meta>`` charset declaration (not certain),
    4. non-ASCII content that is valid UTF-8 (not certain),
    5. ISO-8859-1, which decodes any byte sequence (not certain).

    Only the first *max_bytes* bytes are examined; a declaration further
    into the document is never seen.

    :param content: The first bytes of the stream.
    :param content_type: A MIME content-type such as an HTTP header value.
    :param max_bytes: Maximum number of bytes to examine.
    :returns: The resolved :class:`ResolutionResult`.
    """
    content = content[:max_bytes]

    bom_result = detect_bom(content)
    if bom_result is not None:
        logger.debug("BOM found: %s", bom_result.name)
        return bom_result

    charset = charset_from_content_type(content_type)
    if charset is not None:
        encoding = lookup(charset)
        if encoding is not None:
            logger.debug("declared content-type charset: %s", encoding.name)
            return ResolutionResult(encoding=encoding, name=encoding.name, certain=True)
        logger.debug("ignoring unknown declared charset %r", charset)

    if content:
        encoding = detect_meta_charset(content)
        if encoding is not None:
            logger.debug("meta charset declaration: %s", encoding.name)
            return ResolutionResult(encoding=encoding, name=encoding.name, certain=False)

    utf8_result = detect_utf8(content)
    if utf8_result is not None:
        logger.debug("content is valid UTF-8")
        return utf8_result

    logger.debug("falling back to %s", _FALLBACK_RESULT.name)
    return _FALLBACK_RESULT
