"""Readers that turn a byte stream of any encoding into BOM-free UTF-8."""

from __future__ import annotations

import codecs
import io
import logging
from typing import BinaryIO, Protocol

from unistream._utils import (
    DEFAULT_CHUNK_SIZE,
    LOOKAHEAD_SIZE,
    _validate_chunk_size,
    _validate_lookahead_size,
)
from unistream.pipeline.bom import UTF8_BOM
from unistream.pipeline.orchestrator import determine_encoding
from unistream.registry import Encoding

logger = logging.getLogger(__name__)


class ByteSource(Protocol):
    """Anything with a blocking ``read(n)`` that returns ``b""`` at EOF."""

    def read(self, size: int = -1, /) -> bytes: ...


def read_full(source: ByteSource, size: int) -> bytes:
    """Read exactly *size* bytes from *source*, or fewer at end of stream.

    Short reads are retried; running out of data is not an error.
    """
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = source.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class PrefixedReader(io.RawIOBase):
    """Replays *prefix* and then reads the rest of *source*.

    Closing this reader does not close *source*; whoever opened it owns it.
    """

    def __init__(self, prefix: bytes, source: ByteSource) -> None:
        self._prefix = memoryview(prefix)
        self._source = source

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: bytearray | memoryview) -> int:
        size = len(buffer)
        if size == 0:
            return 0
        if self._prefix:
            n = min(size, len(self._prefix))
            buffer[:n] = self._prefix[:n]
            self._prefix = self._prefix[n:]
            return n
        data = self._source.read(size)
        if not data:
            return 0
        n = len(data)
        buffer[:n] = data
        return n


class DecodingReader(io.RawIOBase):
    """Decodes *source* incrementally and yields the text as UTF-8 bytes.

    Malformed input for *encoding* surfaces as :exc:`UnicodeDecodeError`
    from :meth:`read` (with the default ``errors="strict"``); errors from
    *source* propagate unchanged.
    """

    def __init__(
        self,
        source: ByteSource,
        encoding: Encoding,
        errors: str = "strict",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        _validate_chunk_size(chunk_size)
        codecs.lookup_error(errors)
        self._source = source
        self._decoder = encoding.new_decoder(errors)
        self._chunk_size = chunk_size
        self._pending = b""
        self._eof = False
        self.encoding = encoding

    def readable(self) -> bool:
        return True

    def _fill(self) -> None:
        while not self._pending and not self._eof:
            chunk = self._source.read(self._chunk_size)
            if not chunk:
                self._eof = True
            text = self._decoder.decode(chunk or b"", final=self._eof)
            self._pending = text.encode("utf-8")

    def readinto(self, buffer: bytearray | memoryview) -> int:
        if len(buffer) == 0:
            return 0
        self._fill()
        n = min(len(buffer), len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n


class BOMStrippingReader(PrefixedReader):
    """Drops a leading UTF-8 byte order mark from *source*.

    The first read probes at most three bytes.  A stream shorter than that
    is passed through as is, and bytes that turn out not to be a BOM are
    replayed ahead of the rest of the stream.
    """

    def __init__(self, source: ByteSource) -> None:
        super().__init__(b"", source)
        self._probed = False

    def readinto(self, buffer: bytearray | memoryview) -> int:
        if not self._probed:
            head = read_full(self._source, len(UTF8_BOM))
            self._probed = True
            if head == UTF8_BOM:
                logger.debug("stripping UTF-8 BOM")
            else:
                self._prefix = memoryview(head)
        return super().readinto(buffer)


def strip_bom(stream: ByteSource) -> BinaryIO:
    """Return *stream* without a leading UTF-8 byte order mark."""
    return io.BufferedReader(BOMStrippingReader(stream))


def new_reader(
    source: ByteSource,
    content_type: str = "",
    *,
    lookahead_size: int = LOOKAHEAD_SIZE,
    errors: str = "strict",
) -> BinaryIO:
    """Return a reader that yields the content of *source* as UTF-8 without BOM.

    Up to *lookahead_size* bytes are read eagerly to determine the encoding
    (see :func:`~unistream.pipeline.orchestrator.determine_encoding`); the
    rest is decoded lazily as the returned reader is drained.

    :param source: A binary stream such as an open file or :class:`io.BytesIO`.
    :param content_type: Optional declared content-type (e.g. an HTTP header).
    :param lookahead_size: Maximum number of bytes examined up front.
    :param errors: Codec error handler used when decoding.
    :returns: A binary file-like object.
    :raises OSError: If reading the lookahead from *source* fails.
    :raises ValueError: If *lookahead_size* is not a positive integer.
    :raises LookupError: If *errors* is not a registered error handler.
    """
    _validate_lookahead_size(lookahead_size)
    codecs.lookup_error(errors)

    preview = read_full(source, lookahead_size)
    if not preview:
        logger.debug("source is empty")
        return io.BytesIO(b"")

    result = determine_encoding(preview, content_type, max_bytes=lookahead_size)
    logger.debug(
        "resolved encoding %s (certain=%s) from %d bytes",
        result.name,
        result.certain,
        len(preview),
    )

    # A whole stream shorter than the UTF-8 BOM is only transcoded on a
    # certain result; a guess from one or two bytes is not applied.
    if len(preview) < min(len(UTF8_BOM), lookahead_size) and not result.certain:
        logger.debug("short source of %d bytes passed through", len(preview))
        return io.BytesIO(preview)

    stream: ByteSource = PrefixedReader(preview, source)
    if not result.encoding.is_nop:
        stream = DecodingReader(stream, result.encoding, errors=errors)
    return strip_bom(stream)


def normalize(
    data: bytes | bytearray,
    content_type: str = "",
    *,
    lookahead_size: int = LOOKAHEAD_SIZE,
    errors: str = "strict",
) -> bytes:
    """Return *data* transcoded to UTF-8 with any leading BOM removed.

    In-memory convenience around :func:`new_reader`.
    """
    reader = new_reader(
        io.BytesIO(bytes(data)),
        content_type,
        lookahead_size=lookahead_size,
        errors=errors,
    )
    return reader.read()
