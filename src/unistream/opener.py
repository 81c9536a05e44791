"""Open files by name and read them as BOM-free UTF-8."""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Callable, Iterator
from typing import Any, BinaryIO

from unistream.reader import new_reader

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]


def _release(handle: BinaryIO) -> None:
    """Flush (when supported) and close *handle*, letting failures propagate."""
    try:
        flush = getattr(handle, "flush", None)
        if flush is not None and not handle.closed:
            flush()
    finally:
        handle.close()


def open_and_close(
    path: StrPath, content_type: str = "", **kwargs: Any
) -> tuple[BinaryIO, Callable[[], None]]:
    """Open *path* and return a UTF-8 reader plus the function that releases it.

    If building the reader fails the file is closed before the error
    propagates.  The returned ``release`` flushes and closes the file and
    raises if either step fails.

    :param path: The file to open.
    :param content_type: Optional declared content-type.
    :param kwargs: Passed through to :func:`~unistream.reader.new_reader`.
    :returns: ``(reader, release)``.
    """
    handle = open(path, "rb")  # noqa: SIM115
    try:
        reader = new_reader(handle, content_type, **kwargs)
    except BaseException:
        handle.close()
        raise
    logger.debug("opened %s", path)
    return reader, lambda: _release(handle)


@contextlib.contextmanager
def open_reader(
    path: StrPath, content_type: str = "", **kwargs: Any
) -> Iterator[BinaryIO]:
    """Context manager form of :func:`open_and_close`.

    >>> with open_reader("page.html") as f:  # doctest: +SKIP
    ...     text = f.read().decode("utf-8")
    """
    reader, release = open_and_close(path, content_type, **kwargs)
    try:
        yield reader
    finally:
        release()


def must_open_and_close(
    path: StrPath, content_type: str = "", **kwargs: Any
) -> tuple[BinaryIO, Callable[[], None]]:
    """Like :func:`open_and_close`, but any failure aborts the program.

    Errors while opening, or later while releasing, are turned into
    :exc:`SystemExit`.  Meant for scripts that have no way to recover.
    """
    try:
        reader, release = open_and_close(path, content_type, **kwargs)
    except (OSError, LookupError, ValueError) as e:
        raise SystemExit(f"unistream: {path}: {e}") from e

    def must_release() -> None:
        try:
            release()
        except OSError as e:
            raise SystemExit(f"unistream: {path}: {e}") from e

    return reader, must_release
