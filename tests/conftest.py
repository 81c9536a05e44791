"""Shared test fixtures."""

from __future__ import annotations

import pytest

COMPARE_TEXT = (
    "callejón sin salida - ślepy zaułek - återvändsgränd - ћорсокак - "
    "αδιέξοδο - 死胡同 - 行き止まり"
)


@pytest.fixture
def compare_text() -> str:
    """Multilingual sample text that needs every UTF-8 sequence length."""
    return COMPARE_TEXT


class TrickleSource:
    """A byte source that hands out at most *step* bytes per read."""

    def __init__(self, data: bytes, step: int = 1) -> None:
        self._data = data
        self._pos = 0
        self._step = step

    def read(self, size: int = -1) -> bytes:
        if size < 0:
            size = len(self._data)
        n = min(size, self._step)
        chunk = self._data[self._pos : self._pos + n]
        self._pos += len(chunk)
        return chunk


class FailingSource:
    """A byte source that returns *data* once and then raises OSError."""

    def __init__(self, data: bytes = b"") -> None:
        self._data = data

    def read(self, size: int = -1) -> bytes:
        if self._data:
            data, self._data = self._data, b""
            return data
        msg = "device not ready"
        raise OSError(msg)


@pytest.fixture
def trickle_source() -> type[TrickleSource]:
    return TrickleSource


@pytest.fixture
def failing_source() -> type[FailingSource]:
    return FailingSource
