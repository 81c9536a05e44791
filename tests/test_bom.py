# tests/test_bom.py
from unistream.pipeline import ResolutionResult
from unistream.pipeline.bom import BOMS, detect_bom
from unistream.registry import NOP, REGISTRY


def test_utf8_bom():
    data = b"\xef\xbb\xbfHello"
    result = detect_bom(data)
    assert result == ResolutionResult(REGISTRY["utf-8"], "utf-8", True)


def test_utf16_le_bom():
    data = b"\xff\xfeH\x00e\x00l\x00l\x00o\x00"
    result = detect_bom(data)
    assert result == ResolutionResult(REGISTRY["utf-16le"], "utf-16le", True)


def test_utf16_be_bom():
    data = b"\xfe\xff\x00H\x00e\x00l\x00l\x00o"
    result = detect_bom(data)
    assert result == ResolutionResult(REGISTRY["utf-16be"], "utf-16be", True)


def test_bom_alone_is_detected():
    assert detect_bom(b"\xef\xbb\xbf").name == "utf-8"
    assert detect_bom(b"\xff\xfe").name == "utf-16le"
    assert detect_bom(b"\xfe\xff").name == "utf-16be"


def test_utf8_bom_resolves_to_nop():
    assert detect_bom(b"\xef\xbb\xbf").encoding is NOP


def test_no_bom():
    data = b"Hello, world!"
    result = detect_bom(data)
    assert result is None


def test_empty_input():
    assert detect_bom(b"") is None


def test_too_short_for_bom():
    assert detect_bom(b"\xef") is None
    assert detect_bom(b"\xef\xbb") is None
    assert detect_bom(b"\xfe") is None
    assert detect_bom(b"\xff") is None


def test_bom_must_be_at_start():
    assert detect_bom(b"a\xef\xbb\xbf") is None
    assert detect_bom(b" \xff\xfe") is None


def test_utf16_boms_checked_before_utf8():
    assert [label for _, label in BOMS] == ["utf-16be", "utf-16le", "utf-8"]
