"""Tests for the public API."""

from __future__ import annotations

import io

import unistream


def test_public_api():
    assert set(unistream.__all__) == {
        "ResolutionResult",
        "determine_encoding",
        "must_open_and_close",
        "new_reader",
        "normalize",
        "open_and_close",
        "open_reader",
        "strip_bom",
    }
    for name in unistream.__all__:
        assert hasattr(unistream, name)


def test_empty_input():
    assert unistream.normalize(b"") == b""


def test_single_byte():
    assert unistream.normalize(b"a") == b"a"


def test_utf8_bom_alone():
    assert unistream.normalize(b"\xef\xbb\xbf") == b""


def test_utf8_bom_and_text():
    data = b"\xef\xbb\xbf" + "pingüino".encode()
    assert unistream.normalize(data) == "pingüino".encode()


def test_meta_charset_latin1():
    data = b'<meta charset="iso-8859-1"><p>' + "Señor Müller".encode("latin-1")
    assert unistream.normalize(data).endswith("Señor Müller".encode())


def test_meta_http_equiv_windows_1252():
    head = b'<meta http-equiv="Content-Type" content="text/html; charset=windows-1252">'
    data = head + "€100 – “quoted”".encode("cp1252")
    assert unistream.normalize(data) == head + "€100 – “quoted”".encode()


def test_same_declaration_without_http_equiv_is_ignored():
    head = b'<meta content="text/html; charset=windows-1252">'
    data = head + "€100 – “quoted”".encode("cp1252")
    result = unistream.determine_encoding(data)
    assert result.name == "iso-8859-1"
    assert result.certain is False


def test_new_reader_accepts_any_binary_stream(compare_text: str):
    reader = unistream.new_reader(io.BytesIO(compare_text.encode("utf-16-le")), "text/plain; charset=utf-16le")
    assert reader.read() == compare_text.encode()


def test_determine_encoding_result():
    result = unistream.determine_encoding(b"\xff\xfeh\x00i\x00")
    assert isinstance(result, unistream.ResolutionResult)
    assert result.to_dict() == {"encoding": "utf-16le", "certain": True}


def test_version():
    assert unistream.__version__ == "1.0.0"
