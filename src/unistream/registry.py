"""Encoding registry: charset labels mapped to Python codecs.

Labels follow the WHATWG Encoding Standard, which is what browsers (and
``<meta charset>`` declarations) use.  Labels outside that table are
resolved through :func:`codecs.lookup` as long as the codec is a text
encoding.
"""

from __future__ import annotations

import codecs
import dataclasses
from collections.abc import Mapping
from encodings import cp1252
from types import MappingProxyType


@dataclasses.dataclass(frozen=True, slots=True)
class Encoding:
    """A named conversion from a byte representation to Unicode text.

    :param name: Canonical (IANA/WHATWG) name of the charset.
    :param python_codec: Codec name understood by :mod:`codecs`.
    :param is_nop: ``True`` for content that is already canonical UTF-8
        and needs no transformation.
    """

    name: str
    python_codec: str
    is_nop: bool = False

    def new_decoder(self, errors: str = "strict") -> codecs.IncrementalDecoder:
        """Return a fresh incremental decoder for this encoding."""
        factory = _WHATWG_DECODERS.get(self.name)
        if factory is None:
            factory = codecs.getincrementaldecoder(self.python_codec)
        return factory(errors=errors)


#: Content that is already UTF-8 and passes through untouched.
NOP = Encoding(name="utf-8", python_codec="utf-8", is_nop=True)

#: Fallback when nothing else identifies the content; accepts every byte.
LATIN_1 = Encoding(name="iso-8859-1", python_codec="latin-1")

# cp1252 leaves five bytes undefined; the WHATWG index maps them to the C1
# control with the same code point, as latin-1 does.
_WINDOWS_1252_TABLE = "".join(
    chr(byte) if char == "\ufffe" else char
    for byte, char in enumerate(cp1252.decoding_table)
)


class _Windows1252Decoder(codecs.IncrementalDecoder):
    def decode(self, input: bytes, final: bool = False) -> str:
        return codecs.charmap_decode(input, self.errors, _WINDOWS_1252_TABLE)[0]


_WHATWG_DECODERS: dict[str, type[codecs.IncrementalDecoder]] = {
    "windows-1252": _Windows1252Decoder,
}

# (canonical name, python codec, labels)
_LABELS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    (
        "utf-8",
        "utf-8",
        (
            "unicode-1-1-utf-8",
            "unicode11utf8",
            "unicode20utf8",
            "utf-8",
            "utf8",
            "x-unicode20utf8",
        ),
    ),
    ("ibm866", "cp866", ("866", "cp866", "csibm866", "ibm866")),
    (
        "iso-8859-2",
        "iso8859-2",
        (
            "csisolatin2",
            "iso-8859-2",
            "iso-ir-101",
            "iso8859-2",
            "iso88592",
            "iso_8859-2",
            "iso_8859-2:1987",
            "l2",
            "latin2",
        ),
    ),
    (
        "iso-8859-3",
        "iso8859-3",
        (
            "csisolatin3",
            "iso-8859-3",
            "iso-ir-109",
            "iso8859-3",
            "iso88593",
            "iso_8859-3",
            "iso_8859-3:1988",
            "l3",
            "latin3",
        ),
    ),
    (
        "iso-8859-4",
        "iso8859-4",
        (
            "csisolatin4",
            "iso-8859-4",
            "iso-ir-110",
            "iso8859-4",
            "iso88594",
            "iso_8859-4",
            "iso_8859-4:1988",
            "l4",
            "latin4",
        ),
    ),
    (
        "iso-8859-5",
        "iso8859-5",
        (
            "csisolatincyrillic",
            "cyrillic",
            "iso-8859-5",
            "iso-ir-144",
            "iso8859-5",
            "iso88595",
            "iso_8859-5",
            "iso_8859-5:1988",
        ),
    ),
    (
        "iso-8859-6",
        "iso8859-6",
        (
            "arabic",
            "asmo-708",
            "csiso88596e",
            "csiso88596i",
            "csisolatinarabic",
            "ecma-114",
            "iso-8859-6",
            "iso-8859-6-e",
            "iso-8859-6-i",
            "iso-ir-127",
            "iso8859-6",
            "iso88596",
            "iso_8859-6",
            "iso_8859-6:1987",
        ),
    ),
    (
        "iso-8859-7",
        "iso8859-7",
        (
            "csisolatingreek",
            "ecma-118",
            "elot_928",
            "greek",
            "greek8",
            "iso-8859-7",
            "iso-ir-126",
            "iso8859-7",
            "iso88597",
            "iso_8859-7",
            "iso_8859-7:1987",
            "sun_eu_greek",
        ),
    ),
    (
        "iso-8859-8",
        "iso8859-8",
        (
            "csiso88598e",
            "csisolatinhebrew",
            "hebrew",
            "iso-8859-8",
            "iso-8859-8-e",
            "iso-ir-138",
            "iso8859-8",
            "iso88598",
            "iso_8859-8",
            "iso_8859-8:1988",
            "visual",
        ),
    ),
    ("iso-8859-8-i", "iso8859-8", ("csiso88598i", "iso-8859-8-i", "logical")),
    (
        "iso-8859-10",
        "iso8859-10",
        (
            "csisolatin6",
            "iso-8859-10",
            "iso-ir-157",
            "iso8859-10",
            "iso885910",
            "l6",
            "latin6",
        ),
    ),
    ("iso-8859-13", "iso8859-13", ("iso-8859-13", "iso8859-13", "iso885913")),
    ("iso-8859-14", "iso8859-14", ("iso-8859-14", "iso8859-14", "iso885914")),
    (
        "iso-8859-15",
        "iso8859-15",
        (
            "csisolatin9",
            "iso-8859-15",
            "iso8859-15",
            "iso885915",
            "iso_8859-15",
            "l9",
        ),
    ),
    ("iso-8859-16", "iso8859-16", ("iso-8859-16",)),
    ("koi8-r", "koi8-r", ("cskoi8r", "koi", "koi8", "koi8-r", "koi8_r")),
    ("koi8-u", "koi8-u", ("koi8-ru", "koi8-u")),
    ("macintosh", "mac-roman", ("csmacintosh", "mac", "macintosh", "x-mac-roman")),
    (
        "windows-874",
        "cp874",
        (
            "dos-874",
            "iso-8859-11",
            "iso8859-11",
            "iso885911",
            "tis-620",
            "windows-874",
        ),
    ),
    ("windows-1250", "cp1250", ("cp1250", "windows-1250", "x-cp1250")),
    ("windows-1251", "cp1251", ("cp1251", "windows-1251", "x-cp1251")),
    (
        "windows-1252",
        "cp1252",
        (
            "ansi_x3.4-1968",
            "ascii",
            "cp1252",
            "cp819",
            "csisolatin1",
            "ibm819",
            "iso-8859-1",
            "iso-ir-100",
            "iso8859-1",
            "iso88591",
            "iso_8859-1",
            "iso_8859-1:1987",
            "l1",
            "latin1",
            "us-ascii",
            "windows-1252",
            "x-cp1252",
        ),
    ),
    ("windows-1253", "cp1253", ("cp1253", "windows-1253", "x-cp1253")),
    (
        "windows-1254",
        "cp1254",
        (
            "cp1254",
            "csisolatin5",
            "iso-8859-9",
            "iso-ir-148",
            "iso8859-9",
            "iso88599",
            "iso_8859-9",
            "iso_8859-9:1989",
            "l5",
            "latin5",
            "windows-1254",
            "x-cp1254",
        ),
    ),
    ("windows-1255", "cp1255", ("cp1255", "windows-1255", "x-cp1255")),
    ("windows-1256", "cp1256", ("cp1256", "windows-1256", "x-cp1256")),
    ("windows-1257", "cp1257", ("cp1257", "windows-1257", "x-cp1257")),
    ("windows-1258", "cp1258", ("cp1258", "windows-1258", "x-cp1258")),
    ("x-mac-cyrillic", "mac-cyrillic", ("x-mac-cyrillic", "x-mac-ukrainian")),
    (
        "gbk",
        "gbk",
        (
            "chinese",
            "csgb2312",
            "csiso58gb231280",
            "gb2312",
            "gb_2312",
            "gb_2312-80",
            "gbk",
            "iso-ir-58",
            "x-gbk",
        ),
    ),
    ("gb18030", "gb18030", ("gb18030",)),
    ("big5", "big5hkscs", ("big5", "big5-hkscs", "cn-big5", "csbig5", "x-x-big5")),
    ("euc-jp", "euc_jp", ("cseucpkdfmtjapanese", "euc-jp", "x-euc-jp")),
    ("iso-2022-jp", "iso2022_jp", ("csiso2022jp", "iso-2022-jp")),
    (
        "shift_jis",
        "cp932",
        (
            "csshiftjis",
            "ms932",
            "ms_kanji",
            "shift-jis",
            "shift_jis",
            "sjis",
            "windows-31j",
            "x-sjis",
        ),
    ),
    (
        "euc-kr",
        "cp949",
        (
            "cseuckr",
            "csksc56011987",
            "euc-kr",
            "iso-ir-149",
            "korean",
            "ks_c_5601-1987",
            "ks_c_5601-1989",
            "ksc5601",
            "ksc_5601",
            "windows-949",
        ),
    ),
    ("utf-16be", "utf-16-be", ("unicodefffe", "utf-16be")),
    (
        "utf-16le",
        "utf-16-le",
        (
            "csunicode",
            "iso-10646-ucs-2",
            "ucs-2",
            "unicode",
            "unicodefeff",
            "utf-16",
            "utf-16le",
        ),
    ),
)


def _build_registry() -> dict[str, Encoding]:
    registry: dict[str, Encoding] = {}
    for name, codec, labels in _LABELS:
        # UTF-8 input already is the output format
        if name == NOP.name:
            encoding = NOP
        else:
            encoding = Encoding(name=name, python_codec=codec)
        for label in labels:
            registry[label] = encoding
    return registry


#: Every known label mapped to its :class:`Encoding` singleton.
REGISTRY: Mapping[str, Encoding] = MappingProxyType(_build_registry())

# Codecs that must never be picked from a label found in untrusted content.
_REFUSED_CODECS: frozenset[str] = frozenset({"utf-7"})

_ASCII_WHITESPACE = " \t\n\f\r"


def lookup(label: str) -> Encoding | None:
    """Return the :class:`Encoding` for a charset *label*, or ``None``.

    Surrounding ASCII whitespace is ignored and matching is
    case-insensitive.  Non-text codecs (``base64``, ``zlib``, ...) are
    never returned.

    :param label: A charset name such as ``"ISO-8859-1"`` or ``"sjis"``.
    :returns: The matching encoding, or ``None`` if it is unknown.
    """
    key = label.strip(_ASCII_WHITESPACE).lower()
    if not key:
        return None
    encoding = REGISTRY.get(key)
    if encoding is not None:
        return encoding
    try:
        info = codecs.lookup(key)
    except (LookupError, ValueError):
        return None
    if not getattr(info, "_is_text_encoding", True) or info.name in _REFUSED_CODECS:
        return None
    if info.name == NOP.name:
        return NOP
    return Encoding(name=info.name, python_codec=info.name)
