"""Stage 2: charset declared by a MIME content-type."""

from __future__ import annotations

import re
from email.message import Message

# RFC 2045 token characters on both sides of the slash
_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_MEDIA_TYPE_RE = re.compile(_TOKEN + "/" + _TOKEN)


def charset_from_content_type(content_type: str) -> str | None:
    """Return the ``charset`` parameter of *content_type*, if any.

    The value must start with a ``type/subtype`` media type.  Parameters
    are parsed by :mod:`email`, which handles quoting and RFC 2231
    continuations.  Missing or unparseable headers give ``None``.

    >>> charset_from_content_type('text/html; charset="Shift_JIS"')
    'shift_jis'
    """
    if "\r" in content_type or "\n" in content_type:
        return None
    media_type = content_type.split(";", 1)[0].strip()
    if not _MEDIA_TYPE_RE.fullmatch(media_type):
        return None
    msg = Message()
    msg["content-type"] = content_type
    charset = msg.get_content_charset()
    return charset or None
