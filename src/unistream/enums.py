"""Enumerations for unistream."""

import enum


class PragmaState(enum.Enum):
    """Whether a ``<meta>`` charset declaration needs an ``http-equiv`` pragma.

    A ``content="...charset=X"`` attribute is only honoured when the same tag
    also carries ``http-equiv="content-type"``; a ``charset="X"`` attribute
    never needs one.
    """

    UNKNOWN = "unknown"
    NEEDS_PRAGMA = "needs-pragma"
    EXEMPT = "exempt"
