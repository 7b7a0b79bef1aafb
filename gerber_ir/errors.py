"""Error taxonomy for Gerber serialization.

Every failure raised while rendering a command tree derives from
:class:`GerberError`.  All of them are detected synchronously while a
single node is rendered and none of them is retryable: malformed input is
a caller defect.

Structural mistakes made while *constructing* nodes (bad digit counts,
wrong qualifier types) raise plain ``ValueError`` from ``__post_init__``
instead, matching the rest of the dataclass vocabulary.
"""

from __future__ import annotations


class GerberError(Exception):
    """Base class for every serialization failure."""

    pass


class OutOfRange(GerberError):
    """A numeric value cannot be represented by the active digit budget.

    Also raised for NaN and infinite values, which have no textual form.
    """

    pass


class InvalidVariableIndex(GerberError):
    """A macro variable reference uses a non-positive index."""

    pass


class UnencodableField(GerberError):
    """A text field contains characters reserved by its placement."""

    pass


class IncompleteCoordinate(GerberError):
    """An operation that requires motion carries no axis values."""

    pass


class FormatMismatch(GerberError):
    """An ``FS`` command disagrees with the format coordinates are encoded with."""

    pass
