"""Attribute placement encoding.

Two placements carry the same attribute:

Extended code
    ``%T<k><name>[,<field>...]*%``
Standard comment
    ``G04 #@! T<k><name>[,<field>...]*``

``<k>`` is ``F``, ``A`` or ``O``.  Deletion uses ``TD`` with an optional
name in both placements.

Text that reaches the output is checked against the reserved set of its
placement.  The comment set is a superset of the extended set: it also
forbids the ``#@!`` marker so a field can never open a nested standard
comment.
"""

from __future__ import annotations

from gerber_ir.attributes.model import (
    Attribute,
    DecimalField,
    EnumField,
    Field,
    IntegerField,
    Placement,
    StringField,
)
from gerber_ir.errors import GerberError, UnencodableField
from gerber_ir.numeric.encoder import encode_decimal

STANDARD_COMMENT_MARKER = "#@!"
"""Prefix that marks a ``G04`` comment as carrying an attribute."""

EXTENDED_RESERVED = frozenset("*%,\r\n")
COMMENT_RESERVED = EXTENDED_RESERVED

_RESERVED_SEQUENCES = {
    Placement.EXTENDED: (),
    Placement.COMMENT: (STANDARD_COMMENT_MARKER,),
}
_RESERVED_CHARS = {
    Placement.EXTENDED: EXTENDED_RESERVED,
    Placement.COMMENT: COMMENT_RESERVED,
}


# ---------------------------------------------------------------------------
# Safety
# ---------------------------------------------------------------------------


def check_text(text: str, placement: Placement, *, what: str) -> str:
    """Return *text* unchanged if it is safe for *placement*.

    Raises
    ------
    UnencodableField
        If *text* contains a reserved character or sequence.
    """
    reserved = _RESERVED_CHARS[placement]
    for ch in text:
        if ch in reserved:
            raise UnencodableField(
                f"{what} contains {ch!r}, reserved in {placement.value} "
                f"placement: {text!r}"
            )
    for seq in _RESERVED_SEQUENCES[placement]:
        if seq in text:
            raise UnencodableField(
                f"{what} contains {seq!r}, reserved in {placement.value} "
                f"placement: {text!r}"
            )
    return text


def encode_field(field: Field, placement: Placement, *, what: str) -> str:
    """Render one field value."""
    if isinstance(field, StringField):
        return check_text(field.value, placement, what=what)
    if isinstance(field, IntegerField):
        return str(field.value)
    if isinstance(field, DecimalField):
        return encode_decimal(field.value)
    if isinstance(field, EnumField):
        return check_text(field.value.value, placement, what=what)
    raise GerberError(f"Unsupported attribute field: {type(field).__name__}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def encode_attribute_body(attribute: Attribute, placement: Placement) -> str:
    """Render ``<name>[,<field>...]`` for *attribute*.

    Raises
    ------
    UnencodableField
        If the name is empty or any text is unsafe for *placement*.
    """
    if not attribute.name:
        raise UnencodableField("Attribute name must not be empty")
    parts = [check_text(attribute.name, placement, what="Attribute name")]
    for i, field in enumerate(attribute.fields):
        parts.append(
            encode_field(
                field, placement, what=f"Field {i} of attribute {attribute.name}",
            )
        )
    return ",".join(parts)


def render_attribute(attribute: Attribute, placement: Placement) -> str:
    """Render *attribute* in *placement*, without a line terminator.

    Examples
    --------
    >>> from gerber_ir.attributes.model import AttributeKind, StringField
    >>> attr = Attribute(AttributeKind.OBJECT, ".C", (StringField("R1"),))
    >>> render_attribute(attr, Placement.EXTENDED)
    '%TO.C,R1*%'
    >>> render_attribute(attr, Placement.COMMENT)
    'G04 #@! TO.C,R1*'
    """
    body = f"T{attribute.kind.value}{encode_attribute_body(attribute, placement)}"
    if placement is Placement.EXTENDED:
        return f"%{body}*%"
    return f"G04 {STANDARD_COMMENT_MARKER} {body}*"


def render_deletion(name: str | None, placement: Placement) -> str:
    """Render an attribute deletion; ``None`` or ``""`` deletes all."""
    body = "TD"
    if name:
        body += check_text(name, placement, what="Deleted attribute name")
    if placement is Placement.EXTENDED:
        return f"%{body}*%"
    return f"G04 {STANDARD_COMMENT_MARKER} {body}*"
