"""Generic attribute shape shared by both placements.

An attribute is a kind tag (file, aperture or object), a name and an
ordered tuple of typed fields.  Standard X2 names keep their leading dot
(``.FileFunction``, ``.C``); user-defined names carry none.

The same :class:`Attribute` renders either as a dedicated extended code
(``%TO.C,R1*%``) or inside a standard comment (``G04 #@! TO.C,R1*``);
see :mod:`gerber_ir.attributes.encoding`.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from gerber_ir.numeric.encoder import Number

# ---------------------------------------------------------------------------
# Tags
# ---------------------------------------------------------------------------


class AttributeKind(Enum):
    """Attribute scope, valued by the letter following ``T``."""

    FILE = "F"
    APERTURE = "A"
    OBJECT = "O"


class Placement(Enum):
    """Where an attribute is written."""

    EXTENDED = "extended"
    COMMENT = "comment"


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Field(ABC):
    """Base class for attribute field values."""

    pass


@dataclass(frozen=True, slots=True)
class StringField(Field):
    """Free text.  May be empty, which renders as an empty slot."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"value must be a str, got {self.value!r}")


@dataclass(frozen=True, slots=True)
class IntegerField(Field):
    """Integer value."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"value must be an int, got {self.value!r}")


@dataclass(frozen=True, slots=True)
class DecimalField(Field):
    """Decimal value, printed in plain decimal form."""

    value: Number

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(
            self.value, (int, float, Decimal)
        ):
            raise TypeError(f"value must be a number, got {self.value!r}")


@dataclass(frozen=True, slots=True)
class EnumField(Field):
    """Enumerated token.  The member's value is the literal output."""

    value: Enum

    def __post_init__(self) -> None:
        if not isinstance(self.value, Enum) or not isinstance(
            self.value.value, str
        ):
            raise TypeError(
                f"value must be an Enum with a str token, got {self.value!r}"
            )


# ---------------------------------------------------------------------------
# Attribute
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Attribute:
    """One file, aperture or object attribute.

    Parameters
    ----------
    kind : AttributeKind
        Scope of the attribute.
    name : str
        Attribute name, e.g. ``".C"`` or ``"MyAttribute"``.
    fields : tuple[Field, ...]
        Values in output order.
    """

    kind: AttributeKind
    name: str
    fields: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.kind, AttributeKind):
            raise ValueError(
                f"kind must be an AttributeKind, got {self.kind!r}"
            )
        if not isinstance(self.fields, tuple):
            raise TypeError(
                f"fields must be a tuple, got {type(self.fields).__name__}"
            )
        for i, item in enumerate(self.fields):
            if not isinstance(item, Field):
                raise TypeError(
                    f"fields[{i}] must be a Field, got {type(item).__name__}"
                )


def user_attribute(kind: AttributeKind, name: str, *values: str) -> Attribute:
    """Build a user-defined attribute whose fields are all strings."""
    return Attribute(kind, name, tuple(StringField(v) for v in values))
