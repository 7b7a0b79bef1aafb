"""Function codes -- D, G and M commands.

Draw operations carry optional :class:`Coordinates`; an absent axis means
"unchanged" and emits nothing.  ``Interpolate`` and ``Move`` need at least
one axis, ``Flash`` may flash at the current point.

Comments are either plain text or a :class:`StandardComment` carrying an
attribute behind the ``#@!`` marker.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from enum import Enum

from gerber_ir.attributes.model import Attribute
from gerber_ir.attributes.standard import StandardAttribute
from gerber_ir.commands.extended_codes import DeleteAttribute, Unit
from gerber_ir.numeric.encoder import Notation, Number

# ---------------------------------------------------------------------------
# Coordinates
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Coordinates:
    """End point of an operation.  ``None`` leaves the axis unchanged."""

    x: Number | None = None
    y: Number | None = None

    def is_empty(self) -> bool:
        return self.x is None and self.y is None


@dataclass(frozen=True, slots=True)
class CoordinateOffset:
    """Arc center offset (``I``/``J``)."""

    i: Number | None = None
    j: Number | None = None

    def is_empty(self) -> bool:
        return self.i is None and self.j is None


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FunctionCode(ABC):
    """Base class for all function codes."""

    pass


# ---------------------------------------------------------------------------
# D codes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SelectAperture(FunctionCode):
    """``D<code>*``."""

    code: int

    def __post_init__(self) -> None:
        if not isinstance(self.code, int) or isinstance(self.code, bool):
            raise ValueError(f"code must be an int, got {self.code!r}")


@dataclass(frozen=True, slots=True)
class Interpolate(FunctionCode):
    """``D01`` -- draw to *coordinates*, with *offset* for circular arcs."""

    coordinates: Coordinates | None = None
    offset: CoordinateOffset | None = None


@dataclass(frozen=True, slots=True)
class Move(FunctionCode):
    """``D02`` -- move to *coordinates* without drawing."""

    coordinates: Coordinates | None = None


@dataclass(frozen=True, slots=True)
class Flash(FunctionCode):
    """``D03`` -- flash the current aperture."""

    coordinates: Coordinates | None = None


# ---------------------------------------------------------------------------
# G codes
# ---------------------------------------------------------------------------


class InterpolationMode(Enum):
    LINEAR = "G01"
    CLOCKWISE = "G02"
    COUNTERCLOCKWISE = "G03"


@dataclass(frozen=True, slots=True)
class SetInterpolation(FunctionCode):
    mode: InterpolationMode


@dataclass(frozen=True, slots=True)
class RegionMode(FunctionCode):
    """``G36`` when *enabled*, ``G37`` otherwise."""

    enabled: bool


class QuadrantMode(Enum):
    SINGLE = "G74"
    MULTI = "G75"


@dataclass(frozen=True, slots=True)
class SetQuadrant(FunctionCode):
    mode: QuadrantMode


@dataclass(frozen=True, slots=True)
class StandardComment:
    """Attribute or deletion embedded in a ``G04`` comment."""

    payload: Attribute | StandardAttribute | DeleteAttribute


@dataclass(frozen=True, slots=True)
class Comment(FunctionCode):
    """``G04 <content>*``."""

    content: str | StandardComment


@dataclass(frozen=True, slots=True)
class LegacyUnit(FunctionCode):
    """``G70`` (inches) / ``G71`` (millimetres).  Deprecated."""

    unit: Unit


@dataclass(frozen=True, slots=True)
class LegacyNotation(FunctionCode):
    """``G90`` (absolute) / ``G91`` (incremental).  Deprecated."""

    notation: Notation


@dataclass(frozen=True, slots=True)
class LegacySelectAperture(FunctionCode):
    """Bare ``G54*``.  Deprecated."""

    pass


# ---------------------------------------------------------------------------
# M codes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class EndOfFile(FunctionCode):
    """``M02*``."""

    pass
