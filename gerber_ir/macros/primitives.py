"""Aperture macro body statements.

An ``AM`` definition is an ordered list of statements, each rendered on
its own line and terminated by ``*``:

========  ===========================  ====================================
Code      Statement                    Parameters
========  ===========================  ====================================
``0``     :class:`MacroComment`        free text
``1``     :class:`CirclePrimitive`     exposure, diameter, center[, angle]
``20``    :class:`VectorLinePrimitive` exposure, width, start, end, angle
``21``    :class:`CenterLinePrimitive` exposure, width/height, center, angle
``4``     :class:`OutlinePrimitive`    exposure, closed point list, angle
``5``     :class:`PolygonPrimitive`    exposure, vertices, center, diameter,
                                       angle
``6``     :class:`MoirePrimitive`      center, ring geometry, cross hair,
                                       angle
``7``     :class:`ThermalPrimitive`    center, diameters, gap, angle
``$n=``   :class:`VariableDefinition`  index, decimal expression
========  ===========================  ====================================

Exposure is a :class:`~gerber_ir.macros.expressions.MacroBoolean`,
vertex and ring counts are
:class:`~gerber_ir.macros.expressions.MacroInteger`, everything else is
a :class:`~gerber_ir.macros.expressions.MacroDecimal`.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass

from gerber_ir.macros.expressions import (
    DecimalConstant,
    IntegerConstant,
    MacroBoolean,
    MacroDecimal,
    MacroInteger,
    _check_index,
    _check_operand,
)

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Point = tuple[MacroDecimal, MacroDecimal]
"""An (x, y) pair of decimal expressions."""

NO_ROTATION = DecimalConstant(0)
"""Default rotation angle in degrees."""


def _check_point(point: Point, role: str) -> None:
    if not isinstance(point, tuple) or len(point) != 2:
        raise ValueError(f"{role} must be an (x, y) tuple, got {point!r}")
    _check_operand(point[0], MacroDecimal, f"{role}.x")
    _check_operand(point[1], MacroDecimal, f"{role}.y")


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MacroContent(ABC):
    """Base class for every statement of an aperture macro body."""

    pass


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MacroComment(MacroContent):
    """Comment statement (``0 text``)."""

    text: str


@dataclass(frozen=True, slots=True)
class CirclePrimitive(MacroContent):
    """Circle primitive (code 1).

    Parameters
    ----------
    exposure : MacroBoolean
        ``1`` adds, ``0`` clears.
    diameter : MacroDecimal
        Circle diameter.
    center : Point
        Center position.
    angle : MacroDecimal | None
        Rotation around the macro origin.  Omitted from the output when
        ``None``.
    """

    exposure: MacroBoolean
    diameter: MacroDecimal
    center: Point
    angle: MacroDecimal | None = None

    def __post_init__(self) -> None:
        _check_operand(self.exposure, MacroBoolean, "exposure")
        _check_operand(self.diameter, MacroDecimal, "diameter")
        _check_point(self.center, "center")
        if self.angle is not None:
            _check_operand(self.angle, MacroDecimal, "angle")


@dataclass(frozen=True, slots=True)
class VectorLinePrimitive(MacroContent):
    """Vector line primitive (code 20)."""

    exposure: MacroBoolean
    width: MacroDecimal
    start: Point
    end: Point
    angle: MacroDecimal = NO_ROTATION

    def __post_init__(self) -> None:
        _check_operand(self.exposure, MacroBoolean, "exposure")
        _check_operand(self.width, MacroDecimal, "width")
        _check_point(self.start, "start")
        _check_point(self.end, "end")
        _check_operand(self.angle, MacroDecimal, "angle")


@dataclass(frozen=True, slots=True)
class CenterLinePrimitive(MacroContent):
    """Center line primitive (code 21).

    Parameters
    ----------
    exposure : MacroBoolean
        ``1`` adds, ``0`` clears.
    dimensions : Point
        Width and height of the rectangle.
    center : Point
        Rectangle center.
    angle : MacroDecimal
        Rotation around the macro origin.
    """

    exposure: MacroBoolean
    dimensions: Point
    center: Point
    angle: MacroDecimal = NO_ROTATION

    def __post_init__(self) -> None:
        _check_operand(self.exposure, MacroBoolean, "exposure")
        _check_point(self.dimensions, "dimensions")
        _check_point(self.center, "center")
        _check_operand(self.angle, MacroDecimal, "angle")


@dataclass(frozen=True, slots=True)
class OutlinePrimitive(MacroContent):
    """Outline primitive (code 4).

    *points* lists every vertex including the closing one, so the
    emitted vertex count is ``len(points) - 1``.
    """

    exposure: MacroBoolean
    points: tuple[Point, ...]
    angle: MacroDecimal = NO_ROTATION

    def __post_init__(self) -> None:
        _check_operand(self.exposure, MacroBoolean, "exposure")
        if len(self.points) < 2:
            raise ValueError(
                f"Outline needs at least 2 points, got {len(self.points)}"
            )
        for i, point in enumerate(self.points):
            _check_point(point, f"points[{i}]")
        _check_operand(self.angle, MacroDecimal, "angle")


@dataclass(frozen=True, slots=True)
class PolygonPrimitive(MacroContent):
    """Regular polygon primitive (code 5)."""

    exposure: MacroBoolean
    vertices: MacroInteger
    center: Point
    diameter: MacroDecimal
    angle: MacroDecimal = NO_ROTATION

    def __post_init__(self) -> None:
        _check_operand(self.exposure, MacroBoolean, "exposure")
        _check_operand(self.vertices, MacroInteger, "vertices")
        if isinstance(self.vertices, IntegerConstant) and not 3 <= self.vertices.value <= 12:
            raise ValueError(
                f"Polygon needs 3 to 12 vertices, got {self.vertices.value!r}"
            )
        _check_point(self.center, "center")
        _check_operand(self.diameter, MacroDecimal, "diameter")
        _check_operand(self.angle, MacroDecimal, "angle")


@dataclass(frozen=True, slots=True)
class MoirePrimitive(MacroContent):
    """Moire primitive (code 6).  Always dark; has no exposure field."""

    center: Point
    diameter: MacroDecimal
    ring_thickness: MacroDecimal
    gap: MacroDecimal
    max_rings: MacroInteger
    cross_hair_thickness: MacroDecimal
    cross_hair_length: MacroDecimal
    angle: MacroDecimal = NO_ROTATION

    def __post_init__(self) -> None:
        _check_point(self.center, "center")
        for name in (
            "diameter", "ring_thickness", "gap",
            "cross_hair_thickness", "cross_hair_length", "angle",
        ):
            _check_operand(getattr(self, name), MacroDecimal, name)
        _check_operand(self.max_rings, MacroInteger, "max_rings")


@dataclass(frozen=True, slots=True)
class ThermalPrimitive(MacroContent):
    """Thermal primitive (code 7).  Always dark; has no exposure field."""

    center: Point
    outer_diameter: MacroDecimal
    inner_diameter: MacroDecimal
    gap: MacroDecimal
    angle: MacroDecimal = NO_ROTATION

    def __post_init__(self) -> None:
        _check_point(self.center, "center")
        for name in ("outer_diameter", "inner_diameter", "gap", "angle"):
            _check_operand(getattr(self, name), MacroDecimal, name)


@dataclass(frozen=True, slots=True)
class VariableDefinition(MacroContent):
    """Assignment ``$index=expression``."""

    index: int
    expression: MacroDecimal

    def __post_init__(self) -> None:
        _check_index(self.index)
        _check_operand(self.expression, MacroDecimal, "expression")

