"""Extended codes -- the ``%...*%`` directives.

Covers unit and aperture definitions, aperture macros, the load-transform
directives (``LP``, ``LM``, ``LR``, ``LS``), nested step-and-repeat and
aperture blocks, attribute directives, and the image directives that
were deprecated in 2012/2013 but still appear in legacy files.

The coordinate format directive (``FS``) is
:class:`~gerber_ir.numeric.encoder.FormatSpecification` itself.

Nested blocks own their child commands; the serializer renders the
children through the same path as top-level commands.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from gerber_ir.attributes.model import Attribute
from gerber_ir.attributes.standard import StandardAttribute
from gerber_ir.macros.expressions import MacroDecimal
from gerber_ir.macros.primitives import MacroContent
from gerber_ir.numeric.encoder import Number

if TYPE_CHECKING:
    from gerber_ir.commands import Command


def _check_commands(commands: object) -> None:
    if not isinstance(commands, tuple):
        raise TypeError(
            f"commands must be a tuple, got {type(commands).__name__}"
        )


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExtendedCode(ABC):
    """Base class for all extended codes."""

    pass


# ---------------------------------------------------------------------------
# Units and apertures
# ---------------------------------------------------------------------------


class Unit(Enum):
    MILLIMETERS = "MM"
    INCHES = "IN"


@dataclass(frozen=True, slots=True)
class UnitMode(ExtendedCode):
    """``%MO<unit>*%``."""

    unit: Unit


@dataclass(frozen=True, slots=True)
class Aperture(ABC):
    """Base class for aperture templates used by ``AD``."""

    pass


@dataclass(frozen=True, slots=True)
class Circle(Aperture):
    """``C,<diameter>[X<hole>]``."""

    diameter: Number
    hole_diameter: Number | None = None


@dataclass(frozen=True, slots=True)
class Rectangle(Aperture):
    """``R,<x>X<y>[X<hole>]``."""

    x: Number
    y: Number
    hole_diameter: Number | None = None


@dataclass(frozen=True, slots=True)
class Obround(Aperture):
    """``O,<x>X<y>[X<hole>]``."""

    x: Number
    y: Number
    hole_diameter: Number | None = None


@dataclass(frozen=True, slots=True)
class Polygon(Aperture):
    """``P,<diameter>X<vertices>[X<rotation>][X<hole>]``.

    A hole without a rotation emits a zero rotation so the hole lands in
    its positional slot.
    """

    diameter: Number
    vertices: int
    rotation: Number | None = None
    hole_diameter: Number | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.vertices, int) or isinstance(self.vertices, bool):
            raise ValueError(f"vertices must be an int, got {self.vertices!r}")


@dataclass(frozen=True, slots=True)
class MacroAperture(Aperture):
    """Reference to an ``AM`` definition with its parameter expressions."""

    name: str
    arguments: tuple[MacroDecimal, ...] = ()

    def __post_init__(self) -> None:
        for i, arg in enumerate(self.arguments):
            if not isinstance(arg, MacroDecimal):
                raise TypeError(
                    f"arguments[{i}] must be a MacroDecimal, "
                    f"got {type(arg).__name__}"
                )


@dataclass(frozen=True, slots=True)
class ApertureDefinition(ExtendedCode):
    """``%ADD<code><aperture>*%``.  The code is never checked for reuse."""

    code: int
    aperture: Aperture

    def __post_init__(self) -> None:
        if not isinstance(self.aperture, Aperture):
            raise TypeError(
                f"aperture must be an Aperture, got {type(self.aperture).__name__}"
            )


@dataclass(frozen=True, slots=True)
class ApertureMacro(ExtendedCode):
    """``%AM<name>*`` followed by one statement per line."""

    name: str
    content: tuple[MacroContent, ...] = ()

    def __post_init__(self) -> None:
        for i, item in enumerate(self.content):
            if not isinstance(item, MacroContent):
                raise TypeError(
                    f"content[{i}] must be a MacroContent, "
                    f"got {type(item).__name__}"
                )


# ---------------------------------------------------------------------------
# Load transforms
# ---------------------------------------------------------------------------


class Polarity(Enum):
    DARK = "D"
    CLEAR = "C"


@dataclass(frozen=True, slots=True)
class LoadPolarity(ExtendedCode):
    polarity: Polarity


class Mirroring(Enum):
    NONE = "N"
    X = "X"
    Y = "Y"
    XY = "XY"


@dataclass(frozen=True, slots=True)
class LoadMirroring(ExtendedCode):
    mirroring: Mirroring


@dataclass(frozen=True, slots=True)
class LoadRotation(ExtendedCode):
    """Rotation in degrees, counter-clockwise."""

    degrees: Number


@dataclass(frozen=True, slots=True)
class LoadScaling(ExtendedCode):
    factor: Number


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StepAndRepeat(ExtendedCode):
    """Repeat *commands* on an ``repeat_x`` x ``repeat_y`` grid.

    Renders the ``%SR...*%`` opener, the children, then ``%SR*%``.
    """

    repeat_x: int
    repeat_y: int
    distance_x: Number
    distance_y: Number
    commands: tuple[Command, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for count in (self.repeat_x, self.repeat_y):
            if not isinstance(count, int) or isinstance(count, bool):
                raise ValueError(f"repeat counts must be int, got {count!r}")
        if self.repeat_x < 1 or self.repeat_y < 1:
            raise ValueError(
                f"repeat counts must be >= 1, "
                f"got ({self.repeat_x!r}, {self.repeat_y!r})"
            )
        _check_commands(self.commands)


@dataclass(frozen=True, slots=True)
class ApertureBlock(ExtendedCode):
    """Block aperture ``D<code>`` built from nested *commands*.

    Renders ``%AB<code>*%``, the children, then ``%AB*%``.
    """

    code: int
    commands: tuple[Command, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _check_commands(self.commands)


# ---------------------------------------------------------------------------
# Attributes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class AttributeDirective(ExtendedCode):
    """Attribute in extended-code placement (``%TF``/``%TA``/``%TO``)."""

    attribute: Attribute | StandardAttribute


@dataclass(frozen=True, slots=True)
class DeleteAttribute(ExtendedCode):
    """``%TD[<name>]*%``.  ``None`` deletes every attribute in scope."""

    name: str | None = None


# ---------------------------------------------------------------------------
# Deprecated image directives
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MirrorImage(ExtendedCode):
    """``%MI[A1][B1]*%``."""

    a: bool = False
    b: bool = False


@dataclass(frozen=True, slots=True)
class OffsetImage(ExtendedCode):
    """``%OF[A<a>][B<b>]*%``; zero offsets are omitted."""

    a: Number = 0
    b: Number = 0


@dataclass(frozen=True, slots=True)
class ScaleImage(ExtendedCode):
    """``%SF[A<a>][B<b>]*%``; zero factors are omitted.

    Defaults to the identity scale.
    """

    a: Number = 1
    b: Number = 1


class ImageRotation(Enum):
    DEGREES_0 = 0
    DEGREES_90 = 90
    DEGREES_180 = 180
    DEGREES_270 = 270


@dataclass(frozen=True, slots=True)
class RotateImage(ExtendedCode):
    rotation: ImageRotation


class ImagePolarityKind(Enum):
    POSITIVE = "POS"
    NEGATIVE = "NEG"


@dataclass(frozen=True, slots=True)
class ImagePolarity(ExtendedCode):
    polarity: ImagePolarityKind


class Axes(Enum):
    AXBY = "AXBY"
    AYBX = "AYBX"


@dataclass(frozen=True, slots=True)
class AxisSelect(ExtendedCode):
    axes: Axes


@dataclass(frozen=True, slots=True)
class ImageName(ExtendedCode):
    name: str
