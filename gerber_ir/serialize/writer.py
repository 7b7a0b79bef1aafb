"""Gerber serializer -- command trees to exact document text.

Every command renders as one or more lines, each followed by the
configured newline.  Coordinates are encoded with the
:class:`~gerber_ir.numeric.encoder.FormatSpecification` passed to the
serializer; aperture parameters, macro constants and transform values
print in plain decimal form.

Nesting:
    Aperture blocks (``AB``) and step-and-repeat blocks (``SR``) render
    their children through the same dispatch as top-level commands.
    Aperture macros (``AM``) render one statement per line with the
    closing ``%`` directly after the last ``*``.

Failure policy:
    Any error aborts the whole document.  :meth:`GerberSerializer.write`
    renders into a private buffer first, so the sink receives nothing
    unless the complete document rendered.

The serializer never mutates the tree and keeps no state between calls,
so one instance can serve several threads.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from io import StringIO
from typing import TextIO

from gerber_ir.attributes.encoding import (
    STANDARD_COMMENT_MARKER,
    check_text,
    render_attribute,
    render_deletion,
)
from gerber_ir.attributes.model import Placement
from gerber_ir.attributes.standard import to_attribute
from gerber_ir.commands import Command
from gerber_ir.commands.extended_codes import (
    Aperture,
    ApertureBlock,
    ApertureDefinition,
    ApertureMacro,
    AttributeDirective,
    AxisSelect,
    Circle,
    DeleteAttribute,
    ImageName,
    ImagePolarity,
    LoadMirroring,
    LoadPolarity,
    LoadRotation,
    LoadScaling,
    MacroAperture,
    MirrorImage,
    Obround,
    OffsetImage,
    Polygon,
    Rectangle,
    RotateImage,
    ScaleImage,
    StepAndRepeat,
    Unit,
    UnitMode,
)
from gerber_ir.commands.function_codes import (
    Comment,
    CoordinateOffset,
    Coordinates,
    EndOfFile,
    Flash,
    Interpolate,
    LegacyNotation,
    LegacySelectAperture,
    LegacyUnit,
    Move,
    RegionMode,
    SelectAperture,
    SetInterpolation,
    SetQuadrant,
    StandardComment,
)
from gerber_ir.configs.loader import SerializerConfig
from gerber_ir.errors import (
    FormatMismatch,
    GerberError,
    IncompleteCoordinate,
    UnencodableField,
)
from gerber_ir.macros.printer import render_expression, render_macro_content
from gerber_ir.numeric.encoder import (
    FormatSpecification,
    Notation,
    Number,
    ZeroSuppression,
    encode_coordinate,
    encode_decimal,
)

logger = logging.getLogger(__name__)

# The FS grammar has no token for "no suppression"; full-width digits
# decode identically under leading omission.
_FS_ZEROS = {
    ZeroSuppression.NONE: "L",
    ZeroSuppression.LEADING: "L",
    ZeroSuppression.TRAILING: "T",
}
_FS_NOTATION = {Notation.ABSOLUTE: "A", Notation.INCREMENTAL: "I"}

_NAME_RESERVED = frozenset("*%,\r\n ")
_COMMENT_RESERVED = frozenset("*%\r\n")


# ---------------------------------------------------------------------------
# Document
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Document:
    """Ordered commands plus the coordinate format they are encoded with.

    The format is not emitted automatically; include the
    :class:`FormatSpecification` among *commands* to write the ``FS``
    directive.  An ``FS`` command that differs from *format* raises
    :class:`~gerber_ir.errors.FormatMismatch` when serialized.
    """

    format: FormatSpecification
    commands: tuple[Command, ...] = ()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _d(value: Number) -> str:
    """Plain decimal."""
    return encode_decimal(value)


def _check_name(name: str, what: str) -> str:
    if not name:
        raise UnencodableField(f"{what} must not be empty")
    for ch in name:
        if ch in _NAME_RESERVED:
            raise UnencodableField(f"{what} contains {ch!r}: {name!r}")
    return name


# ---------------------------------------------------------------------------
# Serializer
# ---------------------------------------------------------------------------


class GerberSerializer:
    """Render commands to Gerber text under one coordinate format.

    Parameters
    ----------
    fmt : FormatSpecification
        Format used for every ``X``/``Y``/``I``/``J`` value.
    newline : str
        Separator written after every line, ``"\\n"`` or ``"\\r\\n"``.
    """

    def __init__(self, fmt: FormatSpecification, *, newline: str = "\n") -> None:
        if newline not in ("\n", "\r\n"):
            raise ValueError(f"newline must be LF or CRLF, got {newline!r}")
        self._fmt = fmt
        self._newline = newline

    @classmethod
    def from_config(cls, config: SerializerConfig) -> GerberSerializer:
        """Build a serializer from a loaded configuration."""
        return cls(config.format, newline=config.newline)

    @property
    def format(self) -> FormatSpecification:
        return self._fmt

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, command: Command) -> str:
        """Return the exact text of one command, newline-terminated."""
        buf = StringIO()
        self._render_into(buf, command)
        return buf.getvalue()

    def serialize(self, commands: Iterable[Command]) -> str:
        """Render *commands* in order and return the complete text.

        Raises
        ------
        GerberError
            On the first command that cannot be rendered.
        """
        buf = StringIO()
        count = 0
        for command in commands:
            self._render_into(buf, command)
            count += 1
        text = buf.getvalue()
        logger.debug("Serialized %d commands (%d chars)", count, len(text))
        return text

    def write(self, commands: Iterable[Command], sink: TextIO) -> None:
        """Render *commands* and append the text to *sink* in one write.

        Nothing reaches *sink* if any command fails.
        """
        sink.write(self.serialize(commands))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _line(self, buf: StringIO, text: str) -> None:
        buf.write(text)
        buf.write(self._newline)

    def _render_into(self, buf: StringIO, cmd: Command) -> None:
        # -- function codes ------------------------------------------------
        if isinstance(cmd, SelectAperture):
            self._line(buf, f"D{cmd.code}*")
        elif isinstance(cmd, Interpolate):
            self._line(buf, self._interpolate(cmd))
        elif isinstance(cmd, Move):
            if cmd.coordinates is None:
                raise IncompleteCoordinate("Move requires at least one axis")
            self._line(buf, f"{self._coordinates(cmd.coordinates, 'Move')}D02*")
        elif isinstance(cmd, Flash):
            coords = ""
            if cmd.coordinates is not None:
                coords = self._coordinates(cmd.coordinates, "Flash")
            self._line(buf, f"{coords}D03*")
        elif isinstance(cmd, SetInterpolation):
            self._line(buf, f"{cmd.mode.value}*")
        elif isinstance(cmd, RegionMode):
            self._line(buf, "G36*" if cmd.enabled else "G37*")
        elif isinstance(cmd, SetQuadrant):
            self._line(buf, f"{cmd.mode.value}*")
        elif isinstance(cmd, Comment):
            self._line(buf, self._comment(cmd))
        elif isinstance(cmd, LegacyUnit):
            self._line(buf, "G70*" if cmd.unit is Unit.INCHES else "G71*")
        elif isinstance(cmd, LegacyNotation):
            self._line(
                buf, "G90*" if cmd.notation is Notation.ABSOLUTE else "G91*",
            )
        elif isinstance(cmd, LegacySelectAperture):
            self._line(buf, "G54*")
        elif isinstance(cmd, EndOfFile):
            self._line(buf, "M02*")

        # -- extended codes ------------------------------------------------
        elif isinstance(cmd, FormatSpecification):
            if cmd != self._fmt:
                raise FormatMismatch(
                    f"FS declares {cmd!r} but coordinates are encoded with {self._fmt!r}"
                )
            zeros = _FS_ZEROS[cmd.zero_suppression]
            notation = _FS_NOTATION[cmd.notation]
            digits = f"{cmd.integer_digits}{cmd.decimal_digits}"
            self._line(buf, f"%FS{zeros}{notation}X{digits}Y{digits}*%")
        elif isinstance(cmd, UnitMode):
            self._line(buf, f"%MO{cmd.unit.value}*%")
        elif isinstance(cmd, ApertureDefinition):
            self._line(buf, f"%ADD{cmd.code}{self._aperture(cmd.aperture)}*%")
        elif isinstance(cmd, ApertureMacro):
            self._aperture_macro(buf, cmd)
        elif isinstance(cmd, LoadPolarity):
            self._line(buf, f"%LP{cmd.polarity.value}*%")
        elif isinstance(cmd, LoadMirroring):
            self._line(buf, f"%LM{cmd.mirroring.value}*%")
        elif isinstance(cmd, LoadRotation):
            self._line(buf, f"%LR{_d(cmd.degrees)}*%")
        elif isinstance(cmd, LoadScaling):
            self._line(buf, f"%LS{_d(cmd.factor)}*%")
        elif isinstance(cmd, StepAndRepeat):
            self._step_and_repeat(buf, cmd)
        elif isinstance(cmd, ApertureBlock):
            self._aperture_block(buf, cmd)
        elif isinstance(cmd, AttributeDirective):
            attribute = to_attribute(cmd.attribute)
            self._line(buf, render_attribute(attribute, Placement.EXTENDED))
        elif isinstance(cmd, DeleteAttribute):
            self._line(buf, render_deletion(cmd.name, Placement.EXTENDED))

        # -- deprecated image directives -----------------------------------
        elif isinstance(cmd, MirrorImage):
            flags = ("A1" if cmd.a else "") + ("B1" if cmd.b else "")
            self._line(buf, f"%MI{flags}*%")
        elif isinstance(cmd, OffsetImage):
            self._line(buf, f"%OF{self._ab(cmd.a, cmd.b)}*%")
        elif isinstance(cmd, ScaleImage):
            self._line(buf, f"%SF{self._ab(cmd.a, cmd.b)}*%")
        elif isinstance(cmd, RotateImage):
            self._line(buf, f"%IR{cmd.rotation.value}*%")
        elif isinstance(cmd, ImagePolarity):
            self._line(buf, f"%IP{cmd.polarity.value}*%")
        elif isinstance(cmd, AxisSelect):
            self._line(buf, f"%AS{cmd.axes.value}*%")
        elif isinstance(cmd, ImageName):
            self._line(buf, f"%IN{_check_name(cmd.name, 'Image name')}*%")

        else:
            raise GerberError(f"Unsupported command: {type(cmd).__name__}")

    # ------------------------------------------------------------------
    # Function code helpers
    # ------------------------------------------------------------------

    def _coordinates(self, coords: Coordinates, what: str) -> str:
        if coords.is_empty():
            raise IncompleteCoordinate(f"{what} coordinates have no axis set")
        out = ""
        if coords.x is not None:
            out += "X" + encode_coordinate(coords.x, self._fmt)
        if coords.y is not None:
            out += "Y" + encode_coordinate(coords.y, self._fmt)
        return out

    def _offset(self, offset: CoordinateOffset) -> str:
        if offset.is_empty():
            raise IncompleteCoordinate("Interpolate offset has no axis set")
        out = ""
        if offset.i is not None:
            out += "I" + encode_coordinate(offset.i, self._fmt)
        if offset.j is not None:
            out += "J" + encode_coordinate(offset.j, self._fmt)
        return out

    def _interpolate(self, cmd: Interpolate) -> str:
        if cmd.coordinates is None and cmd.offset is None:
            raise IncompleteCoordinate("Interpolate requires at least one axis")
        out = ""
        if cmd.coordinates is not None:
            out += self._coordinates(cmd.coordinates, "Interpolate")
        if cmd.offset is not None:
            out += self._offset(cmd.offset)
        return out + "D01*"

    def _comment(self, cmd: Comment) -> str:
        content = cmd.content
        if isinstance(content, StandardComment):
            payload = content.payload
            if isinstance(payload, DeleteAttribute):
                return render_deletion(payload.name, Placement.COMMENT)
            return render_attribute(to_attribute(payload), Placement.COMMENT)

        for ch in content:
            if ch in _COMMENT_RESERVED:
                raise UnencodableField(
                    f"Comment contains reserved character {ch!r}: {content!r}"
                )
        if content.lstrip().startswith(STANDARD_COMMENT_MARKER):
            raise UnencodableField(
                f"Plain comment must not start with "
                f"{STANDARD_COMMENT_MARKER!r}: {content!r}"
            )
        return f"G04 {content}*"

    # ------------------------------------------------------------------
    # Extended code helpers
    # ------------------------------------------------------------------

    def _aperture(self, aperture: Aperture) -> str:
        if isinstance(aperture, Circle):
            out = f"C,{_d(aperture.diameter)}"
        elif isinstance(aperture, Rectangle):
            out = f"R,{_d(aperture.x)}X{_d(aperture.y)}"
        elif isinstance(aperture, Obround):
            out = f"O,{_d(aperture.x)}X{_d(aperture.y)}"
        elif isinstance(aperture, Polygon):
            out = f"P,{_d(aperture.diameter)}X{aperture.vertices}"
            if aperture.rotation is not None:
                out += f"X{_d(aperture.rotation)}"
            elif aperture.hole_diameter is not None:
                out += "X0"
        elif isinstance(aperture, MacroAperture):
            out = _check_name(aperture.name, "Macro name")
            if aperture.arguments:
                out += "," + "X".join(
                    render_expression(arg) for arg in aperture.arguments
                )
            return out
        else:
            raise GerberError(f"Unsupported aperture: {type(aperture).__name__}")

        if aperture.hole_diameter is not None:
            out += f"X{_d(aperture.hole_diameter)}"
        return out

    def _aperture_macro(self, buf: StringIO, cmd: ApertureMacro) -> None:
        name = _check_name(cmd.name, "Macro name")
        statements = [render_macro_content(item) for item in cmd.content]
        self._line(buf, f"%AM{name}*")
        if not statements:
            self._line(buf, "%")
            return
        for statement in statements[:-1]:
            self._line(buf, statement)
        self._line(buf, statements[-1] + "%")

    def _step_and_repeat(self, buf: StringIO, cmd: StepAndRepeat) -> None:
        logger.debug(
            "Rendering step-and-repeat %dx%d with %d commands",
            cmd.repeat_x, cmd.repeat_y, len(cmd.commands),
        )
        self._line(
            buf,
            f"%SRX{cmd.repeat_x}Y{cmd.repeat_y}"
            f"I{_d(cmd.distance_x)}J{_d(cmd.distance_y)}*%",
        )
        for child in cmd.commands:
            self._render_into(buf, child)
        self._line(buf, "%SR*%")

    def _aperture_block(self, buf: StringIO, cmd: ApertureBlock) -> None:
        logger.debug(
            "Rendering aperture block D%d with %d commands",
            cmd.code, len(cmd.commands),
        )
        self._line(buf, f"%AB{cmd.code}*%")
        for child in cmd.commands:
            self._render_into(buf, child)
        self._line(buf, "%AB*%")

    @staticmethod
    def _ab(a: Number, b: Number) -> str:
        out = ""
        if a != 0:
            out += f"A{_d(a)}"
        if b != 0:
            out += f"B{_d(b)}"
        return out


# ---------------------------------------------------------------------------
# Module-level convenience
# ---------------------------------------------------------------------------


def serialize(document: Document, *, newline: str = "\n") -> str:
    """Render *document* with its own format."""
    return GerberSerializer(document.format, newline=newline).serialize(
        document.commands
    )


def write(document: Document, sink: TextIO, *, newline: str = "\n") -> None:
    """Render *document* and append it to *sink*; nothing is written on failure."""
    GerberSerializer(document.format, newline=newline).write(
        document.commands, sink
    )
