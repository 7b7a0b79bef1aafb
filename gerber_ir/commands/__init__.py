"""
Command vocabulary.

Function codes (D/G/M) and extended codes (``%...*%``) as immutable
dataclasses.  A document is an ordered sequence of :data:`Command`.
"""

from typing import Union

from gerber_ir.commands.extended_codes import (
    Aperture,
    ApertureBlock,
    ApertureDefinition,
    ApertureMacro,
    AttributeDirective,
    Axes,
    AxisSelect,
    Circle,
    DeleteAttribute,
    ExtendedCode,
    ImageName,
    ImagePolarity,
    ImagePolarityKind,
    ImageRotation,
    LoadMirroring,
    LoadPolarity,
    LoadRotation,
    LoadScaling,
    MacroAperture,
    MirrorImage,
    Mirroring,
    Obround,
    OffsetImage,
    Polarity,
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
    FunctionCode,
    Interpolate,
    InterpolationMode,
    LegacyNotation,
    LegacySelectAperture,
    LegacyUnit,
    Move,
    QuadrantMode,
    RegionMode,
    SelectAperture,
    SetInterpolation,
    SetQuadrant,
    StandardComment,
)
from gerber_ir.numeric.encoder import FormatSpecification

Command = Union[FunctionCode, ExtendedCode, FormatSpecification]
"""Any node that renders as one or more lines of a document."""

__all__ = [
    "Command",
    "Aperture",
    "ApertureBlock",
    "ApertureDefinition",
    "ApertureMacro",
    "AttributeDirective",
    "Axes",
    "AxisSelect",
    "Circle",
    "DeleteAttribute",
    "ExtendedCode",
    "ImageName",
    "ImagePolarity",
    "ImagePolarityKind",
    "ImageRotation",
    "LoadMirroring",
    "LoadPolarity",
    "LoadRotation",
    "LoadScaling",
    "MacroAperture",
    "MirrorImage",
    "Mirroring",
    "Obround",
    "OffsetImage",
    "Polarity",
    "Polygon",
    "Rectangle",
    "RotateImage",
    "ScaleImage",
    "StepAndRepeat",
    "Unit",
    "UnitMode",
    "Comment",
    "CoordinateOffset",
    "Coordinates",
    "EndOfFile",
    "Flash",
    "FunctionCode",
    "Interpolate",
    "InterpolationMode",
    "LegacyNotation",
    "LegacySelectAperture",
    "LegacyUnit",
    "Move",
    "QuadrantMode",
    "RegionMode",
    "SelectAperture",
    "SetInterpolation",
    "SetQuadrant",
    "StandardComment",
]
