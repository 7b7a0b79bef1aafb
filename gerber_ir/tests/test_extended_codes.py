"""Tests for extended code rendering (``%...*%`` directives).

Validates the format and unit directives, aperture definitions and
macros, load transforms, block delimiters, attribute directives and the
deprecated image directives.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from gerber_ir.attributes import ComponentReference, Part, PartKind
from gerber_ir.commands import (
    ApertureBlock,
    ApertureDefinition,
    ApertureMacro,
    AttributeDirective,
    Axes,
    AxisSelect,
    Circle,
    DeleteAttribute,
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
from gerber_ir.errors import FormatMismatch, UnencodableField
from gerber_ir.macros import (
    ArithmeticOperator,
    BooleanConstant,
    CirclePrimitive,
    DecimalBinary,
    DecimalConstant,
    DecimalVariable,
    MacroComment,
    VariableDefinition,
)
from gerber_ir.numeric import FormatSpecification, Notation, ZeroSuppression
from gerber_ir.serialize import GerberSerializer


@pytest.fixture()
def ser() -> GerberSerializer:
    return GerberSerializer(FormatSpecification(2, 5))


def _ad(ser: GerberSerializer, code: int, aperture: object) -> str:
    text = ser.render(ApertureDefinition(code, aperture))  # type: ignore[arg-type]
    assert text.startswith("%ADD") and text.endswith("*%\n")
    return text[len("%ADD"):-len("*%\n")]


# ---------------------------------------------------------------------------
# Format and units
# ---------------------------------------------------------------------------


class TestFormatAndUnits:
    def test_format(self, ser: GerberSerializer) -> None:
        assert ser.render(FormatSpecification(2, 5)) == "%FSLAX25Y25*%\n"

    @pytest.mark.parametrize("zs, notation, expected", [
        (ZeroSuppression.TRAILING, Notation.ABSOLUTE, "%FSTAX36Y36*%\n"),
        (ZeroSuppression.LEADING, Notation.INCREMENTAL, "%FSLIX36Y36*%\n"),
        (ZeroSuppression.NONE, Notation.ABSOLUTE, "%FSLAX36Y36*%\n"),
    ])
    def test_format_variants(
        self, zs: ZeroSuppression, notation: Notation, expected: str,
    ) -> None:
        fmt = FormatSpecification(3, 6, zs, notation)
        assert GerberSerializer(fmt).render(fmt) == expected

    def test_format_must_match_encoding(self, ser: GerberSerializer) -> None:
        with pytest.raises(FormatMismatch):
            ser.render(FormatSpecification(3, 6))

    def test_units(self, ser: GerberSerializer) -> None:
        assert ser.render(UnitMode(Unit.MILLIMETERS)) == "%MOMM*%\n"
        assert ser.render(UnitMode(Unit.INCHES)) == "%MOIN*%\n"


# ---------------------------------------------------------------------------
# Aperture definitions
# ---------------------------------------------------------------------------


class TestApertureDefinition:
    def test_circle(self, ser: GerberSerializer) -> None:
        assert _ad(ser, 10, Circle(4.0, 2.0)) == "10C,4X2"
        assert _ad(ser, 11, Circle(4.5)) == "11C,4.5"

    def test_rectangle_and_obround(self, ser: GerberSerializer) -> None:
        assert _ad(ser, 12, Rectangle(1.5, 2.25, 3.8)) == "12R,1.5X2.25X3.8"
        assert _ad(ser, 13, Rectangle(1.0, 1.0)) == "13R,1X1"
        assert _ad(ser, 14, Obround(2.0, 4.5)) == "14O,2X4.5"

    def test_polygon(self, ser: GerberSerializer) -> None:
        assert _ad(ser, 15, Polygon(4.5, 3)) == "15P,4.5X3"
        assert _ad(ser, 16, Polygon(5.0, 4, rotation=30.6)) == "16P,5X4X30.6"
        assert _ad(ser, 17, Polygon(5.5, 5, hole_diameter=1.8)) == "17P,5.5X5X0X1.8"

    def test_macro_reference(self, ser: GerberSerializer) -> None:
        assert _ad(ser, 42, MacroAperture("NO_ARGS1")) == "42NO_ARGS1"
        args = (
            DecimalVariable(1),
            DecimalConstant(0.25),
            DecimalBinary(ArithmeticOperator.MULTIPLY, DecimalVariable(1), DecimalVariable(2)),
        )
        assert _ad(ser, 69, MacroAperture("With_Args2", args)) == "69With_Args2,$1X0.25X$1x$2"

    @pytest.mark.parametrize("name", ["", "A,B", "A*B", "A B"])
    def test_bad_macro_name(self, ser: GerberSerializer, name: str) -> None:
        with pytest.raises(UnencodableField):
            ser.render(ApertureDefinition(20, MacroAperture(name)))

    def test_aperture_type_checked(self) -> None:
        with pytest.raises(TypeError):
            ApertureDefinition(10, "C,1")  # type: ignore[arg-type]

    def test_polygon_vertices_type(self) -> None:
        with pytest.raises(ValueError):
            Polygon(1.0, 4.0)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Aperture macros
# ---------------------------------------------------------------------------


class TestApertureMacro:
    def test_statements_each_on_own_line(self, ser: GerberSerializer) -> None:
        macro = ApertureMacro("DONUT", (
            MacroComment("ring"),
            VariableDefinition(
                2,
                DecimalBinary(ArithmeticOperator.MULTIPLY, DecimalVariable(1), DecimalConstant(0.5)),
            ),
            CirclePrimitive(BooleanConstant(True), DecimalVariable(1), (DecimalConstant(0), DecimalConstant(0))),
            CirclePrimitive(BooleanConstant(False), DecimalVariable(2), (DecimalConstant(0), DecimalConstant(0))),
        ))
        assert ser.render(macro) == (
            "%AMDONUT*\n"
            "0 ring*\n"
            "$2=$1x0.5*\n"
            "1,1,$1,0,0*\n"
            "1,0,$2,0,0*%\n"
        )

    def test_empty_body(self, ser: GerberSerializer) -> None:
        assert ser.render(ApertureMacro("EMPTY")) == "%AMEMPTY*\n%\n"

    def test_content_type_checked(self) -> None:
        with pytest.raises(TypeError):
            ApertureMacro("M", ("1,1,1,0,0*",))  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Load transforms and blocks
# ---------------------------------------------------------------------------


class TestTransforms:
    def test_polarity(self, ser: GerberSerializer) -> None:
        assert ser.render(LoadPolarity(Polarity.DARK)) == "%LPD*%\n"
        assert ser.render(LoadPolarity(Polarity.CLEAR)) == "%LPC*%\n"

    @pytest.mark.parametrize("mirroring, token", [
        (Mirroring.NONE, "N"), (Mirroring.X, "X"), (Mirroring.Y, "Y"), (Mirroring.XY, "XY"),
    ])
    def test_mirroring(self, ser: GerberSerializer, mirroring: Mirroring, token: str) -> None:
        assert ser.render(LoadMirroring(mirroring)) == f"%LM{token}*%\n"

    def test_rotation_and_scaling(self, ser: GerberSerializer) -> None:
        assert ser.render(LoadRotation(90.0)) == "%LR90*%\n"
        assert ser.render(LoadRotation(Decimal("-45.50"))) == "%LR-45.5*%\n"
        assert ser.render(LoadScaling(0.8)) == "%LS0.8*%\n"


class TestBlocks:
    def test_empty_step_and_repeat(self, ser: GerberSerializer) -> None:
        assert ser.render(StepAndRepeat(2, 3, 2.0, 3.0)) == "%SRX2Y3I2J3*%\n%SR*%\n"

    def test_empty_aperture_block(self, ser: GerberSerializer) -> None:
        assert ser.render(ApertureBlock(102)) == "%AB102*%\n%AB*%\n"

    def test_repeat_counts_positive(self) -> None:
        with pytest.raises(ValueError, match="repeat"):
            StepAndRepeat(0, 1, 1.0, 1.0)

    @pytest.mark.parametrize("counts", [(2.0, 3), (2, True), (2, "3")])
    def test_repeat_counts_are_integers(self, counts: tuple) -> None:
        with pytest.raises(ValueError, match="repeat counts must be int"):
            StepAndRepeat(*counts, 1, 1)

    def test_children_must_be_tuple(self) -> None:
        with pytest.raises(TypeError):
            ApertureBlock(10, [UnitMode(Unit.MILLIMETERS)])  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Attribute directives
# ---------------------------------------------------------------------------


class TestAttributeDirectives:
    def test_attribute(self, ser: GerberSerializer) -> None:
        assert ser.render(AttributeDirective(ComponentReference("R1"))) == "%TO.C,R1*%\n"
        assert ser.render(AttributeDirective(Part(PartKind.OTHER, "Part 1"))) == (
            "%TF.Part,Other,Part 1*%\n"
        )

    def test_delete(self, ser: GerberSerializer) -> None:
        assert ser.render(DeleteAttribute("foo")) == "%TDfoo*%\n"
        assert ser.render(DeleteAttribute()) == "%TD*%\n"


# ---------------------------------------------------------------------------
# Deprecated image directives
# ---------------------------------------------------------------------------


class TestImageDirectives:
    def test_mirror_image(self, ser: GerberSerializer) -> None:
        assert ser.render(MirrorImage()) == "%MI*%\n"
        assert ser.render(MirrorImage(a=True)) == "%MIA1*%\n"
        assert ser.render(MirrorImage(b=True)) == "%MIB1*%\n"
        assert ser.render(MirrorImage(True, True)) == "%MIA1B1*%\n"

    def test_offset(self, ser: GerberSerializer) -> None:
        assert ser.render(OffsetImage()) == "%OF*%\n"
        assert ser.render(OffsetImage(a=99999.99999)) == "%OFA99999.99999*%\n"
        assert ser.render(OffsetImage(b=99999.99999)) == "%OFB99999.99999*%\n"
        assert ser.render(OffsetImage(-99999.99999, -99999.99999)) == (
            "%OFA-99999.99999B-99999.99999*%\n"
        )

    def test_scale(self, ser: GerberSerializer) -> None:
        assert ser.render(ScaleImage(0, 0)) == "%SF*%\n"
        assert ser.render(ScaleImage(999.99999, 0)) == "%SFA999.99999*%\n"
        assert ser.render(ScaleImage(0, 999.99999)) == "%SFB999.99999*%\n"
        assert ser.render(ScaleImage(-999.99999, -999.99999)) == "%SFA-999.99999B-999.99999*%\n"

    def test_scale_defaults_to_identity(self, ser: GerberSerializer) -> None:
        assert ScaleImage() == ScaleImage(1, 1)
        assert ser.render(ScaleImage()) == "%SFA1B1*%\n"

    @pytest.mark.parametrize("rotation, expected", [
        (ImageRotation.DEGREES_0, "%IR0*%\n"),
        (ImageRotation.DEGREES_90, "%IR90*%\n"),
        (ImageRotation.DEGREES_180, "%IR180*%\n"),
        (ImageRotation.DEGREES_270, "%IR270*%\n"),
    ])
    def test_rotate(self, ser: GerberSerializer, rotation: ImageRotation, expected: str) -> None:
        assert ser.render(RotateImage(rotation)) == expected

    def test_polarity_axes_and_name(self, ser: GerberSerializer) -> None:
        assert ser.render(ImagePolarity(ImagePolarityKind.POSITIVE)) == "%IPPOS*%\n"
        assert ser.render(ImagePolarity(ImagePolarityKind.NEGATIVE)) == "%IPNEG*%\n"
        assert ser.render(AxisSelect(Axes.AXBY)) == "%ASAXBY*%\n"
        assert ser.render(AxisSelect(Axes.AYBX)) == "%ASAYBX*%\n"
        assert ser.render(ImageName("PANEL_1")) == "%INPANEL_1*%\n"

    def test_image_name_reserved(self, ser: GerberSerializer) -> None:
        with pytest.raises(UnencodableField):
            ser.render(ImageName("PANEL%1"))
