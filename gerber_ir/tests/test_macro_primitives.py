"""Tests for aperture macro statements.

Each primitive renders as its code followed by comma-separated
expressions and a ``*`` terminator.
"""

from __future__ import annotations

import pytest

from gerber_ir.errors import InvalidVariableIndex, UnencodableField
from gerber_ir.macros import (
    ArithmeticOperator,
    BooleanConstant,
    BooleanVariable,
    CenterLinePrimitive,
    CirclePrimitive,
    DecimalBinary,
    DecimalConstant,
    DecimalNegate,
    DecimalVariable,
    IntegerConstant,
    IntegerVariable,
    MacroComment,
    MoirePrimitive,
    OutlinePrimitive,
    PolygonPrimitive,
    ThermalPrimitive,
    VariableDefinition,
    VectorLinePrimitive,
    render_macro_content,
)

ON = BooleanConstant(True)
OFF = BooleanConstant(False)


def d(value: float) -> DecimalConstant:
    return DecimalConstant(value)


def pt(x: float, y: float) -> tuple[DecimalConstant, DecimalConstant]:
    return (d(x), d(y))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRender:
    def test_comment(self) -> None:
        assert render_macro_content(MacroComment("Rounded box")) == "0 Rounded box*"

    def test_circle_without_angle(self) -> None:
        item = CirclePrimitive(ON, d(1.5), pt(0, 0))
        assert render_macro_content(item) == "1,1,1.5,0,0*"

    def test_circle_with_angle(self) -> None:
        item = CirclePrimitive(OFF, DecimalVariable(1), pt(-1, 2.5), d(45))
        assert render_macro_content(item) == "1,0,$1,-1,2.5,45*"

    def test_vector_line(self) -> None:
        item = VectorLinePrimitive(ON, d(0.9), pt(0, 0.45), pt(12, 0.45))
        assert render_macro_content(item) == "20,1,0.9,0,0.45,12,0.45,0*"

    def test_center_line(self) -> None:
        item = CenterLinePrimitive(ON, pt(6.8, 1.2), pt(3.4, 0.6), d(30))
        assert render_macro_content(item) == "21,1,6.8,1.2,3.4,0.6,30*"

    def test_outline_counts_segments(self) -> None:
        points = (pt(1, -1), pt(1, 1), pt(2, 1), pt(2, -1), pt(1, -1))
        item = OutlinePrimitive(ON, points)
        assert render_macro_content(item) == "4,1,4,1,-1,1,1,2,1,2,-1,1,-1,0*"

    def test_polygon(self) -> None:
        item = PolygonPrimitive(ON, IntegerConstant(8), pt(0, 0), d(8), d(0))
        assert render_macro_content(item) == "5,1,8,0,0,8,0*"

    def test_moire(self) -> None:
        item = MoirePrimitive(
            pt(0, 0), d(5), d(0.5), d(0.5), IntegerConstant(2), d(0.1), d(6),
        )
        assert render_macro_content(item) == "6,0,0,5,0.5,0.5,2,0.1,6,0*"

    def test_thermal(self) -> None:
        item = ThermalPrimitive(pt(0, 0), d(8), d(6.5), d(1))
        assert render_macro_content(item) == "7,0,0,8,6.5,1,0*"

    def test_variable_definition(self) -> None:
        expr = DecimalBinary(ArithmeticOperator.MULTIPLY, DecimalVariable(1), d(0.5))
        assert render_macro_content(VariableDefinition(3, expr)) == "$3=$1x0.5*"

    def test_expressions_in_fields(self) -> None:
        width = DecimalBinary(
            ArithmeticOperator.SUBTRACT, DecimalVariable(1), DecimalNegate(d(2)),
        )
        item = CirclePrimitive(BooleanVariable(2), width, (DecimalVariable(3), d(0)))
        assert render_macro_content(item) == "1,$2,$1-(-2),$3,0*"

    def test_integer_variable_vertices(self) -> None:
        item = PolygonPrimitive(ON, IntegerVariable(4), pt(0, 0), d(1))
        assert render_macro_content(item) == "5,1,$4,0,0,1,0*"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    @pytest.mark.parametrize("text", ["a*b", "50%", "two\nlines", "cr\r"])
    def test_comment_reserved_characters(self, text: str) -> None:
        with pytest.raises(UnencodableField):
            render_macro_content(MacroComment(text))

    def test_outline_needs_two_points(self) -> None:
        with pytest.raises(ValueError, match="at least 2"):
            OutlinePrimitive(ON, (pt(0, 0),))

    def test_point_must_be_a_pair(self) -> None:
        with pytest.raises(ValueError, match="center"):
            CirclePrimitive(ON, d(1), (d(0),))  # type: ignore[arg-type]

    def test_exposure_must_be_boolean(self) -> None:
        with pytest.raises(TypeError, match="exposure"):
            CirclePrimitive(d(1), d(1), pt(0, 0))  # type: ignore[arg-type]

    def test_polygon_vertices_must_be_integer(self) -> None:
        with pytest.raises(TypeError, match="vertices"):
            PolygonPrimitive(ON, d(5), pt(0, 0), d(1))  # type: ignore[arg-type]

    @pytest.mark.parametrize("count", [2, 13])
    def test_polygon_vertex_range(self, count: int) -> None:
        with pytest.raises(ValueError, match="3 to 12"):
            PolygonPrimitive(ON, IntegerConstant(count), pt(0, 0), d(1))

    def test_polygon_variable_vertices_unchecked(self) -> None:
        PolygonPrimitive(ON, IntegerVariable(1), pt(0, 0), d(1))

    def test_variable_definition_index(self) -> None:
        with pytest.raises(InvalidVariableIndex):
            VariableDefinition(0, d(1))
