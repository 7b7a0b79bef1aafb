"""
Aperture macro module.

Typed macro expressions, the statements of an ``AM`` body, and the
printer that turns both into macro-language text.
"""

from gerber_ir.macros.expressions import (
    ArithmeticOperator,
    BooleanAnd,
    BooleanConstant,
    BooleanNot,
    BooleanOr,
    BooleanVariable,
    DecimalBinary,
    DecimalConstant,
    DecimalFromBoolean,
    DecimalFromInteger,
    DecimalNegate,
    DecimalVariable,
    IntegerBinary,
    IntegerConstant,
    IntegerNegate,
    IntegerVariable,
    MacroBoolean,
    MacroDecimal,
    MacroExpression,
    MacroInteger,
)
from gerber_ir.macros.primitives import (
    CenterLinePrimitive,
    CirclePrimitive,
    MacroComment,
    MacroContent,
    MoirePrimitive,
    OutlinePrimitive,
    PolygonPrimitive,
    ThermalPrimitive,
    VariableDefinition,
    VectorLinePrimitive,
)
from gerber_ir.macros.printer import render_expression, render_macro_content

__all__ = [
    "ArithmeticOperator",
    "BooleanAnd",
    "BooleanConstant",
    "BooleanNot",
    "BooleanOr",
    "BooleanVariable",
    "DecimalBinary",
    "DecimalConstant",
    "DecimalFromBoolean",
    "DecimalFromInteger",
    "DecimalNegate",
    "DecimalVariable",
    "IntegerBinary",
    "IntegerConstant",
    "IntegerNegate",
    "IntegerVariable",
    "MacroBoolean",
    "MacroDecimal",
    "MacroExpression",
    "MacroInteger",
    "CenterLinePrimitive",
    "CirclePrimitive",
    "MacroComment",
    "MacroContent",
    "MoirePrimitive",
    "OutlinePrimitive",
    "PolygonPrimitive",
    "ThermalPrimitive",
    "VariableDefinition",
    "VectorLinePrimitive",
    "render_expression",
    "render_macro_content",
]
