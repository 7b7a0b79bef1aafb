"""Macro expression printer -- trees to infix text with minimal parentheses.

Precedence, highest first::

    atoms (constants, $n)        4
    unary negate                 3
    x  /                         2
    +  -                         1
    boolean compositions         0

A child is parenthesized iff its precedence is strictly lower than the
slot it fills, or it has equal precedence in the right operand of a
non-associative operator (``-``, ``/``).  The macro grammar only accepts
a sign at the start of an expression, so a signed child in a right
operand slot is parenthesized as well.

The grammar has no logical tokens, so booleans are written as arithmetic
over ``0``/``1``::

    not a    ->  1-a
    a and b  ->  axb
    a or b   ->  a+b-axb

Boolean compositions sit at the lowest precedence and are therefore
always grouped when they appear inside arithmetic.
"""

from __future__ import annotations

from gerber_ir.errors import GerberError, InvalidVariableIndex, UnencodableField
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
    MacroExpression,
)
from gerber_ir.macros.primitives import (
    CenterLinePrimitive,
    CirclePrimitive,
    MacroComment,
    MacroContent,
    MoirePrimitive,
    OutlinePrimitive,
    Point,
    PolygonPrimitive,
    ThermalPrimitive,
    VariableDefinition,
    VectorLinePrimitive,
)
from gerber_ir.numeric.encoder import encode_decimal

# ---------------------------------------------------------------------------
# Precedence table
# ---------------------------------------------------------------------------

ATOM = 4
NEGATE = 3
PRODUCT = 2
SUM = 1
BOOLEAN = 0

_PRECEDENCE = {
    ArithmeticOperator.ADD: SUM,
    ArithmeticOperator.SUBTRACT: SUM,
    ArithmeticOperator.MULTIPLY: PRODUCT,
    ArithmeticOperator.DIVIDE: PRODUCT,
}

_NON_ASSOCIATIVE = frozenset({ArithmeticOperator.SUBTRACT, ArithmeticOperator.DIVIDE})

# (text, precedence, starts with a sign)
_Fragment = tuple[str, int, bool]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_expression(expr: MacroExpression) -> str:
    """Print *expr* in macro infix form.

    Raises
    ------
    InvalidVariableIndex
        If a variable node carries a non-positive index.
    OutOfRange
        If a decimal constant is not finite.
    GerberError
        If *expr* is not a known expression node.

    Examples
    --------
    >>> one, two, three = (DecimalConstant(v) for v in (1, 2, 3))
    >>> add = DecimalBinary(ArithmeticOperator.ADD, one, two)
    >>> render_expression(DecimalBinary(ArithmeticOperator.MULTIPLY, add, three))
    '(1+2)x3'
    """
    text, _, _ = _render(expr)
    return text


# ---------------------------------------------------------------------------
# Recursive descent
# ---------------------------------------------------------------------------


def _render(expr: MacroExpression) -> _Fragment:
    if isinstance(expr, (DecimalConstant, IntegerConstant)):
        if isinstance(expr, IntegerConstant):
            text = str(expr.value)
        else:
            text = encode_decimal(expr.value)
        if text.startswith("-"):
            return text, NEGATE, True
        return text, ATOM, False

    if isinstance(expr, BooleanConstant):
        return ("1" if expr.value else "0"), ATOM, False

    if isinstance(expr, (DecimalVariable, IntegerVariable, BooleanVariable)):
        if expr.index <= 0:
            raise InvalidVariableIndex(
                f"Variable index must be positive, got {expr.index!r}"
            )
        return f"${expr.index}", ATOM, False

    if isinstance(expr, (DecimalBinary, IntegerBinary)):
        return _binary(expr.op, expr.left, expr.right)

    if isinstance(expr, (DecimalNegate, IntegerNegate)):
        text, prec, signed = _render(expr.operand)
        if prec < NEGATE or signed:
            text = f"({text})"
        return f"-{text}", NEGATE, True

    if isinstance(expr, (DecimalFromInteger, DecimalFromBoolean)):
        return _render(expr.operand)

    if isinstance(expr, BooleanNot):
        operand = _operand(expr.operand, SUM, right=True, non_associative=True)
        return f"1-{operand}", BOOLEAN, False

    if isinstance(expr, BooleanAnd):
        left = _operand(expr.left, PRODUCT)
        right = _operand(expr.right, PRODUCT, right=True)
        return f"{left}x{right}", BOOLEAN, left.startswith("-")

    if isinstance(expr, BooleanOr):
        a_sum = _operand(expr.left, SUM)
        b_sum = _operand(expr.right, SUM, right=True)
        a_prod = _operand(expr.left, PRODUCT, right=True)
        b_prod = _operand(expr.right, PRODUCT, right=True)
        return f"{a_sum}+{b_sum}-{a_prod}x{b_prod}", BOOLEAN, a_sum.startswith("-")

    raise GerberError(f"Unsupported expression node: {type(expr).__name__}")


def _binary(
    op: ArithmeticOperator,
    left: MacroExpression,
    right: MacroExpression,
) -> _Fragment:
    prec = _PRECEDENCE[op]
    left_text = _operand(left, prec)
    right_text = _operand(
        right, prec, right=True, non_associative=op in _NON_ASSOCIATIVE,
    )
    return f"{left_text}{op.value}{right_text}", prec, left_text.startswith("-")


def _operand(
    expr: MacroExpression,
    slot: int,
    *,
    right: bool = False,
    non_associative: bool = False,
) -> str:
    """Render *expr* for an operand slot of precedence *slot*."""
    text, prec, signed = _render(expr)
    if (
        prec < slot
        or (right and signed)
        or (right and non_associative and prec == slot)
    ):
        return f"({text})"
    return text


# ---------------------------------------------------------------------------
# Macro body statements
# ---------------------------------------------------------------------------


def _join(*parts: MacroExpression | Point | int | str) -> str:
    out: list[str] = []
    for part in parts:
        if isinstance(part, tuple):
            out.extend(render_expression(axis) for axis in part)
        elif isinstance(part, MacroExpression):
            out.append(render_expression(part))
        else:
            out.append(str(part))
    return ",".join(out)


def render_macro_content(item: MacroContent) -> str:
    """Render one aperture macro statement including its ``*`` terminator.

    Raises
    ------
    UnencodableField
        If a macro comment contains ``*``, ``%`` or a line break.
    GerberError
        If *item* is not a known statement type.
    """
    if isinstance(item, MacroComment):
        if any(ch in item.text for ch in "*%\r\n"):
            raise UnencodableField(
                f"Macro comment contains a reserved character: {item.text!r}"
            )
        return f"0 {item.text}*"

    if isinstance(item, CirclePrimitive):
        body = _join(1, item.exposure, item.diameter, item.center)
        if item.angle is not None:
            body += "," + render_expression(item.angle)
        return body + "*"

    if isinstance(item, VectorLinePrimitive):
        return _join(
            20, item.exposure, item.width, item.start, item.end, item.angle,
        ) + "*"

    if isinstance(item, CenterLinePrimitive):
        return _join(
            21, item.exposure, item.dimensions, item.center, item.angle,
        ) + "*"

    if isinstance(item, OutlinePrimitive):
        return _join(
            4, item.exposure, len(item.points) - 1, *item.points, item.angle,
        ) + "*"

    if isinstance(item, PolygonPrimitive):
        return _join(
            5, item.exposure, item.vertices, item.center, item.diameter,
            item.angle,
        ) + "*"

    if isinstance(item, MoirePrimitive):
        return _join(
            6, item.center, item.diameter, item.ring_thickness, item.gap,
            item.max_rings, item.cross_hair_thickness, item.cross_hair_length,
            item.angle,
        ) + "*"

    if isinstance(item, ThermalPrimitive):
        return _join(
            7, item.center, item.outer_diameter, item.inner_diameter,
            item.gap, item.angle,
        ) + "*"

    if isinstance(item, VariableDefinition):
        if item.index <= 0:
            raise InvalidVariableIndex(
                f"Variable index must be positive, got {item.index!r}"
            )
        return f"${item.index}={render_expression(item.expression)}*"

    raise GerberError(f"Unsupported macro statement: {type(item).__name__}")
