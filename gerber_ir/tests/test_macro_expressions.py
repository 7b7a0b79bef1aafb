"""Tests for macro expression trees and their infix printer.

Validates operand family checks, variable index validation, minimal
parenthesization, and that every printed expression re-parses to the
value of the tree it came from.
"""

from __future__ import annotations

import re
from fractions import Fraction

import pytest

from gerber_ir.errors import GerberError, InvalidVariableIndex
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
from gerber_ir.macros.printer import render_expression

ADD = ArithmeticOperator.ADD
SUB = ArithmeticOperator.SUBTRACT
MUL = ArithmeticOperator.MULTIPLY
DIV = ArithmeticOperator.DIVIDE


def d(value: object) -> DecimalConstant:
    return DecimalConstant(value)  # type: ignore[arg-type]


def v(index: int) -> DecimalVariable:
    return DecimalVariable(index)


def b(op: ArithmeticOperator, left: object, right: object) -> DecimalBinary:
    return DecimalBinary(op, left, right)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Reference evaluator and re-parser
# ---------------------------------------------------------------------------

VARS = {1: Fraction(3), 2: Fraction(-5, 2), 3: Fraction(7, 4), 4: Fraction(1), 5: Fraction(0)}


def evaluate(expr: MacroExpression) -> Fraction:
    """Value of a tree; booleans count as 0/1."""
    if isinstance(expr, (DecimalConstant, IntegerConstant)):
        return Fraction(str(expr.value))
    if isinstance(expr, BooleanConstant):
        return Fraction(int(expr.value))
    if isinstance(expr, (DecimalVariable, IntegerVariable, BooleanVariable)):
        return VARS[expr.index]
    if isinstance(expr, (DecimalBinary, IntegerBinary)):
        left, right = evaluate(expr.left), evaluate(expr.right)
        return {
            ADD: lambda: left + right,
            SUB: lambda: left - right,
            MUL: lambda: left * right,
            DIV: lambda: left / right,
        }[expr.op]()
    if isinstance(expr, (DecimalNegate, IntegerNegate)):
        return -evaluate(expr.operand)
    if isinstance(expr, (DecimalFromInteger, DecimalFromBoolean)):
        return evaluate(expr.operand)
    if isinstance(expr, BooleanNot):
        return 1 - evaluate(expr.operand)
    if isinstance(expr, BooleanAnd):
        return evaluate(expr.left) * evaluate(expr.right)
    if isinstance(expr, BooleanOr):
        left, right = evaluate(expr.left), evaluate(expr.right)
        return left + right - left * right
    raise AssertionError(f"unexpected node {expr!r}")


_TOKEN = re.compile(r"\s*(\$\d+|\d+(?:\.\d+)?|[-+x/()])")


class _Parser:
    """Recursive descent over the macro arithmetic grammar."""

    def __init__(self, text: str) -> None:
        self.tokens = _TOKEN.findall(text)
        assert "".join(self.tokens) == text, f"untokenizable: {text!r}"
        self.pos = 0

    def peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> str:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def parse(self) -> Fraction:
        value = self.sum()
        assert self.peek() is None, f"trailing tokens in {self.tokens!r}"
        return value

    def sum(self) -> Fraction:
        value = self.product()
        while self.peek() in ("+", "-"):
            op = self.take()
            rhs = self.product()
            value = value + rhs if op == "+" else value - rhs
        return value

    def product(self) -> Fraction:
        value = self.unary()
        while self.peek() in ("x", "/"):
            op = self.take()
            rhs = self.unary()
            value = value * rhs if op == "x" else value / rhs
        return value

    def unary(self) -> Fraction:
        if self.peek() == "-":
            self.take()
            return -self.unary()
        return self.atom()

    def atom(self) -> Fraction:
        tok = self.take()
        if tok == "(":
            value = self.sum()
            assert self.take() == ")"
            return value
        if tok.startswith("$"):
            return VARS[int(tok[1:])]
        return Fraction(tok)


def reparse(text: str) -> Fraction:
    # A sign may only open an expression or a parenthesized group.
    assert re.search(r"[-+x/]-", text) is None, f"sign after operator: {text!r}"
    return _Parser(text).parse()


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    @pytest.mark.parametrize("cls", [DecimalVariable, IntegerVariable, BooleanVariable])
    @pytest.mark.parametrize("index", [0, -1])
    def test_non_positive_index(self, cls: type, index: int) -> None:
        with pytest.raises(InvalidVariableIndex):
            cls(index)

    def test_bool_index_rejected(self) -> None:
        with pytest.raises(InvalidVariableIndex):
            DecimalVariable(True)

    def test_integer_division_rejected(self) -> None:
        with pytest.raises(ValueError, match="Integer"):
            IntegerBinary(DIV, IntegerConstant(1), IntegerConstant(2))

    def test_boolean_not_accepted_as_decimal(self) -> None:
        with pytest.raises(TypeError):
            DecimalBinary(ADD, d(1), BooleanConstant(True))  # type: ignore[arg-type]

    def test_decimal_not_accepted_as_boolean(self) -> None:
        with pytest.raises(TypeError):
            BooleanNot(d(1))  # type: ignore[arg-type]

    def test_constant_types(self) -> None:
        with pytest.raises(TypeError):
            IntegerConstant(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            DecimalConstant(True)
        with pytest.raises(TypeError):
            DecimalConstant("1")  # type: ignore[arg-type]

    def test_nodes_are_hashable_values(self) -> None:
        assert b(ADD, d(1), v(2)) == b(ADD, d(1), v(2))
        assert len({b(ADD, d(1), v(2)), b(ADD, d(1), v(2))}) == 1


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------


class TestPrinting:
    def test_grouped_sum_times_constant(self) -> None:
        assert render_expression(b(MUL, b(ADD, d(1), d(2)), d(3))) == "(1+2)x3"

    def test_no_redundant_parentheses(self) -> None:
        assert render_expression(b(ADD, d(1), b(MUL, d(2), d(3)))) == "1+2x3"

    def test_constants_and_variables(self) -> None:
        assert render_expression(d(0.5)) == "0.5"
        assert render_expression(d(4.0)) == "4"
        assert render_expression(v(12)) == "$12"
        assert render_expression(BooleanConstant(True)) == "1"
        assert render_expression(BooleanConstant(False)) == "0"
        assert render_expression(IntegerConstant(8)) == "8"

    @pytest.mark.parametrize(
        "expr, expected",
        [
            (b(SUB, d(1), b(SUB, d(2), d(3))), "1-(2-3)"),
            (b(SUB, b(SUB, d(1), d(2)), d(3)), "1-2-3"),
            (b(SUB, d(1), b(ADD, d(2), d(3))), "1-(2+3)"),
            (b(ADD, d(1), b(SUB, d(2), d(3))), "1+2-3"),
            (b(DIV, v(1), b(MUL, v(2), v(3))), "$1/($2x$3)"),
            (b(MUL, b(DIV, v(1), v(2)), v(3)), "$1/$2x$3"),
            (b(MUL, v(1), b(DIV, v(2), v(3))), "$1x$2/$3"),
            (b(DIV, b(ADD, v(1), v(2)), d(2)), "($1+$2)/2"),
        ],
    )
    def test_associativity(self, expr: MacroExpression, expected: str) -> None:
        assert render_expression(expr) == expected

    @pytest.mark.parametrize(
        "expr, expected",
        [
            (DecimalNegate(d(3)), "-3"),
            (DecimalNegate(b(ADD, d(1), d(2))), "-(1+2)"),
            (DecimalNegate(DecimalNegate(d(3))), "-(-3)"),
            (b(MUL, d(2), DecimalNegate(d(3))), "2x(-3)"),
            (b(MUL, DecimalNegate(d(3)), d(2)), "-3x2"),
            (b(ADD, d(-1.5), d(1)), "-1.5+1"),
            (b(ADD, d(1), d(-1.5)), "1+(-1.5)"),
            (b(SUB, v(1), DecimalNegate(v(2))), "$1-(-$2)"),
            (IntegerNegate(IntegerVariable(1)), "-$1"),
        ],
    )
    def test_signs(self, expr: MacroExpression, expected: str) -> None:
        assert render_expression(expr) == expected

    @pytest.mark.parametrize(
        "expr, expected",
        [
            (BooleanNot(BooleanVariable(1)), "1-$1"),
            (BooleanAnd(BooleanVariable(1), BooleanVariable(2)), "$1x$2"),
            (BooleanOr(BooleanVariable(1), BooleanVariable(2)), "$1+$2-$1x$2"),
            (BooleanNot(BooleanNot(BooleanVariable(1))), "1-(1-$1)"),
            (
                BooleanNot(BooleanAnd(BooleanVariable(1), BooleanVariable(2))),
                "1-($1x$2)",
            ),
            (
                b(MUL, DecimalFromBoolean(BooleanNot(BooleanVariable(4))), d(2)),
                "(1-$4)x2",
            ),
        ],
    )
    def test_boolean_lowering(self, expr: MacroExpression, expected: str) -> None:
        assert render_expression(expr) == expected

    def test_integer_read_back_is_transparent(self) -> None:
        inner = IntegerBinary(MUL, IntegerVariable(1), IntegerConstant(2))
        assert render_expression(b(ADD, DecimalFromInteger(inner), d(1))) == "$1x2+1"

    def test_index_forced_past_construction(self) -> None:
        node = DecimalVariable(1)
        object.__setattr__(node, "index", 0)
        with pytest.raises(InvalidVariableIndex):
            render_expression(b(ADD, d(1), node))

    def test_unknown_node(self) -> None:
        class Stray(MacroExpression):
            pass

        with pytest.raises(GerberError):
            render_expression(Stray())


# ---------------------------------------------------------------------------
# Print / re-parse agreement
# ---------------------------------------------------------------------------


_p = BooleanVariable(4)
_q = BooleanVariable(5)
_int = IntegerBinary(SUB, IntegerVariable(1), IntegerNegate(IntegerConstant(2)))

_TREES = [
    b(MUL, b(ADD, d(1), d(2)), d(3)),
    b(SUB, v(1), b(SUB, v(2), v(3))),
    b(DIV, v(1), b(DIV, v(2), v(3))),
    b(DIV, b(MUL, v(1), v(2)), b(SUB, v(3), d(0.25))),
    DecimalNegate(b(MUL, DecimalNegate(v(2)), b(ADD, v(1), d(-2)))),
    b(SUB, DecimalNegate(v(1)), DecimalNegate(DecimalNegate(v(3)))),
    b(ADD, DecimalFromInteger(_int), b(MUL, d(-0.5), v(2))),
    b(MUL, DecimalFromBoolean(BooleanOr(_p, BooleanNot(_q))), v(1)),
    b(SUB, d(1), DecimalFromBoolean(BooleanAnd(BooleanNot(_p), BooleanOr(_q, _p)))),
    DecimalNegate(DecimalFromBoolean(BooleanNot(BooleanAnd(_p, _q)))),
]


class TestReparse:
    @pytest.mark.parametrize("expr", _TREES)
    def test_printed_text_has_tree_value(self, expr: MacroExpression) -> None:
        assert reparse(render_expression(expr)) == evaluate(expr)

    def test_parser_self_check(self) -> None:
        assert reparse("(1+2)x3") == 9
        assert reparse("1+2x3") == 7
        assert reparse("-$2x2") == 5
