"""Macro expression trees -- typed parameters of aperture macros.

Three closed families share one recursive shape:

``MacroInteger``
    Integer constants, ``$n`` loads, ``+ - x`` compositions and negation.
``MacroDecimal``
    Decimal constants, ``$n`` loads, ``+ - x /`` compositions, negation,
    and read-back of an integer or boolean sub-tree.
``MacroBoolean``
    ``1``/``0`` constants, ``$n`` loads, and logical ``not``/``and``/``or``.

Every node is a frozen, slotted dataclass that owns its operands, so a
tree is built bottom-up and can never contain a cycle.  Operand families
are checked at construction; a boolean can only appear where a decimal
is expected through :class:`DecimalFromBoolean`.

Printing lives in :mod:`gerber_ir.macros.printer`; nodes carry no
rendering logic.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from gerber_ir.errors import InvalidVariableIndex
from gerber_ir.numeric.encoder import Number

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class ArithmeticOperator(Enum):
    """Binary operators of the macro language, valued by their token."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "x"
    DIVIDE = "/"


INTEGER_OPERATORS = frozenset(
    {ArithmeticOperator.ADD, ArithmeticOperator.SUBTRACT, ArithmeticOperator.MULTIPLY}
)
"""Operators that keep an integer composition integral."""


def _check_index(index: int) -> None:
    if not isinstance(index, int) or isinstance(index, bool):
        raise InvalidVariableIndex(
            f"Variable index must be an integer, got {index!r}"
        )
    if index <= 0:
        raise InvalidVariableIndex(
            f"Variable index must be positive, got {index!r}"
        )


def _check_operand(value: object, family: type, role: str) -> None:
    if not isinstance(value, family):
        raise TypeError(
            f"{role} must be a {family.__name__}, got {type(value).__name__}"
        )


# ---------------------------------------------------------------------------
# Base classes
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MacroExpression(ABC):
    """Base class for every macro expression node."""

    pass


@dataclass(frozen=True, slots=True)
class MacroInteger(MacroExpression):
    """Expression that evaluates to an integer."""

    pass


@dataclass(frozen=True, slots=True)
class MacroDecimal(MacroExpression):
    """Expression that evaluates to a decimal number."""

    pass


@dataclass(frozen=True, slots=True)
class MacroBoolean(MacroExpression):
    """Expression that evaluates to ``0`` or ``1``."""

    pass


# ---------------------------------------------------------------------------
# Integer expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IntegerConstant(MacroInteger):
    """Literal integer."""

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise TypeError(f"value must be an int, got {self.value!r}")


@dataclass(frozen=True, slots=True)
class IntegerVariable(MacroInteger):
    """Load of macro variable ``$index``."""

    index: int

    def __post_init__(self) -> None:
        _check_index(self.index)


@dataclass(frozen=True, slots=True)
class IntegerBinary(MacroInteger):
    """``left <op> right`` for ``+``, ``-`` or ``x``."""

    op: ArithmeticOperator
    left: MacroInteger
    right: MacroInteger

    def __post_init__(self) -> None:
        if self.op not in INTEGER_OPERATORS:
            raise ValueError(
                f"Integer expressions support + - x only, got {self.op!r}"
            )
        _check_operand(self.left, MacroInteger, "left")
        _check_operand(self.right, MacroInteger, "right")


@dataclass(frozen=True, slots=True)
class IntegerNegate(MacroInteger):
    """Unary ``-operand``."""

    operand: MacroInteger

    def __post_init__(self) -> None:
        _check_operand(self.operand, MacroInteger, "operand")


# ---------------------------------------------------------------------------
# Decimal expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DecimalConstant(MacroDecimal):
    """Literal decimal.  Prints in plain decimal form (``0.5``, ``4``)."""

    value: Number

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(
            self.value, (int, float, Decimal)
        ):
            raise TypeError(f"value must be a number, got {self.value!r}")


@dataclass(frozen=True, slots=True)
class DecimalVariable(MacroDecimal):
    """Load of macro variable ``$index``."""

    index: int

    def __post_init__(self) -> None:
        _check_index(self.index)


@dataclass(frozen=True, slots=True)
class DecimalBinary(MacroDecimal):
    """``left <op> right`` for any arithmetic operator."""

    op: ArithmeticOperator
    left: MacroDecimal
    right: MacroDecimal

    def __post_init__(self) -> None:
        if not isinstance(self.op, ArithmeticOperator):
            raise ValueError(
                f"op must be an ArithmeticOperator, got {self.op!r}"
            )
        _check_operand(self.left, MacroDecimal, "left")
        _check_operand(self.right, MacroDecimal, "right")


@dataclass(frozen=True, slots=True)
class DecimalNegate(MacroDecimal):
    """Unary ``-operand``."""

    operand: MacroDecimal

    def __post_init__(self) -> None:
        _check_operand(self.operand, MacroDecimal, "operand")


@dataclass(frozen=True, slots=True)
class DecimalFromInteger(MacroDecimal):
    """Integer sub-tree read back where a decimal is expected."""

    operand: MacroInteger

    def __post_init__(self) -> None:
        _check_operand(self.operand, MacroInteger, "operand")


@dataclass(frozen=True, slots=True)
class DecimalFromBoolean(MacroDecimal):
    """Boolean sub-tree read back as ``0``/``1`` where a decimal is expected."""

    operand: MacroBoolean

    def __post_init__(self) -> None:
        _check_operand(self.operand, MacroBoolean, "operand")


# ---------------------------------------------------------------------------
# Boolean expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BooleanConstant(MacroBoolean):
    """Literal ``1`` (true) or ``0`` (false)."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"value must be a bool, got {self.value!r}")


@dataclass(frozen=True, slots=True)
class BooleanVariable(MacroBoolean):
    """Load of macro variable ``$index``, read as ``0``/``1``."""

    index: int

    def __post_init__(self) -> None:
        _check_index(self.index)


@dataclass(frozen=True, slots=True)
class BooleanNot(MacroBoolean):
    """Logical negation."""

    operand: MacroBoolean

    def __post_init__(self) -> None:
        _check_operand(self.operand, MacroBoolean, "operand")


@dataclass(frozen=True, slots=True)
class BooleanAnd(MacroBoolean):
    """Logical conjunction."""

    left: MacroBoolean
    right: MacroBoolean

    def __post_init__(self) -> None:
        _check_operand(self.left, MacroBoolean, "left")
        _check_operand(self.right, MacroBoolean, "right")


@dataclass(frozen=True, slots=True)
class BooleanOr(MacroBoolean):
    """Logical disjunction."""

    left: MacroBoolean
    right: MacroBoolean

    def __post_init__(self) -> None:
        _check_operand(self.left, MacroBoolean, "left")
        _check_operand(self.right, MacroBoolean, "right")
