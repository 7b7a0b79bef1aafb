"""Fixed-point numeric encoding -- values to Gerber digit strings.

Two encodings live here:

Coordinates
    Governed by a :class:`FormatSpecification`.  A value is scaled by
    ``10**decimal_digits``, rounded half away from zero, checked against
    the ``integer_digits + decimal_digits`` budget and written as a
    fixed-width digit string.  Zero suppression then strips redundant
    zeros from one side.  Values that do not fit raise
    :class:`~gerber_ir.errors.OutOfRange`; nothing is saturated or
    truncated.

Plain decimals
    Aperture parameters, macro constants and transform values print in
    shortest plain decimal form (``4.0`` -> ``"4"``, ``0.50`` -> ``"0.5"``)
    and never depend on the coordinate format.

Floats are converted through their shortest ``repr`` so ``0.1`` encodes
as one tenth and not as its binary approximation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import Union

from gerber_ir.errors import OutOfRange

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Number = Union[int, float, Decimal]
"""Any numeric input accepted by the encoders."""

MAX_DIGITS = 6
"""Upper bound for both digit counts of a format specification."""


# ---------------------------------------------------------------------------
# Format specification
# ---------------------------------------------------------------------------


class ZeroSuppression(Enum):
    """Which redundant zeros are omitted from coordinate tokens."""

    NONE = "none"
    LEADING = "leading"
    TRAILING = "trailing"


class Notation(Enum):
    """Coordinate notation declared by the FS directive."""

    ABSOLUTE = "absolute"
    INCREMENTAL = "incremental"


@dataclass(frozen=True, slots=True)
class FormatSpecification:
    """Document-wide coordinate format (the ``FS`` directive).

    Parameters
    ----------
    integer_digits : int
        Digits before the implicit decimal point, in ``[0, 6]``.
    decimal_digits : int
        Digits after the implicit decimal point, in ``[0, 6]``.
    zero_suppression : ZeroSuppression
        Zero omission applied to every coordinate token.
    notation : Notation
        Absolute or incremental coordinates.  Encoding is identical for
        both; the caller supplies deltas in incremental mode.
    """

    integer_digits: int
    decimal_digits: int
    zero_suppression: ZeroSuppression = ZeroSuppression.LEADING
    notation: Notation = Notation.ABSOLUTE

    def __post_init__(self) -> None:
        for name in ("integer_digits", "decimal_digits"):
            value = getattr(self, name)
            if (
                not isinstance(value, int)
                or isinstance(value, bool)
                or not 0 <= value <= MAX_DIGITS
            ):
                raise ValueError(
                    f"{name} must be an integer in [0, {MAX_DIGITS}], "
                    f"got {value!r}"
                )
        if not isinstance(self.zero_suppression, ZeroSuppression):
            raise ValueError(
                f"zero_suppression must be a ZeroSuppression, "
                f"got {self.zero_suppression!r}"
            )
        if not isinstance(self.notation, Notation):
            raise ValueError(
                f"notation must be a Notation, got {self.notation!r}"
            )

    @property
    def width(self) -> int:
        """Total digit count of an unsuppressed coordinate token."""
        return self.integer_digits + self.decimal_digits


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def to_decimal(value: Number) -> Decimal:
    """Convert *value* to a finite :class:`~decimal.Decimal`.

    Raises
    ------
    OutOfRange
        If *value* is NaN or infinite.
    TypeError
        If *value* is not an int, float or Decimal.
    """
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got bool {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        raise TypeError(
            f"Expected int, float or Decimal, got {type(value).__name__}"
        )
    if not result.is_finite():
        raise OutOfRange(f"Cannot encode non-finite value {value!r}")
    return result


def _scale(value: Number, decimal_digits: int) -> int:
    """Scale to an integer count of ``10**-decimal_digits`` units."""
    exact = to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = 64
        scaled = exact.scaleb(decimal_digits).to_integral_value(
            rounding=ROUND_HALF_UP,
        )
    return int(scaled)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def encode_coordinate(value: Number, fmt: FormatSpecification) -> str:
    """Encode a coordinate value under *fmt*.

    Parameters
    ----------
    value : int | float | Decimal
        Value in file units.
    fmt : FormatSpecification
        Active coordinate format.

    Returns
    -------
    str
        Signed, zero-suppressed digit string.  Never empty; zero is never
        signed.

    Raises
    ------
    OutOfRange
        If the rounded value needs more than ``fmt.integer_digits``
        integer digits, or is not finite.

    Examples
    --------
    >>> fmt = FormatSpecification(2, 4)
    >>> encode_coordinate(1.5, fmt)
    '15000'
    >>> encode_coordinate(0, fmt)
    '0'
    """
    scaled = _scale(value, fmt.decimal_digits)
    if abs(scaled) >= 10 ** fmt.width:
        raise OutOfRange(
            f"Value {value!r} does not fit format "
            f"{fmt.integer_digits}.{fmt.decimal_digits}"
        )

    digits = str(abs(scaled)).zfill(fmt.width)
    if fmt.zero_suppression is ZeroSuppression.LEADING:
        digits = digits.lstrip("0") or "0"
    elif fmt.zero_suppression is ZeroSuppression.TRAILING:
        digits = digits.rstrip("0") or "0"

    if scaled < 0:
        return "-" + digits
    return digits


def decode_coordinate(token: str, fmt: FormatSpecification) -> Decimal:
    """Recover the value of a token produced by :func:`encode_coordinate`.

    Re-pads the suppressed side, restores the sign and applies the
    implicit decimal point.  Only tokens in this module's own output
    form are accepted.

    Raises
    ------
    ValueError
        If *token* is not a signed digit string.
    OutOfRange
        If *token* has more digits than *fmt* allows.
    """
    negative = token.startswith("-")
    digits = token[1:] if token[:1] in ("-", "+") else token
    if not digits.isdigit():
        raise ValueError(f"Not a coordinate token: {token!r}")
    if len(digits) > max(fmt.width, 1):
        raise OutOfRange(
            f"Token {token!r} has more digits than format "
            f"{fmt.integer_digits}.{fmt.decimal_digits} allows"
        )

    if fmt.zero_suppression is ZeroSuppression.TRAILING:
        digits = digits.ljust(fmt.width, "0")
    else:
        digits = digits.zfill(fmt.width)

    value = Decimal(int(digits)).scaleb(-fmt.decimal_digits)
    return -value if negative else value


def encode_decimal(value: Number) -> str:
    """Encode *value* in shortest plain decimal form.

    No exponent, no trailing fractional zeros, no dangling point, and
    ``-0`` prints as ``0``.

    Raises
    ------
    OutOfRange
        If *value* is NaN or infinite.

    Examples
    --------
    >>> encode_decimal(4.0)
    '4'
    >>> encode_decimal(Decimal("0.50"))
    '0.5'
    """
    text = format(to_decimal(value), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text
