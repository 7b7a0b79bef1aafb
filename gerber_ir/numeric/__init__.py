"""
Numeric encoding module.

Turns coordinate values into the digit-exact, zero-suppressed tokens a
format specification demands, and plain decimals into their shortest
textual form.
"""

from gerber_ir.numeric.encoder import (
    MAX_DIGITS,
    FormatSpecification,
    Notation,
    Number,
    ZeroSuppression,
    decode_coordinate,
    encode_coordinate,
    encode_decimal,
    to_decimal,
)

__all__ = [
    "MAX_DIGITS",
    "FormatSpecification",
    "Notation",
    "Number",
    "ZeroSuppression",
    "decode_coordinate",
    "encode_coordinate",
    "encode_decimal",
    "to_decimal",
]
