"""
Gerber IR Package.

Typed, immutable representation of Gerber X2 (RS-274X) documents and a
serializer that turns a command tree into exact document text.

Subpackages:
    numeric: Coordinate format and fixed-point token encoding
    macros: Aperture macro expressions and primitive statements
    attributes: Generic attribute model and the standard X2 vocabulary
    commands: Function codes and extended codes
    serialize: Command tree to text
    configs: Serializer configuration loading and validation
    utils: Logging setup for embedding applications
"""

__all__ = [
    "numeric",
    "macros",
    "attributes",
    "commands",
    "serialize",
    "configs",
    "utils",
]
