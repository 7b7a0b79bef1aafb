"""
Serialization module.

Renders command trees to exact Gerber text.
"""

from gerber_ir.serialize.writer import Document, GerberSerializer, serialize, write

__all__ = [
    "Document",
    "GerberSerializer",
    "serialize",
    "write",
]
