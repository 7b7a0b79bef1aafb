"""
Utility module.

Logging setup for applications embedding the serializer.
"""

from gerber_ir.utils.logging_config import (
    ContextFormatter,
    get_context,
    get_logger,
    pop_context,
    push_context,
    setup_logging,
    setup_logging_from_config,
)

__all__ = [
    "ContextFormatter",
    "get_context",
    "get_logger",
    "pop_context",
    "push_context",
    "setup_logging",
    "setup_logging_from_config",
]
