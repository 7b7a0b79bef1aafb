"""
Configuration module.

Loads and validates the serializer configuration (``defaults.yaml``).
"""

from gerber_ir.configs.loader import (
    ConfigError,
    LoggingConfig,
    SerializerConfig,
    config_from_dict,
    load_config,
)

__all__ = [
    "ConfigError",
    "LoggingConfig",
    "SerializerConfig",
    "config_from_dict",
    "load_config",
]
