"""Configuration loader for the serializer.

Loads ``defaults.yaml`` (or a caller-supplied file), validates it against
a pydantic schema and returns typed, frozen dataclasses.  The coordinate
format, the line separator and the logging defaults all come from here;
nothing in the serializer reads global state.

Usage::

    from gerber_ir.configs.loader import load_config
    cfg = load_config()                        # shipped defaults
    cfg = load_config("/project/gerber.yaml")  # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gerber_ir.numeric.encoder import (
    MAX_DIGITS,
    FormatSpecification,
    Notation,
    ZeroSuppression,
)

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "gerber_ir.v1"

NEWLINES = {"lf": "\n", "crlf": "\r\n"}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Schema -- mirrors the YAML structure
# ---------------------------------------------------------------------------


class FormatSchema(BaseModel):
    """Coordinate format section."""

    model_config = ConfigDict(extra="forbid")

    integer_digits: int = Field(..., ge=0, le=MAX_DIGITS)
    decimal_digits: int = Field(..., ge=0, le=MAX_DIGITS)
    zero_suppression: Literal["none", "leading", "trailing"] = "leading"
    notation: Literal["absolute", "incremental"] = "absolute"


class OutputSchema(BaseModel):
    """Text output section."""

    model_config = ConfigDict(extra="forbid")

    newline: Literal["lf", "crlf"] = "lf"


class LoggingSchema(BaseModel):
    """Logging defaults section."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    level: str = "INFO"
    json_lines: bool = Field(False, alias="json")
    color: bool = True
    file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}, got '{v}'")
        return v.upper()


class SerializerConfigV1(BaseModel):
    """Complete configuration file (``gerber_ir.v1``)."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field(SCHEMA_VERSION, alias="schema")
    format: FormatSchema
    output: OutputSchema = Field(default_factory=OutputSchema)
    logging: LoggingSchema = Field(default_factory=LoggingSchema)

    @field_validator("schema_version")
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != SCHEMA_VERSION:
            raise ValueError(f"Expected schema '{SCHEMA_VERSION}', got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Dataclasses -- what the rest of the package consumes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingConfig:
    """Arguments for :func:`gerber_ir.utils.logging_config.setup_logging`."""

    level: str = "INFO"
    json: bool = False
    color: bool = True
    file: str | None = None


@dataclass(frozen=True)
class SerializerConfig:
    """Top-level configuration -- immutable after load."""

    format: FormatSpecification
    newline: str
    logging: LoggingConfig


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def config_from_dict(data: dict[str, Any]) -> SerializerConfig:
    """Validate an already-parsed mapping and build a :class:`SerializerConfig`.

    Raises
    ------
    ConfigError
        If *data* does not match the schema.
    """
    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration must be a mapping, got {type(data).__name__}"
        )
    try:
        schema = SerializerConfigV1.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration value: {exc}") from exc

    fmt = schema.format
    return SerializerConfig(
        format=FormatSpecification(
            integer_digits=fmt.integer_digits,
            decimal_digits=fmt.decimal_digits,
            zero_suppression=ZeroSuppression(fmt.zero_suppression),
            notation=Notation(fmt.notation),
        ),
        newline=NEWLINES[schema.output.newline],
        logging=LoggingConfig(
            level=schema.logging.level,
            json=schema.logging.json_lines,
            color=schema.logging.color,
            file=schema.logging.file,
        ),
    )


def load_config(path: str | Path | None = None) -> SerializerConfig:
    """Load and validate serializer configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to a configuration file.  ``None`` loads the
        ``defaults.yaml`` shipped alongside this module.

    Returns
    -------
    SerializerConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If the file is empty, is not valid YAML, or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    if path is None:
        path = Path(__file__).parent / "defaults.yaml"
    else:
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML file {path}: {exc}") from exc

    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")

    return config_from_dict(data)
