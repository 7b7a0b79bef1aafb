"""Logging configuration for applications that embed the serializer.

The library itself only ever calls ``logging.getLogger(__name__)``; this
module is for the application side:
    - Console and optional file handler
    - JSON line output for machine ingestion
    - Contextual fields (job, layer, ...) carried through contextvars
    - Warning capture (Python warnings -> logging)

Public API:
    setup_logging(log_level="DEBUG", context={"job": "panel-a"})
    setup_logging_from_config(load_config().logging)
    get_logger(name)
    push_context(layer="F.Cu")
    pop_context(keys=["layer"])

Format examples:
    Human: 2026-01-12T09:30:01.120Z | DEBUG    | job=panel-a | Serialized 412 commands
    JSON: {"t":"2026-01-12T09:30:01.120000+00:00","lvl":"DEBUG","job":"panel-a","msg":"..."}

Idempotent: repeated setup_logging() calls don't duplicate handlers.
"""

import contextvars
import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from gerber_ir.configs.loader import LoggingConfig

_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    "gerber_ir_logging_context", default={}
)

# Handlers installed by setup_logging, removed again on reconfiguration
_installed: List[logging.Handler] = []


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields to every record.

    Supports:
        - Human-readable format with colors (optional)
        - JSON format for machine ingestion
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, fmt_mode: str = "human", use_color: bool = True):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"fmt_mode must be 'human' or 'json', got {fmt_mode!r}")
        self.fmt_mode = fmt_mode
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(
        self, record: logging.LogRecord, ts: datetime, context: Dict[str, Any]
    ) -> str:
        log_dict = {
            "t": ts.isoformat(),
            "lvl": record.levelname,
            "name": record.name,
            "pid": os.getpid(),
            "msg": record.getMessage(),
        }
        log_dict.update(context)
        if record.exc_info:
            log_dict["exc"] = self.formatException(record.exc_info)
        return json.dumps(log_dict, default=str)

    def _format_human(
        self, record: logging.LogRecord, ts: datetime, context: Dict[str, Any]
    ) -> str:
        ts_str = ts.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        parts = [ts_str, "|", level, "|"]
        if context:
            parts.append(" ".join(f"{k}={v}" for k, v in context.items()))
            parts.append("|")
        parts.append(record.getMessage())

        line = " ".join(parts)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    capture_warnings: bool = True,
    context: Optional[Dict[str, Any]] = None,
) -> List[logging.Handler]:
    """Configure the root logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL".
    log_file : str, optional
        Path of a log file; parent directories are created.
    json : bool
        Write JSON lines to the file handler instead of human lines.
    color : bool
        ANSI colors on the console handler when stderr is a terminal.
    to_stderr : bool
        Attach a console handler on stderr.
    capture_warnings : bool
        Route Python warnings through logging.
    context : dict, optional
        Initial contextual fields, e.g. ``{"job": "panel-a"}``.

    Returns
    -------
    list[logging.Handler]
        Handlers attached to the root logger by this call.

    Raises
    ------
    ValueError
        If *log_level* is not a known level name.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    root = logging.getLogger()
    for handler in _installed:
        root.removeHandler(handler)
        handler.close()
    _installed.clear()

    root.setLevel(level)

    if to_stderr:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(
            ContextFormatter("human", use_color=color and sys.stderr.isatty())
        )
        _installed.append(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            ContextFormatter("json" if json else "human", use_color=False)
        )
        _installed.append(file_handler)

    for handler in _installed:
        root.addHandler(handler)

    if context:
        push_context(**context)

    if capture_warnings:
        route_warnings()

    return list(_installed)


def setup_logging_from_config(
    config: LoggingConfig, *, context: Optional[Dict[str, Any]] = None
) -> List[logging.Handler]:
    """Apply the ``logging`` section of a loaded configuration."""
    return setup_logging(
        config.level,
        config.file,
        json=config.json,
        color=config.color,
        context=context,
    )


def get_logger(name: str) -> logging.Logger:
    """Get logger by name (typically ``__name__``)."""
    return logging.getLogger(name)


def push_context(**kwargs: Any) -> None:
    """Add contextual fields to all subsequent log records.

    Context is local to the current thread or task (contextvars).

    Examples
    --------
    >>> push_context(job="panel-a")
    >>> push_context(layer="F.Cu")
    """
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; ``None`` clears them all."""
    if keys is None:
        _context_var.set({})
        return
    current = {k: v for k, v in _context_var.get().items() if k not in keys}
    _context_var.set(current)


def get_context() -> Dict[str, Any]:
    """Return a copy of the current contextual fields."""
    return dict(_context_var.get())


def route_warnings() -> None:
    """Route Python warnings to the ``py.warnings`` logger."""
    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.WARNING)
