"""Structured logging for scorepad.

Events are built with structlog and rendered through stdlib logging, so one
set of handlers serves both. Format and level are passed in by the caller
(normally from ScorepadSettings); when left unset they come from the
environment:

- LOG_FORMAT: "json" for one JSON object per line, "console" or unset for
  human-readable output.
- LOG_LEVEL: "DEBUG", "INFO" (default), "WARNING", "ERROR", or "CRITICAL".
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum, StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LOG_FILE_PREFIX = "scorepad"
LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LogFormat(StrEnum):
    CONSOLE = "console"
    JSON = "json"


def _plain(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    # other sequences (exc_info tuples) pass through untouched
    if isinstance(value, (list, tuple)) and any(isinstance(v, Enum) for v in value):
        return [_plain(v) for v in value]
    return value


def _serialize_enums(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Render enums (game variants, entry kinds, end conditions) by value."""
    for key, value in event_dict.items():
        event_dict[key] = _plain(value)
    return event_dict


def _is_test() -> bool:
    return "pytest" in sys.modules


def resolve_log_format(value: str | None = None) -> LogFormat:
    """Return the requested format, falling back to LOG_FORMAT."""
    raw = (value if value is not None else os.environ.get("LOG_FORMAT", "")).strip().lower()
    if not raw:
        return LogFormat.CONSOLE
    try:
        return LogFormat(raw)
    except ValueError:
        msg = f"Invalid LOG_FORMAT={raw!r}. Must be 'json', 'console', or unset."
        raise ValueError(msg) from None


def resolve_log_level(value: int | str | None = None) -> int:
    """Return the requested level as a stdlib level number, falling back to LOG_LEVEL."""
    if isinstance(value, int):
        return value
    raw = (value if value is not None else os.environ.get("LOG_LEVEL", "INFO")).strip().upper()
    if raw not in _LEVEL_NAMES:
        msg = f"Invalid LOG_LEVEL={raw!r}. Must be one of {', '.join(sorted(_LEVEL_NAMES))}."
        raise ValueError(msg)
    return logging.getLevelNamesMapping()[raw]


# format_exc_info runs in the ProcessorFormatter, not here
_EVENT_PROCESSORS = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    _serialize_enums,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
)


def _formatter(log_format: LogFormat, *, colors: bool = False) -> logging.Formatter:
    if log_format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def _log_file_path(log_dir: Path | str) -> Path:
    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)
    return dir_path / f"{LOG_FILE_PREFIX}_{timestamp}.log"


def setup_logging(
    log_dir: Path | str | None = None,
    level: int | str | None = None,
    log_format: str | None = None,
) -> Path | None:
    """Route structlog through stdlib logging to stdout and an optional file.

    Replaces any handlers already on the root logger. When log_dir is given
    (and not running under pytest) a datetime-stamped file is opened inside it
    and its path returned; otherwise returns None.
    """
    fmt = resolve_log_format(log_format)
    level = resolve_log_level(level)

    structlog.configure(
        processors=list(_EVENT_PROCESSORS),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(_formatter(fmt, colors=sys.stdout.isatty()))
    root_logger.addHandler(stdout_handler)

    if log_dir is None or _is_test():
        return None

    file_path = _log_file_path(log_dir)
    file_handler = logging.FileHandler(file_path, encoding="utf-8")
    file_handler.setFormatter(_formatter(fmt))
    root_logger.addHandler(file_handler)
    return file_path
