"""Loguru configuration for modeldoc.

Diagnostics are logged with ``kind`` and ``subject`` bound (see
:mod:`modeldoc.core.diagnostics`); the text formats append them to the
message, the JSON formats keep them under ``extra``.

Examples
--------
>>> from modeldoc.core.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.info("Collected {count} models", count=3)

Switch format and level for a run::

    from modeldoc.core.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

import os
import sys
from collections.abc import Callable
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from loguru import logger
from rich.logging import RichHandler

if TYPE_CHECKING:
    from loguru import Logger, Record

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []

_TIMESTAMP = "{time:YYYY-MM-DD HH:mm:ss} "
_DIAGNOSTIC_SUFFIX = " <magenta>[{extra[kind]}: {extra[subject]}]</magenta>"


def _line_format(template: str) -> Callable[["Record"], str]:
    """Format function appending the diagnostic context when the record has one."""

    def _format(record: "Record") -> str:
        line = template
        if "kind" in record["extra"] and "subject" in record["extra"]:
            line += _DIAGNOSTIC_SUFFIX
        return line + "\n{exception}"

    return _format


def _stderr_handler(
    format: LogFormat, level: LogLevel, use_color: bool, include_timestamp: bool
) -> dict[str, Any]:
    """Keyword arguments for ``logger.add`` of the stderr (or rich) handler."""
    timestamp = f"<green>{_TIMESTAMP}</green>" if include_timestamp else ""

    if format == "rich":
        handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=False,
        )
        return {"sink": handler, "level": level, "format": _line_format("{message}")}

    if format == "json":
        return {"sink": sys.stderr, "level": level, "serialize": True}

    if format == "structured":
        colorize = use_color and sys.stderr.isatty()
        template = (
            f"{timestamp}[<level>{{level: <8}}</level>]"
            "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
        )
        return {
            "sink": sys.stderr,
            "level": level,
            "format": _line_format(template),
            "colorize": colorize,
        }

    template = f"{timestamp}{{level: <8}} | {{name}} | {{message}}"
    return {
        "sink": sys.stderr,
        "level": level,
        "format": _line_format(template),
        "colorize": False,
    }


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Install the modeldoc log handlers.

    Calling it again with the same arguments is a no-op; different arguments
    replace the handlers installed by the previous call.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Minimum level written
    format : LogFormat, default="structured"
        "console" (plain lines), "json" (serialized records), "structured"
        (module, function and line) or "rich" (Rich console handler)
    output_file : str | Path | None, default=None
        Also write serialized records to this file
    use_color : bool, default=True
        Colorize the structured format when stderr is a terminal
    include_timestamp : bool, default=True
        Prefix text records with the time
    force_reconfigure : bool, default=False
        Reinstall the handlers even if the arguments did not change
    """
    global _CURRENT_CONFIG

    requested = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
    }
    if not force_reconfigure and requested == _CURRENT_CONFIG:
        return

    # Only our own handlers; pytest and callers may have added others
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    _HANDLER_IDS.append(
        logger.add(**_stderr_handler(format, level, use_color, include_timestamp))
    )

    if output_file:
        log_path = Path(output_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _HANDLER_IDS.append(
            logger.add(
                sink=log_path,
                level=level,
                serialize=True,
                rotation="10 MB",
                retention="1 week",
            )
        )

    _CURRENT_CONFIG = requested


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Logger bound with ``module=name``.

    The first call configures logging from ``MODELDOC_LOG_LEVEL`` and
    ``MODELDOC_LOG_FORMAT`` unless :func:`configure_logging` already ran.
    """
    _ensure_configured()
    return logger.bind(module=name)


def _ensure_configured() -> None:
    if _CURRENT_CONFIG is None:
        level = os.getenv("MODELDOC_LOG_LEVEL", "INFO").upper()
        format_type = os.getenv("MODELDOC_LOG_FORMAT", "structured").lower()
        configure_logging(level=level, format=format_type)  # type: ignore[arg-type]
