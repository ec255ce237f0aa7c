"""Logging configuration for scribe.

Library modules only create loggers (``logging.getLogger(__name__)``);
the CLI calls ``configure_logging`` once at startup.

Environment Variables:
    SCRIBE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    SCRIBE_LOG_FORMAT: Output format ("text" or "json")
    SCRIBE_LOG_FILE: Optional log file path
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Literal

TEXT_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Attributes every LogRecord carries; anything else came in via ``extra=``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    {
        "timestamp": "2026-10-18T14:30:00.123456",
        "level": "INFO",
        "logger": "scribe.core.session.engine",
        "message": "Reset REPL 'Python REPL' and cleared its command history",
        "extra": {...}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


def configure_logging(
    level: str | None = None,
    format: Literal["text", "json"] | None = None,
    file_path: str | None = None,
    force: bool = False,
) -> None:
    """Configure the root logger.

    Subsequent calls are ignored unless force=True. Console output goes
    to stderr so it never mixes with the REPL transcript on stdout.

    Args:
        level: Log level. Defaults to SCRIBE_LOG_LEVEL or "WARNING".
        format: Output format. Defaults to SCRIBE_LOG_FORMAT or "text".
        file_path: Optional log file. Defaults to SCRIBE_LOG_FILE.
        force: Reconfigure even if already configured.

    Raises:
        ValueError: If the level is not a known log level.
    """
    global _configured
    if _configured and not force:
        return

    level = (level or os.environ.get("SCRIBE_LOG_LEVEL", "WARNING")).upper()
    format = format or os.environ.get("SCRIBE_LOG_FORMAT", "text")  # type: ignore
    file_path = file_path or os.environ.get("SCRIBE_LOG_FILE")

    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")

    if format == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configured = True
