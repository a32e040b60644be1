"""
Logging setup for the calculator.

Diagnostics always go to stderr (and optionally a file) so that results
printed on stdout stay machine readable. Records may carry an
``extra_data`` mapping, such as the expression being evaluated, which both
formatters append to the message.
"""

import sys
import logging
from typing import Any, Dict, Mapping, Optional
from datetime import datetime, timezone
import json
from pathlib import Path

from .config import Settings, get_settings


def _extra_data(record: logging.LogRecord) -> Mapping[str, Any]:
    return getattr(record, "extra_data", None) or {}


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with extra_data merged at the top level"""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_data(record),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text with extra_data as trailing key=value pairs"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        pairs = " ".join(f"{key}={value!r}" for key, value in _extra_data(record).items())
        return f"{text} [{pairs}]" if pairs else text


def setup_logging(
    settings: Optional[Settings] = None, level: Optional[str] = None
) -> None:
    """
    Configure the root logger from settings.

    Args:
        settings: Source of LOG_LEVEL, LOG_FORMAT and LOG_FILE
        level: Overrides settings.LOG_LEVEL (e.g. from --log-level)
    """
    settings = settings or get_settings()
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.WARNING)
    formatter = StructuredFormatter() if settings.LOG_FORMAT == "json" else TextFormatter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger that tags every record with fixed fields, e.g. component="parser" """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        fields = {**self.extra, **kwargs.pop("extra_data", {})}
        kwargs.setdefault("extra", {})["extra_data"] = fields
        return msg, kwargs


def get_context_logger(name: str, **context) -> LoggerAdapter:
    """Get a logger whose records always carry the given fields"""
    return LoggerAdapter(get_logger(name), context)
