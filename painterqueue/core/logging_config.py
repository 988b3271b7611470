"""
Logging infrastructure for PainterQueue.

Configures the root logger from LoggingConfig, renders records as JSON or
text, tags every record of one CLI run with a correlation id and keeps
storage and telemetry credentials out of the output.
"""

import json
import logging
import logging.handlers
import re
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

REDACTED = "***REDACTED***"

# Correlation id of the running command; None outside a CLI invocation
correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

_SECRET_PATTERNS = [
    re.compile(r"(AccountKey=)[^;\s]+", re.IGNORECASE),
    re.compile(r"(SharedAccessSignature=)[^;&\s]+", re.IGNORECASE),
    re.compile(r"(sig=)[^;&\s]+", re.IGNORECASE),
    re.compile(r"(InstrumentationKey=)[^;\s]+", re.IGNORECASE),
    re.compile(r"(api_?key[\"']?\s*[:=]\s*[\"']?)[^\s;\"']+", re.IGNORECASE),
    re.compile(r"(password[\"']?\s*[:=]\s*[\"']?)\S+", re.IGNORECASE),
]


def redact(text: str) -> str:
    """Mask connection-string keys, SAS signatures, api keys and passwords."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(rf"\1{REDACTED}", text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Redacts secrets from the message of every record passing a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record; structured ``context`` is kept nested."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }

        if corr_id := correlation_id.get():
            entry["correlation_id"] = corr_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "context"):
            entry["context"] = record.context

        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines; structured ``context`` follows the message as JSON."""

    def __init__(self):
        super().__init__(fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        line = super().formatMessage(record)
        if hasattr(record, "context"):
            line = f"{line} {json.dumps(record.context, default=str)}"
        return line


def setup_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_file: Optional[str] = None,
    rotation_size: str = "10MB",
    rotation_count: int = 5,
    module_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    Configure the root logger.

    Replaces any handlers already installed, so calling it again applies a
    new configuration.

    Args:
        level: Default log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" or "text"
        log_file: Optional file path; the file rotates at ``rotation_size``
        rotation_size: Size limit for log rotation (e.g., "10MB")
        rotation_count: Number of rotated log files to keep
        module_levels: Per-logger levels, e.g. {"painterqueue.storage": "DEBUG"}
    """
    level_name = str(getattr(level, "value", level)).upper()
    formatter: logging.Formatter = JSONFormatter() if format_type == "json" else TextFormatter()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=_parse_size(rotation_size),
            backupCount=rotation_count,
            encoding="utf-8",
        ))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level_name))
    root_logger.handlers.clear()

    for handler in handlers:
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(formatter)
        handler.addFilter(SensitiveDataFilter())
        root_logger.addHandler(handler)

    for module_name, module_level in (module_levels or {}).items():
        logging.getLogger(module_name).setLevel(getattr(logging, module_level.upper()))

    root_logger.debug(
        f"Logging configured: level={level_name}, format={format_type}, file={log_file or 'none'}"
    )


def _parse_size(size_str: str) -> int:
    """Parse "10MB", "512KB", "1.5 GB" or a plain byte count."""
    size_str = size_str.upper().strip()

    # Longer suffixes first so 'B' does not match 'MB'
    for suffix, multiplier in (("GB", 1024 ** 3), ("MB", 1024 ** 2), ("KB", 1024), ("B", 1)):
        if size_str.endswith(suffix):
            return int(float(size_str[:-len(suffix)].strip()) * multiplier)

    return int(size_str)


def set_correlation_id(corr_id: str) -> None:
    correlation_id.set(corr_id)


def clear_correlation_id() -> None:
    correlation_id.set(None)


def log_with_context(logger: logging.Logger, level: int, message: str, **context: Any) -> None:
    """
    Log a message carrying a structured ``context`` dict.

    Both formatters render the context; with JSON output it stays a nested
    object.
    """
    extra = {"context": context} if context else {}
    logger.log(level, message, extra=extra)
