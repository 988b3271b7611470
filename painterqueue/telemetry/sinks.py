"""
Telemetry sinks.

The dispatcher writes every event to two sinks: a line log for humans and a
structured trace sink that stores property bags for querying.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, runtime_checkable

from ..core.logging_config import log_with_context


@runtime_checkable
class LogSink(Protocol):
    """Line-oriented log stream."""

    def log_error(self, exception: BaseException, message: str) -> None: ...

    def log_warning(self, message: str) -> None: ...

    def log_information(self, message: str) -> None: ...


@runtime_checkable
class TraceSink(Protocol):
    """Structured trace backend accepting named property bags."""

    def track_exception(self, exception: BaseException, properties: Dict[str, str]) -> None: ...

    def track_trace(self, label: str, properties: Dict[str, str]) -> None: ...


class LoggerLogSink:
    """Log sink backed by a standard library logger."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def log_error(self, exception: BaseException, message: str) -> None:
        exc_info = (type(exception), exception, exception.__traceback__)
        self.logger.error(message, exc_info=exc_info)

    def log_warning(self, message: str) -> None:
        self.logger.warning(message)

    def log_information(self, message: str) -> None:
        self.logger.info(message)


class LoggingTraceSink:
    """
    Trace sink that writes each event as one structured log record.

    The property bag travels as the record's ``context`` so the JSON
    formatter emits it as a queryable object rather than inside the
    message text.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("painterqueue.telemetry.trace")

    def track_exception(self, exception: BaseException, properties: Dict[str, str]) -> None:
        log_with_context(
            self.logger,
            logging.ERROR,
            "Exception",
            exception_type=type(exception).__name__,
            properties=dict(properties),
        )

    def track_trace(self, label: str, properties: Dict[str, str]) -> None:
        level = logging.WARNING if label == "Warning" else logging.INFO
        log_with_context(self.logger, level, label, properties=dict(properties))


@dataclass
class TraceRecord:
    """An event captured by InMemoryTraceSink."""

    label: str
    properties: Dict[str, str]
    exception: Optional[BaseException] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryTraceSink:
    """Trace sink that keeps every event in a list."""

    def __init__(self):
        self.records: List[TraceRecord] = []

    def track_exception(self, exception: BaseException, properties: Dict[str, str]) -> None:
        self.records.append(TraceRecord(label="Exception", properties=dict(properties), exception=exception))

    def track_trace(self, label: str, properties: Dict[str, str]) -> None:
        self.records.append(TraceRecord(label=label, properties=dict(properties)))

    def find(self, label: str) -> List[TraceRecord]:
        """Return the captured records with the given label."""
        return [record for record in self.records if record.label == label]

    def clear(self) -> None:
        self.records.clear()
