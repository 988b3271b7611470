"""
Telemetry Dispatcher

Fans exception, warning and information events out to a line log sink and a
structured trace sink, merging the event's payload and context data into
one property map.

Author: PainterQueue Team
Date: 2026-10-18
"""

import logging
import traceback
from typing import Any, Dict, Generic, Mapping, Optional

from .models import (
    CUSTOM_MESSAGE_KEY,
    MESSAGE_KEY,
    NO_CUSTOM_MESSAGE,
    NO_STACK_TRACE,
    PAYLOAD_KEY,
    STACK_TRACE_KEY,
    TYPE_KEY,
    WARNING_MESSAGE_KEY,
    EventKind,
    LogEvent,
    T,
)
from .serialization import serialize_payload, stringify_value
from .sinks import LogSink, TraceSink

logger = logging.getLogger(__name__)

ContextData = Optional[Mapping[str, Any]]


def exception_type_name(exception: BaseException) -> str:
    """Qualified class name of an exception; builtins are left unqualified."""
    cls = type(exception)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def exception_stack_trace(exception: BaseException) -> str:
    if exception.__traceback__ is None:
        return NO_STACK_TRACE
    return "".join(traceback.format_tb(exception.__traceback__))


def _merge_properties(
    reserved: Dict[str, str],
    payload: Any,
    context_data: ContextData,
) -> Dict[str, str]:
    properties = dict(reserved)
    if payload is not None:
        properties[PAYLOAD_KEY] = serialize_payload(payload)
    # Context is written last; a colliding key replaces the reserved value
    for key, value in (context_data or {}).items():
        properties[key] = stringify_value(value)
    return properties


def build_exception_event(
    exception: BaseException,
    payload: Optional[T] = None,
    context_data: ContextData = None,
    message: Optional[str] = "",
) -> LogEvent[T]:
    """
    Build the event for a caught exception.

    Raises:
        ValueError: If exception is None
        PayloadSerializationError: If the payload cannot be serialized
    """
    if exception is None:
        raise ValueError("exception cannot be null")

    reserved = {
        TYPE_KEY: exception_type_name(exception),
        MESSAGE_KEY: str(exception),
        CUSTOM_MESSAGE_KEY: message or NO_CUSTOM_MESSAGE,
        STACK_TRACE_KEY: exception_stack_trace(exception),
    }
    return LogEvent(
        kind=EventKind.EXCEPTION,
        message=message or NO_CUSTOM_MESSAGE,
        payload=payload,
        context_data=dict(context_data or {}),
        properties=_merge_properties(reserved, payload, context_data),
        exception=exception,
    )


def _build_message_event(
    kind: EventKind,
    reserved_key: str,
    message: str,
    payload: Optional[T],
    context_data: ContextData,
) -> LogEvent[T]:
    if message is None:
        raise ValueError("message cannot be null")
    if not str(message).strip():
        raise ValueError("message cannot be empty")

    return LogEvent(
        kind=kind,
        message=message,
        payload=payload,
        context_data=dict(context_data or {}),
        properties=_merge_properties({reserved_key: message}, payload, context_data),
    )


def build_warning_event(message: str, payload: Optional[T] = None, context_data: ContextData = None) -> LogEvent[T]:
    """Build a warning event keyed by ``WarningMessage``."""
    return _build_message_event(EventKind.WARNING, WARNING_MESSAGE_KEY, message, payload, context_data)


def build_information_event(message: str, payload: Optional[T] = None, context_data: ContextData = None) -> LogEvent[T]:
    """Build an information event keyed by ``Message``."""
    return _build_message_event(EventKind.INFORMATION, MESSAGE_KEY, message, payload, context_data)


def format_exception_log(event: LogEvent) -> str:
    """Render an exception event as the multi-line block written to the log."""
    lines = [f"{event.exception} Error Properties:"]
    lines.extend(f" {key}: {value};" for key, value in event.properties.items())
    lines.append(" End of error properties.")
    return "\n".join(lines) + "\n"


def format_message_log(event: LogEvent) -> str:
    """Render a warning or information event; context gets its own block."""
    if not event.context_data:
        return event.message

    lines = [f"{event.message}  Additional data:"]
    lines.extend(f" {key}: {stringify_value(value)};" for key, value in event.context_data.items())
    lines.append(" End of additional data.")
    return "\n".join(lines) + "\n"


class TelemetryDispatcher(Generic[T]):
    """
    Dual-sink telemetry dispatcher for one payload type.

    Every call writes to both sinks. Sink failures are reported through this
    module's logger and never reach the caller; malformed calls (missing
    message or exception, unserializable payload) raise before anything is
    emitted.

    Example:
        >>> telemetry = TelemetryDispatcher[Rule](LoggerLogSink(log), InMemoryTraceSink())
        >>> telemetry.log_warning("disk low", context_data={"freeMB": 120})
    """

    def __init__(self, log_sink: LogSink, trace_sink: TraceSink):
        if log_sink is None:
            raise ValueError("log_sink cannot be null")
        if trace_sink is None:
            raise ValueError("trace_sink cannot be null")
        self.log_sink = log_sink
        self.trace_sink = trace_sink

    def log_exception(
        self,
        exception: BaseException,
        payload: Optional[T] = None,
        context_data: ContextData = None,
        message: Optional[str] = "",
    ) -> LogEvent[T]:
        """
        Record a caught exception.

        Args:
            exception: The exception to record
            payload: Optional payload, serialized into ``InputPayload``
            context_data: Optional extra properties
            message: Caller's description of what failed

        Returns:
            The emitted event
        """
        event = build_exception_event(exception, payload, context_data, message)
        self._emit(
            lambda: self.log_sink.log_error(exception, format_exception_log(event)),
            lambda: self.trace_sink.track_exception(exception, dict(event.properties)),
        )
        return event

    def log_warning(
        self,
        message: str,
        payload: Optional[T] = None,
        context_data: ContextData = None,
    ) -> LogEvent[T]:
        """Record a warning; traced under the label ``Warning``."""
        event = build_warning_event(message, payload, context_data)
        self._emit(
            lambda: self.log_sink.log_warning(format_message_log(event)),
            lambda: self.trace_sink.track_trace(event.label, dict(event.properties)),
        )
        return event

    def log_information(
        self,
        message: str,
        payload: Optional[T] = None,
        context_data: ContextData = None,
    ) -> LogEvent[T]:
        """Record an informational event; traced under the label ``Information``."""
        event = build_information_event(message, payload, context_data)
        self._emit(
            lambda: self.log_sink.log_information(format_message_log(event)),
            lambda: self.trace_sink.track_trace(event.label, dict(event.properties)),
        )
        return event

    def _emit(self, *writes) -> None:
        for write in writes:
            try:
                write()
            except Exception:
                logger.warning("Telemetry sink failed to record an event", exc_info=True)
