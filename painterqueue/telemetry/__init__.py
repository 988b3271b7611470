"""
PainterQueue Telemetry

Dual-sink dispatcher writing every event to a line log and a structured
trace sink.
"""

from .dispatcher import TelemetryDispatcher
from .models import EventKind, LogEvent
from .reporting import ProblemDetails, ResponseReporter
from .sinks import InMemoryTraceSink, LoggerLogSink, LoggingTraceSink, LogSink, TraceSink

__all__ = [
    "TelemetryDispatcher",
    "EventKind",
    "LogEvent",
    "ProblemDetails",
    "ResponseReporter",
    "InMemoryTraceSink",
    "LoggerLogSink",
    "LoggingTraceSink",
    "LogSink",
    "TraceSink",
]
