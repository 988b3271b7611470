"""
Telemetry event models.

Defines the event kinds, the reserved property names each kind writes and
the in-flight LogEvent value handed to the sinks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar

T = TypeVar("T")

# Reserved property names
TYPE_KEY = "Type"
MESSAGE_KEY = "Message"
CUSTOM_MESSAGE_KEY = "Custom Message"
STACK_TRACE_KEY = "StackTrace"
WARNING_MESSAGE_KEY = "WarningMessage"
PAYLOAD_KEY = "InputPayload"

NO_CUSTOM_MESSAGE = "No custom message."
NO_STACK_TRACE = "No stack trace."


class EventKind(str, Enum):
    """Telemetry event kinds and the trace label each is emitted under."""

    EXCEPTION = "Exception"
    WARNING = "Warning"
    INFORMATION = "Information"


@dataclass(frozen=True)
class LogEvent(Generic[T]):
    """One telemetry emission.

    ``properties`` is the canonical string map sent to the trace sink:
    the kind's reserved keys first, then the serialized payload, then every
    context entry. A context key equal to a reserved key overwrites it.
    """

    kind: EventKind
    message: str
    payload: Optional[T] = None
    context_data: Mapping[str, Any] = field(default_factory=dict)
    properties: Dict[str, str] = field(default_factory=dict)
    exception: Optional[BaseException] = None

    @property
    def label(self) -> str:
        return self.kind.value
