"""
Payload serialization for telemetry properties.
"""

from typing import Any

from pydantic_core import PydanticSerializationError, to_json

from ..core.exceptions import PayloadSerializationError


def serialize_payload(payload: Any) -> str:
    """
    Serialize a payload to a JSON string.

    Handles pydantic models, dataclasses, mappings, sequences, datetimes,
    UUIDs and other values pydantic knows how to dump.

    Raises:
        PayloadSerializationError: If the payload cannot be serialized
    """
    try:
        return to_json(payload).decode("utf-8")
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise PayloadSerializationError(
            f"Cannot serialize payload of type {type(payload).__name__}: {e}"
        ) from e


def stringify_value(value: Any) -> str:
    """Render a context value as a property string; None becomes ""."""
    if value is None:
        return ""
    return str(value)
