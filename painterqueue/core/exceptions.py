"""
PainterQueue Exceptions.

Custom exceptions shared by the storage facade, the telemetry dispatcher
and application startup.

Author: PainterQueue Team
Date: 2026-10-18
"""


class PainterQueueError(Exception):
    """Base exception for all PainterQueue errors."""

    pass


class ConfigurationError(PainterQueueError, ValueError):
    """Raised at startup when a required setting is missing or invalid."""

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"{setting}: {message}")


class StorageServiceError(PainterQueueError):
    """Raised by a storage service adapter when the remote service faults."""

    pass


class PayloadSerializationError(PainterQueueError):
    """Raised when a telemetry payload cannot be serialized."""

    pass


class SeedError(PainterQueueError):
    """Raised when the rule seed cannot be loaded from storage."""

    pass
