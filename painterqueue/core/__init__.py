"""Core module initialization."""

from .config_manager import ConfigManager, PainterQueueConfig
from .exceptions import (
    ConfigurationError,
    PainterQueueError,
    PayloadSerializationError,
    SeedError,
    StorageServiceError,
)
from .logging_config import setup_logging

__all__ = [
    "ConfigManager",
    "PainterQueueConfig",
    "ConfigurationError",
    "PainterQueueError",
    "PayloadSerializationError",
    "SeedError",
    "StorageServiceError",
    "setup_logging",
]
