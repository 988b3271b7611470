"""
Wiring of storage and telemetry collaborators from configuration.
"""

import logging
from typing import Optional

from .core.config_manager import PainterQueueConfig, StorageBackendType, StorageSettings
from .storage.azure import AzureBlobStorageService
from .storage.facade import BlobStorageClient
from .storage.memory import InMemoryStorageService
from .storage.service import StorageService
from .telemetry.dispatcher import TelemetryDispatcher
from .telemetry.sinks import LoggerLogSink, LoggingTraceSink, TraceSink

logger = logging.getLogger(__name__)


def build_storage_service(settings: StorageSettings) -> StorageService:
    """Create the storage service selected by ``settings.backend``."""
    if settings.backend == StorageBackendType.MEMORY.value:
        logger.info("Using in-memory storage service")
        return InMemoryStorageService()
    logger.info("Using Azure Blob Storage service")
    return AzureBlobStorageService(settings.connection_string)


def build_storage_client(config: PainterQueueConfig, service: Optional[StorageService] = None) -> BlobStorageClient:
    return BlobStorageClient(service or build_storage_service(config.storage))


def build_dispatcher(
    config: PainterQueueConfig,
    name: str = "painterqueue",
    trace_sink: Optional[TraceSink] = None,
) -> TelemetryDispatcher:
    """
    Create a dispatcher logging under ``name``.

    Args:
        config: Loaded configuration
        name: Logger name for the line log
        trace_sink: Structured sink; defaults to the configured trace logger
    """
    return TelemetryDispatcher(
        LoggerLogSink(logging.getLogger(name)),
        trace_sink or LoggingTraceSink(logging.getLogger(config.telemetry.trace_logger)),
    )
