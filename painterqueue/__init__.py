"""
PainterQueue: storage and telemetry facades for the PainterQueue backend.

Wraps a remote blob storage service behind a sentinel-returning facade and
fans telemetry events out to a line log and a structured trace sink.
"""

__version__ = "0.1.0"
__author__ = "PainterQueue Team"

from .storage.facade import BlobStorageClient
from .telemetry.dispatcher import TelemetryDispatcher

__all__ = ["BlobStorageClient", "TelemetryDispatcher", "__version__"]
