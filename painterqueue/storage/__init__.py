"""
PainterQueue Blob Storage

Sentinel-returning facade over a remote blob storage service, with an
Azure SDK adapter and an in-memory service.
"""

from .facade import BlobStorageClient
from .memory import InMemoryStorageService
from .models import (
    BlobDetails,
    BlobDownload,
    BlobMetadataKeys,
    BlobRecord,
    BlobUpload,
    PublicAccessLevel,
    ZERO_TIMESTAMP,
)
from .service import StorageService

__all__ = [
    "BlobStorageClient",
    "InMemoryStorageService",
    "StorageService",
    "BlobDetails",
    "BlobDownload",
    "BlobMetadataKeys",
    "BlobRecord",
    "BlobUpload",
    "PublicAccessLevel",
    "ZERO_TIMESTAMP",
]
