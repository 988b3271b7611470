"""
Abstract Storage Service Interface.

Defines the container and blob operations the storage facade needs from a
remote object-storage service, so the Azure SDK adapter and the in-memory
service are interchangeable.

Author: PainterQueue Team
Date: 2026-10-18
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, BinaryIO, Dict, Optional, Tuple

from .models import PublicAccessLevel


class StorageService(ABC):
    """
    Abstract base class for remote blob storage services.

    Implementations raise on transport or service faults; converting those
    faults into sentinels is the facade's job, not the service's.

    Supports:
    - Container existence, creation with an access policy, deletion, listing
    - Blob existence, upload, download, metadata and deletion
    """

    # ------------------------------------------------------------------
    # Container operations
    # ------------------------------------------------------------------

    @abstractmethod
    async def container_exists(self, container_name: str) -> bool:
        """
        Check whether a container exists.

        Args:
            container_name: Container name

        Returns:
            True if the container exists
        """
        pass

    @abstractmethod
    async def create_container_if_not_exists(
        self,
        container_name: str,
        public_access: PublicAccessLevel = PublicAccessLevel.PRIVATE,
    ) -> bool:
        """
        Create a container unless it already exists.

        Concurrent callers may race on the same name; losing the race is not
        an error.

        Args:
            container_name: Container name
            public_access: Access level applied to a newly created container

        Returns:
            True if this call created the container
        """
        pass

    @abstractmethod
    async def delete_container_if_exists(self, container_name: str) -> bool:
        """
        Delete a container and all of its blobs.

        Returns:
            True if a container was deleted, False if it did not exist
        """
        pass

    @abstractmethod
    def list_blob_names(self, container_name: str) -> AsyncIterator[str]:
        """
        Enumerate the names of every blob in a container.

        Args:
            container_name: Container name

        Yields:
            Blob names
        """
        pass

    # ------------------------------------------------------------------
    # Blob operations
    # ------------------------------------------------------------------

    @abstractmethod
    async def blob_exists(self, container_name: str, blob_name: str) -> bool:
        """
        Check whether a blob exists. A missing container means a missing blob.
        """
        pass

    @abstractmethod
    async def upload_blob(
        self,
        container_name: str,
        blob_name: str,
        stream: BinaryIO,
        content_type: str,
    ) -> None:
        """
        Upload (or overwrite) a blob from a readable binary stream.

        The caller owns the stream and closes it.
        """
        pass

    @abstractmethod
    async def download_blob(self, container_name: str, blob_name: str) -> Tuple[BinaryIO, Optional[str]]:
        """
        Download a blob.

        Returns:
            Tuple of (content stream, content type or None)
        """
        pass

    @abstractmethod
    async def get_blob_metadata(self, container_name: str, blob_name: str) -> Dict[str, str]:
        """Return the blob's metadata map."""
        pass

    @abstractmethod
    async def set_blob_metadata(self, container_name: str, blob_name: str, metadata: Dict[str, str]) -> None:
        """Replace the blob's metadata map."""
        pass

    @abstractmethod
    async def delete_blob_if_exists(self, container_name: str, blob_name: str) -> bool:
        """
        Delete a blob.

        Returns:
            True if a blob was deleted, False if it did not exist
        """
        pass

    async def close(self) -> None:
        """Release network resources held by the service."""
        pass

    async def __aenter__(self) -> "StorageService":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
