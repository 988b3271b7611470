"""
In-Memory Storage Service

Process-local implementation of the storage service contract, used for
local runs and as the service behind the facade in tests.

Author: PainterQueue Team
Date: 2026-10-18
"""

import asyncio
import hashlib
import io
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, BinaryIO, Dict, List, Optional, Tuple

from ..core.exceptions import StorageServiceError
from .models import ContainerNameValidator, PublicAccessLevel
from .service import StorageService


@dataclass
class StoredBlob:
    """A blob held by the in-memory service."""

    name: str
    content: bytes
    content_type: Optional[str]
    etag: str
    last_modified: datetime
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class StoredContainer:
    """A container held by the in-memory service."""

    name: str
    public_access: PublicAccessLevel
    etag: str
    last_modified: datetime
    blobs: Dict[str, StoredBlob] = field(default_factory=dict)


class InMemoryStorageService(StorageService):
    """
    In-memory storage for containers and blobs.

    Safe for concurrent coroutines using a single asyncio lock.
    """

    def __init__(self):
        """Initialize an empty service."""
        self._containers: Dict[str, StoredContainer] = {}
        self._lock = asyncio.Lock()

    def _generate_etag(self) -> str:
        """Generate a unique ETag."""
        return hashlib.md5(uuid.uuid4().bytes).hexdigest()

    def _require_container(self, container_name: str) -> StoredContainer:
        container = self._containers.get(container_name)
        if container is None:
            raise StorageServiceError(f"Container '{container_name}' not found")
        return container

    def _require_blob(self, container_name: str, blob_name: str) -> StoredBlob:
        blob = self._require_container(container_name).blobs.get(blob_name)
        if blob is None:
            raise StorageServiceError(f"Blob '{blob_name}' not found in container '{container_name}'")
        return blob

    # ============================================================================
    # Container Operations
    # ============================================================================

    async def container_exists(self, container_name: str) -> bool:
        async with self._lock:
            return container_name in self._containers

    async def create_container_if_not_exists(
        self,
        container_name: str,
        public_access: PublicAccessLevel = PublicAccessLevel.PRIVATE,
    ) -> bool:
        """
        Create a container.

        Raises:
            StorageServiceError: If the name breaks the container naming rules
        """
        is_valid, error = ContainerNameValidator.validate(container_name)
        if not is_valid:
            raise StorageServiceError(error)

        async with self._lock:
            if container_name in self._containers:
                return False

            self._containers[container_name] = StoredContainer(
                name=container_name,
                public_access=public_access,
                etag=self._generate_etag(),
                last_modified=datetime.now(timezone.utc),
            )
            return True

    async def delete_container_if_exists(self, container_name: str) -> bool:
        async with self._lock:
            return self._containers.pop(container_name, None) is not None

    async def list_blob_names(self, container_name: str) -> AsyncIterator[str]:
        async with self._lock:
            names = sorted(self._require_container(container_name).blobs)

        for name in names:
            yield name

    async def get_public_access(self, container_name: str) -> PublicAccessLevel:
        """Return the access level a container was created with."""
        async with self._lock:
            return self._require_container(container_name).public_access

    async def list_containers(self) -> List[str]:
        """List container names in sorted order."""
        async with self._lock:
            return sorted(self._containers)

    # ============================================================================
    # Blob Operations
    # ============================================================================

    async def blob_exists(self, container_name: str, blob_name: str) -> bool:
        async with self._lock:
            container = self._containers.get(container_name)
            return container is not None and blob_name in container.blobs

    async def upload_blob(
        self,
        container_name: str,
        blob_name: str,
        stream: BinaryIO,
        content_type: str,
    ) -> None:
        content = stream.read()

        async with self._lock:
            container = self._require_container(container_name)
            # Overwriting a blob clears its metadata, as a block blob upload does
            container.blobs[blob_name] = StoredBlob(
                name=blob_name,
                content=content,
                content_type=content_type,
                etag=self._generate_etag(),
                last_modified=datetime.now(timezone.utc),
            )

    async def download_blob(self, container_name: str, blob_name: str) -> Tuple[BinaryIO, Optional[str]]:
        async with self._lock:
            blob = self._require_blob(container_name, blob_name)
            return io.BytesIO(blob.content), blob.content_type

    async def get_blob_metadata(self, container_name: str, blob_name: str) -> Dict[str, str]:
        async with self._lock:
            return dict(self._require_blob(container_name, blob_name).metadata)

    async def set_blob_metadata(self, container_name: str, blob_name: str, metadata: Dict[str, str]) -> None:
        async with self._lock:
            blob = self._require_blob(container_name, blob_name)
            blob.metadata = {key: str(value) for key, value in metadata.items()}
            blob.etag = self._generate_etag()
            blob.last_modified = datetime.now(timezone.utc)

    async def delete_blob_if_exists(self, container_name: str, blob_name: str) -> bool:
        async with self._lock:
            container = self._containers.get(container_name)
            if container is None:
                return False
            return container.blobs.pop(blob_name, None) is not None

    async def reset(self) -> None:
        """Remove every container and blob."""
        async with self._lock:
            self._containers.clear()
