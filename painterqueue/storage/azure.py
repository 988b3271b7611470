"""
Azure Blob Storage Service

Storage service adapter over the asynchronous Azure Storage Blob SDK.

Author: PainterQueue Team
Date: 2026-10-18
"""

import io
import logging
from typing import AsyncIterator, BinaryIO, Dict, Optional, Tuple

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import BlobClient, BlobServiceClient, ContainerClient

from ..core.exceptions import ConfigurationError
from .models import PublicAccessLevel
from .service import StorageService

logger = logging.getLogger(__name__)


class AzureBlobStorageService(StorageService):
    """
    Azure Blob Storage accessed through one shared async service client.

    SDK exceptions (``azure.core.exceptions.AzureError`` and transport
    errors) propagate to the caller.
    """

    def __init__(self, connection_string: str, client: Optional[BlobServiceClient] = None):
        if not connection_string or not connection_string.strip():
            raise ConfigurationError("storage.connection_string", "Connection string cannot be null or empty")
        self._client = client or BlobServiceClient.from_connection_string(connection_string)

    def _container(self, container_name: str) -> ContainerClient:
        return self._client.get_container_client(container_name)

    def _blob(self, container_name: str, blob_name: str) -> BlobClient:
        return self._client.get_blob_client(container=container_name, blob=blob_name)

    async def container_exists(self, container_name: str) -> bool:
        return await self._container(container_name).exists()

    async def create_container_if_not_exists(
        self,
        container_name: str,
        public_access: PublicAccessLevel = PublicAccessLevel.PRIVATE,
    ) -> bool:
        container = self._container(container_name)
        try:
            await container.create_container()
        except ResourceExistsError:
            logger.debug(f"Container {container_name} already exists")
            return False

        # A private container carries no public access level at all
        access = None if public_access == PublicAccessLevel.PRIVATE else public_access.value
        await container.set_container_access_policy(signed_identifiers={}, public_access=access)
        logger.info(f"Created container {container_name} with {public_access.value} access")
        return True

    async def delete_container_if_exists(self, container_name: str) -> bool:
        try:
            await self._container(container_name).delete_container()
        except ResourceNotFoundError:
            return False
        return True

    async def list_blob_names(self, container_name: str) -> AsyncIterator[str]:
        async for item in self._container(container_name).list_blobs():
            yield item.name

    async def blob_exists(self, container_name: str, blob_name: str) -> bool:
        return await self._blob(container_name, blob_name).exists()

    async def upload_blob(
        self,
        container_name: str,
        blob_name: str,
        stream: BinaryIO,
        content_type: str,
    ) -> None:
        await self._blob(container_name, blob_name).upload_blob(
            stream,
            overwrite=True,
            content_settings=ContentSettings(content_type=content_type),
        )

    async def download_blob(self, container_name: str, blob_name: str) -> Tuple[BinaryIO, Optional[str]]:
        downloader = await self._blob(container_name, blob_name).download_blob()
        content = await downloader.readall()
        content_type = downloader.properties.content_settings.content_type
        return io.BytesIO(content), content_type

    async def get_blob_metadata(self, container_name: str, blob_name: str) -> Dict[str, str]:
        properties = await self._blob(container_name, blob_name).get_blob_properties()
        return dict(properties.metadata or {})

    async def set_blob_metadata(self, container_name: str, blob_name: str, metadata: Dict[str, str]) -> None:
        await self._blob(container_name, blob_name).set_blob_metadata(metadata)

    async def delete_blob_if_exists(self, container_name: str, blob_name: str) -> bool:
        try:
            await self._blob(container_name, blob_name).delete_blob()
        except ResourceNotFoundError:
            return False
        return True

    async def close(self) -> None:
        await self._client.close()
