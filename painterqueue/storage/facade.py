"""
Blob Storage Client

Facade over a remote storage service for retrieving, creating and deleting
blobs and containers.

Every operation catches service faults at this boundary, logs them with
the operation and identifiers, and returns a sentinel instead of raising:

=====================  ==============  ===============================
Operation              Success         Sentinel
=====================  ==============  ===============================
get_blob               BlobDownload    None (absent or fault)
create_blob            True            False
delete_blob            True            False (absent or fault)
delete_container       True            False (fault only)
list_blob_metadata     list            None (fault only)
=====================  ==============  ===============================

Blank identifiers are a caller defect and raise ValueError before any I/O.

Author: PainterQueue Team
Date: 2026-10-18
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .models import (
    DEFAULT_CONTENT_TYPE,
    BlobDetails,
    BlobDownload,
    BlobMetadataKeys,
    BlobRecord,
    BlobUpload,
    PublicAccessLevel,
    get_metadata_value,
)
from .service import StorageService

logger = logging.getLogger(__name__)


def _require(value: Optional[str], name: str) -> None:
    if value is None or not str(value).strip():
        raise ValueError(f"{name} cannot be null or empty")


class BlobStorageClient:
    """
    Storage facade holding nothing but its service handle.

    Safe to share between concurrent callers; ordering between calls on the
    same blob is whatever the storage service provides.
    """

    def __init__(self, service: StorageService):
        if service is None:
            raise ValueError("service cannot be null")
        self._service = service

    @property
    def service(self) -> StorageService:
        return self._service

    async def get_blob(self, container_name: str, blob_name: str) -> Optional[BlobDownload]:
        """
        Retrieve a blob's content, content type and display name.

        The display name is the blob's ``filename`` metadata entry, or the
        blob name when that entry is missing.

        Args:
            container_name: Container holding the blob
            blob_name: Blob to retrieve

        Returns:
            BlobDownload, or None if the blob does not exist or retrieval failed
        """
        _require(container_name, "container_name")
        _require(blob_name, "blob_name")

        try:
            if not await self._service.blob_exists(container_name, blob_name):
                return None

            content, content_type = await self._service.download_blob(container_name, blob_name)
            metadata = await self._service.get_blob_metadata(container_name, blob_name)
            file_name = get_metadata_value(metadata, BlobMetadataKeys.FILENAME)

            return BlobDownload(
                content=content,
                content_type=content_type or DEFAULT_CONTENT_TYPE,
                file_name=file_name if file_name is not None else blob_name,
            )
        except Exception:
            logger.error(f"Error getting blob {blob_name} in container {container_name}", exc_info=True)
            return None

    async def create_blob(
        self,
        container_name: str,
        blob_name: str,
        upload: BlobUpload,
        details: BlobDetails,
    ) -> bool:
        """
        Upload a blob, creating its container first when needed.

        New containers are always private. The upload stream is opened here
        and closed on every exit path. Metadata stamped on the blob:
        ``filename`` from ``details``, ``isSuccess`` = ``"true"`` and
        ``insertedOn`` = upload time.

        Args:
            container_name: Target container
            blob_name: Target blob name
            upload: Content and content type
            details: Descriptive metadata

        Returns:
            True if the blob was uploaded and stamped, otherwise False
        """
        _require(container_name, "container_name")
        _require(blob_name, "blob_name")
        if upload is None:
            raise ValueError("upload cannot be null")
        if details is None:
            raise ValueError("details cannot be null")

        try:
            await self._ensure_container(container_name)

            with upload.open() as stream:
                await self._service.upload_blob(container_name, blob_name, stream, upload.content_type)

            await self._service.set_blob_metadata(container_name, blob_name, {
                BlobMetadataKeys.FILENAME: details.file_name,
                BlobMetadataKeys.IS_SUCCESS: "true",
                BlobMetadataKeys.INSERTED_ON: datetime.now(timezone.utc).isoformat(),
            })
            return True
        except Exception:
            logger.error(f"Error creating blob {blob_name} in container {container_name}", exc_info=True)
            return False

    async def delete_blob(self, container_name: str, blob_name: str) -> bool:
        """
        Delete an existing blob.

        A blob that does not exist is not an error, but it is not a success
        either: the result is False.

        Returns:
            True only if an existing blob was removed
        """
        _require(container_name, "container_name")
        _require(blob_name, "blob_name")

        try:
            if not await self._service.blob_exists(container_name, blob_name):
                return False

            await self._service.delete_blob_if_exists(container_name, blob_name)
            return True
        except Exception:
            logger.error(f"Error deleting blob {blob_name} in container {container_name}", exc_info=True)
            return False

    async def delete_container(self, container_name: str) -> bool:
        """
        Delete a container and everything in it.

        Unlike delete_blob, a container that is already gone counts as
        deleted.

        Returns:
            True if the container no longer exists, False on a service fault
        """
        _require(container_name, "container_name")

        try:
            if not await self._service.container_exists(container_name):
                return True

            await self._service.delete_container_if_exists(container_name)
            return True
        except Exception:
            logger.error(f"Error deleting container {container_name}", exc_info=True)
            return False

    async def list_blob_metadata(self, container_name: str) -> Optional[List[BlobRecord]]:
        """
        Describe every blob in a container from its metadata.

        Returns:
            One BlobRecord per blob; an empty list if the container does not
            exist; None if enumeration failed
        """
        _require(container_name, "container_name")

        try:
            records: List[BlobRecord] = []

            if not await self._service.container_exists(container_name):
                return records

            async for blob_name in self._service.list_blob_names(container_name):
                metadata = await self._service.get_blob_metadata(container_name, blob_name)
                records.append(BlobRecord.from_metadata(container_name, blob_name, metadata))

            return records
        except Exception:
            logger.error(f"Error getting blob metadata in container {container_name}", exc_info=True)
            return None

    async def _ensure_container(self, container_name: str) -> None:
        # Check-then-create is not atomic; two first uploads may both try to
        # create, and the service tolerates the loser.
        if not await self._service.container_exists(container_name):
            await self._service.create_container_if_not_exists(container_name, PublicAccessLevel.PRIVATE)
