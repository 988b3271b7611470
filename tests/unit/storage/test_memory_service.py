"""
Unit tests for the in-memory storage service.

Author: PainterQueue Team
Date: 2026-10-18
"""

import io

import pytest

from painterqueue.core.exceptions import StorageServiceError
from painterqueue.storage.memory import InMemoryStorageService
from painterqueue.storage.models import PublicAccessLevel


@pytest.fixture
def service():
    """Create a fresh service for each test."""
    return InMemoryStorageService()


@pytest.fixture
async def service_with_container(service):
    await service.create_container_if_not_exists("test-container")
    return service


class TestContainerOperations:
    """Test container lifecycle."""

    @pytest.mark.asyncio
    async def test_create_container(self, service):
        assert await service.create_container_if_not_exists("test-container") is True
        assert await service.container_exists("test-container")
        assert await service.get_public_access("test-container") == PublicAccessLevel.PRIVATE

    @pytest.mark.asyncio
    async def test_create_existing_container(self, service_with_container):
        """Test creating twice reports the container already existed."""
        assert await service_with_container.create_container_if_not_exists("test-container") is False

    @pytest.mark.asyncio
    async def test_create_invalid_name(self, service):
        with pytest.raises(StorageServiceError):
            await service.create_container_if_not_exists("Invalid_Name")

    @pytest.mark.asyncio
    async def test_delete_container(self, service_with_container):
        await service_with_container.upload_blob("test-container", "a", io.BytesIO(b"a"), "text/plain")

        assert await service_with_container.delete_container_if_exists("test-container") is True
        assert not await service_with_container.container_exists("test-container")
        assert not await service_with_container.blob_exists("test-container", "a")

    @pytest.mark.asyncio
    async def test_delete_missing_container(self, service):
        assert await service.delete_container_if_exists("missing") is False

    @pytest.mark.asyncio
    async def test_list_containers(self, service):
        await service.create_container_if_not_exists("bbb")
        await service.create_container_if_not_exists("aaa")
        assert await service.list_containers() == ["aaa", "bbb"]

    @pytest.mark.asyncio
    async def test_reset(self, service_with_container):
        await service_with_container.reset()
        assert await service_with_container.list_containers() == []


class TestBlobOperations:
    """Test blob operations."""

    @pytest.mark.asyncio
    async def test_upload_and_download(self, service_with_container):
        await service_with_container.upload_blob("test-container", "a.txt", io.BytesIO(b"hello"), "text/plain")

        stream, content_type = await service_with_container.download_blob("test-container", "a.txt")
        assert stream.read() == b"hello"
        assert content_type == "text/plain"

    @pytest.mark.asyncio
    async def test_upload_missing_container(self, service):
        with pytest.raises(StorageServiceError):
            await service.upload_blob("missing", "a.txt", io.BytesIO(b"x"), "text/plain")

    @pytest.mark.asyncio
    async def test_download_missing_blob(self, service_with_container):
        with pytest.raises(StorageServiceError):
            await service_with_container.download_blob("test-container", "missing")

    @pytest.mark.asyncio
    async def test_blob_exists(self, service_with_container):
        assert not await service_with_container.blob_exists("test-container", "a")
        assert not await service_with_container.blob_exists("missing", "a")

        await service_with_container.upload_blob("test-container", "a", io.BytesIO(b""), None)
        assert await service_with_container.blob_exists("test-container", "a")

    @pytest.mark.asyncio
    async def test_metadata(self, service_with_container):
        await service_with_container.upload_blob("test-container", "a", io.BytesIO(b""), None)
        await service_with_container.set_blob_metadata("test-container", "a", {"filename": "A", "count": 3})

        assert await service_with_container.get_blob_metadata("test-container", "a") == {"filename": "A", "count": "3"}

    @pytest.mark.asyncio
    async def test_overwrite_clears_metadata(self, service_with_container):
        """Test re-uploading a blob drops its old metadata."""
        await service_with_container.upload_blob("test-container", "a", io.BytesIO(b"1"), None)
        await service_with_container.set_blob_metadata("test-container", "a", {"filename": "A"})
        await service_with_container.upload_blob("test-container", "a", io.BytesIO(b"2"), None)

        assert await service_with_container.get_blob_metadata("test-container", "a") == {}

    @pytest.mark.asyncio
    async def test_metadata_missing_blob(self, service_with_container):
        with pytest.raises(StorageServiceError):
            await service_with_container.set_blob_metadata("test-container", "missing", {})

    @pytest.mark.asyncio
    async def test_list_blob_names(self, service_with_container):
        for name in ["c", "a", "b"]:
            await service_with_container.upload_blob("test-container", name, io.BytesIO(b""), None)

        names = [name async for name in service_with_container.list_blob_names("test-container")]
        assert names == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_list_blob_names_missing_container(self, service):
        with pytest.raises(StorageServiceError):
            async for _ in service.list_blob_names("missing"):
                pass

    @pytest.mark.asyncio
    async def test_delete_blob(self, service_with_container):
        await service_with_container.upload_blob("test-container", "a", io.BytesIO(b""), None)

        assert await service_with_container.delete_blob_if_exists("test-container", "a") is True
        assert await service_with_container.delete_blob_if_exists("test-container", "a") is False
        assert await service_with_container.delete_blob_if_exists("missing", "a") is False

    @pytest.mark.asyncio
    async def test_async_context_manager(self):
        async with InMemoryStorageService() as service:
            assert await service.list_containers() == []
