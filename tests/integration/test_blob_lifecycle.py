"""
Integration tests for the storage facade, telemetry and rule seeding
working together on the in-memory storage service.

Author: PainterQueue Team
Date: 2026-10-18
"""

import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from painterqueue.bootstrap import build_dispatcher, build_storage_client
from painterqueue.core.config_manager import ConfigManager
from painterqueue.core.exceptions import SeedError
from painterqueue.seeding.seeder import InMemoryRuleStore, RuleSeeder
from painterqueue.storage.memory import InMemoryStorageService
from painterqueue.storage.models import BlobDetails, BlobUpload, PublicAccessLevel
from painterqueue.telemetry.sinks import InMemoryTraceSink

RULES = [
    {
        "id": "6f1c1a52-9b2f-4a8e-8d3c-0a7b5d1e2f30",
        "name": "No varnish",
        "internalDescription": "Framer varnishes.",
        "description": "Delivered unvarnished.",
        "page": 1,
    },
    {
        "id": "0d5e3b7a-2c4f-4e1a-9b8d-7f6a5c4b3e21",
        "name": "Signed",
        "internalDescription": "Signature bottom right.",
        "description": "Every painting is signed.",
        "page": 2,
    },
]


@pytest.fixture
def config(monkeypatch):
    for name in ["PAINTERQUEUE_STORAGE_CONNECTION_STRING", "PAINTERQUEUE_TELEMETRY_CONNECTION_STRING"]:
        monkeypatch.delenv(name, raising=False)
    return ConfigManager().load(cli_overrides={
        "storage": {"backend": "memory", "seed_container_name": "seed", "rule_blob_name": "rules.json"},
    })


@pytest.fixture
def service():
    return InMemoryStorageService()


@pytest.fixture
def storage(config, service):
    return build_storage_client(config, service)


@pytest.fixture
def trace_sink():
    return InMemoryTraceSink()


class TestBlobLifecycle:
    """Test a blob through upload, listing, download and deletion."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, storage, service):
        before = datetime.now(timezone.utc)

        created = await storage.create_blob(
            "paintings",
            "p-001",
            BlobUpload.from_bytes(b"\x89PNG...", "image/png"),
            BlobDetails(file_name="sunflowers.png"),
        )
        assert created is True
        assert await service.get_public_access("paintings") == PublicAccessLevel.PRIVATE

        records = await storage.list_blob_metadata("paintings")
        assert len(records) == 1
        record = records[0]
        assert record.container_name == "paintings"
        assert record.blob_name == "p-001"
        assert record.file_name == "sunflowers.png"
        assert record.is_success is True
        assert before - timedelta(seconds=1) <= record.inserted_on <= datetime.now(timezone.utc)

        download = await storage.get_blob("paintings", "p-001")
        assert download.read() == b"\x89PNG..."
        assert download.content_type == "image/png"
        assert download.file_name == "sunflowers.png"

        assert await storage.delete_blob("paintings", "p-001") is True
        assert await storage.get_blob("paintings", "p-001") is None
        assert await storage.list_blob_metadata("paintings") == []

        assert await storage.delete_container("paintings") is True
        assert await storage.delete_container("paintings") is True
        assert not await service.container_exists("paintings")

    @pytest.mark.asyncio
    async def test_listing_every_uploaded_blob(self, storage):
        """Test each uploaded blob appears once in the listing."""
        names = [f"blob-{i}" for i in range(5)]
        for name in names:
            assert await storage.create_blob("batch", name, BlobUpload.from_bytes(name.encode()), BlobDetails(file_name=f"{name}.bin"))

        records = await storage.list_blob_metadata("batch")

        assert sorted(record.blob_name for record in records) == names
        assert {record.blob_name: record.file_name for record in records} == {name: f"{name}.bin" for name in names}

    @pytest.mark.asyncio
    async def test_external_metadata_is_read(self, storage, service):
        """Test blobs written by another producer are described from their metadata."""
        await storage.create_blob("batch", "done", BlobUpload.from_bytes(b"x"), BlobDetails(file_name="done.bin"))
        await service.set_blob_metadata("batch", "done", {
            "filename": "done.bin",
            "isSuccess": "false",
            "insertedOn": "2026-02-03T04:05:06+00:00",
        })

        record = (await storage.list_blob_metadata("batch"))[0]

        assert record.is_success is False
        assert record.inserted_on == datetime(2026, 2, 3, 4, 5, 6, tzinfo=timezone.utc)


class TestSeedFromStorage:
    """Test seeding rules from the configured seed blob."""

    @pytest.mark.asyncio
    async def test_seed(self, config, storage, trace_sink):
        await storage.create_blob(
            "seed",
            "rules.json",
            BlobUpload.from_bytes(json.dumps(RULES).encode("utf-8"), "application/json"),
            BlobDetails(file_name="rules.json"),
        )
        seeder = RuleSeeder(storage, config.storage, build_dispatcher(config, "painterqueue.test.seed", trace_sink))
        store = InMemoryRuleStore()

        assert await seeder.seed(store) == 2
        assert [rule.page for rule in store.rules] == [1, 2]
        assert trace_sink.find("Information")[0].properties["Count"] == "2"

        assert await seeder.seed(store) == 0
        assert len(store.rules) == 2

    @pytest.mark.asyncio
    async def test_empty_seed_file_is_reported(self, config, storage, trace_sink, caplog):
        """Test an empty seed file fails seeding with one exception event."""
        await storage.create_blob("seed", "rules.json", BlobUpload.from_bytes(b"[]"), BlobDetails(file_name="rules.json"))
        seeder = RuleSeeder(storage, config.storage, build_dispatcher(config, "painterqueue.test.seed", trace_sink))

        with caplog.at_level(logging.ERROR):
            with pytest.raises(SeedError, match="Failed to add rules to the database."):
                await seeder.seed(InMemoryRuleStore())

        assert len(trace_sink.find("Exception")) == 1
        assert any("Error adding rules" in record.getMessage() for record in caplog.records)
