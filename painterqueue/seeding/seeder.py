"""
Rule Seeder

Loads the rule seed file from blob storage into an empty rule store at
startup.

Author: PainterQueue Team
Date: 2026-10-18
"""

import logging
from typing import Iterable, List, Protocol

from ..core.config_manager import StorageSettings
from ..core.exceptions import SeedError
from ..storage.facade import BlobStorageClient
from ..telemetry.dispatcher import TelemetryDispatcher
from .parser import parse_json_list
from .rules import Rule

logger = logging.getLogger(__name__)


class RuleStore(Protocol):
    """Persistence the seeder writes into."""

    async def count(self) -> int: ...

    async def add_all(self, rules: Iterable[Rule]) -> None: ...


class InMemoryRuleStore:
    """Rule store kept in a list."""

    def __init__(self):
        self.rules: List[Rule] = []

    async def count(self) -> int:
        return len(self.rules)

    async def add_all(self, rules: Iterable[Rule]) -> None:
        self.rules.extend(rules)


class RuleSeeder:
    """Seeds rules from ``settings.seed_container_name``/``settings.rule_blob_name``."""

    def __init__(
        self,
        storage: BlobStorageClient,
        settings: StorageSettings,
        telemetry: TelemetryDispatcher[Rule],
    ):
        self.storage = storage
        self.settings = settings
        self.telemetry = telemetry

    async def seed(self, store: RuleStore) -> int:
        """
        Add the seed rules unless the store already holds rules.

        Returns:
            Number of rules added

        Raises:
            SeedError: If the seed blob is missing, empty or unparseable
        """
        if await store.count() > 0:
            logger.info("Rule store already populated; skipping seed")
            return 0

        try:
            rules = await self._load_rules()
            await store.add_all(rules)
        except Exception as e:
            self.telemetry.log_exception(
                e,
                context_data={
                    "ContainerName": self.settings.seed_container_name,
                    "BlobName": self.settings.rule_blob_name,
                },
                message="Error adding rules to the database.",
            )
            raise SeedError("Failed to add rules to the database.") from e

        self.telemetry.log_information(
            "Seeded rules from storage.",
            context_data={"Count": len(rules), "BlobName": self.settings.rule_blob_name},
        )
        return len(rules)

    async def _load_rules(self) -> List[Rule]:
        download = await self.storage.get_blob(self.settings.seed_container_name, self.settings.rule_blob_name)
        if download is None:
            raise SeedError("Failed to retrieve rules file from storage.")

        with download.content as stream:
            rules = parse_json_list(stream, Rule)

        if not rules:
            raise SeedError("Failed to parse rules from the file.")
        return rules
