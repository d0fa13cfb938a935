"""Version-aware document upgrades."""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

from babylog.models.base import SCHEMA_VERSION

logger = logging.getLogger(__name__)

Upgrade = Callable[[dict[str, Any]], dict[str, Any]]


def read_version(doc: Mapping[str, Any]) -> int:
    """Declared schema version of a raw document. Missing means version 1."""
    version = doc.get("schemaVersion")
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        return 1
    return version


class MigrationEngine:
    """Upgrades raw documents one version at a time until they are current.

    The engine never mutates its input. When no upgrade exists for the next
    version the document is returned at the highest version reached; the
    validator rejects it downstream.
    """

    def __init__(
        self,
        migrations: Mapping[int, Upgrade],
        current_version: int = SCHEMA_VERSION,
    ):
        """Initialize the engine.

        Args:
            migrations: Mapping of target version to the function that
                upgrades a document from the previous version to it.
            current_version: Version every document should end up at.
        """
        self._migrations = MappingProxyType(dict(migrations))
        self.current_version = current_version

    @property
    def migrations(self) -> Mapping[int, Upgrade]:
        """Read-only view of the upgrade table."""
        return self._migrations

    def migrate(self, doc: Mapping[str, Any]) -> dict[str, Any]:
        """Bring a raw document up to the current schema version.

        Args:
            doc: Raw document as read from the store.

        Returns:
            A new dict at the current version, or at the highest version
            reachable if the upgrade chain has a gap.
        """
        migrated = dict(doc)
        version = read_version(migrated)

        while version < self.current_version:
            next_version = version + 1
            upgrade_fn = self._migrations.get(next_version)
            if upgrade_fn is None:
                logger.warning(
                    "No migration to v%d for doc %s; stopping at v%d",
                    next_version, doc.get("id"), version,
                )
                break

            migrated = upgrade_fn(migrated)
            reached = read_version(migrated)
            if reached <= version:
                logger.warning(
                    "Migration to v%d did not advance doc %s; stopping at v%d",
                    next_version, doc.get("id"), version,
                )
                break

            logger.debug("Upgraded doc %s from v%d to v%d", doc.get("id"), version, reached)
            version = reached

        return migrated

    def migrate_all(self, docs: list[Any]) -> list[Any]:
        """Migrate every document in a snapshot.

        Items that are not mappings are returned untouched so the validator
        can reject them.
        """
        return [self.migrate(doc) if isinstance(doc, Mapping) else doc for doc in docs]
