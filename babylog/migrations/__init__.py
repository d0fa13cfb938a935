"""Schema migrations for stored entry documents.

Stored documents are upgraded lazily on read. ``MIGRATIONS`` maps the
version a function upgrades *to* onto that function.
"""

from types import MappingProxyType
from typing import Any, Mapping

from babylog.migrations import v2
from babylog.migrations.engine import MigrationEngine, read_version
from babylog.models.base import SCHEMA_VERSION

MIGRATIONS = MappingProxyType({
    2: v2.upgrade,
})


def default_engine() -> MigrationEngine:
    """Engine wired with the shipped upgrade chain."""
    return MigrationEngine(MIGRATIONS, SCHEMA_VERSION)


def migrate(doc: Mapping[str, Any]) -> dict[str, Any]:
    """Upgrade one document with the shipped chain."""
    return default_engine().migrate(doc)


__all__ = [
    "MIGRATIONS",
    "MigrationEngine",
    "default_engine",
    "migrate",
    "read_version",
]
