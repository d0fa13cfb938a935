"""Upgrade from schema version 1 to version 2.

Changes in v2:
1. Every entry carries a ``type`` discriminant. Version 1 documents are
   classified by which legacy fields they hold.
2. Diapers store their kind in ``diaperType``; v1 used ``type`` for it.
3. Nursing feeds carry a ``sessionId`` so left and right sides of one
   feeding can be grouped.
"""

import uuid
from typing import Any, Callable, Optional

from babylog.models.diaper import DIAPER_TYPES
from babylog.models.entry import ENTRY_TYPES

TARGET_VERSION = 2

_PUMP_AMOUNT_FIELDS = ("leftAmountOz", "rightAmountOz", "totalAmountOz")

Predicate = Callable[[dict[str, Any]], bool]

# Evaluated in order, first match wins.
TYPE_RULES: tuple[tuple[Predicate, Optional[str]], ...] = (
    (lambda d: d.get("type") in ENTRY_TYPES, None),
    (lambda d: d.get("kind") == "pump", "pump"),
    (lambda d: "kind" in d, "feed"),
    (lambda d: any(f in d for f in _PUMP_AMOUNT_FIELDS), "pump"),
    (lambda d: "category" in d, "sleep"),
    (lambda d: "diaperType" in d or d.get("type") in DIAPER_TYPES, "diaper"),
    (lambda d: "bathType" in d, "bath"),
)


def infer_type(doc: dict[str, Any]) -> Optional[str]:
    """Return the entry type a v1 document describes, or None if unknown.

    A document that already carries a current ``type`` keeps it.
    """
    for predicate, tag in TYPE_RULES:
        if predicate(doc):
            return doc["type"] if tag is None else tag
    return None


def upgrade(doc: dict[str, Any]) -> dict[str, Any]:
    """Upgrade a v1 document to v2. Returns a new dict.

    Documents already at v2 or later come back unchanged (as a copy), so
    applying this twice gives the same result as applying it once.
    """
    version = doc.get("schemaVersion")
    if isinstance(version, int) and version >= TARGET_VERSION:
        return dict(doc)

    upgraded = dict(doc)

    entry_type = infer_type(upgraded)
    if entry_type == "diaper":
        legacy = upgraded.get("type")
        if legacy in DIAPER_TYPES and not upgraded.get("diaperType"):
            upgraded["diaperType"] = legacy
    if entry_type is not None:
        upgraded["type"] = entry_type

    if (
        upgraded.get("type") == "feed"
        and upgraded.get("kind") == "nursing"
        and not upgraded.get("sessionId")
    ):
        # Backfilled sides each get their own session.
        upgraded["sessionId"] = str(uuid.uuid4())

    upgraded["schemaVersion"] = TARGET_VERSION
    return upgraded
