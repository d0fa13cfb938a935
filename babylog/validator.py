"""Structural validation of migrated entry documents.

A bad document never raises out of here. It comes back as a ``Rejection``
carrying the document ID and the field-level cause so the caller can log it
and drop it while the rest of the collection still renders.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from babylog.models import SCHEMA_VERSION, Entry, entry_adapter

logger = logging.getLogger(__name__)


class Rejection(BaseModel):
    """A document that failed validation."""

    doc_id: Optional[str] = Field(default=None, description="ID of the rejected document")
    reason: str = Field(..., description="Field-level description of the failure")

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """Accepted entries and rejected documents from one snapshot."""

    entries: tuple[Entry, ...] = ()
    rejections: tuple[Rejection, ...] = ()

    model_config = {"frozen": True}


def format_errors(error: ValidationError) -> str:
    """Flatten a pydantic error into ``loc: message`` pairs."""
    parts = []
    for item in error.errors():
        loc = ".".join(str(p) for p in item["loc"]) or "document"
        parts.append(f"{loc}: {item['msg']}")
    return "; ".join(parts)


def _doc_id(doc: Any) -> Optional[str]:
    if isinstance(doc, Mapping) and doc.get("id") is not None:
        return str(doc["id"])
    return None


class EntryValidator:
    """Checks documents against the entry union for one schema version."""

    def __init__(self, schema_version: int = SCHEMA_VERSION):
        self.schema_version = schema_version

    def validate(self, doc: Any) -> Union[Entry, Rejection]:
        """Validate one document.

        Args:
            doc: A migrated document.

        Returns:
            The typed entry, or a Rejection describing what was wrong.
        """
        doc_id = _doc_id(doc)

        if not isinstance(doc, Mapping):
            return self._reject(doc_id, f"document: expected a mapping, got {type(doc).__name__}")

        version = doc.get("schemaVersion")
        if version != self.schema_version:
            return self._reject(
                doc_id, f"schemaVersion: expected {self.schema_version}, got {version!r}"
            )

        try:
            return entry_adapter.validate_python(dict(doc))
        except ValidationError as e:
            return self._reject(doc_id, format_errors(e))

    def validate_many(self, docs: Iterable[Any]) -> ValidationResult:
        """Validate a snapshot, splitting it into entries and rejections."""
        entries = []
        rejections = []
        for doc in docs:
            result = self.validate(doc)
            if isinstance(result, Rejection):
                rejections.append(result)
            else:
                entries.append(result)
        return ValidationResult(entries=tuple(entries), rejections=tuple(rejections))

    def _reject(self, doc_id: Optional[str], reason: str) -> Rejection:
        logger.warning("Rejected doc %s: %s", doc_id, reason)
        return Rejection(doc_id=doc_id, reason=reason)


def validate(doc: Any) -> Union[Entry, Rejection]:
    """Validate one document against the current schema version."""
    return EntryValidator().validate(doc)
