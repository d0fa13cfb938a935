"""Persistence for babylog."""

from babylog.db.store import EntryStore

__all__ = ["EntryStore"]
