"""Domain records and ORM models."""

from lotto_picks.models.document import StoredDocument
from lotto_picks.models.entry import Entry, EntryMeta, Pick

__all__ = ["Entry", "EntryMeta", "Pick", "StoredDocument"]
