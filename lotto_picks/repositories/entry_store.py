"""Entry persistence over a single serialized document.

Every mutation is a full load -> modify in memory -> full save of one
document. Nothing is cached between calls, and there is no lock or version
check: two overlapping mutations race and the later ``save_all`` silently
overwrites the earlier one (last write wins). Callers that need
exactly-once durability must put a transactional ``EntryStore`` behind the
same interface.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Callable, Sequence

from lotto_picks.config import Settings
from lotto_picks.models.entry import Entry
from lotto_picks.storage.blob import BlobStore
from lotto_picks.storage.codec import CONTENT_TYPE, decode_entries, encode_entries
from lotto_picks.utils.timestamps import parse_iso

logger = logging.getLogger(__name__)

EntryMutator = Callable[[Entry], Entry]


def sort_newest_first(entries: Sequence[Entry]) -> list[Entry]:
    """Sort by ``pickedAt`` descending.

    Entries whose timestamp does not parse keep their input positions; the
    parseable ones are stably sorted into the remaining slots, so equal
    timestamps keep their input order.
    """

    out = list(entries)
    slots = [i for i, e in enumerate(out) if parse_iso(e.picked_at) is not None]
    ordered = sorted((out[i] for i in slots), key=lambda e: parse_iso(e.picked_at), reverse=True)
    for slot, entry in zip(slots, ordered):
        out[slot] = entry
    return out


class EntryStore(abc.ABC):
    """Entry collection contract used by the service layer."""

    @abc.abstractmethod
    def load_all(self) -> list[Entry]: ...

    @abc.abstractmethod
    def save_all(self, entries: Sequence[Entry]) -> list[Entry]: ...

    @abc.abstractmethod
    def insert(self, entry: Entry) -> Entry: ...

    @abc.abstractmethod
    def find_by_id(self, entry_id: str) -> Entry | None: ...

    @abc.abstractmethod
    def update_field(self, entry_id: str, mutator: EntryMutator) -> Entry | None: ...


class DocumentEntryStore(EntryStore):
    """``EntryStore`` kept as one JSON array in a blob store."""

    def __init__(self, blobs: BlobStore, settings: Settings) -> None:
        self._blobs = blobs
        self._key = settings.data_key
        self._max_entries = settings.max_entries

    @property
    def key(self) -> str:
        return self._key

    def load_all(self) -> list[Entry]:
        return decode_entries(self._blobs.read(self._key))

    def save_all(self, entries: Sequence[Entry]) -> list[Entry]:
        ordered = sort_newest_first(entries)
        trimmed = ordered[: self._max_entries]
        if len(trimmed) < len(ordered):
            logger.info("Dropping %d oldest entries over cap %d", len(ordered) - len(trimmed), self._max_entries)

        self._blobs.write(self._key, encode_entries(trimmed), CONTENT_TYPE)
        return trimmed

    def insert(self, entry: Entry) -> Entry:
        entries = self.load_all()
        # Prepend so a timestamp tie favours the newest insert.
        entries.insert(0, entry)
        self.save_all(entries)
        logger.info("Inserted entry %s (%s) into %s", entry.id, entry.game, self._key)
        return entry

    def find_by_id(self, entry_id: str) -> Entry | None:
        for entry in self.load_all():
            if entry.id == entry_id:
                return entry
        return None

    def update_field(self, entry_id: str, mutator: EntryMutator) -> Entry | None:
        entries = self.load_all()
        for idx, current in enumerate(entries):
            if current.id == entry_id:
                updated = mutator(current)
                entries[idx] = updated
                self.save_all(entries)
                logger.info("Updated entry %s in %s", entry_id, self._key)
                return updated
        return None
