"""Shared fixtures: an in-memory document backend and an app wired to it."""

from __future__ import annotations

import pytest

from lotto_picks import create_app
from lotto_picks.config import Settings
from lotto_picks.models.entry import Entry, Pick
from lotto_picks.repositories.entry_store import DocumentEntryStore
from lotto_picks.storage.blob import MemoryBlobStore

DATA_KEY = "entries/entries.json"


def _make_entry(entry_id: str, picked_at: str, game: str = "fantasy5", **kwargs) -> Entry:
    if game == "superlotto":
        picks = tuple(Pick(n) for n in (3, 9, 21, 33, 47)) + (Pick(12, is_special=True),)
    else:
        picks = tuple(Pick(n) for n in (1, 2, 3, 4, 5))
    return Entry(id=entry_id, game=game, picks=picks, picked_at=picked_at, **kwargs)


@pytest.fixture()
def make_entry():
    """Factory for valid entries: ``make_entry(id, picked_at, game=..., **fields)``."""

    return _make_entry


@pytest.fixture()
def settings() -> Settings:
    return Settings(store_backend="memory", data_key=DATA_KEY, max_entries=1000)


@pytest.fixture()
def blobs() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture()
def store(blobs: MemoryBlobStore, settings: Settings) -> DocumentEntryStore:
    return DocumentEntryStore(blobs, settings)


@pytest.fixture()
def app(blobs: MemoryBlobStore):
    return create_app({"STORE_BACKEND": "memory", "PREFIX": "entries/"}, blob_store=blobs)


@pytest.fixture()
def client(app):
    return app.test_client()
