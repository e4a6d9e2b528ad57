"""Tests for the legacy document migration script."""

from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path

import pytest

from lotto_picks.config import Settings
from lotto_picks.storage.blob import MemoryBlobStore

KEY = "entries/entries.json"
_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "migrate_legacy_document.py"


@pytest.fixture()
def migrate_module(monkeypatch):
    spec = importlib.util.spec_from_file_location("migrate_legacy_document", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    monkeypatch.setitem(sys.modules, spec.name, module)
    spec.loader.exec_module(module)
    return module


def _legacy_document() -> str:
    picks = [{"Number": n} for n in (1, 2, 3, 4, 5)]
    return json.dumps(
        [
            {"Key": "old", "game": "fantasy5", "picks": picks, "pickedAt": "2023-01-01T00:00:00Z", "IsPlayed": True},
            {"id": "new", "game": "fantasy5", "picks": picks, "pickedAt": "2024-01-01T00:00:00Z", "played": False, "schemaVersion": 1},
        ]
    )


def test_dry_run_reports_without_writing(migrate_module) -> None:
    blobs = MemoryBlobStore({KEY: _legacy_document()})
    report = migrate_module.migrate(blobs, Settings(data_key=KEY), dry_run=True)

    assert (report.kept, report.legacy, report.written) == (2, 1, False)
    assert blobs.read(KEY) == _legacy_document()


def test_migrate_rewrites_canonical_sorted_document(migrate_module) -> None:
    blobs = MemoryBlobStore({KEY: _legacy_document()})
    report = migrate_module.migrate(blobs, Settings(data_key=KEY, max_entries=1))

    assert (report.kept, report.legacy, report.written) == (1, 1, True)
    doc = json.loads(blobs.read(KEY))
    assert [e["id"] for e in doc] == ["new"]
    assert migrate_module.count_legacy_entries(blobs.read(KEY)) == 0


def test_main_uses_environment(migrate_module, tmp_path, monkeypatch) -> None:
    target = tmp_path / "entries"
    target.mkdir()
    (target / "entries.json").write_text(_legacy_document(), encoding="utf-8")
    monkeypatch.setenv("STORE_BACKEND", "file")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PREFIX", "entries/")

    assert migrate_module.main([]) == 0

    doc = json.loads((target / "entries.json").read_text(encoding="utf-8"))
    assert [e["id"] for e in doc] == ["new", "old"]
    assert doc[1]["played"] is True
    assert "IsPlayed" not in doc[1]
    assert all(e["schemaVersion"] == 1 for e in doc)


def _document_with_bad_number() -> str:
    doc = json.loads(_legacy_document())
    doc.insert(1, {"id": "bad", "game": "fantasy5", "picks": [{"Number": 5.5}], "pickedAt": "2023-06-01T00:00:00Z"})
    return json.dumps(doc)


def test_undecodable_entries_are_reported_and_nothing_is_written(migrate_module) -> None:
    blobs = MemoryBlobStore({KEY: _document_with_bad_number()})
    report = migrate_module.migrate(blobs, Settings(data_key=KEY))

    assert report.invalid == (1,)
    assert report.written is False
    assert report.kept == 2
    assert blobs.read(KEY) == _document_with_bad_number()


def test_drop_invalid_writes_the_decodable_entries(migrate_module) -> None:
    blobs = MemoryBlobStore({KEY: _document_with_bad_number()})
    report = migrate_module.migrate(blobs, Settings(data_key=KEY), drop_invalid=True)

    assert report.invalid == (1,)
    assert report.written is True
    assert [e["id"] for e in json.loads(blobs.read(KEY))] == ["new", "old"]


def test_main_fails_on_undecodable_entries_unless_dropped(migrate_module, tmp_path, monkeypatch) -> None:
    target = tmp_path / "entries"
    target.mkdir()
    path = target / "entries.json"
    path.write_text(_document_with_bad_number(), encoding="utf-8")
    monkeypatch.setenv("STORE_BACKEND", "file")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PREFIX", "entries/")

    assert migrate_module.main([]) == 1
    assert path.read_text(encoding="utf-8") == _document_with_bad_number()
    assert migrate_module.main(["--dry-run"]) == 0

    assert migrate_module.main(["--drop-invalid"]) == 0
    assert [e["id"] for e in json.loads(path.read_text(encoding="utf-8"))] == ["new", "old"]
