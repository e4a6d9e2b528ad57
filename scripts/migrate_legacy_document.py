"""Rewrite the entries document in the canonical entry schema.

Older documents stored the id and played flag under several alternative
names (`key`, `Key`, `isPlayed`, ...) and carry no `schemaVersion`. Reads
already tolerate them; this one-shot script folds them into the canonical
names, stamps the current version, re-sorts newest-first,
applies the MAX_ENTRIES cap and writes the document back.

Uses the same environment as the app (loaded from .env):
  STORE_BACKEND, BUCKET_NAME, PREFIX, DATA_DIR, DATABASE_URL, MAX_ENTRIES

Usage:
  python scripts/migrate_legacy_document.py --dry-run
  python scripts/migrate_legacy_document.py
  python scripts/migrate_legacy_document.py --drop-invalid

Notes:
- Entries that cannot be decoded are listed by index and the document is left
  untouched unless --drop-invalid is given.
- Like every other writer, this is a load -> save cycle with no lock. Run it
  while the API is not taking writes or a concurrent create may be lost.
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass

from dotenv import load_dotenv

from lotto_picks.config import Settings, resolve_store_backend
from lotto_picks.repositories.entry_store import DocumentEntryStore
from lotto_picks.storage.blob import BlobStore
from lotto_picks.storage.codec import decode_raw, migrate_legacy_fields, partition_entries
from lotto_picks.storage.factory import build_blob_store


logger = logging.getLogger(__name__)


def _settings_from_env() -> Settings:
    # Read the environment now, after .env has been loaded.
    mapping: dict[str, str] = dict(os.environ)
    mapping["STORE_BACKEND"] = resolve_store_backend()
    return Settings.from_mapping(mapping)


@dataclass(frozen=True)
class MigrationReport:
    kept: int
    legacy: int
    # Document positions of objects that could not be decoded.
    invalid: tuple[int, ...] = ()
    written: bool = False


def count_legacy_entries(text: str | None) -> int:
    """Number of stored objects not yet at the current schema version."""

    changed = 0
    for raw in decode_raw(text):
        if isinstance(raw, dict) and migrate_legacy_fields(raw)[1]:
            changed += 1
    return changed


def migrate(
    blobs: BlobStore,
    settings: Settings,
    *,
    dry_run: bool = False,
    drop_invalid: bool = False,
) -> MigrationReport:
    """Rewrite the document in the current schema.

    Undecodable objects are reported by index. The document is only written
    when every object decodes, or when ``drop_invalid`` allows discarding them.
    """

    store = DocumentEntryStore(blobs, settings)
    text = blobs.read(store.key)
    legacy = count_legacy_entries(text)
    entries, errors = partition_entries(text)
    invalid = tuple(e.details["index"] for e in errors)

    for e in errors:
        logger.warning("Undecodable entry at index %s: %s %s", e.details["index"], e.message, e.details.get("errors", ""))

    if dry_run or (invalid and not drop_invalid):
        return MigrationReport(kept=min(len(entries), settings.max_entries), legacy=legacy, invalid=invalid)

    stored = store.save_all(entries)
    return MigrationReport(kept=len(stored), legacy=legacy, invalid=invalid, written=True)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Migrate the entries document to the canonical schema")
    parser.add_argument("--dry-run", action="store_true", help="Report what would change without writing")
    parser.add_argument("--drop-invalid", action="store_true", help="Discard entries that cannot be decoded")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    load_dotenv()

    settings = _settings_from_env()
    blobs = build_blob_store(settings)
    logger.info("Document: %s (%s)", settings.data_key, blobs.describe())

    report = migrate(blobs, settings, dry_run=args.dry_run, drop_invalid=args.drop_invalid)

    logger.info("Entries kept: %d", report.kept)
    logger.info("Legacy entries %s: %d", "rewritten" if report.written else "found", report.legacy)
    if report.invalid and not report.written and not args.dry_run:
        logger.error(
            "Document not written: undecodable entries at %s (rerun with --drop-invalid to discard them)",
            ", ".join(str(i) for i in report.invalid),
        )
        return 1
    logger.info("Done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
