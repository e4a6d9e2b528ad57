"""Serialize the whole entry collection to one JSON document and back.

The document is a JSON array of canonical entry objects followed by a
newline; each object carries ``schemaVersion``. Objects without the current
version come from older writers: alternative field names for the id and the
played flag are folded into the canonical names, ``IsSpecial`` is coerced to a
boolean and integral float numbers to ints, so the next save writes the current
version only.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any

from marshmallow import ValidationError as MarshmallowValidationError

from lotto_picks.errors import DocumentDecodeError
from lotto_picks.models.entry import Entry
from lotto_picks.schemas.entry import SCHEMA_VERSION, EntrySchema

CONTENT_TYPE = "application/json"

_ID_ALIASES = ("key", "Key", "ID", "entryId", "EntryId", "entryID")
_PLAYED_ALIASES = ("Played", "isPlayed", "IsPlayed", "wasPlayed", "WasPlayed")

_schema = EntrySchema()
_many_schema = EntrySchema(many=True)


def _coerce_pick(pick: Any) -> Any:
    if not isinstance(pick, dict):
        return pick
    out = dict(pick)
    if "IsSpecial" in out and not isinstance(out["IsSpecial"], bool):
        out["IsSpecial"] = bool(out["IsSpecial"])
    number = out.get("Number")
    if isinstance(number, float) and number.is_integer():
        out["Number"] = int(number)
    return out


def migrate_legacy_fields(raw: dict[str, Any]) -> tuple[dict[str, Any], bool]:
    """Return ``(canonical_raw, changed)`` for one stored object.

    Objects already stamped with the current ``schemaVersion`` are returned
    as-is; anything older is rewritten on the next save.
    """

    out = dict(raw)
    if out.get("schemaVersion") == SCHEMA_VERSION:
        return out, False

    for alias in _ID_ALIASES:
        if alias in out:
            value = out.pop(alias)
            if not out.get("id") and value:
                out["id"] = str(value)

    for alias in _PLAYED_ALIASES:
        if alias in out:
            value = out.pop(alias)
            if "played" not in out:
                out["played"] = value is True or str(value).strip().lower() == "true"

    if "Game" in out:
        value = out.pop("Game")
        out.setdefault("game", value)

    if isinstance(out.get("game"), str) and out["game"] != out["game"].lower():
        out["game"] = out["game"].lower()

    if isinstance(out.get("picks"), list):
        out["picks"] = [_coerce_pick(p) for p in out["picks"]]

    return out, True


def decode_raw(text: str | None) -> list[Any]:
    """Parse the document into raw JSON values; absent or blank means empty."""

    if text is None or not text.strip():
        return []
    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise DocumentDecodeError("Stored document is not valid JSON", details={"error": str(e)}) from e
    return parsed if isinstance(parsed, list) else []


def decode_entry(raw: Any, index: int) -> Entry:
    """Decode one stored object at position ``index`` of the document."""

    if not isinstance(raw, dict):
        raise DocumentDecodeError("Stored entry is not an object", details={"index": index})
    canonical, _ = migrate_legacy_fields(raw)
    try:
        return _schema.load(canonical)
    except MarshmallowValidationError as e:
        raise DocumentDecodeError(
            "Stored entry does not match the entry schema",
            details={"index": index, "errors": e.messages},
        ) from e


def decode_entries(text: str | None) -> list[Entry]:
    """Decode a stored document into entries, newest-first order preserved."""

    return [decode_entry(raw, index) for index, raw in enumerate(decode_raw(text))]


def partition_entries(text: str | None) -> tuple[list[Entry], list[DocumentDecodeError]]:
    """Decode what can be decoded; undecodable objects are returned as errors instead of raised."""

    entries: list[Entry] = []
    errors: list[DocumentDecodeError] = []
    for index, raw in enumerate(decode_raw(text)):
        try:
            entries.append(decode_entry(raw, index))
        except DocumentDecodeError as e:
            errors.append(e)
    return entries, errors


def dump_entries(entries: Iterable[Entry]) -> list[dict[str, Any]]:
    return _many_schema.dump(list(entries))


def dump_entry(entry: Entry) -> dict[str, Any]:
    return _schema.dump(entry)


def encode_entries(entries: Sequence[Entry]) -> str:
    """Encode entries as a JSON array with a trailing newline."""

    return json.dumps(dump_entries(entries)) + "\n"
