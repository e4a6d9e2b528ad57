"""Entry routes (controllers). No business logic here."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, current_app, request

from lotto_picks.errors import InvalidRequestBodyError
from lotto_picks.models.entry import Entry, EntryMeta
from lotto_picks.services.entry_service import EntryService
from lotto_picks.storage.codec import dump_entry
from lotto_picks.utils.responses import ok

entries_bp = Blueprint("entries", __name__)


def _service() -> EntryService:
    return current_app.extensions["entry_service"]


def _item(entry: Entry, *aliases: str) -> dict[str, Any]:
    # Older clients look the id up under "key"/"Key".
    data = dump_entry(entry)
    for alias in aliases:
        data[alias] = entry.id
    return data


def _request_meta() -> EntryMeta:
    forwarded = request.headers.get("X-Forwarded-For", "")
    source_ip = forwarded.split(",")[0].strip() or request.remote_addr
    return EntryMeta(source_ip=source_ip or None, user_agent=request.headers.get("User-Agent"))


def _json_body() -> dict[str, Any]:
    if not request.get_data(cache=True).strip():
        return {}
    payload = request.get_json(force=True, silent=True)
    if payload is None:
        raise InvalidRequestBodyError("Invalid JSON")
    if not isinstance(payload, dict):
        raise InvalidRequestBodyError("Request body must be a JSON object")
    return payload


@entries_bp.post("/entries")
def create_entry():
    """Validate and store a new pick entry."""

    entry = _service().create_entry(_json_body(), meta=_request_meta())
    return ok({"ok": True, "id": entry.id, "key": entry.id, "pickedAt": entry.picked_at}, status_code=201)


@entries_bp.get("/entries")
def list_entries():
    """Newest-first entries; ``limit`` (1..100, default 10) and optional ``game``."""

    page = _service().list_entries(
        limit=request.args.get("limit"),
        game=request.args.get("game") or request.args.get("Game"),
    )
    items = [_item(e, "key") for e in page.items]
    return ok({"items": items, "count": len(items), "gameFilter": page.game_filter})


@entries_bp.get("/endpoints")
def list_all_entries():
    items = [_item(e, "key", "Key") for e in _service().list_all_entries()]
    return ok({"items": items, "count": len(items)})


@entries_bp.get("/entries/<path:entry_id>")
def get_entry(entry_id: str):
    entry = _service().get_entry(entry_id)
    return ok({"item": _item(entry, "key", "Key")})


@entries_bp.put("/entries/<path:entry_id>/played/<any(true, false):value>")
def set_played(entry_id: str, value: str):
    entry = _service().set_played(entry_id, value == "true")
    return ok(
        {
            "ok": True,
            "id": entry.id,
            "key": entry.id,
            "played": entry.played,
            "playedAt": entry.played_at,
        }
    )
