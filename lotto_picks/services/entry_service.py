"""Service layer for pick entry use-cases."""

from __future__ import annotations

import re
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from lotto_picks.config import Settings
from lotto_picks.errors import NotFoundError, ValidationError
from lotto_picks.models.entry import Entry, EntryMeta
from lotto_picks.repositories.entry_store import EntryStore
from lotto_picks.schemas.entry import EntryCreateSchema
from lotto_picks.services.validation import normalize_game, to_picks, validate_picks
from lotto_picks.utils.timestamps import utc_now_iso


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clamp_limit(raw: Any, default: int, lo: int, hi: int) -> int:
    """Parse ``limit`` then clamp.

    The leading integer is used ("3x" -> 3, "2.5" -> 2); missing -> default,
    no leading digits -> ``lo``.
    """

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        value = default
    else:
        match = _LEADING_INT.match(str(raw))
        value = int(match.group(1)) if match else lo
    return max(lo, min(hi, value))


@dataclass(frozen=True)
class EntryPage:
    items: list[Entry]
    game_filter: str | None


class EntryService:
    """Create, list, fetch and toggle entries.

    Holds no state of its own; every call goes to the store.
    """

    def __init__(
        self,
        store: EntryStore,
        settings: Settings,
        *,
        clock: Callable[[], str] = utc_now_iso,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ) -> None:
        self._store = store
        self._settings = settings
        self._clock = clock
        self._id_factory = id_factory
        self._create_schema = EntryCreateSchema()

    def create_entry(self, payload: Mapping[str, Any], meta: EntryMeta | None = None) -> Entry:
        data = self._create_schema.load(payload)

        result = validate_picks(data["game"], data["picks"])
        rules = result.rules
        if not result.ok or rules is None:
            raise ValidationError(result.error or "Validation error")

        entry = Entry(
            id=self._id_factory(),
            game=rules.game.value,
            picks=to_picks(data["picks"]),
            picked_at=data.get("picked_at") or self._clock(),
            played=data.get("played") is True,
            meta=meta,
        )
        return self._store.insert(entry)

    def list_entries(self, limit: Any = None, game: Any = None) -> EntryPage:
        """Newest-first entries, optionally filtered by game; unknown games do not filter."""

        n = clamp_limit(limit, self._settings.default_limit, 1, self._settings.max_limit)
        game_filter = normalize_game(game)

        entries = self._store.load_all()
        if game_filter is not None:
            entries = [e for e in entries if e.game.lower() == game_filter]
        return EntryPage(items=entries[:n], game_filter=game_filter)

    def list_all_entries(self) -> list[Entry]:
        return self._store.load_all()

    def get_entry(self, entry_id: str) -> Entry:
        entry = self._store.find_by_id(entry_id)
        if entry is None:
            raise NotFoundError(message="Not found", details={"id": entry_id})
        return entry

    def set_played(self, entry_id: str, played: bool) -> Entry:
        now = self._clock()
        updated = self._store.update_field(entry_id, lambda e: e.with_played(played, now))
        if updated is None:
            raise NotFoundError(message="entry not found", details={"id": entry_id})
        return updated
