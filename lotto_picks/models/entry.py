"""Pick entry records.

An entry is immutable once built; the played toggle produces a new value via
``dataclasses.replace`` which the store writes back in place of the old one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Pick:
    """One number within an entry, optionally the game's special (bonus) number."""

    number: int
    is_special: bool = False
    # Reserved; always serialized as null.
    name: None = None


@dataclass(frozen=True)
class EntryMeta:
    """Provenance captured when the entry was created."""

    source_ip: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class Entry:
    id: str
    game: str
    picks: tuple[Pick, ...]
    picked_at: str
    played: bool = False
    played_at: str | None = None
    meta: EntryMeta | None = None

    def with_played(self, played: bool, now: str) -> Entry:
        """Return a copy with the played flag set; ``playedAt`` only survives when played."""

        return replace(self, played=played, played_at=now if played else None)
