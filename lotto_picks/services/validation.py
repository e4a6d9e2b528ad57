"""Structural rules for submitted picks, per game."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from lotto_picks.models.entry import Pick


class GameId(str, Enum):
    FANTASY5 = "fantasy5"
    SUPERLOTTO = "superlotto"


@dataclass(frozen=True)
class GameRules:
    game: GameId
    label: str
    pick_count: int
    number_range: tuple[int, int]
    # None when the game has no special (bonus) number.
    special_range: tuple[int, int] | None = None

    @property
    def special_count(self) -> int:
        return 0 if self.special_range is None else 1


GAME_RULES: dict[str, GameRules] = {
    GameId.FANTASY5.value: GameRules(
        game=GameId.FANTASY5,
        label="Fantasy 5",
        pick_count=5,
        number_range=(1, 39),
    ),
    GameId.SUPERLOTTO.value: GameRules(
        game=GameId.SUPERLOTTO,
        label="SuperLotto Plus",
        pick_count=6,
        number_range=(1, 47),
        special_range=(1, 27),
    ),
}


def normalize_game(game_id: Any) -> str | None:
    """Lower-cased game id if it names a known game, else ``None``."""

    if not isinstance(game_id, str):
        return None
    key = game_id.strip().lower()
    return key if key in GAME_RULES else None


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    error: str | None = None
    rules: GameRules | None = None

    @classmethod
    def success(cls, rules: GameRules) -> ValidationResult:
        return cls(ok=True, rules=rules)

    @classmethod
    def failure(cls, error: str, rules: GameRules | None = None) -> ValidationResult:
        return cls(ok=False, error=error, rules=rules)


def _is_special(pick: dict[str, Any]) -> bool:
    return bool(pick.get("IsSpecial"))


def validate_picks(game_id: Any, picks: Any) -> ValidationResult:
    """Validate a pick submission and report the first violation.

    Checks run in order: count, per-pick type and range, uniqueness of the
    regular numbers, then the number of special picks.
    """

    if picks is None or not isinstance(picks, list):
        return ValidationResult.failure("missing picks")

    key = normalize_game(game_id)
    if key is None:
        return ValidationResult.failure("unsupported or missing game type")
    rules = GAME_RULES[key]

    if len(picks) != rules.pick_count:
        if rules.special_range is None:
            return ValidationResult.failure(f"exactly {rules.pick_count} picks required for {rules.label}", rules)
        return ValidationResult.failure(
            f"exactly {rules.pick_count} picks required for {rules.label} "
            f"({rules.pick_count - 1} numbers + 1 special)",
            rules,
        )

    for i, pick in enumerate(picks):
        if not isinstance(pick, dict):
            return ValidationResult.failure(f"picks[{i}] must be an object", rules)
        number = pick.get("Number")
        if not isinstance(number, int) or isinstance(number, bool):
            return ValidationResult.failure(f"picks[{i}].Number must be an integer", rules)

        if _is_special(pick) and rules.special_range is not None:
            lo, hi = rules.special_range
            if not lo <= number <= hi:
                return ValidationResult.failure(f"special number out of range ({lo}..{hi})", rules)
        else:
            lo, hi = rules.number_range
            if not lo <= number <= hi:
                return ValidationResult.failure(f"number out of range ({lo}..{hi})", rules)

    regular = [p["Number"] for p in picks if not _is_special(p)]
    if len(regular) != len(set(regular)):
        return ValidationResult.failure("numbers must be unique", rules)

    specials = sum(1 for p in picks if _is_special(p))
    if specials != rules.special_count:
        if rules.special_count == 0:
            return ValidationResult.failure(f"{rules.label} does not have special numbers", rules)
        return ValidationResult.failure("exactly one pick must have IsSpecial=true", rules)

    return ValidationResult.success(rules)


def to_picks(raw_picks: list[dict[str, Any]]) -> tuple[Pick, ...]:
    """Canonical picks for an already validated submission."""

    return tuple(Pick(number=int(p["Number"]), is_special=_is_special(p)) for p in raw_picks)
