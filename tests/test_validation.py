"""Tests for per-game pick validation."""

from __future__ import annotations

import random

import pytest

from lotto_picks.services.validation import GameId, to_picks, validate_picks


def _picks(*numbers: int, special: int | None = None) -> list[dict]:
    out = [{"Number": n, "IsSpecial": False, "Name": None} for n in numbers]
    if special is not None:
        out.append({"Number": special, "IsSpecial": True, "Name": None})
    return out


def test_random_valid_fantasy5_submissions_pass() -> None:
    rng = random.Random(1234)
    for _ in range(200):
        numbers = rng.sample(range(1, 40), 5)
        result = validate_picks("fantasy5", _picks(*numbers))
        assert result.ok, result.error
        assert result.rules is not None and result.rules.game is GameId.FANTASY5


def test_game_match_is_case_insensitive() -> None:
    assert validate_picks(" Fantasy5 ", _picks(1, 2, 3, 4, 5)).ok
    assert validate_picks("SUPERLOTTO", _picks(1, 2, 3, 4, 5, special=27)).ok


@pytest.mark.parametrize("picks", [None, "1,2,3", {"Number": 1}])
def test_missing_picks(picks) -> None:
    result = validate_picks("fantasy5", picks)
    assert not result.ok
    assert result.error == "missing picks"


@pytest.mark.parametrize("game", [None, "", "powerball", 5])
def test_unsupported_game(game) -> None:
    result = validate_picks(game, _picks(1, 2, 3, 4, 5))
    assert result.error == "unsupported or missing game type"


def test_missing_picks_is_reported_before_game() -> None:
    assert validate_picks("powerball", None).error == "missing picks"


def test_fantasy5_wrong_count() -> None:
    result = validate_picks("fantasy5", _picks(1, 2, 3, 4))
    assert result.error == "exactly 5 picks required for Fantasy 5"


@pytest.mark.parametrize("bad", [0, 40, -3])
def test_fantasy5_out_of_range(bad: int) -> None:
    result = validate_picks("fantasy5", _picks(1, 2, 3, 4, bad))
    assert result.error == "number out of range (1..39)"


def test_fantasy5_duplicates() -> None:
    assert validate_picks("fantasy5", _picks(1, 2, 3, 4, 4)).error == "numbers must be unique"


def test_fantasy5_rejects_special() -> None:
    picks = _picks(1, 2, 3, 4, special=9)
    assert validate_picks("fantasy5", picks).error == "Fantasy 5 does not have special numbers"


@pytest.mark.parametrize("value", ["7", 7.5, True, None])
def test_number_must_be_an_integer(value) -> None:
    picks = _picks(1, 2, 3, 4)
    picks.append({"Number": value})
    assert validate_picks("fantasy5", picks).error == "picks[4].Number must be an integer"


def test_pick_must_be_an_object() -> None:
    assert validate_picks("fantasy5", [1, 2, 3, 4, 5]).error == "picks[0] must be an object"


def test_checks_run_count_first() -> None:
    # Duplicates and out-of-range values, but the count is wrong first.
    assert validate_picks("fantasy5", _picks(99, 99)).error.startswith("exactly 5 picks")


def test_range_is_reported_before_uniqueness() -> None:
    assert validate_picks("fantasy5", _picks(2, 2, 3, 4, 50)).error == "number out of range (1..39)"


def test_superlotto_valid() -> None:
    result = validate_picks("superlotto", _picks(1, 10, 20, 30, 47, special=27))
    assert result.ok


@pytest.mark.parametrize(
    "picks",
    [
        _picks(1, 2, 3, 4, 5, 6),
        [*_picks(1, 2, 3, 4), {"Number": 5, "IsSpecial": True}, {"Number": 6, "IsSpecial": True}],
        [*_picks(1, 2, 3), *[{"Number": n, "IsSpecial": True} for n in (4, 5, 6)]],
    ],
)
def test_superlotto_requires_exactly_one_special(picks) -> None:
    result = validate_picks("superlotto", picks)
    assert not result.ok
    assert result.error == "exactly one pick must have IsSpecial=true"


def test_superlotto_wrong_count() -> None:
    result = validate_picks("superlotto", _picks(1, 2, 3, 4, 5))
    assert result.error == "exactly 6 picks required for SuperLotto Plus (5 numbers + 1 special)"


def test_superlotto_special_range() -> None:
    result = validate_picks("superlotto", _picks(1, 2, 3, 4, 5, special=28))
    assert result.error == "special number out of range (1..27)"


def test_superlotto_regular_range() -> None:
    result = validate_picks("superlotto", _picks(1, 2, 3, 4, 48, special=1))
    assert result.error == "number out of range (1..47)"


def test_superlotto_special_may_repeat_a_regular_number() -> None:
    assert validate_picks("superlotto", _picks(1, 2, 3, 4, 5, special=5)).ok


def test_superlotto_regular_duplicates() -> None:
    result = validate_picks("superlotto", _picks(1, 2, 3, 5, 5, special=5))
    assert result.error == "numbers must be unique"


def test_to_picks_normalizes() -> None:
    picks = to_picks([{"Number": 4, "IsSpecial": True, "Name": "x", "extra": 1}, {"Number": 9}])
    assert [(p.number, p.is_special, p.name) for p in picks] == [(4, True, None), (9, False, None)]
