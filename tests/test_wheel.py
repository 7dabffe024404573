from __future__ import annotations

import random
from collections import Counter

import pytest

from roulette.models.session import Gender
from roulette.wheel import (
    GENDER_TABLE,
    GENERATION_TABLE,
    MAIN_ADVENTURE_TABLE,
    START_ADVENTURE_TABLE,
    AdventureEvent,
    spin,
    spin_start_adventure,
    total_weight,
)

# Chi-square critical values at p = 0.001, by degrees of freedom.
CHI_SQUARE_CRITICAL = {1: 10.828, 3: 16.266, 7: 24.322, 16: 39.252}


def _fixed(value: float) -> random.Random:
    rng = random.Random(0)
    rng.random = lambda: value  # type: ignore[assignment]
    return rng


@pytest.mark.parametrize(
    "table",
    [GENERATION_TABLE, GENDER_TABLE, START_ADVENTURE_TABLE, MAIN_ADVENTURE_TABLE],
    ids=["generation", "gender", "start-adventure", "main-adventure"],
)
def test_draw_frequencies_match_weights(table) -> None:
    rng = random.Random(20240601)
    draws = 20_000
    counts = Counter(spin(table, rng) for _ in range(draws))
    total = total_weight(table)

    chi_square = 0.0
    for outcome, weight in table:
        expected = draws * weight / total
        observed = counts[outcome]
        chi_square += (observed - expected) ** 2 / expected
        assert observed / draws == pytest.approx(weight / total, abs=0.02)

    assert chi_square < CHI_SQUARE_CRITICAL[len(table) - 1]


def test_static_table_weights() -> None:
    assert [weight for _, weight in GENERATION_TABLE] == [1] * 8
    assert [gen for gen, _ in GENERATION_TABLE] == list(range(1, 9))
    assert dict(GENDER_TABLE) == {Gender.BOY: 1, Gender.GIRL: 1}
    assert dict(START_ADVENTURE_TABLE) == {
        AdventureEvent.CATCH_POKEMON: 2,
        AdventureEvent.BATTLE_TRAINER: 2,
        AdventureEvent.BUY_POTIONS: 2,
        AdventureEvent.NOTHING: 1,
    }
    main = dict(MAIN_ADVENTURE_TABLE)
    assert len(main) == 17
    assert main.pop(AdventureEvent.CATCH_POKEMON) == 3
    assert set(main.values()) == {1}
    assert set(main) | {AdventureEvent.CATCH_POKEMON} == set(AdventureEvent)


@pytest.mark.parametrize(
    ("draw", "expected"),
    [
        (0.0, AdventureEvent.CATCH_POKEMON),
        (0.28, AdventureEvent.CATCH_POKEMON),
        (0.29, AdventureEvent.BATTLE_TRAINER),
        (0.85, AdventureEvent.BUY_POTIONS),
        (0.86, AdventureEvent.NOTHING),
        (0.9999999999999999, AdventureEvent.NOTHING),
    ],
)
def test_cumulative_walk_boundaries(draw: float, expected: AdventureEvent) -> None:
    assert spin_start_adventure(_fixed(draw)) is expected


def test_highest_draw_never_needs_fallback(caplog: pytest.LogCaptureFixture) -> None:
    for table in (GENERATION_TABLE, GENDER_TABLE, START_ADVENTURE_TABLE, MAIN_ADVENTURE_TABLE):
        assert spin(table, _fixed(0.9999999999999999)) == table[-1][0]
    assert "fell outside" not in caplog.text


def test_invalid_tables_are_rejected() -> None:
    with pytest.raises(ValueError):
        spin((), _fixed(0.5))
    with pytest.raises(ValueError):
        spin((("a", 1), ("b", 0)), _fixed(0.5))
