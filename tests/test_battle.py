from __future__ import annotations

import random

import pytest

from roulette.battle import resolve_battle, session_win_probability, win_probability
from roulette.models.creatures import Creature
from roulette.models.session import ProgressionSession


def _fixed(value: float) -> random.Random:
    rng = random.Random(0)
    rng.random = lambda: value  # type: ignore[assignment]
    return rng


def _session_with_power(*powers: int, round_number: int = 0) -> ProgressionSession:
    session = ProgressionSession(player_id=1, round=round_number)
    for index, power in enumerate(powers, start=1):
        session.team.append(Creature(species_id=index, name=f"Mon{index}", power=power))
    return session


def test_powerless_team_at_first_gym_is_a_coin_flip() -> None:
    assert win_probability(0, 0) == 0.5


def test_probability_formula() -> None:
    assert win_probability(3, 2) == pytest.approx(4 / 7)
    assert win_probability(30, 8) == pytest.approx(31 / 40)


def test_probability_monotonic_in_power_and_round() -> None:
    for round_number in range(0, 10):
        values = [win_probability(power, round_number) for power in range(0, 31)]
        assert values == sorted(values)
    for power in range(0, 31):
        values = [win_probability(power, round_number) for round_number in range(0, 10)]
        assert values == sorted(values, reverse=True)


def test_single_power_one_creature_at_round_zero() -> None:
    session = _session_with_power(1)
    session.generation = 1

    assert session_win_probability(session) == pytest.approx(2 / 3)


def test_forced_draws_decide_the_trial() -> None:
    session = ProgressionSession(player_id=1)
    assert session_win_probability(session) == 0.5

    assert resolve_battle(session, _fixed(0.49))
    assert not resolve_battle(session, _fixed(0.51))


def test_each_trial_draws_independently() -> None:
    session = _session_with_power(2, 3, round_number=4)
    draws = iter([0.1, 0.9, 0.2])
    rng = random.Random(0)
    rng.random = lambda: next(draws)  # type: ignore[assignment]

    results = [resolve_battle(session, rng) for _ in range(3)]

    assert results == [True, False, True]
