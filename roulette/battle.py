"""Gym battle resolution."""

from __future__ import annotations

import random

from .models.session import ProgressionSession
from .wheel import RandomSource


def win_probability(team_power: int, round_number: int) -> float:
    """Chance of winning a gym battle.

    The team contributes ``1 + team_power`` winning wedges and the gym
    ``round_number + 1`` losing wedges, so a powerless team facing the first
    gym wins half the time.
    """

    yes_wedges = 1 + max(0, team_power)
    no_wedges = max(0, round_number) + 1
    return yes_wedges / (yes_wedges + no_wedges)


def session_win_probability(session: ProgressionSession) -> float:
    return win_probability(session.team_power, session.round)


def resolve_battle(session: ProgressionSession, rng: RandomSource | None = None) -> bool:
    """Run one independent battle trial for ``session``."""

    source = rng if rng is not None else random
    return source.random() < session_win_probability(session)


__all__ = ["resolve_battle", "session_win_probability", "win_probability"]
