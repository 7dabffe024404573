"""Weighted roulette wheels used for every random draw in a career."""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Protocol, Sequence, Tuple, TypeVar

from .models.session import Gender

log = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    def random(self) -> float: ...


class AdventureEvent(str, Enum):
    CATCH_POKEMON = "CATCH_POKEMON"
    BATTLE_TRAINER = "BATTLE_TRAINER"
    BUY_POTIONS = "BUY_POTIONS"
    NOTHING = "NOTHING"
    CATCH_TWO = "CATCH_TWO"
    VISIT_DAYCARE = "VISIT_DAYCARE"
    TEAM_ROCKET = "TEAM_ROCKET"
    MYSTERIOUS_EGG = "MYSTERIOUS_EGG"
    LEGENDARY = "LEGENDARY"
    TRADE = "TRADE"
    FIND_ITEM = "FIND_ITEM"
    EXPLORE_CAVE = "EXPLORE_CAVE"
    SNORLAX = "SNORLAX"
    MULTITASK = "MULTITASK"
    FISHING = "FISHING"
    FOSSIL = "FOSSIL"
    RIVAL = "RIVAL"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


WeightedTable = Tuple[Tuple[T, int], ...]

GENERATION_TABLE: WeightedTable[int] = tuple((gen, 1) for gen in range(1, 9))

GENDER_TABLE: WeightedTable[Gender] = ((Gender.BOY, 1), (Gender.GIRL, 1))

# "What to do first?" before the first gym.
START_ADVENTURE_TABLE: WeightedTable[AdventureEvent] = (
    (AdventureEvent.CATCH_POKEMON, 2),
    (AdventureEvent.BATTLE_TRAINER, 2),
    (AdventureEvent.BUY_POTIONS, 2),
    (AdventureEvent.NOTHING, 1),
)

# Between gyms.
MAIN_ADVENTURE_TABLE: WeightedTable[AdventureEvent] = (
    (AdventureEvent.CATCH_POKEMON, 3),
    (AdventureEvent.BATTLE_TRAINER, 1),
    (AdventureEvent.BUY_POTIONS, 1),
    (AdventureEvent.NOTHING, 1),
    (AdventureEvent.CATCH_TWO, 1),
    (AdventureEvent.VISIT_DAYCARE, 1),
    (AdventureEvent.TEAM_ROCKET, 1),
    (AdventureEvent.MYSTERIOUS_EGG, 1),
    (AdventureEvent.LEGENDARY, 1),
    (AdventureEvent.TRADE, 1),
    (AdventureEvent.FIND_ITEM, 1),
    (AdventureEvent.EXPLORE_CAVE, 1),
    (AdventureEvent.SNORLAX, 1),
    (AdventureEvent.MULTITASK, 1),
    (AdventureEvent.FISHING, 1),
    (AdventureEvent.FOSSIL, 1),
    (AdventureEvent.RIVAL, 1),
)


def total_weight(options: Sequence[Tuple[T, int]]) -> int:
    if not options:
        raise ValueError("A roulette wheel needs at least one option")
    total = 0
    for outcome, weight in options:
        if weight <= 0:
            raise ValueError(f"Weight for {outcome!r} must be positive, got {weight}")
        total += weight
    return total


def spin(options: Sequence[Tuple[T, int]], rng: RandomSource | None = None) -> T:
    """Pick one outcome with probability proportional to its weight."""

    total = total_weight(options)
    source = rng if rng is not None else random
    draw = source.random() * total
    cumulative = 0
    for outcome, weight in options:
        cumulative += weight
        if draw < cumulative:
            return outcome
    log.warning("Roulette draw %s fell outside total weight %s", draw, total)
    return options[0][0]


def spin_generation(rng: RandomSource | None = None) -> int:
    return spin(GENERATION_TABLE, rng)


def spin_gender(rng: RandomSource | None = None) -> Gender:
    return spin(GENDER_TABLE, rng)


def spin_start_adventure(rng: RandomSource | None = None) -> AdventureEvent:
    return spin(START_ADVENTURE_TABLE, rng)


def spin_main_adventure(rng: RandomSource | None = None) -> AdventureEvent:
    return spin(MAIN_ADVENTURE_TABLE, rng)


__all__ = [
    "AdventureEvent",
    "GENDER_TABLE",
    "GENERATION_TABLE",
    "MAIN_ADVENTURE_TABLE",
    "RandomSource",
    "START_ADVENTURE_TABLE",
    "WeightedTable",
    "spin",
    "spin_gender",
    "spin_generation",
    "spin_main_adventure",
    "spin_start_adventure",
    "total_weight",
]
