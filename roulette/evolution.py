"""Post-gym evolution rewards."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .models.creatures import Creature
from .provider import CreatureProvider

log = logging.getLogger(__name__)


class EvolutionFailed(RuntimeError):
    """Raised when the chosen team member's successor could not be fetched."""

    def __init__(self, index: int, creature: Creature, successor_id: int) -> None:
        self.index = index
        self.creature = creature
        self.successor_id = successor_id
        super().__init__(
            f"Could not evolve {creature.name} into species #{successor_id}"
        )


@dataclass(slots=True)
class EvolutionResult:
    index: int
    old: Creature
    new: Creature


class EvolutionResolver:
    def __init__(
        self, provider: CreatureProvider, *, rng: random.Random | None = None
    ) -> None:
        self.provider = provider
        self.rng = rng or random.Random()

    def eligible_indices(self, team: Sequence[Creature]) -> list[int]:
        return [
            index
            for index, creature in enumerate(team)
            if self.provider.possible_successors(creature.species_id)
        ]

    async def resolve(self, team: list[Creature]) -> Optional[EvolutionResult]:
        """Evolve one eligible member of ``team`` in place.

        Returns ``None`` when nobody can evolve.  The team is only touched
        once the successor has been fetched.
        """

        candidates = self.eligible_indices(team)
        if not candidates:
            return None
        index = self.rng.choice(candidates)
        old = team[index]
        successor_id = self.rng.choice(
            list(self.provider.possible_successors(old.species_id))
        )
        evolved = await self.provider.fetch_by_id(successor_id, shiny=old.shiny)
        if evolved is None:
            log.warning(
                "Evolution of %s (#%s) into #%s unavailable",
                old.name,
                old.species_id,
                successor_id,
            )
            raise EvolutionFailed(index, old, successor_id)
        team[index] = evolved
        return EvolutionResult(index=index, old=old, new=evolved)


__all__ = ["EvolutionFailed", "EvolutionResolver", "EvolutionResult"]
