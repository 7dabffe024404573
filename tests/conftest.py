from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

import pytest

PROJECT_BASE = Path(__file__).resolve().parents[1]
if str(PROJECT_BASE) not in sys.path:
    sys.path.insert(0, str(PROJECT_BASE))

from roulette.models.creatures import Creature


class StubProvider:
    """In-memory creature provider with switchable failures."""

    def __init__(self) -> None:
        # species id -> (name, base stat total)
        self.dex: dict[int, tuple[str, int]] = {
            1: ("Bulbasaur", 318),
            2: ("Ivysaur", 405),
            3: ("Venusaur", 525),
            4: ("Charmander", 309),
            7: ("Squirtle", 314),
            19: ("Rattata", 253),
            25: ("Pikachu", 320),
            133: ("Eevee", 325),
            134: ("Vaporeon", 525),
            135: ("Jolteon", 525),
            136: ("Flareon", 525),
            150: ("Mewtwo", 680),
        }
        self.successors: dict[int, tuple[int, ...]] = {
            1: (2,),
            2: (3,),
            4: (5,),
            7: (8,),
            25: (26,),
            133: (134, 135, 136),
        }
        self.unavailable: set[int] = set()
        self.random_available = True
        self.random_species: list[int] = []
        self.requests: list[int] = []

    async def fetch_by_id(self, species_id: int, shiny: bool = False) -> Optional[Creature]:
        self.requests.append(species_id)
        if species_id in self.unavailable:
            return None
        name, bst = self.dex.get(species_id, (f"Species{species_id}", 300))
        return Creature.from_stats(species_id, name, bst, shiny=shiny)

    async def fetch_random_in_generation(self, generation: int) -> Optional[Creature]:
        if not self.random_available:
            return None
        species_id = self.random_species.pop(0) if self.random_species else 19
        return await self.fetch_by_id(species_id)

    def possible_successors(self, species_id: int) -> Sequence[int]:
        return self.successors.get(species_id, ())


@pytest.fixture
def provider() -> StubProvider:
    return StubProvider()
