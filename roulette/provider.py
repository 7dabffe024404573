"""Creature lookups backed by PokéAPI.

The engine only depends on :class:`CreatureProvider`; :class:`PokeApiProvider`
is the production implementation.  Lookups never raise on network or payload
problems: they log a warning and report ``None`` so the caller can degrade the
current step instead of failing the whole turn.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Mapping, Optional, Protocol, Sequence

import httpx

from .constants import DEFAULT_POKEAPI_URL, GENERATION_RANGES
from .models.creatures import EVOLUTION_SUCCESSORS, Creature

log = logging.getLogger(__name__)


class CreatureProvider(Protocol):
    async def fetch_by_id(self, species_id: int, shiny: bool = False) -> Optional[Creature]: ...

    async def fetch_random_in_generation(self, generation: int) -> Optional[Creature]: ...

    def possible_successors(self, species_id: int) -> Sequence[int]: ...


def generation_range(generation: int) -> tuple[int, int]:
    return GENERATION_RANGES.get(generation, GENERATION_RANGES[1])


def creature_from_payload(payload: Mapping[str, Any]) -> Creature:
    """Build a creature from a ``/pokemon/{id}`` response body."""

    species_id = int(payload["id"])
    raw_name = str(payload["name"]).strip()
    if not raw_name:
        raise ValueError(f"Species #{species_id} has no name")
    stats = payload.get("stats") or []
    base_stat_total = sum(int(entry["base_stat"]) for entry in stats)
    name = raw_name[0].upper() + raw_name[1:]
    return Creature.from_stats(species_id, name, base_stat_total)


class PokeApiProvider:
    def __init__(
        self,
        *,
        base_url: str = DEFAULT_POKEAPI_URL,
        timeout: float = 10.0,
        successors: Mapping[int, Sequence[int]] | None = None,
        rng: random.Random | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.successors = successors if successors is not None else EVOLUTION_SUCCESSORS
        self.rng = rng or random.Random()
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None
        self._cache: dict[int, Creature] = {}

    @property
    def cached_species(self) -> frozenset[int]:
        return frozenset(self._cache)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_by_id(self, species_id: int, shiny: bool = False) -> Optional[Creature]:
        cached = self._cache.get(species_id)
        if cached is not None:
            return cached.with_shiny(shiny)
        url = f"{self.base_url}/{species_id}"
        try:
            response = await self._client.get(url)
            response.raise_for_status()
            creature = creature_from_payload(response.json())
        except httpx.HTTPError as exc:
            log.warning("Failed to fetch species #%s: %s", species_id, exc)
            return None
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Malformed payload for species #%s: %s", species_id, exc)
            return None
        self._cache[species_id] = creature
        return creature.with_shiny(shiny)

    async def fetch_random_in_generation(self, generation: int) -> Optional[Creature]:
        low, high = generation_range(generation)
        species_id = self.rng.randint(low, high)
        return await self.fetch_by_id(species_id)

    def possible_successors(self, species_id: int) -> Sequence[int]:
        return tuple(self.successors.get(species_id, ()))


__all__ = [
    "CreatureProvider",
    "PokeApiProvider",
    "creature_from_payload",
    "generation_range",
]
