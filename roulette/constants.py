"""Shared constants used across the engine, views and cogs."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

DEFAULT_POKEAPI_URL = "https://pokeapi.co/api/v2/pokemon"

# National dex range covered by each generation. Unknown generations fall
# back to the first one.
GENERATION_RANGES: Mapping[int, tuple[int, int]] = MappingProxyType(
    {
        1: (1, 151),
        2: (152, 251),
        3: (252, 386),
        4: (387, 493),
        5: (494, 649),
        6: (650, 721),
        7: (722, 809),
        8: (810, 905),
    }
)

# Partner choices offered by the starter roulette, by generation.
STARTERS: Mapping[int, tuple[tuple[int, str], ...]] = MappingProxyType(
    {
        1: ((1, "Bulbasaur"), (4, "Charmander"), (7, "Squirtle"), (25, "Pikachu")),
        2: ((152, "Chikorita"), (155, "Cyndaquil"), (158, "Totodile")),
        3: ((252, "Treecko"), (255, "Torchic"), (258, "Mudkip")),
        4: ((387, "Turtwig"), (390, "Chimchar"), (393, "Piplup")),
        5: ((495, "Snivy"), (498, "Tepig"), (501, "Oshawott")),
        6: ((650, "Chespin"), (653, "Fennekin"), (656, "Froakie")),
        7: ((722, "Rowlet"), (725, "Litten"), (728, "Popplio")),
        8: ((810, "Grookey"), (813, "Scorbunny"), (816, "Sobble")),
    }
)

# Starters and roaming captures deliberately use different odds.
STARTER_SHINY_CHANCE = 0.02
CAPTURE_SHINY_CHANCE = 0.01

TRAINER_BATTLE_WIN_CHANCE = 0.5

LEGENDARY_POWER = 5

NOT_YOUR_SESSION_NOTICE = "🚫 This is not your game session! Type /start to play."
STALE_ACTION_NOTICE = "⌛ That button is out of date. Use the latest message or /start again."

SHINY_EMOJI = "✨"


__all__ = [
    "CAPTURE_SHINY_CHANCE",
    "DEFAULT_POKEAPI_URL",
    "GENERATION_RANGES",
    "LEGENDARY_POWER",
    "NOT_YOUR_SESSION_NOTICE",
    "SHINY_EMOJI",
    "STALE_ACTION_NOTICE",
    "STARTERS",
    "STARTER_SHINY_CHANCE",
    "TRAINER_BATTLE_WIN_CHANCE",
]
