"""Creature models and the static evolution table."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import tomllib

MAX_POWER_TIER = 5

# Upper bounds (exclusive) of the base-stat-total bands for tiers 1..4.
# Anything at or above the last bound is tier 5.
POWER_TIER_BOUNDS: tuple[int, ...] = (320, 450, 580, 670)


def power_tier_for(base_stat_total: int) -> int:
    """Return the 1-5 power tier for a creature's base-stat total."""

    for tier, bound in enumerate(POWER_TIER_BOUNDS, start=1):
        if base_stat_total < bound:
            return tier
    return MAX_POWER_TIER


@dataclass(slots=True)
class Creature:
    species_id: int
    name: str
    power: int
    shiny: bool = False
    base_stat_total: int = 0

    @classmethod
    def from_stats(
        cls, species_id: int, name: str, base_stat_total: int, *, shiny: bool = False
    ) -> "Creature":
        return cls(
            species_id=species_id,
            name=name,
            power=power_tier_for(base_stat_total),
            shiny=shiny,
            base_stat_total=base_stat_total,
        )

    def with_shiny(self, shiny: bool) -> "Creature":
        return replace(self, shiny=shiny)

    @property
    def display_name(self) -> str:
        return f"✨{self.name}" if self.shiny else self.name


# Species id -> species it can evolve into. Branching lines list every
# option; a species missing from the table is fully evolved.
_BASE_SUCCESSORS: dict[int, tuple[int, ...]] = {
    # Generation 1
    1: (2,), 2: (3,), 4: (5,), 5: (6,), 7: (8,), 8: (9,),
    10: (11,), 11: (12,), 13: (14,), 14: (15,), 16: (17,), 17: (18,),
    19: (20,), 21: (22,), 23: (24,), 25: (26,), 27: (28,),
    29: (30,), 30: (31,), 32: (33,), 33: (34,), 35: (36,), 37: (38,),
    39: (40,), 41: (42,), 42: (169,), 43: (44,), 44: (45, 182),
    46: (47,), 48: (49,), 50: (51,), 52: (53,), 54: (55,), 56: (57,),
    58: (59,), 60: (61,), 61: (62, 186), 63: (64,), 64: (65,),
    66: (67,), 67: (68,), 69: (70,), 70: (71,), 72: (73,), 74: (75,),
    75: (76,), 77: (78,), 79: (80, 199), 81: (82,), 82: (462,),
    84: (85,), 86: (87,), 88: (89,), 90: (91,), 92: (93,), 93: (94,),
    95: (208,), 96: (97,), 98: (99,), 100: (101,), 102: (103,),
    104: (105,), 108: (463,), 109: (110,), 111: (112,), 112: (464,),
    113: (242,), 114: (465,), 116: (117,), 117: (230,), 118: (119,),
    120: (121,), 123: (212,), 125: (466,), 126: (467,), 129: (130,),
    133: (134, 135, 136, 196, 197, 470, 471, 700),
    137: (233,), 138: (139,), 140: (141,), 147: (148,), 148: (149,),
    # Generation 2
    152: (153,), 153: (154,), 155: (156,), 156: (157,), 158: (159,),
    159: (160,), 172: (25,), 173: (35,), 174: (39,), 175: (176,),
    176: (468,), 179: (180,), 180: (181,), 183: (184,), 246: (247,),
    247: (248,),
    # Generation 3
    252: (253,), 253: (254,), 255: (256,), 256: (257,), 258: (259,),
    259: (260,), 280: (281,), 281: (282, 475), 298: (183,), 304: (305,),
    305: (306,), 363: (364,), 364: (365,), 371: (372,), 372: (373,),
    374: (375,), 375: (376,),
    # Generation 4
    387: (388,), 388: (389,), 390: (391,), 391: (392,), 393: (394,),
    394: (395,), 403: (404,), 404: (405,), 443: (444,), 444: (445,),
    447: (448,),
    # Generation 5
    495: (496,), 496: (497,), 498: (499,), 499: (500,), 501: (502,),
    502: (503,), 610: (611,), 611: (612,), 633: (634,), 634: (635,),
    # Generation 6
    650: (651,), 651: (652,), 653: (654,), 654: (655,), 656: (657,),
    657: (658,), 704: (705,), 705: (706,),
    # Generation 7
    722: (723,), 723: (724,), 725: (726,), 726: (727,), 728: (729,),
    729: (730,), 782: (783,), 783: (784,),
    # Generation 8
    810: (811,), 811: (812,), 813: (814,), 814: (815,), 816: (817,),
    817: (818,), 885: (886,), 886: (887,),
}

EVOLUTION_SUCCESSORS: Mapping[int, tuple[int, ...]] = MappingProxyType(
    dict(_BASE_SUCCESSORS)
)


def load_successor_overrides(path: Path) -> dict[int, tuple[int, ...]]:
    """Read a ``[successors]`` TOML table mapping species ids to id lists."""

    with path.open("rb") as handle:
        payload: Any = tomllib.load(handle)
    table = payload.get("successors") if isinstance(payload, Mapping) else None
    if not isinstance(table, Mapping):
        raise ValueError(f"{path} must define a [successors] table")
    overrides: dict[int, tuple[int, ...]] = {}
    for key, values in table.items():
        try:
            species_id = int(key)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid species id {key!r} in {path}") from exc
        if not isinstance(values, list):
            raise ValueError(f"Successors for {species_id} must be a list")
        overrides[species_id] = tuple(int(value) for value in values)
    return overrides


def build_successor_table(
    overrides: Mapping[int, tuple[int, ...]] | None = None,
) -> Mapping[int, tuple[int, ...]]:
    if not overrides:
        return EVOLUTION_SUCCESSORS
    merged = dict(_BASE_SUCCESSORS)
    merged.update(overrides)
    return MappingProxyType(merged)


__all__ = [
    "Creature",
    "EVOLUTION_SUCCESSORS",
    "MAX_POWER_TIER",
    "POWER_TIER_BOUNDS",
    "build_successor_table",
    "load_successor_overrides",
    "power_tier_for",
]
