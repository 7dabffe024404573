"""Per-player career state."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping

from .creatures import Creature

TEAM_CAPACITY = 6
MAX_BADGES = 8
# Gym wins needed before the champion battle; VICTORY needs round > this.
FINAL_GYM_ROUND = 8

POTION_ITEM_KEY = "potion"


class GameStage(str, Enum):
    """States of the career state machine."""

    GEN_ROULETTE = "gen_roulette"
    GENDER_ROULETTE = "gender_roulette"
    STARTER_ROULETTE = "starter_roulette"
    START_ADVENTURE = "start_adventure"
    GYM_BATTLE = "gym_battle"
    EVOLUTION = "evolution"
    ADVENTURE = "adventure"
    GAME_OVER = "game_over"
    VICTORY = "victory"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStage.GAME_OVER, GameStage.VICTORY)


class ActionTag(str, Enum):
    """Controls a player can press."""

    SPIN = "spin"
    FIGHT = "fight"

    @classmethod
    def from_value(cls, value: "str | ActionTag") -> "ActionTag":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown action: {value}") from None


class Gender(str, Enum):
    BOY = "male"
    GIRL = "female"

    @property
    def label(self) -> str:
        return "Boy" if self is Gender.BOY else "Girl"


@dataclass(frozen=True, slots=True)
class ItemTemplate:
    key: str
    name: str
    description: str


ITEM_CATALOG: Mapping[str, ItemTemplate] = MappingProxyType(
    {
        POTION_ITEM_KEY: ItemTemplate(
            key=POTION_ITEM_KEY, name="Potion", description="Retry a battle"
        ),
    }
)


@dataclass(slots=True)
class Item:
    key: str
    name: str
    description: str = ""
    count: int = 0

    @classmethod
    def from_catalog(cls, key: str, count: int = 0) -> "Item":
        template = ITEM_CATALOG.get(key)
        if template is None:
            name = key.replace("_", " ").replace("-", " ").title()
            return cls(key=key, name=name, count=count)
        return cls(
            key=template.key,
            name=template.name,
            description=template.description,
            count=count,
        )


def _starting_inventory() -> Dict[str, Item]:
    return {POTION_ITEM_KEY: Item.from_catalog(POTION_ITEM_KEY, count=1)}


@dataclass(slots=True)
class ProgressionSession:
    player_id: int
    stage: GameStage = GameStage.GEN_ROULETTE
    generation: int = 1
    gender: Gender = Gender.BOY
    round: int = 0
    badges: int = 0
    team: List[Creature] = field(default_factory=list)
    storage: List[Creature] = field(default_factory=list)
    inventory: Dict[str, Item] = field(default_factory=_starting_inventory)

    @property
    def team_power(self) -> int:
        return sum(creature.power for creature in self.team)

    @property
    def is_finished(self) -> bool:
        return self.stage.is_terminal

    def add_creature(self, creature: Creature) -> bool:
        """Place a new creature, returning ``True`` if it joined the team."""

        if len(self.team) < TEAM_CAPACITY:
            self.team.append(creature)
            return True
        self.storage.append(creature)
        return False

    def add_item(self, key: str, amount: int = 1) -> Item:
        if amount < 0:
            raise ValueError("Item amounts cannot be negative")
        item = self.inventory.get(key)
        if item is None:
            item = Item.from_catalog(key)
            self.inventory[key] = item
        item.count += amount
        return item

    def item_count(self, key: str) -> int:
        item = self.inventory.get(key)
        return item.count if item else 0

    def use_item(self, key: str) -> bool:
        item = self.inventory.get(key)
        if item is None or item.count <= 0:
            return False
        item.count -= 1
        return True

    def use_potion(self) -> bool:
        return self.use_item(POTION_ITEM_KEY)

    def snapshot(self) -> "ProgressionSession":
        return deepcopy(self)

    def restore(self, snapshot: "ProgressionSession") -> None:
        """Copy every field of ``snapshot`` back onto this session."""

        if snapshot.player_id != self.player_id:
            raise ValueError("Cannot restore a snapshot taken from another player")
        for entry in fields(self):
            setattr(self, entry.name, deepcopy(getattr(snapshot, entry.name)))


__all__ = [
    "ActionTag",
    "FINAL_GYM_ROUND",
    "GameStage",
    "Gender",
    "ITEM_CATALOG",
    "Item",
    "ItemTemplate",
    "MAX_BADGES",
    "POTION_ITEM_KEY",
    "ProgressionSession",
    "TEAM_CAPACITY",
]
