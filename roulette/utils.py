"""Formatting helpers for career narratives and status cards."""

from __future__ import annotations

from typing import Mapping, Sequence, SupportsInt

from .models.creatures import Creature
from .models.session import FINAL_GYM_ROUND, Item, ProgressionSession


def format_number(value: SupportsInt) -> str:
    """Return ``value`` with ``'`` as the thousands separator."""

    integer = int(value)
    sign = "-" if integer < 0 else ""
    formatted = f"{abs(integer):,}".replace(",", "'")
    return f"{sign}{formatted}"


def format_team(team: Sequence[Creature]) -> str:
    entries = [f"{creature.display_name} (Pw:{creature.power})" for creature in team]
    return ", ".join(entries) or "None"


def format_inventory(inventory: Mapping[str, Item]) -> str:
    entries = [
        f"{item.name} x{format_number(item.count)}" for item in inventory.values()
    ]
    return ", ".join(entries) or "Empty"


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{format_number(count)} {word}"


def build_status_text(session: ProgressionSession) -> str:
    lines = [
        "🆔 **ID Card**",
        f"👤 {session.gender.label} | Gen: {session.generation}",
        f"🏅 Badges: {session.badges} | Round: {session.round}/{FINAL_GYM_ROUND}",
        f"🎒 Items: {format_inventory(session.inventory)}",
        f"👥 Team: {format_team(session.team)}",
    ]
    if session.storage:
        lines.append(f"📦 PC Storage: {pluralize(len(session.storage), 'Pokémon', 'Pokémon')}")
    return "\n".join(lines)


__all__ = [
    "build_status_text",
    "format_inventory",
    "format_number",
    "format_team",
    "pluralize",
]
