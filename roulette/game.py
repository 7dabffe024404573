"""Career progression engine.

:class:`ProgressionEngine` owns the state machine that moves a
:class:`~roulette.models.session.ProgressionSession` from the generation
roulette to either the Hall of Fame or a game over.  Each call to
:meth:`ProgressionEngine.handle_action` performs exactly one transition and
returns the narrative plus the single control to offer next.  Transitions are
atomic: if anything raises mid-turn the session is restored to the state it
had before the action.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, Dict, Mapping, Optional

from .battle import resolve_battle
from .constants import (
    CAPTURE_SHINY_CHANCE,
    LEGENDARY_POWER,
    SHINY_EMOJI,
    STARTERS,
    STARTER_SHINY_CHANCE,
    TRAINER_BATTLE_WIN_CHANCE,
)
from .evolution import EvolutionFailed, EvolutionResolver
from .models.session import (
    FINAL_GYM_ROUND,
    MAX_BADGES,
    POTION_ITEM_KEY,
    ActionTag,
    GameStage,
    ProgressionSession,
)
from .provider import CreatureProvider
from .utils import build_status_text
from .wheel import (
    AdventureEvent,
    spin_gender,
    spin_generation,
    spin_main_adventure,
    spin_start_adventure,
)

log = logging.getLogger(__name__)


class InvalidActionError(ValueError):
    """Raised when a control does not apply to the session's current stage."""

    def __init__(self, stage: GameStage, action: str, reason: str) -> None:
        self.stage = stage
        self.action = action
        self.reason = reason
        super().__init__(f"Cannot {action!r} during {stage.value}: {reason}")


@dataclass(slots=True)
class TurnOutcome:
    narrative: str
    stage: GameStage
    action_label: Optional[str] = None
    action_tag: Optional[ActionTag] = None

    @property
    def finished(self) -> bool:
        return self.action_tag is None


STAGE_TRIGGERS: Mapping[GameStage, ActionTag] = {
    GameStage.GEN_ROULETTE: ActionTag.SPIN,
    GameStage.GENDER_ROULETTE: ActionTag.SPIN,
    GameStage.STARTER_ROULETTE: ActionTag.SPIN,
    GameStage.START_ADVENTURE: ActionTag.SPIN,
    GameStage.GYM_BATTLE: ActionTag.FIGHT,
    GameStage.EVOLUTION: ActionTag.SPIN,
    GameStage.ADVENTURE: ActionTag.SPIN,
}

CAPTURE_EVENTS = frozenset(
    {
        AdventureEvent.CATCH_POKEMON,
        AdventureEvent.EXPLORE_CAVE,
        AdventureEvent.FISHING,
        AdventureEvent.SNORLAX,
        AdventureEvent.VISIT_DAYCARE,
        AdventureEvent.MYSTERIOUS_EGG,
    }
)

POTION_REWARDS: Mapping[AdventureEvent, int] = {
    AdventureEvent.BUY_POTIONS: 1,
    AdventureEvent.FIND_ITEM: 1,
    AdventureEvent.FOSSIL: 1,
    AdventureEvent.MULTITASK: 2,
}

TRAINER_BATTLE_EVENTS = frozenset(
    {
        AdventureEvent.BATTLE_TRAINER,
        AdventureEvent.RIVAL,
        AdventureEvent.TEAM_ROCKET,
    }
)

StageHandler = Callable[[ProgressionSession], Awaitable[TurnOutcome]]


def gym_heading(session: ProgressionSession) -> str:
    if session.badges == 0:
        return "🏛️ **First Gym Battle** approaching!"
    if session.badges < MAX_BADGES:
        return f"🏛️ **Gym Battle #{session.badges + 1}** upcoming!"
    return "👑 **Champion Battle** awaits!"


def _battle_outcome(session: ProgressionSession, narrative: str) -> TurnOutcome:
    label = "👑 Challenge the Champion" if session.badges >= MAX_BADGES else "⚔️ Battle Gym Leader"
    return TurnOutcome(
        f"{narrative}\n\n{gym_heading(session)}",
        session.stage,
        label,
        ActionTag.FIGHT,
    )


class ProgressionEngine:
    def __init__(
        self,
        provider: CreatureProvider,
        *,
        rng: random.Random | None = None,
        evolution: EvolutionResolver | None = None,
    ) -> None:
        self.provider = provider
        self.rng = rng or random.Random()
        self.evolution = evolution or EvolutionResolver(provider, rng=self.rng)
        self._handlers: Dict[GameStage, StageHandler] = {
            GameStage.GEN_ROULETTE: self._spin_generation,
            GameStage.GENDER_ROULETTE: self._spin_gender,
            GameStage.STARTER_ROULETTE: self._spin_starter,
            GameStage.START_ADVENTURE: self._start_adventure,
            GameStage.GYM_BATTLE: self._gym_battle,
            GameStage.EVOLUTION: self._evolve,
            GameStage.ADVENTURE: self._adventure,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def opening(self) -> TurnOutcome:
        return TurnOutcome(
            "🎰 **Pokémon Roulette Started!**\nFirst up: Which Generation will you play?",
            GameStage.GEN_ROULETTE,
            "🎲 Spin Generation",
            ActionTag.SPIN,
        )

    def status(self, session: ProgressionSession) -> str:
        return build_status_text(session)

    async def handle_action(
        self,
        session: ProgressionSession,
        action: ActionTag | str,
        *,
        expected_stage: GameStage | None = None,
    ) -> TurnOutcome:
        """Apply one player action and return what to show next.

        ``expected_stage`` is the stage the pressed control was rendered
        for; a mismatch means the control is stale and the action is
        rejected without touching the session.
        """

        try:
            tag = ActionTag.from_value(action)
        except ValueError:
            raise InvalidActionError(session.stage, str(action), "unknown control") from None
        if session.is_finished:
            return self.final_summary(session)
        if expected_stage is not None and expected_stage is not session.stage:
            raise InvalidActionError(
                session.stage, tag.value, f"control was issued for {expected_stage.value}"
            )
        required = STAGE_TRIGGERS[session.stage]
        if tag is not required:
            raise InvalidActionError(
                session.stage, tag.value, f"expected {required.value!r}"
            )

        handler = self._handlers[session.stage]
        previous = session.stage
        snapshot = session.snapshot()
        try:
            outcome = await handler(session)
        except BaseException:
            session.restore(snapshot)
            raise
        log.debug(
            "Player %s: %s -> %s", session.player_id, previous.value, session.stage.value
        )
        return outcome

    def final_summary(self, session: ProgressionSession) -> TurnOutcome:
        title = "🏆 HALL OF FAME 🏆" if session.stage is GameStage.VICTORY else "☠️ GAME OVER ☠️"
        narrative = f"{title}\n\n{self.status(session)}\n\n/start to play again."
        return TurnOutcome(narrative, session.stage)

    async def apply_event(self, session: ProgressionSession, event: AdventureEvent) -> str:
        """Apply an adventure event's effect and describe it."""

        lines = [f"🎲 **Event:** {event.display_name}"]
        if event in CAPTURE_EVENTS:
            lines.append(await self._capture(session))
        elif event is AdventureEvent.CATCH_TWO:
            lines.append(await self._capture(session))
            lines.append(await self._capture(session))
        elif event is AdventureEvent.LEGENDARY:
            lines.append(await self._capture(session, legendary=True))
        elif event in POTION_REWARDS:
            amount = POTION_REWARDS[event]
            session.add_item(POTION_ITEM_KEY, amount)
            lines.append(f"🧪 Found {amount} Potion(s)!")
        elif event in TRAINER_BATTLE_EVENTS:
            if self.rng.random() < TRAINER_BATTLE_WIN_CHANCE:
                session.add_item(POTION_ITEM_KEY)
                lines.append("⚔️ Won the battle! +1 Potion.")
            else:
                lines.append("😵 Lost the battle (Fled).")
        elif event is AdventureEvent.TRADE:
            lines.append(await self._trade(session))
        else:
            lines.append("(Nothing happened)")
        return "\n".join(lines)

    # ------------------------------------------------------------------
    # Stage handlers
    # ------------------------------------------------------------------

    async def _spin_generation(self, session: ProgressionSession) -> TurnOutcome:
        session.generation = spin_generation(self.rng)
        session.stage = GameStage.GENDER_ROULETTE
        return TurnOutcome(
            f"🌍 **Generation {session.generation}** selected!\n"
            "Next: Are you a Boy or a Girl?",
            session.stage,
            "🎲 Spin Gender",
            ActionTag.SPIN,
        )

    async def _spin_gender(self, session: ProgressionSession) -> TurnOutcome:
        session.gender = spin_gender(self.rng)
        session.stage = GameStage.STARTER_ROULETTE
        return TurnOutcome(
            f"👤 You are a **{session.gender.label}**!\nNext: Who will be your partner?",
            session.stage,
            "🎲 Spin Starter",
            ActionTag.SPIN,
        )

    async def _spin_starter(self, session: ProgressionSession) -> TurnOutcome:
        starters = STARTERS.get(session.generation, STARTERS[1])
        species_id, name = self.rng.choice(starters)
        shiny = self.rng.random() < STARTER_SHINY_CHANCE
        starter = await self.provider.fetch_by_id(species_id, shiny=shiny)
        if starter is None:
            log.warning(
                "Starter %s (#%s) unavailable for player %s",
                name,
                species_id,
                session.player_id,
            )
            return TurnOutcome(
                f"📦 {name} slipped out of its Poké Ball! Spin again to pick a partner.",
                session.stage,
                "🎲 Spin Starter",
                ActionTag.SPIN,
            )
        session.add_creature(starter)
        session.stage = GameStage.START_ADVENTURE
        text = f"📦 You obtained **{starter.name}**!"
        if starter.shiny:
            text += f"\n{SHINY_EMOJI} **SHINY ALERT!** Your starter is Shiny! {SHINY_EMOJI}"
        text += "\n\n🤔 **What to do first?**"
        return TurnOutcome(text, session.stage, "🎲 Spin First Event", ActionTag.SPIN)

    async def _start_adventure(self, session: ProgressionSession) -> TurnOutcome:
        event = spin_start_adventure(self.rng)
        text = await self.apply_event(session, event)
        session.stage = GameStage.GYM_BATTLE
        return _battle_outcome(session, text)

    async def _gym_battle(self, session: ProgressionSession) -> TurnOutcome:
        if resolve_battle(session, self.rng):
            champion_fight = session.badges >= MAX_BADGES
            session.badges = min(session.badges + 1, MAX_BADGES)
            session.round += 1
            if champion_fight:
                text = "🎉 **VICTORY!** The Champion has fallen!"
            else:
                text = f"🎉 **VICTORY!** Badge #{session.badges} obtained!"
            if session.badges >= MAX_BADGES and session.round > FINAL_GYM_ROUND:
                session.stage = GameStage.VICTORY
                text += "\n\n🏆 **CHAMPION!** You defeated everyone!"
                return TurnOutcome(text, session.stage, "🏁 Hall of Fame", ActionTag.SPIN)
            session.stage = GameStage.EVOLUTION
            return TurnOutcome(text, session.stage, "🧬 Spin Evolution", ActionTag.SPIN)

        if session.use_potion():
            return TurnOutcome(
                "💥 **DEFEAT!** You used a Potion to revive your team. Try again?",
                session.stage,
                "⚔️ Retry Battle",
                ActionTag.FIGHT,
            )
        session.stage = GameStage.GAME_OVER
        return TurnOutcome(
            "☠️ **GAME OVER** You have no Potions left.",
            session.stage,
            "🏁 See Final Team",
            ActionTag.SPIN,
        )

    async def _evolve(self, session: ProgressionSession) -> TurnOutcome:
        try:
            result = await self.evolution.resolve(session.team)
        except EvolutionFailed as exc:
            text = f"🧬 {exc.creature.name} tried to evolve but failed!"
        else:
            if result is None:
                text = "🧬 You watched your team, but none of them can evolve right now."
            else:
                text = (
                    f"🧬 **Evolution Time!**\nWhat? {result.old.name} is evolving...\n\n"
                    f"🎉 Congratulations! Your **{result.old.name}** evolved into "
                    f"**{result.new.name}**!\n(New Power: {result.new.power})"
                )
        session.stage = GameStage.ADVENTURE
        return TurnOutcome(text, session.stage, "🌲 Continue Adventure", ActionTag.SPIN)

    async def _adventure(self, session: ProgressionSession) -> TurnOutcome:
        event = spin_main_adventure(self.rng)
        text = await self.apply_event(session, event)
        session.stage = GameStage.GYM_BATTLE
        return _battle_outcome(session, text)

    # ------------------------------------------------------------------
    # Event effects
    # ------------------------------------------------------------------

    async def _capture(self, session: ProgressionSession, *, legendary: bool = False) -> str:
        creature = await self.provider.fetch_random_in_generation(session.generation)
        if creature is None:
            return "🌫️ The wild Pokémon got away before you could catch it."
        creature = creature.with_shiny(self.rng.random() < CAPTURE_SHINY_CHANCE)
        if legendary:
            creature = replace(creature, power=LEGENDARY_POWER)
        shiny_mark = f" {SHINY_EMOJI}" if creature.shiny else ""
        if session.add_creature(creature):
            return f"✅ Caught **{creature.name}**!{shiny_mark}"
        return f"📦 Caught **{creature.name}**{shiny_mark} (Sent to PC)"

    async def _trade(self, session: ProgressionSession) -> str:
        if not session.team:
            return "(No Pokémon to trade)"
        incoming = await self.provider.fetch_random_in_generation(session.generation)
        if incoming is None:
            return "🔄 Your trade partner never showed up."
        incoming = incoming.with_shiny(self.rng.random() < CAPTURE_SHINY_CHANCE)
        index = self.rng.randrange(len(session.team))
        outgoing = session.team[index]
        session.team[index] = incoming
        return f"🔄 Traded **{outgoing.name}** for **{incoming.name}**!"


__all__ = [
    "CAPTURE_EVENTS",
    "InvalidActionError",
    "POTION_REWARDS",
    "ProgressionEngine",
    "STAGE_TRIGGERS",
    "TRAINER_BATTLE_EVENTS",
    "TurnOutcome",
    "gym_heading",
]
