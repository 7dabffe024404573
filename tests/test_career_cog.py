"""Button dispatch and slash commands of the career cog."""

from __future__ import annotations

import asyncio
import random
from types import SimpleNamespace

from roulette.cogs.career import CareerCog
from roulette.config import BotConfig
from roulette.constants import NOT_YOUR_SESSION_NOTICE, STALE_ACTION_NOTICE
from roulette.game import ProgressionEngine, TurnOutcome
from roulette.models.session import ActionTag, GameStage
from roulette.sessions import SessionStore
from roulette.views import CareerView, OwnedView


class _Response:
    def __init__(self) -> None:
        self.deferred = False
        self.sent: list[tuple[str, bool]] = []

    def is_done(self) -> bool:
        return self.deferred or bool(self.sent)

    async def defer(self) -> None:
        self.deferred = True

    async def send_message(self, content: str, *, ephemeral: bool = False) -> None:
        self.sent.append((content, ephemeral))


class _Followup:
    def __init__(self) -> None:
        self.sent: list[tuple[str, bool]] = []

    async def send(self, content: str, *, ephemeral: bool = False) -> None:
        self.sent.append((content, ephemeral))


class _Interaction:
    def __init__(self, user_id: int) -> None:
        self.user = SimpleNamespace(id=user_id)
        self.message = None
        self.response = _Response()
        self.followup = _Followup()
        self.edits: list[SimpleNamespace] = []

    async def edit_original_response(self, *, content: str, view=None) -> SimpleNamespace:
        edited = SimpleNamespace(content=content, view=view)
        self.edits.append(edited)
        return edited


def _fixed(value: float) -> random.Random:
    rng = random.Random(0)
    rng.random = lambda: value  # type: ignore[assignment]
    return rng


def _cog(store: SessionStore, provider) -> CareerCog:
    bot = SimpleNamespace(
        config=BotConfig(token="test"),
        store=store,
        engine=ProgressionEngine(provider, rng=_fixed(0.0)),
    )
    return CareerCog(bot)  # type: ignore[arg-type]


def _gym_outcome() -> TurnOutcome:
    return TurnOutcome("🏟️ Gym time", GameStage.GYM_BATTLE, "⚔️ Battle Gym Leader", ActionTag.FIGHT)


def test_control_from_replaced_career_is_rejected(provider) -> None:
    store = SessionStore()
    cog = _cog(store, provider)

    async def scenario():
        old = await store.get(1)
        old.stage = GameStage.GYM_BATTLE
        old_view = cog._build_view(old, _gym_outcome())
        fresh = await store.reset(1)
        fresh.stage = GameStage.GYM_BATTLE
        interaction = _Interaction(1)
        await old_view.dispatch(interaction)
        return old_view, fresh, interaction

    old_view, fresh, interaction = asyncio.run(scenario())

    assert fresh.stage is GameStage.GYM_BATTLE
    assert fresh.badges == 0
    assert fresh.round == 0
    assert interaction.followup.sent == [(STALE_ACTION_NOTICE, True)]
    assert interaction.edits == []
    assert old_view.is_finished()


def test_control_from_current_career_advances_and_rebinds(provider) -> None:
    store = SessionStore()
    cog = _cog(store, provider)

    async def scenario():
        session = await store.get(1)
        session.stage = GameStage.GYM_BATTLE
        view = cog._build_view(session, _gym_outcome())
        interaction = _Interaction(1)
        await view.dispatch(interaction)
        return session, interaction

    session, interaction = asyncio.run(scenario())

    assert session.badges == 1
    assert session.stage is GameStage.EVOLUTION
    assert interaction.followup.sent == []
    assert len(interaction.edits) == 1
    next_view = interaction.edits[0].view
    assert isinstance(next_view, CareerView)
    assert next_view.session is session
    assert next_view.stage is GameStage.EVOLUTION
    assert next_view.message is interaction.edits[0]


def test_start_defers_before_resetting(provider) -> None:
    seen: list[bool] = []

    class RecordingStore(SessionStore):
        async def reset(self, player_id: int):
            seen.append(interaction.response.deferred)
            return await super().reset(player_id)

    store = RecordingStore()
    cog = _cog(store, provider)
    interaction = _Interaction(7)

    async def scenario():
        await CareerCog.start.callback(cog, interaction)  # type: ignore[arg-type]

    asyncio.run(scenario())

    assert seen == [True]
    assert interaction.response.sent == []
    assert len(interaction.edits) == 1
    opening = interaction.edits[0]
    assert "Pokémon Roulette Started" in opening.content
    assert opening.view.session is store.peek(7)
    assert opening.view.stage is GameStage.GEN_ROULETTE
    assert opening.view.message is opening


def test_other_players_cannot_press_the_owner_buttons() -> None:
    async def scenario():
        view = OwnedView(5)
        stranger = _Interaction(6)
        owner = _Interaction(5)
        return (
            await view.interaction_check(stranger),
            await view.interaction_check(owner),
            stranger,
            owner,
        )

    stranger_allowed, owner_allowed, stranger, owner = asyncio.run(scenario())

    assert stranger_allowed is False
    assert stranger.response.sent == [(NOT_YOUR_SESSION_NOTICE, True)]
    assert owner_allowed is True
    assert owner.response.sent == []
