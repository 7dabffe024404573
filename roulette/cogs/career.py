from __future__ import annotations

import logging

import discord
from discord import app_commands
from discord.ext import commands

from ..config import BotConfig
from ..constants import STALE_ACTION_NOTICE
from ..game import InvalidActionError, TurnOutcome
from ..models.session import ProgressionSession
from ..views import CareerView
from .base import RouletteCog


class CareerCog(RouletteCog):
    def __init__(self, bot: commands.Bot):
        super().__init__(bot)
        self.config: BotConfig = bot.config  # type: ignore[assignment]
        self.log = logging.getLogger(__name__)

    def _build_view(
        self, session: ProgressionSession, outcome: TurnOutcome
    ) -> CareerView | None:
        if outcome.action_tag is None or outcome.action_label is None:
            return None
        return CareerView(
            session.player_id,
            session=session,
            stage=outcome.stage,
            label=outcome.action_label,
            action_tag=outcome.action_tag,
            on_action=self._handle_action,
            timeout=self.config.view_timeout,
        )

    async def _handle_action(
        self, interaction: discord.Interaction, view: CareerView
    ) -> None:
        player_id = interaction.user.id
        await interaction.response.defer()
        async with self.store.acquire(player_id) as session:
            if view.session is not None and view.session is not session:
                self.log.info(
                    "Rejected control from a replaced career for player %s", player_id
                )
                view.stop()
                await interaction.followup.send(STALE_ACTION_NOTICE, ephemeral=True)
                return
            try:
                outcome = await self.engine.handle_action(
                    session, view.action_tag, expected_stage=view.stage
                )
            except InvalidActionError as exc:
                self.log.info("Rejected action for player %s: %s", player_id, exc)
                await interaction.followup.send(STALE_ACTION_NOTICE, ephemeral=True)
                return
            view.stop()
            await self._render(interaction, session, outcome)

    async def _render(
        self,
        interaction: discord.Interaction,
        session: ProgressionSession,
        outcome: TurnOutcome,
    ) -> None:
        next_view = self._build_view(session, outcome)
        message = interaction.message
        if next_view is None and message is not None and message.content == outcome.narrative:
            self.log.debug("Career message for %s unchanged", interaction.user.id)
            return
        edited = await interaction.edit_original_response(
            content=outcome.narrative, view=next_view
        )
        if next_view is not None:
            next_view.message = edited

    @app_commands.command(name="start", description="Start a new Pokémon Roulette career")
    async def start(self, interaction: discord.Interaction) -> None:
        # Reset waits for any in-flight turn, so acknowledge first.
        await interaction.response.defer()
        session = await self.store.reset(interaction.user.id)
        outcome = self.engine.opening()
        view = self._build_view(session, outcome)
        assert view is not None
        view.message = await interaction.edit_original_response(
            content=outcome.narrative, view=view
        )

    @app_commands.command(name="team", description="Show your badges, items and team")
    async def team(self, interaction: discord.Interaction) -> None:
        session = await self.store.get(interaction.user.id)
        await interaction.response.send_message(self.engine.status(session))


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(CareerCog(bot))
