"""Shared helpers for cogs."""

from __future__ import annotations

import discord
from discord.ext import commands

from ..game import ProgressionEngine
from ..sessions import SessionStore


class RouletteCog(commands.Cog):
    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @property
    def store(self) -> SessionStore:
        return self.bot.store  # type: ignore[return-value]

    @property
    def engine(self) -> ProgressionEngine:
        return self.bot.engine  # type: ignore[return-value]

    async def send_notice(self, interaction: discord.Interaction, message: str) -> None:
        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)
