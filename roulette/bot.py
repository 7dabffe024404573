"""Entry point for the Pokémon Roulette Discord bot."""

from __future__ import annotations

import asyncio
import logging

import discord
from discord.ext import commands

from .config import BotConfig
from .game import ProgressionEngine
from .models.creatures import build_successor_table, load_successor_overrides
from .provider import PokeApiProvider
from .sessions import SessionStore

log = logging.getLogger(__name__)


class PokemonRoulette(commands.Bot):
    def __init__(self, config: BotConfig):
        intents = discord.Intents.default()
        super().__init__(command_prefix="!", intents=intents)
        self.config = config
        self.store = SessionStore()
        overrides = None
        if config.evolutions_path is not None:
            overrides = load_successor_overrides(config.evolutions_path)
            log.info(
                "Loaded %s evolution overrides from %s",
                len(overrides),
                config.evolutions_path,
            )
        self.provider = PokeApiProvider(
            base_url=config.pokeapi_url,
            timeout=config.provider_timeout,
            successors=build_successor_table(overrides),
        )
        self.engine = ProgressionEngine(self.provider)
        self._synced = False

    async def setup_hook(self) -> None:
        await self.load_extension("roulette.cogs.career")

    async def on_ready(self) -> None:
        if not self._synced:
            await self.tree.sync()
            self._synced = True
            log.info("Application commands synced")
        if self.user:
            log.info("Connected as %s (%s)", self.user, self.user.id)

    async def close(self) -> None:
        await self.provider.aclose()
        await super().close()


async def main() -> None:
    config = BotConfig.from_env()
    logging.basicConfig(level=config.log_level)
    bot = PokemonRoulette(config)
    async with bot:
        await bot.start(config.token)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
