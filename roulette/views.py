"""Discord UI components for career turns."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable

import discord

from .constants import NOT_YOUR_SESSION_NOTICE
from .models.session import ActionTag, GameStage, ProgressionSession

log = logging.getLogger(__name__)

ActionCallback = Callable[[discord.Interaction, "CareerView"], Awaitable[None]]


class OwnedView(discord.ui.View):
    """Base view that restricts interactions to a single Discord user."""

    def __init__(self, owner_id: int | None, *, timeout: float = 120.0) -> None:
        super().__init__(timeout=timeout)
        self.owner_id = owner_id

    async def interaction_check(self, interaction: discord.Interaction) -> bool:  # type: ignore[override]
        if self.owner_id is None or interaction.user.id == self.owner_id:
            return True
        await interaction.response.send_message(NOT_YOUR_SESSION_NOTICE, ephemeral=True)
        return False


class CareerActionButton(discord.ui.Button["CareerView"]):
    def __init__(self, label: str, action_tag: ActionTag) -> None:
        style = (
            discord.ButtonStyle.danger
            if action_tag is ActionTag.FIGHT
            else discord.ButtonStyle.primary
        )
        super().__init__(style=style, label=label[:80])
        self.action_tag = action_tag

    async def callback(self, interaction: discord.Interaction) -> None:  # type: ignore[override]
        view = self.view
        if not isinstance(view, CareerView):
            await interaction.response.send_message(
                "This game session is no longer available.", ephemeral=True
            )
            return
        await view.dispatch(interaction)


class CareerView(OwnedView):
    """Single-button view bound to the session and stage it was rendered for."""

    def __init__(
        self,
        owner_id: int,
        *,
        stage: GameStage,
        label: str,
        action_tag: ActionTag,
        on_action: ActionCallback,
        timeout: float = 900.0,
        session: ProgressionSession | None = None,
    ) -> None:
        super().__init__(owner_id, timeout=timeout)
        self.stage = stage
        self.session = session
        self.action_tag = action_tag
        self._on_action = on_action
        self.message: discord.Message | None = None
        self.add_item(CareerActionButton(label, action_tag))

    async def dispatch(self, interaction: discord.Interaction) -> None:
        await self._on_action(interaction, self)

    async def on_timeout(self) -> None:
        for child in self.children:
            child.disabled = True  # type: ignore[attr-defined]
        if self.message is not None:
            try:
                await self.message.edit(view=self)
            except discord.HTTPException:
                pass

    async def on_error(  # type: ignore[override]
        self,
        interaction: discord.Interaction,
        error: Exception,
        item: discord.ui.Item[Any],
    ) -> None:
        log.error(
            "Career turn for player %s at %s failed",
            self.owner_id,
            self.stage.value,
            exc_info=error,
        )
        notice = "Something went wrong resolving that turn. Please try again."
        try:
            if interaction.response.is_done():
                await interaction.followup.send(notice, ephemeral=True)
            else:
                await interaction.response.send_message(notice, ephemeral=True)
        except discord.HTTPException:
            log.warning("Could not notify player %s about the failed turn", self.owner_id)


__all__ = ["ActionCallback", "CareerActionButton", "CareerView", "OwnedView"]
