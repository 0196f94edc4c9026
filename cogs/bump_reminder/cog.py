"""Bump Reminder Cog - Main orchestrator.

Wires Discord events and commands to the bump cycle tracker.
"""

from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands
from configs import settings
from core.checks import ensure_bump_channel
from core.logger import setup_logger

from .helpers import (
    build_confirmation_embed,
    build_cooldown_embed,
    build_help_embed,
    build_no_bump_embed,
    build_ready_embed,
)
from .models import CooldownStatus, ReconcileOutcome
from .tracker import BumpTracker

logger = setup_logger("BumpReminderCog", "cogs/bump.log")


class BumpReminderCog(commands.Cog):
    """Main cog for the bump reminder system.

    The cog handles:
    - Startup reconciliation from channel history (once per process)
    - Bump detection from integration messages in the monitored channel
    - The /bump slash command and the !cooldown / !help prefix commands
    - Cancelling the pending reminder on unload
    """

    def __init__(
        self,
        bot: commands.Bot,
        channel_id: int = settings.BUMP_CHANNEL_ID,
        role_id: int = settings.BUMP_ROLE_ID,
        tracker: Optional[BumpTracker] = None,
    ):
        self.bot = bot
        self.channel_id = channel_id
        self.role_id = role_id
        self.tracker = tracker or BumpTracker(role_id)
        self._reconciled = False
        logger.info(f"[BUMP_COG] Monitoring channel {channel_id}, mentioning role {role_id}")

    def cog_unload(self) -> None:
        """Cleanup when cog is unloaded.

        Cancels the pending reminder so no timer outlives the cog.
        """
        self.tracker.shutdown()
        logger.info("[BUMP_COG] Cog unloaded successfully")

    async def cog_check(self, ctx: commands.Context) -> bool:
        return ensure_bump_channel(ctx, self.channel_id)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    @commands.Cog.listener()
    async def on_ready(self):
        """Rebuild the bump cycle from history on first connect."""
        if self._reconciled:
            return
        self._reconciled = True
        await self.reconcile()

    async def reconcile(self) -> ReconcileOutcome:
        channel = await self._resolve_channel()
        if channel is None:
            return ReconcileOutcome.FAILED

        outcome = await self.tracker.reconcile_on_startup(channel, self.bot.user.id)
        logger.info(f"[BUMP_COG] Startup reconciliation finished: {outcome.value}")
        return outcome

    async def _resolve_channel(self):
        channel = self.bot.get_channel(self.channel_id)
        if channel is not None:
            return channel
        try:
            return await self.bot.fetch_channel(self.channel_id)
        except (discord.NotFound, discord.Forbidden) as e:
            logger.error(
                f"[BUMP_COG] Channel {self.channel_id} not found or not accessible: {e}. "
                f"Check BUMP_CHANNEL_ID, reconciliation skipped."
            )
        except discord.HTTPException as e:
            logger.error(
                f"[BUMP_COG] Failed to fetch channel {self.channel_id}: {e}. Reconciliation skipped.",
                exc_info=True
            )
        return None

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        """Route integration messages in the bump channel to the tracker.

        Prefix commands are handled by the commands framework; cog_check
        keeps them to the bump channel.
        """
        if message.channel.id != self.channel_id:
            return
        if not message.author.bot:
            return

        if self.tracker.detector.is_bump_confirmation(message):
            logger.info(f"[BUMP_DETECT] Bump confirmation from {message.author} (message {message.id})")
            self.tracker.record_bump(message.channel, source_message_id=message.id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @app_commands.command(name="bump", description="Bump the server and start the cooldown timer")
    async def bump_slash(self, interaction: discord.Interaction):
        """Record a manual bump."""
        if interaction.channel_id != self.channel_id:
            await interaction.response.send_message(
                f"This command only works in <#{self.channel_id}>", ephemeral=True
            )
            return

        logger.info(f"[BUMP_COG] /bump command detected by {interaction.user}")
        self.tracker.record_bump(interaction.channel)
        _, next_bump_at = self.tracker.status()

        embed = build_confirmation_embed(interaction.user.mention, next_bump_at)
        try:
            await interaction.response.send_message(embed=embed)
        except discord.HTTPException as e:
            logger.error(f"[BUMP_COG] Failed to send bump confirmation: {e}", exc_info=True)

    @commands.command(name="cooldown")
    async def cooldown(self, ctx: commands.Context):
        """Show how long until the next bump."""
        status, next_bump_at = self.tracker.status()
        if status is CooldownStatus.NO_BUMP:
            embed = build_no_bump_embed()
        elif status is CooldownStatus.READY:
            embed = build_ready_embed()
        else:
            embed = build_cooldown_embed(next_bump_at)

        try:
            await ctx.reply(embed=embed)
        except discord.HTTPException as e:
            logger.error(f"[BUMP_COG] Error handling cooldown command: {e}", exc_info=True)

    @commands.command(name="help")
    async def show_help(self, ctx: commands.Context):
        """Show the command overview."""
        try:
            await ctx.reply(embed=build_help_embed(self.channel_id))
        except discord.HTTPException as e:
            logger.error(f"[BUMP_COG] Error handling help command: {e}", exc_info=True)
