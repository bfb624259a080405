"""Hatch tracker cog."""

import logging
from datetime import datetime

import discord
from discord import app_commands
from discord.ext import commands

from hatchbot.services.period import PERIOD_TODAY, resolve_cutoff, utcnow
from hatchbot.services.reporting import ReportingAggregator
from hatchbot.services.settings import SettingsResolver

from .constants import (
    ALL_SUBJECTS,
    MSG_ADMIN_ONLY,
    MSG_GUILD_ONLY,
    MSG_INTERNAL_ERROR,
    MSG_INVALID_MULTIPLIER,
    PERIOD_SUGGESTIONS,
)
from .formatting import (
    format_daily_report,
    format_setup_confirmation,
    format_subject_breakdown,
    format_subject_count,
)

logger = logging.getLogger(__name__)


class HatchCog(commands.Cog):
    """Egg hatch tracker commands"""

    def __init__(self, settings: SettingsResolver, reporting: ReportingAggregator):
        self.settings = settings
        self.reporting = reporting

    # ==================== Helpers ====================

    @staticmethod
    async def _require_guild(interaction: discord.Interaction) -> str | None:
        """Guild id as stored in the database, or None after refusing."""
        if interaction.guild_id is None:
            await interaction.response.send_message(MSG_GUILD_ONLY, ephemeral=True)
            return None
        return str(interaction.guild_id)

    @staticmethod
    async def _reply(interaction: discord.Interaction, content: str, ephemeral: bool = False) -> None:
        if interaction.response.is_done():
            await interaction.followup.send(content, ephemeral=ephemeral)
        else:
            await interaction.response.send_message(content, ephemeral=ephemeral)

    async def _reply_failure(self, interaction: discord.Interaction, command: str, error: Exception) -> None:
        logger.exception(f"/{command} failed in guild {interaction.guild_id}: {error}")
        try:
            await self._reply(interaction, MSG_INTERNAL_ERROR, ephemeral=True)
        except discord.HTTPException as e:
            logger.error(f"Could not deliver failure notice for /{command}: {e}")

    async def _cutoff(self, guild_id: str, period: str, now: datetime) -> datetime:
        offset = 0
        if period.strip().lower() == PERIOD_TODAY:
            offset = (await self.settings.resolve(guild_id)).timezone_offset_hours
        return resolve_cutoff(period, offset, now)

    # ==================== Commands ====================

    @app_commands.command(name="setup", description="Configure egg tracker (admin)")
    @app_commands.describe(
        log_channel="Channel to log hatches",
        timezone="Timezone like UTC+8",
        loss_multiplier="Loss multiplier",
    )
    @app_commands.default_permissions(administrator=True)
    async def setup_tracker(
        self,
        interaction: discord.Interaction,
        log_channel: discord.TextChannel,
        timezone: str | None = None,
        loss_multiplier: float | None = None,
    ):
        guild_id = await self._require_guild(interaction)
        if guild_id is None:
            return

        if not interaction.permissions.administrator:
            await interaction.response.send_message(MSG_ADMIN_ONLY, ephemeral=True)
            logger.warning(f"Unauthorized /setup by {interaction.user} (ID: {interaction.user.id})")
            return

        if loss_multiplier is not None and loss_multiplier <= 0:
            await interaction.response.send_message(MSG_INVALID_MULTIPLIER, ephemeral=True)
            return

        defaults = self.settings.defaults
        tz = timezone or defaults.timezone
        loss = loss_multiplier if loss_multiplier is not None else defaults.loss_multiplier

        try:
            await interaction.response.defer(ephemeral=True)
            await self.settings.save(guild_id, str(log_channel.id), tz, loss)
            await self._reply(
                interaction, format_setup_confirmation(log_channel.id, tz, loss), ephemeral=True
            )
        except Exception as e:
            await self._reply_failure(interaction, "setup", e)

    @app_commands.command(name="dailycount", description="Show today's egg summary")
    async def dailycount(self, interaction: discord.Interaction):
        guild_id = await self._require_guild(interaction)
        if guild_id is None:
            return

        try:
            await interaction.response.defer()
            cutoff = await self._cutoff(guild_id, PERIOD_TODAY, utcnow())
            total = await self.reporting.total_since(guild_id, cutoff)
            per_subject = await self.reporting.per_subject_since(guild_id, cutoff)
            per_tier = await self.reporting.per_tier_since(guild_id, cutoff)
            await self._reply(interaction, format_daily_report(total, per_subject, per_tier))
        except Exception as e:
            await self._reply_failure(interaction, "dailycount", e)

    async def period_autocomplete(
        self, interaction: discord.Interaction, current: str
    ) -> list[app_commands.Choice[str]]:
        return [
            app_commands.Choice(name=period, value=period)
            for period in PERIOD_SUGGESTIONS
            if current.lower() in period
        ]

    @app_commands.command(name="egg", description="Count eggs for a type and period")
    @app_commands.describe(egg_type="Egg type or All", period="today|24h|2d|7d|30d")
    @app_commands.autocomplete(period=period_autocomplete)
    async def egg(self, interaction: discord.Interaction, egg_type: str, period: str):
        guild_id = await self._require_guild(interaction)
        if guild_id is None:
            return

        try:
            await interaction.response.defer()
            cutoff = await self._cutoff(guild_id, period, utcnow())

            if egg_type.lower() == ALL_SUBJECTS:
                per_subject = await self.reporting.per_subject_since(guild_id, cutoff)
                content = format_subject_breakdown(cutoff, per_subject)
            else:
                count = await self.reporting.subject_since(guild_id, egg_type, cutoff)
                content = format_subject_count(egg_type, count)

            await self._reply(interaction, content)
        except Exception as e:
            await self._reply_failure(interaction, "egg", e)
