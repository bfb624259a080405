"""Per-guild settings lookup with process-wide defaults."""

from __future__ import annotations

import logging

from shared.models.hatch import GuildSettings, SettingsDefaults
from shared.repositories.settings import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsResolver:
    """Resolve guild settings and map webhook channels back to guilds.

    When ``channel_fallback`` is on, a delivery from an unknown channel is
    attributed to whichever guild is configured, which is only correct for a
    single-guild deployment.
    """

    def __init__(
        self,
        repo: SettingsRepository,
        defaults: SettingsDefaults,
        channel_fallback: bool = True,
    ) -> None:
        self.repo = repo
        self.defaults = defaults
        self.channel_fallback = channel_fallback

    async def resolve(self, guild_id: str) -> GuildSettings:
        """Stored settings merged field by field over the defaults."""
        stored = await self.repo.get(guild_id)
        defaults = self.defaults
        if stored is None:
            return GuildSettings(
                guild_id=guild_id,
                notification_channel_id=defaults.notification_channel_id,
                timezone=defaults.timezone,
                loss_multiplier=defaults.loss_multiplier,
            )

        return GuildSettings(
            guild_id=guild_id,
            notification_channel_id=stored.notification_channel_id
            or defaults.notification_channel_id,
            timezone=stored.timezone or defaults.timezone,
            loss_multiplier=float(stored.loss_multiplier or defaults.loss_multiplier),
        )

    async def resolve_by_channel(self, channel_id: str | None) -> str | None:
        """Guild configured for ``channel_id``, else the fallback guild if enabled."""
        guild_id = await self.repo.find_guild_by_channel(channel_id)
        if guild_id is not None or not self.channel_fallback:
            return guild_id

        guild_id = await self.repo.first_guild()
        if guild_id is not None:
            logger.debug(f"Channel {channel_id} not configured, falling back to guild {guild_id}")
        return guild_id

    async def save(
        self,
        guild_id: str,
        channel_id: str | None,
        timezone: str | None,
        loss_multiplier: float | None,
    ) -> None:
        """Overwrite all settings for a guild."""
        await self.repo.upsert(guild_id, channel_id, timezone, loss_multiplier)
        logger.info(
            f"Settings saved for guild {guild_id}: channel={channel_id}, "
            f"timezone={timezone}, loss_multiplier={loss_multiplier}"
        )
