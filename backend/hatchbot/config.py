"""Hatchbot configuration"""

import logging
import os

import discord

from shared.models.hatch import SettingsDefaults

logger = logging.getLogger(__name__)

BOT_NAME = "Hatchbot"
BOT_VERSION = "1.0.0"


def _optional(name: str) -> str | None:
    return os.getenv(name) or None


class BotConfig:
    TOKEN: str | None = _optional("DISCORD_BOT_TOKEN")
    GUILD_ID: str | None = _optional("DISCORD_GUILD_ID")

    DATABASE_URL: str | None = _optional("DATABASE_URL")
    DATABASE_SSL: str | None = os.getenv("DATABASE_SSL", "require") or None

    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    WEBHOOK_MAX_BODY_BYTES: int = int(os.getenv("WEBHOOK_MAX_BODY_BYTES", str(1024 * 1024)))

    # Fallbacks for guilds that never ran /setup
    WEBHOOK_CHANNEL_ID: str | None = _optional("WEBHOOK_CHANNEL_ID")
    TIMEZONE_OFFSET: str = os.getenv("TIMEZONE_OFFSET", "UTC+0")
    LOSS_MULTIPLIER: float = float(os.getenv("LOSS_MULTIPLIER", "1.0"))
    CHANNEL_FALLBACK_ENABLED: bool = (
        os.getenv("CHANNEL_FALLBACK_ENABLED", "true").lower() == "true"
    )

    STATUS: str = os.getenv("DISCORD_STATUS", "")
    ACTIVITY_TYPE: str = os.getenv("DISCORD_ACTIVITY_TYPE", "")
    ACTIVITY_NAME: str = os.getenv("DISCORD_ACTIVITY_NAME", "")

    @classmethod
    def settings_defaults(cls) -> SettingsDefaults:
        return SettingsDefaults(
            notification_channel_id=cls.WEBHOOK_CHANNEL_ID,
            timezone=cls.TIMEZONE_OFFSET,
            loss_multiplier=cls.LOSS_MULTIPLIER,
        )

    @classmethod
    def get_status(cls) -> discord.Status:
        status_map = {
            "online": discord.Status.online,
            "idle": discord.Status.idle,
            "dnd": discord.Status.dnd,
            "invisible": discord.Status.invisible,
        }
        return status_map.get(cls.STATUS.lower(), discord.Status.online)

    @classmethod
    def get_activity(cls) -> discord.Activity | None:
        """Presence activity from DISCORD_ACTIVITY_TYPE / DISCORD_ACTIVITY_NAME.

        Supports: playing, listening, watching, competing
        """
        if not cls.ACTIVITY_NAME:
            return None

        activity_map = {
            "playing": discord.ActivityType.playing,
            "listening": discord.ActivityType.listening,
            "watching": discord.ActivityType.watching,
            "competing": discord.ActivityType.competing,
        }
        activity_type = activity_map.get(cls.ACTIVITY_TYPE.lower())
        if activity_type is None:
            if cls.ACTIVITY_TYPE:
                logger.warning(
                    f"Unknown DISCORD_ACTIVITY_TYPE '{cls.ACTIVITY_TYPE}', using 'playing'"
                )
            activity_type = discord.ActivityType.playing
        return discord.Activity(type=activity_type, name=cls.ACTIVITY_NAME)
