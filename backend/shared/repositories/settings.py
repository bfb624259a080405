"""Repository for the settings table."""

from __future__ import annotations

import asyncpg

from shared.models.hatch import GuildSettings

_SELECT_COLS = "guild_id, notification_channel_id, timezone, loss_multiplier"


class SettingsRepository:
    """Pure SQL operations for per-guild settings."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool

    async def get(self, guild_id: str) -> GuildSettings | None:
        """Get the stored settings row for a guild."""
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                f"SELECT {_SELECT_COLS} FROM settings WHERE guild_id = $1",
                guild_id,
            )
            return GuildSettings(**dict(row)) if row else None

    async def find_guild_by_channel(self, channel_id: str | None) -> str | None:
        """Return the guild whose notification channel is ``channel_id``."""
        if channel_id is None:
            return None
        async with self.pool.acquire() as conn:
            guild_id = await conn.fetchval(
                "SELECT guild_id FROM settings WHERE notification_channel_id = $1 LIMIT 1",
                channel_id,
            )
            return str(guild_id) if guild_id is not None else None

    async def first_guild(self) -> str | None:
        """Return any configured guild, or None when the table is empty."""
        async with self.pool.acquire() as conn:
            guild_id = await conn.fetchval("SELECT guild_id FROM settings LIMIT 1")
            return str(guild_id) if guild_id is not None else None

    async def upsert(
        self,
        guild_id: str,
        channel_id: str | None,
        timezone: str | None,
        loss_multiplier: float | None,
    ) -> None:
        """Insert or fully overwrite a guild's settings."""
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO settings (guild_id, notification_channel_id, timezone, loss_multiplier)
                VALUES ($1, $2, $3, $4)
                ON CONFLICT (guild_id) DO UPDATE SET
                    notification_channel_id = EXCLUDED.notification_channel_id,
                    timezone                = EXCLUDED.timezone,
                    loss_multiplier         = EXCLUDED.loss_multiplier,
                    updated_at              = NOW()
                """,
                guild_id,
                channel_id,
                timezone,
                loss_multiplier,
            )
