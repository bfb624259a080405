"""Repository for the append-only hatch_logs table."""

from __future__ import annotations

from datetime import datetime

import asyncpg

from shared.models.hatch import HatchEvent


class HatchLogRepository:
    """Pure SQL operations for hatch_logs.

    Rows are only ever inserted; the read side is limited to count and
    group-by queries bounded below by a cutoff timestamp.
    """

    def __init__(self, pool: asyncpg.Pool) -> None:
        self.pool = pool

    async def insert(self, event: HatchEvent) -> HatchEvent:
        """Append an event. ``occurred_at`` defaults to the database clock."""
        rarity = event.rarity.value if event.rarity else None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO hatch_logs (guild_id, subject_name, weight_kg, rarity, occurred_at)
                VALUES ($1, $2, $3, $4, COALESCE($5, NOW()))
                RETURNING id, occurred_at
                """,
                event.guild_id,
                event.subject_name,
                event.weight_kg,
                rarity,
                event.occurred_at,
            )
            if row is None:
                raise ValueError("Failed to insert hatch log: no row returned")

        event.id = int(row["id"])
        event.occurred_at = row["occurred_at"]
        return event

    async def count_since(self, guild_id: str, since: datetime) -> int:
        async with self.pool.acquire() as conn:
            count = await conn.fetchval(
                "SELECT COUNT(*) FROM hatch_logs WHERE guild_id = $1 AND occurred_at >= $2",
                guild_id,
                since,
            )
            return int(count or 0)

    async def count_subject_since(
        self, guild_id: str, subject_name: str, since: datetime
    ) -> int:
        async with self.pool.acquire() as conn:
            count = await conn.fetchval(
                """
                SELECT COUNT(*) FROM hatch_logs
                WHERE guild_id = $1 AND subject_name = $2 AND occurred_at >= $3
                """,
                guild_id,
                subject_name,
                since,
            )
            return int(count or 0)

    async def count_per_subject_since(
        self, guild_id: str, since: datetime
    ) -> list[tuple[str, int]]:
        """Counts per subject, highest first; ties keep insertion order."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT subject_name, COUNT(*) AS cnt
                FROM hatch_logs
                WHERE guild_id = $1 AND occurred_at >= $2
                GROUP BY subject_name
                ORDER BY cnt DESC, MIN(id) ASC
                """,
                guild_id,
                since,
            )
            return [(row["subject_name"], int(row["cnt"])) for row in rows]

    async def count_per_rarity_since(
        self, guild_id: str, since: datetime
    ) -> list[tuple[str | None, int]]:
        """Raw counts per rarity column value, including the NULL group."""
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(
                """
                SELECT rarity, COUNT(*) AS cnt
                FROM hatch_logs
                WHERE guild_id = $1 AND occurred_at >= $2
                GROUP BY rarity
                """,
                guild_id,
                since,
            )
            return [(row["rarity"], int(row["cnt"])) for row in rows]
