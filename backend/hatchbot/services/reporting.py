"""Hatch count aggregation over a time window."""

from __future__ import annotations

from datetime import datetime

from shared.models.hatch import RarityTier
from shared.repositories.hatch_log import HatchLogRepository


class ReportingAggregator:
    """Structured counts for a guild since a cutoff. Formatting lives in the cog."""

    def __init__(self, repo: HatchLogRepository) -> None:
        self.repo = repo

    async def total_since(self, guild_id: str, cutoff: datetime) -> int:
        return await self.repo.count_since(guild_id, cutoff)

    async def subject_since(self, guild_id: str, subject_name: str, cutoff: datetime) -> int:
        return await self.repo.count_subject_since(guild_id, subject_name, cutoff)

    async def per_subject_since(self, guild_id: str, cutoff: datetime) -> list[tuple[str, int]]:
        return await self.repo.count_per_subject_since(guild_id, cutoff)

    async def per_tier_since(self, guild_id: str, cutoff: datetime) -> dict[RarityTier, int]:
        """Count for each of the five tiers; untiered events are left out."""
        counts = {tier: 0 for tier in RarityTier}
        known = {tier.value: tier for tier in RarityTier}
        for rarity, count in await self.repo.count_per_rarity_since(guild_id, cutoff):
            tier = known.get(rarity) if rarity else None
            if tier is not None:
                counts[tier] += count
        return counts
