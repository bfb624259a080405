"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from hatchbot.services.reporting import ReportingAggregator
from hatchbot.services.settings import SettingsResolver
from shared.models.hatch import GuildSettings, HatchEvent, SettingsDefaults


class InMemorySettingsRepository:
    """Dict-backed stand-in for SettingsRepository."""

    def __init__(self) -> None:
        self.rows: dict[str, GuildSettings] = {}
        self.fail = False

    async def get(self, guild_id: str) -> GuildSettings | None:
        if self.fail:
            raise ConnectionError("settings store unavailable")
        return self.rows.get(guild_id)

    async def find_guild_by_channel(self, channel_id: str | None) -> str | None:
        if self.fail:
            raise ConnectionError("settings store unavailable")
        for row in self.rows.values():
            if channel_id is not None and row.notification_channel_id == channel_id:
                return row.guild_id
        return None

    async def first_guild(self) -> str | None:
        return next(iter(self.rows), None)

    async def upsert(self, guild_id, channel_id, timezone, loss_multiplier) -> None:
        self.rows[guild_id] = GuildSettings(guild_id, channel_id, timezone, loss_multiplier)


class InMemoryHatchLogRepository:
    """List-backed stand-in for HatchLogRepository; list order is storage order."""

    def __init__(self) -> None:
        self.events: list[HatchEvent] = []
        self.fail = False

    async def insert(self, event: HatchEvent) -> HatchEvent:
        if self.fail:
            raise ConnectionError("hatch log unavailable")
        event.id = len(self.events) + 1
        if event.occurred_at is None:
            event.occurred_at = datetime.now(timezone.utc)
        self.events.append(event)
        return event

    def _since(self, guild_id: str, since: datetime) -> list[HatchEvent]:
        return [e for e in self.events if e.guild_id == guild_id and e.occurred_at >= since]

    async def count_since(self, guild_id, since) -> int:
        return len(self._since(guild_id, since))

    async def count_subject_since(self, guild_id, subject_name, since) -> int:
        return sum(1 for e in self._since(guild_id, since) if e.subject_name == subject_name)

    async def count_per_subject_since(self, guild_id, since) -> list[tuple[str, int]]:
        counts: dict[str, int] = {}
        for event in self._since(guild_id, since):
            counts[event.subject_name] = counts.get(event.subject_name, 0) + 1
        return sorted(counts.items(), key=lambda item: -item[1])

    async def count_per_rarity_since(self, guild_id, since) -> list[tuple[str | None, int]]:
        counts: dict[str | None, int] = {}
        for event in self._since(guild_id, since):
            key = event.rarity.value if event.rarity else None
            counts[key] = counts.get(key, 0) + 1
        return list(counts.items())


@pytest.fixture
def defaults() -> SettingsDefaults:
    return SettingsDefaults(notification_channel_id="999", timezone="UTC+0", loss_multiplier=1.0)


@pytest.fixture
def settings_repo() -> InMemorySettingsRepository:
    return InMemorySettingsRepository()


@pytest.fixture
def hatch_repo() -> InMemoryHatchLogRepository:
    return InMemoryHatchLogRepository()


@pytest.fixture
def resolver(settings_repo, defaults) -> SettingsResolver:
    return SettingsResolver(settings_repo, defaults)


@pytest.fixture
def reporting(hatch_repo) -> ReportingAggregator:
    return ReportingAggregator(hatch_repo)


@pytest.fixture
def now() -> datetime:
    """Reference time: Jan 15, 2024, 12:00 UTC."""
    return datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
