"""Tests for hatch tracker slash command callbacks."""

from types import SimpleNamespace

import pytest

from hatchbot.cogs.hatch.cog import HatchCog
from hatchbot.cogs.hatch.constants import (
    MSG_ADMIN_ONLY,
    MSG_GUILD_ONLY,
    MSG_INTERNAL_ERROR,
    MSG_INVALID_MULTIPLIER,
)
from shared.models.hatch import GuildSettings, HatchEvent, RarityTier


class FakeResponse:
    def __init__(self) -> None:
        self.done = False
        self.deferred_ephemeral: bool | None = None
        self.messages: list[tuple[str, bool]] = []

    def is_done(self) -> bool:
        return self.done

    async def defer(self, ephemeral: bool = False) -> None:
        self.done = True
        self.deferred_ephemeral = ephemeral

    async def send_message(self, content: str, ephemeral: bool = False) -> None:
        self.done = True
        self.messages.append((content, ephemeral))


class FakeFollowup:
    def __init__(self) -> None:
        self.messages: list[tuple[str, bool]] = []

    async def send(self, content: str, ephemeral: bool = False) -> None:
        self.messages.append((content, ephemeral))


class FakeInteraction:
    def __init__(self, guild_id: int | None = 42, administrator: bool = True) -> None:
        self.guild_id = guild_id
        self.permissions = SimpleNamespace(administrator=administrator)
        self.user = SimpleNamespace(id=1)
        self.response = FakeResponse()
        self.followup = FakeFollowup()

    @property
    def replies(self) -> list[tuple[str, bool]]:
        return self.response.messages + self.followup.messages


@pytest.fixture
def cog(resolver, reporting) -> HatchCog:
    return HatchCog(resolver, reporting)


@pytest.mark.asyncio
async def test_setup_saves_and_confirms(cog, settings_repo) -> None:
    interaction = FakeInteraction()
    channel = SimpleNamespace(id=555)
    await cog.setup_tracker.callback(cog, interaction, channel, "UTC+8", 2.0)

    assert settings_repo.rows["42"] == GuildSettings("42", "555", "UTC+8", 2.0)
    assert interaction.response.deferred_ephemeral is True
    [(content, ephemeral)] = interaction.followup.messages
    assert "<#555>" in content and "UTC+8" in content and "x2.0" in content
    assert ephemeral is True


@pytest.mark.asyncio
async def test_setup_applies_defaults(cog, settings_repo, defaults) -> None:
    interaction = FakeInteraction()
    await cog.setup_tracker.callback(cog, interaction, SimpleNamespace(id=1), None, None)
    saved = settings_repo.rows["42"]
    assert saved.timezone == defaults.timezone
    assert saved.loss_multiplier == defaults.loss_multiplier


@pytest.mark.asyncio
async def test_setup_requires_administrator(cog, settings_repo) -> None:
    interaction = FakeInteraction(administrator=False)
    await cog.setup_tracker.callback(cog, interaction, SimpleNamespace(id=1), None, None)
    assert interaction.replies == [(MSG_ADMIN_ONLY, True)]
    assert settings_repo.rows == {}


@pytest.mark.asyncio
async def test_setup_rejects_non_positive_multiplier(cog, settings_repo) -> None:
    interaction = FakeInteraction()
    await cog.setup_tracker.callback(cog, interaction, SimpleNamespace(id=1), None, 0.0)
    assert interaction.replies == [(MSG_INVALID_MULTIPLIER, True)]
    assert settings_repo.rows == {}


@pytest.mark.asyncio
async def test_commands_refuse_outside_guild(cog) -> None:
    interaction = FakeInteraction(guild_id=None)
    await cog.dailycount.callback(cog, interaction)
    assert interaction.replies == [(MSG_GUILD_ONLY, True)]


@pytest.mark.asyncio
async def test_dailycount_reports_today(cog, hatch_repo) -> None:
    await hatch_repo.insert(HatchEvent("42", "Rare", 9.5, RarityTier.GODLY))
    await hatch_repo.insert(HatchEvent("42", "Rare", 1.0, None))
    interaction = FakeInteraction()
    await cog.dailycount.callback(cog, interaction)

    [(content, _)] = interaction.followup.messages
    assert "**Total Eggs:** 2" in content
    assert "- Rare: 2" in content
    assert "Godly: 1" in content


@pytest.mark.asyncio
async def test_egg_all_lists_subjects(cog, hatch_repo) -> None:
    await hatch_repo.insert(HatchEvent("42", "Rare", 5.0, RarityTier.HUGE))
    await hatch_repo.insert(HatchEvent("42", "Common", 1.0, None))
    interaction = FakeInteraction()
    await cog.egg.callback(cog, interaction, "ALL", "7d")

    [(content, _)] = interaction.followup.messages
    assert content.startswith("Egg counts since ")
    assert "- Rare: 1\n- Common: 1\n" in content


@pytest.mark.asyncio
async def test_egg_single_subject_count(cog, hatch_repo) -> None:
    await hatch_repo.insert(HatchEvent("42", "Rare", 5.0, RarityTier.HUGE))
    interaction = FakeInteraction()
    await cog.egg.callback(cog, interaction, "Rare", "whenever")
    assert interaction.followup.messages == [("Rare hatched in the period: 1", False)]


@pytest.mark.asyncio
async def test_storage_failure_still_gets_a_reply(cog, settings_repo) -> None:
    settings_repo.fail = True
    interaction = FakeInteraction()
    await cog.egg.callback(cog, interaction, "all", "today")
    assert interaction.followup.messages == [(MSG_INTERNAL_ERROR, True)]


@pytest.mark.asyncio
async def test_period_autocomplete_filters(cog) -> None:
    choices = await cog.period_autocomplete(FakeInteraction(), "d")
    assert [choice.value for choice in choices] == ["today", "2d", "7d", "30d"]
