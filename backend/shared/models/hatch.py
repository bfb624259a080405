"""Data models for the settings and hatch_logs tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# Guild id recorded when a delivery cannot be attributed to any guild
UNATTRIBUTED_GUILD_ID = "unknown"

_TZ_OFFSET_RE = re.compile(r"UTC([+-]\d{1,2})", re.IGNORECASE)


class RarityTier(str, Enum):
    """Rarity tiers, ordered from lightest to heaviest band."""

    SEMI_HUGE = "semi_huge"
    HUGE = "huge"
    SEMI_TITAN = "semi_titan"
    TITAN = "titan"
    GODLY = "godly"

    @property
    def label(self) -> str:
        return self.value.replace("_", "-").title()


def parse_timezone_offset(token: str | None) -> int:
    """Parse a ``UTC+8`` style token into signed hours. Unparseable tokens are 0."""
    if not token:
        return 0
    match = _TZ_OFFSET_RE.search(token)
    return int(match.group(1)) if match else 0


@dataclass(frozen=True)
class SettingsDefaults:
    """Process-wide fallbacks for unset guild settings."""

    notification_channel_id: str | None = None
    timezone: str = "UTC+0"
    loss_multiplier: float = 1.0


@dataclass
class GuildSettings:
    """Per-guild tracker configuration."""

    guild_id: str
    notification_channel_id: str | None = None
    timezone: str | None = None
    loss_multiplier: float | None = None

    @property
    def timezone_offset_hours(self) -> int:
        return parse_timezone_offset(self.timezone)


@dataclass
class HatchEvent:
    """A single logged hatch."""

    guild_id: str
    subject_name: str
    weight_kg: float
    rarity: RarityTier | None = None
    occurred_at: datetime | None = None
    id: int | None = None
