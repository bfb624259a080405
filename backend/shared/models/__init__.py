"""Shared data models for Hatchbot services."""

from .hatch import (
    UNATTRIBUTED_GUILD_ID,
    GuildSettings,
    HatchEvent,
    RarityTier,
    SettingsDefaults,
    parse_timezone_offset,
)

__all__ = [
    "GuildSettings",
    "HatchEvent",
    "RarityTier",
    "SettingsDefaults",
    "UNATTRIBUTED_GUILD_ID",
    "parse_timezone_offset",
]
