"""Shared repository layer for Hatchbot services."""

from .hatch_log import HatchLogRepository
from .settings import SettingsRepository

__all__ = [
    "HatchLogRepository",
    "SettingsRepository",
]
