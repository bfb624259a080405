"""Hatchbot exceptions."""


class HatchbotError(Exception):
    """Base class for Hatchbot errors."""


class ConfigurationError(HatchbotError):
    """Required startup configuration is missing or invalid."""
