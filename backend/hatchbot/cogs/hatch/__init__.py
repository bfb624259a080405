"""Hatch tracker feature module."""

from discord.ext import commands

from .cog import HatchCog

__all__ = ["HatchCog", "setup"]


async def setup(bot: commands.Bot) -> None:
    """Extension entry point."""
    await bot.add_cog(HatchCog(bot.settings_resolver, bot.reporting))  # type: ignore[attr-defined]
