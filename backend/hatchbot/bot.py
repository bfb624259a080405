"""
Hatchbot Discord Bot
Egg hatch tracker: webhook ingestion plus slash command reports (discord.py 2.x)
"""

import asyncio
import logging
from pathlib import Path

# Load .env before importing config
from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).parent / ".env", encoding="utf-8")

import discord  # noqa: E402
from discord.ext import commands  # noqa: E402

from hatchbot.config import BOT_NAME, BOT_VERSION, BotConfig  # noqa: E402
from hatchbot.core import WebhookServer, setup_logging  # noqa: E402
from hatchbot.errors import ConfigurationError  # noqa: E402
from hatchbot.services import (  # noqa: E402
    HatchIngestor,
    ReportingAggregator,
    SettingsResolver,
)
from shared.database import DatabaseManager, PoolConfig  # noqa: E402
from shared.migrations.runner import MigrationRunner  # noqa: E402
from shared.repositories import HatchLogRepository, SettingsRepository  # noqa: E402

logger = logging.getLogger("hatchbot")


class HatchBot(commands.Bot):
    """Hatchbot Discord client. Owns the database pool and the webhook server."""

    def __init__(self, database_url: str):
        intents = discord.Intents.default()

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
        )

        self.initial_extensions = ["hatchbot.cogs.hatch"]
        self.db = DatabaseManager(database_url, PoolConfig(ssl=BotConfig.DATABASE_SSL))
        self.settings_resolver: SettingsResolver
        self.reporting: ReportingAggregator
        self.webhook_server: WebhookServer | None = None

    async def setup_hook(self):
        """Connect storage, wire services, start HTTP and sync commands."""
        await self.db.connect()
        await MigrationRunner(self.db.pool).run_pending()

        settings_repo = SettingsRepository(self.db.pool)
        hatch_repo = HatchLogRepository(self.db.pool)
        self.settings_resolver = SettingsResolver(
            settings_repo,
            BotConfig.settings_defaults(),
            channel_fallback=BotConfig.CHANNEL_FALLBACK_ENABLED,
        )
        self.reporting = ReportingAggregator(hatch_repo)

        ingestor = HatchIngestor(
            self.settings_resolver, hatch_repo, default_channel_id=BotConfig.WEBHOOK_CHANNEL_ID
        )
        self.webhook_server = WebhookServer(
            ingestor,
            bot=self,
            db=self.db,
            host=BotConfig.HOST,
            port=BotConfig.PORT,
            max_body_bytes=BotConfig.WEBHOOK_MAX_BODY_BYTES,
        )
        await self.webhook_server.start()

        for extension in self.initial_extensions:
            await self.load_extension(extension)
        logger.info(f"[green]Loaded extensions:[/green] {', '.join(self.initial_extensions)}")

        logger.info("[yellow]Syncing slash commands...[/yellow]")
        if BotConfig.GUILD_ID:
            # Guild sync is immediate; global sync can take up to an hour
            guild = discord.Object(id=int(BotConfig.GUILD_ID))
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            logger.info(f"[magenta]Slash commands synced to guild {BotConfig.GUILD_ID}[/magenta]")
        else:
            await self.tree.sync()
            logger.info("[magenta]Slash commands synced globally[/magenta]")

    async def on_ready(self):
        await self.change_presence(
            status=BotConfig.get_status(), activity=BotConfig.get_activity()
        )
        logger.info(
            f"[bold green]{BOT_NAME} {BOT_VERSION} ready:[/bold green] {self.user} "
            f"[dim](ID: {self.user.id if self.user else '?'})[/dim]"
        )
        logger.info(
            f"[cyan]Connected:[/cyan] {len(self.guilds)} guild(s) | discord.py {discord.__version__}"
        )

    async def close(self):
        if self.webhook_server is not None:
            await self.webhook_server.stop()
        await self.db.disconnect()
        await super().close()


def load_startup_config() -> tuple[str, str]:
    """Token and database URL, both required."""
    if not BotConfig.TOKEN:
        raise ConfigurationError("DISCORD_BOT_TOKEN is not set")
    if not BotConfig.DATABASE_URL:
        raise ConfigurationError("DATABASE_URL is not set")
    return BotConfig.TOKEN, BotConfig.DATABASE_URL


async def main():
    """Bot entry point"""
    setup_logging()
    try:
        token, database_url = load_startup_config()
    except ConfigurationError as e:
        logger.error(f"[bold red]{e}[/bold red]")
        logger.error("Set it in backend/hatchbot/.env or the environment")
        return

    async with HatchBot(database_url) as bot:
        try:
            await bot.start(token)
        except (KeyboardInterrupt, asyncio.CancelledError):
            if not bot.is_closed():
                await bot.close()


def run() -> None:
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("[yellow]Bot stopped[/yellow]")


if __name__ == "__main__":
    run()
