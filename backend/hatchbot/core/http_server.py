"""HTTP server for hatch webhooks and health checks"""

import json
import logging
import time
from typing import TYPE_CHECKING, Any

from aiohttp import web

from hatchbot.services.ingest import HatchIngestor

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from shared.database import DatabaseManager

logger = logging.getLogger(__name__)

DEFAULT_MAX_BODY_BYTES = 1024 * 1024


class WebhookServer:
    """aiohttp server that records hatch deliveries posted to ``/webhook``."""

    def __init__(
        self,
        ingestor: HatchIngestor,
        bot: "Bot | None" = None,
        db: "DatabaseManager | None" = None,
        host: str = "0.0.0.0",
        port: int = 8080,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
    ) -> None:
        self.ingestor = ingestor
        self.bot: Any = bot
        self.db = db
        self.host = host
        self.port = port
        self.app = web.Application(client_max_size=max_body_bytes)
        self.runner: web.AppRunner | None = None
        self._start_time: float = time.time()
        self._setup_routes()

    def _setup_routes(self) -> None:
        self.app.router.add_post("/webhook", self.handle_webhook)
        self.app.router.add_get("/", self.handle_root)
        self.app.router.add_get("/health", self.handle_health)
        self.app.router.add_get("/ping", self.handle_ping)

    async def handle_webhook(self, request: web.Request) -> web.Response:
        """Ingest one delivery: 200 once stored, 500 on any failure."""
        try:
            body = await request.json()
            await self.ingestor.ingest(body)
        except web.HTTPException:
            raise
        except json.JSONDecodeError as e:
            logger.error(f"Webhook body is not valid JSON: {e}")
            return web.Response(status=500, text="Internal Server Error")
        except Exception as e:
            logger.exception(f"Webhook processing failed: {e}")
            return web.Response(status=500, text="Internal Server Error")
        return web.Response(status=200, text="OK")

    async def handle_root(self, request: web.Request) -> web.Response:
        return web.json_response({"service": "hatchbot", "status": "running"})

    async def handle_health(self, request: web.Request) -> web.Response:
        """Liveness — always 200, reports bot and database readiness."""
        ready = self.bot is not None and self.bot.is_ready()
        database = await self.db.check_health() if self.db is not None else False
        return web.json_response(
            {
                "status": "healthy" if ready and database else "starting",
                "ready": ready,
                "database": database,
                "uptime_seconds": int(time.time() - self._start_time),
            }
        )

    async def handle_ping(self, request: web.Request) -> web.Response:
        return web.Response(text="pong")

    async def start(self) -> None:
        self.runner = web.AppRunner(self.app)
        await self.runner.setup()
        site = web.TCPSite(self.runner, self.host, self.port)
        await site.start()
        logger.info(f"HTTP server started on {self.host}:{self.port}")
        logger.info(f"  POST http://{self.host}:{self.port}/webhook - Hatch webhook")
        logger.info(f"  GET  http://{self.host}:{self.port}/health  - Health check")

    async def stop(self) -> None:
        if self.runner:
            await self.runner.cleanup()
            self.runner = None
            logger.info("HTTP server stopped")
