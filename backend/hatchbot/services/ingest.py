"""Webhook delivery to hatch log pipeline."""

from __future__ import annotations

import logging
from typing import Any

from shared.models.hatch import UNATTRIBUTED_GUILD_ID, HatchEvent
from shared.repositories.hatch_log import HatchLogRepository

from .payload import interpret, parse_payload
from .rarity import classify
from .settings import SettingsResolver

logger = logging.getLogger(__name__)


class HatchIngestor:
    """Interpret, classify, attribute and record one delivery."""

    def __init__(
        self,
        settings: SettingsResolver,
        repo: HatchLogRepository,
        default_channel_id: str | None = None,
    ) -> None:
        self.settings = settings
        self.repo = repo
        self.default_channel_id = default_channel_id

    def build_event(self, body: Any) -> tuple[HatchEvent, str | None]:
        """Pure part of ingestion: the unattributed event and its source channel."""
        payload = parse_payload(body)
        subject_name, weight_kg = interpret(payload)
        event = HatchEvent(
            guild_id=UNATTRIBUTED_GUILD_ID,
            subject_name=subject_name,
            weight_kg=weight_kg,
            rarity=classify(weight_kg),
        )
        return event, payload.channel_id or self.default_channel_id

    async def ingest(self, body: Any) -> HatchEvent:
        """Record a delivery. Storage errors propagate to the caller."""
        event, channel_id = self.build_event(body)

        guild_id = await self.settings.resolve_by_channel(channel_id)
        if guild_id is None:
            logger.warning(f"Webhook received but no guild found for channel {channel_id}")
        else:
            event.guild_id = guild_id

        await self.repo.insert(event)
        rarity = event.rarity.value if event.rarity else None
        logger.info(
            f"Logged hatch: {event.subject_name}, {event.weight_kg}kg, "
            f"rarity: {rarity}, guild: {event.guild_id}"
        )
        return event
