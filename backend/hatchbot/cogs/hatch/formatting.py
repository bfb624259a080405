"""Reply text builders for hatch tracker commands."""

from __future__ import annotations

from datetime import datetime

from shared.models.hatch import RarityTier

from .constants import MAX_MESSAGE_LENGTH


def truncate(text: str, limit: int = MAX_MESSAGE_LENGTH) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "…"


def _subject_lines(per_subject: list[tuple[str, int]]) -> str:
    if not per_subject:
        return "- None -\n"
    return "".join(f"- {name}: {count}\n" for name, count in per_subject)


def format_daily_report(
    total: int,
    per_subject: list[tuple[str, int]],
    per_tier: dict[RarityTier, int],
) -> str:
    rarities = "".join(f"{tier.label}: {per_tier.get(tier, 0)}\n" for tier in RarityTier)
    return truncate(
        "**EGG TRACKER — DAILY REPORT**\n\n"
        f"**Total Eggs:** {total}\n\n"
        f"**Eggs:**\n{_subject_lines(per_subject)}\n"
        f"**Rarities:**\n{rarities}"
    )


def format_subject_breakdown(cutoff: datetime, per_subject: list[tuple[str, int]]) -> str:
    return truncate(f"Egg counts since {cutoff.isoformat()}:\n{_subject_lines(per_subject)}")


def format_subject_count(subject_name: str, count: int) -> str:
    return truncate(f"{subject_name} hatched in the period: {count}")


def format_setup_confirmation(channel_id: int | str, timezone: str, loss_multiplier: float) -> str:
    return (
        "✅ **Settings updated**\n"
        f"- Log Channel: <#{channel_id}>\n"
        f"- Timezone: {timezone}\n"
        f"- Loss Multiplier: x{loss_multiplier}"
    )
