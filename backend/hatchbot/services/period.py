"""Period token to cutoff timestamp resolution."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

PERIOD_TODAY = "today"
PERIOD_24H = "24h"
PERIOD_CHOICES = (PERIOD_TODAY, PERIOD_24H, "2d", "7d", "30d")

_DAYS_RE = re.compile(r"^(\d+)d$")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def local_midnight(now: datetime, offset_hours: int) -> datetime:
    """UTC midnight of ``now``'s UTC date, shifted back by the guild offset."""
    now = now.astimezone(timezone.utc)
    midnight = datetime(now.year, now.month, now.day, tzinfo=timezone.utc)
    return midnight - timedelta(hours=offset_hours)


def resolve_cutoff(
    period: str, offset_hours: int = 0, now: datetime | None = None
) -> datetime:
    """Earliest timestamp (inclusive) counted for ``period``.

    ``today`` aligns to the guild's local midnight, ``24h`` is a rolling day,
    ``<n>d`` subtracts ``n`` calendar days. Unrecognized tokens behave like
    ``24h``.
    """
    now = (now or utcnow()).astimezone(timezone.utc)
    token = period.strip().lower()

    if token == PERIOD_TODAY:
        return local_midnight(now, offset_hours)

    match = _DAYS_RE.match(token)
    if match:
        try:
            return now - timedelta(days=int(match.group(1)))
        # Counts past int-string or timedelta limits mean "everything"
        except (OverflowError, ValueError):
            return datetime.min.replace(tzinfo=timezone.utc)

    return now - timedelta(hours=24)
