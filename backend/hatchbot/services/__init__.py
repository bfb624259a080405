"""Hatch tracking services."""

from .ingest import HatchIngestor
from .payload import interpret, parse_payload
from .period import resolve_cutoff
from .rarity import classify
from .reporting import ReportingAggregator
from .settings import SettingsResolver

__all__ = [
    "HatchIngestor",
    "ReportingAggregator",
    "SettingsResolver",
    "classify",
    "interpret",
    "parse_payload",
    "resolve_cutoff",
]
