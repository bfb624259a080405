"""Hatch notification payload interpretation.

Webhook deliveries arrive in one of two loose shapes:

* a rich-content document, ``{"embeds": [{"title": ..., "fields": [{"name", "value"}]}]}``
* a free-text document, ``{"content": "Hatched From: Rare Egg ..."}``

Any other JSON object is still scanned for a ``<n>kg`` weight; non-object
JSON carries no signal at all.

:func:`parse_payload` tags the decoded JSON with its shape, and
:func:`interpret` reduces it to ``(subject_name, weight_kg)`` using a fixed
precedence of strategies. Name and weight are resolved independently, and a
miss on either side degrades to a default rather than raising.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

UNKNOWN_SUBJECT = "Unknown"

_EGG_RE = re.compile("egg", re.IGNORECASE)
_NUMBER_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)")
_KG_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)\s*kg", re.IGNORECASE)
_HATCHED_FROM_RE = re.compile(r"Hatched From\s*[:\-]\s*(.+)", re.IGNORECASE)

# Field roles, matched as case-insensitive substrings of the field label
SUBJECT_LABEL = "from"
WEIGHT_LABEL = "weight"


class PayloadKind(str, Enum):
    RICH = "rich"
    TEXT = "text"
    DOCUMENT = "document"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class EmbedField:
    label: str
    value: str


@dataclass(frozen=True)
class RichBlock:
    """The first embed of a delivery."""

    title: str | None = None
    fields: tuple[EmbedField, ...] = ()


@dataclass(frozen=True)
class NotificationPayload:
    kind: PayloadKind
    block: RichBlock | None = None
    content: str | None = None
    # Compact JSON of the whole document, scanned for "<n>kg"
    serialized: str = ""
    channel_id: str | None = field(default=None, compare=False)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def _parse_block(embed: Any) -> RichBlock | None:
    if not isinstance(embed, dict):
        return None
    raw_fields = embed.get("fields")
    fields: list[EmbedField] = []
    if isinstance(raw_fields, list):
        for item in raw_fields:
            if isinstance(item, dict):
                fields.append(EmbedField(_as_text(item.get("name")), _as_text(item.get("value"))))
    title = embed.get("title")
    return RichBlock(title=_as_text(title) if title else None, fields=tuple(fields))


def parse_payload(body: Any) -> NotificationPayload:
    """Tag a decoded JSON body with its shape. Never raises."""
    if not isinstance(body, dict):
        return NotificationPayload(kind=PayloadKind.UNRECOGNIZED)

    embeds = body.get("embeds")
    block = _parse_block(embeds[0]) if isinstance(embeds, list) and embeds else None
    content = body.get("content") if isinstance(body.get("content"), str) else None
    channel_id = body.get("channel_id")

    if block is not None:
        kind = PayloadKind.RICH
    elif content:
        kind = PayloadKind.TEXT
    else:
        kind = PayloadKind.DOCUMENT

    return NotificationPayload(
        kind=kind,
        block=block,
        content=content,
        serialized=json.dumps(body, ensure_ascii=False, separators=(",", ":"), default=str),
        channel_id=_as_text(channel_id) if channel_id else None,
    )


def strip_egg(text: str) -> str:
    """Remove every case-insensitive ``egg`` and surrounding whitespace."""
    return _EGG_RE.sub("", text).strip()


def parse_number(text: str) -> float | None:
    """First decimal number in ``text`` ('.' separator only)."""
    match = _NUMBER_RE.search(text)
    return float(match.group(1)) if match else None


def parse_kg(text: str) -> float | None:
    """First number directly followed by an optional-space ``kg`` unit."""
    match = _KG_RE.search(text)
    return float(match.group(1)) if match else None


def _last_field_match(block: RichBlock | None, label: str, extract) -> Any:
    """Reduce over every field whose label contains ``label``; the last non-None extraction wins."""
    if block is None:
        return None
    result = None
    for embed_field in block.fields:
        if label in embed_field.label.lower():
            value = extract(embed_field.value)
            if value is not None:
                result = value
    return result


def _subject_from_content(content: str | None) -> str:
    if not content:
        return ""
    match = _HATCHED_FROM_RE.search(content)
    return strip_egg(match.group(1)) if match else ""


def resolve_subject(payload: NotificationPayload) -> str:
    name = ""
    if payload.kind is PayloadKind.RICH:
        name = _last_field_match(payload.block, SUBJECT_LABEL, strip_egg) or payload.block.title
        # Embeds may ride along with a text body
        name = name or _subject_from_content(payload.content)
    elif payload.kind is PayloadKind.TEXT:
        name = _subject_from_content(payload.content)
    return name or UNKNOWN_SUBJECT


def resolve_weight(payload: NotificationPayload) -> float:
    if payload.kind is PayloadKind.UNRECOGNIZED:
        return 0.0
    weight = None
    if payload.kind is PayloadKind.RICH:
        weight = _last_field_match(payload.block, WEIGHT_LABEL, parse_number)
    # A zero field weight counts as missing
    if not weight:
        weight = parse_kg(payload.serialized)
    return float(weight) if weight else 0.0


def interpret(payload: NotificationPayload | Any) -> tuple[str, float]:
    """Reduce a payload to ``(subject_name, weight_kg)``."""
    if not isinstance(payload, NotificationPayload):
        payload = parse_payload(payload)
    return resolve_subject(payload), resolve_weight(payload)
