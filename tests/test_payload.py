"""Tests for hatch payload interpretation."""

from hatchbot.services.payload import (
    UNKNOWN_SUBJECT,
    NotificationPayload,
    PayloadKind,
    RichBlock,
    interpret,
    parse_kg,
    parse_number,
    parse_payload,
    strip_egg,
)
from hatchbot.services.rarity import classify
from shared.models.hatch import RarityTier


def embed(*fields: tuple[str, object], title: str | None = None) -> dict:
    block: dict = {"fields": [{"name": name, "value": value} for name, value in fields]}
    if title is not None:
        block["title"] = title
    return {"embeds": [block]}


def test_rich_payload_name_and_weight() -> None:
    body = embed(("Hatched From", "Rare Egg"), ("Weight", "6.2 kg"), title="A hatch!")
    assert interpret(body) == ("Rare", 6.2)


def test_last_matching_from_field_wins() -> None:
    body = embed(("Hatched From", "Common Egg"), ("Hatched From", "Rare Egg"))
    name, _ = interpret(body)
    assert name == "Rare"


def test_last_matching_weight_field_wins() -> None:
    body = embed(("Weight", "4.1"), ("Final weight", "8.5kg"))
    _, weight = interpret(body)
    assert weight == 8.5


def test_weight_field_without_number_keeps_earlier_match() -> None:
    body = embed(("Weight", "5.5"), ("Weight note", "n/a"))
    _, weight = interpret(body)
    assert weight == 5.5


def test_label_matching_is_case_insensitive() -> None:
    body = embed(("HATCHED FROM", "Mythic EGG"), ("WEIGHT", "9"))
    assert interpret(body) == ("Mythic", 9.0)


def test_field_can_feed_both_name_and_weight() -> None:
    body = embed(("Weight from hatch", "Golden Egg 7.5kg"))
    assert interpret(body) == ("Golden  7.5kg", 7.5)


def test_title_used_verbatim_when_no_from_field() -> None:
    body = embed(("Weight", "4.4"), title="Jungle Egg")
    assert interpret(body) == ("Jungle Egg", 4.4)


def test_empty_from_value_falls_back_to_title() -> None:
    body = embed(("Hatched From", "Egg"), title="Banner")
    name, _ = interpret(body)
    assert name == "Banner"


def test_content_fallback_for_name() -> None:
    body = {"content": "Hatched From: Legendary Egg"}
    name, weight = interpret(body)
    assert name == "Legendary"
    assert weight == 0
    assert classify(weight) is None


def test_content_accepts_dash_separator_and_stops_at_line_end() -> None:
    body = {"content": "hatched from - Ocean Egg\nWeight: 12kg"}
    assert interpret(body) == ("Ocean", 12.0)


def test_content_is_used_when_embed_has_no_name() -> None:
    body = {
        "content": "Hatched From: Sky Egg",
        "embeds": [{"fields": [{"name": "Weight", "value": "5"}]}],
    }
    assert interpret(body) == ("Sky", 5.0)


def test_unit_suffix_anywhere_in_document() -> None:
    body = {"embeds": [{"title": "Pet", "description": "It weighs 7.25kg!"}]}
    name, weight = interpret(body)
    assert (name, weight) == ("Pet", 7.25)
    assert classify(weight) is RarityTier.SEMI_TITAN


def test_unit_suffix_in_unknown_document_shape() -> None:
    assert interpret({"footer": "weighed 4.5 KG"}) == (UNKNOWN_SUBJECT, 4.5)


def test_empty_document_yields_defaults() -> None:
    assert interpret({}) == (UNKNOWN_SUBJECT, 0.0)


def test_non_object_json_yields_defaults() -> None:
    for body in ([], "7kg", 12, None, [{"content": "Hatched From: X"}]):
        assert interpret(body) == (UNKNOWN_SUBJECT, 0.0)


def test_malformed_embeds_degrade_quietly() -> None:
    body = {"embeds": ["not a dict"], "content": None}
    assert interpret(body) == (UNKNOWN_SUBJECT, 0.0)
    body = {"embeds": [{"fields": "nope", "title": None}]}
    assert interpret(body) == (UNKNOWN_SUBJECT, 0.0)
    body = {"embeds": [{"fields": [None, {"name": None, "value": 6}]}]}
    assert interpret(body) == (UNKNOWN_SUBJECT, 0.0)


def test_numeric_field_values_are_read_as_text() -> None:
    body = embed(("Weight", 8.25))
    assert interpret(body)[1] == 8.25


def test_interpret_is_repeatable() -> None:
    body = embed(("Hatched From", "Rare Egg"), ("Weight", "6.2"))
    assert interpret(body) == interpret(body)
    payload = parse_payload(body)
    assert interpret(payload) == interpret(payload)


def test_parse_payload_kinds() -> None:
    assert parse_payload(embed(("a", "b"))).kind is PayloadKind.RICH
    assert parse_payload({"content": "hi"}).kind is PayloadKind.TEXT
    assert parse_payload({"other": 1}).kind is PayloadKind.DOCUMENT
    assert parse_payload(["x"]).kind is PayloadKind.UNRECOGNIZED


def test_parse_payload_channel_id() -> None:
    assert parse_payload({"channel_id": 1234}).channel_id == "1234"
    assert parse_payload({"channel_id": ""}).channel_id is None
    assert parse_payload({}).channel_id is None


def test_strip_egg() -> None:
    assert strip_egg("  Rare EGG ") == "Rare"
    assert strip_egg("Eggplant egg") == "plant"


def test_number_grammar() -> None:
    assert parse_number("about 12.5 or 3") == 12.5
    assert parse_number("1,5") == 1.0
    assert parse_number("none") is None
    assert parse_kg("x 3 kg") == 3.0
    assert parse_kg("3 kilograms") is None
    assert parse_kg("9.75KG") == 9.75


def test_zero_weight_field_falls_through_to_unit_scan() -> None:
    body = embed(("Weight", "0"), ("Note", "Pet is 7.25kg"))
    _, weight = interpret(body)
    assert weight == 7.25
    assert classify(weight) is RarityTier.SEMI_TITAN


def test_text_payload_reads_only_content() -> None:
    payload = NotificationPayload(
        kind=PayloadKind.TEXT,
        block=RichBlock(title="Banner"),
        content="Hatched From: Moon Egg",
    )
    assert interpret(payload) == ("Moon", 0.0)


def test_unrecognized_payload_degrades_to_defaults() -> None:
    payload = NotificationPayload(
        kind=PayloadKind.UNRECOGNIZED,
        content="Hatched From: Moon Egg",
        serialized='"3kg"',
    )
    assert interpret(payload) == (UNKNOWN_SUBJECT, 0.0)
