"""Testes do normalizer de payloads WhatsApp."""

from __future__ import annotations

from typing import Any

from api.normalizers.whatsapp import normalize_message, normalize_payload
from app.domain.messages import InteractiveReply, MediaRef


def _payload(*messages: Any) -> dict[str, Any]:
    return {
        "object": "whatsapp_business_account",
        "entry": [{"changes": [{"value": {"messages": list(messages)}}]}],
    }


def test_text_then_interactive_preserves_order() -> None:
    payload = _payload(
        {"from": "250700000001", "id": "wamid.1", "type": "text", "text": {"body": "hi"}},
        {
            "from": "250700000001",
            "id": "wamid.2",
            "type": "interactive",
            "interactive": {
                "type": "button_reply",
                "button_reply": {"id": "insurance", "title": "Insurance"},
            },
        },
    )

    messages = normalize_payload(payload)

    assert [m.message_id for m in messages] == ["wamid.1", "wamid.2"]
    assert messages[0].text == "hi"
    assert messages[1].interactive == InteractiveReply(
        kind="button_reply", id="insurance", title="Insurance"
    )


def test_list_reply_is_extracted() -> None:
    msg = {
        "from": "250700000002",
        "id": "wamid.3",
        "type": "interactive",
        "interactive": {"list_reply": {"id": "dine", "title": "Dine in"}},
    }

    message = normalize_message(msg)

    assert message is not None
    assert message.interactive == InteractiveReply(kind="list_reply", id="dine", title="Dine in")


def test_image_with_caption() -> None:
    msg = {
        "from": "250700000003",
        "id": "wamid.4",
        "type": "image",
        "image": {"id": "media-1", "caption": "my qr code"},
    }

    message = normalize_message(msg)

    assert message is not None
    assert message.media == MediaRef(kind="image", id="media-1", caption="my qr code")
    assert message.routable_texts() == ["my qr code"]


def test_legacy_button_type() -> None:
    msg = {
        "from": "250700000004",
        "id": "wamid.5",
        "type": "button",
        "button": {"payload": "basket", "text": "Baskets"},
    }

    message = normalize_message(msg)

    assert message is not None
    assert message.interactive == InteractiveReply(kind="button", id="basket", title="Baskets")


def test_unknown_type_passes_through_with_type_only() -> None:
    msg = {"from": "250700000005", "id": "wamid.6", "type": "location", "location": {}}

    message = normalize_message(msg)

    assert message is not None
    assert message.type == "location"
    assert message.text is None
    assert message.interactive is None
    assert message.media is None


def test_malformed_units_do_not_abort_siblings() -> None:
    payload = _payload(
        "not-a-dict",
        {"id": "wamid.no-from", "type": "text", "text": {"body": "x"}},
        {"from": "250700000006", "type": "text", "text": {"body": "no id"}},
        {"from": "250700000006", "id": "wamid.7", "type": "text", "text": "not-a-dict"},
        {"from": "250700000006", "id": "wamid.8", "type": "text", "text": {"body": "ok"}},
    )

    messages = normalize_payload(payload)

    assert [m.message_id for m in messages] == ["wamid.7", "wamid.8"]
    assert messages[0].text is None
    assert messages[1].text == "ok"


def test_non_string_fields_are_dropped() -> None:
    payload = _payload(
        {
            "from": "250700000007",
            "id": "wamid.9",
            "type": "interactive",
            "interactive": {"button_reply": {"id": 7, "title": 42}},
        },
        {
            "from": "250700000007",
            "id": "wamid.10",
            "type": "image",
            "image": {"id": ["media"], "caption": {"text": "qr"}},
            "timestamp": 1700000000,
        },
        {"from": "250700000007", "id": "wamid.11", "type": "text", "text": {"body": "insurance"}},
    )

    messages = normalize_payload(payload)

    assert [m.message_id for m in messages] == ["wamid.9", "wamid.10", "wamid.11"]
    assert messages[0].interactive == InteractiveReply(kind="button_reply")
    assert messages[0].routable_texts() == []
    assert messages[1].media == MediaRef(kind="image")
    assert messages[1].timestamp is None
    assert messages[2].routable_texts() == ["insurance"]


def test_malformed_levels_are_skipped() -> None:
    payload = {
        "entry": [
            "garbage",
            {"changes": "not-a-list"},
            {"changes": [{"value": None}, {"value": {"statuses": [{"id": "s1"}]}}]},
            {
                "changes": [
                    {
                        "value": {
                            "messages": [
                                {
                                    "from": "250700000007",
                                    "id": "wamid.9",
                                    "type": "text",
                                    "text": {"body": "qr"},
                                }
                            ]
                        }
                    }
                ]
            },
        ]
    }

    messages = normalize_payload(payload)

    assert len(messages) == 1
    assert messages[0].from_number == "250700000007"


def test_non_dict_payload_returns_empty() -> None:
    assert normalize_payload([]) == []  # type: ignore[arg-type]
    assert normalize_payload({}) == []


def test_to_dict_uses_wire_field_names() -> None:
    msg = {
        "from": "250700000008",
        "id": "wamid.10",
        "type": "text",
        "text": {"body": "easymo"},
        "timestamp": "1700000000",
    }

    message = normalize_message(msg)

    assert message is not None
    assert message.to_dict() == {
        "from": "250700000008",
        "messageId": "wamid.10",
        "type": "text",
        "text": "easymo",
        "timestamp": "1700000000",
    }
