"""Testes dos modelos de domínio."""

from __future__ import annotations

import pytest

from app.domain.messages import InteractiveReply, MediaRef, NormalizedMessage
from app.domain.routing import RouteDecision


def test_normalized_message_requires_from_and_id() -> None:
    with pytest.raises(ValueError, match="from_number"):
        NormalizedMessage(from_number="", message_id="wamid.1", type="text")
    with pytest.raises(ValueError, match="message_id"):
        NormalizedMessage(from_number="250700000001", message_id="", type="text")


def test_routable_texts_priority() -> None:
    message = NormalizedMessage(
        from_number="250700000001",
        message_id="wamid.1",
        type="interactive",
        text="body",
        interactive=InteractiveReply("button_reply", "btn-id", "Title"),
        media=MediaRef("image", "m1", "caption"),
    )

    assert message.routable_texts() == ["body", "Title", "btn-id", "caption"]


def test_to_dict_serializes_nested_blocks() -> None:
    message = NormalizedMessage(
        from_number="250700000001",
        message_id="wamid.1",
        type="interactive",
        interactive=InteractiveReply("list_reply", "dine", "Dine"),
    )

    assert message.to_dict() == {
        "from": "250700000001",
        "messageId": "wamid.1",
        "type": "interactive",
        "interactive": {"kind": "list_reply", "id": "dine", "title": "Dine"},
    }


def test_route_decision_requires_url() -> None:
    with pytest.raises(ValueError):
        RouteDecision(destination_key="qr", destination_url="")
