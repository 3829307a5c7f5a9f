"""Testes do pipeline normalize -> route -> forward."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.runtime import WorkerMetrics
from app.services.forwarder import ForwardResult
from app.services.intent_router import IntentRouter
from app.use_cases.whatsapp import RouteInboundUseCase, RoutingSummary

DESTINATIONS = {
    "easymo": "https://easymo.test/inbound",
    "insurance": "https://insurance.test/inbound",
    "basket": "https://basket.test/inbound",
    "qr": "https://qr.test/inbound",
    "dine": "https://dine.test/inbound",
}


def _text(message_id: str, body: str) -> dict[str, Any]:
    return {"from": "250700000001", "id": message_id, "type": "text", "text": {"body": body}}


def _payload(*messages: dict[str, Any]) -> dict[str, Any]:
    return {"entry": [{"changes": [{"value": {"messages": list(messages)}}]}]}


def _use_case(
    forward_results: list[ForwardResult],
) -> tuple[RouteInboundUseCase, MagicMock, WorkerMetrics]:
    forwarder = MagicMock()
    forwarder.forward = AsyncMock(side_effect=forward_results)
    metrics = WorkerMetrics()
    use_case = RouteInboundUseCase(
        router=IntentRouter(DESTINATIONS),
        forwarder=forwarder,
        metrics=metrics,
    )
    return use_case, forwarder, metrics


@pytest.mark.asyncio
async def test_routes_and_forwards_in_order() -> None:
    use_case, forwarder, metrics = _use_case(
        [
            ForwardResult(success=True, latency_ms=5, status_code=200),
            ForwardResult(success=False, latency_ms=7, status_code=500, error="http_status_500"),
        ]
    )

    summary = await use_case.execute(
        _payload(
            _text("wamid.1", "insurance quote"),
            _text("wamid.2", "hello"),
            _text("wamid.3", "qr"),
        )
    )

    assert summary == RoutingSummary(received=3, forwarded=1, failed=1, unrouted=1)
    calls = forwarder.forward.await_args_list
    assert [call.args[0].message_id for call in calls] == ["wamid.1", "wamid.3"]
    assert [call.args[1] for call in calls] == [DESTINATIONS["insurance"], DESTINATIONS["qr"]]
    assert [call.args[2] for call in calls] == ["insurance", "qr"]

    snapshot = metrics.snapshot()
    assert snapshot["forwarded"] == 1
    assert snapshot["failed"] == 1
    assert snapshot["routing_misses"] == 1
    assert snapshot["processed"] == 2


@pytest.mark.asyncio
async def test_empty_payload_does_nothing() -> None:
    use_case, forwarder, _ = _use_case([])

    summary = await use_case.execute({"entry": []})

    assert summary == RoutingSummary()
    forwarder.forward.assert_not_awaited()


@pytest.mark.asyncio
async def test_numeric_interactive_fields_do_not_block_siblings() -> None:
    use_case, forwarder, metrics = _use_case(
        [ForwardResult(success=True, latency_ms=3, status_code=200)]
    )
    interactive = {
        "from": "250700000001",
        "id": "wamid.button",
        "type": "interactive",
        "interactive": {"button_reply": {"id": 7, "title": 42}},
    }

    summary = await use_case.execute(_payload(interactive, _text("wamid.2", "insurance")))

    assert summary == RoutingSummary(received=2, forwarded=1, unrouted=1)
    forwarded_message = forwarder.forward.await_args.args[0]
    assert forwarded_message.message_id == "wamid.2"
    assert forwarder.forward.await_args.args[2] == "insurance"
    assert metrics.snapshot()["routing_misses"] == 1


@pytest.mark.asyncio
async def test_unexpected_error_counts_failed_and_continues() -> None:
    use_case, forwarder, metrics = _use_case(
        [
            RuntimeError("boom"),
            ForwardResult(success=True, latency_ms=4, status_code=200),
        ]
    )

    summary = await use_case.execute(
        _payload(_text("wamid.1", "basket"), _text("wamid.2", "dine tonight"))
    )

    assert summary == RoutingSummary(received=2, forwarded=1, failed=1)
    assert forwarder.forward.await_count == 2
    snapshot = metrics.snapshot()
    assert snapshot["failed"] == 1
    assert snapshot["forwarded"] == 1
