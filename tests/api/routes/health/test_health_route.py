"""Testes dos endpoints de health e métricas."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.requests import Request

from api.routes.health.router import health_check, metrics
from app.services.health import HealthReport, ProbeResult

WORKER_METRICS = {
    "processed": 4,
    "failed": 1,
    "forwarded": 2,
    "routing_misses": 1,
    "rate_limited": 0,
    "last_activity_at": "2026-01-01T00:00:00+00:00",
    "started_at": "2026-01-01T00:00:00+00:00",
    "state": "running",
    "in_flight": 0,
}


def _build_request_with_state(state: SimpleNamespace, path: str = "/health") -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


def _report(status: str, checks: dict[str, ProbeResult]) -> HealthReport:
    return HealthReport(
        status=status,  # type: ignore[arg-type]
        timestamp="2026-01-01T00:00:00+00:00",
        uptime_seconds=12.5,
        checks=checks,
        worker_running=True,
        worker_metrics=WORKER_METRICS,
    )


def _aggregator(report: HealthReport) -> MagicMock:
    aggregator = MagicMock()
    aggregator.report = AsyncMock(return_value=report)
    return aggregator


@pytest.mark.asyncio
async def test_health_returns_200_when_all_checks_ok() -> None:
    ok = ProbeResult(status="ok", latency_ms=3)
    report = _report("ok", {"external": ok, "cache": ok, "database": ok})
    request = _build_request_with_state(SimpleNamespace(health_aggregator=_aggregator(report)))

    response = await health_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ok"
    assert payload["checks"]["cache"] == {"status": "ok", "latency_ms": 3}
    assert payload["uptime_seconds"] == 12.5
    assert payload["worker"]["running"] is True


@pytest.mark.asyncio
async def test_health_returns_503_when_degraded() -> None:
    report = _report(
        "degraded",
        {
            "external": ProbeResult(status="ok", latency_ms=3),
            "cache": ProbeResult(status="fail", latency_ms=5000, error="timeout"),
            "database": ProbeResult(status="ok", latency_ms=8),
        },
    )
    request = _build_request_with_state(SimpleNamespace(health_aggregator=_aggregator(report)))

    response = await health_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "degraded"
    assert payload["checks"]["cache"]["error"] == "timeout"


@pytest.mark.asyncio
async def test_health_returns_500_when_report_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")
    aggregator = MagicMock()
    aggregator.report = AsyncMock(side_effect=RuntimeError("secret detail"))
    request = _build_request_with_state(SimpleNamespace(health_aggregator=aggregator))

    response = await health_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 500
    assert payload["status"] == "critical"
    assert payload["error"] == "internal_error"


@pytest.mark.asyncio
async def test_metrics_returns_worker_snapshot() -> None:
    worker = MagicMock()
    worker.get_metrics.return_value = WORKER_METRICS
    request = _build_request_with_state(SimpleNamespace(worker=worker), path="/metrics")

    response = await metrics(request)

    assert response.model_dump() == WORKER_METRICS
