"""Testes da agregação do health check."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from app.services.health import HealthAggregator, ProbeResult, derive_overall_status

OK = ProbeResult(status="ok", latency_ms=1)
FAIL = ProbeResult(status="fail", latency_ms=2, error="timeout")


class StaticProbe:
    def __init__(self, name: str, result: ProbeResult, delay: float = 0.0) -> None:
        self.name = name
        self._result = result
        self._delay = delay

    async def probe(self) -> ProbeResult:
        if self._delay:
            await asyncio.sleep(self._delay)
        return self._result


class CrashingProbe:
    name = "database"

    async def probe(self) -> ProbeResult:
        raise RuntimeError("boom")


def _worker(running: bool = True) -> MagicMock:
    worker = MagicMock()
    worker.is_started.return_value = running
    worker.get_metrics.return_value = {"processed": 3, "state": "running"}
    return worker


@pytest.mark.parametrize(
    ("results", "expected"),
    [
        ([OK, OK, OK], "ok"),
        ([OK, FAIL, OK], "degraded"),
        ([FAIL, FAIL, OK], "degraded"),
        ([FAIL, FAIL, FAIL], "critical"),
    ],
)
def test_derive_overall_status(results: list[ProbeResult], expected: str) -> None:
    assert derive_overall_status(results) == expected


@pytest.mark.asyncio
async def test_report_all_ok() -> None:
    aggregator = HealthAggregator(
        {
            "external": StaticProbe("external", OK),
            "cache": StaticProbe("cache", OK),
            "database": StaticProbe("database", OK),
        },
        _worker(),
        started_at=0.0,
    )

    report = await aggregator.report()
    payload = report.as_dict()

    assert payload["status"] == "ok"
    assert set(payload["checks"]) == {"external", "cache", "database"}
    assert payload["worker"] == {"running": True, "metrics": {"processed": 3, "state": "running"}}
    assert payload["uptime_seconds"] > 0
    assert payload["timestamp"].endswith("+00:00")


@pytest.mark.asyncio
async def test_crashing_probe_is_isolated() -> None:
    aggregator = HealthAggregator(
        {
            "external": StaticProbe("external", OK),
            "cache": StaticProbe("cache", OK),
            "database": CrashingProbe(),
        },
        _worker(),
    )

    report = await aggregator.report()

    assert report.status == "degraded"
    assert report.checks["external"].ok
    assert report.checks["database"].status == "fail"
    assert report.checks["database"].error == "unexpected_error: RuntimeError"


@pytest.mark.asyncio
async def test_all_failed_is_critical() -> None:
    aggregator = HealthAggregator(
        {
            "external": StaticProbe("external", FAIL),
            "cache": StaticProbe("cache", FAIL),
            "database": CrashingProbe(),
        },
        _worker(running=False),
    )

    report = await aggregator.report()

    assert report.status == "critical"
    assert report.worker_running is False


@pytest.mark.asyncio
async def test_probes_run_concurrently() -> None:
    aggregator = HealthAggregator(
        {name: StaticProbe(name, OK, delay=0.2) for name in ("external", "cache", "database")},
        _worker(),
    )

    loop = asyncio.get_running_loop()
    started = loop.time()
    await aggregator.report()
    elapsed = loop.time() - started

    assert elapsed < 0.5
