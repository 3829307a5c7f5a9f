"""Agregação do health check.

Executa os probes em paralelo (a latência agregada é limitada pelo probe
mais lento) e dobra os resultados em um único status:

- ok: todos os probes ok
- critical: todos os probes falharam
- degraded: demais casos
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Literal

from app.observability import record_health_status
from app.services.health.probes import ProbeResult

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from app.protocols.dependency_probe import DependencyProbeProtocol
    from app.runtime.worker import WorkerRuntime

logger = logging.getLogger(__name__)

OverallStatus = Literal["ok", "degraded", "critical"]

_PROCESS_STARTED_AT = time.monotonic()


def derive_overall_status(results: Iterable[ProbeResult]) -> OverallStatus:
    """Aplica a regra ok/degraded/critical sobre os resultados."""
    statuses = [result.status for result in results]
    failures = statuses.count("fail")
    if failures == 0:
        return "ok"
    if failures == len(statuses):
        return "critical"
    return "degraded"


@dataclass(frozen=True, slots=True)
class HealthReport:
    """Relatório calculado sob demanda; nunca persistido."""

    status: OverallStatus
    timestamp: str
    uptime_seconds: float
    checks: dict[str, ProbeResult]
    worker_running: bool
    worker_metrics: dict[str, Any]

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "timestamp": self.timestamp,
            "uptime_seconds": self.uptime_seconds,
            "checks": {name: result.as_dict() for name, result in self.checks.items()},
            "worker": {"running": self.worker_running, "metrics": self.worker_metrics},
        }


class HealthAggregator:
    """Roda os probes configurados e monta o HealthReport.

    Args:
        probes: nome do check -> probe (external, cache, database)
        worker: WorkerRuntime consultado para liveness e métricas
        started_at: Instante (monotonic) de início do processo
    """

    def __init__(
        self,
        probes: Mapping[str, DependencyProbeProtocol],
        worker: WorkerRuntime,
        started_at: float | None = None,
    ) -> None:
        self._probes = dict(probes)
        self._worker = worker
        self._started_at = _PROCESS_STARTED_AT if started_at is None else started_at

    async def _run_probe(self, name: str, probe: DependencyProbeProtocol) -> ProbeResult:
        started_at = time.perf_counter()
        try:
            return await probe.probe()
        except Exception as exc:
            logger.exception("health_probe_crashed", extra={"check": name})
            return ProbeResult(
                status="fail",
                latency_ms=int(round((time.perf_counter() - started_at) * 1000)),
                error=f"unexpected_error: {type(exc).__name__}",
            )

    async def report(self) -> HealthReport:
        """Monta o relatório; falhas de probe nunca escapam desta chamada."""
        names = list(self._probes)
        results = await asyncio.gather(
            *(self._run_probe(name, self._probes[name]) for name in names)
        )
        checks = dict(zip(names, results))
        status = derive_overall_status(checks.values())
        record_health_status(
            status, [name for name, result in checks.items() if not result.ok]
        )

        return HealthReport(
            status=status,
            timestamp=datetime.now(UTC).isoformat(),
            uptime_seconds=round(time.monotonic() - self._started_at, 3),
            checks=checks,
            worker_running=self._worker.is_started(),
            worker_metrics=self._worker.get_metrics(),
        )
