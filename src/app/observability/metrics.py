"""Registro de métricas via structured logging.

As métricas são emitidas como logs estruturados e agregadas fora do
processo (ex: Cloud Logging, BigQuery). Os contadores vivos do processo
ficam em app.runtime.metrics.WorkerMetrics.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "forwarder", "health")
        operation: Nome da operação (ex: "forward", "probe_cache")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_forward_outcome(
    destination_key: str,
    success: bool,
    status_code: int | None = None,
    correlation_id: str | None = None,
) -> None:
    """Registra resultado de uma entrega downstream."""
    logger.info(
        "metric_forward",
        extra={
            "metric_type": "forward",
            "component": "forwarder",
            "destination_key": destination_key,
            "success": success,
            "status_code": status_code,
            "correlation_id": correlation_id,
        },
    )


def record_health_status(status: str, failed_checks: list[str]) -> None:
    """Registra o status agregado de um health check."""
    logger.info(
        "metric_health",
        extra={
            "metric_type": "health",
            "component": "health",
            "status": status,
            "failed_checks": failed_checks,
        },
    )
