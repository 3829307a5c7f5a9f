"""Endpoints de health check e métricas para Cloud Run."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from utils.errors import sanitize_error_message

logger = logging.getLogger(__name__)

router = APIRouter()


class MetricsResponse(BaseModel):
    """Snapshot das métricas do worker."""

    processed: int
    failed: int
    forwarded: int
    routing_misses: int
    rate_limited: int
    last_activity_at: str | None = None
    started_at: str | None = None
    state: str
    in_flight: int


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Health com verificação real de external, cache e database.

    200 quando todos os checks passam, 503 caso contrário e 500 se
    o próprio relatório não puder ser montado.
    """
    try:
        report = await request.app.state.health_aggregator.report()
    except Exception as exc:
        logger.exception("health_report_failed")
        return JSONResponse(
            content={
                "status": "critical",
                "timestamp": datetime.now(UTC).isoformat(),
                "error": sanitize_error_message(exc),
            },
            status_code=500,
        )

    return JSONResponse(
        content=report.as_dict(),
        status_code=200 if report.status == "ok" else 503,
    )


@router.get("/metrics", response_model=MetricsResponse)
async def metrics(request: Request) -> MetricsResponse:
    """Métricas do worker; sempre 200."""
    return MetricsResponse(**request.app.state.worker.get_metrics())
