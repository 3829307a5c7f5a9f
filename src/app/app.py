"""Entrypoint do gateway de webhooks WhatsApp.

Este módulo é o ponto de entrada principal do serviço.
Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080

Cloud Run:
    A porta vem de PORT (padrão 8080).
"""

from __future__ import annotations

import asyncio
import contextlib
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request

from api.routes import create_api_router
from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import create_gateway_components
from app.observability import (
    CORRELATION_ID_HEADER,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from config.logging import get_logger
from config.settings import get_base_settings, get_rate_limit_settings, get_worker_settings
from utils.errors import ConfigurationError, InfrastructureError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import Response

    from app.infra.stores import MemoryRateLimitStore

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


async def _sweep_rate_limits(store: MemoryRateLimitStore, interval_seconds: float) -> None:
    """Remove janelas expiradas periodicamente até ser cancelada."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = store.sweep()
        if removed:
            logger.debug("rate_limit_swept", extra={"removed": removed})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações (ConfigurationError é fatal)
    - Monta componentes e inicia o worker

    Shutdown:
    - Para o worker (drena jobs em andamento)
    - Cancela a limpeza periódica do rate limiter
    """
    service_name = get_base_settings().service_name
    logger.info("app_starting", extra={"service": service_name})
    validate_runtime_settings()

    components = create_gateway_components()
    app.state.rate_limit_store = components.rate_limit_store
    app.state.metrics = components.metrics
    app.state.route_inbound = components.route_inbound
    app.state.worker = components.worker
    app.state.health_aggregator = components.health_aggregator

    try:
        await components.worker.start()
    except ConfigurationError:
        raise
    except InfrastructureError as exc:
        # Fila inacessível: o serviço sobe degradado e o /health reporta.
        logger.error(
            "worker_not_started",
            extra={"error_type": type(exc).__name__, "error": str(exc)},
        )
        await components.forwarder.open()

    sweep_task = None
    rate_limit = get_rate_limit_settings()
    if rate_limit.enabled:
        sweep_task = asyncio.create_task(
            _sweep_rate_limits(components.rate_limit_store, rate_limit.sweep_interval_seconds),
            name="rate-limit-sweep",
        )

    logger.info(
        "app_started",
        extra={
            "service": service_name,
            "worker_enabled": get_worker_settings().enabled,
            "worker_running": components.worker.is_started(),
        },
    )

    yield

    logger.info("app_shutting_down", extra={"service": service_name})
    if sweep_task is not None:
        sweep_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweep_task
    await components.worker.stop()
    await components.forwarder.aclose()


async def correlation_id_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Propaga x-correlation-id do request (ou gera um) e ecoa na resposta."""
    token = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER) or None)
    try:
        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = get_correlation_id()
        return response
    finally:
        reset_correlation_id(token)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="WhatsApp Webhook Gateway",
        description="Recebe webhooks do WhatsApp e encaminha por keyword",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
        openapi_url="/openapi.json",
    )

    fastapi_app.middleware("http")(correlation_id_middleware)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": get_base_settings().service_name})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta."""
    import uvicorn

    settings = get_base_settings()
    logger.info("app_main_starting", extra={"port": settings.port})
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()
