"""Factories de componentes — criação das implementações concretas.

Este módulo centraliza o wiring do gateway a partir das settings.
Nada aqui abre conexões de rede; isso acontece no lifespan/worker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from app.bootstrap.clients import (
    create_async_redis_client,
    create_firestore_client,
    create_openai_client,
)
from app.infra.stores import MemoryRateLimitStore
from app.runtime import WorkerMetrics, WorkerRuntime
from app.services.forwarder import DestinationForwarder
from app.services.health import (
    FirestoreProbe,
    HealthAggregator,
    OpenAIProbe,
    RedisProbe,
)
from app.services.intent_router import IntentRouter
from app.use_cases.whatsapp import RouteInboundUseCase
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_health_settings,
    get_openai_settings,
    get_routing_settings,
    get_whatsapp_settings,
    get_worker_settings,
)

if TYPE_CHECKING:
    from app.protocols import DependencyProbeProtocol

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GatewayComponents:
    """Componentes de longa duração compartilhados pelo processo."""

    rate_limit_store: MemoryRateLimitStore
    metrics: WorkerMetrics
    forwarder: DestinationForwarder
    route_inbound: RouteInboundUseCase
    worker: WorkerRuntime
    health_aggregator: HealthAggregator


def create_health_probes() -> dict[str, DependencyProbeProtocol]:
    """Cria os probes external/cache/database.

    Falha ao criar um cliente não impede o boot: o probe correspondente
    passa a reportar not_configured.
    """
    timeout = get_health_settings().probe_timeout_seconds
    base = get_base_settings()
    firestore_settings = get_firestore_settings()

    firestore_client = None
    project_id = firestore_settings.project_id or base.gcp_project
    if project_id:
        try:
            firestore_client = create_firestore_client(project_id)
        except Exception as exc:
            logger.warning(
                "firestore_client_not_ready",
                extra={"error_type": type(exc).__name__},
            )

    return {
        "external": OpenAIProbe(
            create_openai_client(get_openai_settings()),
            timeout_seconds=timeout,
        ),
        "cache": RedisProbe(base.redis_url, timeout_seconds=timeout),
        "database": FirestoreProbe(
            firestore_client,
            collection=firestore_settings.health_collection,
            document=firestore_settings.health_document,
            timeout_seconds=timeout,
        ),
    }


def create_worker(
    metrics: WorkerMetrics,
    use_case: RouteInboundUseCase,
    forwarder: DestinationForwarder,
) -> WorkerRuntime:
    """Cria o WorkerRuntime; fila Redis apenas se habilitada e configurada."""
    settings = get_worker_settings()
    redis_url = get_base_settings().redis_url
    whatsapp = get_whatsapp_settings()

    queue_factory = None
    if settings.enabled and redis_url:
        queue_factory = partial(create_async_redis_client, redis_url)

    return WorkerRuntime(
        settings=settings,
        metrics=metrics,
        use_case=use_case,
        forwarder=forwarder,
        queue_factory=queue_factory,
        required_secrets={
            "WA_VERIFY_TOKEN": whatsapp.verify_token,
            "WA_APP_SECRET": whatsapp.app_secret,
        },
    )


def create_gateway_components() -> GatewayComponents:
    """Monta o grafo completo de componentes.

    Raises:
        ConfigurationError: Destino de roteamento sem URL.
    """
    routing = get_routing_settings()
    metrics = WorkerMetrics()
    forwarder = DestinationForwarder(timeout_seconds=routing.forward_timeout_seconds)
    router = IntentRouter(routing.destinations)
    route_inbound = RouteInboundUseCase(router=router, forwarder=forwarder, metrics=metrics)
    worker = create_worker(metrics, route_inbound, forwarder)

    return GatewayComponents(
        rate_limit_store=MemoryRateLimitStore(),
        metrics=metrics,
        forwarder=forwarder,
        route_inbound=route_inbound,
        worker=worker,
        health_aggregator=HealthAggregator(create_health_probes(), worker),
    )
