"""Use case de roteamento inbound: normaliza, classifica e encaminha.

Compartilhado pelo endpoint POST do webhook e pelo WorkerRuntime. Nenhuma
falha de roteamento ou de entrega é propagada: tudo vira log e métrica.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from api.normalizers.whatsapp import normalize_payload

if TYPE_CHECKING:
    from app.domain.messages import NormalizedMessage
    from app.protocols.forwarder import DestinationForwarderProtocol
    from app.runtime.metrics import WorkerMetrics
    from app.services.intent_router import IntentRouter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoutingSummary:
    """Contagem do que aconteceu com um payload."""

    received: int = 0
    forwarded: int = 0
    failed: int = 0
    unrouted: int = 0


class RouteInboundUseCase:
    """Pipeline normalize -> classify -> forward para um payload.

    Args:
        router: IntentRouter com destinos já validados
        forwarder: Entrega downstream
        metrics: Contadores do processo
    """

    def __init__(
        self,
        router: IntentRouter,
        forwarder: DestinationForwarderProtocol,
        metrics: WorkerMetrics,
    ) -> None:
        self._router = router
        self._forwarder = forwarder
        self._metrics = metrics

    async def execute(self, payload: dict[str, Any]) -> RoutingSummary:
        messages = normalize_payload(payload)
        outcomes = {"forwarded": 0, "failed": 0, "unrouted": 0}

        for message in messages:
            try:
                outcome = await self._route_message(message)
            except Exception:
                # Uma unidade problemática não interrompe as demais do lote
                logger.exception(
                    "inbound_message_failed",
                    extra={"message_id_prefix": message.message_id[:12]},
                )
                self._metrics.record_failed()
                outcome = "failed"
            outcomes[outcome] += 1

        summary = RoutingSummary(received=len(messages), **outcomes)
        logger.info(
            "inbound_routed",
            extra={
                "received": summary.received,
                "forwarded": summary.forwarded,
                "failed": summary.failed,
                "unrouted": summary.unrouted,
            },
        )
        return summary

    async def _route_message(self, message: NormalizedMessage) -> str:
        decision = self._router.classify(message)
        if decision is None:
            self._metrics.record_routing_miss()
            return "unrouted"

        result = await self._forwarder.forward(
            message,
            decision.destination_url,
            decision.destination_key,
        )
        if result.success:
            self._metrics.record_processed(forwarded=True)
            return "forwarded"

        self._metrics.record_failed()
        logger.warning(
            "inbound_forward_failed",
            extra={
                "destination_key": decision.destination_key,
                "status_code": result.status_code,
                "error": result.error,
                "message_id_prefix": message.message_id[:12],
            },
        )
        return "failed"
