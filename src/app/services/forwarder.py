"""Encaminhamento de mensagens normalizadas para os destinos downstream.

Uma única tentativa por mensagem, com timeout limitado. Sem retry: se
necessário, retry/backoff pertence a uma fila externa.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from app.observability import get_correlation_id, record_forward_outcome, record_latency
from app.observability.correlation import CORRELATION_ID_HEADER

if TYPE_CHECKING:
    from app.domain.messages import NormalizedMessage

logger = logging.getLogger(__name__)

DESTINATION_KEY_HEADER = "x-destination-key"


@dataclass(frozen=True, slots=True)
class ForwardResult:
    """Resultado de uma entrega downstream."""

    success: bool
    latency_ms: int
    status_code: int | None = None
    error: str | None = None


class DestinationForwarder:
    """Entrega a mensagem normalizada (não o payload bruto) via HTTP POST.

    Args:
        timeout_seconds: Timeout total da entrega
        client: httpx.AsyncClient compartilhado; se None, um cliente
            transitório é aberto e fechado a cada entrega
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout_seconds
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient | None:
        return self._client

    async def open(self) -> None:
        """Abre o cliente HTTP compartilhado (idempotente)."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)

    async def aclose(self) -> None:
        """Fecha o cliente HTTP compartilhado."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def forward(
        self,
        message: NormalizedMessage,
        destination_url: str,
        destination_key: str | None = None,
    ) -> ForwardResult:
        """Entrega a mensagem; nunca levanta exceção por falha de transporte."""
        correlation_id = get_correlation_id()
        headers = {CORRELATION_ID_HEADER: correlation_id} if correlation_id else {}
        if destination_key:
            headers[DESTINATION_KEY_HEADER] = destination_key

        started_at = time.perf_counter()
        try:
            response = await self._post(destination_url, message.to_dict(), headers)
        except httpx.TimeoutException:
            result = ForwardResult(
                success=False, latency_ms=_elapsed_ms(started_at), error="timeout"
            )
        except httpx.HTTPError as exc:
            result = ForwardResult(
                success=False, latency_ms=_elapsed_ms(started_at), error=type(exc).__name__
            )
        else:
            latency_ms = _elapsed_ms(started_at)
            if response.is_success:
                result = ForwardResult(
                    success=True, latency_ms=latency_ms, status_code=response.status_code
                )
            else:
                result = ForwardResult(
                    success=False,
                    latency_ms=latency_ms,
                    status_code=response.status_code,
                    error=f"http_status_{response.status_code}",
                )

        self._log_result(result, destination_key, correlation_id)
        return result

    async def _post(
        self,
        url: str,
        body: dict[str, object],
        headers: dict[str, str],
    ) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(url, json=body, headers=headers, timeout=self._timeout)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, json=body, headers=headers)

    def _log_result(
        self,
        result: ForwardResult,
        destination_key: str | None,
        correlation_id: str,
    ) -> None:
        key = destination_key or "unknown"
        record_latency("forwarder", "forward", result.latency_ms, correlation_id)
        record_forward_outcome(key, result.success, result.status_code, correlation_id)
        if result.success:
            logger.info(
                "forward_completed",
                extra={"destination_key": key, "status_code": result.status_code},
            )
            return
        logger.warning(
            "forward_failed",
            extra={
                "destination_key": key,
                "status_code": result.status_code,
                "error": result.error,
            },
        )


def _elapsed_ms(started_at: float) -> int:
    return int(round((time.perf_counter() - started_at) * 1000))
