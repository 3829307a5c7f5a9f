"""Protocolo de encaminhamento para destinos downstream."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.domain.messages import NormalizedMessage
    from app.services.forwarder import ForwardResult


class DestinationForwarderProtocol(Protocol):
    """Contrato mínimo para entrega de uma mensagem normalizada."""

    async def forward(
        self,
        message: NormalizedMessage,
        destination_url: str,
        destination_key: str | None = None,
    ) -> ForwardResult: ...
