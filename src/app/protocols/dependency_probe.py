"""Protocolo de probe de dependência externa."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.services.health.probes import ProbeResult


class DependencyProbeProtocol(Protocol):
    """Checa alcance e latência de uma dependência.

    `probe()` nunca levanta exceção: toda falha vira ProbeResult(status="fail").
    """

    name: str

    async def probe(self) -> ProbeResult: ...
