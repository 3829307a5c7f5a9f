"""Decisão de roteamento derivada de uma mensagem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RouteDecision:
    """Destino resolvido para uma mensagem.

    Attributes:
        destination_key: Categoria de roteamento (ex: insurance, qr)
        destination_url: URL de encaminhamento configurada (nunca vazia)
        matched_keyword: Keyword da tabela que casou
    """

    destination_key: str
    destination_url: str
    matched_keyword: str | None = None

    def __post_init__(self) -> None:
        if not self.destination_url:
            raise ValueError("destination_url é obrigatório")
