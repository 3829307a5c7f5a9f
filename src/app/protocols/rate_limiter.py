"""Protocolo de store de rate limit."""

from __future__ import annotations

from abc import ABC, abstractmethod


class RateLimiterProtocol(ABC):
    """Contrato mínimo para limiter de janela fixa.

    Método canônico:
    - check(key, max_requests, window_ms) -> bool
      Retorna True se o limite foi excedido na janela corrente.
    """

    @abstractmethod
    def check(self, key: str, max_requests: int, window_ms: int) -> bool:
        """Conta a requisição e informa se o limite foi excedido.

        Args:
            key: Chave do limiter (ex.: endereço do cliente)
            max_requests: Máximo de requisições aceitas na janela
            window_ms: Duração da janela em milissegundos

        Returns:
            True se excedido; False se a requisição pode seguir.
        """

    @abstractmethod
    def sweep(self) -> int:
        """Remove janelas expiradas e retorna quantas foram removidas."""
