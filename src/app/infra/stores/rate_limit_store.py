"""Rate limiter em memória com janela fixa.

Aproximado por natureza: rajadas na virada da janela são possíveis. O
objetivo é amortecer abuso, não contabilidade exata.

O store é um objeto explícito (sem estado global de módulo) injetado nos
handlers via app.state, permitindo um store isolado por teste.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.protocols.rate_limiter import RateLimiterProtocol

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(slots=True)
class RateLimitEntry:
    """Contador de uma chave na janela corrente."""

    key: str
    count: int
    window_reset_at: float  # epoch em ms


def _now_ms() -> float:
    return time.time() * 1000


class MemoryRateLimitStore(RateLimiterProtocol):
    """Store de rate limit em memória (por processo).

    Args:
        clock: Função que retorna o instante atual em ms (injetável em testes)
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._entries: dict[str, RateLimitEntry] = {}
        self._clock = clock or _now_ms
        self._lock = threading.Lock()

    def check(self, key: str, max_requests: int, window_ms: int) -> bool:
        """Conta a requisição e retorna True se o limite foi excedido."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.window_reset_at < now:
                self._entries[key] = RateLimitEntry(
                    key=key, count=1, window_reset_at=now + window_ms
                )
                return False

            if entry.count >= max_requests:
                return True

            entry.count += 1
            return False

    def sweep(self) -> int:
        """Remove entradas cuja janela já expirou."""
        now = self._clock()
        with self._lock:
            expired = [
                key for key, entry in self._entries.items() if entry.window_reset_at < now
            ]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def get(self, key: str) -> RateLimitEntry | None:
        """Retorna a entrada corrente da chave (para inspeção)."""
        with self._lock:
            return self._entries.get(key)

    def __len__(self) -> int:
        return len(self._entries)
