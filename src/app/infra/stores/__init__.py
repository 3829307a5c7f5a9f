"""Stores — implementações concretas de estado do processo.

Módulos disponíveis:
    - rate_limit_store: Janela fixa de rate limiting em memória
"""

from __future__ import annotations

from app.infra.stores.rate_limit_store import MemoryRateLimitStore, RateLimitEntry

__all__ = [
    "MemoryRateLimitStore",
    "RateLimitEntry",
]
