"""Settings do rate limiter de webhooks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class RateLimitSettings:
    """Configurações de rate limit (janela fixa).

    Attributes:
        max_requests: Máximo de requisições por chave dentro da janela
        window_ms: Duração da janela em milissegundos
        sweep_interval_seconds: Intervalo da limpeza de janelas expiradas
        enabled: Se o limiter está ativo no webhook
    """

    max_requests: int = 120
    window_ms: int = 60_000
    sweep_interval_seconds: float = 60.0
    enabled: bool = True

    def validate(self) -> list[str]:
        """Valida thresholds do limiter."""
        errors: list[str] = []

        if self.max_requests <= 0:
            errors.append("RATE_LIMIT_MAX_REQUESTS deve ser > 0")

        if self.window_ms <= 0:
            errors.append("RATE_LIMIT_WINDOW_MS deve ser > 0")

        if self.sweep_interval_seconds <= 0:
            errors.append("RATE_LIMIT_SWEEP_INTERVAL_SECONDS deve ser > 0")

        return errors


def _load_rate_limit_from_env() -> RateLimitSettings:
    """Carrega RateLimitSettings de variáveis de ambiente."""
    return RateLimitSettings(
        max_requests=int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "120")),
        window_ms=int(os.getenv("RATE_LIMIT_WINDOW_MS", "60000")),
        sweep_interval_seconds=float(
            os.getenv("RATE_LIMIT_SWEEP_INTERVAL_SECONDS", "60")
        ),
        enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() in ("true", "1", "yes"),
    )


@lru_cache(maxsize=1)
def get_rate_limit_settings() -> RateLimitSettings:
    """Retorna instância cacheada de RateLimitSettings."""
    return _load_rate_limit_from_env()
