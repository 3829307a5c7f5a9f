"""Settings do worker de ingestão.

O worker consome payloads de webhook enfileirados em uma lista Redis.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class WorkerSettings:
    """Configurações do WorkerRuntime.

    Attributes:
        enabled: Se o loop de ingestão deve ser iniciado no startup
        queue_key: Lista Redis consumida via BRPOP
        poll_timeout_seconds: Timeout de cada BRPOP
        shutdown_grace_seconds: Tempo máximo de drenagem no stop()
        max_in_flight: Jobs processados em paralelo
        error_backoff_seconds: Pausa após falha do loop
    """

    enabled: bool = True
    queue_key: str = "wa:webhook:queue"
    poll_timeout_seconds: float = 1.0
    shutdown_grace_seconds: float = 10.0
    max_in_flight: int = 10
    error_backoff_seconds: float = 1.0

    def validate(self, redis_url: str) -> list[str]:
        """Valida configurações do worker."""
        errors: list[str] = []

        if self.enabled and not redis_url:
            errors.append("WORKER_ENABLED=true requer REDIS_URL configurado")

        if not self.queue_key:
            errors.append("WORKER_QUEUE_KEY não pode ser vazio")

        if self.poll_timeout_seconds <= 0:
            errors.append("WORKER_POLL_TIMEOUT_SECONDS deve ser > 0")

        if self.shutdown_grace_seconds < 0:
            errors.append("WORKER_SHUTDOWN_GRACE_SECONDS deve ser >= 0")

        if self.max_in_flight <= 0:
            errors.append("WORKER_MAX_IN_FLIGHT deve ser > 0")

        return errors


def _load_worker_from_env() -> WorkerSettings:
    """Carrega WorkerSettings de variáveis de ambiente."""
    return WorkerSettings(
        enabled=os.getenv("WORKER_ENABLED", "true").lower() in ("true", "1", "yes"),
        queue_key=os.getenv("WORKER_QUEUE_KEY", "wa:webhook:queue"),
        poll_timeout_seconds=float(os.getenv("WORKER_POLL_TIMEOUT_SECONDS", "1")),
        shutdown_grace_seconds=float(os.getenv("WORKER_SHUTDOWN_GRACE_SECONDS", "10")),
        max_in_flight=int(os.getenv("WORKER_MAX_IN_FLIGHT", "10")),
        error_backoff_seconds=float(os.getenv("WORKER_ERROR_BACKOFF_SECONDS", "1")),
    )


@lru_cache(maxsize=1)
def get_worker_settings() -> WorkerSettings:
    """Retorna instância cacheada de WorkerSettings."""
    return _load_worker_from_env()
