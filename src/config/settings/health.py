"""Settings de health check."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class HealthSettings:
    """Configurações dos probes de dependências.

    Attributes:
        probe_timeout_seconds: Limite de cada probe individual
    """

    probe_timeout_seconds: float = 5.0

    def validate(self) -> list[str]:
        """Valida configurações de health."""
        if self.probe_timeout_seconds <= 0:
            return ["PROBE_TIMEOUT_SECONDS deve ser > 0"]
        return []


def _load_health_from_env() -> HealthSettings:
    """Carrega HealthSettings de variáveis de ambiente."""
    return HealthSettings(
        probe_timeout_seconds=float(os.getenv("PROBE_TIMEOUT_SECONDS", "5")),
    )


@lru_cache(maxsize=1)
def get_health_settings() -> HealthSettings:
    """Retorna instância cacheada de HealthSettings."""
    return _load_health_from_env()
