"""Settings de roteamento por destino.

Cada destination key aponta para exatamente uma URL de encaminhamento.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from config.settings.base.guards import missing_required

# Ordem estável: usada também para listar erros de configuração.
DESTINATION_ENV_VARS: tuple[tuple[str, str], ...] = (
    ("easymo", "DEST_EASYMO_URL"),
    ("insurance", "DEST_INSURANCE_URL"),
    ("basket", "DEST_BASKET_URL"),
    ("qr", "DEST_QR_URL"),
    ("dine", "DEST_DINE_URL"),
)


@dataclass(frozen=True)
class RoutingSettings:
    """Configurações de encaminhamento.

    Attributes:
        destinations: destination key -> URL de encaminhamento
        forward_timeout_seconds: Timeout de cada entrega downstream
    """

    destinations: dict[str, str] = field(default_factory=dict)
    forward_timeout_seconds: float = 10.0

    def validate(self) -> list[str]:
        """Valida que todo destino conhecido tem URL configurada."""
        values = {
            env_var: self.destinations.get(key, "")
            for key, env_var in DESTINATION_ENV_VARS
        }
        errors = [f"{name} não configurado" for name in missing_required(values)]

        if self.forward_timeout_seconds <= 0:
            errors.append("FORWARD_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_routing_from_env() -> RoutingSettings:
    """Carrega RoutingSettings de variáveis de ambiente."""
    destinations = {
        key: os.getenv(env_var, "").strip() for key, env_var in DESTINATION_ENV_VARS
    }
    return RoutingSettings(
        destinations=destinations,
        forward_timeout_seconds=float(os.getenv("FORWARD_TIMEOUT_SECONDS", "10")),
    )


@lru_cache(maxsize=1)
def get_routing_settings() -> RoutingSettings:
    """Retorna instância cacheada de RoutingSettings."""
    return _load_routing_from_env()
