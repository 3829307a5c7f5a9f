"""Settings específicas de WhatsApp.

Credenciais do webhook da Cloud API: verify token do handshake (GET) e
secret de assinatura HMAC das entregas (POST).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from config.settings.base.guards import missing_required

SIGNATURE_HEADER = "x-hub-signature-256"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Configurações do canal WhatsApp.

    Attributes:
        verify_token: Token para verificação de webhook
        app_secret: Secret para validação HMAC de payloads
    """

    verify_token: str = ""
    app_secret: str = ""

    def validate(self) -> list[str]:
        """Valida configurações mínimas de WhatsApp.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        missing = missing_required(
            {
                "WA_VERIFY_TOKEN": self.verify_token,
                "WA_APP_SECRET": self.app_secret,
            }
        )
        return [f"{name} não configurado" for name in missing]


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        verify_token=os.getenv("WA_VERIFY_TOKEN", ""),
        app_secret=os.getenv("WA_APP_SECRET", ""),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings.

    A cache garante singleton para múltiplas injeções.
    """
    return _load_from_env()
