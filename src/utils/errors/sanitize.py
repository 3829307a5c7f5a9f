"""Sanitização de mensagens de erro expostas ao cliente."""

from __future__ import annotations

import os

GENERIC_ERROR_MESSAGE = "internal_error"


def sanitize_error_message(
    error: BaseException | str,
    generic_message: str = GENERIC_ERROR_MESSAGE,
) -> str:
    """Retorna mensagem segura para resposta HTTP.

    Em development devolve a mensagem completa; nos demais ambientes
    devolve apenas a mensagem genérica.
    """
    if os.getenv("ENVIRONMENT", "development").lower() in ("development", "dev"):
        return str(error)
    return generic_message
