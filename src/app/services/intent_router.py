"""Classificação de intent por keyword e resolução de destino.

A tabela de keywords é uma sequência ordenada: quando mais de uma keyword
aparece na mesma mensagem, vence a primeira da tabela (não a mais longa,
nem a que aparece antes no texto). Aliases (ex.: "baskets") apontam para
a destination key canônica; não há stemming.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from app.domain.routing import RouteDecision
from utils.errors import ConfigurationError

if TYPE_CHECKING:
    from app.domain.messages import NormalizedMessage

logger = logging.getLogger(__name__)

# (keyword, destination_key) em ordem de desempate.
KEYWORD_TABLE: tuple[tuple[str, str], ...] = (
    ("easymo", "easymo"),
    ("insurance", "insurance"),
    ("basket", "basket"),
    ("baskets", "basket"),
    ("qr", "qr"),
    ("dine", "dine"),
)

KEYWORD_VOCABULARY: tuple[str, ...] = tuple(keyword for keyword, _ in KEYWORD_TABLE)

DESTINATION_KEYS: tuple[str, ...] = tuple(dict.fromkeys(key for _, key in KEYWORD_TABLE))


def classify_keyword(text: str | None) -> tuple[str, str] | None:
    """Retorna (keyword, destination_key) da primeira keyword contida no texto."""
    if not text:
        return None
    cleaned = text.lower().strip()
    if not cleaned:
        return None
    for keyword, destination_key in KEYWORD_TABLE:
        if keyword in cleaned:
            return keyword, destination_key
    return None


class IntentRouter:
    """Classifica mensagens e resolve a URL de encaminhamento.

    Args:
        destinations: destination key -> URL configurada

    Raises:
        ConfigurationError: Se alguma destination key da tabela não tiver URL.
    """

    def __init__(self, destinations: Mapping[str, str]) -> None:
        missing = [key for key in DESTINATION_KEYS if not destinations.get(key)]
        if missing:
            raise ConfigurationError(
                f"URL de destino não configurada para: {', '.join(missing)}"
            )
        self._destinations = dict(destinations)

    def resolve(self, destination_key: str) -> str | None:
        """Retorna a URL do destino, ou None se a key não for registrada."""
        return self._destinations.get(destination_key) or None

    def classify(self, message: NormalizedMessage) -> RouteDecision | None:
        """Classifica a mensagem; None significa "sem rota" (não há default)."""
        for candidate in message.routable_texts():
            match = classify_keyword(candidate)
            if match is None:
                continue
            keyword, destination_key = match
            destination_url = self.resolve(destination_key)
            if destination_url is None:
                break
            return RouteDecision(
                destination_key=destination_key,
                destination_url=destination_url,
                matched_keyword=keyword,
            )

        logger.info(
            "routing_miss",
            extra={
                "message_id_prefix": message.message_id[:12],
                "message_type": message.type,
                "keywords_evaluated": list(KEYWORD_VOCABULARY),
            },
        )
        return None
