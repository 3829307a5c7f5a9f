"""Normalizer de payloads WhatsApp Business API.

Percorre entry[] -> changes[] -> value -> messages[] e produz uma
NormalizedMessage por unidade, preservando a ordem de chegada.

Níveis ausentes ou malformados são pulados; uma unidade inválida nunca
aborta a normalização das demais. Não faz validação de negócio.
"""

from __future__ import annotations

import logging
from typing import Any

from app.domain.messages import NormalizedMessage

from ._extraction_helpers import (
    MEDIA_TYPES,
    extract_button_message,
    extract_interactive_message,
    extract_media_message,
    extract_text_message,
    str_or_none,
)

logger = logging.getLogger(__name__)


def _iter_dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _iter_message_units(payload: dict[str, Any]) -> list[dict[str, Any]]:
    units: list[dict[str, Any]] = []
    for entry in _iter_dicts(payload.get("entry")):
        for change in _iter_dicts(entry.get("changes")):
            value = change.get("value")
            if not isinstance(value, dict):
                logger.debug("normalization_skip", extra={"reason": "missing_value"})
                continue
            messages = value.get("messages")
            if messages is None:
                # Status updates chegam sem messages
                continue
            units.extend(_iter_dicts(messages))
    return units


def normalize_message(msg: dict[str, Any]) -> NormalizedMessage | None:
    """Converte uma unidade do provedor em NormalizedMessage.

    Returns:
        NormalizedMessage, ou None se faltar `from` ou `id`.
    """
    from_number = msg.get("from")
    message_id = msg.get("id")
    if not isinstance(from_number, str) or not isinstance(message_id, str):
        return None
    if not from_number or not message_id:
        return None

    message_type = str_or_none(msg.get("type")) or "unknown"
    text = None
    interactive = None
    media = None

    if message_type == "text":
        text = extract_text_message(msg)
    elif message_type == "interactive":
        interactive = extract_interactive_message(msg)
    elif message_type == "button":
        interactive = extract_button_message(msg)
    elif message_type in MEDIA_TYPES:
        media = extract_media_message(msg, message_type)

    return NormalizedMessage(
        from_number=from_number,
        message_id=message_id,
        type=message_type,
        text=text,
        interactive=interactive,
        media=media,
        timestamp=str_or_none(msg.get("timestamp")),
    )


def normalize_payload(payload: dict[str, Any]) -> list[NormalizedMessage]:
    """Normaliza o payload do webhook em uma lista ordenada de mensagens."""
    if not isinstance(payload, dict):
        return []

    normalized: list[NormalizedMessage] = []
    for unit in _iter_message_units(payload):
        try:
            message = normalize_message(unit)
        except (TypeError, ValueError, AttributeError) as exc:
            logger.warning(
                "normalization_skip",
                extra={"reason": "malformed_unit", "error_type": type(exc).__name__},
            )
            continue
        if message is None:
            logger.warning("normalization_skip", extra={"reason": "missing_from_or_id"})
            continue
        normalized.append(message)
    return normalized
