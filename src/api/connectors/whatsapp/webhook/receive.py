"""Autenticação e parse inicial das entregas do webhook (sem PII)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from utils.errors import InvalidSignatureError

from ..signature import verify_meta_signature


class InvalidJsonError(ValueError):
    """JSON inválido no payload do webhook."""


@dataclass(frozen=True, slots=True)
class InboundEnvelope:
    """Corpo bruto de uma entrega, descartado após a verificação."""

    raw_body: bytes
    signature: str | None
    received_at: datetime = field(default_factory=lambda: datetime.now(UTC))


def authenticate_envelope(envelope: InboundEnvelope, secret: str | None) -> None:
    """Valida a assinatura do envelope.

    Raises:
        MissingSignatureError: Header ausente.
        SignatureSecretNotConfiguredError: Secret não configurado.
        InvalidSignatureError: Assinatura não confere.
    """
    if not verify_meta_signature(envelope.signature, envelope.raw_body, secret):
        raise InvalidSignatureError("invalid_signature")


def parse_envelope_json(envelope: InboundEnvelope) -> dict[str, Any]:
    """Parseia o corpo JSON de um envelope já autenticado.

    Raises:
        InvalidJsonError: Se o JSON estiver inválido ou não for objeto
    """
    try:
        payload = json.loads(envelope.raw_body or b"{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidJsonError("invalid_json") from exc

    if not isinstance(payload, dict):
        raise InvalidJsonError("payload_not_object")

    return payload
