"""Webhook WhatsApp: verificação, assinatura e parsing seguro."""

from ..signature import (
    constant_time_compare,
    verify_hmac_signature,
    verify_meta_signature,
)
from .receive import (
    InboundEnvelope,
    InvalidJsonError,
    authenticate_envelope,
    parse_envelope_json,
)
from .verify import verify_webhook_challenge

__all__ = [
    "InboundEnvelope",
    "InvalidJsonError",
    "authenticate_envelope",
    "constant_time_compare",
    "parse_envelope_json",
    "verify_hmac_signature",
    "verify_meta_signature",
    "verify_webhook_challenge",
]
