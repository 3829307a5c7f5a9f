"""Validação de assinatura HMAC dos webhooks.

O HMAC é calculado sobre os bytes brutos do corpo (antes de qualquer
parse) e comparado em tempo constante.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from utils.errors import MissingSignatureError, SignatureSecretNotConfiguredError

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="

SUPPORTED_ALGORITHMS = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}


def constant_time_compare(a: str, b: str) -> bool:
    """Compara duas strings sem curto-circuito na primeira divergência.

    Tamanhos diferentes retornam False de imediato; com tamanhos iguais,
    todas as posições são comparadas (OR acumulado dos XORs).
    """
    if len(a) != len(b):
        return False

    result = 0
    for left, right in zip(a, b):
        result |= ord(left) ^ ord(right)
    return result == 0


def compute_signature(
    raw_body: bytes | str,
    secret: str,
    algorithm: str = "sha256",
) -> str:
    """Calcula o HMAC hex do corpo bruto com o secret informado."""
    digestmod = SUPPORTED_ALGORITHMS.get(algorithm.lower())
    if digestmod is None:
        raise ValueError("unsupported_algorithm")
    body = raw_body.encode("utf-8") if isinstance(raw_body, str) else raw_body
    return hmac.new(secret.encode("utf-8"), body, digestmod).hexdigest()


def verify_hmac_signature(
    signature: str | None,
    raw_body: bytes | str,
    secret: str | None,
    algorithm: str = "sha256",
) -> bool:
    """Valida assinatura HMAC genérica (sha1, sha256 ou sha512).

    Raises:
        ValueError: Se assinatura ou secret estiverem vazios, ou se o
            algoritmo não for suportado.

    Returns:
        True se a assinatura confere.
    """
    if not signature or not secret:
        raise ValueError("missing_signature_or_secret")
    expected = compute_signature(raw_body, secret, algorithm)
    return constant_time_compare(signature.strip().lower(), expected)


def _strip_prefix(signature_header: str) -> str:
    value = signature_header.strip()
    if value.lower().startswith(SIGNATURE_PREFIX):
        value = value[len(SIGNATURE_PREFIX):]
    return value.strip().lower()


def verify_meta_signature(
    signature_header: str | None,
    raw_body: bytes | str,
    secret: str | None,
) -> bool:
    """Valida o header x-hub-signature-256 enviado pela Meta.

    Args:
        signature_header: Valor do header (com ou sem prefixo sha256=)
        raw_body: Corpo bruto da requisição
        secret: App secret configurado

    Raises:
        MissingSignatureError: Header ausente ou vazio.
        SignatureSecretNotConfiguredError: Secret não configurado.

    Returns:
        True se a assinatura confere; False caso contrário.
    """
    if not signature_header or not signature_header.strip():
        raise MissingSignatureError("missing_signature")

    if not secret:
        logger.error("signature_secret_not_configured", extra={"component": "signature"})
        raise SignatureSecretNotConfiguredError("secret_not_configured")

    provided = _strip_prefix(signature_header)
    expected = compute_signature(raw_body, secret)
    valid = constant_time_compare(expected, provided)
    if not valid:
        logger.warning(
            "signature_mismatch",
            extra={
                "component": "signature",
                "provided_length": len(provided),
                "expected_length": len(expected),
            },
        )
    return valid
