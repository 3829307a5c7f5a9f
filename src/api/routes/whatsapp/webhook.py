"""Endpoints de webhook do WhatsApp.

Endpoints:
- GET /webhook/whatsapp: verificação de webhook (Meta challenge)
- POST /webhook/whatsapp: recebimento de eventos inbound

Fluxo do POST:
1. Assinatura HMAC obrigatória (403; 500 se o secret não existir)
2. Rate limit por endereço do cliente (429)
3. JSON inválido é registrado e confirmado com 200
4. Normaliza, roteia e encaminha; o resultado nunca muda o 200
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from api.connectors.whatsapp.webhook import (
    InboundEnvelope,
    InvalidJsonError,
    authenticate_envelope,
    parse_envelope_json,
    verify_webhook_challenge,
)
from app.observability import (
    CORRELATION_ID_HEADER,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from config.settings import SIGNATURE_HEADER, get_rate_limit_settings, get_whatsapp_settings
from utils.errors import (
    AuthenticationError,
    SignatureSecretNotConfiguredError,
    WebhookChallengeError,
)

logger = logging.getLogger(__name__)

router = APIRouter()

UNKNOWN_CLIENT = "unknown"


def _client_key(request: Request) -> str:
    return request.client.host if request.client else UNKNOWN_CLIENT


def _is_rate_limited(request: Request) -> bool:
    settings = get_rate_limit_settings()
    store = getattr(request.app.state, "rate_limit_store", None)
    if not settings.enabled or store is None:
        return False
    return store.check(_client_key(request), settings.max_requests, settings.window_ms)


def _text_response(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


@router.get("")
async def verify_webhook(request: Request) -> Response:
    """Verificação de webhook — responde ao challenge da Meta.

    Query params esperados:
    - hub.mode: deve ser "subscribe"
    - hub.verify_token: deve corresponder ao configurado
    - hub.challenge: valor a retornar

    Returns:
        Texto do challenge ou erro 403.
    """
    settings = get_whatsapp_settings()

    hub_mode = request.query_params.get("hub.mode")

    try:
        challenge = verify_webhook_challenge(
            hub_mode=hub_mode,
            hub_verify_token=request.query_params.get("hub.verify_token"),
            hub_challenge=request.query_params.get("hub.challenge"),
            expected_token=settings.verify_token,
        )
    except WebhookChallengeError as exc:
        logger.warning(
            "webhook_verification_failed",
            extra={"channel": "whatsapp", "hub_mode": hub_mode, "error": str(exc)},
        )
        return _text_response("Forbidden", status.HTTP_403_FORBIDDEN)

    logger.info("webhook_verified", extra={"channel": "whatsapp", "hub_mode": hub_mode})

    # Meta espera o challenge como texto puro
    return _text_response(challenge, status.HTTP_200_OK)


@router.post("", response_model=None)
async def receive_webhook(request: Request) -> Response | dict[str, Any]:
    """Recebimento de eventos inbound do WhatsApp.

    Returns:
        Confirmação de recebimento ou Response de erro.
    """
    token = set_correlation_id(
        request.headers.get(CORRELATION_ID_HEADER) or get_correlation_id() or None
    )

    try:
        envelope = InboundEnvelope(
            raw_body=await request.body(),
            signature=request.headers.get(SIGNATURE_HEADER),
        )

        try:
            authenticate_envelope(envelope, get_whatsapp_settings().app_secret)
        except SignatureSecretNotConfiguredError:
            logger.error(
                "webhook_secret_not_configured",
                extra={"channel": "whatsapp", "correlation_id": get_correlation_id()},
            )
            return _text_response(
                "Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR
            )
        except AuthenticationError as exc:
            logger.warning(
                "webhook_signature_invalid",
                extra={
                    "channel": "whatsapp",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                },
            )
            return _text_response("Forbidden", status.HTTP_403_FORBIDDEN)

        if _is_rate_limited(request):
            metrics = getattr(request.app.state, "metrics", None)
            if metrics is not None:
                metrics.record_rate_limited()
            logger.warning(
                "webhook_rate_limited",
                extra={"channel": "whatsapp", "correlation_id": get_correlation_id()},
            )
            return _text_response("Too Many Requests", status.HTTP_429_TOO_MANY_REQUESTS)

        try:
            payload = parse_envelope_json(envelope)
        except InvalidJsonError as exc:
            # Confirmamos mesmo assim para a Meta não reenviar o lixo
            logger.warning(
                "webhook_json_invalid",
                extra={
                    "channel": "whatsapp",
                    "correlation_id": get_correlation_id(),
                    "error": str(exc),
                    "payload_size": len(envelope.raw_body),
                },
            )
            return {
                "status": "received",
                "correlation_id": get_correlation_id(),
                "messages": 0,
                "forwarded": 0,
            }

        logger.info(
            "webhook_received",
            extra={
                "channel": "whatsapp",
                "correlation_id": get_correlation_id(),
                "payload_size": len(envelope.raw_body),
            },
        )

        messages = forwarded = 0
        try:
            summary = await request.app.state.route_inbound.execute(payload)
            messages, forwarded = summary.received, summary.forwarded
        except Exception:
            logger.exception(
                "webhook_processing_failed",
                extra={"channel": "whatsapp", "correlation_id": get_correlation_id()},
            )
            metrics = getattr(request.app.state, "metrics", None)
            if metrics is not None:
                metrics.record_failed()

        return {
            "status": "received",
            "correlation_id": get_correlation_id(),
            "messages": messages,
            "forwarded": forwarded,
        }

    finally:
        reset_correlation_id(token)
