"""Hierarquia de exceções do gateway.

Apenas ConfigurationError no startup é fatal para o processo; as demais
são tratadas localmente e refletidas em status HTTP, logs ou health.
"""

from __future__ import annotations


class GatewayError(Exception):
    """Base para erros do gateway."""


class AuthenticationError(GatewayError):
    """Assinatura ou verify token ausente/inválido (HTTP 403)."""


class MissingSignatureError(AuthenticationError):
    """Header x-hub-signature-256 ausente."""


class InvalidSignatureError(AuthenticationError):
    """Assinatura presente mas não confere com o corpo."""


class WebhookChallengeError(AuthenticationError):
    """Handshake de verificação do webhook rejeitado."""


class ConfigurationError(GatewayError):
    """Configuração obrigatória ausente ou inválida."""


class SignatureSecretNotConfiguredError(ConfigurationError):
    """Secret de assinatura não configurado no servidor (HTTP 500)."""


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""
