"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    GatewayError,
    InfrastructureError,
    InvalidSignatureError,
    MissingSignatureError,
    SignatureSecretNotConfiguredError,
    WebhookChallengeError,
)
from .sanitize import sanitize_error_message

__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "GatewayError",
    "InfrastructureError",
    "InvalidSignatureError",
    "MissingSignatureError",
    "SignatureSecretNotConfiguredError",
    "WebhookChallengeError",
    "sanitize_error_message",
]
