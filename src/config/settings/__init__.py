"""Agregador de settings do gateway.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# AI/LLM settings
from config.settings.ai import (
    OpenAISettings,
    get_openai_settings,
)

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    RateLimitSettings,
    get_base_settings,
    get_rate_limit_settings,
    is_placeholder_value,
    missing_required,
)

# Health settings
from config.settings.health import (
    HealthSettings,
    get_health_settings,
)

# Infrastructure settings
from config.settings.infra import (
    FirestoreSettings,
    WorkerSettings,
    get_firestore_settings,
    get_worker_settings,
)

# Routing settings
from config.settings.routing import (
    DESTINATION_ENV_VARS,
    RoutingSettings,
    get_routing_settings,
)

# Channel-specific settings
from config.settings.whatsapp import (
    SIGNATURE_HEADER,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "DESTINATION_ENV_VARS",
    "SIGNATURE_HEADER",
    # Base
    "BaseSettings",
    "Environment",
    # Infrastructure
    "FirestoreSettings",
    "HealthSettings",
    # AI
    "OpenAISettings",
    "RateLimitSettings",
    "RoutingSettings",
    # Channels
    "WhatsAppSettings",
    "WorkerSettings",
    "get_base_settings",
    "get_firestore_settings",
    "get_health_settings",
    "get_openai_settings",
    "get_rate_limit_settings",
    "get_routing_settings",
    "get_whatsapp_settings",
    "get_worker_settings",
    "is_placeholder_value",
    "missing_required",
]
