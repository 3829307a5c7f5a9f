"""Bootstrap da aplicação: inicialização e validação de configuração.

Este módulo é o composition root junto com app.bootstrap.dependencies:
configura logging e valida settings antes de qualquer wiring.
"""

from __future__ import annotations

import logging
import os

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.settings import (
    get_base_settings,
    get_firestore_settings,
    get_health_settings,
    get_openai_settings,
    get_rate_limit_settings,
    get_routing_settings,
    get_whatsapp_settings,
    get_worker_settings,
)
from utils.errors import ConfigurationError

# Nome do serviço para logs e métricas
SERVICE_NAME = "wa_gateway"

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"

# Dependências externas só bloqueiam o boot nestes ambientes
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging estruturado JSON com correlation_id.

    Deve ser chamada uma vez no início do serviço.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    configure_logging(
        level=log_level,
        service_name=SERVICE_NAME,
        correlation_id_getter=get_correlation_id,
    )


def collect_settings_errors() -> tuple[list[str], list[str]]:
    """Valida todas as settings.

    Returns:
        (erros obrigatórios, erros de dependências externas)
    """
    base = get_base_settings()
    required: list[str] = []
    required.extend(f"base: {error}" for error in base.validate())
    required.extend(f"whatsapp: {error}" for error in get_whatsapp_settings().validate())
    required.extend(f"routing: {error}" for error in get_routing_settings().validate())
    required.extend(f"rate_limit: {error}" for error in get_rate_limit_settings().validate())
    required.extend(f"health: {error}" for error in get_health_settings().validate())

    dependencies: list[str] = []
    dependencies.extend(f"openai: {error}" for error in get_openai_settings().validate())
    dependencies.extend(
        f"firestore: {error}"
        for error in get_firestore_settings().validate(base.gcp_project)
    )
    dependencies.extend(
        f"worker: {error}" for error in get_worker_settings().validate(base.redis_url)
    )
    return required, dependencies


def validate_runtime_settings() -> None:
    """Valida settings no startup.

    Verify token, signing secret, URLs de destino e thresholds são sempre
    obrigatórios. Credenciais das dependências (OpenAI, Firestore, Redis)
    bloqueiam o boot em staging/production e só geram alerta em development.

    Raises:
        ConfigurationError: Com a lista de problemas encontrados.
    """
    environment = get_base_settings().environment
    required, dependencies = collect_settings_errors()
    errors = required + (dependencies if environment in STRICT_VALIDATION_ENVS else [])

    if dependencies and environment not in STRICT_VALIDATION_ENVS:
        logger.warning(
            "settings_dependencies_incomplete",
            extra={"component": "bootstrap", "environment": environment, "errors": dependencies},
        )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.critical(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    details = "\n".join(f"- {error}" for error in errors)
    raise ConfigurationError(f"Configuração inválida para {environment}:\n{details}")
