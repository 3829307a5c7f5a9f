"""Configuração do pytest para o gateway de webhooks WhatsApp."""

import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

DESTINATION_URLS = {
    "DEST_EASYMO_URL": "https://easymo.test/inbound",
    "DEST_INSURANCE_URL": "https://insurance.test/inbound",
    "DEST_BASKET_URL": "https://basket.test/inbound",
    "DEST_QR_URL": "https://qr.test/inbound",
    "DEST_DINE_URL": "https://dine.test/inbound",
}


def _clear_settings_caches() -> None:
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

    for getter in (
        get_base_settings,
        get_firestore_settings,
        get_health_settings,
        get_openai_settings,
        get_rate_limit_settings,
        get_routing_settings,
        get_whatsapp_settings,
        get_worker_settings,
    ):
        getter.cache_clear()


@pytest.fixture(autouse=True)
def _isolated_settings():
    """Settings em cache não vazam entre testes que alteram o ambiente."""
    _clear_settings_caches()
    yield
    _clear_settings_caches()


@pytest.fixture
def gateway_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Ambiente mínimo válido para development."""
    env = {
        "ENVIRONMENT": "development",
        "WA_VERIFY_TOKEN": "test_verify_token",
        "WA_APP_SECRET": "test_app_secret",
        **DESTINATION_URLS,
    }
    for key in (
        "OPENAI_API_KEY",
        "REDIS_URL",
        "FIRESTORE_PROJECT_ID",
        "GCP_PROJECT",
        "GOOGLE_CLOUD_PROJECT",
        "OPENAI_ENABLED",
        "WORKER_ENABLED",
    ):
        monkeypatch.delenv(key, raising=False)
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env
