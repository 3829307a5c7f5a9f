"""Testes da validação de settings no startup e do wiring."""

from __future__ import annotations

import pytest

from app.bootstrap import validate_runtime_settings
from app.bootstrap.clients import create_openai_client
from app.bootstrap.dependencies import create_gateway_components, create_health_probes
from app.runtime import WorkerState
from config.settings import OpenAISettings
from utils.errors import ConfigurationError


class TestValidateRuntimeSettings:
    """Testes para validate_runtime_settings."""

    def test_development_tolerates_missing_dependencies(self, gateway_env: dict[str, str]) -> None:
        validate_runtime_settings()

    def test_missing_app_secret_is_fatal(
        self, gateway_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("WA_APP_SECRET")

        with pytest.raises(ConfigurationError, match="WA_APP_SECRET"):
            validate_runtime_settings()

    def test_placeholder_destination_is_fatal(
        self, gateway_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DEST_QR_URL", "CHANGEME")

        with pytest.raises(ConfigurationError, match="DEST_QR_URL"):
            validate_runtime_settings()

    def test_production_requires_dependencies(
        self, gateway_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")

        with pytest.raises(ConfigurationError) as exc_info:
            validate_runtime_settings()

        message = str(exc_info.value)
        assert "openai:" in message
        assert "firestore:" in message
        assert "worker:" in message


class TestCreateGatewayComponents:
    """Testes do composition root."""

    def test_components_share_metrics(self, gateway_env: dict[str, str]) -> None:
        components = create_gateway_components()

        assert components.worker.state == WorkerState.STOPPED
        assert components.worker.get_metrics()["processed"] == 0
        components.metrics.record_routing_miss()
        assert components.worker.get_metrics()["routing_misses"] == 1

    def test_missing_destination_is_fatal(
        self, gateway_env: dict[str, str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("DEST_BASKET_URL")

        with pytest.raises(ConfigurationError, match="basket"):
            create_gateway_components()

    @pytest.mark.asyncio
    async def test_unconfigured_probes_report_not_configured(
        self, gateway_env: dict[str, str]
    ) -> None:
        probes = create_health_probes()

        assert set(probes) == {"external", "cache", "database"}
        for probe in probes.values():
            result = await probe.probe()
            assert result.status == "fail"
            assert result.error == "not_configured"


class TestCreateOpenAIClient:
    """Testes da factory do cliente usado pelo probe externo."""

    def test_disabled_or_without_key_returns_none(self) -> None:
        assert create_openai_client(OpenAISettings(api_key="sk-test", enabled=False)) is None
        assert create_openai_client(OpenAISettings(api_key="")) is None

    def test_client_uses_probe_settings(self) -> None:
        client = create_openai_client(
            OpenAISettings(api_key="sk-test", base_url="https://proxy.test/v1", timeout_seconds=3)
        )

        assert client is not None
        assert str(client.base_url).startswith("https://proxy.test/v1")
        assert client.timeout == 3
        assert client.max_retries == 0
