"""Testes do logging JSON usado pelo gateway."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest

from app.observability import get_correlation_id, reset_correlation_id, set_correlation_id
from config.logging import CorrelationIdFilter, configure_logging, create_json_formatter


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _record(msg: str = "webhook_received", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="api.routes.whatsapp.webhook",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.parametrize(
    ("level", "expected"),
    [("DEBUG", logging.DEBUG), ("info", logging.INFO), ("Warning", logging.WARNING)],
)
def test_configure_logging_sets_level_case_insensitive(level: str, expected: int) -> None:
    configure_logging(level=level)

    assert logging.getLogger().level == expected


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Nível de log inválido"):
        configure_logging(level="VERBOSE")


def test_configure_logging_installs_single_handler() -> None:
    root = logging.getLogger()
    root.handlers = [logging.NullHandler(), logging.NullHandler()]

    configure_logging(service_name="wa_gateway")

    assert len(root.handlers) == 1
    assert any(isinstance(f, CorrelationIdFilter) for f in root.handlers[0].filters)


def test_log_line_carries_request_correlation_id(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(service_name="wa_gateway", correlation_id_getter=get_correlation_id)
    token = set_correlation_id("cid-route-1")
    try:
        logging.getLogger("app.services.forwarder").info(
            "forward_completed",
            extra={"destination_key": "qr", "latency_ms": 12},
        )
    finally:
        reset_correlation_id(token)

    line = capsys.readouterr().err.strip().splitlines()[-1]
    output = json.loads(line)
    assert output["message"] == "forward_completed"
    assert output["correlation_id"] == "cid-route-1"
    assert output["service"] == "wa_gateway"
    assert output["level"] == "INFO"
    assert output["logger"] == "app.services.forwarder"
    assert output["destination_key"] == "qr"
    assert output["latency_ms"] == 12


def test_filter_keeps_correlation_id_passed_in_extra() -> None:
    filter_ = CorrelationIdFilter("wa_gateway", lambda: "from-context")
    record = _record(correlation_id="from-extra")

    assert filter_.filter(record) is True
    assert record.correlation_id == "from-extra"


def test_filter_without_getter_outside_request() -> None:
    record = _record()

    CorrelationIdFilter("wa_gateway").filter(record)

    assert record.correlation_id == ""
    assert record.service == "wa_gateway"


def test_formatter_renames_level_and_logger_fields() -> None:
    record = _record("webhook_rate_limited", correlation_id="cid", service="wa_gateway")

    output = json.loads(create_json_formatter().format(record))

    assert "levelname" not in output
    assert "name" not in output
    assert output["level"] == "INFO"
    assert output["logger"] == "api.routes.whatsapp.webhook"
    assert output["message"] == "webhook_rate_limited"
