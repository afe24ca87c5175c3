from __future__ import annotations

import json
import logging

from panchangam.core.logging import JsonFormatter, get_logger, get_service_logger


def test_redaction_strips_api_key_header_and_query() -> None:
    fmt = JsonFormatter()
    msg = (
        "GET /api/panchangam/daily?date=2024-01-21&api_key=abc123&lat=13.08\n"
        "X-API-Key: secret-key-value\n"
    )
    redacted = fmt._redact(msg)  # type: ignore[attr-defined]
    assert "abc123" not in redacted
    assert "secret-key-value" not in redacted
    assert "api_key=[REDACTED]" in redacted
    assert "X-API-Key: [REDACTED]" in redacted
    assert "lat=13.08" in redacted
    assert "/api/panchangam/daily?date=2024-01-21" in redacted


def test_format_emits_json_with_extra_fields() -> None:
    fmt = JsonFormatter()
    record = logging.LogRecord(
        name="panchangam.services.client",
        level=logging.WARNING,
        pathname=__file__,
        lineno=10,
        msg="Request with apiKey=%s failed",
        args=("leaky",),
        exc_info=None,
    )
    record.component = "client"
    out = json.loads(fmt.format(record))
    assert out["level"] == "WARNING"
    assert out["logger"] == "panchangam.services.client"
    assert out["message"] == "Request with apiKey=[REDACTED] failed"
    assert out["component"] == "client"


def test_service_logger_carries_component() -> None:
    adapter = get_service_logger("orchestrator")
    assert isinstance(adapter, logging.LoggerAdapter)
    assert adapter.logger.name == "panchangam.services.orchestrator"
    assert adapter.extra == {"system": "panchangam", "component": "orchestrator"}
    assert isinstance(get_logger("panchangam.plain"), logging.Logger)
