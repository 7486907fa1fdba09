"""Tests for logging setup and secret redaction."""

from __future__ import annotations

import logging

from mcp_http_bridge.display.logging_config import SecretRedactionFilter


def _record(msg, *args) -> logging.LogRecord:
    return logging.LogRecord("mcp_http_bridge.test", logging.INFO, __file__, 1, msg, args, None)


class TestSecretRedactionFilter:
    def test_redacts_message_and_args(self) -> None:
        flt = SecretRedactionFilter()
        flt.register("tok-abcdef")
        record = _record("Authorization: Bearer tok-abcdef via %s", "header tok-abcdef")
        assert flt.filter(record) is True
        assert record.getMessage() == (
            "Authorization: Bearer ***REDACTED*** via header ***REDACTED***"
        )

    def test_short_and_empty_values_ignored(self) -> None:
        flt = SecretRedactionFilter()
        flt.register("abc")
        flt.register(None)
        record = _record("abc stays")
        flt.filter(record)
        assert record.getMessage() == "abc stays"

    def test_non_string_args_untouched(self) -> None:
        flt = SecretRedactionFilter()
        flt.register("secret-value")
        record = _record("%d tools", 5)
        flt.filter(record)
        assert record.getMessage() == "5 tools"
