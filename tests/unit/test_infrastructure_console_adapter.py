"""Unit tests for ConsoleAdapter (structlog)."""

from unittest.mock import Mock

import pytest

from src.infrastructure.logging.console_adapter import (
    REDACTED,
    ConsoleAdapter,
    redact_sensitive_values,
)


@pytest.mark.unit
class TestRedaction:
    def test_masks_sensitive_keys(self):
        event = {
            "event": "login",
            "password": "hunter2",
            "refresh_token": "fam.secret",
            "username": "v-identity-a",
        }

        result = redact_sensitive_values(None, "info", event)

        assert result["password"] == REDACTED
        assert result["refresh_token"] == REDACTED
        assert result["username"] == "v-identity-a"

    def test_leaves_other_events_untouched(self):
        event = {"event": "started", "family_id": "f"}

        assert redact_sensitive_values(None, "info", dict(event)) == event


@pytest.mark.unit
class TestConsoleAdapter:
    def test_error_adds_exception_details(self):
        adapter = ConsoleAdapter(use_json=True, level="DEBUG")
        adapter._logger = Mock()

        adapter.error("failed", error=ValueError("bad value"), family_id="f")

        adapter._logger.error.assert_called_once_with(
            "failed",
            family_id="f",
            error_type="ValueError",
            error_message="bad value",
        )

    def test_bind_returns_new_adapter(self):
        adapter = ConsoleAdapter(use_json=True)
        adapter._logger = Mock()
        adapter._logger.bind = Mock(return_value=Mock())

        bound = adapter.bind(request_id="r-1")

        assert bound is not adapter
        adapter._logger.bind.assert_called_once_with(request_id="r-1")

    def test_json_output_is_redacted(self, capsys):
        adapter = ConsoleAdapter(use_json=True, level="INFO")

        adapter.info("credential_loaded", username="v-identity-a", password="s3cret")

        out = capsys.readouterr().out
        assert "credential_loaded" in out
        assert "v-identity-a" in out
        assert "s3cret" not in out

    def test_unknown_level_falls_back_to_info(self, capsys):
        adapter = ConsoleAdapter(use_json=True, level="chatty")

        adapter.debug("hidden_event")
        adapter.info("visible_event")

        out = capsys.readouterr().out
        assert "hidden_event" not in out
        assert "visible_event" in out
