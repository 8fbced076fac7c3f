"""Unit tests for ConsoleAdapter (structured console logging).

Architecture:
- structlog mocked at the module boundary
- Tests protocol compliance, not rendering
"""

from unittest.mock import MagicMock, patch

import pytest

from vigil.infrastructure.logging.console_adapter import ConsoleAdapter


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_info_logs_message_with_context(self):
        with patch("vigil.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.info("login_success", principal_id="123", method="password")

            mock_logger.info.assert_called_once_with(
                "login_success", principal_id="123", method="password"
            )

    def test_warning_logs_message_with_context(self):
        with patch("vigil.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.warning("risk_signal_unavailable", signal="velocity")

            mock_logger.warning.assert_called_once_with(
                "risk_signal_unavailable", signal="velocity"
            )

    def test_error_flattens_exception(self):
        with patch("vigil.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.error("security_event_append_failed", error=ValueError("boom"))

            mock_logger.error.assert_called_once_with(
                "security_event_append_failed",
                error_type="ValueError",
                error_message="boom",
            )

    def test_critical_without_exception(self):
        with patch("vigil.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            adapter.critical("ledger_unavailable", store="memory")

            mock_logger.critical.assert_called_once_with(
                "ledger_unavailable", store="memory"
            )


@pytest.mark.unit
class TestConsoleAdapterBinding:
    """Test context binding."""

    def test_bind_returns_new_adapter(self):
        with patch("vigil.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            bound_logger = MagicMock()
            mock_logger.bind.return_value = bound_logger
            mock_structlog.get_logger.return_value = mock_logger

            adapter = ConsoleAdapter()
            bound = adapter.bind(correlation_id="abc")
            bound.info("login_failed")

            assert bound is not adapter
            mock_logger.bind.assert_called_once_with(correlation_id="abc")
            bound_logger.info.assert_called_once_with("login_failed")
            mock_logger.info.assert_not_called()

    def test_with_context_is_bind(self):
        with patch("vigil.infrastructure.logging.console_adapter.structlog") as mock_structlog:
            mock_logger = MagicMock()
            mock_structlog.get_logger.return_value = mock_logger

            ConsoleAdapter().with_context(principal_id="p1")

            mock_logger.bind.assert_called_once_with(principal_id="p1")


@pytest.mark.unit
class TestConsoleAdapterRendering:
    """Test renderer selection."""

    def test_json_renderer_for_testing(self, capsys):
        adapter = ConsoleAdapter(use_json=True, level="DEBUG")

        adapter.info("json_check", answer=42)

        out = capsys.readouterr().out
        assert '"event": "json_check"' in out
        assert '"answer": 42' in out
