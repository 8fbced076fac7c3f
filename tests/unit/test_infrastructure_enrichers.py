"""Unit tests for the request enrichers and notification sender."""

from datetime import timedelta
from unittest.mock import Mock

import pytest
from uuid_extensions import uuid7

from tests.conftest import WEEKDAY_NOON
from vigil.domain.events import AccountLocked
from vigil.domain.value_objects import RequestContext
from vigil.infrastructure.enrichers import (
    GeoIP2LocationResolver,
    UserAgentClassifier,
    is_non_routable,
)
from vigil.infrastructure.notifications import LoggingNotificationSender

SAFARI = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.1 Safari/605.1.15"
)


@pytest.mark.unit
class TestUserAgentClassifier:
    """Test automated client detection."""

    @pytest.mark.parametrize(
        "user_agent",
        [
            "Googlebot/2.1 (+http://www.google.com/bot.html)",
            "curl/8.4.0",
            "python-requests/2.31.0",
            "Mozilla/5.0 (X11; Linux x86_64) HeadlessChrome/120.0.0.0 Safari/537.36",
        ],
    )
    def test_automated_clients(self, user_agent, mock_logger):
        assert UserAgentClassifier(mock_logger).is_automated(user_agent) is True

    def test_browser_is_not_automated(self, mock_logger):
        assert UserAgentClassifier(mock_logger).is_automated(SAFARI) is False

    def test_empty_signature_is_not_automated(self, mock_logger):
        assert UserAgentClassifier(mock_logger).is_automated("") is False


@pytest.mark.unit
class TestGeoIP2LocationResolver:
    """Test fail-open behaviour (no database shipped with tests)."""

    @pytest.mark.asyncio
    async def test_unconfigured_database_resolves_none(self, mock_logger):
        resolver = GeoIP2LocationResolver(logger=mock_logger)

        assert await resolver.resolve("81.2.69.142") is None

    @pytest.mark.asyncio
    async def test_missing_database_file_resolves_none(self, mock_logger, tmp_path):
        resolver = GeoIP2LocationResolver(
            logger=mock_logger, db_path=str(tmp_path / "missing.mmdb")
        )

        assert await resolver.resolve("81.2.69.142") is None
        assert await resolver.resolve("81.2.69.143") is None
        # Failed open is remembered
        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_private_address_not_looked_up(self, mock_logger):
        resolver = GeoIP2LocationResolver(logger=mock_logger, db_path="/nonexistent")

        assert await resolver.resolve("192.168.1.10") is None
        mock_logger.warning.assert_not_called()

    @pytest.mark.parametrize(
        "address,expected",
        [
            ("10.0.0.1", True),
            ("127.0.0.1", True),
            ("169.254.1.1", True),
            ("not-an-ip", True),
            ("81.2.69.142", False),
        ],
    )
    def test_is_non_routable(self, address, expected):
        assert is_non_routable(address) is expected


@pytest.mark.unit
class TestLoggingNotificationSender:
    """Test the log-only notification adapter."""

    @pytest.mark.asyncio
    async def test_reset_notification_logs_token_prefix_only(self):
        logger = Mock()
        sender = LoggingNotificationSender(logger=logger)
        token = "ab" * 32

        await sender.send_password_reset(
            uuid7(), "alice@example.com", token, WEEKDAY_NOON + timedelta(hours=1)
        )

        kwargs = logger.info.call_args.kwargs
        assert kwargs["token_prefix"] == token[:6]
        assert token not in str(logger.info.call_args)

    @pytest.mark.asyncio
    async def test_security_event_notification_logged(self):
        logger = Mock()
        sender = LoggingNotificationSender(logger=logger)
        event = AccountLocked.from_context(
            RequestContext(),
            occurred_at=WEEKDAY_NOON,
            locked_until=WEEKDAY_NOON + timedelta(minutes=30),
        )

        await sender.notify_security_event(uuid7(), event)

        assert logger.info.call_args.kwargs["event_type"] == "account_locked"
