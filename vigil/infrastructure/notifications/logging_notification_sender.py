"""Notification sender that writes to the structured log.

Default NotificationSenderProtocol adapter until an email/SMS gateway is
wired in. Reset tokens are never written in full: only a short prefix is
logged so operators can correlate a support request with a delivery.
"""

from datetime import datetime
from uuid import UUID

from vigil.domain.events import SecurityEvent
from vigil.domain.protocols import LoggerProtocol

TOKEN_PREFIX_LENGTH = 6


class LoggingNotificationSender:
    """Log-only notification delivery."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def notify_security_event(
        self, principal_id: UUID, event: SecurityEvent
    ) -> None:
        self._logger.info(
            "security_notification_sent",
            principal_id=str(principal_id),
            event_type=event.event_type.value,
            event_id=str(event.event_id),
            correlation_id=event.correlation_id,
        )

    async def send_password_reset(
        self, principal_id: UUID, login_key: str, token: str, expires_at: datetime
    ) -> None:
        self._logger.info(
            "password_reset_notification_sent",
            principal_id=str(principal_id),
            token_prefix=token[:TOKEN_PREFIX_LENGTH],
            expires_at=expires_at.isoformat(),
        )
