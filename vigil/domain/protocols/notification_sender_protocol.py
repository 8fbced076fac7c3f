"""Notification sender protocol.

Outbound delivery (email, SMS, push) is an external concern. The core
hands over what happened and moves on: delivery is fire-and-forget and a
failed notification never fails the operation that caused it.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from vigil.domain.events import SecurityEvent


class NotificationSenderProtocol(Protocol):
    """Notification delivery port.

    Implementations:
        - LoggingNotificationSender: writes notifications to the log
    """

    async def notify_security_event(
        self, principal_id: UUID, event: SecurityEvent
    ) -> None:
        """Inform the principal of a security event (account_locked,
        password_reset_requested)."""
        ...

    async def send_password_reset(
        self, principal_id: UUID, login_key: str, token: str, expires_at: datetime
    ) -> None:
        """Deliver a raw password reset token to the principal.

        The token exists in plaintext only here; the store keeps its hash.
        """
        ...
