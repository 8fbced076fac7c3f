"""Notification adapters."""

from vigil.infrastructure.notifications.logging_notification_sender import (
    LoggingNotificationSender,
)

__all__ = ["LoggingNotificationSender"]
