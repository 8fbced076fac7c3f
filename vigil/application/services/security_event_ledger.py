"""Security event ledger service.

Append-only, bounded audit trail per principal on top of a
SecurityEventStore. Every state-changing authentication outcome and every
suspicious risk assessment is appended here; the risk engine reads the
history back through query_events.

Notifications:
    account_locked and password_reset_requested events are forwarded to
    the NotificationSenderProtocol after the append. Delivery is
    fail-open: a failing sender is logged and never fails the append.

Usage:
    ledger = SecurityEventLedger(store=store, notifier=notifier, logger=logger)
    await ledger.append_event(principal.id, LoginFailed.from_context(...))

    result = await ledger.query_events(principal.id, since)
    match result:
        case Success(value=events):
            async for event in events:
                ...
"""

from collections.abc import AsyncIterator, Collection
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from vigil.core.enums import ErrorCode
from vigil.core.result import Failure, Result, Success
from vigil.domain.enums import SecurityEventType
from vigil.domain.errors import LedgerError
from vigil.domain.events import SecurityEvent
from vigil.domain.protocols import (
    LoggerProtocol,
    NotificationSenderProtocol,
    SecurityEventStore,
)

NOTIFIED_EVENT_TYPES = frozenset(
    {
        SecurityEventType.ACCOUNT_LOCKED,
        SecurityEventType.PASSWORD_RESET_REQUESTED,
    }
)


class SecurityEventLedger:
    """Per-principal security event ledger."""

    def __init__(
        self,
        store: SecurityEventStore,
        notifier: NotificationSenderProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize ledger with dependencies.

        Args:
            store: Bounded per-principal event store.
            notifier: Receives account_locked/password_reset_requested events.
            logger: Structured logger.
        """
        self._store = store
        self._notifier = notifier
        self._logger = logger

    async def append_event(
        self, principal_id: UUID, event: SecurityEvent
    ) -> Result[None, LedgerError]:
        """Append an event to the principal's ledger.

        Returns:
            Success(None) once stored, or Failure(LedgerError) if the store
            failed. Notification failures never produce a Failure.
        """
        try:
            await self._store.append(principal_id, event)
        except Exception as e:
            self._logger.error(
                "security_event_append_failed",
                error=e,
                principal_id=str(principal_id),
                event_type=event.event_type.value,
                correlation_id=event.correlation_id,
            )
            return Failure(
                error=LedgerError(
                    code=ErrorCode.LEDGER_APPEND_FAILED,
                    message="Failed to record security event",
                    details={"event_type": event.event_type.value, "error": str(e)},
                )
            )

        self._logger.info(
            event.event_type.value,
            principal_id=str(principal_id),
            event_id=str(event.event_id),
            correlation_id=event.correlation_id,
            ip_address=event.ip_address,
            **{key: _loggable(value) for key, value in event.detail().items()},
        )

        if event.event_type in NOTIFIED_EVENT_TYPES:
            await self._notify(principal_id, event)

        return Success(value=None)

    async def query_events(
        self,
        principal_id: UUID,
        since: datetime,
        event_types: Collection[SecurityEventType] | None = None,
    ) -> Result[AsyncIterator[SecurityEvent], LedgerError]:
        """Open a lazy, ascending, single-pass iterator over recent events.

        Args:
            principal_id: Ledger owner.
            since: Inclusive lower bound on occurred_at.
            event_types: Restrict to these types (None = all).

        Returns:
            Success(async iterator) or Failure(LedgerError) if the store
            refused the query.
        """
        try:
            events = self._store.query(principal_id, since, event_types)
        except Exception as e:
            return Failure(error=self._query_error(principal_id, e))
        return Success(value=events)

    async def collect_events(
        self,
        principal_id: UUID,
        since: datetime,
        event_types: Collection[SecurityEventType] | None = None,
    ) -> Result[list[SecurityEvent], LedgerError]:
        """Drain query_events into a list, mapping iteration errors to Failure."""
        opened = await self.query_events(principal_id, since, event_types)
        match opened:
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=events):
                try:
                    return Success(value=[event async for event in events])
                except Exception as e:
                    return Failure(error=self._query_error(principal_id, e))
            case _:
                # Unreachable but needed for type checker
                return Success(value=[])

    def _query_error(self, principal_id: UUID, error: Exception) -> LedgerError:
        self._logger.error(
            "security_event_query_failed",
            error=error,
            principal_id=str(principal_id),
        )
        return LedgerError(
            code=ErrorCode.LEDGER_QUERY_FAILED,
            message="Failed to read security events",
            details={"error": str(error)},
        )

    async def _notify(self, principal_id: UUID, event: SecurityEvent) -> None:
        """Forward to the notification sender (fail-open)."""
        try:
            await self._notifier.notify_security_event(principal_id, event)
        except Exception as e:
            self._logger.warning(
                "security_notification_failed",
                principal_id=str(principal_id),
                event_type=event.event_type.value,
                error=str(e),
            )


def _loggable(value: object) -> object:
    """Flatten enum, datetime and Decimal detail values for the log."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value
