"""SecurityEventStore protocol for per-principal event persistence.

The store keeps a bounded FIFO history per principal: once the capacity is
reached, appending evicts the oldest event.
"""

from collections.abc import AsyncIterator, Collection
from datetime import datetime
from typing import Protocol
from uuid import UUID

from vigil.domain.enums import SecurityEventType
from vigil.domain.events import SecurityEvent


class SecurityEventStore(Protocol):
    """Security event store protocol (port).

    Adapters may raise on I/O failure; the ledger service maps those
    exceptions to LedgerError failures.
    """

    async def append(self, principal_id: UUID, event: SecurityEvent) -> None:
        """Append an event, evicting the oldest one when at capacity."""
        ...

    def query(
        self,
        principal_id: UUID,
        since: datetime,
        event_types: Collection[SecurityEventType] | None = None,
    ) -> AsyncIterator[SecurityEvent]:
        """Iterate events with ``occurred_at >= since``, oldest first.

        Args:
            principal_id: Ledger owner.
            since: Inclusive lower bound on occurred_at.
            event_types: Restrict to these types (None = all types).

        Returns:
            Finite, single-pass async iterator.
        """
        ...
