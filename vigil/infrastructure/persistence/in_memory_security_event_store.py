"""In-memory security event store (adapter).

One fixed-capacity ring (collections.deque with maxlen) per principal:
appends are O(1) and the oldest event is evicted first once the ring is
full.

Query snapshots the matching events under the lock and then yields them,
so a consumer can await between items without holding the lock and without
seeing appends made after the query started.
"""

import threading
from collections import deque
from collections.abc import AsyncIterator, Collection
from datetime import datetime
from uuid import UUID

from vigil.domain.enums import SecurityEventType
from vigil.domain.events import SecurityEvent

DEFAULT_CAPACITY = 50


class InMemorySecurityEventStore:
    """Bounded per-principal event history.

    Usage:
        store = InMemorySecurityEventStore(capacity=50)
        await store.append(principal_id, event)
        async for event in store.query(principal_id, since):
            ...
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        """Initialize the store.

        Raises:
            ValueError: If capacity is not positive.
        """
        if capacity < 1:
            msg = "Security event capacity must be at least 1"
            raise ValueError(msg)
        self._capacity = capacity
        self._lock = threading.Lock()
        self._events: dict[UUID, deque[SecurityEvent]] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    async def append(self, principal_id: UUID, event: SecurityEvent) -> None:
        with self._lock:
            ring = self._events.get(principal_id)
            if ring is None:
                ring = deque(maxlen=self._capacity)
                self._events[principal_id] = ring
            ring.append(event)

    def count(self, principal_id: UUID) -> int:
        """Number of retained events for the principal."""
        with self._lock:
            return len(self._events.get(principal_id, ()))

    async def query(
        self,
        principal_id: UUID,
        since: datetime,
        event_types: Collection[SecurityEventType] | None = None,
    ) -> AsyncIterator[SecurityEvent]:
        with self._lock:
            snapshot = [
                event
                for event in self._events.get(principal_id, ())
                if event.occurred_at >= since
                and (event_types is None or event.event_type in event_types)
            ]
        # Ascending by occurred_at even when appended out of order
        snapshot.sort(key=lambda event: event.occurred_at)
        for event in snapshot:
            yield event
