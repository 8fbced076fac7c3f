"""In-memory IP reputation cache (adapter).

Process-local, last-writer-wins map from address to entry. Expired entries
are reported as misses and left in place until the next set() overwrites
them; there is no background sweep.
"""

import threading
from datetime import timedelta

from vigil.core.clock import Clock, utc_now
from vigil.core.errors import DomainError
from vigil.core.result import Result, Success
from vigil.domain.protocols import IPReputationEntry


class InMemoryIPReputationCache:
    """Dict-backed IPReputationCacheProtocol.

    Args:
        ttl_seconds: Entry lifetime.
        clock: Time source used to judge staleness.
    """

    def __init__(self, ttl_seconds: int = 3600, clock: Clock = utc_now) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, IPReputationEntry] = {}

    async def get(self, address: str) -> Result[IPReputationEntry | None, DomainError]:
        with self._lock:
            entry = self._entries.get(address)
        if entry is None or self._clock() >= entry.cached_at + self._ttl:
            return Success(value=None)
        return Success(value=entry)

    async def set(self, entry: IPReputationEntry) -> Result[None, DomainError]:
        with self._lock:
            self._entries[entry.address] = entry
        return Success(value=None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
