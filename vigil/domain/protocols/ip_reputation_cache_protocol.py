"""IP reputation cache protocol.

Caches the network-reputation sub-score per address. Entries are valid for
a TTL; an expired entry is reported as a miss and overwritten by the next
computation. There is no background sweep.

Architecture:
- Protocol-based (structural typing)
- All operations return Result types
- Fail-open: callers treat a Failure as a miss
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from vigil.core.errors import DomainError
from vigil.core.result import Result


@dataclass(frozen=True, slots=True, kw_only=True)
class IPReputationEntry:
    """Cached reputation result for one address.

    Attributes:
        address: Network address the entry describes.
        score: Network sub-score.
        reasons: Factors behind the score.
        cached_at: When the score was computed.
    """

    address: str
    score: int
    reasons: tuple[str, ...] = ()
    cached_at: datetime


class IPReputationCacheProtocol(Protocol):
    """Shared, last-writer-wins cache of address reputation."""

    async def get(self, address: str) -> Result[IPReputationEntry | None, DomainError]:
        """Get the fresh entry for an address.

        Returns:
            Success(entry), Success(None) on miss or stale entry, or
            Failure(CacheError).

        Example:
            result = await cache.get("203.0.113.7")
            match result:
                case Success(value=entry) if entry:
                    score = entry.score
                case Success(value=None):
                    # Miss: compute and set
                    ...
                case Failure(error=_):
                    # Fail open: compute without caching
                    ...
        """
        ...

    async def set(self, entry: IPReputationEntry) -> Result[None, DomainError]:
        """Store (or overwrite) the entry for its address."""
        ...
