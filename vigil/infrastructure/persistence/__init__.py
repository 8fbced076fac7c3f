"""Persistence adapters.

In-memory document stores implementing PrincipalRepository and
SecurityEventStore.
"""

from vigil.infrastructure.persistence.in_memory_principal_repository import (
    InMemoryPrincipalRepository,
)
from vigil.infrastructure.persistence.in_memory_security_event_store import (
    InMemorySecurityEventStore,
)

__all__ = [
    "InMemoryPrincipalRepository",
    "InMemorySecurityEventStore",
]
