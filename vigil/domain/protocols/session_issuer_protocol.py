"""Session issuer protocol.

Issuing bearer credentials (access/refresh tokens, cookies) happens outside
this package. Callers pass the AuthenticatedPrincipal returned by a
successful login to an adapter implementing this port.
"""

from typing import Protocol
from uuid import UUID


class SessionIssuerProtocol(Protocol):
    """Opaque session credential issuer (external)."""

    async def issue(self, principal_id: UUID, *, correlation_id: str) -> str:
        """Return an opaque bearer credential for the principal."""
        ...
