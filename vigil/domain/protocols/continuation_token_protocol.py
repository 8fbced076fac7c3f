"""Second-factor continuation token protocol.

After a correct password for a principal with a second factor, the
authenticator hands out a short-lived, signed token that lets the client
finish the login with a code. It proves only that the password step passed.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from vigil.core.errors import DomainError
from vigil.core.result import Result


class ContinuationTokenProtocol(Protocol):
    """Continuation token issue/verify interface.

    Implementations:
        - JWTContinuationTokenService: PyJWT, HS256, purpose claim
    """

    def issue(self, principal_id: UUID, *, now: datetime) -> tuple[str, datetime]:
        """Issue a token for the principal.

        Returns:
            Tuple of (token, expires_at).
        """
        ...

    def verify(self, token: str, *, now: datetime) -> Result[UUID, DomainError]:
        """Validate a token and return the principal id it was issued for.

        Returns:
            Success(principal_id) or Failure(InvalidContinuationToken).
        """
        ...
