"""Second-factor continuation token service (adapter).

Implements ContinuationTokenProtocol using PyJWT with HMAC-SHA256.

Security:
    - HS256 with a key of at least 32 bytes
    - ``purpose`` claim pins the token to the second-factor step, so an
      access token signed with the same key is never accepted here
    - Short lifetime (default 5 minutes)
    - Expiry is checked against the injected ``now`` rather than the wall
      clock, keeping verification deterministic under test
"""

from datetime import datetime, timedelta
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError
from uuid_extensions import uuid7

from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.errors import InvalidContinuationToken

SECOND_FACTOR_PURPOSE = "second_factor"


class JWTContinuationTokenService:
    """Signed, short-lived token bridging the password and second-factor steps.

    Usage:
        service = JWTContinuationTokenService(secret_key="x" * 32)
        token, expires_at = service.issue(principal_id, now=now)
        result = service.verify(token, now=now)
    """

    def __init__(self, secret_key: str, expiration_minutes: int = 5) -> None:
        """Initialize continuation token service.

        Raises:
            ValueError: If secret_key is shorter than 32 bytes.
        """
        if len(secret_key) < 32:
            msg = "Continuation token secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = "HS256"

    def issue(self, principal_id: UUID, *, now: datetime) -> tuple[str, datetime]:
        """Issue a continuation token for the principal.

        Returns:
            Tuple of (token, expires_at).
        """
        expires_at = now + timedelta(minutes=self._expiration_minutes)
        payload = {
            "sub": str(principal_id),
            "purpose": SECOND_FACTOR_PURPOSE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token, expires_at

    def verify(self, token: str, *, now: datetime) -> Result[UUID, DomainError]:
        """Validate signature, purpose and expiry.

        Returns:
            Success(principal_id) or Failure(InvalidContinuationToken).
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "exp", "purpose"],
                },
            )
        except InvalidTokenError:
            return Failure(error=InvalidContinuationToken())

        if payload.get("purpose") != SECOND_FACTOR_PURPOSE:
            return Failure(
                error=InvalidContinuationToken(details={"reason": "wrong_purpose"})
            )
        if int(payload["exp"]) <= int(now.timestamp()):
            return Failure(error=InvalidContinuationToken(details={"reason": "expired"}))

        try:
            return Success(value=UUID(str(payload["sub"])))
        except ValueError:
            return Failure(
                error=InvalidContinuationToken(details={"reason": "malformed_subject"})
            )
