"""Authentication DTOs (Data Transfer Objects).

Result dataclasses returned by authentication handlers and the
second-factor verifier to the presentation layer.

DTOs:
    - AuthenticatedPrincipal: fully authenticated; ready for session issuance
    - SecondFactorChallenge: password accepted; a code is still required
    - SecondFactorEnrollment: secret + provisioning URI for a new enrollment
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.enums import LoginMethod, PrincipalKind
from vigil.domain.errors import SecondFactorRequired


@dataclass(frozen=True, kw_only=True)
class AuthenticatedPrincipal:
    """Response from a completed login.

    Hand to a SessionIssuerProtocol adapter to mint bearer credentials.

    Attributes:
        principal_id: Principal's unique identifier.
        login_key: Normalised login key.
        kind: Principal kind.
        method: How the final step was established.
        authenticated_at: When the login completed.
    """

    principal_id: UUID
    login_key: str
    kind: PrincipalKind
    method: LoginMethod
    authenticated_at: datetime


@dataclass(frozen=True, kw_only=True)
class SecondFactorChallenge:
    """Response when the password was correct but a second factor is enabled.

    Attributes:
        principal_id: Principal awaiting the second factor.
        continuation_token: Signed token to present with the code.
        expires_at: Token expiry.
    """

    principal_id: UUID
    continuation_token: str
    expires_at: datetime


@dataclass(frozen=True, kw_only=True)
class SecondFactorEnrollment:
    """Pending enrollment (nothing persisted yet).

    Attributes:
        secret: Base32 TOTP secret to confirm with enable_second_factor.
        provisioning_uri: otpauth:// URI for authenticator apps (QR code).
    """

    secret: str
    provisioning_uri: str


type LoginOutcome = AuthenticatedPrincipal | SecondFactorChallenge


def require_authenticated(
    outcome: LoginOutcome,
) -> Result[AuthenticatedPrincipal, DomainError]:
    """Narrow a login outcome for callers that need a completed login.

    Returns:
        Success(AuthenticatedPrincipal), or Failure(SecondFactorRequired)
        when the outcome is still a challenge.
    """
    if isinstance(outcome, SecondFactorChallenge):
        return Failure(
            error=SecondFactorRequired(
                details={"expires_at": outcome.expires_at.isoformat()}
            )
        )
    return Success(value=outcome)
