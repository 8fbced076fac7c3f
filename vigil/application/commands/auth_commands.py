"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and keyword-only (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic and return Result types
- Annotated types carry validation for the presentation layer
"""

from dataclasses import dataclass, field

from vigil.domain.types import (
    LoginKey,
    NewPassword,
    Password,
    ResetToken,
    SecondFactorCode,
)
from vigil.domain.value_objects import RequestContext


@dataclass(frozen=True, kw_only=True)
class AuthenticatePrincipal:
    """Check a login key and credential.

    Attributes:
        login_key: Email or username.
        password: Plaintext credential (hashed comparison only).
        context: Request metadata copied onto ledger events.

    Example:
        >>> command = AuthenticatePrincipal(
        ...     login_key="user@example.com",
        ...     password="SecurePass123!",
        ...     context=RequestContext(ip_address="203.0.113.7"),
        ... )
        >>> result = await handler.handle(command)
        >>> # Success(AuthenticatedPrincipal | SecondFactorChallenge) or Failure(error)
    """

    login_key: LoginKey
    password: Password = field(repr=False)
    context: RequestContext = field(default_factory=RequestContext)


@dataclass(frozen=True, kw_only=True)
class CompleteSecondFactorLogin:
    """Finish a login with a TOTP or backup code.

    Attributes:
        continuation_token: Token from the SecondFactorChallenge.
        code: 6-digit TOTP code or a backup code.
        context: Request metadata.
    """

    continuation_token: str = field(repr=False)
    code: SecondFactorCode = field(repr=False)
    context: RequestContext = field(default_factory=RequestContext)


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Ask for a password reset token to be sent.

    Always succeeds externally, whether or not the login key exists.
    """

    login_key: LoginKey
    context: RequestContext = field(default_factory=RequestContext)


@dataclass(frozen=True, kw_only=True)
class CompletePasswordReset:
    """Replace the credential using a reset token.

    Attributes:
        token: Raw reset token as delivered to the principal.
        new_password: Replacement credential.
        context: Request metadata.
    """

    token: ResetToken = field(repr=False)
    new_password: NewPassword = field(repr=False)
    context: RequestContext = field(default_factory=RequestContext)
