"""Authentication error types.

Returned by the credential & session authenticator and the password reset
flow.

Architecture:
- Domain layer errors (no infrastructure dependencies)
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)
- Never raised as exceptions (return Failure(error=...) instead)

Enumeration resistance:
    NotFound and InvalidCredential carry the same public code and message,
    so callers (and attackers) cannot tell an unknown login key from a wrong
    password. Only ``details`` (never exposed) differs.

Usage:
    from vigil.domain.errors import InvalidCredential
    from vigil.core.result import Failure

    return Failure(error=InvalidCredential())
"""

from dataclasses import dataclass

from vigil.core.enums import ErrorCode
from vigil.core.errors import DomainError

INVALID_CREDENTIALS_MESSAGE = "Invalid login or password"


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Base authentication failure.

    Attributes:
        code: ErrorCode enum.
        message: Public message.
        details: Internal context for logs.
    """

    pass  # Inherits all fields from DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidCredential(AuthenticationError):
    """Credential did not match the stored hash."""

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = INVALID_CREDENTIALS_MESSAGE


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFound(AuthenticationError):
    """No active principal for the login key.

    Publicly identical to InvalidCredential.
    """

    code: ErrorCode = ErrorCode.INVALID_CREDENTIALS
    message: str = INVALID_CREDENTIALS_MESSAGE


@dataclass(frozen=True, slots=True, kw_only=True)
class Locked(AuthenticationError):
    """Lockout window is open.

    The message never reveals remaining attempts or lock duration.
    """

    code: ErrorCode = ErrorCode.ACCOUNT_LOCKED
    message: str = "Account is temporarily locked"


@dataclass(frozen=True, slots=True, kw_only=True)
class SecondFactorRequired(AuthenticationError):
    """Credential accepted but a second factor must still be presented."""

    code: ErrorCode = ErrorCode.SECOND_FACTOR_REQUIRED
    message: str = "Second factor required"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidContinuationToken(AuthenticationError):
    """Second-factor continuation token is missing, expired or forged."""

    code: ErrorCode = ErrorCode.INVALID_CONTINUATION_TOKEN
    message: str = "Login session expired, please sign in again"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidResetToken(AuthenticationError):
    """Password reset token is unknown or expired."""

    code: ErrorCode = ErrorCode.INVALID_RESET_TOKEN
    message: str = "Password reset link is invalid or has expired"
