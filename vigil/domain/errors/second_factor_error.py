"""Second-factor error types.

InvalidSecondFactor and AlreadyUsedBackupCode share a public code and
message: a caller must not learn whether a backup code existed but was
spent.

Usage:
    from vigil.domain.errors import InvalidSecondFactor

    return Failure(error=InvalidSecondFactor())
"""

from dataclasses import dataclass

from vigil.core.enums import ErrorCode
from vigil.core.errors import DomainError

INVALID_SECOND_FACTOR_MESSAGE = "Invalid verification code"


@dataclass(frozen=True, slots=True, kw_only=True)
class SecondFactorError(DomainError):
    """Base second-factor failure."""

    pass  # Inherits all fields from DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidSecondFactor(SecondFactorError):
    """Code matched neither the TOTP window nor an unused backup code."""

    code: ErrorCode = ErrorCode.INVALID_SECOND_FACTOR
    message: str = INVALID_SECOND_FACTOR_MESSAGE


@dataclass(frozen=True, slots=True, kw_only=True)
class AlreadyUsedBackupCode(SecondFactorError):
    """Backup code matched but was already consumed."""

    code: ErrorCode = ErrorCode.INVALID_SECOND_FACTOR
    message: str = INVALID_SECOND_FACTOR_MESSAGE


@dataclass(frozen=True, slots=True, kw_only=True)
class SecondFactorNotEnabled(SecondFactorError):
    """Operation needs an enrolled second factor."""

    code: ErrorCode = ErrorCode.SECOND_FACTOR_NOT_ENABLED
    message: str = "Two-factor authentication is not enabled"


@dataclass(frozen=True, slots=True, kw_only=True)
class SecondFactorAlreadyEnabled(SecondFactorError):
    """Enrollment attempted while a second factor is already active."""

    code: ErrorCode = ErrorCode.SECOND_FACTOR_ALREADY_ENABLED
    message: str = "Two-factor authentication is already enabled"
