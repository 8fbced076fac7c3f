"""Domain errors package.

Exports all domain-level error classes for convenient importing.

Usage:
    from vigil.domain.errors import InvalidCredential, Locked, LedgerError
"""

from vigil.domain.errors.authentication_error import (
    AuthenticationError,
    InvalidContinuationToken,
    InvalidCredential,
    InvalidResetToken,
    Locked,
    NotFound,
    SecondFactorRequired,
)
from vigil.domain.errors.ledger_error import LedgerError
from vigil.domain.errors.risk_error import SignalUnavailable, UnknownPrincipalCritical
from vigil.domain.errors.second_factor_error import (
    AlreadyUsedBackupCode,
    InvalidSecondFactor,
    SecondFactorAlreadyEnabled,
    SecondFactorError,
    SecondFactorNotEnabled,
)

__all__ = [
    # Authentication
    "AuthenticationError",
    "InvalidContinuationToken",
    "InvalidCredential",
    "InvalidResetToken",
    "Locked",
    "NotFound",
    "SecondFactorRequired",
    # Second factor
    "AlreadyUsedBackupCode",
    "InvalidSecondFactor",
    "SecondFactorAlreadyEnabled",
    "SecondFactorError",
    "SecondFactorNotEnabled",
    # Risk
    "SignalUnavailable",
    "UnknownPrincipalCritical",
    # Ledger
    "LedgerError",
]
