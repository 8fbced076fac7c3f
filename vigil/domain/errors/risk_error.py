"""Risk engine error types.

Neither error reaches the caller of an assessment as a Failure: a
SignalUnavailable is absorbed (the signal contributes zero) and an
UnknownPrincipalCritical becomes the maximal-risk assessment. Risk is a
value, not an exception.
"""

from dataclasses import dataclass

from vigil.core.enums import ErrorCode
from vigil.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class SignalUnavailable(DomainError):
    """A signal could not be computed (history or cache unavailable).

    Attributes:
        signal: Name of the signal that degraded.
    """

    signal: str
    code: ErrorCode = ErrorCode.RISK_SIGNAL_UNAVAILABLE
    message: str = "Risk signal unavailable"


@dataclass(frozen=True, slots=True, kw_only=True)
class UnknownPrincipalCritical(DomainError):
    """Principal could not be loaded; forces a maximal-risk decision."""

    code: ErrorCode = ErrorCode.RISK_UNKNOWN_PRINCIPAL
    message: str = "Principal unknown to risk engine"
