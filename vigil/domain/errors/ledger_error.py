"""Security event ledger error types.

Usage:
    from vigil.domain.errors import LedgerError
    from vigil.core.enums import ErrorCode
    from vigil.core.result import Failure

    return Failure(error=LedgerError(
        code=ErrorCode.LEDGER_QUERY_FAILED,
        message="Failed to read security events: store unavailable",
    ))
"""

from dataclasses import dataclass

from vigil.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class LedgerError(DomainError):
    """Ledger append or query failure.

    Attributes:
        code: ErrorCode enum (LEDGER_APPEND_FAILED, LEDGER_QUERY_FAILED).
        message: Human-readable message.
        details: Additional context.
    """

    pass  # Inherits all fields from DomainError
