"""Base error value for Result types.

DomainError is the root of every error Vigil reports. It is NOT an
exception: it is returned inside Failure(error=...) and pattern-matched by
callers. Exceptions are reserved for programming and configuration mistakes.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class LedgerError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass
from typing import Any

from vigil.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code, safe to expose.
        message: Human-readable message, safe to expose.
        details: Internal context for logs only (never shown to end users).
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
