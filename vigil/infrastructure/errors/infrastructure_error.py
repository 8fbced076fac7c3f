"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems (cache,
geolocation database).

Architecture:
- Infrastructure catches exceptions and maps to DomainError
- Infrastructure errors inherit from DomainError (not Exception)
- Uses InfrastructureErrorCode for internal error tracking
- Used with Result types for error propagation
"""

from dataclasses import dataclass
from typing import Any

from vigil.core.errors import DomainError
from vigil.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        infrastructure_code: Original infrastructure error code.
        details: Additional context.
    """

    infrastructure_code: InfrastructureErrorCode | None = None
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Cache-specific errors.

    Wraps Redis/cache exceptions.

    Attributes:
        code: Domain ErrorCode (CACHE_UNAVAILABLE).
        message: Human-readable message.
        infrastructure_code: Cache-specific error code.
        details: Additional context (key, operation, original error).
    """

    pass
