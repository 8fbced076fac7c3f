"""Infrastructure errors package.

Usage:
    from vigil.infrastructure.errors import CacheError
"""

from vigil.infrastructure.errors.infrastructure_error import (
    CacheError,
    InfrastructureError,
)

__all__ = [
    "CacheError",
    "InfrastructureError",
]
