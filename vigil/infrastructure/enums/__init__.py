"""Infrastructure enums package.

Usage:
    from vigil.infrastructure.enums import InfrastructureErrorCode
"""

from vigil.infrastructure.enums.infrastructure_error_code import (
    InfrastructureErrorCode,
)

__all__ = ["InfrastructureErrorCode"]
