"""Core shared kernel.

Foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error class for domain-level error handling
- Settings and the injectable clock

The core module has NO dependencies on other application layers.
"""

from vigil.core.enums import Environment, ErrorCode
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "Environment",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
