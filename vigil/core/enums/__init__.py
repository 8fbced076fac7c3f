"""Core enums package.

Usage:
    from vigil.core.enums import ErrorCode, Environment
"""

from vigil.core.enums.environment import Environment
from vigil.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
