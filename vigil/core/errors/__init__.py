"""Core errors package.

Usage:
    from vigil.core.errors import DomainError
"""

from vigil.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
