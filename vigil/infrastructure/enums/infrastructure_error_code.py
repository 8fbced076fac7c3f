"""Infrastructure-specific error codes.

Internal codes for tracking infrastructure failures. They are mapped to
domain ErrorCode when flowing to the domain layer.
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    # Cache errors
    CACHE_GET_ERROR = "cache_get_error"
    CACHE_SET_ERROR = "cache_set_error"
    CACHE_DATA_ERROR = "cache_data_error"
