"""Domain value objects."""

from vigil.domain.value_objects.device_fingerprint import (
    FINGERPRINT_COMPONENTS,
    DeviceFingerprint,
)
from vigil.domain.value_objects.geo_point import GeoPoint
from vigil.domain.value_objects.request_context import (
    RequestContext,
    new_correlation_id,
)

__all__ = [
    "DeviceFingerprint",
    "FINGERPRINT_COMPONENTS",
    "GeoPoint",
    "RequestContext",
    "new_correlation_id",
]
