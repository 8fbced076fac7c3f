"""Geolocation resolver protocol.

Resolves a network address to coordinates for the geographic risk signal
when the request declares no location.
"""

from typing import Protocol

from vigil.domain.value_objects import GeoPoint


class GeolocationResolverProtocol(Protocol):
    """Address to coordinates resolver.

    Implementations MUST fail open: unknown, private or unparseable
    addresses resolve to None, never raise.

    Implementations:
        - GeoIP2LocationResolver: MaxMind GeoLite2 City database
    """

    async def resolve(self, ip_address: str) -> GeoPoint | None:
        """Resolve an address, None if unknown."""
        ...
