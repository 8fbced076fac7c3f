"""Request metadata carried into authentication and risk operations.

The presentation layer (out of scope) extracts these from the inbound
request; the core only reads them and copies the relevant fields onto
the security events it appends.
"""

import secrets
from dataclasses import dataclass, field
from decimal import Decimal

from vigil.domain.value_objects.geo_point import GeoPoint


def new_correlation_id() -> str:
    """Generate an opaque correlation id (128 bits, hex)."""
    return secrets.token_hex(16)


@dataclass(frozen=True, kw_only=True)
class RequestContext:
    """Metadata describing where a request came from.

    Attributes:
        ip_address: Originating network address.
        user_agent: Client signature (User-Agent header).
        correlation_id: Token linking the causal chain of events for this request.
        device_fingerprint: Optional client-computed fingerprint (JSON object).
        location: Optional declared geolocation.
        amount: Monetary amount for financial actions.

    Example:
        >>> ctx = RequestContext(ip_address="203.0.113.7", user_agent="Mozilla/5.0")
        >>> len(ctx.correlation_id)
        32
    """

    ip_address: str | None = None
    user_agent: str | None = None
    correlation_id: str = field(default_factory=new_correlation_id)
    device_fingerprint: str | None = None
    location: GeoPoint | None = None
    amount: Decimal | None = None
