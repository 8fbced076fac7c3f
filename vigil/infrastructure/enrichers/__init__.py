"""Request enrichers.

- GeoIP2LocationResolver: address to coordinates (MaxMind GeoIP2)
- UserAgentClassifier: automated client detection (user-agents)
"""

from vigil.infrastructure.enrichers.location_resolver import (
    GeoIP2LocationResolver,
    is_non_routable,
)
from vigil.infrastructure.enrichers.user_agent_classifier import UserAgentClassifier

__all__ = [
    "GeoIP2LocationResolver",
    "UserAgentClassifier",
    "is_non_routable",
]
