"""Client device fingerprint value object.

Fingerprints arrive as JSON objects produced by the client (browser or app)
holding a fixed set of components. Two fingerprints are compared component
by component; an unparseable fingerprint has no comparable components.
"""

import json
from dataclasses import dataclass, field
from typing import Any

FINGERPRINT_COMPONENTS: tuple[str, ...] = (
    "userAgent",
    "screen",
    "timezone",
    "language",
    "platform",
)


@dataclass(frozen=True, slots=True)
class DeviceFingerprint:
    """Raw fingerprint string plus its parsed components.

    Attributes:
        raw: Fingerprint exactly as supplied; identity comparisons use this.
        components: Parsed component values (empty if raw is not a JSON object).
    """

    raw: str
    components: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def parse(cls, raw: str) -> "DeviceFingerprint":
        """Build a fingerprint, tolerating non-JSON input.

        Example:
            >>> fp = DeviceFingerprint.parse('{"platform": "MacIntel"}')
            >>> fp.components["platform"]
            'MacIntel'
            >>> DeviceFingerprint.parse("opaque-token").components
            {}
        """
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError):
            return cls(raw=raw)
        if not isinstance(parsed, dict):
            return cls(raw=raw)
        return cls(raw=raw, components=parsed)

    def differing_components(self, other: "DeviceFingerprint") -> int:
        """Count known components whose values differ from another fingerprint.

        Returns 0 when either side has no parsed components, since nothing
        can be compared.
        """
        if not self.components or not other.components:
            return 0
        return sum(
            1
            for name in FINGERPRINT_COMPONENTS
            if self.components.get(name) != other.components.get(name)
        )
