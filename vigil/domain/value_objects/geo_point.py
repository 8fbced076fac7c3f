"""Geographic coordinate value object with great-circle distance."""

import math
from dataclasses import dataclass

EARTH_RADIUS_MILES = 3959.0


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """Latitude/longitude pair in decimal degrees.

    Raises:
        ValueError: If a coordinate is outside its valid range.

    Example:
        >>> new_york = GeoPoint(40.7128, -74.0060)
        >>> london = GeoPoint(51.5074, -0.1278)
        >>> 3400 < new_york.distance_miles(london) < 3500
        True
    """

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude out of range: {self.longitude}")

    def distance_miles(self, other: "GeoPoint") -> float:
        """Haversine distance to another point, in statute miles."""
        lat1 = math.radians(self.latitude)
        lat2 = math.radians(other.latitude)
        d_lat = lat2 - lat1
        d_lng = math.radians(other.longitude - self.longitude)

        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return EARTH_RADIUS_MILES * c
