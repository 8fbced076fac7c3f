"""Geolocation resolver backed by MaxMind GeoIP2.

Resolves network addresses to coordinates for the geographic risk signal.

Implementation:
    - GeoLite2-City database, opened lazily on first lookup
    - Fail-open: any error resolves to None
    - Private/reserved addresses resolve to None (no meaningful location)
"""

import ipaddress
from pathlib import Path

import geoip2.database
import geoip2.errors

from vigil.domain.protocols import LoggerProtocol
from vigil.domain.value_objects import GeoPoint


class GeoIP2LocationResolver:
    """GeolocationResolverProtocol implementation using GeoIP2.

    Args:
        logger: Logger for debug/warning messages.
        db_path: Path to GeoLite2-City.mmdb. If None, every lookup is None.
    """

    def __init__(self, logger: LoggerProtocol, db_path: str | None = None) -> None:
        self._logger = logger
        self._db_path = db_path
        self._reader: geoip2.database.Reader | None = None
        self._reader_failed = False

    async def resolve(self, ip_address: str) -> GeoPoint | None:
        """Resolve an address to coordinates.

        Returns None for private/reserved or malformed addresses, when no
        database is configured, when the address is not in the database, or
        on any lookup error.
        """
        if not ip_address or is_non_routable(ip_address):
            return None

        reader = self._get_reader()
        if reader is None:
            return None

        try:
            response = reader.city(ip_address)
        except geoip2.errors.AddressNotFoundError:
            self._logger.debug("geoip_address_not_found", ip_address=ip_address)
            return None
        except (ValueError, geoip2.errors.GeoIP2Error, RuntimeError) as e:
            self._logger.warning(
                "geoip_lookup_failed", ip_address=ip_address, error=str(e)
            )
            return None

        latitude = response.location.latitude
        longitude = response.location.longitude
        if latitude is None or longitude is None:
            return None
        return GeoPoint(latitude=latitude, longitude=longitude)

    def _get_reader(self) -> geoip2.database.Reader | None:
        """Open the database on first use; remember a failed open."""
        if self._reader is not None or self._reader_failed:
            return self._reader
        if not self._db_path:
            self._reader_failed = True
            self._logger.debug("geoip_database_not_configured")
            return None

        db_file = Path(self._db_path)
        if not db_file.exists():
            self._reader_failed = True
            self._logger.warning("geoip_database_missing", db_path=self._db_path)
            return None

        try:
            self._reader = geoip2.database.Reader(str(db_file))
        except (OSError, RuntimeError) as e:
            self._reader_failed = True
            self._logger.warning(
                "geoip_database_open_failed", db_path=self._db_path, error=str(e)
            )
            return None

        self._logger.info("geoip_database_loaded", db_path=self._db_path)
        return self._reader

    def close(self) -> None:
        """Close the database reader if open."""
        if self._reader is not None:
            self._reader.close()
            self._reader = None


def is_non_routable(ip_address: str) -> bool:
    """Check if an address is private, loopback, link-local, reserved or malformed."""
    try:
        ip = ipaddress.ip_address(ip_address)
    except ValueError:
        return True
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_reserved
        or ip.is_link_local
        or ip.is_multicast
    )
