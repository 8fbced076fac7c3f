"""Geographic signal: distance from usual locations and impossible travel."""

from vigil.application.risk.context import SignalContext
from vigil.application.risk.signals.base import capped_score, history_unavailable
from vigil.core.errors import DomainError
from vigil.core.result import Result
from vigil.domain.entities import SignalScore
from vigil.domain.protocols import GeolocationResolverProtocol
from vigil.domain.value_objects import GeoPoint


class GeographicSignal:
    """Compares the request location against recently seen locations.

    The request location is the declared one, else the resolver's answer
    for the request address. No location or no located history means zero.
    Rapid travel is judged against the latest located event and needs at
    least two located events, so a single prior sighting only counts
    toward the distance check.
    """

    name = "geographic"

    def __init__(self, resolver: GeolocationResolverProtocol | None = None) -> None:
        self._resolver = resolver

    async def evaluate(self, ctx: SignalContext) -> Result[SignalScore, DomainError]:
        if ctx.history is None:
            return history_unavailable(self.name)

        policy = ctx.policy
        current = await self._current_location(ctx)
        if current is None:
            return capped_score(self.name, policy.geo_cap, [])

        # (occurred_at, location) of located events, ascending
        located = [
            (event.occurred_at, event.location)
            for event in ctx.events_since(ctx.now - policy.geo_lookback)
            if event.location is not None
        ]
        if not located:
            return capped_score(self.name, policy.geo_cap, [])

        contributions: list[tuple[int, str]] = []
        nearest = min(current.distance_miles(point) for _, point in located)
        if nearest > policy.geo_unusual_distance_miles:
            contributions.append(
                (
                    policy.geo_unusual_location_penalty,
                    f"Unusual location: {nearest:.0f} miles from usual locations",
                )
            )

        if len(located) > 1:
            last_seen, last_point = located[-1]
            travelled = current.distance_miles(last_point)
            elapsed = ctx.now - last_seen
            if (
                travelled > policy.geo_unusual_distance_miles
                and elapsed < policy.geo_rapid_travel_window
            ):
                hours = elapsed.total_seconds() / 3600
                contributions.append(
                    (
                        policy.geo_rapid_travel_penalty,
                        f"Rapid location change: {travelled:.0f} miles in {hours:.1f} hours",
                    )
                )

        return capped_score(self.name, policy.geo_cap, contributions)

    async def _current_location(self, ctx: SignalContext) -> GeoPoint | None:
        if ctx.request.location is not None:
            return ctx.request.location
        if self._resolver is None or not ctx.request.ip_address:
            return None
        return await self._resolver.resolve(ctx.request.ip_address)
