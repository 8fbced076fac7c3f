"""Behavioral signal: unusual time of day and rapid repetition."""

import math
from datetime import datetime, tzinfo

from vigil.application.risk.context import SignalContext
from vigil.application.risk.signals.base import capped_score, history_unavailable
from vigil.core.errors import DomainError
from vigil.core.result import Result
from vigil.domain.entities import SignalScore

HOURS_PER_DAY = 24.0

# Below this mean resultant length the hours are spread too evenly to
# define a usual hour.
MIN_RESULTANT_LENGTH = 1e-6


def _fractional_hour(moment: datetime, tz: tzinfo) -> float:
    local = moment.astimezone(tz)
    return local.hour + local.minute / 60


def circular_mean_hour(hours: list[float]) -> float | None:
    """Mean hour of day on the 24h circle (23:00 and 01:00 average to 00:00).

    Returns None for an empty list or evenly spread hours.
    """
    if not hours:
        return None
    angles = [hour / HOURS_PER_DAY * 2 * math.pi for hour in hours]
    sin_mean = sum(math.sin(a) for a in angles) / len(angles)
    cos_mean = sum(math.cos(a) for a in angles) / len(angles)
    if math.hypot(sin_mean, cos_mean) < MIN_RESULTANT_LENGTH:
        return None
    mean = math.atan2(sin_mean, cos_mean) / (2 * math.pi) * HOURS_PER_DAY
    return mean % HOURS_PER_DAY


def hour_distance(a: float, b: float) -> float:
    """Shortest distance between two hours on the 24h circle."""
    diff = abs(a - b) % HOURS_PER_DAY
    return min(diff, HOURS_PER_DAY - diff)


class BehavioralSignal:
    """Compares the current hour with the principal's usual hour and
    detects bursts of the same action."""

    name = "behavioral"

    async def evaluate(self, ctx: SignalContext) -> Result[SignalScore, DomainError]:
        if ctx.history is None:
            return history_unavailable(self.name)

        policy = ctx.policy
        contributions: list[tuple[int, str]] = []

        recent = ctx.events_since(ctx.now - policy.behavior_lookback)
        usual = circular_mean_hour(
            [_fractional_hour(event.occurred_at, policy.tz) for event in recent]
        )
        if usual is not None:
            deviation = hour_distance(_fractional_hour(ctx.now, policy.tz), usual)
            if deviation > policy.behavior_hour_deviation:
                contributions.append(
                    (
                        policy.behavior_hour_penalty,
                        f"Unusual time of activity: {deviation:.1f} hours from usual",
                    )
                )

        event_types = ctx.action_type.event_types
        burst = [
            event
            for event in ctx.events_since(ctx.now - policy.behavior_burst_window)
            if event.event_type in event_types
        ]
        if len(burst) > policy.behavior_burst_max_actions:
            contributions.append(
                (
                    policy.behavior_burst_penalty,
                    f"Rapid repeated actions: {len(burst)} in burst window",
                )
            )

        return capped_score(self.name, policy.behavior_cap, contributions)
