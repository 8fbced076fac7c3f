"""Temporal signal: unusual hours and business activity on weekends."""

from vigil.application.risk.context import SignalContext
from vigil.application.risk.signals.base import capped_score
from vigil.core.errors import DomainError
from vigil.core.result import Result
from vigil.domain.entities import SignalScore
from vigil.domain.enums import PrincipalKind

SATURDAY = 5


class TemporalSignal:
    """Scores the local hour and weekday of the assessment."""

    name = "temporal"

    async def evaluate(self, ctx: SignalContext) -> Result[SignalScore, DomainError]:
        policy = ctx.policy
        local = ctx.local_now
        contributions: list[tuple[int, str]] = []

        start, end = policy.temporal_unusual_start_hour, policy.temporal_unusual_end_hour
        if start <= local.hour <= end:
            contributions.append(
                (policy.temporal_unusual_hour_penalty, "Activity during unusual hours")
            )
        if ctx.principal.kind is PrincipalKind.BUSINESS and local.weekday() >= SATURDAY:
            contributions.append(
                (
                    policy.temporal_business_weekend_penalty,
                    "Business activity during weekend",
                )
            )

        return capped_score(self.name, policy.temporal_cap, contributions)
