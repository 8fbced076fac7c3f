"""Velocity signal: too many (or too large) actions in a short window."""

from decimal import Decimal

from vigil.application.risk.context import SignalContext
from vigil.application.risk.signals.base import capped_score, history_unavailable
from vigil.core.errors import DomainError
from vigil.core.result import Result
from vigil.domain.entities import SignalScore
from vigil.domain.events import FinancialActionRecorded


class VelocitySignal:
    """Counts same-class actions in the velocity window.

    Login actions count login_success/login_failed events. Financial actions
    count financial_action events of any financial type and also sum their
    amounts. The request being assessed is not counted: it has not happened
    yet.
    """

    name = "velocity"

    async def evaluate(self, ctx: SignalContext) -> Result[SignalScore, DomainError]:
        if ctx.history is None:
            return history_unavailable(self.name)

        policy = ctx.policy
        event_types = ctx.action_type.event_types
        recent = [
            event
            for event in ctx.events_since(ctx.now - policy.velocity_window)
            if event.event_type in event_types
        ]
        contributions: list[tuple[int, str]] = []

        if ctx.action_type.is_login:
            if len(recent) > policy.velocity_max_logins:
                contributions.append(
                    (
                        policy.velocity_login_penalty,
                        f"High login velocity: {len(recent)} attempts in window",
                    )
                )
        elif len(recent) > policy.velocity_max_actions:
            contributions.append(
                (
                    policy.velocity_action_penalty,
                    f"High action velocity: {len(recent)} actions in window",
                )
            )

        if ctx.action_type.is_financial:
            total = sum(
                (
                    event.amount
                    for event in recent
                    if isinstance(event, FinancialActionRecorded)
                ),
                Decimal("0"),
            )
            if total > policy.velocity_max_amount:
                contributions.append(
                    (
                        policy.velocity_amount_penalty,
                        f"High amount velocity: {total} in window",
                    )
                )

        return capped_score(self.name, policy.velocity_cap, contributions)
