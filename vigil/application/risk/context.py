"""Inputs shared by every risk signal for one assessment."""

from dataclasses import dataclass
from datetime import datetime

from vigil.application.risk.policy import RiskPolicy
from vigil.domain.entities import Principal
from vigil.domain.enums import ActionType
from vigil.domain.events import SecurityEvent
from vigil.domain.value_objects import RequestContext


@dataclass(frozen=True, kw_only=True)
class SignalContext:
    """Everything a signal may read.

    Attributes:
        principal: Principal performing the action.
        action_type: Action being assessed.
        request: Request metadata (address, signature, fingerprint, location,
            amount).
        now: Assessment time (UTC).
        policy: Thresholds and penalties.
        history: Ledger events inside policy.history_lookback, ascending;
            None when the history could not be read before the deadline.
    """

    principal: Principal
    action_type: ActionType
    request: RequestContext
    now: datetime
    policy: RiskPolicy
    history: tuple[SecurityEvent, ...] | None

    @property
    def local_now(self) -> datetime:
        """Assessment time in the policy's local timezone."""
        return self.now.astimezone(self.policy.tz)

    def events_since(self, since: datetime) -> list[SecurityEvent]:
        """History events with occurred_at >= since (history must be available)."""
        return [event for event in self.history or () if event.occurred_at >= since]
