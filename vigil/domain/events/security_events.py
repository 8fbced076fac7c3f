"""Security events recorded in a principal's ledger.

Each event type is its own frozen dataclass (a closed set of variants) so
the detail payload has a known shape per type instead of an open dict.
Events are facts: named in past tense, immutable once created, and owned
by exactly one principal's ledger.

Architecture:
    - SecurityEvent carries the fields common to every event
      (who/where/when plus the correlation id of the causing request)
    - Subclasses add the typed detail for their event_type
    - SECURITY_EVENT_TYPES maps each SecurityEventType to its class

Usage:
    >>> event = LoginFailed.from_context(
    ...     context, occurred_at=now, reason=LoginFailureReason.INVALID_CREDENTIAL
    ... )
    >>> event.event_type
    <SecurityEventType.LOGIN_FAILED: 'login_failed'>
"""

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any, ClassVar, Self
from uuid import UUID

from uuid_extensions import uuid7

from vigil.domain.enums import (
    ActionType,
    LoginFailureReason,
    LoginMethod,
    RiskLevel,
    SecurityEventType,
)
from vigil.domain.value_objects import DeviceFingerprint, GeoPoint, RequestContext


@dataclass(frozen=True, kw_only=True, slots=True)
class SecurityEvent:
    """Base class for all ledger events.

    Attributes:
        event_id: Unique id (UUIDv7, time-ordered).
        occurred_at: When the event happened (UTC).
        ip_address: Originating network address.
        user_agent: Originating client signature.
        correlation_id: Links the causal chain of events for one request.
        location: Declared location at the time, if known.
        device_fingerprint: Client fingerprint at the time, if supplied.
    """

    event_type: ClassVar[SecurityEventType]

    event_id: UUID = field(default_factory=uuid7)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    ip_address: str | None = None
    user_agent: str | None = None
    correlation_id: str | None = None
    location: GeoPoint | None = None
    device_fingerprint: str | None = None

    @classmethod
    def from_context(
        cls, context: RequestContext, *, occurred_at: datetime, **detail: Any
    ) -> Self:
        """Build an event stamped with the request's origin metadata."""
        return cls(
            occurred_at=occurred_at,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            correlation_id=context.correlation_id,
            location=context.location,
            device_fingerprint=context.device_fingerprint,
            **detail,
        )

    @property
    def fingerprint(self) -> DeviceFingerprint | None:
        """Parsed device fingerprint, if one was recorded."""
        if self.device_fingerprint is None:
            return None
        return DeviceFingerprint.parse(self.device_fingerprint)

    def detail(self) -> dict[str, Any]:
        """Type-specific payload as a plain dict (for logs and serialisation)."""
        common = {f.name for f in fields(SecurityEvent)}
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in common
        }


@dataclass(frozen=True, kw_only=True, slots=True)
class LoginSucceeded(SecurityEvent):
    """Principal fully authenticated."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.LOGIN_SUCCESS

    method: LoginMethod = LoginMethod.PASSWORD


@dataclass(frozen=True, kw_only=True, slots=True)
class LoginFailed(SecurityEvent):
    """Credential or second-factor check failed, or the account was locked."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.LOGIN_FAILED

    reason: LoginFailureReason


@dataclass(frozen=True, kw_only=True, slots=True)
class AccountLocked(SecurityEvent):
    """Failed-attempt threshold reached; lockout window opened."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.ACCOUNT_LOCKED

    locked_until: datetime


@dataclass(frozen=True, kw_only=True, slots=True)
class SecondFactorEnabled(SecurityEvent):
    """TOTP secret verified and persisted; backup codes issued."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.SECOND_FACTOR_ENABLED

    backup_code_count: int


@dataclass(frozen=True, kw_only=True, slots=True)
class SecondFactorDisabled(SecurityEvent):
    """TOTP secret and backup codes removed."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.SECOND_FACTOR_DISABLED


@dataclass(frozen=True, kw_only=True, slots=True)
class SecondFactorFailed(SecurityEvent):
    """A second-factor code was rejected.

    Deliberately carries no detail about which check (TOTP or backup code)
    failed.
    """

    event_type: ClassVar[SecurityEventType] = SecurityEventType.SECOND_FACTOR_FAILED


@dataclass(frozen=True, kw_only=True, slots=True)
class PasswordResetRequested(SecurityEvent):
    """Reset token issued (the token itself is never recorded)."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.PASSWORD_RESET_REQUESTED

    expires_at: datetime


@dataclass(frozen=True, kw_only=True, slots=True)
class PasswordResetCompleted(SecurityEvent):
    """Credential replaced through a reset token."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.PASSWORD_RESET_COMPLETED


@dataclass(frozen=True, kw_only=True, slots=True)
class SuspiciousActivityDetected(SecurityEvent):
    """Risk assessment crossed the logging threshold."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.SUSPICIOUS_ACTIVITY

    action_type: ActionType
    risk_score: int
    risk_level: RiskLevel
    risk_factors: tuple[str, ...] = ()


@dataclass(frozen=True, kw_only=True, slots=True)
class FinancialActionRecorded(SecurityEvent):
    """A money-moving action was executed for the principal."""

    event_type: ClassVar[SecurityEventType] = SecurityEventType.FINANCIAL_ACTION

    action_type: ActionType
    amount: Decimal = Decimal("0")


SECURITY_EVENT_TYPES: dict[SecurityEventType, type[SecurityEvent]] = {
    cls.event_type: cls
    for cls in (
        LoginSucceeded,
        LoginFailed,
        AccountLocked,
        SecondFactorEnabled,
        SecondFactorDisabled,
        SecondFactorFailed,
        PasswordResetRequested,
        PasswordResetCompleted,
        SuspiciousActivityDetected,
        FinancialActionRecorded,
    )
}
