"""Security event variants."""

from vigil.domain.events.security_events import (
    SECURITY_EVENT_TYPES,
    AccountLocked,
    FinancialActionRecorded,
    LoginFailed,
    LoginSucceeded,
    PasswordResetCompleted,
    PasswordResetRequested,
    SecondFactorDisabled,
    SecondFactorEnabled,
    SecondFactorFailed,
    SecurityEvent,
    SuspiciousActivityDetected,
)

__all__ = [
    "SECURITY_EVENT_TYPES",
    "AccountLocked",
    "FinancialActionRecorded",
    "LoginFailed",
    "LoginSucceeded",
    "PasswordResetCompleted",
    "PasswordResetRequested",
    "SecondFactorDisabled",
    "SecondFactorEnabled",
    "SecondFactorFailed",
    "SecurityEvent",
    "SuspiciousActivityDetected",
]
