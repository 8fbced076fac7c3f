"""Security event types.

Closed enumeration of everything that lands in a principal's security
event ledger. Each value has exactly one event class in
``vigil.domain.events.security_events``.
"""

from enum import Enum


class SecurityEventType(str, Enum):
    """Type tag of a security event."""

    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    ACCOUNT_LOCKED = "account_locked"
    SECOND_FACTOR_ENABLED = "second_factor_enabled"
    SECOND_FACTOR_DISABLED = "second_factor_disabled"
    SECOND_FACTOR_FAILED = "second_factor_failed"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_RESET_COMPLETED = "password_reset_completed"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"
    FINANCIAL_ACTION = "financial_action"


class LoginMethod(str, Enum):
    """How a login_success was established."""

    PASSWORD = "password"
    TOTP = "totp"
    BACKUP_CODE = "backup_code"


class LoginFailureReason(str, Enum):
    """Internal reason recorded on login_failed events.

    Recorded for audit only; never returned to the caller.
    """

    UNKNOWN_PRINCIPAL = "unknown_principal"
    INVALID_CREDENTIAL = "invalid_credential"
    ACCOUNT_LOCKED = "account_locked"
    INVALID_SECOND_FACTOR = "invalid_second_factor"
