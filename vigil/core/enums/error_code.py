"""Machine-readable error codes.

Codes follow ENTITY_ACTION_REASON naming and travel inside DomainError
values (Result types), never as exception payloads.

Categories:
- Authentication (INVALID_CREDENTIALS, ACCOUNT_LOCKED, ...)
- Second factor (SECOND_FACTOR_*)
- Risk scoring (RISK_*)
- Ledger and cache failures (LEDGER_*, CACHE_*)

Note:
    INVALID_CREDENTIALS is deliberately shared by "no such principal" and
    "wrong password" so callers cannot enumerate accounts. Likewise
    INVALID_SECOND_FACTOR covers both a wrong TOTP code and a spent backup code.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Authentication
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_LOCKED = "account_locked"
    SECOND_FACTOR_REQUIRED = "second_factor_required"
    INVALID_CONTINUATION_TOKEN = "invalid_continuation_token"
    INVALID_RESET_TOKEN = "invalid_reset_token"

    # Second factor
    INVALID_SECOND_FACTOR = "invalid_second_factor"
    SECOND_FACTOR_NOT_ENABLED = "second_factor_not_enabled"
    SECOND_FACTOR_ALREADY_ENABLED = "second_factor_already_enabled"

    # Risk scoring
    RISK_SIGNAL_UNAVAILABLE = "risk_signal_unavailable"
    RISK_UNKNOWN_PRINCIPAL = "risk_unknown_principal"

    # Ledger
    LEDGER_APPEND_FAILED = "ledger_append_failed"
    LEDGER_QUERY_FAILED = "ledger_query_failed"

    # Cache
    CACHE_UNAVAILABLE = "cache_unavailable"
