"""Application services.

- SecurityEventLedger: bounded per-principal audit trail
- SecondFactorVerifier: TOTP and backup code checks, enrollment
- register_failed_attempt: atomic failed-attempt count and lock bookkeeping
"""

from vigil.application.services.lockout import register_failed_attempt
from vigil.application.services.second_factor_verifier import (
    SecondFactorVerifier,
    generate_backup_codes,
)
from vigil.application.services.security_event_ledger import (
    NOTIFIED_EVENT_TYPES,
    SecurityEventLedger,
)

__all__ = [
    "NOTIFIED_EVENT_TYPES",
    "SecondFactorVerifier",
    "SecurityEventLedger",
    "generate_backup_codes",
    "register_failed_attempt",
]
