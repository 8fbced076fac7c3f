"""Domain entities."""

from vigil.domain.entities.principal import (
    BackupCode,
    BackupCodeConsumption,
    LockoutState,
    Principal,
    lock_expiry,
    normalize_backup_code,
)
from vigil.domain.entities.risk_assessment import (
    DEFAULT_BLOCK_THRESHOLD,
    DEFAULT_REVIEW_THRESHOLD,
    MAX_RISK_SCORE,
    RiskAssessment,
    SignalScore,
    clamp_score,
)

__all__ = [
    "BackupCode",
    "BackupCodeConsumption",
    "DEFAULT_BLOCK_THRESHOLD",
    "DEFAULT_REVIEW_THRESHOLD",
    "LockoutState",
    "MAX_RISK_SCORE",
    "Principal",
    "RiskAssessment",
    "SignalScore",
    "clamp_score",
    "lock_expiry",
    "normalize_backup_code",
]
