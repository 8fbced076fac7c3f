"""Principal domain entity.

Pure business rules for account security state, no storage dependencies.

Lockout Rules:
    - Each failed credential check increments failed_login_attempts
    - Reaching the threshold sets locked_until = now + lockout window
    - Lockout is a time window: once it has passed, the next failed check
      restarts the counter at 1 (the counter is not cleared proactively)
    - A successful credential check resets the counter and clears the lock

Backup Codes:
    - Fixed-size tuple generated on second-factor enrollment
    - Each code is consumed at most once; a used code never matches again
"""

import hmac
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum
from uuid import UUID

from vigil.domain.enums import PrincipalKind


class BackupCodeConsumption(str, Enum):
    """Outcome of trying to spend a backup code."""

    CONSUMED = "consumed"
    ALREADY_USED = "already_used"
    NO_MATCH = "no_match"


@dataclass(frozen=True, slots=True)
class BackupCode:
    """Single-use second-factor backup code.

    Attributes:
        code: Upper-case hex code shown to the user once at enrollment.
        used: Whether the code has been spent.
    """

    code: str
    used: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class LockoutState:
    """Failed-attempt counter state after an atomic update.

    Attributes:
        failed_login_attempts: Counter value after the update.
        locked_until: Lock expiry after the update (None if not locked).
        locked_now: True only when this update crossed the threshold.
    """

    failed_login_attempts: int
    locked_until: datetime | None
    locked_now: bool = False


def normalize_backup_code(code: str) -> str:
    """Normalise user-typed backup codes (case-insensitive, surrounding whitespace ignored)."""
    return code.strip().upper()


@dataclass
class Principal:
    """Authenticated identity with credential and second-factor state.

    Attributes:
        id: Unique identifier (UUIDv7).
        login_key: Normalised email or username used to log in.
        kind: Customer, business owner or operator.
        password_hash: bcrypt hash (never plaintext).
        is_active: Deactivated principals cannot authenticate.
        failed_login_attempts: Consecutive failed credential checks.
        locked_until: Lock expiry, None when not locked.
        second_factor_secret: Base32 TOTP secret, None when not enrolled.
        second_factor_enabled: Whether login requires a second factor.
        backup_codes: Single-use backup codes, in generation order.
        last_login_at: Timestamp of the last fully authenticated login.
        password_reset_token_hash: SHA-256 of the outstanding reset token.
        password_reset_expires_at: Expiry of the outstanding reset token.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.

    Example:
        >>> principal = Principal(id=uuid7(), login_key="a@example.com", ...)
        >>> principal.is_locked(now)
        False
        >>> state = principal.register_failed_login(
        ...     threshold=5, lock_until=now + timedelta(minutes=30), now=now
        ... )
        >>> state.failed_login_attempts
        1
    """

    id: UUID
    login_key: str
    password_hash: str
    kind: PrincipalKind = PrincipalKind.CUSTOMER
    is_active: bool = True
    failed_login_attempts: int = 0
    locked_until: datetime | None = None
    second_factor_secret: str | None = None
    second_factor_enabled: bool = False
    backup_codes: tuple[BackupCode, ...] = ()
    last_login_at: datetime | None = None
    password_reset_token_hash: str | None = None
    password_reset_expires_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_locked(self, now: datetime) -> bool:
        """Check if the lockout window is still open at ``now``."""
        return self.locked_until is not None and now < self.locked_until

    def lock_expired(self, now: datetime) -> bool:
        """Check if a lock was set and its window has passed."""
        return self.locked_until is not None and now >= self.locked_until

    def register_failed_login(
        self,
        *,
        threshold: int,
        lock_until: datetime,
        now: datetime,
    ) -> LockoutState:
        """Apply one failed credential check.

        Stores call this inside a single-document critical section; it must
        stay free of I/O.

        Args:
            threshold: Failed attempts that trigger the lock.
            lock_until: Lock expiry to set if the threshold is reached.
            now: Current time.

        Returns:
            LockoutState after the update.
        """
        if self.lock_expired(now):
            # Expired window: this failure is attempt 1 of a fresh cycle
            self.failed_login_attempts = 1
            self.locked_until = None
        else:
            self.failed_login_attempts += 1

        locked_now = False
        if self.failed_login_attempts >= threshold and not self.is_locked(now):
            self.locked_until = lock_until
            locked_now = True

        self.updated_at = now
        return LockoutState(
            failed_login_attempts=self.failed_login_attempts,
            locked_until=self.locked_until,
            locked_now=locked_now,
        )

    def reset_failed_login(self) -> None:
        """Clear the failed-attempt counter and any lock."""
        self.failed_login_attempts = 0
        self.locked_until = None

    def record_login(self, now: datetime) -> None:
        """Record a fully authenticated login."""
        self.last_login_at = now
        self.updated_at = now

    def enable_second_factor(self, secret: str, codes: list[str]) -> None:
        """Persist a verified TOTP secret and a fresh set of backup codes."""
        self.second_factor_secret = secret
        self.second_factor_enabled = True
        self.backup_codes = tuple(BackupCode(code=c) for c in codes)

    def disable_second_factor(self) -> None:
        """Remove the TOTP secret and every backup code."""
        self.second_factor_secret = None
        self.second_factor_enabled = False
        self.backup_codes = ()

    def consume_backup_code(self, code: str) -> BackupCodeConsumption:
        """Spend a backup code if it matches an unused one.

        Only the matched code changes; all other codes are untouched.
        """
        candidate = normalize_backup_code(code)
        if not candidate:
            return BackupCodeConsumption.NO_MATCH

        codes = list(self.backup_codes)
        for index, backup in enumerate(codes):
            if not hmac.compare_digest(backup.code.encode(), candidate.encode()):
                continue
            if backup.used:
                return BackupCodeConsumption.ALREADY_USED
            codes[index] = replace(backup, used=True)
            self.backup_codes = tuple(codes)
            return BackupCodeConsumption.CONSUMED
        return BackupCodeConsumption.NO_MATCH

    @property
    def remaining_backup_codes(self) -> int:
        """Number of unused backup codes."""
        return sum(1 for backup in self.backup_codes if not backup.used)

    def set_password_reset(self, token_hash: str, expires_at: datetime) -> None:
        """Store an outstanding password reset token (hash only)."""
        self.password_reset_token_hash = token_hash
        self.password_reset_expires_at = expires_at

    def password_reset_valid(self, now: datetime) -> bool:
        """Check the outstanding reset token has not expired."""
        return (
            self.password_reset_token_hash is not None
            and self.password_reset_expires_at is not None
            and now < self.password_reset_expires_at
        )

    def complete_password_reset(self, password_hash: str, now: datetime) -> None:
        """Replace the credential and clear reset and lockout state."""
        self.password_hash = password_hash
        self.password_reset_token_hash = None
        self.password_reset_expires_at = None
        self.reset_failed_login()
        self.updated_at = now


def lock_expiry(now: datetime, lockout_minutes: int) -> datetime:
    """Compute the lock expiry for a lock starting at ``now``."""
    return now + timedelta(minutes=lockout_minutes)
