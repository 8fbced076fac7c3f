"""PrincipalRepository protocol for principal persistence.

Port (interface) for hexagonal architecture. Infrastructure layer
implements this protocol to provide concrete persistence.

Atomicity:
    Every mutation after creation is a single-document operation applied to
    the stored document, never a write-back of a snapshot. Adapters perform
    each one as one critical section (or one conditional update), so a
    concurrent failed-attempt increment or lock is never overwritten and the
    same backup code or reset token cannot be spent twice.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from vigil.domain.entities import BackupCodeConsumption, LockoutState, Principal


class PrincipalRepository(Protocol):
    """Principal repository protocol (port).

    Returned principals are snapshots: mutating one never changes the store.
    save() is for creating principals; existing documents change only
    through the field-level operations below.
    """

    async def find_by_id(self, principal_id: UUID) -> Principal | None:
        """Find principal by ID, None if not found."""
        ...

    async def find_by_login_key(self, login_key: str) -> Principal | None:
        """Find principal by normalised login key, None if not found."""
        ...

    async def find_by_reset_token_hash(self, token_hash: str) -> Principal | None:
        """Find principal holding an outstanding reset token with this hash."""
        ...

    async def increment_failed_attempts(
        self,
        principal_id: UUID,
        *,
        threshold: int,
        lock_until: datetime,
        now: datetime,
    ) -> LockoutState | None:
        """Atomically apply one failed credential check.

        Args:
            principal_id: Principal to update.
            threshold: Failed attempts that trigger the lock.
            lock_until: Lock expiry to set if this update reaches the threshold.
            now: Current time (decides whether a previous lock has expired).

        Returns:
            LockoutState after the update, or None if the principal is gone.
        """
        ...

    async def reset_failed_attempts(self, principal_id: UUID) -> None:
        """Clear the failed-attempt counter and any lock."""
        ...

    async def set_lock(self, principal_id: UUID, locked_until: datetime | None) -> None:
        """Set (or clear with None) the lock expiry."""
        ...

    async def record_login(self, principal_id: UUID, now: datetime) -> None:
        """Stamp last_login_at without touching the failed-attempt state."""
        ...

    async def consume_backup_code(
        self, principal_id: UUID, code: str
    ) -> BackupCodeConsumption:
        """Atomically mark a matching unused backup code as used."""
        ...

    async def set_password_reset(
        self,
        principal_id: UUID,
        *,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> None:
        """Store an outstanding reset token hash, replacing any previous one."""
        ...

    async def complete_password_reset(
        self,
        principal_id: UUID,
        *,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        """Atomically spend the reset token and replace the credential.

        Applies only while the stored token hash still equals ``token_hash``
        and has not expired at ``now``. Clears the token, the failed-attempt
        counter and any lock.

        Returns:
            True if the reset was applied, False if the token was already
            spent, replaced or expired.
        """
        ...

    async def enable_second_factor(
        self,
        principal_id: UUID,
        *,
        secret: str,
        backup_codes: list[str],
        now: datetime,
    ) -> bool:
        """Atomically turn the second factor on.

        Returns:
            True if enabled, False if it was already enabled (or the
            principal is gone).
        """
        ...

    async def disable_second_factor(self, principal_id: UUID, *, now: datetime) -> None:
        """Remove the TOTP secret and every backup code."""
        ...

    async def save(self, principal: Principal) -> None:
        """Create the principal document (or replace it wholesale, e.g. on import)."""
        ...
