"""In-memory principal repository (adapter).

Document store keyed by principal id, implementing PrincipalRepository.
Serves single-process deployments and tests; a database-backed adapter
implements the same protocol.

Concurrency:
    Each operation takes a threading.Lock only around its synchronous body,
    so the lock is never held across an await. Every mutation runs entirely
    inside one critical section against the stored document, so a failed
    attempt counted between a caller's read and its write is never lost.

    Principals are deep-copied in and out: callers mutate snapshots, never
    the stored document.
"""

import copy
import threading
from datetime import datetime
from uuid import UUID

from vigil.domain.entities import BackupCodeConsumption, LockoutState, Principal


class InMemoryPrincipalRepository:
    """Dict-backed PrincipalRepository.

    Usage:
        repo = InMemoryPrincipalRepository()
        await repo.save(principal)
        state = await repo.increment_failed_attempts(
            principal.id, threshold=5, lock_until=lock_until, now=now
        )
    """

    def __init__(self, principals: list[Principal] | None = None) -> None:
        self._lock = threading.Lock()
        self._by_id: dict[UUID, Principal] = {}
        self._id_by_login_key: dict[str, UUID] = {}
        for principal in principals or []:
            self._store(principal)

    def _store(self, principal: Principal) -> None:
        previous = self._by_id.get(principal.id)
        if previous is not None and previous.login_key != principal.login_key:
            self._id_by_login_key.pop(previous.login_key, None)
        self._by_id[principal.id] = copy.deepcopy(principal)
        self._id_by_login_key[principal.login_key] = principal.id

    async def find_by_id(self, principal_id: UUID) -> Principal | None:
        with self._lock:
            principal = self._by_id.get(principal_id)
            return copy.deepcopy(principal) if principal else None

    async def find_by_login_key(self, login_key: str) -> Principal | None:
        with self._lock:
            principal_id = self._id_by_login_key.get(login_key)
            if principal_id is None:
                return None
            return copy.deepcopy(self._by_id[principal_id])

    async def find_by_reset_token_hash(self, token_hash: str) -> Principal | None:
        with self._lock:
            for principal in self._by_id.values():
                if principal.password_reset_token_hash == token_hash:
                    return copy.deepcopy(principal)
            return None

    async def increment_failed_attempts(
        self,
        principal_id: UUID,
        *,
        threshold: int,
        lock_until: datetime,
        now: datetime,
    ) -> LockoutState | None:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is None:
                return None
            return principal.register_failed_login(
                threshold=threshold, lock_until=lock_until, now=now
            )

    async def reset_failed_attempts(self, principal_id: UUID) -> None:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is not None:
                principal.reset_failed_login()

    async def set_lock(self, principal_id: UUID, locked_until: datetime | None) -> None:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is not None:
                principal.locked_until = locked_until

    async def record_login(self, principal_id: UUID, now: datetime) -> None:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is not None:
                principal.record_login(now)

    async def consume_backup_code(
        self, principal_id: UUID, code: str
    ) -> BackupCodeConsumption:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is None:
                return BackupCodeConsumption.NO_MATCH
            return principal.consume_backup_code(code)

    async def set_password_reset(
        self,
        principal_id: UUID,
        *,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> None:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is not None:
                principal.set_password_reset(token_hash, expires_at)
                principal.updated_at = now

    async def complete_password_reset(
        self,
        principal_id: UUID,
        *,
        token_hash: str,
        password_hash: str,
        now: datetime,
    ) -> bool:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if (
                principal is None
                or principal.password_reset_token_hash != token_hash
                or not principal.password_reset_valid(now)
            ):
                return False
            principal.complete_password_reset(password_hash, now)
            return True

    async def enable_second_factor(
        self,
        principal_id: UUID,
        *,
        secret: str,
        backup_codes: list[str],
        now: datetime,
    ) -> bool:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is None or principal.second_factor_enabled:
                return False
            principal.enable_second_factor(secret, backup_codes)
            principal.updated_at = now
            return True

    async def disable_second_factor(self, principal_id: UUID, *, now: datetime) -> None:
        with self._lock:
            principal = self._by_id.get(principal_id)
            if principal is not None:
                principal.disable_second_factor()
                principal.updated_at = now

    async def save(self, principal: Principal) -> None:
        with self._lock:
            self._store(principal)
