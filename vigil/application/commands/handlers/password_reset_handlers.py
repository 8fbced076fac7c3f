"""Password reset handlers.

RequestPasswordResetHandler:
    Always returns Success(None) so the response never reveals whether the
    login key exists. For an active principal it stores the SHA-256 of a
    fresh 32-byte token (60-minute expiry), appends
    password_reset_requested and hands the raw token to the notification
    sender. Only the hash is ever persisted or logged.

CompletePasswordResetHandler:
    Looks the principal up by token hash, rejects unknown or expired tokens
    with InvalidResetToken, then spends the token and stores the new bcrypt
    hash in one store operation (clearing any lockout), and appends
    password_reset_completed.
"""

import hashlib
import secrets
from datetime import timedelta

from vigil.application.commands.auth_commands import (
    CompletePasswordReset,
    RequestPasswordReset,
)
from vigil.application.services import SecurityEventLedger
from vigil.core.clock import Clock, utc_now
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.errors import InvalidResetToken
from vigil.domain.events import PasswordResetCompleted, PasswordResetRequested
from vigil.domain.protocols import (
    LoggerProtocol,
    NotificationSenderProtocol,
    PasswordHashingProtocol,
    PrincipalRepository,
)
from vigil.domain.validators import normalize_login_key

RESET_TOKEN_BYTES = 32


def hash_reset_token(token: str) -> str:
    """SHA-256 hex digest of a raw reset token.

    Example:
        >>> len(hash_reset_token("a" * 64))
        64
    """
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RequestPasswordResetHandler:
    """Handler for RequestPasswordReset."""

    def __init__(
        self,
        principal_repo: PrincipalRepository,
        ledger: SecurityEventLedger,
        notifier: NotificationSenderProtocol,
        logger: LoggerProtocol,
        *,
        token_minutes: int = 60,
        clock: Clock = utc_now,
    ) -> None:
        self._principal_repo = principal_repo
        self._ledger = ledger
        self._notifier = notifier
        self._logger = logger
        self._token_minutes = token_minutes
        self._clock = clock

    async def handle(self, cmd: RequestPasswordReset) -> Result[None, DomainError]:
        """Issue a reset token if the principal exists.

        Returns:
            Success(None), always.
        """
        now = self._clock()
        log = self._logger.bind(correlation_id=cmd.context.correlation_id)

        principal = await self._principal_repo.find_by_login_key(
            normalize_login_key(cmd.login_key)
        )
        if principal is None or not principal.is_active:
            log.info("password_reset_requested_unknown_principal")
            return Success(value=None)

        token = secrets.token_hex(RESET_TOKEN_BYTES)
        expires_at = now + timedelta(minutes=self._token_minutes)
        await self._principal_repo.set_password_reset(
            principal.id,
            token_hash=hash_reset_token(token),
            expires_at=expires_at,
            now=now,
        )

        await self._ledger.append_event(
            principal.id,
            PasswordResetRequested.from_context(
                cmd.context, occurred_at=now, expires_at=expires_at
            ),
        )

        try:
            await self._notifier.send_password_reset(
                principal.id, principal.login_key, token, expires_at
            )
        except Exception as e:
            log.warning(
                "password_reset_delivery_failed",
                principal_id=str(principal.id),
                error=str(e),
            )

        return Success(value=None)


class CompletePasswordResetHandler:
    """Handler for CompletePasswordReset."""

    def __init__(
        self,
        principal_repo: PrincipalRepository,
        password_service: PasswordHashingProtocol,
        ledger: SecurityEventLedger,
        logger: LoggerProtocol,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._principal_repo = principal_repo
        self._password_service = password_service
        self._ledger = ledger
        self._logger = logger
        self._clock = clock

    async def handle(self, cmd: CompletePasswordReset) -> Result[None, DomainError]:
        """Replace the credential.

        Returns:
            Success(None) or Failure(InvalidResetToken).
        """
        now = self._clock()
        log = self._logger.bind(correlation_id=cmd.context.correlation_id)

        token_hash = hash_reset_token(cmd.token)
        principal = await self._principal_repo.find_by_reset_token_hash(token_hash)
        if principal is None:
            log.info("password_reset_rejected", reason="unknown_token")
            return Failure(error=InvalidResetToken(details={"reason": "unknown_token"}))

        if not principal.password_reset_valid(now):
            log.info(
                "password_reset_rejected",
                reason="expired_token",
                principal_id=str(principal.id),
            )
            return Failure(error=InvalidResetToken(details={"reason": "expired_token"}))

        applied = await self._principal_repo.complete_password_reset(
            principal.id,
            token_hash=token_hash,
            password_hash=self._password_service.hash_password(cmd.new_password),
            now=now,
        )
        if not applied:
            # Spent or replaced by a concurrent request since the lookup
            log.info(
                "password_reset_rejected",
                reason="token_consumed",
                principal_id=str(principal.id),
            )
            return Failure(error=InvalidResetToken(details={"reason": "token_consumed"}))

        await self._ledger.append_event(
            principal.id,
            PasswordResetCompleted.from_context(cmd.context, occurred_at=now),
        )
        return Success(value=None)
