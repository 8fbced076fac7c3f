"""Second-factor verifier.

TOTP (RFC 6238, ±2 steps of drift) plus single-use backup codes.

Rules:
    - A TOTP mismatch appends second_factor_failed; it never locks the
      account (lockout is driven by the credential step only)
    - Backup codes are consumed by one atomic store operation; a replayed
      code fails with AlreadyUsedBackupCode, publicly identical to
      InvalidSecondFactor
    - Enabling verifies the candidate code against the candidate secret
      before anything is persisted
    - Disabling needs the current password and a current TOTP code; it is
      refused while the account is locked, a wrong password counts toward
      lockout, and either wrong answer yields the same InvalidCredential

Failed checks record no detail about which check failed.
"""

import secrets

from vigil.application.dtos import SecondFactorEnrollment
from vigil.application.services.lockout import register_failed_attempt
from vigil.application.services.security_event_ledger import SecurityEventLedger
from vigil.core.clock import Clock, utc_now
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.entities import BackupCodeConsumption, Principal
from vigil.domain.enums import LoginFailureReason, LoginMethod
from vigil.domain.errors import (
    AlreadyUsedBackupCode,
    InvalidCredential,
    InvalidSecondFactor,
    Locked,
    SecondFactorAlreadyEnabled,
    SecondFactorNotEnabled,
)
from vigil.domain.events import (
    SecondFactorDisabled,
    SecondFactorEnabled,
    SecondFactorFailed,
)
from vigil.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    PrincipalRepository,
    TOTPProtocol,
)
from vigil.domain.value_objects import RequestContext

BACKUP_CODE_BYTES = 4


def generate_backup_codes(count: int) -> list[str]:
    """Generate single-use backup codes (8 upper-case hex characters each).

    Example:
        >>> codes = generate_backup_codes(10)
        >>> len(codes), len(codes[0])
        (10, 8)
    """
    return [secrets.token_hex(BACKUP_CODE_BYTES).upper() for _ in range(count)]


class SecondFactorVerifier:
    """TOTP and backup code verification, enrollment and removal.

    Usage:
        verifier = SecondFactorVerifier(
            principal_repo=repo,
            ledger=ledger,
            totp=PyOTPService(valid_window=2),
            password_service=password_service,
            logger=logger,
            issuer="Vigil",
        )
        result = await verifier.verify_time_based_code(principal, "123456")
    """

    def __init__(
        self,
        principal_repo: PrincipalRepository,
        ledger: SecurityEventLedger,
        totp: TOTPProtocol,
        password_service: PasswordHashingProtocol,
        logger: LoggerProtocol,
        *,
        issuer: str = "Vigil",
        backup_code_count: int = 10,
        max_failed_attempts: int = 5,
        lockout_minutes: int = 30,
        clock: Clock = utc_now,
    ) -> None:
        self._principal_repo = principal_repo
        self._ledger = ledger
        self._totp = totp
        self._password_service = password_service
        self._logger = logger
        self._issuer = issuer
        self._backup_code_count = backup_code_count
        self._max_failed_attempts = max_failed_attempts
        self._lockout_minutes = lockout_minutes
        self._clock = clock

    async def verify_time_based_code(
        self,
        principal: Principal,
        code: str,
        context: RequestContext | None = None,
    ) -> Result[None, DomainError]:
        """Check a TOTP code.

        Returns:
            Success(None), Failure(SecondFactorNotEnabled) or
            Failure(InvalidSecondFactor).
        """
        if not principal.second_factor_enabled or not principal.second_factor_secret:
            return Failure(error=SecondFactorNotEnabled())

        if self._check_totp(principal, code):
            return Success(value=None)

        await self._record_failure(principal, context)
        return Failure(error=InvalidSecondFactor())

    async def verify_backup_code(
        self,
        principal: Principal,
        code: str,
        context: RequestContext | None = None,
    ) -> Result[None, DomainError]:
        """Check and consume a backup code.

        Returns:
            Success(None), Failure(SecondFactorNotEnabled),
            Failure(AlreadyUsedBackupCode) or Failure(InvalidSecondFactor).
        """
        if not principal.second_factor_enabled:
            return Failure(error=SecondFactorNotEnabled())

        outcome = await self._principal_repo.consume_backup_code(principal.id, code)
        match outcome:
            case BackupCodeConsumption.CONSUMED:
                self._logger.info("backup_code_used", principal_id=str(principal.id))
                return Success(value=None)
            case BackupCodeConsumption.ALREADY_USED:
                await self._record_failure(principal, context)
                return Failure(error=AlreadyUsedBackupCode())
            case _:
                await self._record_failure(principal, context)
                return Failure(error=InvalidSecondFactor())

    async def verify_any(
        self,
        principal: Principal,
        code: str,
        context: RequestContext | None = None,
    ) -> Result[LoginMethod, DomainError]:
        """Check a code as TOTP first, then as a backup code.

        Appends at most one second_factor_failed and returns one uniform
        InvalidSecondFactor whichever check failed.
        """
        if not principal.second_factor_enabled or not principal.second_factor_secret:
            return Failure(error=SecondFactorNotEnabled())

        if self._check_totp(principal, code):
            return Success(value=LoginMethod.TOTP)

        outcome = await self._principal_repo.consume_backup_code(principal.id, code)
        if outcome is BackupCodeConsumption.CONSUMED:
            self._logger.info("backup_code_used", principal_id=str(principal.id))
            return Success(value=LoginMethod.BACKUP_CODE)

        await self._record_failure(principal, context)
        return Failure(error=InvalidSecondFactor())

    async def begin_enrollment(
        self, principal: Principal
    ) -> Result[SecondFactorEnrollment, DomainError]:
        """Create a candidate secret and its provisioning URI.

        Nothing is persisted; the secret only takes effect through
        enable_second_factor.
        """
        if principal.second_factor_enabled:
            return Failure(error=SecondFactorAlreadyEnabled())

        secret = self._totp.generate_secret()
        uri = self._totp.provisioning_uri(
            secret, account_name=principal.login_key, issuer=self._issuer
        )
        return Success(value=SecondFactorEnrollment(secret=secret, provisioning_uri=uri))

    async def enable_second_factor(
        self,
        principal: Principal,
        secret: str,
        candidate_code: str,
        context: RequestContext | None = None,
    ) -> Result[list[str], DomainError]:
        """Persist a verified secret and issue fresh backup codes.

        Returns:
            Success(backup codes, shown to the user once) or
            Failure(SecondFactorAlreadyEnabled | InvalidSecondFactor).
        """
        if principal.second_factor_enabled:
            return Failure(error=SecondFactorAlreadyEnabled())

        if not self._totp.verify(secret, candidate_code, at=self._clock()):
            self._logger.warning(
                "second_factor_enrollment_rejected", principal_id=str(principal.id)
            )
            return Failure(error=InvalidSecondFactor())

        codes = generate_backup_codes(self._backup_code_count)
        enabled = await self._principal_repo.enable_second_factor(
            principal.id, secret=secret, backup_codes=codes, now=self._clock()
        )
        if not enabled:
            # Enabled by a concurrent request since the snapshot was read
            return Failure(error=SecondFactorAlreadyEnabled())

        await self._ledger.append_event(
            principal.id,
            SecondFactorEnabled.from_context(
                context or RequestContext(),
                occurred_at=self._clock(),
                backup_code_count=len(codes),
            ),
        )
        return Success(value=codes)

    async def disable_second_factor(
        self,
        principal: Principal,
        current_password: str,
        current_code: str,
        context: RequestContext | None = None,
    ) -> Result[None, DomainError]:
        """Remove the secret and every backup code.

        Both checks always run, and a wrong password or a wrong code fails
        with the same InvalidCredential, so the response never confirms the
        password on its own.

        Returns:
            Success(None) or Failure(SecondFactorNotEnabled | Locked |
            InvalidCredential).
        """
        now = self._clock()
        ctx = context or RequestContext()

        # Lock state is read from the store, not the caller's snapshot
        stored = await self._principal_repo.find_by_id(principal.id)
        if stored is None or not stored.second_factor_enabled:
            return Failure(error=SecondFactorNotEnabled())
        if stored.is_locked(now):
            self._logger.warning(
                "second_factor_disable_rejected",
                principal_id=str(stored.id),
                reason="account_locked",
            )
            return Failure(error=Locked())

        password_ok = self._password_service.verify_password(
            current_password, stored.password_hash
        )
        code_ok = self._check_totp(stored, current_code)

        if not password_ok:
            await register_failed_attempt(
                principal=stored,
                context=ctx,
                reason=LoginFailureReason.INVALID_CREDENTIAL,
                principal_repo=self._principal_repo,
                ledger=self._ledger,
                logger=self._logger,
                threshold=self._max_failed_attempts,
                lockout_minutes=self._lockout_minutes,
                now=now,
            )
        if not code_ok:
            await self._record_failure(stored, ctx)
        if not (password_ok and code_ok):
            return Failure(error=InvalidCredential())

        await self._principal_repo.disable_second_factor(stored.id, now=now)

        await self._ledger.append_event(
            stored.id, SecondFactorDisabled.from_context(ctx, occurred_at=now)
        )
        return Success(value=None)

    def _check_totp(self, principal: Principal, code: str) -> bool:
        if not principal.second_factor_secret:
            return False
        return self._totp.verify(principal.second_factor_secret, code, at=self._clock())

    async def _record_failure(
        self, principal: Principal, context: RequestContext | None
    ) -> None:
        self._logger.warning("second_factor_failed", principal_id=str(principal.id))
        await self._ledger.append_event(
            principal.id,
            SecondFactorFailed.from_context(
                context or RequestContext(), occurred_at=self._clock()
            ),
        )
