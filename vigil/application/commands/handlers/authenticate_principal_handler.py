"""Authenticate principal handler.

Single responsibility: verify a login key and credential, enforce the
lockout policy, and decide whether a second factor is still needed. Does
NOT issue session credentials.

Flow:
1. Find active principal by normalised login key
2. Unknown/inactive: dummy bcrypt check, return NotFound
   (publicly identical to InvalidCredential)
3. Lock window open: append login_failed(account_locked), return Locked
4. Verify credential (bcrypt, constant time)
5. Mismatch: atomic increment (+ lock at threshold), append login_failed
   (+ account_locked), return InvalidCredential
6. Match: reset counter if nonzero
7. Second factor enabled: return SecondFactorChallenge with a
   continuation token
8. Otherwise: stamp last_login_at, append login_success, return
   AuthenticatedPrincipal

Lockout is a pure time-window policy: once locked_until passes the
principal can try again, and the next failure restarts the count at 1.
"""

import secrets

from vigil.application.commands.auth_commands import AuthenticatePrincipal
from vigil.application.dtos import (
    AuthenticatedPrincipal,
    LoginOutcome,
    SecondFactorChallenge,
)
from vigil.application.services import SecurityEventLedger, register_failed_attempt
from vigil.core.clock import Clock, utc_now
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.enums import LoginFailureReason, LoginMethod
from vigil.domain.errors import InvalidCredential, Locked, NotFound
from vigil.domain.events import LoginFailed, LoginSucceeded
from vigil.domain.protocols import (
    ContinuationTokenProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    PrincipalRepository,
)
from vigil.domain.validators import normalize_login_key


class AuthenticatePrincipalHandler:
    """Handler for AuthenticatePrincipal.

    Follows hexagonal architecture:
    - Application layer (this handler)
    - Domain layer (Principal entity, protocols)
    - Infrastructure layer (repositories and services via injection)
    """

    def __init__(
        self,
        principal_repo: PrincipalRepository,
        password_service: PasswordHashingProtocol,
        ledger: SecurityEventLedger,
        continuation_tokens: ContinuationTokenProtocol,
        logger: LoggerProtocol,
        *,
        max_failed_attempts: int = 5,
        lockout_minutes: int = 30,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize authentication handler with dependencies.

        Args:
            principal_repo: Principal persistence.
            password_service: Credential hashing/verification.
            ledger: Security event ledger.
            continuation_tokens: Issues second-factor continuation tokens.
            logger: Structured logger.
            max_failed_attempts: Failures that trigger the lock.
            lockout_minutes: Lock window length.
            clock: Time source.
        """
        self._principal_repo = principal_repo
        self._password_service = password_service
        self._ledger = ledger
        self._continuation_tokens = continuation_tokens
        self._logger = logger
        self._max_failed_attempts = max_failed_attempts
        self._lockout_minutes = lockout_minutes
        self._clock = clock
        self._dummy_hash: str | None = None

    async def handle(
        self, cmd: AuthenticatePrincipal
    ) -> Result[LoginOutcome, DomainError]:
        """Handle an authentication attempt.

        Returns:
            Success(AuthenticatedPrincipal) when no second factor is enabled,
            Success(SecondFactorChallenge) when one is, or
            Failure(NotFound | Locked | InvalidCredential).
        """
        now = self._clock()
        context = cmd.context
        login_key = normalize_login_key(cmd.login_key)
        log = self._logger.bind(correlation_id=context.correlation_id)

        principal = await self._principal_repo.find_by_login_key(login_key)
        if principal is None or not principal.is_active:
            # Same cost as a real check so timing does not reveal existence
            self._burn_verification(cmd.password)
            log.info(
                "login_failed",
                reason=LoginFailureReason.UNKNOWN_PRINCIPAL.value,
                ip_address=context.ip_address,
            )
            return Failure(
                error=NotFound(details={"reason": "unknown_or_inactive_principal"})
            )

        if principal.is_locked(now):
            await self._ledger.append_event(
                principal.id,
                LoginFailed.from_context(
                    context,
                    occurred_at=now,
                    reason=LoginFailureReason.ACCOUNT_LOCKED,
                ),
            )
            return Failure(error=Locked())

        if not self._password_service.verify_password(
            cmd.password, principal.password_hash
        ):
            await register_failed_attempt(
                principal=principal,
                context=context,
                reason=LoginFailureReason.INVALID_CREDENTIAL,
                principal_repo=self._principal_repo,
                ledger=self._ledger,
                logger=log,
                threshold=self._max_failed_attempts,
                lockout_minutes=self._lockout_minutes,
                now=now,
            )
            return Failure(error=InvalidCredential())

        if principal.failed_login_attempts > 0 or principal.locked_until is not None:
            await self._principal_repo.reset_failed_attempts(principal.id)

        if principal.second_factor_enabled:
            token, expires_at = self._continuation_tokens.issue(principal.id, now=now)
            log.info("second_factor_challenge_issued", principal_id=str(principal.id))
            return Success(
                value=SecondFactorChallenge(
                    principal_id=principal.id,
                    continuation_token=token,
                    expires_at=expires_at,
                )
            )

        await self._principal_repo.record_login(principal.id, now)
        await self._ledger.append_event(
            principal.id,
            LoginSucceeded.from_context(
                context, occurred_at=now, method=LoginMethod.PASSWORD
            ),
        )
        return Success(
            value=AuthenticatedPrincipal(
                principal_id=principal.id,
                login_key=principal.login_key,
                kind=principal.kind,
                method=LoginMethod.PASSWORD,
                authenticated_at=now,
            )
        )

    def _burn_verification(self, password: str) -> None:
        """Run one verification against a throwaway hash."""
        if self._dummy_hash is None:
            self._dummy_hash = self._password_service.hash_password(
                secrets.token_urlsafe(16)
            )
        self._password_service.verify_password(password, self._dummy_hash)
