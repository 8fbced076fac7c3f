"""Complete second-factor login handler.

Second step of a login for principals with a second factor enabled.

Flow:
1. Validate the continuation token (signature, purpose, expiry)
2. Load the active principal it names
3. Lock window open: append login_failed(account_locked), return Locked
4. Check the code as TOTP, then as a backup code (one uniform failure)
5. Failure: append login_failed(invalid_second_factor); optionally count
   it as a failed login attempt (policy flag)
6. Success: stamp last_login_at, append login_success (totp or
   backup_code), return AuthenticatedPrincipal
"""

from vigil.application.commands.auth_commands import CompleteSecondFactorLogin
from vigil.application.dtos import AuthenticatedPrincipal
from vigil.application.services import (
    SecondFactorVerifier,
    SecurityEventLedger,
    register_failed_attempt,
)
from vigil.core.clock import Clock, utc_now
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.enums import LoginFailureReason
from vigil.domain.errors import InvalidContinuationToken, Locked
from vigil.domain.events import LoginFailed, LoginSucceeded
from vigil.domain.protocols import (
    ContinuationTokenProtocol,
    LoggerProtocol,
    PrincipalRepository,
)


class CompleteSecondFactorLoginHandler:
    """Handler for CompleteSecondFactorLogin."""

    def __init__(
        self,
        principal_repo: PrincipalRepository,
        verifier: SecondFactorVerifier,
        ledger: SecurityEventLedger,
        continuation_tokens: ContinuationTokenProtocol,
        logger: LoggerProtocol,
        *,
        failure_counts_as_attempt: bool = False,
        max_failed_attempts: int = 5,
        lockout_minutes: int = 30,
        clock: Clock = utc_now,
    ) -> None:
        self._principal_repo = principal_repo
        self._verifier = verifier
        self._ledger = ledger
        self._continuation_tokens = continuation_tokens
        self._logger = logger
        self._failure_counts_as_attempt = failure_counts_as_attempt
        self._max_failed_attempts = max_failed_attempts
        self._lockout_minutes = lockout_minutes
        self._clock = clock

    async def handle(
        self, cmd: CompleteSecondFactorLogin
    ) -> Result[AuthenticatedPrincipal, DomainError]:
        """Handle the second login step.

        Returns:
            Success(AuthenticatedPrincipal) or Failure(InvalidContinuationToken
            | Locked | InvalidSecondFactor | SecondFactorNotEnabled).
        """
        now = self._clock()
        context = cmd.context
        log = self._logger.bind(correlation_id=context.correlation_id)

        verified = self._continuation_tokens.verify(cmd.continuation_token, now=now)
        if isinstance(verified, Failure):
            log.info("continuation_token_rejected", details=verified.error.details)
            return Failure(error=verified.error)
        principal_id = verified.value

        principal = await self._principal_repo.find_by_id(principal_id)
        if principal is None or not principal.is_active:
            return Failure(
                error=InvalidContinuationToken(details={"reason": "unknown_principal"})
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

        checked = await self._verifier.verify_any(principal, cmd.code, context)
        if isinstance(checked, Failure):
            if self._failure_counts_as_attempt:
                await register_failed_attempt(
                    principal=principal,
                    context=context,
                    reason=LoginFailureReason.INVALID_SECOND_FACTOR,
                    principal_repo=self._principal_repo,
                    ledger=self._ledger,
                    logger=log,
                    threshold=self._max_failed_attempts,
                    lockout_minutes=self._lockout_minutes,
                    now=now,
                )
            else:
                await self._ledger.append_event(
                    principal.id,
                    LoginFailed.from_context(
                        context,
                        occurred_at=now,
                        reason=LoginFailureReason.INVALID_SECOND_FACTOR,
                    ),
                )
            return Failure(error=checked.error)
        method = checked.value

        await self._principal_repo.record_login(principal.id, now)
        await self._ledger.append_event(
            principal.id,
            LoginSucceeded.from_context(context, occurred_at=now, method=method),
        )
        return Success(
            value=AuthenticatedPrincipal(
                principal_id=principal.id,
                login_key=principal.login_key,
                kind=principal.kind,
                method=method,
                authenticated_at=now,
            )
        )
