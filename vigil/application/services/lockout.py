"""Failed-attempt bookkeeping shared by every credential check."""

from datetime import datetime

from vigil.application.services.security_event_ledger import SecurityEventLedger
from vigil.domain.entities import LockoutState, Principal, lock_expiry
from vigil.domain.enums import LoginFailureReason
from vigil.domain.events import AccountLocked, LoginFailed
from vigil.domain.protocols import LoggerProtocol, PrincipalRepository
from vigil.domain.value_objects import RequestContext


async def register_failed_attempt(
    *,
    principal: Principal,
    context: RequestContext,
    reason: LoginFailureReason,
    principal_repo: PrincipalRepository,
    ledger: SecurityEventLedger,
    logger: LoggerProtocol,
    threshold: int,
    lockout_minutes: int,
    now: datetime,
) -> LockoutState | None:
    """Increment the counter atomically and record the outcome.

    Appends login_failed, plus account_locked when this attempt crossed the
    threshold.
    """
    state = await principal_repo.increment_failed_attempts(
        principal.id,
        threshold=threshold,
        lock_until=lock_expiry(now, lockout_minutes),
        now=now,
    )

    await ledger.append_event(
        principal.id,
        LoginFailed.from_context(context, occurred_at=now, reason=reason),
    )

    if state is not None and state.locked_now and state.locked_until is not None:
        logger.warning(
            "account_locked",
            principal_id=str(principal.id),
            failed_login_attempts=state.failed_login_attempts,
            correlation_id=context.correlation_id,
        )
        await ledger.append_event(
            principal.id,
            AccountLocked.from_context(
                context, occurred_at=now, locked_until=state.locked_until
            ),
        )
    return state
