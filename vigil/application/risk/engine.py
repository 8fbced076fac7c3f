"""Risk scoring engine.

Assesses a sensitive action for a principal by running six independent
signals (velocity, geographic, device, behavioral, network, temporal) and
aggregating their capped sub-scores into a clamped 0-100 score, a risk
level and a recommended action.

Flow:
1. Load the principal (unknown or unreadable: maximal-risk assessment)
2. Read the ledger history once (policy.history_lookback)
3. Run every signal concurrently under the shared deadline
4. Aggregate; log risk_assessment_completed
5. Score >= logging threshold: append suspicious_activity to the ledger

Degradation:
    A signal that fails, raises or overruns the deadline contributes zero
    and is logged as risk_signal_unavailable. The assessment itself is
    always returned; risk is never raised.
"""

import asyncio
from datetime import datetime
from uuid import UUID

from vigil.application.risk.context import SignalContext
from vigil.application.risk.policy import RiskPolicy
from vigil.application.risk.signals import RiskSignal
from vigil.application.services import SecurityEventLedger
from vigil.core.clock import Clock, utc_now
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.entities import Principal, RiskAssessment, SignalScore
from vigil.domain.enums import ActionType
from vigil.domain.errors import UnknownPrincipalCritical
from vigil.domain.events import SecurityEvent, SuspiciousActivityDetected
from vigil.domain.protocols import LoggerProtocol, PrincipalRepository
from vigil.domain.value_objects import RequestContext


class RiskScoringEngine:
    """Adaptive risk engine for sensitive actions."""

    def __init__(
        self,
        principal_repo: PrincipalRepository,
        ledger: SecurityEventLedger,
        signals: list[RiskSignal],
        logger: LoggerProtocol,
        *,
        policy: RiskPolicy | None = None,
        clock: Clock = utc_now,
    ) -> None:
        """Initialize engine with dependencies.

        Args:
            principal_repo: Principal lookup.
            ledger: History source and sink for suspicious_activity events.
            signals: Signals to run (see default_signals).
            logger: Structured logger.
            policy: Thresholds and penalties (defaults to RiskPolicy()).
            clock: Time source.
        """
        self._principal_repo = principal_repo
        self._ledger = ledger
        self._signals = signals
        self._logger = logger
        self._policy = policy or RiskPolicy()
        self._clock = clock

    @property
    def policy(self) -> RiskPolicy:
        return self._policy

    async def assess(
        self,
        principal_id: UUID,
        action_type: ActionType,
        context: RequestContext | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[RiskAssessment, DomainError]:
        """Assess one sensitive action.

        Args:
            principal_id: Principal performing the action.
            action_type: Action being assessed.
            context: Request metadata (address, signature, fingerprint,
                location, amount).
            timeout: Seconds allowed for history and cache lookups
                (defaults to policy.assessment_timeout_seconds).

        Returns:
            Always Success(RiskAssessment). Signal failures degrade to zero
            contributions; an unknown principal yields a critical assessment.

        Example:
            result = await engine.assess(principal.id, ActionType.PAYMENT, context)
            match result:
                case Success(value=assessment) if assessment.should_block:
                    ...
        """
        context = context or RequestContext()
        now = self._clock()
        seconds = (
            timeout if timeout is not None else self._policy.assessment_timeout_seconds
        )
        deadline = asyncio.get_running_loop().time() + seconds
        log = self._logger.bind(
            correlation_id=context.correlation_id,
            principal_id=str(principal_id),
            action_type=action_type.value,
        )

        loaded = await self._load_principal(principal_id, deadline, log)
        if isinstance(loaded, Failure):
            log.warning("risk_unknown_principal", **(loaded.error.details or {}))
            return Success(
                value=RiskAssessment.for_unknown_principal(
                    principal_id=principal_id,
                    action_type=action_type,
                    assessed_at=now,
                )
            )

        history = await self._load_history(principal_id, now, deadline, log)
        ctx = SignalContext(
            principal=loaded.value,
            action_type=action_type,
            request=context,
            now=now,
            policy=self._policy,
            history=history,
        )
        scores = await asyncio.gather(
            *(self._run_signal(signal, ctx, deadline, log) for signal in self._signals)
        )

        assessment = RiskAssessment.from_signals(
            principal_id=principal_id,
            action_type=action_type,
            signals=list(scores),
            assessed_at=now,
            block_threshold=self._policy.block_threshold,
            review_threshold=self._policy.review_threshold,
        )
        log.info(
            "risk_assessment_completed",
            risk_score=assessment.score,
            risk_level=assessment.risk_level.value,
            recommended_action=assessment.recommended_action.value,
            signal_scores={score.signal: score.score for score in assessment.signals},
        )

        if assessment.score >= self._policy.logging_threshold:
            await self._record_suspicious(principal_id, context, assessment, log)

        return Success(value=assessment)

    async def _load_principal(
        self, principal_id: UUID, deadline: float, log: LoggerProtocol
    ) -> Result[Principal, UnknownPrincipalCritical]:
        try:
            async with asyncio.timeout_at(deadline):
                principal = await self._principal_repo.find_by_id(principal_id)
        except TimeoutError:
            log.warning("risk_principal_lookup_timeout")
            return Failure(
                error=UnknownPrincipalCritical(details={"reason": "lookup_timeout"})
            )
        except Exception as e:
            log.error("risk_principal_lookup_failed", error=e)
            return Failure(
                error=UnknownPrincipalCritical(details={"reason": "lookup_failed"})
            )

        if principal is None:
            return Failure(
                error=UnknownPrincipalCritical(details={"reason": "not_found"})
            )
        return Success(value=principal)

    async def _load_history(
        self,
        principal_id: UUID,
        now: datetime,
        deadline: float,
        log: LoggerProtocol,
    ) -> tuple[SecurityEvent, ...] | None:
        """Read the ledger once for every history-based signal (None if unavailable)."""
        try:
            async with asyncio.timeout_at(deadline):
                result = await self._ledger.collect_events(
                    principal_id, now - self._policy.history_lookback
                )
        except TimeoutError:
            log.warning("risk_history_unavailable", reason="deadline_exceeded")
            return None

        if isinstance(result, Failure):
            log.warning("risk_history_unavailable", reason=result.error.message)
            return None
        return tuple(sorted(result.value, key=lambda event: event.occurred_at))

    async def _run_signal(
        self,
        signal: RiskSignal,
        ctx: SignalContext,
        deadline: float,
        log: LoggerProtocol,
    ) -> SignalScore:
        try:
            async with asyncio.timeout_at(deadline):
                result = await signal.evaluate(ctx)
        except TimeoutError:
            log.warning(
                "risk_signal_unavailable",
                signal=signal.name,
                reason="deadline_exceeded",
            )
            return SignalScore.zero(signal.name)
        except Exception as e:
            log.warning(
                "risk_signal_unavailable",
                signal=signal.name,
                reason="error",
                error=str(e),
            )
            return SignalScore.zero(signal.name)

        if isinstance(result, Failure):
            log.warning(
                "risk_signal_unavailable",
                signal=signal.name,
                reason=result.error.message,
            )
            return SignalScore.zero(signal.name)
        return result.value

    async def _record_suspicious(
        self,
        principal_id: UUID,
        context: RequestContext,
        assessment: RiskAssessment,
        log: LoggerProtocol,
    ) -> None:
        appended = await self._ledger.append_event(
            principal_id,
            SuspiciousActivityDetected.from_context(
                context,
                occurred_at=assessment.assessed_at,
                action_type=assessment.action_type,
                risk_score=assessment.score,
                risk_level=assessment.risk_level,
                risk_factors=assessment.reasons,
            ),
        )
        if isinstance(appended, Failure):
            log.error("suspicious_activity_not_recorded", error=appended.error.message)
