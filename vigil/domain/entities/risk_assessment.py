"""Risk assessment result.

Transient value produced per request by the risk scoring engine and
discarded once the caller has acted on it. Risk is a value, not an
exception: even a blocking decision is returned, never raised.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from vigil.domain.enums import ActionType, RecommendedAction, RiskLevel

MAX_RISK_SCORE = 100
MIN_RISK_SCORE = 0
DEFAULT_BLOCK_THRESHOLD = 80
DEFAULT_REVIEW_THRESHOLD = 60


@dataclass(frozen=True, slots=True, kw_only=True)
class SignalScore:
    """Contribution of one risk signal.

    Attributes:
        signal: Signal name (velocity, geographic, device, behavioral,
            network, temporal).
        score: Sub-score after the signal's own cap.
        reasons: Human-readable factors that produced the score.
    """

    signal: str
    score: int
    reasons: tuple[str, ...] = ()

    @classmethod
    def zero(cls, signal: str) -> "SignalScore":
        """A signal that found nothing (or could not run)."""
        return cls(signal=signal, score=0)


def clamp_score(raw: int) -> int:
    """Clamp an aggregate score into [0, 100]."""
    return max(MIN_RISK_SCORE, min(MAX_RISK_SCORE, raw))


@dataclass(frozen=True, slots=True, kw_only=True)
class RiskAssessment:
    """Decision for one sensitive action.

    Attributes:
        principal_id: Principal the action belongs to.
        action_type: Action assessed.
        signals: Per-signal sub-scores (zero-contribution signals included).
        score: Aggregate score, clamped to [0, 100].
        risk_level: Step function of score.
        should_block: score >= block threshold (default 80).
        requires_review: score >= review threshold (default 60).
        recommended_action: Highest-severity label whose threshold score meets.
        assessed_at: When the assessment was produced.
        unknown_principal: True for the maximal-risk fallback assessment.
    """

    principal_id: UUID
    action_type: ActionType
    signals: tuple[SignalScore, ...]
    score: int
    risk_level: RiskLevel
    should_block: bool
    requires_review: bool
    recommended_action: RecommendedAction
    assessed_at: datetime
    unknown_principal: bool = False
    reasons: tuple[str, ...] = field(default=())

    @classmethod
    def from_signals(
        cls,
        *,
        principal_id: UUID,
        action_type: ActionType,
        signals: list[SignalScore],
        assessed_at: datetime,
        block_threshold: int = DEFAULT_BLOCK_THRESHOLD,
        review_threshold: int = DEFAULT_REVIEW_THRESHOLD,
    ) -> "RiskAssessment":
        """Aggregate signal scores into a decision.

        The block and review flags use the given thresholds; the risk level
        and recommended action stay fixed step functions of the score.

        Example:
            >>> assessment = RiskAssessment.from_signals(
            ...     principal_id=pid,
            ...     action_type=ActionType.LOGIN,
            ...     signals=[SignalScore(signal="device", score=20, reasons=("Unrecognized device",))],
            ...     assessed_at=now,
            ... )
            >>> assessment.risk_level
            <RiskLevel.LOW: 'low'>
        """
        score = clamp_score(sum(signal.score for signal in signals))
        reasons = tuple(reason for signal in signals for reason in signal.reasons)
        return cls(
            principal_id=principal_id,
            action_type=action_type,
            signals=tuple(signals),
            score=score,
            risk_level=RiskLevel.from_score(score),
            should_block=score >= block_threshold,
            requires_review=score >= review_threshold,
            recommended_action=RecommendedAction.from_score(score),
            assessed_at=assessed_at,
            reasons=reasons,
        )

    @classmethod
    def for_unknown_principal(
        cls,
        *,
        principal_id: UUID,
        action_type: ActionType,
        assessed_at: datetime,
    ) -> "RiskAssessment":
        """Maximal-risk decision used when the principal cannot be loaded."""
        return cls(
            principal_id=principal_id,
            action_type=action_type,
            signals=(),
            score=MAX_RISK_SCORE,
            risk_level=RiskLevel.CRITICAL,
            should_block=True,
            requires_review=True,
            recommended_action=RecommendedAction.BLOCK_TRANSACTION,
            assessed_at=assessed_at,
            unknown_principal=True,
            reasons=("Unknown principal",),
        )

    def signal(self, name: str) -> SignalScore | None:
        """Look up a signal's contribution by name."""
        for signal in self.signals:
            if signal.signal == name:
                return signal
        return None
