"""Unit tests for RiskAssessment aggregation and the score step functions."""

from uuid_extensions import uuid7

import pytest

from tests.conftest import WEEKDAY_NOON
from vigil.domain.entities import RiskAssessment, SignalScore, clamp_score
from vigil.domain.enums import ActionType, RecommendedAction, RiskLevel


def assess(*scores: int) -> RiskAssessment:
    return RiskAssessment.from_signals(
        principal_id=uuid7(),
        action_type=ActionType.PAYMENT,
        signals=[
            SignalScore(signal=f"signal_{i}", score=score, reasons=(f"reason {i}",))
            for i, score in enumerate(scores)
        ],
        assessed_at=WEEKDAY_NOON,
    )


@pytest.mark.unit
class TestScoreStepFunctions:
    """Test level and action boundaries."""

    @pytest.mark.parametrize(
        "score,level",
        [
            (0, RiskLevel.MINIMAL),
            (19, RiskLevel.MINIMAL),
            (20, RiskLevel.LOW),
            (39, RiskLevel.LOW),
            (40, RiskLevel.MEDIUM),
            (59, RiskLevel.MEDIUM),
            (60, RiskLevel.HIGH),
            (79, RiskLevel.HIGH),
            (80, RiskLevel.CRITICAL),
            (100, RiskLevel.CRITICAL),
        ],
    )
    def test_risk_level_boundaries(self, score, level):
        assert RiskLevel.from_score(score) is level

    @pytest.mark.parametrize(
        "score,action",
        [
            (19, RecommendedAction.ALLOW),
            (20, RecommendedAction.MONITOR_CLOSELY),
            (40, RecommendedAction.FLAG_FOR_REVIEW),
            (60, RecommendedAction.REQUIRE_ADDITIONAL_VERIFICATION),
            (80, RecommendedAction.BLOCK_TRANSACTION),
        ],
    )
    def test_recommended_action_boundaries(self, score, action):
        assert RecommendedAction.from_score(score) is action


@pytest.mark.unit
class TestRiskAssessment:
    """Test aggregation."""

    def test_scores_are_summed(self):
        assessment = assess(20, 8)

        assert assessment.score == 28
        assert assessment.risk_level is RiskLevel.LOW
        assert assessment.recommended_action is RecommendedAction.MONITOR_CLOSELY
        assert assessment.should_block is False
        assert assessment.requires_review is False

    def test_aggregate_clamped_to_100(self):
        assessment = assess(55, 40, 40)

        assert assessment.score == 100
        assert assessment.should_block is True

    def test_review_and_block_flags(self):
        assert assess(60).requires_review is True
        assert assess(60).should_block is False
        assert assess(80).should_block is True

    def test_custom_thresholds(self):
        assessment = RiskAssessment.from_signals(
            principal_id=uuid7(),
            action_type=ActionType.PAYMENT,
            signals=[SignalScore(signal="velocity", score=45)],
            assessed_at=WEEKDAY_NOON,
            block_threshold=90,
            review_threshold=45,
        )

        assert assessment.requires_review is True
        assert assessment.should_block is False
        assert assessment.risk_level is RiskLevel.MEDIUM

    def test_reasons_collected_in_signal_order(self):
        assessment = assess(5, 0, 10)

        assert assessment.reasons == ("reason 0", "reason 1", "reason 2")

    def test_signal_lookup_by_name(self):
        assessment = assess(5, 7)

        assert assessment.signal("signal_1").score == 7
        assert assessment.signal("missing") is None

    def test_unknown_principal_is_maximal(self):
        assessment = RiskAssessment.for_unknown_principal(
            principal_id=uuid7(), action_type=ActionType.LOGIN, assessed_at=WEEKDAY_NOON
        )

        assert assessment.score == 100
        assert assessment.risk_level is RiskLevel.CRITICAL
        assert assessment.should_block is True
        assert assessment.unknown_principal is True

    @pytest.mark.parametrize("raw,expected", [(-5, 0), (0, 0), (57, 57), (140, 100)])
    def test_clamp_score(self, raw, expected):
        assert clamp_score(raw) == expected
