"""Risk level and recommended action enums with their score step functions."""

from enum import Enum


class RiskLevel(str, Enum):
    """Coarse risk bucket derived from the aggregate score."""

    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_score(cls, score: int) -> "RiskLevel":
        """Map an aggregate score (0-100) to its level.

        Example:
            >>> RiskLevel.from_score(19)
            <RiskLevel.MINIMAL: 'minimal'>
            >>> RiskLevel.from_score(80)
            <RiskLevel.CRITICAL: 'critical'>
        """
        if score >= 80:
            return cls.CRITICAL
        if score >= 60:
            return cls.HIGH
        if score >= 40:
            return cls.MEDIUM
        if score >= 20:
            return cls.LOW
        return cls.MINIMAL


class RecommendedAction(str, Enum):
    """Highest-severity response whose threshold the score meets."""

    ALLOW = "allow"
    MONITOR_CLOSELY = "monitor_closely"
    FLAG_FOR_REVIEW = "flag_for_review"
    REQUIRE_ADDITIONAL_VERIFICATION = "require_additional_verification"
    BLOCK_TRANSACTION = "block_transaction"

    @classmethod
    def from_score(cls, score: int) -> "RecommendedAction":
        """Map an aggregate score (0-100) to the recommended response."""
        if score >= 80:
            return cls.BLOCK_TRANSACTION
        if score >= 60:
            return cls.REQUIRE_ADDITIONAL_VERIFICATION
        if score >= 40:
            return cls.FLAG_FOR_REVIEW
        if score >= 20:
            return cls.MONITOR_CLOSELY
        return cls.ALLOW
