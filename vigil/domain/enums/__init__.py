"""Domain enums package."""

from vigil.domain.enums.action_type import ActionType
from vigil.domain.enums.principal_kind import PrincipalKind
from vigil.domain.enums.risk_level import RecommendedAction, RiskLevel
from vigil.domain.enums.security_event_type import (
    LoginFailureReason,
    LoginMethod,
    SecurityEventType,
)

__all__ = [
    "ActionType",
    "LoginFailureReason",
    "LoginMethod",
    "PrincipalKind",
    "RecommendedAction",
    "RiskLevel",
    "SecurityEventType",
]
