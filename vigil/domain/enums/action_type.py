"""Sensitive action types submitted for risk assessment.

An action's class decides which historical events count as "the same kind
of action" for the velocity and rapid-repetition signals.
"""

from enum import Enum

from vigil.domain.enums.security_event_type import SecurityEventType


class ActionType(str, Enum):
    """Sensitive action being assessed."""

    LOGIN = "login"
    PAYMENT = "payment"
    TRANSACTION = "transaction"
    WITHDRAWAL = "withdrawal"
    TRANSFER = "transfer"
    PASSWORD_RESET = "password_reset"
    SECOND_FACTOR_CHANGE = "second_factor_change"
    PROFILE_UPDATE = "profile_update"

    @property
    def is_financial(self) -> bool:
        """Whether the action moves money (velocity counts amounts)."""
        return self in _FINANCIAL_ACTIONS

    @property
    def is_login(self) -> bool:
        """Whether the action is a login attempt."""
        return self is ActionType.LOGIN

    @property
    def event_types(self) -> frozenset[SecurityEventType]:
        """Ledger event types that record this kind of action."""
        return _ACTION_EVENT_TYPES.get(self, frozenset())


_FINANCIAL_ACTIONS = frozenset(
    {
        ActionType.PAYMENT,
        ActionType.TRANSACTION,
        ActionType.WITHDRAWAL,
        ActionType.TRANSFER,
    }
)

_ACTION_EVENT_TYPES: dict[ActionType, frozenset[SecurityEventType]] = {
    ActionType.LOGIN: frozenset(
        {SecurityEventType.LOGIN_SUCCESS, SecurityEventType.LOGIN_FAILED}
    ),
    ActionType.PAYMENT: frozenset({SecurityEventType.FINANCIAL_ACTION}),
    ActionType.TRANSACTION: frozenset({SecurityEventType.FINANCIAL_ACTION}),
    ActionType.WITHDRAWAL: frozenset({SecurityEventType.FINANCIAL_ACTION}),
    ActionType.TRANSFER: frozenset({SecurityEventType.FINANCIAL_ACTION}),
    ActionType.PASSWORD_RESET: frozenset(
        {
            SecurityEventType.PASSWORD_RESET_REQUESTED,
            SecurityEventType.PASSWORD_RESET_COMPLETED,
        }
    ),
    ActionType.SECOND_FACTOR_CHANGE: frozenset(
        {
            SecurityEventType.SECOND_FACTOR_ENABLED,
            SecurityEventType.SECOND_FACTOR_DISABLED,
        }
    ),
}
