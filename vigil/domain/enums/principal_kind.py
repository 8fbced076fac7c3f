"""Principal kinds served by the platform."""

from enum import Enum


class PrincipalKind(str, Enum):
    """Kind of authenticated identity.

    BUSINESS principals get the weekend-activity check in the temporal
    risk signal.
    """

    CUSTOMER = "customer"
    BUSINESS = "business"
    OPERATOR = "operator"
