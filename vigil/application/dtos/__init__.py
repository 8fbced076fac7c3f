"""Application DTOs."""

from vigil.application.dtos.auth_dtos import (
    AuthenticatedPrincipal,
    LoginOutcome,
    SecondFactorChallenge,
    SecondFactorEnrollment,
    require_authenticated,
)

__all__ = [
    "AuthenticatedPrincipal",
    "LoginOutcome",
    "SecondFactorChallenge",
    "SecondFactorEnrollment",
    "require_authenticated",
]
