"""Command handlers."""

from vigil.application.commands.handlers.authenticate_principal_handler import (
    AuthenticatePrincipalHandler,
)
from vigil.application.commands.handlers.complete_second_factor_login_handler import (
    CompleteSecondFactorLoginHandler,
)
from vigil.application.commands.handlers.password_reset_handlers import (
    CompletePasswordResetHandler,
    RequestPasswordResetHandler,
    hash_reset_token,
)

__all__ = [
    "AuthenticatePrincipalHandler",
    "CompletePasswordResetHandler",
    "CompleteSecondFactorLoginHandler",
    "RequestPasswordResetHandler",
    "hash_reset_token",
]
