"""Commands - Write operations that change state.

Commands are immutable dataclasses with imperative names
(AuthenticatePrincipal, CompletePasswordReset). Each has a handler in
``handlers/``.
"""

from vigil.application.commands.auth_commands import (
    AuthenticatePrincipal,
    CompletePasswordReset,
    CompleteSecondFactorLogin,
    RequestPasswordReset,
)

__all__ = [
    "AuthenticatePrincipal",
    "CompletePasswordReset",
    "CompleteSecondFactorLogin",
    "RequestPasswordReset",
]
