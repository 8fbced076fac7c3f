"""Result types for railway-oriented programming.

Every operation exposed by Vigil returns a Result instead of raising or
signalling failure through truthy/falsy values. Errors are plain data
(DomainError subclasses) and the caller pattern-matches on the outcome.

Usage:
    result = await authenticate.handle(cmd)
    match result:
        case Success(value=AuthenticatedPrincipal() as principal):
            token = await session_issuer.issue(principal.principal_id)
        case Success(value=SecondFactorChallenge() as challenge):
            prompt_for_code(challenge.continuation_token)
        case Failure(error=error):
            respond(error.code, error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Outcome of an operation that completed.

    Attributes:
        value: The produced value (may be None for command-style operations).
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Outcome of an operation that was refused or could not complete.

    Attributes:
        error: Typed error describing why.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
