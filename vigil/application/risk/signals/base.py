"""Risk signal protocol and scoring helpers.

A signal is an independent detector: it reads the SignalContext, returns
its capped sub-score and the reasons behind it, and never sees the other
signals' results. Signals needing data that could not be loaded return
Failure(SignalUnavailable); the engine turns that into a zero contribution.
"""

from typing import Protocol

from vigil.application.risk.context import SignalContext
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.entities import SignalScore
from vigil.domain.errors import SignalUnavailable


class RiskSignal(Protocol):
    """One risk detector."""

    name: str

    async def evaluate(self, ctx: SignalContext) -> Result[SignalScore, DomainError]:
        """Compute this signal's sub-score for the assessment."""
        ...


def capped_score(
    signal: str, cap: int, contributions: list[tuple[int, str]]
) -> Success[SignalScore]:
    """Sum (penalty, reason) contributions and cap the total."""
    total = sum(points for points, _ in contributions)
    return Success(
        value=SignalScore(
            signal=signal,
            score=min(cap, total),
            reasons=tuple(reason for _, reason in contributions),
        )
    )


def history_unavailable(signal: str) -> Failure[SignalUnavailable]:
    return Failure(
        error=SignalUnavailable(
            signal=signal,
            message="Security event history unavailable",
        )
    )
