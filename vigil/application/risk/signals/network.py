"""Network signal: private or suspicious addresses, through the IP cache."""

import ipaddress
import re

from vigil.application.risk.context import SignalContext
from vigil.application.risk.signals.base import capped_score
from vigil.core.errors import DomainError
from vigil.core.result import Failure, Result, Success
from vigil.domain.entities import SignalScore
from vigil.domain.protocols import (
    IPReputationCacheProtocol,
    IPReputationEntry,
    LoggerProtocol,
)


class NetworkSignal:
    """Scores the request address, caching the result per address.

    Cache failures are a miss: the score is computed anyway.
    """

    name = "network"

    def __init__(self, cache: IPReputationCacheProtocol, logger: LoggerProtocol) -> None:
        self._cache = cache
        self._logger = logger

    async def evaluate(self, ctx: SignalContext) -> Result[SignalScore, DomainError]:
        policy = ctx.policy
        address = ctx.request.ip_address
        if not address:
            return capped_score(self.name, policy.network_cap, [])

        cached = await self._cache.get(address)
        match cached:
            case Success(value=IPReputationEntry() as entry):
                return Success(
                    value=SignalScore(
                        signal=self.name, score=entry.score, reasons=entry.reasons
                    )
                )
            case Failure(error=error):
                self._logger.warning(
                    "ip_reputation_cache_unavailable",
                    ip_address=address,
                    error_code=error.code.value,
                )
            case _:
                pass

        scored = capped_score(self.name, policy.network_cap, self._score(ctx, address))
        result = scored.value
        stored = await self._cache.set(
            IPReputationEntry(
                address=address,
                score=result.score,
                reasons=result.reasons,
                cached_at=ctx.now,
            )
        )
        if isinstance(stored, Failure):
            self._logger.warning(
                "ip_reputation_cache_write_failed",
                ip_address=address,
                error_code=stored.error.code.value,
            )
        return scored

    def _score(self, ctx: SignalContext, address: str) -> list[tuple[int, str]]:
        policy = ctx.policy
        contributions: list[tuple[int, str]] = []
        if _is_private(address):
            contributions.append(
                (policy.network_private_penalty, "Private or reserved network address")
            )
        if any(re.search(pattern, address) for pattern in policy.suspicious_ip_patterns):
            contributions.append(
                (policy.network_suspicious_penalty, "Suspicious network address")
            )
        return contributions


def _is_private(address: str) -> bool:
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    return ip.is_private or ip.is_reserved or ip.is_loopback or ip.is_link_local
