"""Risk signals.

Usage:
    signals = default_signals(ip_cache=cache, logger=logger)
"""

from vigil.application.risk.signals.base import RiskSignal, capped_score
from vigil.application.risk.signals.behavioral import BehavioralSignal
from vigil.application.risk.signals.device import DeviceSignal
from vigil.application.risk.signals.geographic import GeographicSignal
from vigil.application.risk.signals.network import NetworkSignal
from vigil.application.risk.signals.temporal import TemporalSignal
from vigil.application.risk.signals.velocity import VelocitySignal
from vigil.domain.protocols import (
    ClientSignatureClassifierProtocol,
    GeolocationResolverProtocol,
    IPReputationCacheProtocol,
    LoggerProtocol,
)


def default_signals(
    *,
    ip_cache: IPReputationCacheProtocol,
    logger: LoggerProtocol,
    resolver: GeolocationResolverProtocol | None = None,
    classifier: ClientSignatureClassifierProtocol | None = None,
) -> list[RiskSignal]:
    """The six signals in reporting order."""
    return [
        VelocitySignal(),
        GeographicSignal(resolver),
        DeviceSignal(classifier),
        BehavioralSignal(),
        NetworkSignal(ip_cache, logger),
        TemporalSignal(),
    ]


__all__ = [
    "BehavioralSignal",
    "DeviceSignal",
    "GeographicSignal",
    "NetworkSignal",
    "RiskSignal",
    "TemporalSignal",
    "VelocitySignal",
    "capped_score",
    "default_signals",
]
