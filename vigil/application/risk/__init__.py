"""Risk scoring engine and its signals."""

from vigil.application.risk.context import SignalContext
from vigil.application.risk.engine import RiskScoringEngine
from vigil.application.risk.policy import RiskPolicy
from vigil.application.risk.signals import RiskSignal, default_signals

__all__ = [
    "RiskPolicy",
    "RiskScoringEngine",
    "RiskSignal",
    "SignalContext",
    "default_signals",
]
