"""Device signal: unrecognized or missing fingerprints and automated clients."""

from vigil.application.risk.context import SignalContext
from vigil.application.risk.signals.base import capped_score, history_unavailable
from vigil.core.errors import DomainError
from vigil.core.result import Result
from vigil.domain.entities import SignalScore
from vigil.domain.protocols import ClientSignatureClassifierProtocol
from vigil.domain.value_objects import DeviceFingerprint


class DeviceSignal:
    """Checks the request fingerprint against recently seen fingerprints.

    A fingerprint never seen in the lookback window is unrecognized (this
    includes a principal with no history at all). When there is a previous
    fingerprint to compare with, each differing component adds a further
    penalty.
    """

    name = "device"

    def __init__(
        self, classifier: ClientSignatureClassifierProtocol | None = None
    ) -> None:
        self._classifier = classifier

    async def evaluate(self, ctx: SignalContext) -> Result[SignalScore, DomainError]:
        policy = ctx.policy
        contributions: list[tuple[int, str]] = []
        raw = ctx.request.device_fingerprint

        if not raw:
            contributions.append(
                (policy.device_missing_penalty, "Device fingerprint not available")
            )
        else:
            if ctx.history is None:
                return history_unavailable(self.name)
            known = [
                event.device_fingerprint
                for event in ctx.events_since(ctx.now - policy.device_lookback)
                if event.device_fingerprint
            ]
            if raw not in known:
                contributions.append(
                    (policy.device_unrecognized_penalty, "Unrecognized device")
                )
                if known:
                    changed = DeviceFingerprint.parse(raw).differing_components(
                        DeviceFingerprint.parse(known[-1])
                    )
                    if changed:
                        contributions.append(
                            (
                                policy.device_component_penalty * changed,
                                f"Device components changed: {changed}",
                            )
                        )

        user_agent = ctx.request.user_agent
        if user_agent and self._classifier and self._classifier.is_automated(user_agent):
            contributions.append(
                (policy.device_automated_agent_penalty, "Automated client signature")
            )

        return capped_score(self.name, policy.device_cap, contributions)
