"""Client signature classifier protocol.

Classifies the client signature (User-Agent) of a request for the device
risk signal.
"""

from typing import Protocol


class ClientSignatureClassifierProtocol(Protocol):
    """User-Agent classifier.

    Implementations:
        - UserAgentClassifier: user-agents library
    """

    def is_automated(self, user_agent: str) -> bool:
        """Whether the signature identifies a bot, crawler or script."""
        ...
