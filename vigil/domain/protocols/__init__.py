"""Domain protocols (ports) package.

Protocol definitions the domain and application layers need.
Infrastructure adapters implement these protocols without inheritance.

Usage:
    from vigil.domain.protocols import PasswordHashingProtocol, PrincipalRepository
"""

# Service protocols
from vigil.domain.protocols.client_signature_protocol import (
    ClientSignatureClassifierProtocol,
)
from vigil.domain.protocols.continuation_token_protocol import (
    ContinuationTokenProtocol,
)
from vigil.domain.protocols.geolocation_resolver_protocol import (
    GeolocationResolverProtocol,
)
from vigil.domain.protocols.ip_reputation_cache_protocol import (
    IPReputationCacheProtocol,
    IPReputationEntry,
)
from vigil.domain.protocols.logger_protocol import LoggerProtocol
from vigil.domain.protocols.notification_sender_protocol import (
    NotificationSenderProtocol,
)
from vigil.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from vigil.domain.protocols.session_issuer_protocol import SessionIssuerProtocol
from vigil.domain.protocols.totp_protocol import TOTPProtocol

# Repository protocols
from vigil.domain.protocols.principal_repository import PrincipalRepository
from vigil.domain.protocols.security_event_store import SecurityEventStore

__all__ = [
    # Service protocols
    "ClientSignatureClassifierProtocol",
    "ContinuationTokenProtocol",
    "GeolocationResolverProtocol",
    "IPReputationCacheProtocol",
    "IPReputationEntry",
    "LoggerProtocol",
    "NotificationSenderProtocol",
    "PasswordHashingProtocol",
    "SessionIssuerProtocol",
    "TOTPProtocol",
    # Repository protocols
    "PrincipalRepository",
    "SecurityEventStore",
]
