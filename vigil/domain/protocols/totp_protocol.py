"""Time-based one-time password protocol.

TOTP math (RFC 6238) is a standard primitive; the domain only needs to
create secrets and check codes against them.
"""

from datetime import datetime
from typing import Protocol


class TOTPProtocol(Protocol):
    """TOTP secret generation and code verification.

    Implementations:
        - PyOTPService: pyotp, 30-second steps, 6 digits
    """

    def generate_secret(self) -> str:
        """Generate a fresh base32 secret."""
        ...

    def provisioning_uri(self, secret: str, *, account_name: str, issuer: str) -> str:
        """Build the ``otpauth://`` URI an authenticator app scans."""
        ...

    def verify(self, secret: str, code: str, *, at: datetime) -> bool:
        """Check a code against the secret at time ``at``.

        Accepts codes within the adapter's drift tolerance either side of
        ``at``. Returns False (never raises) for malformed codes or secrets.
        """
        ...
