"""TOTP service (adapter) backed by pyotp.

Implements TOTPProtocol: RFC 6238 codes, 30-second steps, 6 digits.
Accepts codes up to ``valid_window`` steps either side of the verification
time to absorb client clock drift.
"""

import binascii
from datetime import datetime

import pyotp


class PyOTPService:
    """pyotp-backed TOTP secrets and verification.

    Usage:
        totp = PyOTPService(valid_window=2)
        secret = totp.generate_secret()
        uri = totp.provisioning_uri(secret, account_name="a@example.com", issuer="Vigil")
        totp.verify(secret, "123456", at=now)
    """

    def __init__(self, valid_window: int = 2) -> None:
        """Initialize TOTP service.

        Args:
            valid_window: Accepted drift in steps either side.

        Raises:
            ValueError: If valid_window is negative.
        """
        if valid_window < 0:
            msg = "valid_window must not be negative"
            raise ValueError(msg)
        self._valid_window = valid_window

    def generate_secret(self) -> str:
        """Generate a fresh 32-character base32 secret."""
        return pyotp.random_base32()

    def provisioning_uri(self, secret: str, *, account_name: str, issuer: str) -> str:
        """Build the otpauth:// URI for authenticator apps."""
        return pyotp.TOTP(secret).provisioning_uri(
            name=account_name, issuer_name=issuer
        )

    def current_code(self, secret: str, *, at: datetime) -> str:
        """Code for the step containing ``at`` (used by enrollment tooling and tests)."""
        return pyotp.TOTP(secret).at(at)

    def verify(self, secret: str, code: str, *, at: datetime) -> bool:
        """Check a code against the secret at time ``at``.

        Returns False for malformed codes or secrets instead of raising.
        """
        candidate = code.strip().replace(" ", "")
        if not candidate.isdigit():
            return False
        try:
            return pyotp.TOTP(secret).verify(
                candidate, for_time=at, valid_window=self._valid_window
            )
        except (binascii.Error, ValueError, TypeError):
            return False
