"""Security infrastructure adapters.

- Password hashing (bcrypt)
- TOTP secrets and verification (pyotp)
- Second-factor continuation tokens (PyJWT)
"""

from vigil.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from vigil.infrastructure.security.continuation_token_service import (
    JWTContinuationTokenService,
)
from vigil.infrastructure.security.totp_service import PyOTPService

__all__ = [
    "BcryptPasswordService",
    "JWTContinuationTokenService",
    "PyOTPService",
]
