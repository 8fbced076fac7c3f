"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol using bcrypt.

Security:
    - Cost factor from settings (default 12, ~250ms per hash)
    - checkpw compares in constant time
    - Callers run a verification against a fixed dummy hash when a login
      key is unknown, so unknown and wrong-password paths take equal time
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from vigil.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("SecurePass123!")
        is_valid = password_service.verify_password("SecurePass123!", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (logarithmic: each +1 doubles time).

        Raises:
            ValueError: If cost factor is outside 10-20.
        """
        if cost_factor < 10:
            msg = "Cost factor must be at least 10 for security"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Returns:
            Hash string in bcrypt format ($2b$<cost>$...), 60 characters.
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Example:
            >>> service = BcryptPasswordService()
            >>> password_hash = service.hash_password("SecurePass123!")
            >>> service.verify_password("SecurePass123!", password_hash)
            True
            >>> service.verify_password("SecurePass123!", "invalid_hash")
            False
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, AttributeError):
            # Invalid hash format: fail closed without raising
            return False
