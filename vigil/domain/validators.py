"""Validation functions shared by the Annotated types.

Validators are pure functions that raise ValueError on validation failure.
"""

import re

_LOGIN_KEY_PATTERN = re.compile(r"^[a-z0-9._%+@-]+$")
_SECOND_FACTOR_CODE_PATTERN = re.compile(r"^(\d{6}|[0-9A-F]{8,16})$")
_RESET_TOKEN_PATTERN = re.compile(r"^[a-f0-9]{64}$")


def normalize_login_key(v: str) -> str:
    """Normalise an email or username for lookup.

    Example:
        >>> normalize_login_key("  Alice@Example.COM ")
        'alice@example.com'
    """
    return v.strip().lower()


def validate_login_key(v: str) -> str:
    """Normalise and validate a login key.

    Raises:
        ValueError: If the key contains characters outside email/username syntax.
    """
    key = normalize_login_key(v)
    if not _LOGIN_KEY_PATTERN.match(key):
        raise ValueError("Invalid login key format")
    return key


def validate_second_factor_code(v: str) -> str:
    """Accept a 6-digit TOTP code or a hex backup code (any case, spaces ignored).

    Raises:
        ValueError: If the code is neither shape.
    """
    code = v.replace(" ", "").strip().upper()
    if not _SECOND_FACTOR_CODE_PATTERN.match(code):
        raise ValueError("Invalid verification code format")
    return code


def validate_reset_token(v: str) -> str:
    """Validate a password reset token (64 lowercase hex characters).

    Raises:
        ValueError: If the token is not 32 bytes of hex.
    """
    token = v.strip().lower()
    if not _RESET_TOKEN_PATTERN.match(token):
        raise ValueError("Invalid reset token format")
    return token
