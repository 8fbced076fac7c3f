"""Annotated types with centralized validation.

Define validation once; the presentation layer gets it for free when these
types appear in pydantic models or TypeAdapters.

Usage:
    from pydantic import TypeAdapter
    from vigil.domain.types import LoginKey

    TypeAdapter(LoginKey).validate_python(" Alice@Example.com ")
    # 'alice@example.com'
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from vigil.domain.validators import (
    validate_login_key,
    validate_reset_token,
    validate_second_factor_code,
)

LoginKey = Annotated[
    str,
    Field(min_length=3, max_length=255, description="Email or username"),
    AfterValidator(validate_login_key),
]
"""Login key, normalised to lowercase without surrounding whitespace."""

Password = Annotated[
    str,
    Field(min_length=1, max_length=128, description="Plaintext credential"),
]
"""Credential as typed by the user (bcrypt truncates beyond 72 bytes)."""

NewPassword = Annotated[
    str,
    Field(min_length=8, max_length=128, description="Replacement credential"),
]

SecondFactorCode = Annotated[
    str,
    Field(min_length=6, max_length=32, description="TOTP or backup code"),
    AfterValidator(validate_second_factor_code),
]

ResetToken = Annotated[
    str,
    Field(min_length=64, max_length=64, description="Password reset token (hex)"),
    AfterValidator(validate_reset_token),
]
