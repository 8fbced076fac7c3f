"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables. Every
security threshold and risk penalty lives here so deployments can tune policy
without code changes; the defaults reproduce the reference policy.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables (case-insensitive)
- Type validation via Pydantic

Usage:
    from vigil.core.config import settings

    if settings.is_production:
        ...
    threshold = settings.max_failed_login_attempts
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vigil.core.enums import Environment


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values (only for non-sensitive config)
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    app_name: str = Field(default="Vigil", description="Application name")

    # Security configuration
    secret_key: str | None = Field(
        default=None,
        description="HMAC key for second-factor continuation tokens (>= 32 chars)",
    )
    bcrypt_rounds: int = Field(
        default=12,
        description="Number of bcrypt hashing rounds (10-20)",
    )

    # Lockout policy
    max_failed_login_attempts: int = Field(
        default=5,
        description="Consecutive failed credential checks before the account locks",
    )
    lockout_minutes: int = Field(
        default=30,
        description="Length of the lockout window in minutes",
    )

    # Second factor
    second_factor_issuer: str = Field(
        default="Vigil",
        description="Issuer name embedded in otpauth:// provisioning URIs",
    )
    second_factor_valid_window: int = Field(
        default=2,
        description="Accepted TOTP clock drift, in 30-second steps either side",
    )
    backup_code_count: int = Field(
        default=10,
        description="Number of single-use backup codes generated on enrollment",
    )
    second_factor_challenge_minutes: int = Field(
        default=5,
        description="Lifetime of the continuation token issued after the password step",
    )
    second_factor_failure_counts_as_attempt: bool = Field(
        default=False,
        description="Count a failed second factor at login as a failed login attempt",
    )

    # Password reset
    password_reset_token_minutes: int = Field(
        default=60,
        description="Lifetime of a password reset token",
    )

    # Security event ledger
    security_event_capacity: int = Field(
        default=50,
        description="Maximum retained security events per principal (FIFO)",
    )

    # IP reputation cache
    ip_reputation_backend: str = Field(
        default="memory",
        description="IP reputation cache backend: 'memory' or 'redis'",
    )
    ip_reputation_ttl_seconds: int = Field(
        default=3600,
        description="Lifetime of a cached IP reputation entry",
    )
    redis_url: str | None = Field(
        default=None,
        description="Redis connection URL, required when ip_reputation_backend is 'redis'",
    )
    suspicious_ip_patterns: list[str] = Field(
        default=[r"^0\.0\.0\.0$", r"^255\.255\.255\.255$"],
        description="Regular expressions for known-bad network addresses",
    )

    # Geolocation
    geoip_db_path: str | None = Field(
        default=None,
        description="Path to a GeoLite2-City.mmdb file; geolocation disabled if unset",
    )

    # Risk engine
    risk_local_timezone: str = Field(
        default="UTC",
        description="IANA timezone used for hour-of-day and weekday signals",
    )
    risk_assessment_timeout_seconds: float = Field(
        default=0.5,
        description="Default deadline for history and cache lookups during assessment",
    )
    risk_logging_threshold: int = Field(
        default=40,
        description="Assessments scoring at least this are recorded as suspicious activity",
    )
    risk_block_threshold: int = Field(
        default=80,
        description="Assessments scoring at least this are flagged should_block",
    )
    risk_review_threshold: int = Field(
        default=60,
        description="Assessments scoring at least this are flagged requires_review",
    )

    # Velocity signal
    velocity_window_minutes: int = 60
    velocity_max_actions: int = 10
    velocity_max_amount: Decimal = Decimal("10000")
    velocity_max_logins: int = 10
    velocity_action_penalty: int = 25
    velocity_amount_penalty: int = 30
    velocity_login_penalty: int = 20

    # Geographic signal
    geo_lookback_days: int = 7
    geo_unusual_distance_miles: float = 500.0
    geo_rapid_travel_hours: float = 6.0
    geo_unusual_location_penalty: int = 15
    geo_rapid_travel_penalty: int = 25

    # Device signal
    device_lookback_days: int = 30
    device_missing_penalty: int = 5
    device_unrecognized_penalty: int = 20
    device_component_penalty: int = 3
    device_automated_agent_penalty: int = 10

    # Behavioral signal
    behavior_lookback_days: int = 7
    behavior_hour_deviation: float = 2.0
    behavior_hour_penalty: int = 10
    behavior_burst_window_minutes: int = 5
    behavior_burst_max_actions: int = 5
    behavior_burst_penalty: int = 20

    # Network signal
    network_private_penalty: int = 5
    network_suspicious_penalty: int = 30

    # Temporal signal
    temporal_unusual_start_hour: int = 2
    temporal_unusual_end_hour: int = 6
    temporal_unusual_hour_penalty: int = 8
    temporal_business_weekend_penalty: int = 5

    model_config = SettingsConfigDict(
        env_prefix="VIGIL_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("bcrypt_rounds")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        """
        Validate bcrypt rounds are within the range the password service accepts.

        Raises:
            ValueError: If rounds are not between 10 and 20.
        """
        if not 10 <= v <= 20:
            raise ValueError("bcrypt_rounds must be between 10 and 20")
        return v

    @field_validator("ip_reputation_backend")
    @classmethod
    def validate_ip_reputation_backend(cls, v: str) -> str:
        """
        Validate the cache backend name.

        Raises:
            ValueError: If backend is not 'memory' or 'redis'.
        """
        backend = v.lower()
        if backend not in {"memory", "redis"}:
            raise ValueError("ip_reputation_backend must be 'memory' or 'redis'")
        return backend

    @field_validator("risk_block_threshold", "risk_review_threshold")
    @classmethod
    def validate_score_threshold(cls, v: int) -> int:
        """Validate decision thresholds lie on the 0-100 score scale."""
        if not 0 <= v <= 100:
            raise ValueError("score thresholds must be between 0 and 100")
        return v

    @field_validator("temporal_unusual_end_hour", "temporal_unusual_start_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour-of-day bounds (inclusive, so 23 is the last hour)."""
        if not 0 <= v <= 23:
            raise ValueError("hour bounds must be between 0 and 23")
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running under automated tests (testing or ci)."""
        return self.environment in {Environment.TESTING, Environment.CI}


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache so settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
