# mypy: disable-error-code="arg-type"
"""Dependency factories (composition root).

Application-scoped singletons for infrastructure and services, plus
handler factories wired from them:
- Logging (structlog console adapter)
- Password hashing (bcrypt), TOTP (pyotp), continuation tokens (JWT)
- Principal repository and security event store (in-memory)
- IP reputation cache (in-memory or Redis)
- Security event ledger, second-factor verifier, risk engine

Infrastructure adapters are imported inside the factories so importing
this module stays cheap and optional backends (Redis, GeoIP2) are only
touched when configured.

Usage:
    from vigil.core.container import get_risk_engine

    engine = get_risk_engine()
    result = await engine.assess(principal_id, ActionType.PAYMENT, context)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from vigil.core.config import settings

if TYPE_CHECKING:
    from vigil.application.commands.handlers import (
        AuthenticatePrincipalHandler,
        CompletePasswordResetHandler,
        CompleteSecondFactorLoginHandler,
        RequestPasswordResetHandler,
    )
    from vigil.application.risk import RiskScoringEngine
    from vigil.application.services import SecondFactorVerifier, SecurityEventLedger
    from vigil.domain.protocols import (
        ContinuationTokenProtocol,
        IPReputationCacheProtocol,
        LoggerProtocol,
        NotificationSenderProtocol,
        PasswordHashingProtocol,
        PrincipalRepository,
        SecurityEventStore,
        TOTPProtocol,
    )


# ============================================================================
# Infrastructure (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Get logger singleton (app-scoped).

    JSON output under testing/ci, human-readable console output otherwise.
    """
    from vigil.infrastructure.logging import ConsoleAdapter

    return ConsoleAdapter(use_json=settings.is_testing, level=settings.log_level)


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get bcrypt password service singleton (app-scoped)."""
    from vigil.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_totp_service() -> "TOTPProtocol":
    """Get TOTP service singleton (app-scoped)."""
    from vigil.infrastructure.security import PyOTPService

    return PyOTPService(valid_window=settings.second_factor_valid_window)


@lru_cache()
def get_continuation_token_service() -> "ContinuationTokenProtocol":
    """Get continuation token service singleton (app-scoped).

    Raises:
        ValueError: If VIGIL_SECRET_KEY is unset or shorter than 32 chars.
    """
    from vigil.infrastructure.security import JWTContinuationTokenService

    if settings.secret_key is None:
        raise ValueError("VIGIL_SECRET_KEY is required for second-factor login")
    return JWTContinuationTokenService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.second_factor_challenge_minutes,
    )


@lru_cache()
def get_principal_repository() -> "PrincipalRepository":
    """Get principal repository singleton (app-scoped)."""
    from vigil.infrastructure.persistence import InMemoryPrincipalRepository

    return InMemoryPrincipalRepository()


@lru_cache()
def get_security_event_store() -> "SecurityEventStore":
    """Get security event store singleton (app-scoped)."""
    from vigil.infrastructure.persistence import InMemorySecurityEventStore

    return InMemorySecurityEventStore(capacity=settings.security_event_capacity)


@lru_cache()
def get_ip_reputation_cache() -> "IPReputationCacheProtocol":
    """Get IP reputation cache singleton (app-scoped).

    Returns the adapter selected by VIGIL_IP_REPUTATION_BACKEND:
        - 'memory': InMemoryIPReputationCache (single process)
        - 'redis': RedisIPReputationCache (shared across processes)

    Raises:
        ValueError: If the redis backend is selected without VIGIL_REDIS_URL.
    """
    if settings.ip_reputation_backend == "redis":
        from redis.asyncio import ConnectionPool, Redis

        from vigil.infrastructure.cache import RedisIPReputationCache

        if not settings.redis_url:
            raise ValueError("VIGIL_REDIS_URL is required for the redis backend")
        pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=50,
            decode_responses=False,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        return RedisIPReputationCache(
            redis_client=Redis(connection_pool=pool),
            ttl_seconds=settings.ip_reputation_ttl_seconds,
        )

    from vigil.infrastructure.cache import InMemoryIPReputationCache

    return InMemoryIPReputationCache(ttl_seconds=settings.ip_reputation_ttl_seconds)


@lru_cache()
def get_notification_sender() -> "NotificationSenderProtocol":
    """Get notification sender singleton (app-scoped)."""
    from vigil.infrastructure.notifications import LoggingNotificationSender

    return LoggingNotificationSender(logger=get_logger())


# ============================================================================
# Services (Singletons)
# ============================================================================


@lru_cache()
def get_ledger() -> "SecurityEventLedger":
    """Get security event ledger singleton (app-scoped)."""
    from vigil.application.services import SecurityEventLedger

    return SecurityEventLedger(
        store=get_security_event_store(),
        notifier=get_notification_sender(),
        logger=get_logger(),
    )


@lru_cache()
def get_second_factor_verifier() -> "SecondFactorVerifier":
    """Get second-factor verifier singleton (app-scoped)."""
    from vigil.application.services import SecondFactorVerifier

    return SecondFactorVerifier(
        principal_repo=get_principal_repository(),
        ledger=get_ledger(),
        totp=get_totp_service(),
        password_service=get_password_service(),
        logger=get_logger(),
        issuer=settings.second_factor_issuer,
        backup_code_count=settings.backup_code_count,
        max_failed_attempts=settings.max_failed_login_attempts,
        lockout_minutes=settings.lockout_minutes,
    )


@lru_cache()
def get_risk_engine() -> "RiskScoringEngine":
    """Get risk scoring engine singleton (app-scoped).

    Geolocation is enabled only when VIGIL_GEOIP_DB_PATH is set.
    """
    from vigil.application.risk import RiskPolicy, RiskScoringEngine, default_signals
    from vigil.infrastructure.enrichers import (
        GeoIP2LocationResolver,
        UserAgentClassifier,
    )

    logger = get_logger()
    resolver = (
        GeoIP2LocationResolver(logger=logger, db_path=settings.geoip_db_path)
        if settings.geoip_db_path
        else None
    )
    signals = default_signals(
        ip_cache=get_ip_reputation_cache(),
        logger=logger,
        resolver=resolver,
        classifier=UserAgentClassifier(logger=logger),
    )
    return RiskScoringEngine(
        principal_repo=get_principal_repository(),
        ledger=get_ledger(),
        signals=signals,
        logger=logger,
        policy=RiskPolicy.from_settings(settings),
    )


# ============================================================================
# Handler Factories
# ============================================================================


def get_authenticate_principal_handler() -> "AuthenticatePrincipalHandler":
    """Build AuthenticatePrincipalHandler from the app singletons."""
    from vigil.application.commands.handlers import AuthenticatePrincipalHandler

    return AuthenticatePrincipalHandler(
        principal_repo=get_principal_repository(),
        password_service=get_password_service(),
        ledger=get_ledger(),
        continuation_tokens=get_continuation_token_service(),
        logger=get_logger(),
        max_failed_attempts=settings.max_failed_login_attempts,
        lockout_minutes=settings.lockout_minutes,
    )


def get_complete_second_factor_login_handler() -> "CompleteSecondFactorLoginHandler":
    """Build CompleteSecondFactorLoginHandler from the app singletons."""
    from vigil.application.commands.handlers import CompleteSecondFactorLoginHandler

    return CompleteSecondFactorLoginHandler(
        principal_repo=get_principal_repository(),
        verifier=get_second_factor_verifier(),
        ledger=get_ledger(),
        continuation_tokens=get_continuation_token_service(),
        logger=get_logger(),
        failure_counts_as_attempt=settings.second_factor_failure_counts_as_attempt,
        max_failed_attempts=settings.max_failed_login_attempts,
        lockout_minutes=settings.lockout_minutes,
    )


def get_request_password_reset_handler() -> "RequestPasswordResetHandler":
    """Build RequestPasswordResetHandler from the app singletons."""
    from vigil.application.commands.handlers import RequestPasswordResetHandler

    return RequestPasswordResetHandler(
        principal_repo=get_principal_repository(),
        ledger=get_ledger(),
        notifier=get_notification_sender(),
        logger=get_logger(),
        token_minutes=settings.password_reset_token_minutes,
    )


def get_complete_password_reset_handler() -> "CompletePasswordResetHandler":
    """Build CompletePasswordResetHandler from the app singletons."""
    from vigil.application.commands.handlers import CompletePasswordResetHandler

    return CompletePasswordResetHandler(
        principal_repo=get_principal_repository(),
        password_service=get_password_service(),
        ledger=get_ledger(),
        logger=get_logger(),
    )
