"""Unit tests for the six risk signals.

Each signal is evaluated in isolation against a hand-built SignalContext.
"""

import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from tests.conftest import WEEKDAY_NOON, create_principal
from vigil.application.risk import RiskPolicy, SignalContext
from vigil.application.risk.signals import (
    BehavioralSignal,
    DeviceSignal,
    GeographicSignal,
    NetworkSignal,
    TemporalSignal,
    VelocitySignal,
)
from vigil.application.risk.signals.behavioral import circular_mean_hour, hour_distance
from vigil.core.enums import ErrorCode
from vigil.core.result import Failure, Success
from vigil.domain.enums import (
    ActionType,
    LoginFailureReason,
    LoginMethod,
    PrincipalKind,
)
from vigil.domain.errors import SignalUnavailable
from vigil.domain.events import FinancialActionRecorded, LoginFailed, LoginSucceeded
from vigil.domain.protocols import IPReputationEntry
from vigil.domain.value_objects import GeoPoint, RequestContext
from vigil.infrastructure.cache import InMemoryIPReputationCache
from vigil.infrastructure.errors import CacheError

NEW_YORK = GeoPoint(40.7128, -74.0060)
BOSTON = GeoPoint(42.3601, -71.0589)
LONDON = GeoPoint(51.5074, -0.1278)

# Saturday, mid-day UTC
SATURDAY_NOON = datetime(2026, 10, 17, 12, 0, tzinfo=UTC)


def fingerprint(**components) -> str:
    base = {
        "userAgent": "Mozilla/5.0",
        "screen": "1920x1080",
        "timezone": "America/New_York",
        "language": "en-US",
        "platform": "MacIntel",
    }
    base.update(components)
    return json.dumps(base, sort_keys=True)


def payment(minutes_ago: float, amount: str = "100", now: datetime = WEEKDAY_NOON):
    return FinancialActionRecorded(
        occurred_at=now - timedelta(minutes=minutes_ago),
        action_type=ActionType.PAYMENT,
        amount=Decimal(amount),
    )


def login_success(minutes_ago: float, now: datetime = WEEKDAY_NOON, **fields):
    return LoginSucceeded(
        occurred_at=now - timedelta(minutes=minutes_ago),
        method=LoginMethod.PASSWORD,
        **fields,
    )


def make_ctx(
    *,
    history=(),
    request: RequestContext | None = None,
    action_type: ActionType = ActionType.PAYMENT,
    now: datetime = WEEKDAY_NOON,
    principal=None,
    policy: RiskPolicy | None = None,
) -> SignalContext:
    return SignalContext(
        principal=principal or create_principal(),
        action_type=action_type,
        request=request or RequestContext(),
        now=now,
        policy=policy or RiskPolicy(),
        history=None if history is None else tuple(history),
    )


@pytest.mark.unit
class TestVelocitySignal:
    """Test action counts and amount totals in the window."""

    @pytest.mark.asyncio
    async def test_count_at_threshold_adds_nothing(self):
        ctx = make_ctx(history=[payment(i * 5 + 1) for i in range(10)])

        result = await VelocitySignal().evaluate(ctx)

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_count_above_threshold_adds_action_penalty(self):
        ctx = make_ctx(history=[payment(i * 5 + 1) for i in range(11)])

        result = await VelocitySignal().evaluate(ctx)

        assert result.value.score == 25

    @pytest.mark.asyncio
    async def test_amount_above_threshold_adds_amount_penalty(self):
        ctx = make_ctx(history=[payment(10, "6000"), payment(20, "4500")])

        result = await VelocitySignal().evaluate(ctx)

        assert result.value.score == 30

    @pytest.mark.asyncio
    async def test_events_outside_window_ignored(self):
        ctx = make_ctx(history=[payment(61 + i, "5000") for i in range(12)])

        result = await VelocitySignal().evaluate(ctx)

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_login_velocity_counts_login_events(self):
        failures = [
            LoginFailed(
                occurred_at=WEEKDAY_NOON - timedelta(minutes=i + 1),
                reason=LoginFailureReason.INVALID_CREDENTIAL,
            )
            for i in range(11)
        ]
        ctx = make_ctx(history=failures, action_type=ActionType.LOGIN)

        result = await VelocitySignal().evaluate(ctx)

        assert result.value.score == 20

    @pytest.mark.asyncio
    async def test_unavailable_history_is_failure(self):
        result = await VelocitySignal().evaluate(make_ctx(history=None))

        assert isinstance(result, Failure)
        assert isinstance(result.error, SignalUnavailable)
        assert result.error.signal == "velocity"


@pytest.mark.unit
class TestGeographicSignal:
    """Test distance and travel checks."""

    @pytest.mark.asyncio
    async def test_no_location_scores_zero(self):
        ctx = make_ctx(history=[login_success(60, location=NEW_YORK)])

        result = await GeographicSignal().evaluate(ctx)

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_no_located_history_scores_zero(self):
        ctx = make_ctx(history=[], request=RequestContext(location=LONDON))

        result = await GeographicSignal().evaluate(ctx)

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_nearby_location_scores_zero(self):
        ctx = make_ctx(
            history=[login_success(60, location=NEW_YORK)],
            request=RequestContext(location=BOSTON),
        )

        result = await GeographicSignal().evaluate(ctx)

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_rapid_intercontinental_travel(self):
        ctx = make_ctx(
            history=[
                login_success(180, location=BOSTON),
                login_success(60, location=NEW_YORK),
            ],
            request=RequestContext(location=LONDON),
        )

        result = await GeographicSignal().evaluate(ctx)

        assert result.value.score == 40
        assert any("Rapid location change" in r for r in result.value.reasons)

    @pytest.mark.asyncio
    async def test_single_located_event_only_checks_distance(self):
        ctx = make_ctx(
            history=[login_success(60, location=NEW_YORK)],
            request=RequestContext(location=LONDON),
        )

        result = await GeographicSignal().evaluate(ctx)

        assert result.value.score == 15
        assert not any("Rapid location change" in r for r in result.value.reasons)

    @pytest.mark.asyncio
    async def test_distant_location_after_travel_window(self):
        ctx = make_ctx(
            history=[login_success(24 * 60, location=NEW_YORK)],
            request=RequestContext(location=LONDON),
        )

        result = await GeographicSignal().evaluate(ctx)

        assert result.value.score == 15

    @pytest.mark.asyncio
    async def test_resolver_used_when_location_missing(self):
        resolver = AsyncMock()
        resolver.resolve.return_value = LONDON
        ctx = make_ctx(
            history=[
                login_success(180, location=BOSTON),
                login_success(60, location=NEW_YORK),
            ],
            request=RequestContext(ip_address="81.2.69.142"),
        )

        result = await GeographicSignal(resolver).evaluate(ctx)

        resolver.resolve.assert_awaited_once_with("81.2.69.142")
        assert result.value.score == 40


@pytest.mark.unit
class TestDeviceSignal:
    """Test fingerprint recognition and automated clients."""

    @pytest.mark.asyncio
    async def test_missing_fingerprint(self):
        result = await DeviceSignal().evaluate(make_ctx())

        assert result.value.score == 5

    @pytest.mark.asyncio
    async def test_unrecognized_device_without_history(self):
        ctx = make_ctx(request=RequestContext(device_fingerprint=fingerprint()))

        result = await DeviceSignal().evaluate(ctx)

        assert result.value.score == 20
        assert result.value.reasons == ("Unrecognized device",)

    @pytest.mark.asyncio
    async def test_known_device_scores_zero(self):
        fp = fingerprint()
        ctx = make_ctx(
            history=[login_success(60, device_fingerprint=fp)],
            request=RequestContext(device_fingerprint=fp),
        )

        result = await DeviceSignal().evaluate(ctx)

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_changed_components_add_per_component_penalty(self):
        ctx = make_ctx(
            history=[login_success(60, device_fingerprint=fingerprint())],
            request=RequestContext(
                device_fingerprint=fingerprint(screen="1280x800", platform="Win32")
            ),
        )

        result = await DeviceSignal().evaluate(ctx)

        assert result.value.score == 26

    @pytest.mark.asyncio
    async def test_automated_client_signature(self):
        classifier = Mock()
        classifier.is_automated.return_value = True
        ctx = make_ctx(request=RequestContext(user_agent="curl/8.4.0"))

        result = await DeviceSignal(classifier).evaluate(ctx)

        classifier.is_automated.assert_called_once_with("curl/8.4.0")
        assert result.value.score == 15

    @pytest.mark.asyncio
    async def test_score_capped(self):
        classifier = Mock()
        classifier.is_automated.return_value = True
        ctx = make_ctx(
            history=[login_success(60, device_fingerprint=fingerprint())],
            request=RequestContext(
                user_agent="python-requests/2.31",
                device_fingerprint=fingerprint(
                    screen="1", platform="2", language="3", timezone="4", userAgent="5"
                ),
            ),
        )

        result = await DeviceSignal(classifier).evaluate(ctx)

        assert result.value.score == 40

    @pytest.mark.asyncio
    async def test_unavailable_history_with_fingerprint(self):
        ctx = make_ctx(history=None, request=RequestContext(device_fingerprint="fp"))

        result = await DeviceSignal().evaluate(ctx)

        assert isinstance(result, Failure)


@pytest.mark.unit
class TestBehavioralSignal:
    """Test usual-hour deviation and bursts."""

    def test_circular_mean_wraps_midnight(self):
        assert hour_distance(circular_mean_hour([23.0, 1.0]), 0.0) == pytest.approx(
            0.0, abs=1e-6
        )

    def test_circular_mean_empty(self):
        assert circular_mean_hour([]) is None

    @pytest.mark.asyncio
    async def test_usual_hour_scores_zero(self):
        history = [login_success(24 * 60 * day) for day in range(1, 5)]

        result = await BehavioralSignal().evaluate(make_ctx(history=history))

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_unusual_hour_adds_penalty(self):
        now = WEEKDAY_NOON.replace(hour=3)
        history = [
            login_success(24 * 60 * day, now=WEEKDAY_NOON) for day in range(1, 5)
        ]

        result = await BehavioralSignal().evaluate(make_ctx(history=history, now=now))

        assert result.value.score == 10

    @pytest.mark.asyncio
    async def test_burst_of_same_action(self):
        history = [payment(0.5 * i + 0.5) for i in range(6)]

        result = await BehavioralSignal().evaluate(make_ctx(history=history))

        assert result.value.score == 20

    @pytest.mark.asyncio
    async def test_no_history_scores_zero(self):
        result = await BehavioralSignal().evaluate(make_ctx(history=[]))

        assert result.value.score == 0


@pytest.mark.unit
class TestNetworkSignal:
    """Test address classification and caching."""

    @pytest.mark.asyncio
    async def test_public_address_scores_zero(self, mock_logger):
        signal = NetworkSignal(InMemoryIPReputationCache(), mock_logger)

        result = await signal.evaluate(
            make_ctx(request=RequestContext(ip_address="93.184.216.34"))
        )

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_private_address(self, mock_logger):
        signal = NetworkSignal(InMemoryIPReputationCache(), mock_logger)

        result = await signal.evaluate(
            make_ctx(request=RequestContext(ip_address="10.0.0.5"))
        )

        assert result.value.score == 5

    @pytest.mark.asyncio
    async def test_suspicious_pattern(self, mock_logger):
        signal = NetworkSignal(InMemoryIPReputationCache(), mock_logger)

        result = await signal.evaluate(
            make_ctx(request=RequestContext(ip_address="0.0.0.0"))
        )

        assert result.value.score == 35

    @pytest.mark.asyncio
    async def test_result_is_cached(self, mock_logger):
        cache = InMemoryIPReputationCache(clock=lambda: WEEKDAY_NOON)
        signal = NetworkSignal(cache, mock_logger)
        ctx = make_ctx(request=RequestContext(ip_address="10.0.0.5"))

        await signal.evaluate(ctx)
        cached = await cache.get("10.0.0.5")

        assert cached.value.score == 5
        assert cached.value.cached_at == WEEKDAY_NOON

    @pytest.mark.asyncio
    async def test_cached_entry_is_served(self, mock_logger):
        cache = AsyncMock()
        cache.get.return_value = Success(
            value=IPReputationEntry(
                address="93.184.216.34",
                score=30,
                reasons=("Suspicious network address",),
                cached_at=WEEKDAY_NOON,
            )
        )
        signal = NetworkSignal(cache, mock_logger)

        result = await signal.evaluate(
            make_ctx(request=RequestContext(ip_address="93.184.216.34"))
        )

        assert result.value.score == 30
        cache.set.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cache_failure_fails_open(self, mock_logger):
        cache = AsyncMock()
        cache.get.return_value = Failure(error=CacheError(code=ErrorCode.CACHE_UNAVAILABLE, message="down"))
        cache.set.return_value = Failure(error=CacheError(code=ErrorCode.CACHE_UNAVAILABLE, message="down"))
        signal = NetworkSignal(cache, mock_logger)

        result = await signal.evaluate(
            make_ctx(request=RequestContext(ip_address="10.0.0.5"))
        )

        assert result.value.score == 5
        assert mock_logger.warning.call_count == 2


@pytest.mark.unit
class TestTemporalSignal:
    """Test hour-of-day and weekend checks."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "hour,expected", [(1, 0), (2, 8), (5, 8), (6, 8), (7, 0), (12, 0)]
    )
    async def test_unusual_hours(self, hour, expected):
        ctx = make_ctx(now=WEEKDAY_NOON.replace(hour=hour, minute=30))

        result = await TemporalSignal().evaluate(ctx)

        assert result.value.score == expected

    @pytest.mark.asyncio
    async def test_business_weekend(self):
        ctx = make_ctx(
            now=SATURDAY_NOON,
            principal=create_principal(kind=PrincipalKind.BUSINESS),
        )

        result = await TemporalSignal().evaluate(ctx)

        assert result.value.score == 5

    @pytest.mark.asyncio
    async def test_customer_weekend_scores_zero(self):
        result = await TemporalSignal().evaluate(make_ctx(now=SATURDAY_NOON))

        assert result.value.score == 0

    @pytest.mark.asyncio
    async def test_business_weekend_night(self):
        ctx = make_ctx(
            now=SATURDAY_NOON.replace(hour=3),
            principal=create_principal(kind=PrincipalKind.BUSINESS),
        )

        result = await TemporalSignal().evaluate(ctx)

        assert result.value.score == 13
