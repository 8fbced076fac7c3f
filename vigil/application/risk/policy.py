"""Risk policy parameters.

Every threshold and penalty the signals use, gathered in one immutable
value. The defaults reproduce the reference policy; deployments tune them
through Settings (``VIGIL_VELOCITY_MAX_ACTIONS`` and friends).
"""

from dataclasses import dataclass, field
from datetime import UTC, timedelta, tzinfo
from decimal import Decimal
from zoneinfo import ZoneInfo

from vigil.core.config import Settings
from vigil.domain.entities import DEFAULT_BLOCK_THRESHOLD, DEFAULT_REVIEW_THRESHOLD


@dataclass(frozen=True, kw_only=True)
class RiskPolicy:
    """Thresholds, penalties and caps for the six risk signals."""

    # Engine
    local_timezone: str = "UTC"
    assessment_timeout_seconds: float = 0.5
    logging_threshold: int = 40
    block_threshold: int = DEFAULT_BLOCK_THRESHOLD
    review_threshold: int = DEFAULT_REVIEW_THRESHOLD

    # Velocity
    velocity_window: timedelta = timedelta(hours=1)
    velocity_max_actions: int = 10
    velocity_max_amount: Decimal = Decimal("10000")
    velocity_max_logins: int = 10
    velocity_action_penalty: int = 25
    velocity_amount_penalty: int = 30
    velocity_login_penalty: int = 20
    velocity_cap: int = 55

    # Geographic
    geo_lookback: timedelta = timedelta(days=7)
    geo_unusual_distance_miles: float = 500.0
    geo_rapid_travel_window: timedelta = timedelta(hours=6)
    geo_unusual_location_penalty: int = 15
    geo_rapid_travel_penalty: int = 25
    geo_cap: int = 40

    # Device
    device_lookback: timedelta = timedelta(days=30)
    device_missing_penalty: int = 5
    device_unrecognized_penalty: int = 20
    device_component_penalty: int = 3
    device_automated_agent_penalty: int = 10
    device_cap: int = 40

    # Behavioral
    behavior_lookback: timedelta = timedelta(days=7)
    behavior_hour_deviation: float = 2.0
    behavior_hour_penalty: int = 10
    behavior_burst_window: timedelta = timedelta(minutes=5)
    behavior_burst_max_actions: int = 5
    behavior_burst_penalty: int = 20
    behavior_cap: int = 30

    # Network
    network_private_penalty: int = 5
    network_suspicious_penalty: int = 30
    network_cap: int = 35
    suspicious_ip_patterns: tuple[str, ...] = field(
        default=(r"^0\.0\.0\.0$", r"^255\.255\.255\.255$")
    )

    # Temporal (both hour bounds inclusive: 2 and 6 cover 02:00-06:59)
    temporal_unusual_start_hour: int = 2
    temporal_unusual_end_hour: int = 6
    temporal_unusual_hour_penalty: int = 8
    temporal_business_weekend_penalty: int = 5
    temporal_cap: int = 13

    @classmethod
    def from_settings(cls, settings: Settings) -> "RiskPolicy":
        """Build the policy from application settings.

        Per-signal caps are the sum of the signal's own penalties, so no
        configured penalty is silently cut off.
        """
        return cls(
            local_timezone=settings.risk_local_timezone,
            assessment_timeout_seconds=settings.risk_assessment_timeout_seconds,
            logging_threshold=settings.risk_logging_threshold,
            block_threshold=settings.risk_block_threshold,
            review_threshold=settings.risk_review_threshold,
            velocity_window=timedelta(minutes=settings.velocity_window_minutes),
            velocity_max_actions=settings.velocity_max_actions,
            velocity_max_amount=settings.velocity_max_amount,
            velocity_max_logins=settings.velocity_max_logins,
            velocity_action_penalty=settings.velocity_action_penalty,
            velocity_amount_penalty=settings.velocity_amount_penalty,
            velocity_login_penalty=settings.velocity_login_penalty,
            velocity_cap=max(
                settings.velocity_action_penalty, settings.velocity_login_penalty
            )
            + settings.velocity_amount_penalty,
            geo_lookback=timedelta(days=settings.geo_lookback_days),
            geo_unusual_distance_miles=settings.geo_unusual_distance_miles,
            geo_rapid_travel_window=timedelta(hours=settings.geo_rapid_travel_hours),
            geo_unusual_location_penalty=settings.geo_unusual_location_penalty,
            geo_rapid_travel_penalty=settings.geo_rapid_travel_penalty,
            geo_cap=settings.geo_unusual_location_penalty
            + settings.geo_rapid_travel_penalty,
            device_lookback=timedelta(days=settings.device_lookback_days),
            device_missing_penalty=settings.device_missing_penalty,
            device_unrecognized_penalty=settings.device_unrecognized_penalty,
            device_component_penalty=settings.device_component_penalty,
            device_automated_agent_penalty=settings.device_automated_agent_penalty,
            behavior_lookback=timedelta(days=settings.behavior_lookback_days),
            behavior_hour_deviation=settings.behavior_hour_deviation,
            behavior_hour_penalty=settings.behavior_hour_penalty,
            behavior_burst_window=timedelta(
                minutes=settings.behavior_burst_window_minutes
            ),
            behavior_burst_max_actions=settings.behavior_burst_max_actions,
            behavior_burst_penalty=settings.behavior_burst_penalty,
            behavior_cap=settings.behavior_hour_penalty
            + settings.behavior_burst_penalty,
            network_private_penalty=settings.network_private_penalty,
            network_suspicious_penalty=settings.network_suspicious_penalty,
            network_cap=settings.network_private_penalty
            + settings.network_suspicious_penalty,
            suspicious_ip_patterns=tuple(settings.suspicious_ip_patterns),
            temporal_unusual_start_hour=settings.temporal_unusual_start_hour,
            temporal_unusual_end_hour=settings.temporal_unusual_end_hour,
            temporal_unusual_hour_penalty=settings.temporal_unusual_hour_penalty,
            temporal_business_weekend_penalty=settings.temporal_business_weekend_penalty,
            temporal_cap=settings.temporal_unusual_hour_penalty
            + settings.temporal_business_weekend_penalty,
        )

    @property
    def tz(self) -> tzinfo:
        """Timezone for hour-of-day and weekday signals."""
        if self.local_timezone.upper() == "UTC":
            return UTC
        return ZoneInfo(self.local_timezone)

    @property
    def history_lookback(self) -> timedelta:
        """Longest window any history-based signal looks back over."""
        return max(
            self.velocity_window,
            self.geo_lookback,
            self.device_lookback,
            self.behavior_lookback,
            self.behavior_burst_window,
        )
