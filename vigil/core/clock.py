"""Injectable wall clock.

Time-dependent components (lockout windows, TTL cache, risk windows) take a
``clock`` callable instead of calling ``datetime.now`` directly, so tests can
pin time without patching the interpreter.
"""

from collections.abc import Callable
from datetime import UTC, datetime

type Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)
