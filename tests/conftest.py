"""Shared pytest fixtures.

Fixtures build real in-memory adapters (principal repository, event store,
IP cache) wired to mocked loggers and notifiers, so handler and engine
tests exercise real state transitions without external services.
"""

import asyncio
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from uuid_extensions import uuid7

from vigil.application.services import SecurityEventLedger
from vigil.domain.entities import Principal
from vigil.domain.enums import PrincipalKind
from vigil.infrastructure.persistence import (
    InMemoryPrincipalRepository,
    InMemorySecurityEventStore,
)

TEST_SECRET_KEY = "test-secret-key-for-continuation-tokens-0123456789"

# Wednesday, mid-day UTC: no temporal penalties apply
WEEKDAY_NOON = datetime(2026, 10, 14, 12, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock for time-dependent tests."""

    def __init__(self, now: datetime = WEEKDAY_NOON) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta: float) -> None:
        self.now = self.now + timedelta(**delta)


def fake_hash(password: str) -> str:
    return f"hashed:{password}"


class GatedPrincipalRepository(InMemoryPrincipalRepository):
    """In-memory repository whose first lookups hand out a snapshot, then wait.

    The first ``hold`` lookups (any find_by_*) return only after ``gate`` is
    set, letting a test land a concurrent write between a caller's read
    and its write. ``all_held`` is set once that many lookups are waiting.
    """

    def __init__(self, principals: list[Principal], *, hold: int = 1) -> None:
        super().__init__(principals)
        self._hold = hold
        self._held = 0
        self.all_held = asyncio.Event()
        self.gate = asyncio.Event()

    async def _wait_at_gate(self) -> None:
        if self._held >= self._hold:
            return
        self._held += 1
        if self._held == self._hold:
            self.all_held.set()
        await self.gate.wait()

    async def find_by_id(self, principal_id):
        principal = await super().find_by_id(principal_id)
        await self._wait_at_gate()
        return principal

    async def find_by_login_key(self, login_key):
        principal = await super().find_by_login_key(login_key)
        await self._wait_at_gate()
        return principal

    async def find_by_reset_token_hash(self, token_hash):
        principal = await super().find_by_reset_token_hash(token_hash)
        await self._wait_at_gate()
        return principal


def create_principal(
    login_key: str = "alice@example.com",
    password: str = "CorrectHorse9!",
    kind: PrincipalKind = PrincipalKind.CUSTOMER,
    **overrides,
) -> Principal:
    """Create a Principal whose password_hash matches fake_password_service."""
    return Principal(
        id=overrides.pop("id", uuid7()),
        login_key=login_key,
        password_hash=fake_hash(password),
        kind=kind,
        **overrides,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_logger() -> Mock:
    """Logger mock whose bind()/with_context() return itself."""
    logger = Mock()
    logger.bind.return_value = logger
    logger.with_context.return_value = logger
    return logger


@pytest.fixture
def fake_password_service() -> Mock:
    """Password service with deterministic, cheap hashing."""
    service = Mock()
    service.hash_password.side_effect = fake_hash
    service.verify_password.side_effect = (
        lambda password, password_hash: password_hash == fake_hash(password)
    )
    return service


@pytest.fixture
def principal() -> Principal:
    return create_principal()


@pytest.fixture
def principal_repo(principal: Principal) -> InMemoryPrincipalRepository:
    return InMemoryPrincipalRepository([principal])


@pytest.fixture
def event_store() -> InMemorySecurityEventStore:
    return InMemorySecurityEventStore(capacity=50)


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def ledger(
    event_store: InMemorySecurityEventStore, notifier: AsyncMock, mock_logger: Mock
) -> SecurityEventLedger:
    return SecurityEventLedger(store=event_store, notifier=notifier, logger=mock_logger)
