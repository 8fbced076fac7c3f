"""Unit tests for the password reset handlers.

Tests cover:
- Enumeration-safe request, token hash storage, fail-open delivery
- Completion: single use, expiry, lockout cleared
- Writes that race a concurrent failed-attempt increment or a second completion
"""

import asyncio
from datetime import timedelta

import pytest

from tests.conftest import GatedPrincipalRepository, create_principal, fake_hash
from vigil.application.commands import CompletePasswordReset, RequestPasswordReset
from vigil.application.commands.handlers import (
    CompletePasswordResetHandler,
    RequestPasswordResetHandler,
    hash_reset_token,
)
from vigil.core.result import Success
from vigil.domain.enums import SecurityEventType
from vigil.domain.errors import InvalidResetToken
from vigil.infrastructure.persistence import InMemoryPrincipalRepository


@pytest.fixture
def request_handler(principal_repo, ledger, notifier, mock_logger, clock):
    return RequestPasswordResetHandler(
        principal_repo=principal_repo,
        ledger=ledger,
        notifier=notifier,
        logger=mock_logger,
        token_minutes=60,
        clock=clock,
    )


@pytest.fixture
def complete_handler(principal_repo, fake_password_service, ledger, mock_logger, clock):
    return CompletePasswordResetHandler(
        principal_repo=principal_repo,
        password_service=fake_password_service,
        ledger=ledger,
        logger=mock_logger,
        clock=clock,
    )


async def issued_token(request_handler, notifier) -> str:
    await request_handler.handle(RequestPasswordReset(login_key="alice@example.com"))
    return notifier.send_password_reset.call_args.args[2]


@pytest.mark.unit
class TestRequestPasswordReset:
    """Test token issuance."""

    @pytest.mark.asyncio
    async def test_unknown_login_key_still_succeeds(self, request_handler, notifier):
        result = await request_handler.handle(
            RequestPasswordReset(login_key="nobody@example.com")
        )

        assert isinstance(result, Success)
        notifier.send_password_reset.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stores_only_token_hash(
        self, request_handler, notifier, principal, principal_repo, clock
    ):
        token = await issued_token(request_handler, notifier)

        stored = await principal_repo.find_by_id(principal.id)
        assert len(token) == 64
        assert stored.password_reset_token_hash == hash_reset_token(token)
        assert stored.password_reset_token_hash != token
        assert stored.password_reset_expires_at.timestamp() == (
            clock.now.timestamp() + 3600
        )

    @pytest.mark.asyncio
    async def test_appends_and_notifies(
        self, request_handler, notifier, principal, ledger, clock
    ):
        await request_handler.handle(RequestPasswordReset(login_key="alice@example.com"))

        events = (await ledger.collect_events(principal.id, clock.now)).value
        assert [e.event_type for e in events] == [
            SecurityEventType.PASSWORD_RESET_REQUESTED
        ]
        notifier.notify_security_event.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delivery_failure_is_not_reported(self, request_handler, notifier):
        notifier.send_password_reset.side_effect = RuntimeError("smtp down")

        result = await request_handler.handle(
            RequestPasswordReset(login_key="alice@example.com")
        )

        assert isinstance(result, Success)


@pytest.mark.unit
class TestCompletePasswordReset:
    """Test credential replacement."""

    @pytest.mark.asyncio
    async def test_valid_token_replaces_password(
        self, request_handler, complete_handler, notifier, principal, principal_repo, ledger, clock
    ):
        token = await issued_token(request_handler, notifier)

        result = await complete_handler.handle(
            CompletePasswordReset(token=token, new_password="BrandNewPass1")
        )

        assert isinstance(result, Success)
        stored = await principal_repo.find_by_id(principal.id)
        assert stored.password_hash == fake_hash("BrandNewPass1")
        assert stored.password_reset_token_hash is None
        events = (await ledger.collect_events(principal.id, clock.now)).value
        assert events[-1].event_type is SecurityEventType.PASSWORD_RESET_COMPLETED

    @pytest.mark.asyncio
    async def test_token_is_single_use(
        self, request_handler, complete_handler, notifier
    ):
        token = await issued_token(request_handler, notifier)
        await complete_handler.handle(
            CompletePasswordReset(token=token, new_password="BrandNewPass1")
        )

        again = await complete_handler.handle(
            CompletePasswordReset(token=token, new_password="AnotherPass22")
        )

        assert isinstance(again.error, InvalidResetToken)

    @pytest.mark.asyncio
    async def test_expired_token_rejected(
        self, request_handler, complete_handler, notifier, clock
    ):
        token = await issued_token(request_handler, notifier)
        clock.advance(minutes=61)

        result = await complete_handler.handle(
            CompletePasswordReset(token=token, new_password="BrandNewPass1")
        )

        assert isinstance(result.error, InvalidResetToken)

    @pytest.mark.asyncio
    async def test_unknown_token_rejected(self, complete_handler):
        result = await complete_handler.handle(
            CompletePasswordReset(token="ab" * 32, new_password="BrandNewPass1")
        )

        assert isinstance(result.error, InvalidResetToken)

    @pytest.mark.asyncio
    async def test_reset_clears_lockout(
        self, fake_password_service, ledger, notifier, mock_logger, clock
    ):
        principal = create_principal(
            failed_login_attempts=5, locked_until=clock.now + timedelta(minutes=20)
        )
        repo = InMemoryPrincipalRepository([principal])
        request_handler = RequestPasswordResetHandler(
            principal_repo=repo,
            ledger=ledger,
            notifier=notifier,
            logger=mock_logger,
            clock=clock,
        )
        complete_handler = CompletePasswordResetHandler(
            principal_repo=repo,
            password_service=fake_password_service,
            ledger=ledger,
            logger=mock_logger,
            clock=clock,
        )
        token = await issued_token(request_handler, notifier)

        await complete_handler.handle(
            CompletePasswordReset(token=token, new_password="BrandNewPass1")
        )

        stored = await repo.find_by_id(principal.id)
        assert stored.failed_login_attempts == 0
        assert stored.locked_until is None


@pytest.mark.unit
class TestPasswordResetConcurrency:
    """Test that reset writes never overwrite concurrent lockout state."""

    @pytest.mark.asyncio
    async def test_reset_request_keeps_lock_set_during_request(
        self, ledger, notifier, mock_logger, clock
    ):
        principal = create_principal(failed_login_attempts=4)
        repo = GatedPrincipalRepository([principal])
        handler = RequestPasswordResetHandler(
            principal_repo=repo,
            ledger=ledger,
            notifier=notifier,
            logger=mock_logger,
            clock=clock,
        )
        lock_until = clock.now + timedelta(minutes=30)

        task = asyncio.create_task(
            handler.handle(RequestPasswordReset(login_key="alice@example.com"))
        )
        await repo.all_held.wait()
        state = await repo.increment_failed_attempts(
            principal.id, threshold=5, lock_until=lock_until, now=clock.now
        )
        repo.gate.set()
        result = await task

        assert state.locked_now is True
        assert isinstance(result, Success)
        stored = await repo.find_by_id(principal.id)
        assert stored.failed_login_attempts == 5
        assert stored.locked_until == lock_until
        assert stored.password_reset_token_hash is not None

    @pytest.mark.asyncio
    async def test_concurrent_completions_spend_token_once(
        self, fake_password_service, ledger, notifier, mock_logger, clock
    ):
        principal = create_principal()
        issuing_repo = InMemoryPrincipalRepository([principal])
        request_handler = RequestPasswordResetHandler(
            principal_repo=issuing_repo,
            ledger=ledger,
            notifier=notifier,
            logger=mock_logger,
            clock=clock,
        )
        token = await issued_token(request_handler, notifier)
        repo = GatedPrincipalRepository([await issuing_repo.find_by_id(principal.id)])
        complete_handler = CompletePasswordResetHandler(
            principal_repo=repo,
            password_service=fake_password_service,
            ledger=ledger,
            logger=mock_logger,
            clock=clock,
        )

        first = asyncio.create_task(
            complete_handler.handle(
                CompletePasswordReset(token=token, new_password="FirstNewPass1")
            )
        )
        await repo.all_held.wait()
        second = await complete_handler.handle(
            CompletePasswordReset(token=token, new_password="SecondNewPass2")
        )
        repo.gate.set()
        first_result = await first

        assert isinstance(second, Success)
        assert isinstance(first_result.error, InvalidResetToken)
        assert first_result.error.details == {"reason": "token_consumed"}
        stored = await repo.find_by_id(principal.id)
        assert stored.password_hash == fake_hash("SecondNewPass2")
