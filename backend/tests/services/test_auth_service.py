"""Tests for registration and login orchestration."""

import asyncio
from datetime import timedelta
from unittest.mock import patch

import pytest

from credstore.core.credentials import CredentialCodec
from credstore.core.errors import (
    InvalidUsernameError,
    WeakPasswordError,
    PasswordMismatchError,
    DuplicateUsernameError,
    UnknownUserError,
    InvalidCredentialsError,
    AccountDisabledError,
)
from credstore.services.account_store import AccountStore
from credstore.services.auth_service import AuthenticationService

STRONG_PASSWORD = "Str0ng!Pw"


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_creates_active_account(self, service):
        """Scenario A."""
        account = await service.register("alice_01", STRONG_PASSWORD, STRONG_PASSWORD)

        assert account.username == "alice_01"
        assert account.failed_attempts == 0
        assert account.is_active is True
        assert account.last_login_at is None
        assert account.credential != STRONG_PASSWORD
        assert service.codec.verify(STRONG_PASSWORD, account.credential)

    @pytest.mark.asyncio
    async def test_register_short_username(self, service):
        """Scenario B."""
        with pytest.raises(InvalidUsernameError):
            await service.register("ab", STRONG_PASSWORD, STRONG_PASSWORD)
        assert await service.list_accounts() == []

    @pytest.mark.asyncio
    async def test_register_weak_password(self, service):
        """Scenario C."""
        with pytest.raises(WeakPasswordError):
            await service.register("alice_01", "weakpass", "weakpass")
        assert await service.store.find_by_username("alice_01") is None

    @pytest.mark.asyncio
    async def test_register_mismatched_confirmation(self, service):
        with pytest.raises(PasswordMismatchError):
            await service.register("alice_01", STRONG_PASSWORD, "Str0ng!Px")

    @pytest.mark.asyncio
    async def test_register_duplicate(self, service, alice):
        with pytest.raises(DuplicateUsernameError):
            await service.register("alice_01", "An0ther!pw", "An0ther!pw")

    @pytest.mark.asyncio
    async def test_invalid_input_skips_derivation(self, service):
        with patch.object(service.codec, "derive") as derive:
            with pytest.raises(InvalidUsernameError):
                await service.register("bad name", STRONG_PASSWORD, STRONG_PASSWORD)
        derive.assert_not_called()


class TestLogin:

    @pytest.mark.asyncio
    async def test_wrong_password_counts_failure(self, service, alice):
        """Scenario D."""
        with pytest.raises(InvalidCredentialsError):
            await service.login("alice_01", "wrong")

        account = await service.store.find_by_username("alice_01")
        assert account.failed_attempts == 1

    @pytest.mark.asyncio
    async def test_success_resets_counter_and_stamps_login(self, service, alice, clock):
        """Scenario E."""
        with pytest.raises(InvalidCredentialsError):
            await service.login("alice_01", "wrong")
        login_time = clock.advance(minutes=1)

        account = await service.login("alice_01", STRONG_PASSWORD)

        assert account.failed_attempts == 0
        assert account.last_login_at == login_time
        assert account.last_login_at >= account.registered_at

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        """Scenario F."""
        with patch.object(service.codec, "dummy_verify", wraps=service.codec.dummy_verify) as dummy:
            with pytest.raises(UnknownUserError):
                await service.login("ghost_user", "anything")
        dummy.assert_called_once_with("anything")

    @pytest.mark.asyncio
    async def test_failures_accumulate_between_successes(self, service, alice):
        for expected in range(1, 4):
            with pytest.raises(InvalidCredentialsError):
                await service.login("alice_01", "wrong")
            account = await service.store.find_by_username("alice_01")
            assert account.failed_attempts == expected

    @pytest.mark.asyncio
    async def test_no_lockout_after_many_failures(self, service, alice):
        for _ in range(10):
            with pytest.raises(InvalidCredentialsError):
                await service.login("alice_01", "wrong")
        account = await service.login("alice_01", STRONG_PASSWORD)
        assert account.failed_attempts == 0

    @pytest.mark.asyncio
    async def test_disabled_account_refused_without_counting(self, service, alice):
        await service.disable_account("alice_01")

        with pytest.raises(AccountDisabledError):
            await service.login("alice_01", STRONG_PASSWORD)
        with pytest.raises(AccountDisabledError):
            await service.login("alice_01", "wrong")

        account = await service.store.find_by_username("alice_01")
        assert account.failed_attempts == 0
        assert account.last_login_at is None

    @pytest.mark.asyncio
    async def test_reenabled_account_can_login(self, service, alice):
        await service.disable_account("alice_01")
        summary = await service.enable_account("alice_01")
        assert summary.is_active is True
        account = await service.login("alice_01", STRONG_PASSWORD)
        assert account.is_active is True

    @pytest.mark.asyncio
    async def test_disable_unknown_user(self, service):
        with pytest.raises(UnknownUserError):
            await service.disable_account("ghost_user")

    @pytest.mark.asyncio
    async def test_concurrent_failed_logins_all_counted(self, service, alice):
        attempts = 8
        results = await asyncio.gather(
            *(service.login("alice_01", f"wrong{i}") for i in range(attempts)),
            return_exceptions=True,
        )
        assert all(isinstance(r, InvalidCredentialsError) for r in results)

        account = await service.store.find_by_username("alice_01")
        assert account.failed_attempts == attempts

    @pytest.mark.asyncio
    async def test_concurrent_registration_single_winner(self, service):
        results = await asyncio.gather(
            *(service.register("racer", STRONG_PASSWORD, STRONG_PASSWORD) for _ in range(5)),
            return_exceptions=True,
        )
        winners = [r for r in results if not isinstance(r, Exception)]
        duplicates = [r for r in results if isinstance(r, DuplicateUsernameError)]
        assert len(winners) == 1
        assert len(duplicates) == 4

    @pytest.mark.asyncio
    async def test_login_upgrades_credential_cost(self, registry_path, clock):
        async with AccountStore(registry_path, clock=clock) as store:
            old = AuthenticationService(store, CredentialCodec(rounds=4))
            await old.register("alice_01", STRONG_PASSWORD, STRONG_PASSWORD)

            upgraded = AuthenticationService(store, CredentialCodec(rounds=5))
            account = await upgraded.login("alice_01", STRONG_PASSWORD)

        assert account.credential.startswith("$2b$05$")
        assert upgraded.codec.verify(STRONG_PASSWORD, account.credential)


class TestQueries:

    @pytest.mark.asyncio
    async def test_get_profile(self, service, alice):
        profile = await service.get_profile("alice_01")
        assert profile.username == "alice_01"
        assert not hasattr(profile, "credential")

    @pytest.mark.asyncio
    async def test_get_profile_unknown(self, service):
        with pytest.raises(UnknownUserError):
            await service.get_profile("ghost_user")

    @pytest.mark.asyncio
    async def test_stats_after_login(self, service, alice):
        await service.login("alice_01", STRONG_PASSWORD)
        stats = await service.stats(timedelta(days=7))
        assert (stats.total, stats.active, stats.recent_logins) == (1, 1, 1)
