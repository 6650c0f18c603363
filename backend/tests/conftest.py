"""Pytest fixtures for credstore tests."""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from credstore.api.portal import AccountPortal
from credstore.core.credentials import CredentialCodec
from credstore.services.account_store import AccountStore
from credstore.services.auth_service import AuthenticationService

# Lowest cost bcrypt accepts; keeps the suite fast
TEST_BCRYPT_ROUNDS = 4

STRONG_PASSWORD = "Str0ng!Pw"


class FakeClock:
    """Controllable UTC clock for timestamp assertions."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def registry_path(tmp_path) -> str:
    return str(tmp_path / "shared" / "accounts.db")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def codec() -> CredentialCodec:
    return CredentialCodec(rounds=TEST_BCRYPT_ROUNDS)


@pytest_asyncio.fixture
async def store(registry_path, clock) -> AsyncGenerator[AccountStore, None]:
    """Open account store backed by a temporary file."""
    async with AccountStore(registry_path, clock=clock) as opened:
        yield opened


@pytest_asyncio.fixture
async def service(store, codec) -> AuthenticationService:
    return AuthenticationService(store, codec)


@pytest_asyncio.fixture
async def portal(service) -> AccountPortal:
    return AccountPortal(service)


@pytest_asyncio.fixture
async def alice(service):
    """Registered account used by login scenarios."""
    return await service.register("alice_01", STRONG_PASSWORD, STRONG_PASSWORD)
