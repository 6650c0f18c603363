import asyncio
import logging
from datetime import timedelta
from typing import List

from ..core.credentials import CredentialCodec
from ..core.errors import (
    UnknownUserError,
    InvalidCredentialsError,
    AccountDisabledError,
    AccountNotFoundError,
)
from ..core.validators import validate_registration
from ..models.account import Account, AccountSummary, AccountStats
from .account_store import AccountStore

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Registration, login and failed-attempt tracking over an AccountStore"""

    def __init__(self, store: AccountStore, codec: CredentialCodec):
        self.store = store
        self.codec = codec

    async def register(self, username: str, password: str, confirmation: str) -> Account:
        """Validate input, derive the credential and create an active account"""
        validate_registration(username, password, confirmation)

        # bcrypt is deliberately slow; keep it off the event loop
        credential = await asyncio.to_thread(self.codec.derive, password)

        account_id = await self.store.create(username, credential)
        account = await self.store.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)

        logger.info(f"Registered account '{username}'")
        return account

    async def login(self, username: str, password: str) -> Account:
        """Authenticate user with password and update login telemetry"""
        account = await self.store.find_by_username(username)

        if account is None:
            # Same bcrypt cost as a wrong password
            await asyncio.to_thread(self.codec.dummy_verify, password)
            logger.warning(f"Login failed for '{username}': {UnknownUserError.code}")
            raise UnknownUserError()

        if not account.is_active:
            logger.warning(f"Login refused for '{username}': {AccountDisabledError.code}")
            raise AccountDisabledError()

        verified = await asyncio.to_thread(self.codec.verify, password, account.credential)

        if not verified:
            failed_count = await self.store.record_failed_attempt(account.id)
            logger.warning(
                f"Login failed for '{username}': {InvalidCredentialsError.code} "
                f"({failed_count} consecutive failures)"
            )
            raise InvalidCredentialsError()

        await self.store.record_successful_login(account.id)

        if self.codec.needs_rehash(account.credential):
            credential = await asyncio.to_thread(self.codec.derive, password)
            await self.store.update_credential(account.id, credential)
            logger.info(f"Upgraded credential cost for '{username}'")

        refreshed = await self.store.find_by_id(account.id)
        if refreshed is None:
            raise AccountNotFoundError(account.id)

        logger.info(f"Login successful for '{username}'")
        return refreshed

    async def get_profile(self, username: str) -> AccountSummary:
        account = await self.store.find_by_username(username)
        if account is None:
            raise UnknownUserError()
        return account.summary()

    async def disable_account(self, username: str) -> AccountSummary:
        """Deactivate user account (soft delete)"""
        return await self._set_active(username, False)

    async def enable_account(self, username: str) -> AccountSummary:
        return await self._set_active(username, True)

    async def _set_active(self, username: str, is_active: bool) -> AccountSummary:
        account = await self.store.find_by_username(username)
        if account is None:
            raise UnknownUserError()
        await self.store.set_active(account.id, is_active)
        return await self.get_profile(username)

    async def list_accounts(self) -> List[AccountSummary]:
        return await self.store.list_all()

    async def stats(self, recent_within: timedelta = timedelta(days=7)) -> AccountStats:
        return await self.store.aggregate_stats(recent_within)
