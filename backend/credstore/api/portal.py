import logging
from datetime import timedelta
from typing import List

from ..core.errors import (
    ValidationError,
    AuthError,
    UnknownUserError,
    InvalidCredentialsError,
    DuplicateUsernameError,
)
from ..models.auth_models import (
    AccountProfile,
    AccountListItem,
    RegisterOutcome,
    LoginOutcome,
    StatsResponse,
)
from ..services.auth_service import AuthenticationService

logger = logging.getLogger(__name__)

GENERIC_LOGIN_FAILURE = "Invalid username or password"
GENERIC_LOGIN_CODE = "INVALID_LOGIN"


class AccountPortal:
    """Presentation boundary for a menu or CLI front end.

    Domain failures come back as outcome models with a message the user can act
    on. Storage failures other than a duplicate username propagate.
    """

    def __init__(self, service: AuthenticationService, recent_login_days: int = 7):
        self.service = service
        self.recent_login_days = recent_login_days

    async def register(self, username: str, password: str, confirmation: str) -> RegisterOutcome:
        """Register a new user account"""
        try:
            account = await self.service.register(username, password, confirmation)
        except (ValidationError, DuplicateUsernameError) as e:
            logger.info(f"Registration rejected for '{username}': {e.code}")
            return RegisterOutcome(success=False, message=e.message, code=e.code)

        return RegisterOutcome(
            success=True,
            message=f"User '{account.username}' registered successfully",
            username=account.username,
        )

    async def login(self, username: str, password: str) -> LoginOutcome:
        """Login user and return dashboard profile"""
        try:
            account = await self.service.login(username, password)
        except (UnknownUserError, InvalidCredentialsError):
            # Do not reveal which half was wrong
            return LoginOutcome(
                success=False,
                message=GENERIC_LOGIN_FAILURE,
                code=GENERIC_LOGIN_CODE,
            )
        except AuthError as e:
            return LoginOutcome(success=False, message=e.message, code=e.code)

        return LoginOutcome(
            success=True,
            message=f"Welcome back, {account.username}!",
            profile=AccountProfile.model_validate(account),
        )

    async def list_accounts(self) -> List[AccountListItem]:
        """List all accounts, newest registration first"""
        accounts = await self.service.list_accounts()
        return [AccountListItem.model_validate(account) for account in accounts]

    async def stats(self) -> StatsResponse:
        stats = await self.service.stats(timedelta(days=self.recent_login_days))
        return StatsResponse(
            total=stats.total,
            active=stats.active,
            recent_logins=stats.recent_logins,
            recent_window_days=self.recent_login_days,
            registry_path=self.service.store.registry_path,
        )
