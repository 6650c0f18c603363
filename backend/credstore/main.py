import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from .api.portal import AccountPortal
from .core.config import Settings, settings as default_settings
from .core.credentials import CredentialCodec
from .core.logging import setup_logging
from .services.account_store import AccountStore
from .services.auth_service import AuthenticationService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(settings: Optional[Settings] = None) -> AsyncIterator[AccountPortal]:
    """Open the account store, wire the service and close the store on exit"""
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL, settings.DEBUG)

    store = AccountStore(settings.REGISTRY_PATH, timeout=settings.DB_TIMEOUT)
    codec = CredentialCodec(rounds=settings.BCRYPT_ROUNDS)

    # Startup
    await store.initialize()
    logger.info(f"{settings.APP_NAME} {settings.VERSION} ready")

    try:
        service = AuthenticationService(store, codec)
        yield AccountPortal(service, recent_login_days=settings.RECENT_LOGIN_DAYS)
    finally:
        # Shutdown
        await store.close()
