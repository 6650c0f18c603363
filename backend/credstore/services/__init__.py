from .account_store import AccountStore
from .auth_service import AuthenticationService

__all__ = [
    "AccountStore",
    "AuthenticationService"
]
