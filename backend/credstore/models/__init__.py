from .account import Account, AccountSummary, AccountStats
from .auth_models import (
    AccountProfile,
    AccountListItem,
    RegisterOutcome,
    LoginOutcome,
    StatsResponse
)

__all__ = [
    "Account",
    "AccountSummary",
    "AccountStats",
    "AccountProfile",
    "AccountListItem",
    "RegisterOutcome",
    "LoginOutcome",
    "StatsResponse"
]
