from .portal import AccountPortal, GENERIC_LOGIN_FAILURE

__all__ = [
    "AccountPortal",
    "GENERIC_LOGIN_FAILURE"
]
