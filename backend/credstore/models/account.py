from datetime import datetime
from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class AccountSummary:
    """Account fields safe to show outside the store (no credential)"""
    id: int
    username: str
    registered_at: datetime
    last_login_at: Optional[datetime]
    failed_attempts: int
    is_active: bool


@dataclass(frozen=True)
class Account:
    """Snapshot of one registry row"""
    id: int
    username: str
    credential: str
    registered_at: datetime
    last_login_at: Optional[datetime]
    failed_attempts: int
    is_active: bool

    def summary(self) -> AccountSummary:
        return AccountSummary(
            id=self.id,
            username=self.username,
            registered_at=self.registered_at,
            last_login_at=self.last_login_at,
            failed_attempts=self.failed_attempts,
            is_active=self.is_active,
        )

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.username!r} active={self.is_active}>"


@dataclass(frozen=True)
class AccountStats:
    """Aggregate registry counts"""
    total: int
    active: int
    recent_logins: int
