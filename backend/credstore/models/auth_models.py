from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AccountProfile(BaseModel):
    """Dashboard fields shown after a successful login"""
    username: str
    registered_at: datetime
    last_login_at: Optional[datetime]
    failed_attempts: int

    class Config:
        from_attributes = True


class AccountListItem(BaseModel):
    """Response model for the account listing"""
    username: str
    registered_at: datetime
    last_login_at: Optional[datetime]
    failed_attempts: int
    is_active: bool

    class Config:
        from_attributes = True


class RegisterOutcome(BaseModel):
    """Result of a registration attempt"""
    success: bool
    message: str
    code: Optional[str] = Field(None, description="Machine-readable failure code")
    username: Optional[str] = None


class LoginOutcome(BaseModel):
    """Result of a login attempt"""
    success: bool
    message: str
    code: Optional[str] = Field(None, description="Machine-readable failure code")
    profile: Optional[AccountProfile] = None


class StatsResponse(BaseModel):
    """Response model for registry statistics"""
    total: int
    active: int
    recent_logins: int
    recent_window_days: int
    registry_path: str
