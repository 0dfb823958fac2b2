"""
Account-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from app.core.roles import Role

class AccountPublic(BaseModel):
    """Account as shown to other users (no password hash)"""
    id: str
    username: str
    name: str
    role: Role
    is_active: bool
    created_by_id: Optional[str] = None
    event_quota: int
    events_used: int
    created_at: datetime

    class Config:
        from_attributes = True
        frozen = True

class AccountRecord(AccountPublic):
    """Immutable snapshot of a stored account"""
    password_hash: str

    def to_public(self) -> AccountPublic:
        return AccountPublic(**self.model_dump(exclude={"password_hash"}))

class AccountCreate(BaseModel):
    """Schema for creating an account"""
    username: str
    name: str
    password: str
    role: Role
    event_quota: Optional[int] = None

class AccountStatusUpdate(BaseModel):
    is_active: bool

class LoginRequest(BaseModel):
    username: str
    password: str

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AccountPublic

class Actor(BaseModel):
    """The authenticated account performing an operation"""
    id: str
    role: Role
    name: str = ""

    class Config:
        frozen = True

class QuotaUpdate(BaseModel):
    event_quota: int = Field(...)

class QuotaUsage(BaseModel):
    """Quota ledger figures for one event manager"""
    event_quota: int
    events_used: int
    events_remaining: int

class Subscription(QuotaUsage):
    id: str
    name: str
    username: str
    is_active: bool
    total_guests: int
    created_at: datetime
