"""
Account Pydantic Schemas
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from eventdesk.models.enums import Role
from eventdesk.schemas.common import RecordModel, as_utc


class Account(RecordModel):
    """A stored account, password included."""

    id: int
    username: str
    password: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: Role = Role.USER
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @field_validator("phone", mode="before")
    @classmethod
    def empty_phone_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("created_at", "updated_at", "last_login", mode="after")
    @classmethod
    def timestamps_are_utc(cls, v):
        return as_utc(v)


class AccountPublic(RecordModel):
    """Account as exposed to callers: every field except the password."""

    id: int
    username: str
    email: str
    full_name: str
    phone: Optional[str] = None
    role: Role = Role.USER
    is_active: bool = True
    created_at: datetime
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @field_validator("created_at", "updated_at", "last_login", mode="after")
    @classmethod
    def timestamps_are_utc(cls, v):
        return as_utc(v)

    @classmethod
    def from_account(cls, account: Account) -> "AccountPublic":
        return cls.model_validate(account.model_dump(exclude={"password"}))


class SessionUser(AccountPublic):
    """The current authenticated identity."""

    login_time: datetime

    @field_validator("login_time", mode="after")
    @classmethod
    def login_time_is_utc(cls, v):
        return as_utc(v)

    @classmethod
    def from_account(cls, account: Account, login_time: Optional[datetime] = None) -> "SessionUser":
        data = account.model_dump(exclude={"password"})
        data["login_time"] = login_time or account.last_login
        return cls.model_validate(data)


class RegisterRequest(RecordModel):
    """Registration input; required fields are checked by the account store."""

    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None


class UpdateProfileRequest(RecordModel):
    """Profile patch restricted to the mutable fields; anything else is ignored."""

    model_config = ConfigDict(extra="ignore")

    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class UserStats(BaseModel):
    """Aggregate account counts."""

    total_users: int
    active_users: int
    admin_users: int
    regular_users: int
    recent_users: int


class ActivityReport(BaseModel):
    """Login activity summary for administrators."""

    total_users: int
    active_today: int
    active_this_week: int
    new_this_month: int
    never_logged_in: int
